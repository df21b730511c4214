# rubik_player/core/geometry.py
from __future__ import annotations

from typing import Dict, Literal, Tuple

Axis = Literal["x", "y", "z"]
Face = Literal["U", "D", "F", "B", "R", "L"]
Vec3i = Tuple[int, int, int]

AXIS_INDEX: Dict[str, int] = {"x": 0, "y": 1, "z": 2}

# Normales por cara (x, y, z)
FACE_NORMAL: Dict[str, Vec3i] = {
    "F": (0, 0, 1),
    "B": (0, 0, -1),
    "R": (1, 0, 0),
    "L": (-1, 0, 0),
    "U": (0, 1, 0),
    "D": (0, -1, 0),
}


def facelet_position(face: str, i: int) -> Vec3i:
    """Centro (x, y, z) del sticker `i` de una cara, con el cubo en [-1, 1]^3.

    Cada cara se indexa 0..8 fila-columna *vista de frente*:
    - F: x=c-1, y=1-r, z=+1
    - B: x=1-c, y=1-r, z=-1   (vista desde atrás)
    - R: x=+1, y=1-r, z=1-c
    - L: x=-1, y=1-r, z=c-1
    - U: x=c-1, y=+1, z=r-1   (fila 0 = lado de B)
    - D: x=c-1, y=-1, z=1-r   (fila 0 = lado de F)

    Args:
        face: Cara ("U","D","F","B","R","L").
        i: Índice 0..8.

    Returns:
        Posición entera del sticker.

    Raises:
        ValueError: Si la cara no existe.
    """
    r, c = divmod(i, 3)
    if face == "F":
        return (c - 1, 1 - r, 1)
    if face == "B":
        return (1 - c, 1 - r, -1)
    if face == "R":
        return (1, 1 - r, 1 - c)
    if face == "L":
        return (-1, 1 - r, c - 1)
    if face == "U":
        return (c - 1, 1, r - 1)
    if face == "D":
        return (c - 1, -1, 1 - r)
    raise ValueError(f"Cara inválida: {face}")


def _rot_x(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de X (regla de la mano derecha)."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (x, -z, y)
    if turns == 2:
        return (x, -y, -z)
    return (x, z, -y)


def _rot_y(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de Y (regla de la mano derecha)."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (z, y, -x)
    if turns == 2:
        return (-x, y, -z)
    return (-z, y, x)


def _rot_z(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de Z (regla de la mano derecha)."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (-y, x, z)
    if turns == 2:
        return (-x, -y, z)
    return (y, -x, z)


def rotate_quarter(v: Vec3i, axis: Axis, turns: int) -> Vec3i:
    """Rota `v` 90°*turns alrededor del eje positivo indicado."""
    if axis == "x":
        return _rot_x(v, turns)
    if axis == "y":
        return _rot_y(v, turns)
    return _rot_z(v, turns)


def in_layer(pos: Vec3i, axis: Axis, layer: int) -> bool:
    """Indica si una posición pertenece a la capa `layer` (-1, 0, 1) del eje."""
    return pos[AXIS_INDEX[axis]] == layer


# (posición, normal) -> (cara, índice), construido una sola vez.
FACELET_AT: Dict[Tuple[Vec3i, Vec3i], Tuple[str, int]] = {
    (facelet_position(f, i), FACE_NORMAL[f]): (f, i)
    for f in FACE_NORMAL
    for i in range(9)
}


def turn_destination(face: str, i: int, axis: Axis, turns: int) -> Tuple[str, int]:
    """Cara e índice donde termina el sticker (face, i) tras rotar su capa.

    No verifica que el sticker esté en la capa; eso lo decide quien llama.

    Args:
        face: Cara de origen.
        i: Índice de origen.
        axis: Eje de rotación.
        turns: Cuartos de vuelta alrededor del eje positivo (regla de la mano derecha).

    Returns:
        (cara, índice) de destino.
    """
    pos = rotate_quarter(facelet_position(face, i), axis, turns)
    n = rotate_quarter(FACE_NORMAL[face], axis, turns)
    return FACELET_AT[(pos, n)]
