# rubik_player/core/cube_model.py
from __future__ import annotations

from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple

from rubik_player.logic.moves import Move, parse_sequence

Face = Literal["U", "D", "F", "B", "R", "L"]
Color = str  # letras: "W", "Y", "G", "B", "R", "O"
Facelet = Tuple[str, int]
Strip = Tuple[Facelet, Facelet, Facelet]
CubeHash = Tuple[Tuple[Color, ...], ...]

# Giro horario de los 9 stickers de una cara: nuevo[i] = viejo[CW_SOURCE[i]].
CW_SOURCE: Tuple[int, ...] = (6, 3, 0, 7, 4, 1, 8, 5, 2)


def _strip(face: str, a: int, b: int, c: int) -> Strip:
    return ((face, a), (face, b), (face, c))


# Tiras que rodean cada cara, en el orden en que las recorre un giro horario:
# los colores de la tira k pasan a la tira k+1 (y la última a la primera).
# Índices según `geometry.facelet_position` (cada cara vista de frente).
EDGE_CYCLES: Dict[str, Tuple[Strip, Strip, Strip, Strip]] = {
    "U": (_strip("F", 0, 1, 2), _strip("L", 0, 1, 2), _strip("B", 0, 1, 2), _strip("R", 0, 1, 2)),
    "D": (_strip("F", 6, 7, 8), _strip("R", 6, 7, 8), _strip("B", 6, 7, 8), _strip("L", 6, 7, 8)),
    "F": (_strip("U", 6, 7, 8), _strip("R", 0, 3, 6), _strip("D", 2, 1, 0), _strip("L", 8, 5, 2)),
    "B": (_strip("U", 0, 1, 2), _strip("L", 6, 3, 0), _strip("D", 8, 7, 6), _strip("R", 2, 5, 8)),
    "R": (_strip("F", 2, 5, 8), _strip("U", 2, 5, 8), _strip("B", 6, 3, 0), _strip("D", 2, 5, 8)),
    "L": (_strip("F", 0, 3, 6), _strip("D", 0, 3, 6), _strip("B", 8, 5, 2), _strip("U", 0, 3, 6)),
}

# Slice central que acompaña a un giro wide, en el mismo sentido que la cara.
MIDDLE_CYCLES: Dict[str, Tuple[Strip, Strip, Strip, Strip]] = {
    "U": (_strip("F", 3, 4, 5), _strip("L", 3, 4, 5), _strip("B", 3, 4, 5), _strip("R", 3, 4, 5)),
    "D": (_strip("F", 3, 4, 5), _strip("R", 3, 4, 5), _strip("B", 3, 4, 5), _strip("L", 3, 4, 5)),
    "F": (_strip("U", 3, 4, 5), _strip("R", 1, 4, 7), _strip("D", 5, 4, 3), _strip("L", 7, 4, 1)),
    "B": (_strip("U", 3, 4, 5), _strip("L", 7, 4, 1), _strip("D", 5, 4, 3), _strip("R", 1, 4, 7)),
    "R": (_strip("F", 1, 4, 7), _strip("U", 1, 4, 7), _strip("B", 7, 4, 1), _strip("D", 1, 4, 7)),
    "L": (_strip("F", 1, 4, 7), _strip("D", 1, 4, 7), _strip("B", 7, 4, 1), _strip("U", 1, 4, 7)),
}


class CubeModel:
    """Modelo lógico del cubo Rubik 3x3 basado en permutaciones de stickers.

    Representación:
        - `state[face]` es una lista de 9 stickers (3x3) para cada cara.
        - El orden de stickers por cara es fila-columna, índice 0 arriba a la izquierda
          mirando la cara de frente.

    Giros:
        Un giro se aplica como tres permutaciones fijas: rotar los 9 stickers de la
        cara, ciclar las 4 tiras vecinas (`EDGE_CYCLES`) y, si es wide, ciclar las 4
        tiras del slice central (`MIDDLE_CYCLES`). Un 180° son dos horarios y un
        antihorario son tres.

    Historial:
        `apply_move(..., record_history=True)` guarda el giro para `undo()`.
    """

    FACES: List[Face] = ["U", "D", "F", "B", "R", "L"]
    COLORS_SOLVED: Dict[Face, Color] = {
        "U": "W",
        "D": "Y",
        "F": "G",
        "B": "B",
        "R": "R",
        "L": "O",
    }

    def __init__(self) -> None:
        """Inicializa el cubo en estado resuelto, sin historial."""
        self.state: Dict[Face, List[Color]] = {}
        self.history: List[Move] = []
        self.reset()

    # --------------------------
    # Public API
    # --------------------------
    def reset(self) -> None:
        """Reinicia el cubo a estado resuelto y borra el historial."""
        self.state = {f: [self.COLORS_SOLVED[f]] * 9 for f in self.FACES}
        self.history = []

    def clone(self) -> "CubeModel":
        """Copia independiente de las 6 caras (el historial no se copia).

        Returns:
            Un nuevo `CubeModel` que no comparte listas con este.
        """
        copy = CubeModel()
        copy.state = {f: list(self.state[f]) for f in self.FACES}
        return copy

    def is_solved(self) -> bool:
        """Indica si cada cara muestra un solo color.

        Se compara contra el primer sticker de cada cara y no contra el color de
        fábrica: tras un giro wide los centros cambian de cara y el cubo sigue
        pudiendo estar resuelto.

        Returns:
            True si el cubo está resuelto; False en caso contrario.
        """
        for f in self.FACES:
            first = self.state[f][0]
            if any(x != first for x in self.state[f]):
                return False
        return True

    def get_face_color(self, face: str, index: int) -> Color:
        """Color de un sticker.

        Args:
            face: Cara ("U","D","F","B","R","L").
            index: Índice 0..8 (fila-columna, cara vista de frente).

        Returns:
            Letra del color.
        """
        return self.state[face][index]

    def to_hashable(self) -> CubeHash:
        """Convierte el estado del cubo a una estructura inmutable y hasheable.

        Returns:
            Tupla de tuplas con los 9 stickers por cara, en el orden de `FACES`.
        """
        return tuple(tuple(self.state[f]) for f in self.FACES)

    def apply_move(self, move: Move, record_history: bool = True) -> None:
        """Aplica un giro al cubo.

        Args:
            move: Giro a aplicar.
            record_history: Si True, el giro queda disponible para `undo()`.

        Raises:
            ValueError: Si la cara del giro no es una de las 6 conocidas.
        """
        face = move.face
        if face not in EDGE_CYCLES:
            raise ValueError(f"Movimiento no soportado: {move}")

        if record_history:
            self.history.append(move)

        for _ in range(move.turns):
            self._rotate_face_cw(face)
            self._cycle4(EDGE_CYCLES[face])
            if move.wide:
                self._cycle4(MIDDLE_CYCLES[face])

    def apply_moves(self, moves: Iterable[Move], record_history: bool = True) -> None:
        """Aplica una secuencia de giros en orden."""
        for move in moves:
            self.apply_move(move, record_history)

    def apply_sequence(self, seq: str, record_history: bool = True) -> None:
        """Parsea y aplica una secuencia escrita, por ejemplo "R U R' U'".

        Args:
            seq: Algoritmo en notación estándar.
            record_history: Igual que en `apply_move`.
        """
        self.apply_moves(parse_sequence(seq), record_history)

    def undo(self) -> Optional[Move]:
        """Deshace el último giro registrado.

        Returns:
            El giro deshecho, o None si el historial está vacío.
        """
        if not self.history:
            return None
        move = self.history.pop()
        self.apply_move(move.inverse(), record_history=False)
        return move

    # --------------------------
    # Permutaciones
    # --------------------------
    def _rotate_face_cw(self, face: str) -> None:
        old = self.state[face]
        self.state[face] = [old[src] for src in CW_SOURCE]

    def _cycle4(self, strips: Sequence[Strip]) -> None:
        """Cicla 4 tiras de 3 stickers: tira k -> tira k+1, la última -> la primera."""
        values = [[self.state[f][i] for f, i in strip] for strip in strips]
        for k, strip in enumerate(strips):
            src = values[k - 1]
            for j, (f, i) in enumerate(strip):
                self.state[f][i] = src[j]
