# rubik_player/logic/moves.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple, Union

Axis = Literal["x", "y", "z"]

VALID_FACES: Tuple[str, ...] = ("R", "L", "U", "D", "F", "B")
PRIME: str = "'"
DOUBLE: str = "2"

# cara -> (eje, capa, sentido de un giro horario)
# Un giro horario visto desde afuera de la cara es negativo alrededor de su normal.
AXIS_MAP: Dict[str, Tuple[Axis, int, int]] = {
    "R": ("x", 1, -1),
    "L": ("x", -1, +1),
    "U": ("y", 1, -1),
    "D": ("y", -1, +1),
    "F": ("z", 1, -1),
    "B": ("z", -1, +1),
}


@dataclass(frozen=True)
class Move:
    """Descriptor inmutable de un giro de cara (90° o 180°).

    Attributes:
        face: Letra de la cara en mayúscula ("R", "L", "U", "D", "F", "B").
        prime: Giro antihorario.
        double: Giro de 180°.
        wide: Giro de dos capas (la cara + el slice central adyacente).

    Raises:
        ValueError: Si `prime` y `double` son ambos True.
    """

    face: str
    prime: bool = False
    double: bool = False
    wide: bool = False

    def __post_init__(self) -> None:
        if self.prime and self.double:
            raise ValueError(f"Un giro no puede ser prime y doble a la vez: {self.face}")
        object.__setattr__(self, "face", self.face.upper())

    # --------------------------
    # Datos derivados (animación)
    # --------------------------
    @property
    def axis(self) -> Axis:
        return AXIS_MAP[self.face][0]

    @property
    def layer(self) -> int:
        return AXIS_MAP[self.face][1]

    @property
    def direction(self) -> int:
        """Signo de la rotación alrededor del eje positivo (+1 / -1)."""
        base = AXIS_MAP[self.face][2]
        return -base if self.prime else base

    @property
    def angle(self) -> float:
        """Magnitud del giro en grados: 90 o 180."""
        return 180.0 if self.double else 90.0

    @property
    def target_angle(self) -> float:
        return self.direction * self.angle

    @property
    def turns(self) -> int:
        """Cantidad de cuartos de vuelta horarios equivalentes (1, 2 o 3)."""
        if self.double:
            return 2
        return 3 if self.prime else 1

    def inverse(self) -> "Move":
        """Devuelve el giro inverso.

        Un giro de 180° es su propio inverso; en otro caso se invierte `prime`.
        """
        if self.double:
            return self
        return Move(self.face, prime=not self.prime, wide=self.wide)

    def __str__(self) -> str:
        f = self.face.lower() if self.wide else self.face
        return f + (DOUBLE if self.double else "") + (PRIME if self.prime else "")


MoveInput = Union[str, Sequence[Move], None]


def normalize_text(text: str) -> str:
    """Convierte comillas tipográficas (’ o ‘) a comilla simple (')."""
    return text.replace("’", PRIME).replace("‘", PRIME)


def parse_sequence(text: Optional[str]) -> Tuple[Move, ...]:
    """Convierte una secuencia escrita como texto en una tupla de `Move`.

    Los tokens se separan por espacios. Dentro de cada token se recorre de izquierda
    a derecha: una letra de cara inicia un movimiento (minúscula = wide) y puede ir
    seguida de un único modificador (`'` o `2`). Cualquier otro carácter se ignora,
    sin error.

    Ejemplos:
        "R U R' U'" -> (R, U, R', U')
        "r2 U'"     -> (r2, U')
        "R2'"       -> (R2,)   (la comilla sobrante se descarta)

    Args:
        text: Algoritmo en notación estándar. None o vacío es válido.

    Returns:
        Tupla de movimientos en el mismo orden del texto.
    """
    if not text or not text.strip():
        return ()

    out: List[Move] = []
    for token in normalize_text(text).split():
        i = 0
        while i < len(token):
            raw = token[i]
            base = raw.upper()
            if base not in VALID_FACES:
                i += 1
                continue

            prime = False
            double = False
            if i + 1 < len(token):
                nxt = token[i + 1]
                if nxt == PRIME:
                    prime = True
                    i += 1
                elif nxt == DOUBLE:
                    double = True
                    i += 1

            out.append(Move(base, prime=prime, double=double, wide=raw.islower()))
            i += 1

    return tuple(out)


def _as_moves(moves: MoveInput) -> Tuple[Move, ...]:
    if moves is None or isinstance(moves, str):
        return parse_sequence(moves)
    return tuple(moves)


def inverse_move(token: str) -> str:
    """Devuelve el inverso de un único giro escrito como texto.

    Ejemplos:
        - "R"  -> "R'"
        - "r'" -> "r"
        - "R2" -> "R2"

    Args:
        token: Un giro en notación estándar. Vacío retorna "".

    Returns:
        El giro inverso como texto.

    Raises:
        ValueError: Si `token` no contiene exactamente un giro.
    """
    if not token.strip():
        return ""
    moves = parse_sequence(token)
    if len(moves) != 1:
        raise ValueError(f"Movimiento inválido: {token!r}")
    return str(moves[0].inverse())


def inverse_sequence(moves: MoveInput) -> Tuple[Move, ...]:
    """Devuelve el inverso algebraico de una secuencia.

    Invierte cada giro y además invierte el orden: (A B C)^-1 = C^-1 B^-1 A^-1.

    Args:
        moves: Texto en notación o secuencia de `Move`.

    Returns:
        Tupla con la secuencia inversa.
    """
    return tuple(m.inverse() for m in reversed(_as_moves(moves)))


def sequence_to_string(moves: Iterable[Move]) -> str:
    """Serializa movimientos a texto; el resultado vuelve a parsear igual."""
    return " ".join(str(m) for m in moves)
