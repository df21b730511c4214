# rubik_player/logic/scramble.py
from __future__ import annotations

import random
from typing import List, Optional, Tuple

from rubik_player.logic.moves import AXIS_MAP, VALID_FACES, Move, sequence_to_string


def random_moves(n: int, seed: Optional[int] = None) -> Tuple[Move, ...]:
    """Genera `n` giros aleatorios para usar como mezcla (o como setup).

    Se evita repetir la misma cara en giros consecutivos (por ejemplo "U U'") y
    también tres giros seguidos sobre el mismo eje ("R L R"), que se podrían
    simplificar.

    Args:
        n: Cantidad de giros a generar.
        seed: Semilla opcional para obtener resultados reproducibles.

    Returns:
        Tupla de `Move` (sin giros wide).

    Raises:
        ValueError: Si `n` es menor o igual a 0.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")

    rng = random.Random(seed)
    out: List[Move] = []

    for _ in range(n):
        candidates = [f for f in VALID_FACES if not out or f != out[-1].face]
        if len(out) >= 2 and AXIS_MAP[out[-1].face][0] == AXIS_MAP[out[-2].face][0]:
            axis = AXIS_MAP[out[-1].face][0]
            candidates = [f for f in candidates if AXIS_MAP[f][0] != axis]

        face = rng.choice(candidates)
        suffix = rng.choice(("", "'", "2"))
        out.append(Move(face, prime=suffix == "'", double=suffix == "2"))

    return tuple(out)


def generate_scramble(n: int, seed: Optional[int] = None) -> str:
    """Igual que `random_moves`, pero como texto: "R U' F2 L D2 ..."."""
    return sequence_to_string(random_moves(n, seed))
