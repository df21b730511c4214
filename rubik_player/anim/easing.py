# rubik_player/anim/easing.py
from __future__ import annotations

from typing import Tuple


def ease_out_cubic(t: float) -> float:
    """Curva ease-out cúbica: arranca rápido y frena al final. t en [0, 1]."""
    return 1.0 - (1.0 - t) ** 3


def turn_angle(target: float, elapsed_ms: float, duration_ms: float) -> Tuple[float, bool]:
    """Ángulo a dibujar para un giro en curso.

    Al llegar al final devuelve exactamente `target` (sin error de punto flotante),
    para que el render pueda "soltar" la capa en su posición exacta.

    Args:
        target: Ángulo final en grados (con signo).
        elapsed_ms: Tiempo transcurrido desde el inicio del giro.
        duration_ms: Duración total del giro.

    Returns:
        (ángulo, terminado)
    """
    if duration_ms <= 0:
        return target, True
    t = min(max(elapsed_ms / duration_ms, 0.0), 1.0)
    if t >= 1.0:
        return target, True
    return target * ease_out_cubic(t), False
