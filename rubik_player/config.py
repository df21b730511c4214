# rubik_player/config.py
"""Constantes del reproductor.

Valores por defecto usados por el motor de reproducción, el render OpenGL y la
ventana principal. Son *defaults*: la línea de comandos (`main.py`) puede
sobreescribir los más comunes (velocidad, ruta del progreso).
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

# ---------------- Animación ----------------

# Duración nominal de un giro a velocidad 1x. La velocidad la divide:
# 2x -> 150 ms, 0.5x -> 600 ms.
MOVE_DURATION_MS: float = 300.0

# Intervalo del QTimer que avanza la animación (~60fps).
FRAME_INTERVAL_MS: int = 16

# Margen extra sobre la duración antes de que el watchdog dé por terminado
# un giro que el render nunca confirmó.
WATCHDOG_GRACE_MS: int = 1000

# Rango del control de velocidad (multiplicador).
SPEED_MIN: float = 0.5
SPEED_MAX: float = 3.0
SPEED_STEP: float = 0.5
SPEED_DEFAULT: float = 1.0


# ---------------- Progreso ----------------

# Clave única bajo la cual se guarda todo el progreso (un solo blob JSON).
PROGRESS_STORAGE_KEY: str = "learn-cfop-progress"
PROGRESS_PATH: Path = Path.home() / ".rubik_player" / "progress.json"


# ---------------- Catálogo ----------------

CATALOG_PATH: Path = Path(__file__).parent / "data" / "algorithms.json"


# ---------------- Render ----------------

# Letra de color del modelo -> RGB (0..1).
COLOR_RGB: Dict[str, Tuple[float, float, float]] = {
    "W": (1.0, 1.0, 1.0),
    "Y": (1.0, 0.84, 0.0),
    "O": (1.0, 0.35, 0.0),
    "R": (0.73, 0.0, 0.0),
    "G": (0.0, 0.61, 0.28),
    "B": (0.0, 0.27, 0.68),
}
CLEAR_COLOR: Tuple[float, float, float, float] = (0.10, 0.10, 0.12, 1.0)
PLASTIC_COLOR: Tuple[float, float, float] = (0.05, 0.05, 0.06)

CAMERA_YAW: float = 35.0
CAMERA_PITCH: float = -25.0
CAMERA_DISTANCE: float = 6.5

WINDOW_TITLE: str = "Rubik Player - PySide6"
PANEL_WIDTH: int = 340
