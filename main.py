# main.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

from PySide6.QtCore import QCoreApplication

from rubik_player import config
from rubik_player.app.playback_controller import PlaybackController
from rubik_player.core.cube_model import CubeModel
from rubik_player.logic.scramble import generate_scramble
from rubik_player.render.headless import HeadlessVisual

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rubik-player", description="Reproductor de algoritmos para el cubo 3x3.")
    p.add_argument("--alg", default="", help="Algoritmo a cargar, ej: \"R U R' U'\"")
    p.add_argument("--setup", default="", help="Giros previos (sin animación)")
    p.add_argument("--scramble", type=int, metavar="N", help="Usa N giros aleatorios como setup")
    p.add_argument("--seed", type=int, help="Semilla para --scramble")
    p.add_argument("--speed", type=float, default=config.SPEED_DEFAULT, help="Velocidad (0.5 a 3)")
    p.add_argument("--progress", type=Path, metavar="PATH", help="Archivo JSON de progreso")
    p.add_argument("--headless", action="store_true", help="Reproduce sin ventana e imprime el resultado")
    p.add_argument("--debug", action="store_true", help="Log en nivel DEBUG")
    return p


def format_grid(model: CubeModel) -> str:
    """Una línea por cara: "U: W W W W W W W W W"."""
    return "\n".join(f"{f}: {' '.join(model.state[f])}" for f in model.FACES)


def run_headless(algorithm: str, setup: str, speed: float) -> int:
    """Reproduce el algoritmo completo sin render y muestra el estado final.

    Returns:
        Código de salida (0 si el cubo quedó resuelto, 1 si no).
    """
    _app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    visual = HeadlessVisual()
    controller = PlaybackController(visual)
    controller.set_speed(speed)
    controller.load_algorithm(algorithm, setup)
    controller.play()

    print(f"Giros: {controller.cursor}/{controller.total}")
    print(format_grid(controller.model))
    solved = controller.model.is_solved()
    print(f"Resuelto: {'sí' if solved else 'no'}")
    controller.dispose()
    return 0 if solved else 1


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Punto de entrada de la aplicación.

    Sin `--headless` crea la `QApplication`, construye la ventana principal
    (`MainWindow`) y ejecuta el loop de eventos de Qt.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    setup = args.setup
    if args.scramble:
        setup = generate_scramble(args.scramble, args.seed)
        logger.info("Mezcla: %s", setup)

    if args.headless:
        sys.exit(run_headless(args.alg, setup, args.speed))

    # Importes diferidos: el modo headless no necesita OpenGL.
    from PySide6.QtWidgets import QApplication

    from rubik_player.app.catalog import load_catalog
    from rubik_player.app.main_window import MainWindow
    from rubik_player.app.progress import ProgressTracker

    app = QApplication(sys.argv)
    w = MainWindow(catalog=load_catalog(), progress=ProgressTracker(args.progress), speed=args.speed)
    if args.alg or setup:
        w.load(args.alg, setup)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
