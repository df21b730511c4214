# rubik_player/render/headless.py
from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from rubik_player.core.cube_model import CubeHash, CubeModel
from rubik_player.logic.moves import Move


class HeadlessVisual:
    """Render sin ventana: cumple la interfaz `CubeVisual` sin dibujar nada.

    Mantiene su propia copia del cubo (como el render OpenGL) y la actualiza al
    terminar cada giro, de modo que se puede comparar lo "mostrado" con el modelo.

    Modos:
        - `auto_finish=True`: cada giro termina en el acto.
        - `auto_finish=False`: el giro queda en curso hasta `finish_current()`.
    """

    def __init__(self, auto_finish: bool = True) -> None:
        self.auto_finish: bool = auto_finish
        self.displayed: CubeModel = CubeModel()

        self.animated: List[Tuple[Move, float]] = []
        self.sync_count: int = 0
        self.disposed: bool = False

        self._current: Optional[Move] = None
        self._on_finished: Optional[Callable[[], None]] = None

    @property
    def busy(self) -> bool:
        return self._current is not None

    @property
    def durations(self) -> List[float]:
        return [d for _, d in self.animated]

    def snapshot(self) -> CubeHash:
        return self.displayed.to_hashable()

    # --------------------------
    # CubeVisual
    # --------------------------
    def synchronize(self, model: CubeModel) -> None:
        """Copia el estado del modelo; corta (y confirma) el giro en curso."""
        self.sync_count += 1
        callback = self._on_finished
        self._current = None
        self._on_finished = None
        self.displayed = model.clone()
        if callback is not None:
            callback()

    def animate(self, move: Move, duration_ms: float, on_finished: Callable[[], None]) -> None:
        if self.disposed:
            on_finished()
            return
        if self._current is not None:
            self.finish_current()
        self.animated.append((move, duration_ms))
        self._current = move
        self._on_finished = on_finished
        if self.auto_finish:
            self.finish_current()

    def dispose_visuals(self) -> None:
        """Descarta el giro en curso sin aplicarlo; no se anima nada más."""
        self.disposed = True
        self._current = None
        self._on_finished = None

    # --------------------------
    # Control manual
    # --------------------------
    def finish_current(self) -> bool:
        """Termina el giro en curso.

        Returns:
            False si no había ningún giro animándose.
        """
        move = self._current
        callback = self._on_finished
        if move is None or callback is None:
            return False
        self._current = None
        self._on_finished = None
        self.displayed.apply_move(move, record_history=False)
        callback()
        return True
