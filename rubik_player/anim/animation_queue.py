# rubik_player/anim/animation_queue.py
from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, List, Optional, Protocol

from rubik_player import config
from rubik_player.core.cube_model import CubeModel
from rubik_player.logic.moves import Move

logger = logging.getLogger(__name__)

DoneCallback = Callable[[], None]
ScheduleFn = Callable[[int, Callable[[], None]], None]


class CubeVisual(Protocol):
    """Lo que el motor necesita de un render (OpenGL, headless, etc.).

    - `synchronize(model)`: mostrar exactamente el estado del modelo. Si había un
      giro en curso, se corta y se llama a su `on_finished`.
    - `animate(move, duration_ms, on_finished)`: animar un giro y llamar a
      `on_finished` una única vez al terminar.
    - `dispose_visuals()`: liberar recursos del render.
    """

    def synchronize(self, model: CubeModel) -> None: ...

    def animate(self, move: Move, duration_ms: float, on_finished: DoneCallback) -> None: ...

    def dispose_visuals(self) -> None: ...


class PendingTurn:
    """Señal de finalización diferida de un giro pedido a la cola.

    Si el pedido se descarta con `clear_queue()` nunca se completa.
    """

    def __init__(self, move: Move) -> None:
        self.move: Move = move
        self.done: bool = False
        self.duration_ms: Optional[float] = None
        self._callbacks: List[DoneCallback] = []

    def add_done_callback(self, fn: DoneCallback) -> None:
        """Registra `fn`; si el giro ya terminó se ejecuta de inmediato."""
        if self.done:
            fn()
            return
        self._callbacks.append(fn)

    def _resolve(self) -> None:
        if self.done:
            return
        self.done = True
        callbacks, self._callbacks = self._callbacks, []
        for fn in callbacks:
            fn()

    def __repr__(self) -> str:
        return f"PendingTurn({self.move}, done={self.done})"


class AnimationQueue:
    """Secuenciador de animaciones: un giro a la vez, en orden FIFO.

    Los pedidos que llegan mientras hay un giro animándose se encolan y arrancan
    recién cuando terminan todos los anteriores. La duración de cada giro se fija
    al arrancarlo (`base_duration_ms / speed`), así que un cambio de velocidad no
    afecta al giro en curso.

    Watchdog (opcional): si se pasa `schedule` (por ejemplo `QTimer.singleShot`) y
    `watchdog_ms`, un giro que el render no confirma en `duración + watchdog_ms`
    se da por terminado y se registra en el log.
    """

    def __init__(
        self,
        visual: CubeVisual,
        base_duration_ms: float = config.MOVE_DURATION_MS,
        schedule: Optional[ScheduleFn] = None,
        watchdog_ms: Optional[int] = None,
    ) -> None:
        """Crea la cola.

        Args:
            visual: Render que ejecuta cada giro.
            base_duration_ms: Duración de un giro a velocidad 1x.
            schedule: Función `(ms, fn)` que ejecuta `fn` más tarde (para el watchdog).
            watchdog_ms: Margen del watchdog; None lo desactiva.
        """
        self.visual: CubeVisual = visual
        self.base_duration_ms: float = base_duration_ms
        self.speed: float = 1.0

        self._schedule: Optional[ScheduleFn] = schedule
        self._watchdog_ms: Optional[int] = watchdog_ms

        self._queue: Deque[PendingTurn] = deque()
        self._current: Optional[PendingTurn] = None
        self._pumping: bool = False
        self._disposed: bool = False

    # --------------------------
    # Public API
    # --------------------------
    @property
    def duration_ms(self) -> float:
        """Duración que tendrá el próximo giro que arranque."""
        return self.base_duration_ms / self.speed

    @property
    def is_animating(self) -> bool:
        """True si hay un giro en curso o pedidos esperando."""
        return self._current is not None or bool(self._queue)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def set_speed(self, multiplier: float) -> None:
        """Ajusta la velocidad (0.5 = lento, 1 = normal, 2 = rápido).

        Args:
            multiplier: Factor de velocidad; valores <= 0 se ignoran.
        """
        if multiplier <= 0:
            logger.warning("Velocidad inválida ignorada: %s", multiplier)
            return
        self.speed = float(multiplier)

    def animate(self, move: Move) -> PendingTurn:
        """Pide animar un giro.

        Args:
            move: Giro a animar.

        Returns:
            `PendingTurn` que se completa cuando el render termina ese giro.
        """
        turn = PendingTurn(move)
        if self._disposed:
            return turn
        self._queue.append(turn)
        self._pump()
        return turn

    def clear_queue(self) -> None:
        """Descarta los pedidos que todavía no arrancaron (el giro en curso sigue)."""
        if self._queue:
            logger.debug("Descartando %d giros encolados", len(self._queue))
        self._queue.clear()

    def dispose(self) -> None:
        """Vacía la cola e ignora cualquier confirmación posterior del render."""
        self._disposed = True
        self._queue.clear()
        self._current = None

    # --------------------------
    # Internals
    # --------------------------
    def _pump(self) -> None:
        # Iterativo: un render que termina en el acto no anida llamadas.
        if self._pumping:
            return
        self._pumping = True
        try:
            while self._current is None and self._queue and not self._disposed:
                turn = self._queue.popleft()
                self._start(turn)
        finally:
            self._pumping = False

    def _start(self, turn: PendingTurn) -> None:
        self._current = turn
        turn.duration_ms = self.duration_ms
        logger.debug("Animando %s (%.0f ms)", turn.move, turn.duration_ms)

        if self._schedule is not None and self._watchdog_ms is not None:
            timeout = int(turn.duration_ms + self._watchdog_ms)
            self._schedule(timeout, lambda: self._on_watchdog(turn))

        self.visual.animate(turn.move, turn.duration_ms, lambda: self._finish(turn))

    def _on_watchdog(self, turn: PendingTurn) -> None:
        if turn is not self._current:
            return
        logger.warning("El render no confirmó %s a tiempo; se da por terminado", turn.move)
        self._finish(turn)

    def _finish(self, turn: PendingTurn) -> None:
        # Confirmaciones tardías (watchdog ya disparado, dispose) se ignoran.
        if turn is not self._current:
            return
        self._current = None
        turn._resolve()
        self._pump()
