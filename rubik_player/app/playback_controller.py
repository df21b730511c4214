# rubik_player/app/playback_controller.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Tuple

from PySide6.QtCore import QObject, Signal

from rubik_player.anim.animation_queue import AnimationQueue, CubeVisual, PendingTurn
from rubik_player.core.cube_model import CubeModel
from rubik_player.logic.moves import Move, parse_sequence

logger = logging.getLogger(__name__)


class PlaybackState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    STEPPING = "stepping"


class PlaybackController(QObject):
    """Orquesta la reproducción de un algoritmo sobre el modelo y el render.

    Mantiene en paralelo:
    - El modelo lógico (`CubeModel`), que siempre refleja "setup + primeros
      `cursor` giros".
    - La cola de animaciones (`AnimationQueue`), que muestra cada giro de a uno.

    Cada paso primero modifica el modelo y mueve el cursor, y recién después pide
    la animación: lo que se ve es consecuencia de un cambio ya confirmado.

    Signals:
        step_changed(int, int): (cursor, total) tras cada paso terminado, reset o carga.
        play_state_changed(bool): al entrar o salir de reproducción automática.
    """

    step_changed = Signal(int, int)
    play_state_changed = Signal(bool)

    def __init__(
        self,
        visual: CubeVisual,
        queue: Optional[AnimationQueue] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        """Crea el controlador con un cubo resuelto y sin algoritmo cargado.

        Args:
            visual: Render que muestra el cubo.
            queue: Cola de animaciones; por defecto una sin watchdog sobre `visual`.
            parent: QObject padre, opcional.
        """
        super().__init__(parent)
        self.visual: CubeVisual = visual
        self.queue: AnimationQueue = queue if queue is not None else AnimationQueue(visual)
        self.model: CubeModel = CubeModel()

        self._moves: Tuple[Move, ...] = ()
        self._setup_moves: Tuple[Move, ...] = ()
        self._cursor: int = 0
        self._state: PlaybackState = PlaybackState.IDLE

        self._cancel_requested: bool = False
        # Cada reset/carga/dispose abre una generación nueva: las confirmaciones
        # de giros de una generación vieja se ignoran.
        self._generation: int = 0
        # Cada play() toma un turno nuevo; solo el último sigue encadenando giros.
        self._play_token: int = 0
        self._disposed: bool = False

        self.visual.synchronize(self.model)

    # --------------------------
    # Estado
    # --------------------------
    @property
    def moves(self) -> Tuple[Move, ...]:
        return self._moves

    @property
    def setup_moves(self) -> Tuple[Move, ...]:
        return self._setup_moves

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def total(self) -> int:
        return len(self._moves)

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    # --------------------------
    # Carga / reset
    # --------------------------
    def load_algorithm(self, algorithm: str, setup: str = "") -> None:
        """Carga un algoritmo para reproducir.

        Los giros de `setup` se aplican sin animación ni historial antes de empezar,
        así el cubo arranca desde el caso que el algoritmo resuelve.

        Args:
            algorithm: Notación, por ejemplo "R U R' U'".
            setup: Giros previos (opcional).
        """
        if self._disposed:
            return
        self.pause()
        self.queue.clear_queue()

        self._moves = parse_sequence(algorithm)
        self._setup_moves = parse_sequence(setup)
        logger.info(
            "Algoritmo cargado: %d giros (setup: %d)", len(self._moves), len(self._setup_moves)
        )
        self._restart()

    def reset(self) -> None:
        """Vuelve al inicio del algoritmo (setup aplicado, cursor en 0)."""
        if self._disposed:
            return
        self.pause()
        self.queue.clear_queue()
        self._restart()

    def _restart(self) -> None:
        self._generation += 1
        self._cursor = 0
        self._state = PlaybackState.IDLE

        self.model.reset()
        self.model.apply_moves(self._setup_moves, record_history=False)

        self.visual.synchronize(self.model)
        self._notify_step()

    # --------------------------
    # Reproducción
    # --------------------------
    def play(self) -> None:
        """Reproduce desde el cursor hasta el final (o hasta `pause()`).

        Si el cursor ya está al final, primero vuelve al inicio.
        """
        if self._disposed or self._state is PlaybackState.PLAYING:
            return
        if self._cursor >= len(self._moves):
            self.reset()

        self._play_token += 1
        self._cancel_requested = False
        self._state = PlaybackState.PLAYING
        self._notify_play_state()
        self._play_next(self._generation, self._play_token)

    def pause(self) -> None:
        """Detiene la reproducción automática.

        No corta el giro que se está animando: ese termina solo (y su paso se
        notifica), pero no se arranca ningún giro más.
        """
        self._cancel_requested = True
        if self._state is PlaybackState.PLAYING:
            self._state = PlaybackState.IDLE
            self._notify_play_state()
        elif self._state is PlaybackState.STEPPING:
            self._state = PlaybackState.IDLE

    def toggle_play(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def _play_next(self, generation: int, token: int) -> None:
        # Bucle cooperativo: solo se suspende esperando la animación de un giro.
        while True:
            if self._is_stale(generation) or token != self._play_token:
                return
            if self._cancel_requested or self._cursor >= len(self._moves):
                self._finish_play()
                return

            turn = self._commit_forward()
            cursor = self._cursor
            if not turn.done:
                turn.add_done_callback(lambda: self._on_play_turn_done(generation, token, cursor))
                return
            self._notify_step(cursor)

    def _on_play_turn_done(self, generation: int, token: int, cursor: int) -> None:
        # El paso se notifica aunque este play() ya haya sido reemplazado;
        # solo el play() vigente sigue avanzando.
        if self._is_stale(generation):
            return
        self._notify_step(cursor)
        self._play_next(generation, token)

    def _finish_play(self) -> None:
        if self._state is PlaybackState.PLAYING:
            self._state = PlaybackState.IDLE
            self._notify_play_state()

    # --------------------------
    # Pasos manuales
    # --------------------------
    def step_forward(self) -> None:
        """Avanza un giro (solo si no se está reproduciendo ni animando)."""
        if not self._can_step() or self._cursor >= len(self._moves):
            return
        self._state = PlaybackState.STEPPING
        generation = self._generation
        turn = self._commit_forward()
        cursor = self._cursor
        turn.add_done_callback(lambda: self._on_step_done(generation, cursor))

    def step_backward(self) -> None:
        """Retrocede un giro aplicando el inverso del último giro reproducido."""
        if not self._can_step() or self._cursor <= 0:
            return
        self._state = PlaybackState.STEPPING
        generation = self._generation

        self._cursor -= 1
        cursor = self._cursor
        inverse = self._moves[cursor].inverse()
        self.model.apply_move(inverse, record_history=False)
        turn = self.queue.animate(inverse)
        turn.add_done_callback(lambda: self._on_step_done(generation, cursor))

    def _can_step(self) -> bool:
        if self._disposed:
            return False
        if self._state is not PlaybackState.IDLE or self.queue.is_animating:
            logger.debug("Paso ignorado: estado=%s animando=%s", self._state.value, self.queue.is_animating)
            return False
        return True

    def _on_step_done(self, generation: int, cursor: int) -> None:
        if self._is_stale(generation):
            return
        if self._state is PlaybackState.STEPPING:
            self._state = PlaybackState.IDLE
        self._notify_step(cursor)

    # --------------------------
    # Otros
    # --------------------------
    def set_speed(self, multiplier: float) -> None:
        self.queue.set_speed(multiplier)

    def dispose(self) -> None:
        """Detiene todo y libera el render. Seguro de llamar en cualquier estado."""
        if self._disposed:
            return
        self.pause()
        self._disposed = True
        self._generation += 1
        self.queue.dispose()
        self.visual.dispose_visuals()

    def _commit_forward(self) -> PendingTurn:
        move = self._moves[self._cursor]
        self.model.apply_move(move, record_history=False)
        self._cursor += 1
        return self.queue.animate(move)

    def _is_stale(self, generation: int) -> bool:
        return self._disposed or generation != self._generation

    def _notify_step(self, cursor: Optional[int] = None) -> None:
        """Emite `step_changed`; `cursor` es el valor que dejó el giro confirmado."""
        if not self._disposed:
            self.step_changed.emit(self._cursor if cursor is None else cursor, len(self._moves))

    def _notify_play_state(self) -> None:
        if not self._disposed:
            self.play_state_changed.emit(self.is_playing)
