# rubik_player/render/cube_gl_widget.py
from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Tuple

from PySide6.QtCore import QElapsedTimer, QPoint, QTimer, Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnable,
    glEnd,
    glLoadIdentity,
    glMatrixMode,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
)
from OpenGL.GLU import gluPerspective

from rubik_player import config
from rubik_player.anim.easing import turn_angle
from rubik_player.core.cube_model import CubeModel
from rubik_player.core.geometry import Axis, facelet_position, in_layer
from rubik_player.logic.moves import Move

logger = logging.getLogger(__name__)

Vec3f = Tuple[float, float, float]


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que muestra el cubo y anima giros (implementa `CubeVisual`).

    Características:
    - Render OpenGL clásico (sin shaders), stickers 3x3 con "plástico" detrás.
    - Orbit con el mouse (arrastrar) y zoom con la rueda.
    - Animación por tiempo con QTimer: el ángulo sigue una curva ease-out y al
      terminar se fija en el valor exacto.

    El widget tiene su propia copia del cubo (`displayed`). Mientras un giro se
    anima, las capas afectadas se dibujan rotadas sobre esa copia; al terminar se
    aplica el giro a la copia y recién entonces se avisa a la cola.
    """

    def __init__(self, parent=None) -> None:
        """Crea el widget con un cubo resuelto y la cámara por defecto.

        Args:
            parent: Widget padre (Qt), opcional.
        """
        super().__init__(parent)
        self.displayed: CubeModel = CubeModel()

        # Cámara / orbit
        self.yaw: float = config.CAMERA_YAW
        self.pitch: float = config.CAMERA_PITCH
        self.distance: float = config.CAMERA_DISTANCE

        self._last_mouse_pos: QPoint = QPoint()
        self._orbiting: bool = False

        # Stickers
        self.sticker_margin: float = 0.04
        self.sticker_offset: float = 0.01

        # Animación
        self.anim_move: Optional[Move] = None
        self.anim_angle: float = 0.0
        self.anim_duration_ms: float = config.MOVE_DURATION_MS
        self._on_finished: Optional[Callable[[], None]] = None
        self._elapsed: QElapsedTimer = QElapsedTimer()

        self._anim_timer: QTimer = QTimer(self)
        self._anim_timer.setInterval(config.FRAME_INTERVAL_MS)
        self._anim_timer.timeout.connect(self._on_anim_tick)

        self._disposed: bool = False
        self.setFocusPolicy(Qt.ClickFocus)

    @property
    def animating(self) -> bool:
        return self.anim_move is not None

    # --------------------------
    # CubeVisual
    # --------------------------
    def synchronize(self, model: CubeModel) -> None:
        """Muestra exactamente el estado de `model`.

        Si había un giro animándose se corta sin aplicarlo (la copia se reemplaza
        entera) y se confirma igual, para que la cola no quede esperando.
        """
        callback = self._on_finished
        self._stop_animation()
        self.displayed = model.clone()
        self.update()
        if callback is not None:
            callback()

    def animate(self, move: Move, duration_ms: float, on_finished: Callable[[], None]) -> None:
        """Inicia la animación de un giro.

        Args:
            move: Giro a animar.
            duration_ms: Duración total.
            on_finished: Se llama una vez, con el giro ya aplicado a `displayed`.
        """
        if self._disposed:
            on_finished()
            return
        if self.animating:
            # Solo pasa si el watchdog de la cola ya dio por terminado el anterior.
            self._finish_move_animation()

        self.anim_move = move
        self.anim_angle = 0.0
        self.anim_duration_ms = duration_ms
        self._on_finished = on_finished
        self._elapsed.start()
        self._anim_timer.start()

    def dispose_visuals(self) -> None:
        """Detiene el timer de animación; el widget deja de aceptar giros."""
        self._disposed = True
        self._stop_animation()

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        """Inicializa parámetros OpenGL (clear color y depth test)."""
        glClearColor(*config.CLEAR_COLOR)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget.

        Args:
            w: Ancho lógico del widget (Qt).
            h: Alto lógico del widget (Qt).
        """
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(45.0, fb_w / float(fb_h), 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual: primero lo estático, luego las capas que giran."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()

        self._draw_stickers_pass(animated_only=False)
        if self.animating:
            self._draw_stickers_pass(animated_only=True)

    def _apply_camera(self) -> None:
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.distance)
        glRotatef(self.pitch, 1.0, 0.0, 0.0)
        glRotatef(self.yaw, 0.0, 1.0, 0.0)

    # --------------------------
    # Interacción (solo cámara)
    # --------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() in (Qt.LeftButton, Qt.RightButton):
            self._orbiting = True
            self._last_mouse_pos = event.pos()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if not self._orbiting:
            super().mouseMoveEvent(event)
            return

        dx = event.position().x() - self._last_mouse_pos.x()
        dy = event.position().y() - self._last_mouse_pos.y()
        self._last_mouse_pos = event.pos()

        sens = 0.4
        self.yaw += dx * sens
        self.pitch += dy * sens
        self.pitch = max(-89.0, min(89.0, self.pitch))

        self.update()
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self._orbiting and event.button() in (Qt.LeftButton, Qt.RightButton):
            self._orbiting = False
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom in/out con la rueda del mouse."""
        delta = event.angleDelta().y() / 120.0
        self.distance -= delta * 0.3
        self.distance = max(3.0, min(20.0, self.distance))
        self.update()
        event.accept()

    # --------------------------
    # Animación
    # --------------------------
    def _on_anim_tick(self) -> None:
        """Tick del timer: avanza el ángulo según el tiempo transcurrido."""
        move = self.anim_move
        if move is None:
            self._anim_timer.stop()
            return

        angle, finished = turn_angle(
            move.target_angle, float(self._elapsed.elapsed()), self.anim_duration_ms
        )
        self.anim_angle = angle
        if finished:
            self._finish_move_animation()
            return
        self.update()

    def _finish_move_animation(self) -> None:
        """Fija el giro: lo aplica a `displayed`, suelta la capa y avisa a la cola."""
        move = self.anim_move
        callback = self._on_finished
        self._stop_animation()
        if move is None:
            return

        self.displayed.apply_move(move, record_history=False)
        self.update()
        if callback is not None:
            callback()

    def _stop_animation(self) -> None:
        self._anim_timer.stop()
        self.anim_move = None
        self.anim_angle = 0.0
        self._on_finished = None

    # --------------------------
    # Render helpers
    # --------------------------
    def _rot_point(self, p: Vec3f, axis: Axis, angle_deg: float) -> Vec3f:
        """Rota un punto alrededor de un eje por un ángulo en grados (mano derecha)."""
        x, y, z = p
        a = math.radians(angle_deg)
        c = math.cos(a)
        s = math.sin(a)

        if axis == "x":
            return (x, y * c - z * s, y * s + z * c)
        if axis == "y":
            return (x * c + z * s, y, -x * s + z * c)
        return (x * c - y * s, x * s + y * c, z)

    def _is_in_anim_layer(self, face: str, i: int) -> bool:
        """Indica si un sticker pertenece a la(s) capa(s) del giro en curso."""
        move = self.anim_move
        if move is None:
            return False
        pos = facelet_position(face, i)
        if in_layer(pos, move.axis, move.layer):
            return True
        return move.wide and in_layer(pos, move.axis, 0)

    def _sticker_quad(self, face: str, i: int, margin: float, offset: Optional[float] = None) -> List[Vec3f]:
        """Retorna los 4 vértices del quad (sticker) para una cara e índice.

        Args:
            face: Cara.
            i: Índice 0..8 (fila-columna, cara vista de frente).
            margin: Margen interno del sticker (reduce el quad).
            offset: Separación respecto al cubo (si None, usa `self.sticker_offset`).

        Returns:
            Lista de 4 vértices (x, y, z) para dibujar con GL_QUADS.
        """
        off = self.sticker_offset if offset is None else offset
        r, c = divmod(i, 3)
        step = 2.0 / 3.0
        m = margin

        if face in ("F", "B"):
            z = 1.0 + off if face == "F" else -1.0 - off
            if face == "F":
                x_min = -1.0 + c * step
            else:
                x_min = 1.0 - (c + 1) * step
            x_max = x_min + step
            y_max = 1.0 - r * step
            y_min = y_max - step
            return [
                (x_min + m, y_min + m, z),
                (x_max - m, y_min + m, z),
                (x_max - m, y_max - m, z),
                (x_min + m, y_max - m, z),
            ]

        if face in ("R", "L"):
            x = 1.0 + off if face == "R" else -1.0 - off
            if face == "R":
                z_min = 1.0 - (c + 1) * step
            else:
                z_min = -1.0 + c * step
            z_max = z_min + step
            y_max = 1.0 - r * step
            y_min = y_max - step
            return [
                (x, y_min + m, z_min + m),
                (x, y_min + m, z_max - m),
                (x, y_max - m, z_max - m),
                (x, y_max - m, z_min + m),
            ]

        # U / D
        y = 1.0 + off if face == "U" else -1.0 - off
        if face == "U":
            z_min = -1.0 + r * step
        else:
            z_min = 1.0 - (r + 1) * step
        z_max = z_min + step
        x_min = -1.0 + c * step
        x_max = x_min + step
        return [
            (x_min + m, y, z_min + m),
            (x_max - m, y, z_min + m),
            (x_max - m, y, z_max - m),
            (x_min + m, y, z_max - m),
        ]

    def _draw_stickers_pass(self, animated_only: bool) -> None:
        """Dibuja stickers (y fondo plástico) en un pase.

        Args:
            animated_only: Si True, dibuja solo los stickers de la capa animada.
                Si False, dibuja los que NO están en la capa animada.
        """
        move = self.anim_move

        glBegin(GL_QUADS)

        for face in self.displayed.FACES:
            for i in range(9):
                in_layer_ = self._is_in_anim_layer(face, i)
                if animated_only != in_layer_:
                    continue

                quad_bg = self._sticker_quad(face, i, margin=0.02, offset=self.sticker_offset * 0.55)
                quad = self._sticker_quad(face, i, self.sticker_margin)
                if in_layer_ and move is not None:
                    quad_bg = [self._rot_point(v, move.axis, self.anim_angle) for v in quad_bg]
                    quad = [self._rot_point(v, move.axis, self.anim_angle) for v in quad]

                glColor3f(*config.PLASTIC_COLOR)
                for v in quad_bg:
                    glVertex3f(*v)

                glColor3f(*self._color_rgb(self.displayed.state[face][i]))
                for v in quad:
                    glVertex3f(*v)

        glEnd()

    def _color_rgb(self, c: str) -> Vec3f:
        """Convierte la letra de color del modelo a RGB; gris si no existe."""
        return config.COLOR_RGB.get(c, (0.8, 0.8, 0.8))
