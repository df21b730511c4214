# rubik_player/app/main_window.py
from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from rubik_player import config
from rubik_player.anim.animation_queue import AnimationQueue
from rubik_player.app.catalog import AlgorithmEntry, filter_by_tier
from rubik_player.app.playback_controller import PlaybackController
from rubik_player.app.progress import ProgressTracker
from rubik_player.render.cube_gl_widget import CubeGLWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Ventana principal: catálogo de algoritmos + cubo 3D + controles de reproducción.

    Esta clase coordina:
    - La visualización y animación 3D (`CubeGLWidget`)
    - La reproducción paso a paso (`PlaybackController`)
    - El progreso del usuario (`ProgressTracker`)
    """

    def __init__(
        self,
        catalog: Optional[List[AlgorithmEntry]] = None,
        progress: Optional[ProgressTracker] = None,
        speed: float = config.SPEED_DEFAULT,
    ) -> None:
        """Inicializa la ventana, crea la UI y conecta señales.

        Args:
            catalog: Algoritmos a listar (puede ser vacío).
            progress: Almacén de progreso; por defecto el de `config.PROGRESS_PATH`.
            speed: Velocidad inicial de reproducción.
        """
        super().__init__()
        self.setWindowTitle(config.WINDOW_TITLE)

        self.catalog: List[AlgorithmEntry] = list(catalog or [])
        self.progress: ProgressTracker = progress or ProgressTracker()
        self._current: Optional[AlgorithmEntry] = None
        self.tier: str = "beginner"
        self.visible: List[AlgorithmEntry] = filter_by_tier(self.catalog, self.tier)

        # --- Render + controlador ---
        self.gl_widget: CubeGLWidget = CubeGLWidget(self)
        queue = AnimationQueue(
            self.gl_widget,
            schedule=QTimer.singleShot,
            watchdog_ms=config.WATCHDOG_GRACE_MS,
        )
        self.controller: PlaybackController = PlaybackController(self.gl_widget, queue, self)

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(config.PANEL_WIDTH)

        # Catálogo
        row_tier = QHBoxLayout()
        row_tier.addWidget(QLabel("Algoritmos"))
        self.cmb_tier = QComboBox()
        self.cmb_tier.addItem("Principiante", "beginner")
        self.cmb_tier.addItem("Completo", "full")
        row_tier.addWidget(self.cmb_tier)
        panel_layout.addLayout(row_tier)

        self.list_algorithms = QListWidget()
        self._fill_list()
        panel_layout.addWidget(self.list_algorithms, 1)

        self.chk_learned = QCheckBox("Aprendido")
        self.chk_learned.setEnabled(False)
        panel_layout.addWidget(self.chk_learned)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        panel_layout.addWidget(self.progress_bar)

        # Algoritmo libre
        panel_layout.addWidget(QLabel("Algoritmo (ej: R U R' U')"))
        self.txt_alg = QLineEdit()
        self.txt_alg.setPlaceholderText("Ej: R U R' U'")
        panel_layout.addWidget(self.txt_alg)

        panel_layout.addWidget(QLabel("Setup (giros previos, opcional)"))
        self.txt_setup = QLineEdit()
        self.txt_setup.setPlaceholderText("Ej: U R U' R'")
        panel_layout.addWidget(self.txt_setup)

        self.btn_load = QPushButton("Cargar")
        panel_layout.addWidget(self.btn_load)

        self.lbl_moves = QLabel("")
        self.lbl_moves.setWordWrap(True)
        self.lbl_moves.setTextFormat(Qt.RichText)
        panel_layout.addWidget(self.lbl_moves)

        # Reproducción
        row_player = QHBoxLayout()
        self.lbl_step = QLabel("0/0")
        self.btn_reset = QPushButton("⟲")
        self.btn_prev = QPushButton("◀")
        self.btn_play = QPushButton("▶")
        self.btn_next = QPushButton("▶|")
        self.btn_reset.setToolTip("Reset (Ctrl+R)")
        self.btn_prev.setToolTip("Paso atrás (←)")
        self.btn_play.setToolTip("Play / Pausa (Espacio)")
        self.btn_next.setToolTip("Paso adelante (→)")
        row_player.addWidget(self.lbl_step)
        row_player.addWidget(self.btn_reset)
        row_player.addWidget(self.btn_prev)
        row_player.addWidget(self.btn_play)
        row_player.addWidget(self.btn_next)
        panel_layout.addLayout(row_player)

        # Velocidad: el slider trabaja en pasos enteros de SPEED_STEP
        row_speed = QHBoxLayout()
        self.lbl_speed = QLabel("")
        self.slider_speed = QSlider(Qt.Horizontal)
        self.slider_speed.setRange(
            int(config.SPEED_MIN / config.SPEED_STEP), int(config.SPEED_MAX / config.SPEED_STEP)
        )
        self.slider_speed.setValue(int(round(speed / config.SPEED_STEP)))
        row_speed.addWidget(QLabel("Velocidad"))
        row_speed.addWidget(self.slider_speed, 1)
        row_speed.addWidget(self.lbl_speed)
        panel_layout.addLayout(row_speed)

        self.lbl_state = QLabel("")
        panel_layout.addWidget(self.lbl_state)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.cmb_tier.currentIndexChanged.connect(self.on_tier_changed)
        self.list_algorithms.currentRowChanged.connect(self.on_select_algorithm)
        self.chk_learned.toggled.connect(self.on_learned_toggled)
        self.btn_load.clicked.connect(self.on_load_custom)
        self.txt_alg.returnPressed.connect(self.on_load_custom)

        self.btn_reset.clicked.connect(self.controller.reset)
        self.btn_prev.clicked.connect(self.controller.step_backward)
        self.btn_play.clicked.connect(self.controller.toggle_play)
        self.btn_next.clicked.connect(self.controller.step_forward)
        self.slider_speed.valueChanged.connect(self.on_speed_changed)

        self.controller.step_changed.connect(self.on_step_changed)
        self.controller.play_state_changed.connect(self.on_play_state_changed)

        # Atajos
        QShortcut(QKeySequence(Qt.Key_Space), self, activated=self.controller.toggle_play)
        QShortcut(QKeySequence(Qt.Key_Right), self, activated=self.controller.step_forward)
        QShortcut(QKeySequence(Qt.Key_Left), self, activated=self.controller.step_backward)
        QShortcut(QKeySequence("Ctrl+R"), self, activated=self.controller.reset)

        self.on_speed_changed(self.slider_speed.value())
        self._refresh_progress()
        self.on_step_changed(0, 0)

    # -------------------
    # Carga
    # -------------------
    def load(self, algorithm: str, setup: str = "") -> None:
        """Carga un algoritmo en el reproductor y actualiza los campos de texto."""
        self.txt_alg.setText(algorithm)
        self.txt_setup.setText(setup)
        self.controller.load_algorithm(algorithm, setup)

    def _fill_list(self) -> None:
        self.list_algorithms.blockSignals(True)
        self.list_algorithms.clear()
        for entry in self.visible:
            item = QListWidgetItem(f"{entry.name}  [{entry.group}]")
            item.setData(Qt.UserRole, entry.id)
            item.setToolTip(entry.description or entry.algorithm)
            self.list_algorithms.addItem(item)
        self.list_algorithms.blockSignals(False)

    def on_tier_changed(self, index: int) -> None:
        """Cambia el nivel: filtra la lista y recalcula el progreso sobre lo visible."""
        self.tier = self.cmb_tier.itemData(index) or "beginner"
        self.visible = filter_by_tier(self.catalog, self.tier)
        self._fill_list()

        if self._current is not None and self._current in self.visible:
            self.list_algorithms.blockSignals(True)
            self.list_algorithms.setCurrentRow(self.visible.index(self._current))
            self.list_algorithms.blockSignals(False)
        else:
            self._current = None
            self.chk_learned.setEnabled(False)
        self._refresh_progress()

    def on_select_algorithm(self, row: int) -> None:
        """Carga el algoritmo elegido en la lista del catálogo."""
        if row < 0 or row >= len(self.visible):
            return
        entry = self.visible[row]
        self._current = entry

        self.chk_learned.blockSignals(True)
        self.chk_learned.setChecked(self.progress.is_completed(entry.id))
        self.chk_learned.blockSignals(False)
        self.chk_learned.setEnabled(True)

        self.load(entry.algorithm, entry.setup)

    def on_load_custom(self) -> None:
        """Carga lo escrito en los campos de algoritmo y setup."""
        self._current = None
        self.list_algorithms.blockSignals(True)
        self.list_algorithms.setCurrentRow(-1)
        self.list_algorithms.blockSignals(False)
        self.chk_learned.setEnabled(False)

        self.controller.load_algorithm(self.txt_alg.text(), self.txt_setup.text())

    # -------------------
    # Progreso
    # -------------------
    def on_learned_toggled(self, checked: bool) -> None:
        if self._current is None:
            return
        logger.info("Progreso: %s -> %s", self._current.id, "aprendido" if checked else "pendiente")
        self.progress.set_completed(self._current.id, checked)
        self._refresh_progress()

    def _refresh_progress(self) -> None:
        ids = [e.id for e in self.visible]
        self.progress_bar.setValue(int(round(self.progress.get_progress(ids) * 100)))
        self.progress_bar.setFormat(f"{self.progress.count_completed(ids)}/{len(ids)} aprendidos")

    # -------------------
    # Señales del controlador
    # -------------------
    def on_step_changed(self, current: int, total: int) -> None:
        """Actualiza el contador de pasos, resalta el giro actual y el estado del cubo.

        Args:
            current: Cursor (giros ya reproducidos).
            total: Cantidad de giros del algoritmo.
        """
        self.lbl_step.setText(f"{current}/{total}")

        parts: List[str] = []
        for i, move in enumerate(self.controller.moves):
            text = str(move)
            if i < current:
                parts.append(f"<span style='color:#888'>{text}</span>")
            elif i == current:
                parts.append(f"<b>{text}</b>")
            else:
                parts.append(text)
        self.lbl_moves.setText(" ".join(parts))

        self.lbl_state.setText(
            "Estado: resuelto ✅" if self.controller.model.is_solved() else "Estado: mezclado 🔄"
        )

    def on_play_state_changed(self, playing: bool) -> None:
        self.btn_play.setText("⏸" if playing else "▶")
        self.btn_prev.setEnabled(not playing)
        self.btn_next.setEnabled(not playing)

    def on_speed_changed(self, value: int) -> None:
        speed = value * config.SPEED_STEP
        self.controller.set_speed(speed)
        self.lbl_speed.setText(f"{speed:g}x")

    # -------------------
    # Cierre
    # -------------------
    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre: detiene la reproducción y libera el render.

        Args:
            event: Evento de cierre de Qt.
        """
        self.controller.dispose()
        event.accept()
