import sys
from pathlib import Path

from PyQt5.QtCore import Qt
from PyQt5.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSlider,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from arrayviz.arr_ctrl import ArrayController
from core.global_ctrl import SPEED_PRESETS, GlobalController
from core.settings import get_logger
from widgets.graphics_view import CustomGraphicsView

logger = get_logger(__name__)


class MainWindow(QMainWindow):
    """Canvas and controls on the left, narration log on the right."""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Array Operations Visualizer")
        self.resize(1280, 760)

        self.global_ctrl = GlobalController()
        self.controller = ArrayController(self.global_ctrl)

        self._build_ui()
        self._connect_signals()

        style_path = Path(__file__).parent / "resources" / "styles.qss"
        if style_path.exists():
            with open(style_path, "r", encoding="utf-8") as handle:
                self.setStyleSheet(handle.read())

        self.controller.on_activate(self.graphics_view)
        self._append_narration(self.controller.playback.active_snapshot)

    def _build_ui(self):
        central = QWidget(self)
        self.setCentralWidget(central)

        root_layout = QHBoxLayout(central)
        root_layout.setContentsMargins(8, 8, 8, 8)
        root_layout.setSpacing(8)

        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.setSpacing(6)

        self.graphics_view = CustomGraphicsView()
        left_layout.addWidget(self.graphics_view, 1)

        speed_layout = QHBoxLayout()
        speed_label = QLabel("Animation Speed")
        self.speed_value_label = QLabel("1.0×")
        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(50, 300)  # maps to 0.5x – 3x
        self.speed_slider.setValue(100)
        speed_layout.addWidget(speed_label)
        speed_layout.addWidget(self.speed_slider, 1)
        speed_layout.addWidget(self.speed_value_label)
        for name, multiplier in SPEED_PRESETS.items():
            btn = QPushButton(name.capitalize())
            btn.clicked.connect(
                lambda _checked=False, m=multiplier: self.speed_slider.setValue(int(m * 100))
            )
            speed_layout.addWidget(btn)
        left_layout.addLayout(speed_layout)

        left_layout.addWidget(self.controller.build_panel(), 0)

        right_panel = QWidget()
        right_layout = QVBoxLayout(right_panel)
        right_layout.setContentsMargins(0, 0, 0, 0)
        log_label = QLabel("Narration")
        self.narration_log = QTextEdit()
        self.narration_log.setReadOnly(True)
        right_layout.addWidget(log_label)
        right_layout.addWidget(self.narration_log, 1)

        root_layout.addWidget(left_panel, 14)
        root_layout.addWidget(right_panel, 6)

    def _connect_signals(self):
        self.speed_slider.valueChanged.connect(self._on_speed_slider_changed)
        self.controller.narrationChanged.connect(self.narration_log.append)

        playback = self.controller.playback
        self.graphics_view.playToggled.connect(playback.toggle)
        self.graphics_view.stepRequested.connect(self._on_step_requested)

    def _on_speed_slider_changed(self, value):
        speed = value / 100.0
        self.speed_value_label.setText(f"{speed:.1f}×")
        self.global_ctrl.set_speed(speed)

    def _on_step_requested(self, direction):
        playback = self.controller.playback
        if direction < 0:
            playback.step_backward()
        else:
            playback.step_forward()

    def _append_narration(self, snapshot):
        if snapshot is not None:
            self.narration_log.append(snapshot.narration)


def main():
    app = QApplication(sys.argv)
    logger.info("starting array visualizer")
    window = MainWindow()
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
