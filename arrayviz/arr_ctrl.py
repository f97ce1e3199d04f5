import re

from PyQt5.QtCore import pyqtSignal
from PyQt5.QtWidgets import (
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from arrayviz.arr_model import OperationKind, OperationRequest
from arrayviz.arr_steps import committed_array, generate
from arrayviz.arr_view import ArrayView
from core.global_ctrl import GlobalController
from core.playback import PlaybackController
from core.settings import get_logger, load_settings

logger = get_logger(__name__)

DEFAULT_ARRAY = (2, 22, 56)


class InputError(ValueError):
    """User typed something that is not an integer (or list of integers)."""


def parse_int(text, field="value"):
    """Blank -> None, integer text -> int, anything else raises InputError."""
    text = (text or "").strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        raise InputError(f"{field} must be an integer, got {text!r}") from None


def parse_sequence(text):
    if not text:
        return []

    normalized = text.replace("，", ",")
    tokens = [
        part.strip()
        for part in re.split(r"[,\s]+", normalized)
        if part.strip()
    ]
    return [parse_int(part, "element") for part in tokens]


class ArrayController(QWidget):
    """
    Operation panel for the array visualizer: turns user input into
    OperationRequests, hands the generated timeline to the playback
    controller and keeps the navigation buttons in sync with it.
    """

    narrationChanged = pyqtSignal(str)

    def __init__(self, global_ctrl: GlobalController, initial=DEFAULT_ARRAY):
        super().__init__()
        self.settings = load_settings()
        self.global_ctrl = global_ctrl
        self.view = ArrayView(global_ctrl)
        self.playback = PlaybackController(parent=self)
        self.playback.set_speed_multiplier(global_ctrl.speed)
        self.array = tuple(initial)

        self._build_inputs()
        self.panel = self._create_panel()

        self.playback.snapshotChanged.connect(self._on_snapshot_changed)
        self.playback.stateChanged.connect(self._refresh_navigation)
        global_ctrl.speedChanged.connect(self.playback.set_speed_multiplier)

        self.execute(OperationKind.INIT)

    # ---------- Panel UI ----------

    def _build_inputs(self):
        self.create_edit = QLineEdit()
        self.create_edit.setPlaceholderText("e.g. 5, 12, 8, 23, 16")

        self.value_edit = QLineEdit()
        self.value_edit.setPlaceholderText("Value")

        self.index_edit = QLineEdit()
        self.index_edit.setPlaceholderText("Index / slice start")

        self.end_edit = QLineEdit()
        self.end_edit.setPlaceholderText("Slice end (exclusive)")

        self.status_label = QLabel("")
        self.status_label.setObjectName("arrayStatusLabel")
        self.progress_label = QLabel("")

    def _create_panel(self):
        container = QWidget()
        root = QVBoxLayout(container)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(10)

        grid = QGridLayout()
        grid.setHorizontalSpacing(12)
        grid.setVerticalSpacing(12)
        grid.setColumnStretch(0, 1)
        grid.setColumnStretch(1, 1)

        # Create
        self.create_btn = QPushButton("Create")
        self.create_btn.clicked.connect(self._on_create)
        create_group = self._form_group(
            "Create", [("Values:", self.create_edit)], self.create_btn
        )
        grid.addWidget(create_group, 0, 0)

        # Parameters shared by every operation
        params_group = self._form_group(
            "Parameters",
            [
                ("Value:", self.value_edit),
                ("Index:", self.index_edit),
                ("End:", self.end_edit),
            ],
        )
        grid.addWidget(params_group, 0, 1)

        ops_group = QGroupBox("Operations")
        ops_group.setStyleSheet("QGroupBox { color: white; }")
        ops_layout = QHBoxLayout(ops_group)
        self.op_buttons = {}
        for kind, handler in (
            (OperationKind.PUSH, self._on_push),
            (OperationKind.POP, self._on_pop),
            (OperationKind.FIND, self._on_find),
            (OperationKind.SLICE, self._on_slice),
            (OperationKind.SPLICE, self._on_splice),
        ):
            btn = QPushButton(kind.value.capitalize())
            btn.clicked.connect(handler)
            ops_layout.addWidget(btn)
            self.op_buttons[kind] = btn
        grid.addWidget(ops_group, 1, 0, 1, 2)
        root.addLayout(grid)

        nav_layout = QHBoxLayout()
        self.back_btn = QPushButton("◀ Back")
        self.play_btn = QPushButton("▶ Play")
        self.pause_btn = QPushButton("❚❚ Pause")
        self.next_btn = QPushButton("Next ▶")
        self.reset_btn = QPushButton("⟲ Reset")
        self.back_btn.clicked.connect(self.playback.step_backward)
        self.play_btn.clicked.connect(self.playback.play)
        self.pause_btn.clicked.connect(self.playback.pause)
        self.next_btn.clicked.connect(self.playback.step_forward)
        self.reset_btn.clicked.connect(self.playback.reset)
        for btn in (self.back_btn, self.play_btn, self.pause_btn, self.next_btn, self.reset_btn):
            nav_layout.addWidget(btn)
        nav_layout.addWidget(self.progress_label)
        root.addLayout(nav_layout)
        root.addWidget(self.status_label)

        return container

    @staticmethod
    def _form_group(title, rows, button=None):
        group = QGroupBox(title)
        group.setStyleSheet("QGroupBox { color: white; }")
        layout = QFormLayout()
        layout.setContentsMargins(12, 8, 12, 12)
        layout.setSpacing(6)
        for label, widget in rows:
            layout.addRow(label, widget)
        if button is not None:
            layout.addRow(button)
        group.setLayout(layout)
        return group

    def build_panel(self):
        return self.panel

    # ---------- Controller lifecycle ----------

    def on_activate(self, graphics_view):
        self.view.bind_canvas(graphics_view)

    # ---------- Execution ----------

    def execute(self, kind, index=None, value=None):
        """Generate the timeline for one operation on the current array and load it."""
        request = OperationRequest(self.array, kind, index, value)
        timeline = generate(request)
        if not timeline:
            self._report(f"{request.kind_name} needs a value")
            return timeline

        self.playback.load_timeline(timeline)
        self.array = committed_array(request, timeline)
        self._report("")
        logger.info(
            "%s(index=%s, value=%s) -> %d step(s), array now %s",
            request.kind_name,
            index,
            value,
            len(timeline),
            list(self.array),
        )

        if self.settings.autoplay and request.operation_kind is not OperationKind.INIT:
            self.playback.play()
        return timeline

    # ---------- UI handlers ----------

    def _on_create(self):
        try:
            values = parse_sequence(self.create_edit.text())
        except InputError as exc:
            self._reject(exc)
            return
        self.array = tuple(values)
        self.execute(OperationKind.INIT)

    def _on_push(self):
        self._run_with_inputs(OperationKind.PUSH, value=True)

    def _on_pop(self):
        self.execute(OperationKind.POP)

    def _on_find(self):
        self._run_with_inputs(OperationKind.FIND, value=True)

    def _on_slice(self):
        try:
            start = parse_int(self.index_edit.text(), "start")
            end = parse_int(self.end_edit.text(), "end")
        except InputError as exc:
            self._reject(exc)
            return
        self.execute(OperationKind.SLICE, start, end)

    def _on_splice(self):
        self._run_with_inputs(OperationKind.SPLICE, index=True, value=True)

    def _run_with_inputs(self, kind, index=False, value=False):
        try:
            idx = parse_int(self.index_edit.text(), "index") if index else None
            val = parse_int(self.value_edit.text(), "value") if value else None
        except InputError as exc:
            self._reject(exc)
            return
        self.execute(kind, idx, val)

    def _reject(self, exc):
        logger.warning("rejected input: %s", exc)
        self._report(str(exc))

    def _report(self, message):
        self.status_label.setText(message)

    # ---------- State helpers ----------

    def _on_snapshot_changed(self, snapshot):
        self.view.render_snapshot(snapshot)
        if snapshot is not None:
            logger.debug("showing %s", snapshot.describe())
            self.narrationChanged.emit(snapshot.narration)

    def _refresh_navigation(self):
        pb = self.playback
        total = pb.length
        shown = pb.cursor + 1 if total else 0
        self.progress_label.setText(f"Step {shown} / {total}")

        self.back_btn.setDisabled(not pb.can_step_backward)
        self.next_btn.setDisabled(not pb.can_step_forward)
        self.play_btn.setDisabled(pb.playing or not pb.can_step_forward)
        self.pause_btn.setDisabled(not pb.playing)
        self.reset_btn.setDisabled(total == 0)

        # operations stay locked while autoplay runs
        for btn in list(self.op_buttons.values()) + [self.create_btn]:
            btn.setDisabled(pb.playing)
