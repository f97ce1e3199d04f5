from typing import Iterable, Optional, Tuple

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from arrayviz.arr_model import Snapshot
from core.settings import get_logger, load_settings

logger = get_logger(__name__)


class PlaybackController(QObject):
    """
    Walks a viewer through one timeline of snapshots.

    Idle  --play()-->  Playing  --pause()/reset()/load_timeline()/last frame-->  Idle

    Each instance owns its own QTimer; at most one is armed at a time and every
    tick does exactly what step_forward() does. Autoplay stops on the last
    frame instead of looping. set_speed() applied while playing re-arms the
    timer with the new period straight away.
    """

    snapshotChanged = pyqtSignal(object)  # Snapshot or None
    stateChanged = pyqtSignal()
    finished = pyqtSignal()

    def __init__(self, interval_ms: Optional[int] = None, parent=None):
        super().__init__(parent)
        self._settings = load_settings()
        self._base_interval = self._settings.clamp_interval(
            interval_ms if interval_ms is not None else self._settings.default_interval_ms
        )
        self._interval = self._base_interval
        self._timeline: Tuple[Snapshot, ...] = ()
        self._cursor = 0
        self._playing = False

        self._timer = QTimer(self)
        self._timer.setInterval(self._interval)
        self._timer.timeout.connect(self._on_tick)

    # ---------- Read-only state ----------

    @property
    def timeline(self) -> Tuple[Snapshot, ...]:
        return self._timeline

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def length(self) -> int:
        return len(self._timeline)

    @property
    def playing(self) -> bool:
        return self._playing

    @property
    def interval_ms(self) -> int:
        return self._interval

    @property
    def timer_active(self) -> bool:
        return self._timer.isActive()

    @property
    def active_snapshot(self) -> Optional[Snapshot]:
        if 0 <= self._cursor < len(self._timeline):
            return self._timeline[self._cursor]
        return None

    @property
    def at_end(self) -> bool:
        return self._cursor >= len(self._timeline) - 1

    @property
    def can_step_forward(self) -> bool:
        return not self.at_end

    @property
    def can_step_backward(self) -> bool:
        return self._cursor > 0

    # ---------- Navigation ----------

    def load_timeline(self, snapshots: Iterable[Snapshot]):
        """Replace the timeline wholesale and rewind to the first frame."""
        self._disarm()
        self._timeline = tuple(snapshots)
        self._cursor = 0
        logger.debug("timeline loaded with %d frame(s)", len(self._timeline))
        self._emit_all()

    def step_forward(self):
        if self.at_end:
            return
        self._cursor += 1
        self._emit_all()

    def step_backward(self):
        if self._cursor <= 0:
            return
        self._cursor -= 1
        self._emit_all()

    def play(self):
        self._disarm()
        if self.at_end:
            # nothing left to advance through
            self.stateChanged.emit()
            return
        self._playing = True
        self._timer.start(self._interval)
        logger.debug("autoplay armed every %d ms from frame %d", self._interval, self._cursor)
        self.stateChanged.emit()

    def pause(self):
        if self._disarm():
            self.stateChanged.emit()

    def reset(self):
        self._disarm()
        self._cursor = 0
        self._emit_all()

    def toggle(self):
        if self._playing:
            self.pause()
        else:
            self.play()

    # ---------- Speed ----------

    def set_speed(self, interval_ms: int):
        self._interval = self._settings.clamp_interval(interval_ms)
        if self._timer.isActive():
            # QTimer.start() restarts the countdown with the new period
            self._timer.start(self._interval)
        else:
            self._timer.setInterval(self._interval)
        self.stateChanged.emit()

    def set_speed_multiplier(self, multiplier: float):
        """Higher multiplier -> shorter period, relative to the base interval."""
        if multiplier <= 0:
            return
        self.set_speed(round(self._base_interval / multiplier))

    # ---------- Internal ----------

    def _on_tick(self):
        if not self._playing:
            return
        self.step_forward()
        if self.at_end:
            self._disarm()
            logger.debug("autoplay reached frame %d, stopping", self._cursor)
            self.stateChanged.emit()
            self.finished.emit()

    def _disarm(self) -> bool:
        was_playing = self._playing
        self._timer.stop()
        self._playing = False
        return was_playing

    def _emit_all(self):
        self.snapshotChanged.emit(self.active_snapshot)
        self.stateChanged.emit()
