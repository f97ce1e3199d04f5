from PyQt5.QtCore import QObject, pyqtSignal

# multipliers offered by the speed slider's preset buttons
SPEED_PRESETS = {
    "slow": 0.5,
    "normal": 1.0,
    "fast": 2.0,
    "turbo": 3.0,
}


class GlobalController(QObject):
    """
    Holds the speed multiplier shared by every visualizer instance: the
    autoplay period of each PlaybackController and the length of the
    highlight pulses both scale with it.
    """

    speedChanged = pyqtSignal(float)

    MIN_SPEED = 0.5
    MAX_SPEED = 3.0

    def __init__(self):
        super().__init__()
        self._speed = 1.0

    @property
    def speed(self) -> float:
        return self._speed

    def set_speed(self, value: float):
        value = max(self.MIN_SPEED, min(self.MAX_SPEED, float(value)))
        if abs(value - self._speed) > 1e-3:
            self._speed = value
            self.speedChanged.emit(self._speed)

    def scale_duration(self, base_ms: int) -> int:
        """Convert a duration at 1.0× into the current speed. Never below 1 ms."""
        return max(1, int(base_ms / self._speed))
