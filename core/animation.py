from PyQt5.QtCore import (
    QEasingCurve,
    QParallelAnimationGroup,
    QPropertyAnimation,
    QSequentialAnimationGroup,
    QVariantAnimation,
)
from PyQt5.QtGui import QColor


class AnimationToolkit:
    """
    Small factory for the decorative transitions played when a snapshot is
    drawn. Durations go through the global speed multiplier.
    """

    def __init__(self, global_ctrl):
        self.global_ctrl = global_ctrl

    def _duration(self, base_ms):
        return self.global_ctrl.scale_duration(base_ms)

    def fade_item(self, item, start=0.0, end=1.0, duration=300):
        anim = QPropertyAnimation(item, b"opacity")
        anim.setDuration(self._duration(duration))
        anim.setStartValue(start)
        anim.setEndValue(end)
        anim.setEasingCurve(QEasingCurve.InOutQuad)
        return anim

    def pulse_color(self, setter, base_color, peak_color, duration=260):
        """
        Tween base -> peak -> base through `setter` (e.g. cell.setFillColor).
        """
        total = self._duration(duration)

        def _tween(start, end):
            anim = QVariantAnimation()
            anim.setDuration(total)
            anim.setStartValue(QColor(start))
            anim.setEndValue(QColor(end))
            anim.setEasingCurve(QEasingCurve.InOutQuad)

            def _update(value):
                if isinstance(value, QColor):
                    setter(value)

            anim.valueChanged.connect(_update)
            return anim

        return self.sequential(_tween(base_color, peak_color), _tween(peak_color, base_color))

    @staticmethod
    def parallel(*animations):
        group = QParallelAnimationGroup()
        for anim in animations:
            if anim:
                group.addAnimation(anim)
        return group

    @staticmethod
    def sequential(*animations):
        group = QSequentialAnimationGroup()
        for anim in animations:
            if anim:
                group.addAnimation(anim)
        return group
