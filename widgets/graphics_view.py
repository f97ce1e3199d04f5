from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QKeyEvent, QPainter, QWheelEvent
from PyQt5.QtWidgets import QGraphicsView


class CustomGraphicsView(QGraphicsView):
    """
    Canvas for the visualizers:
    - normal wheel: vertical panning only
    - Ctrl + wheel: zoom with factor 1.1
    - Left / Right arrows: step the playback, Space: play or pause
    """

    stepRequested = pyqtSignal(int)  # -1 back, +1 forward
    playToggled = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setRenderHints(self.renderHints() | QPainter.Antialiasing)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setViewportUpdateMode(QGraphicsView.FullViewportUpdate)
        self.setFocusPolicy(Qt.StrongFocus)

    def wheelEvent(self, event: QWheelEvent):
        delta = event.angleDelta().y()
        if event.modifiers() & Qt.ControlModifier:
            factor = 1.1 if delta > 0 else (1 / 1.1)
            self.scale(factor, factor)
        else:
            self.translate(0, -delta * 0.2)
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):
        key = event.key()
        if key == Qt.Key_Left:
            self.stepRequested.emit(-1)
        elif key == Qt.Key_Right:
            self.stepRequested.emit(1)
        elif key == Qt.Key_Space:
            self.playToggled.emit()
        else:
            super().keyPressEvent(event)
            return
        event.accept()
