from PyQt5.QtCore import QObject, QRectF, Qt
from PyQt5.QtWidgets import QGraphicsScene

from core.animation import AnimationToolkit


class BaseStructureView(QObject):
    """
    Base class for snapshot renderers, providing:
    - a private QGraphicsScene
    - the animation helper and references to running animations
    - camera fitting for the bound QGraphicsView
    """

    def __init__(self, global_ctrl):
        super().__init__()
        self.scene = QGraphicsScene()
        self.scene.setSceneRect(-200, -200, 1200, 800)
        self.anim = AnimationToolkit(global_ctrl)
        self._running = []
        self._canvas = None  # bound QGraphicsView (optional)
        self._default_scene_rect = QRectF(self.scene.sceneRect())

    def bind_canvas(self, view):
        self._canvas = view
        if view:
            view.setScene(self.scene)
            view.resetTransform()
            self.fit_view()

    def fit_view(self, padding=80):
        """Shrink the camera to fit wide arrays, otherwise just centre them."""
        items_rect = self.scene.itemsBoundingRect()
        if items_rect.isNull():
            items_rect = QRectF(self._default_scene_rect)

        target = QRectF(items_rect)
        target.adjust(-padding, -padding, padding, padding)
        self.scene.setSceneRect(target)

        if not self._canvas:
            return
        viewport = self._canvas.viewport().rect()
        if viewport.isNull():
            return

        self._canvas.resetTransform()
        if target.width() > viewport.width() or target.height() > viewport.height():
            self._canvas.fitInView(target, Qt.KeepAspectRatio)
        else:
            self._canvas.centerOn(items_rect.center())

    def _stop_animations(self):
        for animation in list(self._running):
            animation.stop()
        self._running.clear()

    def _track_animation(self, animation):
        """Keep a reference so the animation is not garbage collected mid-run."""
        if animation is None:
            return
        self._running.append(animation)

        def _cleanup():
            if animation in self._running:
                self._running.remove(animation)

        animation.finished.connect(_cleanup)
        animation.start()
