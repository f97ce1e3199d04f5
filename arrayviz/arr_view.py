from PyQt5.QtCore import QPointF, QRectF, Qt
from PyQt5.QtGui import QBrush, QColor, QPen, QPolygonF
from PyQt5.QtWidgets import QGraphicsItem, QGraphicsObject, QGraphicsSimpleTextItem

from core.base_view import BaseStructureView

CELL_FILL = QColor("#b8b8d6")
CELL_HIGHLIGHT = QColor("#ffd54f")
CELL_PULSE = QColor("#fff3c4")
POINTER_COLOR = QColor("#ff7043")
INDEX_COLOR = QColor("#90a4ae")
NARRATION_COLOR = QColor("#eceff1")


class ArrayView(BaseStructureView):
    """
    Draws a single Snapshot: one cell per element, index labels, the pointer
    arrow with its label, and the narration line. Each call to
    render_snapshot() redraws from scratch; snapshots are only read.
    """

    def __init__(self, global_ctrl):
        super().__init__(global_ctrl)
        self.cells = []
        self.index_labels = []
        self.pointer_item = None
        self.append_slot = None
        self.narration_item = None
        self.snapshot = None

        self.base_origin = QPointF(-360, -ArrayCellItem.height / 2)
        self.slot_gap = 0  # cells sit flush

        self.render_snapshot(None)

    # ---------- Public API ----------

    def render_snapshot(self, snapshot):
        self._stop_animations()
        self.scene.clear()
        self.cells = []
        self.index_labels = []
        self.pointer_item = None
        self.append_slot = None
        self.snapshot = snapshot

        if snapshot is None:
            self.narration_item = self._add_narration("Nothing to display")
            self.fit_view()
            return

        for idx, value in enumerate(snapshot.elements):
            cell = ArrayCellItem(value)
            cell.setPos(self._slot_position(idx))
            if idx in snapshot.highlighted:
                cell.set_highlighted(True)
            self.scene.addItem(cell)
            self.cells.append(cell)
            self.index_labels.append(self._add_index_label(idx))

        if snapshot.append_marker:
            self.append_slot = ArraySlotItem()
            self.append_slot.setPos(self._slot_position(len(snapshot.elements)))
            self.scene.addItem(self.append_slot)

        if snapshot.pointer is not None:
            self.pointer_item = PointerItem(snapshot.pointer_label or "")
            slot = self._slot_position(snapshot.pointer)
            self.pointer_item.setPos(
                slot.x() + ArrayCellItem.width / 2, slot.y() - PointerItem.gap
            )
            self.scene.addItem(self.pointer_item)
            self.pointer_item.setOpacity(0.0)
            self._track_animation(self.anim.fade_item(self.pointer_item, 0.0, 1.0))

        self.narration_item = self._add_narration(snapshot.narration)
        self._pulse_highlights()
        self.fit_view()

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    @property
    def cell_values(self):
        return [cell.text for cell in self.cells]

    @property
    def highlighted_cells(self):
        return {idx for idx, cell in enumerate(self.cells) if cell.highlighted}

    @property
    def pointer_text(self):
        return self.pointer_item.label if self.pointer_item else None

    @property
    def narration_text(self) -> str:
        return self.narration_item.text() if self.narration_item else ""

    # ---------- Internal helpers ----------

    def _pulse_highlights(self):
        for cell in self.cells:
            if cell.highlighted:
                self._track_animation(
                    self.anim.pulse_color(cell.setFillColor, CELL_HIGHLIGHT, CELL_PULSE)
                )

    def _slot_position(self, index: int) -> QPointF:
        step = ArrayCellItem.width + self.slot_gap
        return QPointF(self.base_origin.x() + index * step, self.base_origin.y())

    def _add_index_label(self, index):
        label = QGraphicsSimpleTextItem(str(index))
        label.setBrush(INDEX_COLOR)
        font = label.font()
        font.setPointSize(12)
        label.setFont(font)
        label.setZValue(1)
        slot = self._slot_position(index)
        rect = label.boundingRect()
        label.setPos(
            slot.x() + ArrayCellItem.width / 2 - rect.width() / 2,
            slot.y() + ArrayCellItem.height + 8,
        )
        self.scene.addItem(label)
        return label

    def _add_narration(self, text):
        item = QGraphicsSimpleTextItem(text)
        item.setBrush(NARRATION_COLOR)
        font = item.font()
        font.setPointSize(14)
        item.setFont(font)
        item.setPos(self.base_origin.x(), self.base_origin.y() + ArrayCellItem.height + 48)
        self.scene.addItem(item)
        return item


class ArrayCellItem(QGraphicsObject):
    width = 96
    height = 64

    def __init__(self, value):
        super().__init__()
        self.text = str(value)
        self.highlighted = False
        self.fillColor = QColor(CELL_FILL)
        self.strokeColor = QColor("#4a4a52")
        self.textColor = QColor("#1f1f24")
        self.setZValue(2)
        self.setCacheMode(QGraphicsItem.DeviceCoordinateCache)

    def boundingRect(self):
        return QRectF(0, 0, self.width, self.height)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        painter.setPen(QPen(self.strokeColor, 3 if self.highlighted else 2))
        painter.setBrush(QBrush(self.fillColor))
        painter.drawRect(self.boundingRect())

        font = painter.font()
        font.setPointSize(14)
        painter.setFont(font)
        painter.setPen(self.textColor)
        painter.drawText(self.boundingRect(), Qt.AlignCenter, self.text)

    def set_highlighted(self, flag: bool):
        self.highlighted = flag
        self.fillColor = QColor(CELL_HIGHLIGHT if flag else CELL_FILL)
        self.update()

    def setFillColor(self, color: QColor):
        self.fillColor = QColor(color)
        self.update()


class ArraySlotItem(QGraphicsObject):
    """Dashed placeholder drawn at the append position."""

    width = ArrayCellItem.width
    height = ArrayCellItem.height

    def __init__(self):
        super().__init__()
        self.setZValue(-1)

    def boundingRect(self):
        return QRectF(0, 0, self.width, self.height)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        pen = QPen(QColor("#74828a"), 1.6)
        pen.setStyle(Qt.DashLine)
        painter.setPen(pen)
        painter.setBrush(QBrush(QColor("#f6f6fd")))
        painter.drawRect(self.boundingRect())


class PointerItem(QGraphicsObject):
    """Downward arrow anchored at its tip, with the label above it."""

    gap = 6
    arrow_height = 28
    arrow_width = 18

    def __init__(self, label):
        super().__init__()
        self.label = label
        self.setZValue(3)

    def boundingRect(self):
        return QRectF(-70, -self.arrow_height - 28, 140, self.arrow_height + 28)

    def paint(self, painter, option, widget=None):
        painter.setRenderHint(painter.Antialiasing)
        painter.setPen(QPen(POINTER_COLOR, 2))
        painter.setBrush(QBrush(POINTER_COLOR))
        half = self.arrow_width / 2
        painter.drawPolygon(
            QPolygonF(
                [
                    QPointF(0, 0),
                    QPointF(-half, -self.arrow_height / 2),
                    QPointF(half, -self.arrow_height / 2),
                ]
            )
        )
        painter.drawLine(QPointF(0, -self.arrow_height / 2), QPointF(0, -self.arrow_height))

        font = painter.font()
        font.setPointSize(11)
        painter.setFont(font)
        painter.drawText(
            QRectF(-70, -self.arrow_height - 26, 140, 22), Qt.AlignCenter, self.label
        )
