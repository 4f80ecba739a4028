# -*- coding: utf-8 -*-
"""
LinkItem - Visual representation of a link.

The item owns no geometry of its own: before painting it asks the link
for its current path and replays it into a QPainterPath.
"""
from typing import Optional, TYPE_CHECKING
from PySide6.QtWidgets import (
    QGraphicsItem, QGraphicsPathItem, QStyleOptionGraphicsItem, QWidget
)
from PySide6.QtCore import QPointF
from PySide6.QtGui import QColor, QPainter, QPainterPath, QPen

from src.core.config import LinkStyleSettings
from ..core.geometry import Path, Point

if TYPE_CHECKING:
    from ..core.link import Link


class QPainterPathSink:
    """PathSink writing into a QPainterPath."""

    def __init__(self, painter_path: Optional[QPainterPath] = None):
        self.painter_path = painter_path if painter_path is not None else QPainterPath()

    def move_to(self, point: Point) -> None:
        self.painter_path.moveTo(QPointF(point.x, point.y))

    def line_to(self, point: Point) -> None:
        self.painter_path.lineTo(QPointF(point.x, point.y))

    def quad_to(self, control: Point, point: Point) -> None:
        self.painter_path.quadTo(QPointF(control.x, control.y), QPointF(point.x, point.y))

    def cubic_to(self, control1: Point, control2: Point, point: Point) -> None:
        self.painter_path.cubicTo(
            QPointF(control1.x, control1.y),
            QPointF(control2.x, control2.y),
            QPointF(point.x, point.y),
        )


def to_qpainter_path(path: Path) -> QPainterPath:
    """Convert a geometry Path to a QPainterPath."""
    sink = QPainterPathSink()
    path.replay(sink)
    return sink.painter_path


class LinkItem(QGraphicsPathItem):
    """
    Graphics item drawing one Link.

    Attributes:
        link: The underlying Link
        style: Pen colors and widths
    """

    def __init__(
        self,
        link: 'Link',
        style: Optional[LinkStyleSettings] = None,
        parent: Optional[QGraphicsItem] = None
    ):
        super().__init__(parent)
        self.link = link
        self.style = style or LinkStyleSettings()

        self._pen = QPen(QColor(*self.style.color))
        self._pen.setWidth(self.style.width)
        self._selected_pen = QPen(QColor(*self.style.selected_color))
        self._selected_pen.setWidth(self.style.selected_width)

        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsSelectable, True)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsFocusable, True)
        # Force path to be under nodes
        self.setZValue(link.Z_VALUE)
        self.setPen(self._pen)
        self.sync()

    def sync(self) -> None:
        """Pull the link's current path and selection state."""
        sink = QPainterPathSink()
        self.link.render(sink)
        self.setPath(sink.painter_path)
        if self.isSelected() != self.link.is_selected:
            self.setSelected(self.link.is_selected)

    def current_pen(self) -> QPen:
        return self._selected_pen if self.isSelected() else self._pen

    def paint(self, painter: QPainter, option: QStyleOptionGraphicsItem, widget: QWidget = None):
        """Paint the link with the normal or selected pen."""
        if self.link.is_bound:
            self.sync()
        self.setPen(self.current_pen())
        super().paint(painter, option, widget)

    def itemChange(self, change, value):
        if change == QGraphicsItem.GraphicsItemChange.ItemSelectedHasChanged:
            self.link.is_selected = bool(value)
        return super().itemChange(change, value)

    def __repr__(self) -> str:
        return f"<LinkItem {self.link.link_id[:8]} {self.link.state.value}>"
