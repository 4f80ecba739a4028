# -*- coding: utf-8 -*-
"""
NodeItem - Visual representation of a node and its endpoints.

Displays a node with:
- Header bar with title
- Endpoint dots: sinks on the left edge, sources on the right
- Highlighted sinks while a compatible link is being dragged
- Drag to move (the node's position follows the item)
"""
from typing import Callable, Optional, TYPE_CHECKING
from PySide6.QtWidgets import QGraphicsItem, QStyleOptionGraphicsItem, QWidget
from PySide6.QtCore import Qt, QRectF, QPointF
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPainterPath, QPen

from ..core.geometry import Point

if TYPE_CHECKING:
    from ..core.node import Node


class NodeItem(QGraphicsItem):
    """
    Graphics item drawing one Node.

    Attributes:
        node: The underlying Node
        on_moved: Called with the node after each position change
    """

    CORNER_RADIUS = 6
    ENDPOINT_RADIUS = 5

    def __init__(
        self,
        node: 'Node',
        on_moved: Optional[Callable[['Node'], None]] = None,
        parent: Optional[QGraphicsItem] = None
    ):
        super().__init__(parent)
        self.node = node
        self.on_moved = on_moved

        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsMovable, True)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsSelectable, True)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemSendsGeometryChanges, True)

        self.setPos(node.position.x, node.position.y)
        self.setToolTip(f"<b>{node.name}</b><br>{node.type_name}")

    def boundingRect(self) -> QRectF:
        r = self.ENDPOINT_RADIUS
        return QRectF(-r, 0, self.node.WIDTH + 2 * r, self.node.height)

    def paint(self, painter: QPainter, option: QStyleOptionGraphicsItem, widget: QWidget = None):
        """Paint the node."""
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        body = QRectF(0, 0, self.node.WIDTH, self.node.height)
        border = QColor(255, 180, 0) if self.isSelected() else QColor(60, 60, 62)

        path = QPainterPath()
        path.addRoundedRect(body, self.CORNER_RADIUS, self.CORNER_RADIUS)
        painter.setBrush(QBrush(QColor(40, 40, 42)))
        painter.setPen(QPen(border, 1))
        painter.drawPath(path)

        # Title
        painter.setPen(QColor(255, 255, 255))
        painter.setFont(QFont("Segoe UI", 9, QFont.Weight.Bold))
        title_rect = QRectF(8, 0, body.width() - 16, self.node.HEADER_HEIGHT)
        painter.drawText(title_rect, Qt.AlignmentFlag.AlignVCenter, self.node.name)

        painter.setFont(QFont("Segoe UI", 8))
        for endpoint in self.node.endpoints:
            center = QPointF(endpoint.offset.x, endpoint.offset.y)
            if endpoint.highlighted:
                fill = QColor(120, 220, 120)
            elif endpoint.is_occupied:
                fill = QColor(255, 155, 0)
            else:
                fill = QColor(110, 110, 115)
            painter.setPen(QPen(QColor(20, 20, 20), 1))
            painter.setBrush(QBrush(fill))
            painter.drawEllipse(center, self.ENDPOINT_RADIUS, self.ENDPOINT_RADIUS)

            painter.setPen(QColor(180, 180, 180))
            if endpoint.is_sink:
                label = QRectF(center.x() + 10, center.y() - 8, body.width() / 2 - 10, 16)
                painter.drawText(label, Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter, endpoint.name)
            else:
                label = QRectF(body.width() / 2, center.y() - 8, body.width() / 2 - 10, 16)
                painter.drawText(label, Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter, endpoint.name)

    def itemChange(self, change, value):
        """Keep the node's position in step with the item."""
        if change == QGraphicsItem.GraphicsItemChange.ItemPositionHasChanged:
            pos = self.pos()
            self.node.position = Point(pos.x(), pos.y())
            if self.on_moved is not None:
                self.on_moved(self.node)

        return super().itemChange(change, value)

    def __repr__(self) -> str:
        return f"<NodeItem {self.node.type_name}({self.node.node_id[:8]})>"
