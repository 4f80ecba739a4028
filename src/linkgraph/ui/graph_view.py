# -*- coding: utf-8 -*-
"""
GraphView - QGraphicsView presenting a LinkScene.

Pointer events are translated to scene coordinates and handed to the
LinkScene; items are created and removed by following its signals.
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView, QWidget
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QMouseEvent, QPainter

from src.core.config import LinkStyleSettings
from ..core.geometry import Point
from ..core.link import Link
from ..core.node import Node
from ..core.scene import LinkScene
from .link_item import LinkItem
from .node_item import NodeItem


class GraphView(QGraphicsView):
    """
    View over a LinkScene.

    Attributes:
        link_scene: The model driven by this view
        link_items: Dict of link_id -> LinkItem
        node_items: Dict of node_id -> NodeItem
    """

    def __init__(
        self,
        link_scene: LinkScene,
        style: Optional[LinkStyleSettings] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)
        self.link_scene = link_scene
        self.style = style or LinkStyleSettings()
        self.link_items: Dict[str, LinkItem] = {}
        self.node_items: Dict[str, NodeItem] = {}

        self.setScene(QGraphicsScene(self))
        self.scene().setBackgroundBrush(QColor(30, 30, 32))
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)

        link_scene.node_added.connect(self._add_node_item)
        link_scene.node_removed.connect(self._remove_node_item)
        link_scene.registry.link_added.connect(self._add_link_item)
        link_scene.registry.link_removed.connect(self._remove_link_item)
        link_scene.highlight_changed.connect(lambda _source: self.viewport().update())

        for node in link_scene.nodes.values():
            self._add_node_item(node)
        for link in link_scene.registry.all():
            self._add_link_item(link)

    # =========================================================================
    # Items
    # =========================================================================

    def _add_node_item(self, node: Node) -> None:
        item = NodeItem(node, on_moved=self._on_node_moved)
        self.scene().addItem(item)
        self.node_items[node.node_id] = item

    def _remove_node_item(self, node: Node) -> None:
        item = self.node_items.pop(node.node_id, None)
        if item is not None:
            self.scene().removeItem(item)

    def _add_link_item(self, link: Link) -> None:
        item = LinkItem(link, self.style)
        self.scene().addItem(item)
        self.link_items[link.link_id] = item

    def _remove_link_item(self, link: Link) -> None:
        item = self.link_items.pop(link.link_id, None)
        if item is not None:
            self.scene().removeItem(item)

    def _on_node_moved(self, node: Node) -> None:
        for link in node.attached_links():
            item = self.link_items.get(link.link_id)
            if item is not None:
                item.sync()

    def _sync_active(self) -> None:
        link = self.link_scene.active_link
        if link is None:
            return
        item = self.link_items.get(link.link_id)
        if item is not None:
            item.sync()

    # =========================================================================
    # Pointer Events
    # =========================================================================

    def _scene_point(self, event: QMouseEvent) -> Point:
        pos = self.mapToScene(event.position().toPoint())
        return Point(pos.x(), pos.y())

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            if self.link_scene.press(self._scene_point(event)) is not None:
                self._sync_active()
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if self.link_scene.active_link is not None:
            self.link_scene.move(self._scene_point(event))
            self._sync_active()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        link = self.link_scene.active_link
        if link is not None and event.button() == Qt.MouseButton.LeftButton:
            self.link_scene.release(self._scene_point(event))
            item = self.link_items.get(link.link_id)
            if item is not None:
                item.sync()
            self.viewport().update()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Escape and self.link_scene.active_link is not None:
            self.link_scene.cancel_drag()
            self.viewport().update()
            return
        if event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            for item in list(self.link_items.values()):
                if item.isSelected():
                    item.link.destroy()
            return
        super().keyPressEvent(event)
