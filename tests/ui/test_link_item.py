# -*- coding: utf-8 -*-
"""
Tests for the Qt presentation: LinkItem, NodeItem and GraphView.
"""
import pytest
from PySide6.QtWidgets import QApplication, QGraphicsScene

from src.core.config import LinkStyleSettings
from src.linkgraph.core.geometry import Point, fit_spline, simple_curve
from src.linkgraph.core.link import Link
from src.linkgraph.ui.graph_view import GraphView
from src.linkgraph.ui.link_item import LinkItem, to_qpainter_path
from src.linkgraph.ui.node_item import NodeItem

app = QApplication.instance() or QApplication([])


class TestPathConversion:

    def test_simple_curve(self):
        qpath = to_qpainter_path(simple_curve(Point(0, 0), Point(100, 50)))
        # moveTo + one cubic (three elements)
        assert qpath.elementCount() == 4
        end = qpath.currentPosition()
        assert (end.x(), end.y()) == (100, 50)

    def test_spline(self):
        qpath = to_qpainter_path(fit_spline([Point(0, 0), Point(50, 40), Point(100, 0)]))
        # Qt stores quadratics as cubics
        assert qpath.elementCount() == 7
        start = qpath.elementAt(0)
        assert (start.x, start.y) == (0, 0)


class TestLinkItem:

    @pytest.fixture
    def bound_link(self, source_node, sink_node, registry):
        link = Link.begin_drag(source_node.get_source("value"), registry)
        link.connect_to(sink_node.get_sink("a"))
        return link

    def test_sits_below_nodes(self, bound_link):
        item = LinkItem(bound_link)
        assert item.zValue() == -1

    def test_path_follows_link(self, bound_link):
        item = LinkItem(bound_link)
        rect = item.path().boundingRect()
        assert rect.left() == pytest.approx(120)
        assert rect.right() == pytest.approx(300)

    def test_pens(self, bound_link):
        style = LinkStyleSettings()
        item = LinkItem(bound_link, style)
        scene = QGraphicsScene()
        scene.addItem(item)

        assert item.current_pen().width() == style.width
        assert item.current_pen().color().getRgb() == style.color

        item.setSelected(True)
        assert bound_link.is_selected
        assert item.current_pen().width() == style.selected_width
        assert item.current_pen().color().getRgb() == style.selected_color

    def test_sync_after_grab(self, bound_link):
        item = LinkItem(bound_link)
        scene = QGraphicsScene()
        scene.addItem(item)

        bound_link.pointer_down(Point(210, 36))
        bound_link.pointer_move(Point(200, 300))
        item.sync()

        assert item.isSelected()
        assert item.path().boundingRect().bottom() == pytest.approx(300)


class TestNodeItem:

    def test_moving_item_moves_node(self, sink_node):
        moved = []
        item = NodeItem(sink_node, on_moved=moved.append)
        scene = QGraphicsScene()
        scene.addItem(item)

        item.setPos(400, 20)

        assert sink_node.position == Point(400, 20)
        assert sink_node.get_sink("a").position == Point(400, 56)
        assert moved[-1] is sink_node

    def test_bounding_rect(self, sink_node):
        item = NodeItem(sink_node)
        assert item.boundingRect().height() == sink_node.height


class TestGraphView:

    @pytest.fixture
    def populated(self, scene):
        number = scene.create_node("Number", position=Point(0, 0))
        add = scene.create_node("Add", position=Point(300, 0))
        link = scene.connect(number.get_source("value"), add.get_sink("a"))
        return scene, number, add, link

    def test_items_for_existing_model(self, populated):
        scene, number, add, link = populated
        view = GraphView(scene)

        assert set(view.node_items) == {number.node_id, add.node_id}
        assert set(view.link_items) == {link.link_id}
        assert len(view.scene().items()) == 3

    def test_items_follow_signals(self, populated):
        scene, number, add, link = populated
        view = GraphView(scene)

        label = scene.create_node("Label", position=Point(300, 200))
        assert label.node_id in view.node_items

        scene.press(Point(120, 36))
        assert len(view.link_items) == 2

        scene.remove_node(add)
        assert link.link_id not in view.link_items
        assert add.node_id not in view.node_items

    def test_moving_node_item_reroutes_link(self, populated):
        scene, number, add, link = populated
        view = GraphView(scene)

        view.node_items[add.node_id].setPos(300, 100)

        rect = view.link_items[link.link_id].path().boundingRect()
        assert rect.bottom() == pytest.approx(136)
