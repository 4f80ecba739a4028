# -*- coding: utf-8 -*-
"""
LinkGraph UI - PySide6 graphics items and view.
"""
from .link_item import LinkItem, QPainterPathSink, to_qpainter_path
from .node_item import NodeItem
from .graph_view import GraphView

__all__ = ["LinkItem", "QPainterPathSink", "to_qpainter_path", "NodeItem", "GraphView"]
