# -*- coding: utf-8 -*-
"""
LinkGraph Core - Links between node endpoints and their curve geometry.
"""

from .errors import (
    LinkGraphError,
    IncompatibleEndpoint,
    InsufficientWaypoints,
    DanglingReferenceViolation,
    LinkStateError,
)
from .geometry import Point, Path, PathSink, simple_curve, compute_control_points, fit_spline
from .endpoint import Endpoint, EndpointDirection, default_accepts
from .node import Node
from .link import Link, LinkState, PointerEvent, PointerEventType, StateTransition
from .registry import LinkRegistry
from .templates import EndpointInfo, NodeTemplate, NodeTemplateRegistry
from .scene import LinkScene

__all__ = [
    "LinkGraphError",
    "IncompatibleEndpoint",
    "InsufficientWaypoints",
    "DanglingReferenceViolation",
    "LinkStateError",
    "Point",
    "Path",
    "PathSink",
    "simple_curve",
    "compute_control_points",
    "fit_spline",
    "Endpoint",
    "EndpointDirection",
    "default_accepts",
    "Node",
    "Link",
    "LinkState",
    "PointerEvent",
    "PointerEventType",
    "StateTransition",
    "LinkRegistry",
    "EndpointInfo",
    "NodeTemplate",
    "NodeTemplateRegistry",
    "LinkScene",
]
