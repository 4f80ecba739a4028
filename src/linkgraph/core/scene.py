# -*- coding: utf-8 -*-
"""
LinkScene - Editor-side owner of nodes and links.

Resolves what lies under the pointer, drives the link being dragged,
broadcasts compatible-sink highlighting while a drag is in progress and
enforces destruction order when nodes are removed.

Example:
    scene = LinkScene(templates)
    a = scene.create_node("Number", position=Point(0, 0))
    b = scene.create_node("Print", position=Point(300, 0))

    scene.press(a.get_source("value").position)
    scene.move(Point(250, 40))
    scene.release(b.get_sink("message").position)
"""
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from src.core.config import RoutingSettings
from src.core.events import Signal

from .endpoint import Endpoint, EndpointDirection
from .errors import IncompatibleEndpoint
from .geometry import Point
from .link import Link, LinkState, StateTransition
from .node import Node
from .registry import LinkRegistry
from .templates import NodeTemplateRegistry


HitTest = Callable[[Point], Optional[Endpoint]]


class LinkScene:
    """
    Nodes, links and the pointer interaction between them.

    Attributes:
        templates: Injected node template registry
        settings: Routing settings (hit radius, pick tolerance, orphan policy)
        registry: Registry owning every live link
        nodes: Dictionary of node_id -> Node
        highlight_changed: Signal(source or None) after highlighting changes
        node_added: Signal(node)
        node_removed: Signal(node)
    """

    def __init__(
        self,
        templates: Optional[NodeTemplateRegistry] = None,
        settings: Optional[RoutingSettings] = None,
        hit_test: Optional[HitTest] = None
    ):
        self.templates = templates if templates is not None else NodeTemplateRegistry()
        self.settings = settings if settings is not None else RoutingSettings()
        self.registry = LinkRegistry()
        self.nodes: Dict[str, Node] = {}
        self._hit_test = hit_test
        self._active: Optional[Link] = None

        self.highlight_changed = Signal("HighlightChanged")
        self.node_added = Signal("NodeAdded")
        self.node_removed = Signal("NodeRemoved")

        self.registry.link_added.connect(self._watch_link)

    # =========================================================================
    # Node Management
    # =========================================================================

    def add_node(self, node: Node) -> Node:
        self.nodes[node.node_id] = node
        logger.debug(f"Added node: {node}")
        self.node_added.emit(node)
        return node

    def create_node(
        self,
        type_name: str,
        name: str = "",
        stage: str = "",
        position: Point = Point()
    ) -> Optional[Node]:
        """Instantiate a template and add it. Returns None for unknown types."""
        node = self.templates.create_node(type_name, name=name, stage=stage, position=position)
        if node is None:
            return None
        return self.add_node(node)

    def remove_node(self, node: Node) -> None:
        """
        Destroy every link touching ``node`` then dispose it.

        Links being dragged away from one of the node's sinks are destroyed
        too, since they could otherwise snap back to a dead endpoint.
        """
        if self.nodes.get(node.node_id) is not node:
            return

        endpoints = node.endpoints
        doomed = set(node.attached_links())
        for link in self.registry.all():
            previous = link.previous_sink
            if previous is not None and any(previous is e for e in endpoints):
                doomed.add(link)
        for link in doomed:
            link.destroy()
        if self._active is not None and self._active in doomed:
            self._active = None

        del self.nodes[node.node_id]
        node.dispose()
        logger.debug(f"Removed node: {node} ({len(doomed)} link(s) destroyed)")
        self.node_removed.emit(node)

    def clear(self) -> None:
        """Destroy all links, then dispose all nodes."""
        self._active = None
        self.registry.clear()
        for node in list(self.nodes.values()):
            self.remove_node(node)

    @property
    def links(self) -> List[Link]:
        return list(self.registry.all())

    # =========================================================================
    # Hit Testing
    # =========================================================================

    def endpoint_at(
        self,
        position: Point,
        direction: Optional[EndpointDirection] = None
    ) -> Optional[Endpoint]:
        """
        Endpoint under ``position``, nearest first, within the hit radius.

        Args:
            position: Scene position
            direction: Only consider endpoints of this direction
        """
        if self._hit_test is not None:
            endpoint = self._hit_test(position)
            if endpoint is not None and direction is not None and endpoint.direction is not direction:
                return None
            return endpoint

        best: Optional[Endpoint] = None
        best_distance = self.settings.hit_radius
        for node in self.nodes.values():
            for endpoint in node.endpoints:
                if direction is not None and endpoint.direction is not direction:
                    continue
                distance = endpoint.position.distance_to(position)
                if distance <= best_distance:
                    best, best_distance = endpoint, distance
        return best

    def link_at(self, position: Point) -> Optional[Link]:
        """Bound link whose path passes within the pick tolerance of ``position``."""
        best: Optional[Link] = None
        best_distance = self.settings.pick_tolerance
        for link in self.registry.all():
            if not link.is_bound:
                continue
            distance = link.path.distance_to(position, steps=self.settings.curve_samples)
            if distance <= best_distance:
                best, best_distance = link, distance
        return best

    def pending_link_at(self, position: Point) -> Optional[Link]:
        """Pending link whose free end lies within the hit radius of ``position``."""
        best: Optional[Link] = None
        best_distance = self.settings.hit_radius
        for link in self.registry.all():
            if link.state is not LinkState.PENDING or link.free_end is None:
                continue
            distance = link.free_end.distance_to(position)
            if distance <= best_distance:
                best, best_distance = link, distance
        return best

    # =========================================================================
    # Interaction
    # =========================================================================

    @property
    def active_link(self) -> Optional[Link]:
        """The link currently following the pointer."""
        return self._active

    def connect(self, source: Endpoint, sink: Endpoint) -> Link:
        """
        Create a bound link without pointer interaction.

        Raises:
            IncompatibleEndpoint: If the endpoints cannot be linked
        """
        link = Link.begin_drag(source, self.registry, self.settings.orphan_drop_policy)
        try:
            link.connect_to(sink)
        except IncompatibleEndpoint:
            link.destroy()
            raise
        return link

    def route_link(
        self,
        link: Link,
        waypoints: Sequence[Point],
        tension: Optional[float] = None
    ) -> None:
        """Route ``link`` through waypoints, with the configured tension by default."""
        if tension is None:
            tension = self.settings.spline_tension
        link.route_through(waypoints, tension)

    def begin_drag(self, source: Endpoint) -> Link:
        """Start a new link at ``source``."""
        link = Link.begin_drag(source, self.registry, self.settings.orphan_drop_policy)
        self._active = link
        self.highlight_compatible(source)
        return link

    def press(self, position: Point) -> Optional[Link]:
        """
        Pointer pressed: start a new link from a source endpoint, pick up a
        pending link by its free end, or grab a bound link under the pointer.
        """
        if self._active is not None:
            return self._active

        endpoint = self.endpoint_at(position)
        if endpoint is not None and endpoint.is_source:
            return self.begin_drag(endpoint)

        pending = self.pending_link_at(position)
        if pending is not None:
            self._active = pending
            self.highlight_compatible(pending.source)
            return pending

        link = self.link_at(position)
        if link is not None:
            link.pointer_down(position)
            self._active = link
            return link
        return None

    def move(self, position: Point) -> Optional[StateTransition]:
        if self._active is None:
            return None
        return self._active.pointer_move(position)

    def release(self, position: Point) -> Optional[StateTransition]:
        """Drop the active link on whatever endpoint lies under ``position``."""
        link = self._active
        if link is None:
            return None
        self._active = None
        transition = link.pointer_up(position, self.endpoint_at(position, EndpointDirection.SINK))
        # New drags are not grabbed links, so drag_finished is not enough here
        self.clear_highlight()
        return transition

    def cancel_drag(self) -> Optional[StateTransition]:
        """Release the active link where it is, with no drop target."""
        link = self._active
        if link is None:
            return None
        self._active = None
        transition = link.pointer_up(link.free_end or link.source.position, None)
        self.clear_highlight()
        return transition

    # =========================================================================
    # Highlighting
    # =========================================================================

    def highlight_compatible(self, source: Endpoint) -> None:
        """Ask every node to mark the sinks accepting ``source``."""
        for node in self.nodes.values():
            node.highlight(source)
        self.highlight_changed.emit(source)

    def clear_highlight(self) -> None:
        for node in self.nodes.values():
            node.unhighlight()
        self.highlight_changed.emit(None)

    def _watch_link(self, link: Link) -> None:
        link.drag_started.connect(self._on_drag_started)
        link.drag_finished.connect(self._on_drag_finished)
        link.state_changed.connect(self._on_state_changed)

    def _on_drag_started(self, link: Link) -> None:
        self.highlight_compatible(link.source)

    def _on_drag_finished(self, link: Link) -> None:
        self.clear_highlight()

    def _on_state_changed(self, link: Link, transition: StateTransition) -> None:
        # The active link may be destroyed outside the pointer flow
        if transition.current is LinkState.DESTROYED and link is self._active:
            self._active = None
            self.clear_highlight()

    def __repr__(self) -> str:
        return f"<LinkScene nodes={len(self.nodes)} links={len(self.registry)}>"
