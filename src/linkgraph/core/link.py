# -*- coding: utf-8 -*-
"""
Link - A directed connection from a source endpoint to a sink endpoint.

A link is created when the user starts dragging from a source. Until it is
dropped on a compatible sink its free end follows the pointer. A bound
link can be grabbed again, which detaches its sink end until release.

State machine:

    PENDING  --drop on compatible sink-->  BOUND
    BOUND    --press on path----------->  DRAGGING
    DRAGGING --drop on compatible sink-->  BOUND (new sink)
    DRAGGING --drop elsewhere---------->  BOUND (previous sink restored)
    PENDING  --drop elsewhere---------->  DESTROYED or PENDING (orphan policy)
    any      --destroy()--------------->  DESTROYED

Example:
    link = Link.begin_drag(node_a.get_source("out"), registry)
    link.pointer_move(Point(180, 60))
    link.pointer_up(Point(200, 60), target=node_b.get_sink("in"))
    assert link.state is LinkState.BOUND
"""
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence
from uuid import uuid4

from loguru import logger

from src.core.config import OrphanDropPolicy
from src.core.events import Signal

from .endpoint import Endpoint
from .errors import (
    DanglingReferenceViolation, IncompatibleEndpoint, InsufficientWaypoints, LinkStateError
)
from .geometry import Path, PathSink, Point, fit_spline, simple_curve

if TYPE_CHECKING:
    from .registry import LinkRegistry


class LinkState(Enum):
    """Link lifecycle states."""
    PENDING = "pending"
    BOUND = "bound"
    DRAGGING = "dragging"
    DESTROYED = "destroyed"


class PointerEventType(Enum):
    PRESS = "press"
    MOVE = "move"
    RELEASE = "release"


@dataclass(frozen=True)
class PointerEvent:
    """
    Pointer input delivered to a link.

    Attributes:
        kind: PRESS, MOVE or RELEASE
        position: Pointer position in scene coordinates
        target: Endpoint under the pointer, resolved by the editor (RELEASE only)
    """
    kind: PointerEventType
    position: Point
    target: Optional[Endpoint] = None


@dataclass(frozen=True)
class StateTransition:
    """Outcome of an event: the state before and after it."""
    previous: LinkState
    current: LinkState
    event: Optional[PointerEventType] = None

    @property
    def changed(self) -> bool:
        return self.previous is not self.current


class Link:
    """
    Directed connection, or a connection in progress.

    The link holds its endpoints through weak references; endpoint
    positions are read on demand, so a bound path always follows the nodes.

    Attributes:
        link_id: Unique identifier
        is_selected: Selection flag read by the renderer
        drag_started: Signal(link) emitted when a bound link is grabbed
        drag_finished: Signal(link) emitted on release, before the drop is resolved
        state_changed: Signal(link, StateTransition)
    """

    # Links render beneath nodes
    Z_VALUE = -1

    VALID_TRANSITIONS: Dict[LinkState, List[LinkState]] = {
        LinkState.PENDING: [LinkState.BOUND, LinkState.DESTROYED],
        LinkState.BOUND: [LinkState.DRAGGING, LinkState.PENDING, LinkState.DESTROYED],
        LinkState.DRAGGING: [LinkState.BOUND, LinkState.PENDING, LinkState.DESTROYED],
        LinkState.DESTROYED: [],
    }

    def __init__(
        self,
        source: Endpoint,
        registry: Optional['LinkRegistry'] = None,
        orphan_policy: OrphanDropPolicy = OrphanDropPolicy.DESTROY,
        link_id: Optional[str] = None
    ):
        """
        Create a pending link leaving ``source``.

        Prefer ``Link.begin_drag``; it is the entry point used by editors.

        Raises:
            IncompatibleEndpoint: If ``source`` is not a source endpoint
        """
        if not source.is_source:
            raise IncompatibleEndpoint(f"Links must start at a source, got {source!r}")

        self.link_id = link_id or str(uuid4())
        self.orphan_policy = OrphanDropPolicy(orphan_policy)
        self.is_selected = False

        self.drag_started = Signal("LinkDragStarted")
        self.drag_finished = Signal("LinkDragFinished")
        self.state_changed = Signal("LinkStateChanged")

        self._state = LinkState.PENDING
        self._source_ref = weakref.ref(source)
        self._sink_ref: Optional[weakref.ReferenceType] = None
        self._previous_sink_ref: Optional[weakref.ReferenceType] = None
        self._registry = registry
        self._free_end: Optional[Point] = source.position
        self._route: List[Point] = []
        self._tension = 0.5
        self._path = simple_curve(self._free_end, self._free_end)

        source.connect(self)
        if registry is not None:
            registry.add(self)
        logger.debug(f"Link created: {self!r}")

    @classmethod
    def begin_drag(
        cls,
        source: Endpoint,
        registry: Optional['LinkRegistry'] = None,
        orphan_policy: OrphanDropPolicy = OrphanDropPolicy.DESTROY
    ) -> 'Link':
        """Start a new link at ``source``; it follows the pointer until dropped."""
        return cls(source, registry=registry, orphan_policy=orphan_policy)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> LinkState:
        return self._state

    @property
    def source(self) -> Endpoint:
        """
        The source endpoint.

        Raises:
            DanglingReferenceViolation: If the endpoint was released while the link lived
        """
        source = self._source_ref()
        if source is None:
            raise DanglingReferenceViolation(f"{self!r} outlived its source endpoint")
        return source

    @property
    def sink(self) -> Optional[Endpoint]:
        """The bound sink, None while the end is free."""
        return self._sink_ref() if self._sink_ref is not None else None

    @property
    def previous_sink(self) -> Optional[Endpoint]:
        """Sink the link was bound to before the current drag."""
        return self._previous_sink_ref() if self._previous_sink_ref is not None else None

    @property
    def free_end(self) -> Optional[Point]:
        """Pointer-tracking end while unbound."""
        return self._free_end

    @property
    def is_bound(self) -> bool:
        return self._state is LinkState.BOUND

    @property
    def is_connected(self) -> bool:
        """True while either end is registered on an endpoint."""
        if self._state is LinkState.DESTROYED:
            return False
        return self._source_ref() is not None or self.sink is not None

    @property
    def route(self) -> List[Point]:
        return list(self._route)

    @property
    def path(self) -> Path:
        """Current path; recomputed from endpoint positions while bound."""
        if self._state is LinkState.BOUND:
            self.refresh_path()
        return self._path

    # =========================================================================
    # Transitions
    # =========================================================================

    def can_transition(self, target: LinkState) -> bool:
        return target in self.VALID_TRANSITIONS.get(self._state, [])

    def _transition(
        self,
        target: LinkState,
        event: Optional[PointerEventType] = None
    ) -> StateTransition:
        if not self.can_transition(target):
            raise LinkStateError(
                f"Invalid link transition: {self._state.value} -> {target.value}"
            )
        transition = StateTransition(self._state, target, event)
        self._state = target
        logger.debug(f"{self!r}: {transition.previous.value} -> {target.value}")
        self.state_changed.emit(self, transition)
        return transition

    def _require(self, *states: LinkState, action: str) -> None:
        if self._state not in states:
            raise LinkStateError(f"Cannot {action} a {self._state.value} link")

    def _unchanged(self, event: Optional[PointerEventType] = None) -> StateTransition:
        return StateTransition(self._state, self._state, event)

    # =========================================================================
    # Pointer Handling
    # =========================================================================

    def pointer_move(self, position: Point) -> StateTransition:
        """Move the free end to ``position``."""
        self._require(LinkState.PENDING, LinkState.DRAGGING, action="move")
        self._free_end = position
        self.refresh_path()
        return self._unchanged(PointerEventType.MOVE)

    def pointer_down(self, position: Point) -> StateTransition:
        """
        Grab a bound link: detach its sink end and let it follow the pointer.

        Emits drag_started so the editor can highlight compatible sinks.
        """
        self._require(LinkState.BOUND, action="grab")
        sink = self.sink
        self._previous_sink_ref = self._sink_ref
        self._sink_ref = None
        if sink is not None:
            sink.disconnect(self)
        self._free_end = position
        self.is_selected = True
        self.refresh_path()
        transition = self._transition(LinkState.DRAGGING, PointerEventType.PRESS)
        self.drag_started.emit(self)
        return transition

    def pointer_up(self, position: Point, target: Optional[Endpoint] = None) -> StateTransition:
        """
        Drop the free end at ``position``.

        Args:
            position: Release position
            target: Endpoint under the pointer, if any

        A compatible sink binds the link. Otherwise a grabbed link returns
        to the sink it had, and a link that was never bound follows the
        orphan policy.
        """
        self._require(LinkState.PENDING, LinkState.DRAGGING, action="drop")
        previous = self._state
        self.drag_finished.emit(self)

        if target is not None:
            if target.is_sink and target.accepts(self.source):
                self._bind(target, PointerEventType.RELEASE)
                return StateTransition(previous, self._state, PointerEventType.RELEASE)
            logger.debug(f"{self!r}: {target!r} rejected the drop")

        restore = self.previous_sink
        if restore is not None and not _occupied_by_other(restore, self):
            self._bind(restore, PointerEventType.RELEASE)
            return StateTransition(previous, self._state, PointerEventType.RELEASE)

        self._apply_orphan_policy(position, PointerEventType.RELEASE)
        return StateTransition(previous, self._state, PointerEventType.RELEASE)

    def handle_event(self, event: PointerEvent) -> StateTransition:
        """Dispatch a pointer event to the matching operation."""
        if event.kind is PointerEventType.PRESS:
            return self.pointer_down(event.position)
        if event.kind is PointerEventType.MOVE:
            return self.pointer_move(event.position)
        return self.pointer_up(event.position, event.target)

    # =========================================================================
    # Binding
    # =========================================================================

    def connect_to(self, sink: Endpoint) -> StateTransition:
        """
        Bind the free end to ``sink`` programmatically.

        Raises:
            IncompatibleEndpoint: If ``sink`` does not accept this link's source
            LinkStateError: If the link is not pending or dragging
        """
        self._require(LinkState.PENDING, LinkState.DRAGGING, action="connect")
        if not sink.is_sink or not sink.accepts(self.source):
            raise IncompatibleEndpoint(f"{sink!r} does not accept {self.source!r}")
        previous = self._state
        self._bind(sink)
        return StateTransition(previous, self._state)

    def _bind(self, sink: Endpoint, event: Optional[PointerEventType] = None) -> None:
        self._sink_ref = weakref.ref(sink)
        self._previous_sink_ref = None
        sink.connect(self)
        self._free_end = None
        self._transition(LinkState.BOUND, event)
        self.refresh_path()

    def release_sink(self, sink: Endpoint) -> None:
        """
        Called by ``sink`` when another link takes it over.

        The freed end stays where the sink was, then the orphan policy applies.
        """
        if self.sink is not sink:
            return
        position = sink.position
        self._sink_ref = None
        self._previous_sink_ref = None
        logger.debug(f"{self!r}: lost {sink!r} to another link")
        self._apply_orphan_policy(position)

    def _apply_orphan_policy(
        self,
        position: Point,
        event: Optional[PointerEventType] = None
    ) -> None:
        self._previous_sink_ref = None
        if self.orphan_policy is OrphanDropPolicy.DESTROY:
            self.destroy()
            return
        self._free_end = position
        if self._state is not LinkState.PENDING:
            self._transition(LinkState.PENDING, event)
        self.refresh_path()

    # =========================================================================
    # Destruction
    # =========================================================================

    def destroy(self) -> StateTransition:
        """
        Unregister from both endpoints and the registry. Idempotent.
        """
        if self._state is LinkState.DESTROYED:
            return self._unchanged()

        source = self._source_ref()
        if source is not None:
            source.disconnect(self)
        sink = self.sink
        if sink is not None:
            sink.disconnect(self)
        self._sink_ref = None
        self._previous_sink_ref = None
        self.is_selected = False

        if self._registry is not None:
            self._registry.remove(self)
        return self._transition(LinkState.DESTROYED)

    # =========================================================================
    # Geometry & Rendering
    # =========================================================================

    def route_through(self, waypoints: Sequence[Point], tension: float = 0.5) -> None:
        """
        Route the bound path through intermediate waypoints.

        Raises:
            InsufficientWaypoints: If no intermediate waypoint is given
            ValueError: If tension is outside [0, 1]
        """
        points = list(waypoints)
        if not points:
            raise InsufficientWaypoints(len(points) + 2)
        if not 0.0 <= tension <= 1.0:
            raise ValueError(f"tension must lie in [0, 1], got {tension}")
        self._route = points
        self._tension = tension
        if self._state is LinkState.BOUND:
            self.refresh_path()

    def clear_route(self) -> None:
        self._route = []
        if self._state is LinkState.BOUND:
            self.refresh_path()

    def refresh_path(self) -> Path:
        """Recompute the path from the current endpoint and free-end positions."""
        if self._state is LinkState.DESTROYED:
            return self._path
        start = self.source.position
        sink = self.sink
        if sink is not None:
            end = sink.position
            if self._route:
                self._path = fit_spline([start, *self._route, end], self._tension)
            else:
                self._path = simple_curve(start, end)
        else:
            self._path = simple_curve(start, self._free_end or start)
        return self._path

    def render(self, sink: PathSink) -> None:
        """Replay the current path into a rendering sink."""
        self.path.replay(sink)

    def __repr__(self) -> str:
        return f"<Link {self.link_id[:8]} {self._state.value}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Link):
            return False
        return self.link_id == other.link_id

    def __hash__(self) -> int:
        return hash(self.link_id)


def _occupied_by_other(sink: Endpoint, link: Link) -> bool:
    return any(other is not link for other in sink.attached_links)
