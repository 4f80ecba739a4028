# -*- coding: utf-8 -*-
"""
Endpoint - Attachment point for links on a node.

An endpoint is either a SOURCE (links leave from it, any number of them)
or a SINK (at most one incoming link at a time).

Endpoints do not own links: attached links are held by id in a
WeakValueDictionary, the Link Registry being their sole owner. Entries
vanish when a link is collected.

Example:
    out = Endpoint("result", EndpointDirection.SOURCE, data_type="int")
    inp = Endpoint("value", EndpointDirection.SINK, data_type="int")
    assert inp.accepts(out)
"""
import weakref
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional

from loguru import logger

from .errors import DanglingReferenceViolation
from .geometry import Point

if TYPE_CHECKING:
    from .link import Link
    from .node import Node


ANY_TYPE = "any"


class EndpointDirection(Enum):
    """Role of an endpoint: links flow from SOURCE to SINK."""
    SOURCE = "source"
    SINK = "sink"


AcceptPredicate = Callable[['Endpoint', 'Endpoint'], bool]


def default_accepts(sink: 'Endpoint', source: 'Endpoint') -> bool:
    """
    Default compatibility policy.

    A source may connect to a sink of another node when the data types
    match or either side is the ``"any"`` wildcard.
    """
    if sink.direction is not EndpointDirection.SINK:
        return False
    if source.direction is not EndpointDirection.SOURCE:
        return False
    if sink.node is not None and sink.node is source.node:
        return False
    if ANY_TYPE in (sink.data_type, source.data_type):
        return True
    return sink.data_type == source.data_type


class Endpoint:
    """
    One connectable attribute slot on a node.

    Attributes:
        name: Slot name, unique per node and direction
        direction: SOURCE or SINK
        data_type: Type tag checked by the accept predicate
        offset: Position relative to the owning node
        highlighted: Set while a drag is looking for compatible sinks
    """

    def __init__(
        self,
        name: str,
        direction: EndpointDirection,
        data_type: str = ANY_TYPE,
        offset: Point = Point(),
        accept_predicate: Optional[AcceptPredicate] = None
    ):
        self.name = name
        self.direction = direction
        self.data_type = data_type
        self.offset = offset
        self.highlighted = False
        self._accept_predicate = accept_predicate or default_accepts
        self._node_ref: Optional[weakref.ReferenceType] = None
        self._links: 'weakref.WeakValueDictionary[str, Link]' = weakref.WeakValueDictionary()

    # =========================================================================
    # Ownership
    # =========================================================================

    def attach_to(self, node: 'Node') -> None:
        """Record the owning node (weakly; the node owns the endpoint)."""
        self._node_ref = weakref.ref(node)

    @property
    def node(self) -> Optional['Node']:
        """Owning node, or None for a free-standing endpoint."""
        return self._node_ref() if self._node_ref is not None else None

    @property
    def is_source(self) -> bool:
        return self.direction is EndpointDirection.SOURCE

    @property
    def is_sink(self) -> bool:
        return self.direction is EndpointDirection.SINK

    @property
    def position(self) -> Point:
        """
        Absolute connector position.

        Raises:
            DanglingReferenceViolation: If the owning node is gone
        """
        if self._node_ref is None:
            return self.offset
        node = self._node_ref()
        if node is None:
            raise DanglingReferenceViolation(
                f"Endpoint '{self.name}' outlived its node"
            )
        return node.position + self.offset

    # =========================================================================
    # Link Management
    # =========================================================================

    @property
    def attached_links(self) -> List['Link']:
        """Live links attached to this endpoint."""
        return list(self._links.values())

    @property
    def is_occupied(self) -> bool:
        return bool(self.attached_links)

    def is_attached(self, link: 'Link') -> bool:
        return self._links.get(link.link_id) is link

    def connect(self, link: 'Link') -> None:
        """
        Register ``link`` on this endpoint.

        A sink holds a single link: an existing occupant is released from
        this sink first and the new link takes its place.
        """
        if self.is_attached(link):
            return

        if self.is_sink:
            for previous in self.attached_links:
                del self._links[previous.link_id]
                logger.debug(f"{self!r}: occupancy moves from {previous!r} to {link!r}")
                previous.release_sink(self)

        self._links[link.link_id] = link
        logger.debug(f"{self!r}: connected {link!r}")

    def disconnect(self, link: 'Link') -> None:
        """Remove ``link`` from this endpoint. No-op if it is not attached."""
        if self._links.pop(link.link_id, None) is not None:
            logger.debug(f"{self!r}: disconnected {link!r}")

    # =========================================================================
    # Compatibility
    # =========================================================================

    def accepts(self, candidate_source: 'Endpoint') -> bool:
        """Whether a link leaving ``candidate_source`` may end on this endpoint."""
        return bool(self._accept_predicate(self, candidate_source))

    def set_accept_predicate(self, predicate: Optional[AcceptPredicate]) -> None:
        """Install the type system's predicate (None restores the default)."""
        self._accept_predicate = predicate or default_accepts

    def set_highlighted(self, value: bool) -> None:
        self.highlighted = value

    def __repr__(self) -> str:
        node = self.node
        owner = node.node_id[:8] if node is not None else "?"
        return f"<Endpoint {owner}.{self.name} {self.direction.value}>"
