# -*- coding: utf-8 -*-
"""
Node - Owner of endpoints.

Nodes are the strong owners of their endpoints. Sinks are laid out down
the left edge and sources down the right edge, below the header.

Example:
    node = Node("Add", name="add1")
    node.add_sink("a", data_type="int")
    node.add_source("result", data_type="int")
    node.position = Point(100, 40)
"""
from typing import Dict, List, Optional, Set, TYPE_CHECKING
from uuid import uuid4

from loguru import logger

from .endpoint import ANY_TYPE, AcceptPredicate, Endpoint, EndpointDirection
from .errors import DanglingReferenceViolation
from .geometry import Point

if TYPE_CHECKING:
    from .link import Link


class Node:
    """
    A node carrying source and sink endpoints.

    Attributes:
        node_id: Unique identifier for this node instance
        type_name: Template type the node was created from
        name: Display name
        stage: Free-form pipeline stage label
        position: Top-left corner in scene coordinates
    """

    # Layout constants
    HEADER_HEIGHT = 24
    ENDPOINT_SPACING = 20
    ENDPOINT_OFFSET = 12
    WIDTH = 120

    def __init__(
        self,
        type_name: str,
        name: str = "",
        stage: str = "",
        position: Point = Point(),
        node_id: Optional[str] = None
    ):
        self.node_id = node_id or str(uuid4())
        self.type_name = type_name
        self.name = name or type_name
        self.stage = stage
        self.position = position
        self._sources: Dict[str, Endpoint] = {}
        self._sinks: Dict[str, Endpoint] = {}
        self._disposed = False

    # =========================================================================
    # Endpoint Management
    # =========================================================================

    def add_endpoint(self, endpoint: Endpoint) -> Endpoint:
        """
        Take ownership of ``endpoint``.

        Returns:
            The added endpoint (for chaining)

        Raises:
            ValueError: If an endpoint with the same name and direction exists
        """
        table = self._sources if endpoint.is_source else self._sinks
        if endpoint.name in table:
            raise ValueError(
                f"{self!r} already has a {endpoint.direction.value} named '{endpoint.name}'"
            )
        endpoint.attach_to(self)
        table[endpoint.name] = endpoint
        return endpoint

    def add_source(
        self,
        name: str,
        data_type: str = ANY_TYPE,
        offset: Optional[Point] = None
    ) -> Endpoint:
        """Add an output endpoint on the right edge."""
        if offset is None:
            offset = Point(self.WIDTH, self._row_y(len(self._sources)))
        return self.add_endpoint(
            Endpoint(name, EndpointDirection.SOURCE, data_type=data_type, offset=offset)
        )

    def add_sink(
        self,
        name: str,
        data_type: str = ANY_TYPE,
        offset: Optional[Point] = None,
        accept_predicate: Optional[AcceptPredicate] = None
    ) -> Endpoint:
        """Add an input endpoint on the left edge."""
        if offset is None:
            offset = Point(0.0, self._row_y(len(self._sinks)))
        return self.add_endpoint(
            Endpoint(
                name, EndpointDirection.SINK, data_type=data_type,
                offset=offset, accept_predicate=accept_predicate
            )
        )

    def _row_y(self, index: int) -> float:
        return float(self.HEADER_HEIGHT + self.ENDPOINT_OFFSET + index * self.ENDPOINT_SPACING)

    def get_source(self, name: str) -> Optional[Endpoint]:
        """Get a source endpoint by name."""
        return self._sources.get(name)

    def get_sink(self, name: str) -> Optional[Endpoint]:
        """Get a sink endpoint by name."""
        return self._sinks.get(name)

    @property
    def sources(self) -> Dict[str, Endpoint]:
        return self._sources.copy()

    @property
    def sinks(self) -> Dict[str, Endpoint]:
        return self._sinks.copy()

    @property
    def endpoints(self) -> List[Endpoint]:
        return list(self._sinks.values()) + list(self._sources.values())

    @property
    def height(self) -> float:
        rows = max(len(self._sinks), len(self._sources), 1)
        return float(self.HEADER_HEIGHT + rows * self.ENDPOINT_SPACING + self.ENDPOINT_OFFSET)

    def attached_links(self) -> Set['Link']:
        """Every link touching one of this node's endpoints."""
        links: Set['Link'] = set()
        for endpoint in self.endpoints:
            links.update(endpoint.attached_links)
        return links

    # =========================================================================
    # Highlighting
    # =========================================================================

    def highlight(self, source: Endpoint) -> None:
        """Mark the sinks that would accept a link from ``source``."""
        for sink in self._sinks.values():
            sink.set_highlighted(sink.accepts(source))

    def unhighlight(self) -> None:
        for endpoint in self.endpoints:
            endpoint.set_highlighted(False)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """
        Release the endpoints.

        Raises:
            DanglingReferenceViolation: If any endpoint still holds links
        """
        if self._disposed:
            return
        remaining = self.attached_links()
        if remaining:
            raise DanglingReferenceViolation(
                f"{self!r} disposed with {len(remaining)} attached link(s); "
                f"destroy them first"
            )
        self._sources.clear()
        self._sinks.clear()
        self._disposed = True
        logger.debug(f"Disposed node: {self!r}")

    def __repr__(self) -> str:
        return f"<{self.type_name}({self.node_id[:8]})>"
