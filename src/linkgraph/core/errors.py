# -*- coding: utf-8 -*-
"""
Errors - Exception taxonomy for link routing.

IncompatibleEndpoint is normally recovered inside a drop; the other
errors are reported to the caller.
"""


class LinkGraphError(Exception):
    """Base class for all link routing errors."""
    pass


class IncompatibleEndpoint(LinkGraphError):
    """Raised when an endpoint cannot take part in the requested connection."""
    pass


class InsufficientWaypoints(LinkGraphError):
    """Raised when a spline is requested through fewer than 3 waypoints."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Spline fitting needs at least 3 waypoints, got {count}")


class DanglingReferenceViolation(LinkGraphError):
    """Raised when a node is disposed while links still reference its endpoints."""
    pass


class LinkStateError(LinkGraphError):
    """Raised for events that are not valid in the link's current state."""
    pass
