# -*- coding: utf-8 -*-
"""
Geometry - Curve construction for link rendering.

Provides:
- Point: immutable 2D value type
- Path: move/line/quadratic/cubic elements in absolute coordinates
- simple_curve(): the single cubic "flowchart" curve between two points
- fit_spline(): smooth curve through ordered waypoints

Example:
    path = simple_curve(Point(0, 0), Point(200, 80))
    routed = fit_spline([Point(0, 0), Point(100, 40), Point(200, 0)], tension=0.5)
    routed.replay(painter_sink)
"""
import math
from dataclasses import dataclass
from typing import Iterator, List, Protocol, Sequence, Tuple, Union

from .errors import InsufficientWaypoints


@dataclass(frozen=True)
class Point:
    """A 2D coordinate. Value type, compared by coordinates."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> 'Point':
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def length(self) -> float:
        """Euclidean norm."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: 'Point') -> float:
        return (other - self).length()

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


# =============================================================================
# Path Elements
# =============================================================================

@dataclass(frozen=True)
class MoveTo:
    point: Point

    @property
    def end(self) -> Point:
        return self.point


@dataclass(frozen=True)
class LineTo:
    point: Point

    @property
    def end(self) -> Point:
        return self.point


@dataclass(frozen=True)
class QuadTo:
    control: Point
    point: Point

    @property
    def end(self) -> Point:
        return self.point


@dataclass(frozen=True)
class CubicTo:
    control1: Point
    control2: Point
    point: Point

    @property
    def end(self) -> Point:
        return self.point


Segment = Union[LineTo, QuadTo, CubicTo]


class PathSink(Protocol):
    """Anything a Path can be replayed into (a painter path, an SVG writer...)."""

    def move_to(self, point: Point) -> None: ...

    def line_to(self, point: Point) -> None: ...

    def quad_to(self, control: Point, point: Point) -> None: ...

    def cubic_to(self, control1: Point, control2: Point, point: Point) -> None: ...


class Path:
    """
    Ordered drawing elements with absolute coordinates.

    A path always begins with a MoveTo; every following element is a
    segment continuing from the previous end point.

    Attributes:
        elements: MoveTo followed by the segments
    """

    def __init__(self, start: Point):
        self._elements: List[Union[MoveTo, Segment]] = [MoveTo(start)]

    # Builder API mirrors a painter path
    def line_to(self, point: Point) -> 'Path':
        self._elements.append(LineTo(point))
        return self

    def quad_to(self, control: Point, point: Point) -> 'Path':
        self._elements.append(QuadTo(control, point))
        return self

    def cubic_to(self, control1: Point, control2: Point, point: Point) -> 'Path':
        self._elements.append(CubicTo(control1, control2, point))
        return self

    @property
    def elements(self) -> Tuple[Union[MoveTo, Segment], ...]:
        return tuple(self._elements)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        """Drawing segments, without the leading move."""
        return tuple(self._elements[1:])

    @property
    def start(self) -> Point:
        return self._elements[0].end

    @property
    def end(self) -> Point:
        return self._elements[-1].end

    @property
    def is_empty(self) -> bool:
        """True when the path has no drawing segments."""
        return len(self._elements) == 1

    def control_points(self) -> Iterator[Point]:
        """Every point of the control polygon, in order."""
        for element in self._elements:
            if isinstance(element, QuadTo):
                yield element.control
            elif isinstance(element, CubicTo):
                yield element.control1
                yield element.control2
            yield element.end

    def bounding_box(self) -> Tuple[Point, Point]:
        """
        Extent of the control polygon as (min corner, max corner).

        A Bezier curve lies inside the hull of its control points, so this
        always contains the rendered curve.
        """
        points = list(self.control_points())
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return Point(min(xs), min(ys)), Point(max(xs), max(ys))

    def extent(self) -> Tuple[float, float]:
        """Width and height of the bounding box."""
        low, high = self.bounding_box()
        return high.x - low.x, high.y - low.y

    def point_at(self, index: int, t: float) -> Point:
        """
        Evaluate segment ``index`` at parameter ``t`` in [0, 1].

        Args:
            index: Segment index (0 is the first segment after the move)
            t: Curve parameter

        Raises:
            IndexError: If the path has no such segment
        """
        if index < 0:
            raise IndexError(f"Segment index must be non-negative, got {index}")
        segment = self.segments[index]
        origin = self._elements[index].end
        u = 1.0 - t
        if isinstance(segment, LineTo):
            return origin * u + segment.point * t
        if isinstance(segment, QuadTo):
            return origin * (u * u) + segment.control * (2 * u * t) + segment.point * (t * t)
        return (
            origin * (u * u * u)
            + segment.control1 * (3 * u * u * t)
            + segment.control2 * (3 * u * t * t)
            + segment.point * (t * t * t)
        )

    def flatten(self, steps: int = 24) -> List[Point]:
        """Approximate the path as a polyline with ``steps`` samples per curved segment."""
        if steps < 1:
            raise ValueError("steps must be at least 1")
        points = [self.start]
        for index, segment in enumerate(self.segments):
            if isinstance(segment, LineTo):
                points.append(segment.point)
                continue
            for step in range(1, steps + 1):
                points.append(self.point_at(index, step / steps))
        return points

    def distance_to(self, point: Point, steps: int = 24) -> float:
        """Shortest distance from ``point`` to the flattened path."""
        polyline = self.flatten(steps)
        if len(polyline) == 1:
            return point.distance_to(polyline[0])
        return min(
            _distance_to_segment(point, a, b)
            for a, b in zip(polyline, polyline[1:])
        )

    def replay(self, sink: PathSink) -> None:
        """Feed every element into ``sink`` in order."""
        for element in self._elements:
            if isinstance(element, MoveTo):
                sink.move_to(element.point)
            elif isinstance(element, LineTo):
                sink.line_to(element.point)
            elif isinstance(element, QuadTo):
                sink.quad_to(element.control, element.point)
            else:
                sink.cubic_to(element.control1, element.control2, element.point)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return False
        return self._elements == other._elements

    def __len__(self) -> int:
        return len(self.segments)

    def __repr__(self) -> str:
        return f"<Path {self.start.as_tuple()} -> {self.end.as_tuple()} segments={len(self)}>"


def _distance_to_segment(p: Point, a: Point, b: Point) -> float:
    ab = b - a
    denom = ab.x * ab.x + ab.y * ab.y
    if denom == 0.0:
        return p.distance_to(a)
    t = ((p.x - a.x) * ab.x + (p.y - a.y) * ab.y) / denom
    t = max(0.0, min(1.0, t))
    return p.distance_to(a + ab * t)


# =============================================================================
# Curve Construction
# =============================================================================

def simple_curve(start: Point, end: Point) -> Path:
    """
    Single cubic Bezier from ``start`` to ``end``.

    The curve leaves the source horizontally and arrives having covered
    the full vertical offset, giving the flowchart S-shape. Equal points
    produce a zero-extent path.
    """
    dx = (end.x - start.x) * 0.5
    dy = end.y - start.y
    c1 = Point(start.x + dx, start.y)
    c2 = Point(start.x + dx, start.y + dy)
    return Path(start).cubic_to(c1, c2, end)


def compute_control_points(
    p0: Point,
    p1: Point,
    p2: Point,
    tension: float
) -> Tuple[Point, Point]:
    """
    Control points around ``p1`` for the triple (p0, p1, p2).

    The tangent at p1 is parallel to p2 - p0 and is split between the two
    sides in proportion to the chord lengths.

    Returns:
        (ctrl1, ctrl2): control point before p1 and after p1
    """
    d01 = p0.distance_to(p1)
    d12 = p1.distance_to(p2)
    total = d01 + d12
    if total == 0.0:
        return p1, p1

    fa = tension * d01 / total
    fb = tension * d12 / total   # fa + fb == tension

    chord = p2 - p0
    ctrl1 = p1 - chord * fa
    ctrl2 = p1 + chord * fb
    return ctrl1, ctrl2


def fit_spline(waypoints: Sequence[Point], tension: float = 0.5) -> Path:
    """
    Smooth path through ``waypoints``.

    The first and last segments are quadratic, every segment between two
    interior waypoints is cubic, so the result has ``len(waypoints) - 1``
    segments.

    Args:
        waypoints: At least 3 points, in drawing order
        tension: Curvature in [0, 1]; 0 places every control point on its
            waypoint, which draws straight segments

    Raises:
        InsufficientWaypoints: If fewer than 3 waypoints are given
        ValueError: If tension is outside [0, 1]
    """
    points = list(waypoints)
    if len(points) < 3:
        raise InsufficientWaypoints(len(points))
    if not 0.0 <= tension <= 1.0:
        raise ValueError(f"tension must lie in [0, 1], got {tension}")

    controls: List[Tuple[Point, Point]] = [
        compute_control_points(points[i], points[i + 1], points[i + 2], tension)
        for i in range(len(points) - 2)
    ]

    path = Path(points[0])
    path.quad_to(controls[0][0], points[1])
    for i in range(1, len(controls)):
        path.cubic_to(controls[i - 1][1], controls[i][0], points[i + 1])
    path.quad_to(controls[-1][1], points[-1])
    return path
