# -*- coding: utf-8 -*-
"""
Tests for LinkGraph geometry

Tests cover:
- Point arithmetic
- simple_curve control points and degenerate input
- Control point construction and spline fitting
- Path evaluation, flattening, picking and replay
"""
import pytest

from src.linkgraph.core.errors import InsufficientWaypoints
from src.linkgraph.core.geometry import (
    CubicTo, LineTo, MoveTo, Path, Point, QuadTo,
    compute_control_points, fit_spline, simple_curve,
)


class RecordingSink:
    """PathSink that records calls."""

    def __init__(self):
        self.calls = []

    def move_to(self, point):
        self.calls.append(("move", point))

    def line_to(self, point):
        self.calls.append(("line", point))

    def quad_to(self, control, point):
        self.calls.append(("quad", control, point))

    def cubic_to(self, control1, control2, point):
        self.calls.append(("cubic", control1, control2, point))


# =============================================================================
# Point
# =============================================================================

class TestPoint:

    def test_arithmetic(self):
        a = Point(1, 2)
        b = Point(4, 6)
        assert a + b == Point(5, 8)
        assert b - a == Point(3, 4)
        assert a * 2 == Point(2, 4)
        assert 2 * a == Point(2, 4)

    def test_length_and_distance(self):
        assert Point(3, 4).length() == 5.0
        assert Point(1, 1).distance_to(Point(4, 5)) == 5.0

    def test_value_semantics(self):
        """Points are compared by value and usable as dict keys."""
        assert Point(1.5, 2.5) == Point(1.5, 2.5)
        assert len({Point(0, 0), Point(0, 0)}) == 1


# =============================================================================
# simple_curve
# =============================================================================

class TestSimpleCurve:

    @pytest.mark.parametrize("start,end", [
        (Point(0, 0), Point(200, 80)),
        (Point(300, 50), Point(-40, 120)),
        (Point(-10.5, 7.25), Point(-10.5, -90)),
    ])
    def test_starts_and_ends_at_points(self, start, end):
        path = simple_curve(start, end)
        assert path.start == start
        assert path.end == end

    def test_single_cubic_segment(self):
        path = simple_curve(Point(0, 0), Point(100, 50))
        assert len(path.segments) == 1
        assert isinstance(path.segments[0], CubicTo)

    def test_control_points(self):
        """c1 leaves horizontally, c2 sits at the full vertical offset."""
        segment = simple_curve(Point(10, 20), Point(110, 70)).segments[0]
        assert segment.control1 == Point(60, 20)
        assert segment.control2 == Point(60, 70)

    def test_degenerate_zero_extent(self):
        """Equal start and end give a zero-extent path without error."""
        a = Point(42, -7)
        path = simple_curve(a, a)
        assert path.start == a
        assert path.end == a
        assert path.extent() == (0.0, 0.0)


# =============================================================================
# Spline Fitting
# =============================================================================

class TestControlPoints:

    def test_symmetric_triple(self):
        ctrl1, ctrl2 = compute_control_points(Point(0, 0), Point(10, 0), Point(20, 0), 0.5)
        assert ctrl1 == Point(5, 0)
        assert ctrl2 == Point(15, 0)

    def test_chord_length_weighting(self):
        """The longer chord side gets the longer tangent arm."""
        p0, p1, p2 = Point(0, 0), Point(30, 0), Point(40, 0)
        ctrl1, ctrl2 = compute_control_points(p0, p1, p2, 1.0)
        # d01=30, d12=10 -> fa=0.75, fb=0.25, chord=(40, 0)
        assert ctrl1 == Point(0, 0)
        assert ctrl2 == Point(40, 0)

    def test_coincident_points(self):
        p = Point(5, 5)
        assert compute_control_points(p, p, p, 0.5) == (p, p)

    def test_zero_tension(self):
        p1 = Point(10, 10)
        assert compute_control_points(Point(0, 0), p1, Point(20, 0), 0.0) == (p1, p1)


class TestFitSpline:

    WAYPOINTS = [Point(0, 0), Point(50, 40), Point(100, 10), Point(160, 60), Point(220, 0)]

    @pytest.mark.parametrize("count", [3, 4, 5])
    def test_segment_count_and_endpoints(self, count):
        waypoints = self.WAYPOINTS[:count]
        path = fit_spline(waypoints, 0.5)
        assert len(path.segments) == count - 1
        assert path.start == waypoints[0]
        assert path.end == waypoints[-1]

    def test_segments_pass_through_waypoints(self):
        path = fit_spline(self.WAYPOINTS, 0.5)
        assert [s.end for s in path.segments] == self.WAYPOINTS[1:]

    def test_quadratic_first_and_last(self):
        path = fit_spline(self.WAYPOINTS, 0.5)
        kinds = [type(s) for s in path.segments]
        assert kinds == [QuadTo, CubicTo, CubicTo, QuadTo]

    def test_uses_computed_control_points(self):
        p = self.WAYPOINTS[:4]
        first = compute_control_points(p[0], p[1], p[2], 0.5)
        second = compute_control_points(p[1], p[2], p[3], 0.5)
        quad_in, cubic, quad_out = fit_spline(p, 0.5).segments

        assert quad_in.control == first[0]
        assert cubic.control1 == first[1]
        assert cubic.control2 == second[0]
        assert quad_out.control == second[1]

    def test_zero_tension_is_straight(self):
        """Controls on the waypoints: every segment is a straight line."""
        path = fit_spline(self.WAYPOINTS[:3], 0.0)
        assert path.segments[0].control == self.WAYPOINTS[1]
        assert path.segments[1].control == self.WAYPOINTS[1]
        # On the chord from (0, 0) to (50, 40)
        mid = path.point_at(0, 0.5)
        assert mid == Point(37.5, 30)

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_insufficient_waypoints(self, count):
        with pytest.raises(InsufficientWaypoints) as excinfo:
            fit_spline(self.WAYPOINTS[:count], 0.5)
        assert excinfo.value.count == count

    @pytest.mark.parametrize("tension", [-0.1, 1.5])
    def test_tension_out_of_range(self, tension):
        with pytest.raises(ValueError):
            fit_spline(self.WAYPOINTS, tension)

    def test_accepts_generator(self):
        path = fit_spline(p for p in self.WAYPOINTS[:3])
        assert len(path) == 2


# =============================================================================
# Path
# =============================================================================

class TestPath:

    def test_builder(self):
        path = Path(Point(0, 0)).line_to(Point(10, 0)).quad_to(Point(15, 5), Point(20, 0))
        assert path.elements[0] == MoveTo(Point(0, 0))
        assert path.segments == (LineTo(Point(10, 0)), QuadTo(Point(15, 5), Point(20, 0)))
        assert not path.is_empty

    def test_empty_path(self):
        path = Path(Point(3, 3))
        assert path.is_empty
        assert path.start == path.end == Point(3, 3)
        assert path.flatten() == [Point(3, 3)]
        assert path.distance_to(Point(6, 7)) == 5.0

    def test_point_at(self):
        path = Path(Point(0, 0)).quad_to(Point(10, 10), Point(20, 0))
        assert path.point_at(0, 0.0) == Point(0, 0)
        assert path.point_at(0, 0.5) == Point(10, 5)
        assert path.point_at(0, 1.0) == Point(20, 0)

    def test_point_at_out_of_range(self):
        with pytest.raises(IndexError):
            Path(Point(0, 0)).point_at(0, 0.5)

    def test_bounding_box_includes_controls(self):
        path = simple_curve(Point(0, 0), Point(100, 50))
        assert path.bounding_box() == (Point(0, 0), Point(100, 50))

    def test_flatten(self):
        path = simple_curve(Point(0, 0), Point(100, 50))
        points = path.flatten(steps=4)
        assert len(points) == 5
        assert points[0] == Point(0, 0)
        assert points[-1] == Point(100, 50)

    def test_flatten_rejects_zero_steps(self):
        with pytest.raises(ValueError):
            simple_curve(Point(0, 0), Point(1, 1)).flatten(steps=0)

    def test_distance_to(self):
        """A level curve lies on y = 0."""
        path = simple_curve(Point(0, 0), Point(100, 0))
        assert path.distance_to(Point(50, 10)) == pytest.approx(10.0)
        assert path.distance_to(Point(100, 0)) == pytest.approx(0.0)

    def test_replay(self):
        path = fit_spline([Point(0, 0), Point(10, 10), Point(20, 0)], 0.5)
        sink = RecordingSink()
        path.replay(sink)
        assert [call[0] for call in sink.calls] == ["move", "quad", "quad"]
        assert sink.calls[0][1] == Point(0, 0)
        assert sink.calls[-1][-1] == Point(20, 0)

    def test_equality(self):
        assert simple_curve(Point(0, 0), Point(5, 5)) == simple_curve(Point(0, 0), Point(5, 5))
        assert simple_curve(Point(0, 0), Point(5, 5)) != simple_curve(Point(0, 0), Point(5, 6))
