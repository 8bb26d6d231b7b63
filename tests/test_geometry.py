"""
Unit tests for geometric primitives, predicates and operations.
"""

import math

import numpy as np
import pytest

from viztransform.services.geometry import (
    DegenerateLineError,
    DegenerateVectorError,
    NoIntersectionError,
    Point,
    Vector,
    angle,
    are_parallel,
    are_perpendicular,
    are_same_line,
    are_same_point,
    distance,
    foot,
    intersection,
    length,
    line_from_point_and_slope,
    must,
    new_line,
    perpendicular,
    perpendicular_through,
    reflect,
    rotate,
    scale_vector,
    shift,
    shortest_vector,
    turn_angle,
)
from viztransform.services.tolerance import EPSILON, are_equal, is_zero


def P(x, y):
    return Point(x=float(x), y=float(y))


def L(ax, ay, bx, by):
    return new_line(P(ax, ay), P(bx, by))


class TestTolerance:
    """Tests for epsilon comparisons."""

    def test_equal_within_epsilon(self):
        """Values less than epsilon apart compare equal."""
        assert are_equal(1.0, 1.0 + EPSILON / 2)
        assert not are_equal(1.0, 1.0 + 2 * EPSILON)

    def test_is_zero(self):
        """Tiny magnitudes of either sign count as zero."""
        assert is_zero(0.0)
        assert is_zero(-EPSILON / 10)
        assert not is_zero(1e-3)

    def test_custom_epsilon(self):
        """A wider eps loosens the comparison."""
        assert are_equal(1.0, 1.01, eps=0.1)


class TestPoint:
    """Tests for Point dataclass."""

    def test_to_array(self):
        """Point converts to numpy array correctly."""
        arr = P(1.5, -2.5).to_array()
        assert isinstance(arr, np.ndarray)
        assert np.allclose(arr, [1.5, -2.5])

    def test_from_dict(self):
        """Point is built from a JSON-style dict."""
        p = Point.from_dict({"x": 3, "y": 4})
        assert p.x == 3.0
        assert p.y == 4.0

    def test_from_array(self):
        """Point is built from a numpy array."""
        p = Point.from_array(np.array([7.0, 8.0]))
        assert p == P(7, 8)

    def test_same_point(self):
        """Points closer than epsilon are the same point."""
        assert are_same_point(P(1, 1), P(1 + EPSILON / 2, 1))
        assert not are_same_point(P(1, 1), P(1.001, 1))


class TestLine:
    """Tests for Line construction."""

    def test_degenerate_line_rejected(self):
        """Two equal points don't determine a line."""
        with pytest.raises(DegenerateLineError) as exc_info:
            L(1, 1, 1, 1)
        assert exc_info.value.code == "DEGENERATE_LINE"

    def test_nearly_equal_points_rejected(self):
        """Points closer than epsilon don't determine a line either."""
        with pytest.raises(DegenerateLineError):
            new_line(P(0, 0), P(EPSILON / 10, 0))

    def test_custom_eps_widens_rejection(self):
        """A larger eps rejects points that EPSILON would accept."""
        assert new_line(P(0, 0), P(0.001, 0)).b.x == 0.001
        with pytest.raises(DegenerateLineError) as exc_info:
            new_line(P(0, 0), P(0.001, 0), eps=0.01)
        assert exc_info.value.details["eps"] == 0.01

    def test_from_point_and_slope(self):
        """Line through a point with the given rise over run."""
        l = line_from_point_and_slope(P(1, 1), rise=2, run=1)
        assert are_same_line(l, L(0, -1, 2, 3))

    def test_zero_slope_vector_rejected(self):
        """A zero slope vector has no direction."""
        with pytest.raises(DegenerateLineError):
            line_from_point_and_slope(P(1, 1), rise=0, run=0)

    def test_unit_direction(self):
        """unit_direction is the normalized a-to-b vector."""
        u = L(0, 0, 3, 4).unit_direction
        assert abs(u.i - 0.6) < 1e-12
        assert abs(u.j - 0.8) < 1e-12

    def test_standard_form_is_signed_distance(self):
        """m*x + n*y - c is the signed distance from the line."""
        m, n, c = L(0, 1, 5, 1).standard_form()
        assert abs(abs(m * 0 + n * 4 - c) - 3) < 1e-12


class TestMeasurement:
    """Tests for length, distance and scaling."""

    def test_length(self):
        """Length of a 3-4-5 vector."""
        assert length(Vector(i=3, j=4)) == 5.0

    def test_distance(self):
        """Distance between two points."""
        assert distance(P(1, 1), P(4, 5)) == 5.0

    def test_scale_vector(self):
        """Scaling keeps direction and sets the length."""
        v = scale_vector(Vector(i=3, j=4), 10)
        assert abs(v.i - 6) < 1e-12
        assert abs(v.j - 8) < 1e-12

    def test_scale_vector_negative_length_flips(self):
        """A negative length reverses the vector."""
        v = scale_vector(Vector(i=0, j=2), -1)
        assert abs(v.j + 1) < 1e-12

    def test_scale_zero_vector_fails(self):
        """The zero vector can't be scaled."""
        with pytest.raises(DegenerateVectorError):
            scale_vector(Vector(i=0, j=0), 1)


class TestPredicates:
    """Tests for parallel, perpendicular and same-line checks."""

    def test_parallel_ignores_direction_sign(self):
        """Opposite directions are still parallel."""
        assert are_parallel(L(0, 0, 1, 1), L(5, 0, 4, -1))

    def test_not_parallel(self):
        """Lines at 45 degrees aren't parallel."""
        assert not are_parallel(L(0, 0, 1, 0), L(0, 0, 1, 1))

    def test_parallel_independent_of_point_spacing(self):
        """Far-apart defining points don't inflate the cross product."""
        assert are_parallel(L(0, 0, 1000, 1), L(0, 5, 1, 5.001))

    def test_perpendicular(self):
        """Perpendicular line starts at the line's first point."""
        assert are_perpendicular(L(0, 0, 1, 1), L(3, 0, 2, 1))
        assert not are_perpendicular(L(0, 0, 1, 0), L(0, 0, 1, 1))

    def test_same_line_different_points(self):
        """Same geometric line built from different points."""
        assert are_same_line(L(0, 0, 1, 1), L(5, 5, -2, -2))

    def test_parallel_but_offset_not_same(self):
        """Parallel lines with an offset are different lines."""
        assert not are_same_line(L(0, 0, 1, 0), L(0, 1, 1, 1))

    def test_vertical_lines(self):
        """Vertical lines compare by their x offset."""
        assert are_same_line(L(2, 0, 2, 1), L(2, 7, 2, -3))
        assert not are_same_line(L(2, 0, 2, 1), L(3, 0, 3, 1))


class TestOperations:
    """Tests for intersection, rotation, shift, angle and reflection."""

    def test_intersection(self):
        """Diagonals cross at (1, 1)."""
        p = intersection(L(0, 0, 1, 1), L(0, 2, 2, 0))
        assert are_same_point(p, P(1, 1))

    def test_intersection_of_parallel_lines_fails(self):
        """Parallel lines have no intersection."""
        with pytest.raises(NoIntersectionError) as exc_info:
            intersection(L(0, 0, 1, 0), L(0, 1, 1, 1))
        assert exc_info.value.code == "NO_INTERSECTION"

    def test_must_turns_failure_into_assertion(self):
        """A violated precondition is a bug, not a recoverable error."""
        with pytest.raises(AssertionError):
            must(intersection, L(0, 0, 1, 0), L(0, 1, 1, 1))

    def test_must_passes_result_through(self):
        """must returns the operation's result when it succeeds."""
        p = must(intersection, L(0, 0, 1, 0), L(3, -1, 3, 1))
        assert are_same_point(p, P(3, 0))

    def test_perpendicular_through(self):
        """Perpendicular line starts at the given point."""
        l = L(0, 0, 1, 1)
        perp = perpendicular_through(l, P(2, 0))
        assert are_perpendicular(l, perp)
        assert are_same_point(perp.a, P(2, 0))

    def test_perpendicular(self):
        """Perpendicular line starts at the line's first point."""
        l = L(1, 2, 4, 2)
        perp = perpendicular(l)
        assert are_perpendicular(l, perp)
        assert are_same_point(perp.a, l.a)

    def test_rotate_point(self):
        """Quarter turn of a point about another point."""
        p = rotate(P(2, 1), P(1, 1), math.pi / 2)
        assert are_same_point(p, P(1, 2))

    def test_rotate_line(self):
        """Quarter turn carries the x-axis onto the y-axis."""
        l = rotate(L(0, 0, 1, 0), P(0, 0), math.pi / 2)
        assert are_same_line(l, L(0, 0, 0, 1))

    def test_shift(self):
        """Shifting moves both defining points."""
        l = shift(L(0, 0, 1, 0), Vector(i=0, j=3))
        assert are_same_line(l, L(0, 3, 1, 3))

    def test_shortest_vector_parallel(self):
        """Shortest vector between horizontal lines is vertical."""
        v = shortest_vector(L(0, 0, 1, 0), L(5, 2, 6, 2))
        assert abs(v.i) < 1e-12
        assert abs(v.j - 2) < 1e-12

    def test_shortest_vector_carries_a_onto_b(self):
        """Shifting a by the shortest vector lands on b."""
        a, b = L(0, 0, 1, 1), L(3, 0, 4, 1)
        assert are_same_line(shift(a, shortest_vector(a, b)), b)

    def test_shortest_vector_meeting_lines_is_zero(self):
        """Meeting lines are zero distance apart."""
        v = shortest_vector(L(0, 0, 1, 0), L(0, 0, 0, 1))
        assert v.i == 0.0 and v.j == 0.0

    def test_angle_quarter_turn(self):
        """x-axis to y-axis is a quarter turn."""
        assert abs(angle(L(0, 0, 1, 0), L(0, 0, 0, 1)) - math.pi / 2) < 1e-12

    def test_angle_ignores_direction_sign(self):
        """Reversing a line's defining points doesn't change the angle."""
        a = L(0, 0, 1, 0)
        b = L(0, 0, 1, 1)
        b_reversed = L(1, 1, 0, 0)
        assert abs(angle(a, b) - math.pi / 4) < 1e-12
        assert abs(angle(a, b_reversed) - math.pi / 4) < 1e-12

    def test_angle_is_counter_clockwise(self):
        """Angle is measured counter-clockwise from a to b."""
        assert abs(angle(L(0, 0, 1, 1), L(0, 0, 1, 0)) - 3 * math.pi / 4) < 1e-12

    def test_angle_rotates_a_parallel_to_b(self):
        """Rotating a by the angle makes it parallel to b."""
        a, b = L(1, 2, 3, 7), L(-4, 0, 2, -1)
        rads = angle(a, b)
        assert 0 <= rads < math.pi
        assert are_parallel(rotate(a, P(0, 0), rads), b)

    def test_angle_of_parallel_lines_is_zero(self):
        """Parallel lines are 0 radians apart."""
        assert angle(L(0, 0, 1, 0), L(0, 1, 2, 1)) == 0.0

    def test_angle_uses_complement_when_rotation_turns_clockwise(self, monkeypatch):
        """If rotate() turned the other way, pi minus the candidate is returned."""
        counter_clockwise = rotate
        monkeypatch.setattr(
            "viztransform.services.geometry.rotate",
            lambda obj, center, radians: counter_clockwise(obj, center, -radians),
        )
        assert abs(angle(L(0, 0, 1, 0), L(0, 0, 1, 1)) - 3 * math.pi / 4) < 1e-12

    def test_angle_keeps_candidate_below_rounding_error(self):
        """An eps too small for either check to pass falls back to the candidate."""
        rads = angle(L(0, 0, 1, 0), L(0, 0, 1, 3), eps=1e-300)
        assert abs(rads - math.atan2(3, 1)) < 1e-12

    def test_turn_angle_has_no_tolerance(self):
        """turn_angle reports turns far below epsilon."""
        a = L(0, 0, 0, 1)
        b = new_line(P(0, 0), P(1e-9, 1))
        assert angle(a, b) == 0.0
        rads = turn_angle(a, b)
        assert rads > math.pi - 1e-8
        assert are_parallel(rotate(a, P(0, 0), rads), b, eps=1e-12)

    def test_turn_angle_ignores_direction_sign(self):
        """Reversed defining points give the same turn."""
        assert abs(turn_angle(L(0, 0, 1, 0), L(1, 1, 0, 0)) - math.pi / 4) < 1e-12

    def test_foot(self):
        """Foot of the perpendicular from a point."""
        assert are_same_point(foot(L(0, 0, 1, 0), P(3, 4)), P(3, 0))

    def test_reflect_across_axis(self):
        """Reflecting across the y-axis negates x."""
        assert are_same_point(reflect(L(0, 0, 0, 1), P(2, 3)), P(-2, 3))

    def test_reflect_across_diagonal(self):
        """Reflecting across y = x swaps coordinates."""
        assert are_same_point(reflect(L(0, 0, 1, 1), P(2, 0)), P(0, 2))

    def test_point_on_line_is_fixed(self):
        """Points on the mirror don't move."""
        assert are_same_point(reflect(L(0, 0, 1, 1), P(4, 4)), P(4, 4))
