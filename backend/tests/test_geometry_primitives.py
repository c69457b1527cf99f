"""
Tests for the planar primitives in ``geometry.py``.

Covers vector arithmetic, the half-plane test (including its
orientation flag and boundary handling) and the polygon helpers used
to validate a clip window: signed area, winding and convexity.
"""

import math
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from polyclip.services.geometry import (  # type: ignore
    Point,
    Winding,
    cross,
    distance,
    is_convex,
    is_inside,
    polygon_signed_area,
    polygon_winding,
    sub,
)

SQUARE_CCW = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)]


def test_points_compare_by_value() -> None:
    assert Point(1.0, 2.0) == Point(1.0, 2.0)
    assert len({Point(1, 2), Point(1, 2), Point(2, 1)}) == 2


def test_sub_cross_and_distance() -> None:
    assert sub(Point(5, 7), Point(2, 3)) == Point(3, 4)
    assert cross(Point(1, 0), Point(0, 1)) == 1
    assert cross(Point(0, 1), Point(1, 0)) == -1
    assert cross(Point(2, 2), Point(4, 4)) == 0
    assert math.isclose(distance(Point(0, 0), Point(3, 4)), 5.0)


def test_is_inside_left_of_edge_for_ccw_orientation() -> None:
    start, end = Point(0, 0), Point(4, 0)
    assert is_inside(Point(2, 1), start, end)
    assert not is_inside(Point(2, -1), start, end)


def test_is_inside_orientation_flips_half_plane() -> None:
    start, end = Point(0, 0), Point(4, 0)
    assert not is_inside(Point(2, 1), start, end, orientation=-1)
    assert is_inside(Point(2, -1), start, end, orientation=-1)


@pytest.mark.parametrize("orientation", [1, -1])
def test_points_on_the_edge_line_are_inside(orientation: int) -> None:
    start, end = Point(0, 0), Point(4, 0)
    assert is_inside(Point(2, 0), start, end, orientation)
    assert is_inside(Point(10, 0), start, end, orientation)
    # Rounding noise just outside the line still counts as on the line
    assert is_inside(Point(2, -1e-12), start, end, 1)


def test_signed_area_sign_follows_winding() -> None:
    assert polygon_signed_area(SQUARE_CCW) == pytest.approx(16.0)
    assert polygon_signed_area(list(reversed(SQUARE_CCW))) == pytest.approx(-16.0)
    assert polygon_signed_area(SQUARE_CCW[:2]) == 0.0


def test_polygon_winding() -> None:
    assert polygon_winding(SQUARE_CCW) is Winding.CCW
    assert polygon_winding(list(reversed(SQUARE_CCW))) is Winding.CW
    collinear = [Point(0, 0), Point(1, 1), Point(2, 2)]
    assert polygon_winding(collinear) is Winding.DEGENERATE


def test_is_convex() -> None:
    assert is_convex(SQUARE_CCW)
    assert is_convex(list(reversed(SQUARE_CCW)))
    # A collinear vertex on an edge does not break convexity
    assert is_convex([Point(0, 0), Point(2, 0), Point(4, 0), Point(4, 4), Point(0, 4)])
    arrow = [Point(0, 0), Point(4, 0), Point(2, 1), Point(4, 4), Point(0, 4)]
    assert not is_convex(arrow)
    assert not is_convex([Point(0, 0), Point(1, 1), Point(2, 2)])
    assert not is_convex(SQUARE_CCW[:2])


def _regular_polygon(n: int) -> list:
    return [
        Point(math.cos(math.pi / 2 + 2 * math.pi * k / n), math.sin(math.pi / 2 + 2 * math.pi * k / n))
        for k in range(n)
    ]


def test_self_intersecting_star_is_not_convex() -> None:
    p = _regular_polygon(5)
    assert is_convex(p)
    pentagram = [p[0], p[2], p[4], p[1], p[3]]
    assert not is_convex(pentagram)
    assert not is_convex(list(reversed(pentagram)))


def test_duplicate_vertex_does_not_break_convexity() -> None:
    with_duplicate = [Point(0, 0), Point(4, 0), Point(4, 0), Point(4, 4), Point(0, 4)]
    assert is_convex(with_duplicate)
