"""
Planar geometry primitives used by the clipping engine.

This module holds the small value types and pure helpers that the rest
of the clipping services build on: an immutable ``Point`` type, basic
vector arithmetic (difference, cross product and distance), the
half‑plane test that decides whether a point lies on the inner side of
a directed clip edge, and a handful of polygon level helpers (signed
area, winding and convexity) that the orchestrator uses to validate a
clip window before it starts.

The helpers are coordinate‑system agnostic.  Signed areas follow the
usual mathematical convention: in a y‑up frame a positive area means
the vertices are ordered counter‑clockwise.  In a y‑down frame such as
a canvas the same polygon reads as clockwise on screen, but the sign
of the area (and therefore every decision made by the clipper) is the
same.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence

import numpy as np

# Cross products in the range (-INSIDE_TOLERANCE, 0) are treated as zero
# by the half‑plane test so that vertices lying on a clip edge are
# consistently classified as inside.
INSIDE_TOLERANCE: float = 1e-8

# Fewer vertices than this encloses no area; such a polygon is empty.
MIN_POLYGON_POINTS: int = 3


@dataclass(frozen=True)
class Point:
    """Immutable 2D point (or vector) compared by value."""

    x: float
    y: float


Polygon = List[Point]


class Winding(str, Enum):
    """Rotational order of a polygon's vertices."""

    CCW = "ccw"
    CW = "cw"
    DEGENERATE = "degenerate"


def sub(a: Point, b: Point) -> Point:
    """Return the vector ``a - b``."""
    return Point(a.x - b.x, a.y - b.y)


def cross(v1: Point, v2: Point) -> float:
    """Return the z component of the 2D cross product ``v1 × v2``."""
    return v1.x * v2.y - v1.y * v2.x


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def is_inside(
    point: Point,
    edge_start: Point,
    edge_end: Point,
    orientation: int = 1,
) -> bool:
    """Return True when ``point`` lies on the inner side of a clip edge.

    The test computes the cross product of the edge vector and the
    vector from ``edge_start`` to ``point``.  With ``orientation=1``
    non‑negative values are inside, which matches the interior of a
    counter‑clockwise clip polygon.  Passing ``orientation=-1`` flips
    the convention for clockwise polygons.  Points on the edge line are
    always inside.

    The edge must not be degenerate (``edge_start == edge_end``).
    """
    value = cross(sub(edge_end, edge_start), sub(point, edge_start))
    return orientation * value >= -INSIDE_TOLERANCE


def _as_array(points: Iterable[Point]) -> np.ndarray:
    return np.array([(p.x, p.y) for p in points], dtype=float).reshape(-1, 2)


def polygon_signed_area(points: Sequence[Point]) -> float:
    """Compute the signed area of a closed polygon using the shoelace formula.

    Returns 0.0 for fewer than three points.  The result is positive
    for counter‑clockwise ordering (y‑up) and negative for clockwise.
    """
    if len(points) < 3:
        return 0.0
    arr = _as_array(points)
    x = arr[:, 0]
    y = arr[:, 1]
    return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_winding(points: Sequence[Point], tolerance: float = INSIDE_TOLERANCE) -> Winding:
    """Classify the winding of ``points`` from the sign of its signed area."""
    area = polygon_signed_area(points)
    if abs(area) <= tolerance:
        return Winding.DEGENERATE
    return Winding.CCW if area > 0.0 else Winding.CW


def is_convex(points: Sequence[Point], tolerance: float = INSIDE_TOLERANCE) -> bool:
    """Return True if the closed polygon ``points`` is convex.

    Every turn (cross product of consecutive edge vectors) must share
    the same sign and the edge headings must sweep exactly one full
    revolution.  The second condition rejects self‑intersecting stars
    such as a pentagram, whose turns all agree in sign but wind twice.
    Collinear turns and zero‑length edges are ignored.  Polygons with
    fewer than three points are reported as not convex.
    """
    if len(points) < MIN_POLYGON_POINTS:
        return False
    arr = _as_array(points)
    edges = np.roll(arr, -1, axis=0) - arr
    edges = edges[np.hypot(edges[:, 0], edges[:, 1]) > tolerance]
    if len(edges) < MIN_POLYGON_POINTS:
        return False
    nxt = np.roll(edges, -1, axis=0)
    turns = edges[:, 0] * nxt[:, 1] - edges[:, 1] * nxt[:, 0]
    turns = turns[np.abs(turns) > tolerance]
    if turns.size == 0:
        # All vertices collinear
        return False
    if not (np.all(turns > 0.0) or np.all(turns < 0.0)):
        return False
    headings = np.arctan2(edges[:, 1], edges[:, 0])
    # Exterior angles wrapped into [-pi, pi)
    exterior = (np.roll(headings, -1) - headings + np.pi) % (2.0 * np.pi) - np.pi
    total = abs(float(np.sum(exterior)))
    return abs(total - 2.0 * np.pi) < 1e-6


__all__ = [
    "INSIDE_TOLERANCE",
    "MIN_POLYGON_POINTS",
    "Point",
    "Polygon",
    "Winding",
    "sub",
    "cross",
    "distance",
    "is_inside",
    "polygon_signed_area",
    "polygon_winding",
    "is_convex",
]
