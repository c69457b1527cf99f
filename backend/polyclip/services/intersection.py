"""
Segment–segment intersection for the clipping engine.

Both the subject edge and the clip edge are turned into implicit line
equations ``A·x + B·y + C = 0`` and the resulting 2×2 system is solved
directly.  Parallel or collinear lines (determinant close to zero) do
not produce an intersection, even when the segments overlap.  A
solution is only accepted when it lies within the bounding boxes of
both segments; anything else is reported as ``None``.
"""

from __future__ import annotations

import logging
from typing import Optional

from .geometry import Point

logger = logging.getLogger(__name__)

# Tolerance used for the parallel test and the inclusive bounding box
# checks.  Callers never pass their own value.
INTERSECTION_EPSILON: float = 1e-8


def is_on_segment(p: Point, s: Point, e: Point, tolerance: float = INTERSECTION_EPSILON) -> bool:
    """Return True when ``p`` lies inside the bounding box of segment ``s``–``e``.

    The check is inclusive and padded by ``tolerance`` so that points
    computed at a segment endpoint are not rejected by rounding noise.
    """
    return (
        min(s.x, e.x) - tolerance <= p.x <= max(s.x, e.x) + tolerance
        and min(s.y, e.y) - tolerance <= p.y <= max(s.y, e.y) + tolerance
    )


def intersect(s: Point, e: Point, clip_start: Point, clip_end: Point) -> Optional[Point]:
    """Intersect subject segment ``s``–``e`` with clip segment ``clip_start``–``clip_end``.

    Args:
        s: Start of the subject polygon edge.
        e: End of the subject polygon edge.
        clip_start: Start of the clip edge.
        clip_end: End of the clip edge.

    Returns:
        The intersection point, or ``None`` when the lines are parallel
        (|det| below ``INTERSECTION_EPSILON``) or the line intersection
        falls outside either segment.
    """
    a1 = e.y - s.y
    b1 = s.x - e.x
    c1 = e.x * s.y - s.x * e.y

    a2 = clip_end.y - clip_start.y
    b2 = clip_start.x - clip_end.x
    c2 = clip_end.x * clip_start.y - clip_start.x * clip_end.y

    det = a1 * b2 - a2 * b1
    if abs(det) < INTERSECTION_EPSILON:
        return None

    x = (b1 * c2 - b2 * c1) / det
    y = (a2 * c1 - a1 * c2) / det
    candidate = Point(x, y)

    if is_on_segment(candidate, s, e) and is_on_segment(candidate, clip_start, clip_end):
        return candidate

    logger.debug(
        "intersection (%.6f, %.6f) rejected: outside segment bounds s=%s e=%s clip=%s->%s",
        x,
        y,
        s,
        e,
        clip_start,
        clip_end,
    )
    return None


__all__ = ["INTERSECTION_EPSILON", "is_on_segment", "intersect"]
