"""
Sutherland–Hodgman polygon clipping with a replayable trace.

``clip`` intersects a subject polygon with a convex clipping polygon by
clipping the subject against each clip edge in turn, feeding the
output of one pass into the next.  Each pass is performed by
``clip_against_edge`` which walks the subject polygon edge by edge and
applies the four‑case transition rule:

1. both endpoints inside  → keep the second endpoint
2. inside → outside       → keep the intersection only
3. outside → inside       → keep the intersection, then the second endpoint
4. both endpoints outside → keep nothing

Every pass is recorded as a :class:`ClipStep` in a
:class:`StepLedger` so that callers can replay the computation step by
step without running it again.

Degenerate input never raises.  Polygons with fewer than three points,
a zero‑area clip window or a working polygon that collapses below
three points all produce an empty result.  The clip polygon may be
wound either way: its signed area is checked once on entry and the
half‑plane test is oriented to match.  Concave clip polygons are
outside the algorithm's contract; they are reported in the log and
clipped anyway.

Set the ``CLIP_DEBUG`` environment variable to log every pass.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence, Tuple

from .geometry import (
    MIN_POLYGON_POINTS,
    Point,
    Polygon,
    Winding,
    is_convex,
    is_inside,
    polygon_winding,
)
from .intersection import intersect
from .step_ledger import (
    Action,
    AddIntersection,
    AddVertex,
    ClipEdge,
    ClipStep,
    SkipVertex,
    StepLedger,
    Transition,
)

logger = logging.getLogger(__name__)


def _debug_enabled() -> bool:
    return bool(os.getenv("CLIP_DEBUG"))


def clip_against_edge(
    polygon: Sequence[Point],
    clip_edge: ClipEdge,
    orientation: int = 1,
) -> Tuple[Polygon, ClipStep]:
    """Clip ``polygon`` against a single directed clip edge.

    Args:
        polygon: Working polygon entering this pass.  May be empty.
        clip_edge: The clip edge; its inner half‑plane is selected by
            ``orientation``.
        orientation: ``1`` when the clip polygon is counter‑clockwise,
            ``-1`` when it is clockwise.

    Returns:
        A tuple ``(output, step)`` where ``output`` is a new list of
        points and ``step`` the frozen record of this pass.
    """
    input_polygon = tuple(polygon)
    if not input_polygon:
        return [], ClipStep(clip_edge=clip_edge)

    start, end = clip_edge.start, clip_edge.end
    output: Polygon = []
    intersections: List[Point] = []
    actions: List[Action] = []

    # Walk the closed polygon starting with the wrap‑around edge (last, first).
    current = input_polygon[-1]
    current_inside = is_inside(current, start, end, orientation)
    for nxt in input_polygon:
        next_inside = is_inside(nxt, start, end, orientation)
        if current_inside and next_inside:
            output.append(nxt)
            actions.append(AddVertex(nxt, Transition.BOTH_INSIDE))
        elif current_inside:
            crossing = intersect(current, nxt, start, end)
            if crossing is not None:
                output.append(crossing)
                intersections.append(crossing)
                actions.append(AddIntersection(crossing, Transition.EXITING))
        elif next_inside:
            crossing = intersect(current, nxt, start, end)
            if crossing is not None:
                output.append(crossing)
                intersections.append(crossing)
                actions.append(AddIntersection(crossing, Transition.ENTERING))
            output.append(nxt)
            actions.append(AddVertex(nxt, Transition.ENTERING))
        else:
            actions.append(SkipVertex(nxt, Transition.BOTH_OUTSIDE))
        current, current_inside = nxt, next_inside

    step = ClipStep(
        clip_edge=clip_edge,
        input_polygon=input_polygon,
        output_polygon=tuple(output),
        intersections=tuple(intersections),
        actions=tuple(actions),
    )
    return output, step


def clip(
    subject: Sequence[Point],
    clip_polygon: Sequence[Point],
    ledger: Optional[StepLedger] = None,
) -> Tuple[Polygon, StepLedger]:
    """Clip ``subject`` against the convex polygon ``clip_polygon``.

    Args:
        subject: Polygon to clip.  Needs at least three points.
        clip_polygon: Convex clip window.  Needs at least three points
            and a non‑zero area; either winding is accepted.
        ledger: Optional ledger to record the trace into.  It is cleared
            before clipping starts.  A new ledger is created when omitted.

    Returns:
        A tuple ``(result, ledger)``.  ``result`` is the clipped polygon
        (empty when nothing remains) and ``ledger`` holds one step per
        processed clip edge.
    """
    if ledger is None:
        ledger = StepLedger()
    ledger.clear()

    if len(subject) < MIN_POLYGON_POINTS or len(clip_polygon) < MIN_POLYGON_POINTS:
        logger.debug(
            "clip skipped: subject has %d points, clip polygon has %d points",
            len(subject),
            len(clip_polygon),
        )
        return [], ledger

    winding = polygon_winding(clip_polygon)
    if winding is Winding.DEGENERATE:
        logger.warning("clip skipped: clip polygon has zero area (%d points)", len(clip_polygon))
        return [], ledger
    if not is_convex(clip_polygon):
        logger.warning(
            "clip polygon with %d points is not convex; the result may be incorrect",
            len(clip_polygon),
        )
    orientation = 1 if winding is Winding.CCW else -1

    output: Polygon = list(subject)
    n = len(clip_polygon)
    for i in range(n):
        edge = ClipEdge(clip_polygon[i], clip_polygon[(i + 1) % n])
        output, step = clip_against_edge(output, edge, orientation)
        ledger.record(step)
        if _debug_enabled():
            logger.debug(
                "clip edge %d/%d %s->%s: %d in, %d out, %d intersections",
                i + 1,
                n,
                edge.start,
                edge.end,
                len(step.input_polygon),
                len(step.output_polygon),
                len(step.intersections),
            )
        if len(output) < MIN_POLYGON_POINTS:
            logger.debug("clip terminated after edge %d/%d: polygon collapsed", i + 1, n)
            return [], ledger

    return output, ledger


__all__ = ["MIN_POLYGON_POINTS", "clip_against_edge", "clip"]
