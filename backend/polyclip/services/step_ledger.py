"""
Step records and the playback ledger for the clipping engine.

Every clip edge processed by :func:`polyclip.services.clipping.clip`
produces one :class:`ClipStep`.  A step is a frozen snapshot: the clip
edge, the polygon that entered the pass, the polygon that left it, the
intersection points that were found and the ordered list of actions
taken while walking the subject polygon.  Because points are immutable
and every collection is stored as a tuple, nothing the clipper does
after recording a step can change it.

The :class:`StepLedger` keeps the ordered steps of a single clip run
together with a playback cursor.  It does not know whether it is being
replayed in one go or advanced manually; both drivers use the same
``step_at``/``next``/``reset`` calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterator, List, Optional, Tuple, Union

from .geometry import MIN_POLYGON_POINTS, Point


class Transition(str, Enum):
    """The four Sutherland–Hodgman cases for a subject edge ``(current, next)``."""

    BOTH_INSIDE = "both_inside"
    EXITING = "exiting"
    ENTERING = "entering"
    BOTH_OUTSIDE = "both_outside"


class ActionKind(str, Enum):
    ADD_VERTEX = "ADD_VERTEX"
    ADD_INTERSECTION = "ADD_INTERSECTION"
    SKIP_VERTEX = "SKIP_VERTEX"


# Display text for each (kind, transition) pair that can occur.
_REASONS = {
    (ActionKind.ADD_VERTEX, Transition.BOTH_INSIDE): "Both endpoints inside",
    (ActionKind.ADD_VERTEX, Transition.ENTERING): "Second endpoint inside",
    (ActionKind.ADD_INTERSECTION, Transition.ENTERING): "Moving from outside to inside",
    (ActionKind.ADD_INTERSECTION, Transition.EXITING): "Moving from inside to outside",
    (ActionKind.SKIP_VERTEX, Transition.BOTH_OUTSIDE): "Both endpoints outside",
}


@dataclass(frozen=True)
class _Action:
    vertex: Point
    transition: Transition

    kind: ClassVar[ActionKind]

    @property
    def reason(self) -> str:
        return _REASONS[(self.kind, self.transition)]


@dataclass(frozen=True)
class AddVertex(_Action):
    """A subject vertex was copied to the output polygon."""

    kind: ClassVar[ActionKind] = ActionKind.ADD_VERTEX


@dataclass(frozen=True)
class AddIntersection(_Action):
    """An intersection with the clip edge was appended to the output polygon."""

    kind: ClassVar[ActionKind] = ActionKind.ADD_INTERSECTION


@dataclass(frozen=True)
class SkipVertex(_Action):
    """Both endpoints were outside; ``vertex`` names the dropped endpoint."""

    kind: ClassVar[ActionKind] = ActionKind.SKIP_VERTEX


Action = Union[AddVertex, AddIntersection, SkipVertex]


@dataclass(frozen=True)
class ClipEdge:
    """Directed edge of the clipping polygon."""

    start: Point
    end: Point


@dataclass(frozen=True)
class ClipStep:
    """Snapshot of one clip edge pass.

    Attributes:
        clip_edge: The clip edge the polygon was clipped against.
        input_polygon: Polygon entering this pass.
        output_polygon: Polygon produced by this pass.
        intersections: Intersection points found, in discovery order.
        actions: One or two actions per visited subject edge, in order.
    """

    clip_edge: ClipEdge
    input_polygon: Tuple[Point, ...] = ()
    output_polygon: Tuple[Point, ...] = ()
    intersections: Tuple[Point, ...] = ()
    actions: Tuple[Action, ...] = ()


class StepLedger:
    """Ordered record of the steps produced by one ``clip`` call plus a cursor.

    The cursor starts at ``-1`` (before the first step).  ``next`` moves
    it forward one step at a time and ``reset`` rewinds it.  A ledger
    passed to ``clip`` is cleared first, so at most one clip run may use
    a given ledger at a time.
    """

    def __init__(self) -> None:
        self._steps: List[ClipStep] = []
        self._cursor: int = -1

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[ClipStep]:
        return iter(self._steps)

    @property
    def cursor(self) -> int:
        return self._cursor

    def clear(self) -> None:
        """Drop all recorded steps and rewind the cursor."""
        self._steps = []
        self._cursor = -1

    def record(self, step: ClipStep) -> None:
        self._steps.append(step)

    def total_steps(self) -> int:
        return len(self._steps)

    def step_at(self, index: int) -> Optional[ClipStep]:
        """Return the step at ``index`` or ``None`` when out of range.

        Negative indices are out of range; they do not count from the end.
        """
        if index < 0 or index >= len(self._steps):
            return None
        return self._steps[index]

    def next(self) -> Optional[ClipStep]:
        """Advance the cursor and return the new step, or ``None`` at the end.

        The cursor does not move past the last step.
        """
        if self._cursor < len(self._steps) - 1:
            self._cursor += 1
            return self._steps[self._cursor]
        return None

    def current(self) -> Optional[ClipStep]:
        return self.step_at(self._cursor)

    def reset(self) -> None:
        self._cursor = -1

    def final_polygon(self) -> List[Point]:
        """Polygon the recorded run ended with.

        This is the output of the last recorded step, or an empty list when
        there are no steps or that output collapsed below three points,
        which is what ``clip`` returns in both cases.
        """
        if not self._steps:
            return []
        output = self._steps[-1].output_polygon
        if len(output) < MIN_POLYGON_POINTS:
            return []
        return list(output)


__all__ = [
    "Transition",
    "ActionKind",
    "AddVertex",
    "AddIntersection",
    "SkipVertex",
    "Action",
    "ClipEdge",
    "ClipStep",
    "StepLedger",
]
