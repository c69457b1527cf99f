"""
Pydantic data models for the polygon clipping API.

These models define the shapes of requests and responses used by the
backend.  Field names use camelCase so that the browser front end can
consume the JSON without renaming.  Conversion to and from the
service layer types (``Point``, ``ClipStep``) lives in the router.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..services.step_ledger import ActionKind


class PointModel(BaseModel):
    """Single 2D point."""

    x: float
    y: float


class ClipRequest(BaseModel):
    """Request body for clipping a subject polygon against a clip polygon."""

    subject: List[PointModel] = Field(
        ..., description="Ordered vertices of the polygon to clip (implicitly closed)"
    )
    clip: List[PointModel] = Field(
        ...,
        description=(
            "Ordered vertices of the convex clipping polygon.  Either winding is "
            "accepted; a zero-area polygon yields an empty result."
        ),
    )


class ClipEdgeModel(BaseModel):
    """Directed clip edge processed by one step."""

    start: PointModel
    end: PointModel


class ActionModel(BaseModel):
    """One decision taken while walking the subject polygon."""

    kind: ActionKind = Field(..., description="ADD_VERTEX, ADD_INTERSECTION or SKIP_VERTEX")
    vertex: PointModel = Field(..., description="Vertex added, or the endpoint that was skipped")
    reason: str = Field(..., description="Human readable explanation of the decision")


class ClipStepModel(BaseModel):
    """Snapshot of a single clip edge pass."""

    index: int = Field(..., description="Zero-based position of the step in the trace")
    clipEdge: ClipEdgeModel
    inputPolygon: List[PointModel]
    outputPolygon: List[PointModel]
    intersections: List[PointModel] = Field(default_factory=list)
    actions: List[ActionModel] = Field(default_factory=list)


class ClipResponse(BaseModel):
    """Response returned after clipping."""

    ledgerId: str = Field(..., description="Identifier used for step-by-step playback requests")
    result: List[PointModel] = Field(..., description="Clipped polygon, empty when nothing remains")
    totalSteps: int = Field(..., description="Number of recorded steps")
    steps: List[ClipStepModel] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Clip window winding and convexity, processed edges and early termination",
    )


class PlaybackResponse(BaseModel):
    """Cursor state returned by the playback endpoints."""

    ledgerId: str
    cursor: int = Field(..., description="Index of the current step, -1 before the first step")
    totalSteps: int
    step: Optional[ClipStepModel] = Field(
        default=None, description="Step under the cursor after the request, if any"
    )
    finished: bool = Field(
        default=False, description="True once playback has advanced past the last step"
    )
    result: Optional[List[PointModel]] = Field(
        default=None, description="Final polygon, included once playback is finished"
    )
