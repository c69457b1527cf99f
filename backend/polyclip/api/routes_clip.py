"""
API routes for polygon clipping and step playback.

``POST /clip`` runs the Sutherland–Hodgman clipper on the supplied
polygons and returns the clipped polygon together with the complete
step trace.  The trace is also kept in the in‑memory ledger registry
so that a client running in step‑by‑step mode can walk through it with
the ``next``/``reset`` endpoints instead of replaying the whole trace
at once.  Individual steps can be fetched by index.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Sequence

from fastapi import APIRouter, HTTPException

from .models import (
    ActionModel,
    ClipEdgeModel,
    ClipRequest,
    ClipResponse,
    ClipStepModel,
    PlaybackResponse,
    PointModel,
)
from ..services.clip_registry import (
    PlaybackState,
    advance_ledger,
    get_ledger,
    rewind_ledger,
    store_ledger,
)
from ..services.clipping import clip
from ..services.geometry import Point, is_convex, polygon_winding
from ..services.step_ledger import ClipStep, StepLedger

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_points(models: Sequence[PointModel]) -> List[Point]:
    return [Point(float(p.x), float(p.y)) for p in models]


def _to_models(points: Sequence[Point]) -> List[PointModel]:
    return [PointModel(x=p.x, y=p.y) for p in points]


def _step_to_model(index: int, step: ClipStep) -> ClipStepModel:
    return ClipStepModel(
        index=index,
        clipEdge=ClipEdgeModel(
            start=PointModel(x=step.clip_edge.start.x, y=step.clip_edge.start.y),
            end=PointModel(x=step.clip_edge.end.x, y=step.clip_edge.end.y),
        ),
        inputPolygon=_to_models(step.input_polygon),
        outputPolygon=_to_models(step.output_polygon),
        intersections=_to_models(step.intersections),
        actions=[
            ActionModel(
                kind=action.kind,
                vertex=PointModel(x=action.vertex.x, y=action.vertex.y),
                reason=action.reason,
            )
            for action in step.actions
        ],
    )


def _playback_response(ledger_id: str, state: PlaybackState) -> PlaybackResponse:
    return PlaybackResponse(
        ledgerId=ledger_id,
        cursor=state.cursor,
        totalSteps=state.total_steps,
        step=_step_to_model(state.cursor, state.step) if state.step is not None else None,
        finished=state.finished,
        result=_to_models(state.result) if state.finished else None,
    )


def _require_ledger(ledger_id: str) -> StepLedger:
    ledger = get_ledger(ledger_id)
    if ledger is None:
        raise HTTPException(status_code=404, detail=f"Unknown ledger '{ledger_id}'")
    return ledger


@router.post("/clip", response_model=ClipResponse)
async def clip_polygons(body: ClipRequest) -> ClipResponse:
    """Clip ``body.subject`` against ``body.clip`` and return the full trace.

    Degenerate input (fewer than three points, a zero‑area clip window or
    a subject that falls completely outside) yields an empty ``result``;
    it is never reported as an error.
    """
    subject = _to_points(body.subject)
    clip_polygon = _to_points(body.clip)
    try:
        result, ledger = clip(subject, clip_polygon)
    except Exception as exc:
        logger.exception("clip endpoint error: %s", exc)
        raise HTTPException(status_code=500, detail=f"Failed to clip polygons: {exc}")

    ledger_id = store_ledger(ledger)
    total = ledger.total_steps()
    metadata: Dict[str, Any] = {
        "subjectPoints": len(subject),
        "clipPoints": len(clip_polygon),
        "clipWinding": polygon_winding(clip_polygon).value,
        "clipConvex": is_convex(clip_polygon),
        "processedEdges": total,
        "earlyTermination": 0 < total < len(clip_polygon),
        "resultPoints": len(result),
    }
    logger.info(
        "clip %s: %d subject points, %d clip points -> %d result points in %d steps",
        ledger_id,
        len(subject),
        len(clip_polygon),
        len(result),
        total,
    )
    return ClipResponse(
        ledgerId=ledger_id,
        result=_to_models(result),
        totalSteps=total,
        steps=[_step_to_model(i, step) for i, step in enumerate(ledger)],
        metadata=metadata,
    )


@router.get("/clips/{ledger_id}/steps/{index}", response_model=ClipStepModel)
async def get_step(ledger_id: str, index: int) -> ClipStepModel:
    """Return a single recorded step by index."""
    ledger = _require_ledger(ledger_id)
    step = ledger.step_at(index)
    if step is None:
        raise HTTPException(
            status_code=404,
            detail=f"Step {index} out of range (ledger has {ledger.total_steps()} steps)",
        )
    return _step_to_model(index, step)


@router.post("/clips/{ledger_id}/next", response_model=PlaybackResponse)
async def next_step(ledger_id: str) -> PlaybackResponse:
    """Advance playback by one step.

    Once the cursor is on the last step a further call reports
    ``finished`` and includes the final polygon; the cursor stays put.
    """
    state = advance_ledger(ledger_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Unknown ledger '{ledger_id}'")
    return _playback_response(ledger_id, state)


@router.post("/clips/{ledger_id}/reset", response_model=PlaybackResponse)
async def reset_playback(ledger_id: str) -> PlaybackResponse:
    """Rewind playback to before the first step."""
    state = rewind_ledger(ledger_id)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Unknown ledger '{ledger_id}'")
    return _playback_response(ledger_id, state)
