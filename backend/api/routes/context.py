"""
api/routes/context.py
---------------------
POST /v1/context/build
POST /v1/context/suggestions

Thin HTTP wrapper around the itinerary analysis engine. The hosting service
forwards the trip document it already loaded from the store; the engine
normalises it and never fails on document content, so the only client
errors here are envelope-shape errors (FastAPI's 422).
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from main import run_pipeline
from modules.analysis.suggestions import generate_quick_prompts, generate_suggestions
from modules.observability.logger import StructuredLogger
from schemas.context import ContextResult

router = APIRouter()

_audit = StructuredLogger()


# ── Request schema ─────────────────────────────────────────────────────────────

class ContextRequest(BaseModel):
    trip: dict[str, Any] = Field(..., description="Trip document as stored (camelCase or snake_case)")
    preferences: Optional[dict[str, Any]] = Field(None, description="Travel preference document")
    weather: Optional[list[Any]] = Field(
        None, description="Per-day forecast, index-aligned to dayNumber - 1"
    )


def _build(req: ContextRequest) -> ContextResult:
    result = run_pipeline(req.trip, req.preferences, req.weather)
    ctx = result.context
    _audit.log(ctx.trip_id, "context_built", {
        "days": len(ctx.detailed_itinerary),
        "issues": len(ctx.issues),
        "warnings": len(result.warnings),
    })
    # Streams are keyed by trip id; none stays open between requests
    _audit.close(ctx.trip_id)
    return result


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.post("/build", summary="Build the enriched trip context")
def build_context(req: ContextRequest) -> dict:
    """
    Returns ``{"context": ..., "warnings": [...]}``.

    ``warnings`` lists every value that was missing or malformed and replaced
    by a default; an empty list means the document was read as-is.
    """
    return _build(req).to_dict()


@router.post("/suggestions", summary="Smart suggestions and quick prompts for a trip")
def suggest(req: ContextRequest) -> dict:
    ctx = _build(req).context
    return {
        "suggestions": [s.to_dict() for s in generate_suggestions(ctx)],
        "quickPrompts": generate_quick_prompts(ctx),
    }
