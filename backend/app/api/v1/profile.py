# File: backend/app/api/v1/profile.py
# Version: v0.1.0
"""
Biophysical profile endpoints:
- GET  /profile/parameters   ← default analysis parameters
- POST /profile/analyze      ← windows, stats, correlation map, summary
- POST /profile/compare      ← per-window B − A deltas + average delta
- POST /profile/report       ← printable HTML report for one window

A sequence shorter than the window size is rejected with 400 and the
engine's message (length and required minimum) as `detail`.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from backend.app.config.config_profile import load_default_params
from backend.app.core.config import settings
from backend.app.core.export.profile_json_exporter import comparison_to_dict, profile_to_dict
from backend.app.core.profile.batch import BatchOptions
from backend.app.core.profile.engine import ProfileEngine
from backend.app.core.profile.models import SequenceValidationError
from backend.app.core.profile.parameters import ProfileParameters
from backend.app.core.visualization.window_report_html import render_window_report
from backend.app.schemas.profile import (
    CompareRequest,
    ComparisonResponse,
    ProfileRequest,
    ProfileResponse,
    ReportRequest,
)

router = APIRouter(prefix="/profile", tags=["profile"])
log = logging.getLogger(__name__)


def _engine(params: Optional[ProfileParameters]) -> ProfileEngine:
    return ProfileEngine(
        params or load_default_params(),
        options=BatchOptions(workers=settings.PROFILE_WORKERS),
        logger=log,
    )


@router.get("/parameters", response_model=ProfileParameters)
def get_parameters() -> ProfileParameters:
    """Return the default profile parameters."""
    return load_default_params()


@router.post("/analyze", response_model=ProfileResponse)
def analyze_profile(payload: ProfileRequest) -> ProfileResponse:
    engine = _engine(payload.parameters)
    try:
        result = engine.analyze(payload.sequence)
    except SequenceValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ProfileResponse.model_validate(profile_to_dict(result))


@router.post("/compare", response_model=ComparisonResponse)
def compare_profiles(payload: CompareRequest) -> ComparisonResponse:
    engine = _engine(payload.parameters)
    try:
        cmp = engine.compare_sequences(payload.sequenceA, payload.sequenceB)
    except SequenceValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ComparisonResponse.model_validate(comparison_to_dict(cmp))


@router.post("/report", response_class=HTMLResponse)
def window_report(payload: ReportRequest) -> HTMLResponse:
    engine = _engine(payload.parameters)
    try:
        result = engine.analyze(payload.sequence)
    except SequenceValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    try:
        window = result.window(payload.windowIndex)
    except KeyError:
        raise HTTPException(
            status_code=404,
            detail=f"Window {payload.windowIndex} not found (run has {len(result.windows)} windows).",
        ) from None
    return HTMLResponse(render_window_report(window, engine.params, payload.recordId))
