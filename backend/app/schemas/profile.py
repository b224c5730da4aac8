# File: backend/app/schemas/profile.py
# Version: v0.1.0
"""
Pydantic schemas for biophysical profile analysis and comparison.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, conint

from backend.app.core.profile.parameters import ProfileParameters


class ProfileRequest(BaseModel):
    """Request payload for a single-sequence profile."""
    sequence: str = Field(
        ...,
        description="Nucleotide sequence (A/C/G/T/M; anything else is read as N).",
        examples=["ACGTACGTACGTACGTACGT"],
    )
    # If omitted, server uses the configured defaults
    parameters: Optional[ProfileParameters] = None


class CompareRequest(BaseModel):
    sequenceA: str
    sequenceB: str
    parameters: Optional[ProfileParameters] = None


class ReportRequest(ProfileRequest):
    windowIndex: conint(ge=0) = Field(..., description="Window index k (start = k * stride).")
    recordId: str = "sequence"


class ContributionOut(BaseModel):
    feature: str
    score: float
    percentage: float


class WindowOut(BaseModel):
    index: int
    start: int = Field(..., ge=0, description="0-based inclusive index.")
    end: int = Field(..., ge=0, description="0-based exclusive index.")
    sequence: str
    features: Dict[str, float]
    zScores: Dict[str, float]
    combinedScore: float
    contributions: List[ContributionOut]
    isAnomalous: bool
    anomalyType: str
    archetype: str
    tm: float


class StatsOut(BaseModel):
    mean: Dict[str, float]
    std: Dict[str, float]


class CorrelationPointOut(BaseModel):
    index: int
    correlation: float


class SummaryOut(BaseModel):
    promoterPotential: int
    structuralAnchors: int
    zDnaSites: int
    anomalyCount: int
    avgTm: float
    archetypeCounts: Dict[str, int]


class ProfileResponse(BaseModel):
    windows: List[WindowOut]
    stats: StatsOut
    correlationMap: List[CorrelationPointOut]
    thresholdUsed: float
    multivariateScores: List[float]
    summary: SummaryOut
    parameters: ProfileParameters


class WindowDeltaOut(BaseModel):
    index: int
    start: int
    end: int
    diff: Dict[str, float]


class ComparisonResponse(BaseModel):
    deltas: List[WindowDeltaOut]
    avgDelta: Dict[str, float]
