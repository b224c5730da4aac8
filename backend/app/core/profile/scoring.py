# File: backend/app/core/profile/scoring.py
# Version: v0.1.0
"""
Anomaly scoring and classification for profile windows.

Components:
- Per-feature z-score against the run statistics (EPS-floored std)
- Combined score: Euclidean norm of the z-vector. This is a standardized
  distance with a diagonal covariance; cross-feature covariance is not modeled.
- Attribution: each feature's share of the squared distance
- Anomaly label and archetype label, each a first-match rule list
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .constants import EPS
from .models import (
    FEATURES,
    AnalysisStats,
    AnalysisWindow,
    AnomalyType,
    Archetype,
    BiophysicalFeatures,
    Feature,
    FeatureContribution,
)
from .stats import std_denominators


@dataclass(frozen=True)
class WindowScore:
    z_scores: Tuple[float, ...]
    combined_score: float
    contributions: List[FeatureContribution]
    is_anomalous: bool
    anomaly_type: AnomalyType
    archetype: Archetype


def z_scores(features: BiophysicalFeatures, stats: AnalysisStats) -> Tuple[float, ...]:
    denoms = std_denominators(stats)
    return tuple(
        (value - mean) / denom
        for value, mean, denom in zip(features.as_tuple(), stats.mean, denoms)
    )


def combined_score(z: Sequence[float]) -> float:
    return math.sqrt(sum(v * v for v in z))


def contributions(z: Sequence[float]) -> List[FeatureContribution]:
    """Split the combined score across features; sorted by score, descending."""
    z_sq = [v * v for v in z]
    dist_sq = sum(z_sq)
    combined = math.sqrt(dist_sq)
    total = max(dist_sq, EPS)
    out = []
    for f, sq in zip(FEATURES, z_sq):
        share = sq / total
        out.append(FeatureContribution(feature=f, score=share * combined, percentage=share * 100.0))
    # sorted() is stable: ties keep Feature order
    return sorted(out, key=lambda c: c.score, reverse=True)


def classify_anomaly(z: Sequence[float], combined: float, threshold: float) -> AnomalyType:
    z_dg = z[Feature.DG]
    if abs(z_dg) > threshold:
        return AnomalyType.THERMAL_DIP if z_dg < 0 else AnomalyType.STRUCTURAL_SHIFT
    if abs(z[Feature.STACK]) > threshold:
        return AnomalyType.STACKING_ANCHOR
    if combined > threshold * 2:
        return AnomalyType.MULTIVARIATE_DEVIATION
    return AnomalyType.NONE


def classify_archetype(features: BiophysicalFeatures, z: Sequence[float], is_anomalous: bool) -> Archetype:
    z_dg = z[Feature.DG]
    z_stack = z[Feature.STACK]
    z_bend = z[Feature.BEND]
    if features.gc > 0.7 and abs(z[Feature.ZX]) > 2:
        return Archetype.Z_DNA_CANDIDATE
    if z_dg < -2 and z_bend > 1.5:
        return Archetype.PUTATIVE_PROMOTER
    if z_stack < -2 and z_bend < -1.5:
        return Archetype.MECHANICAL_ANCHOR
    if features.gc > 0.8 and z_stack < -2.5:
        return Archetype.G_QUADRUPLEX
    if z_bend > 2.5 and abs(z_dg) < 1.5:
        return Archetype.FLEXIBLE_LINKER
    return Archetype.UNKNOWN_ANOMALY if is_anomalous else Archetype.STABLE_HELIX


def score_features(features: BiophysicalFeatures, stats: AnalysisStats, threshold: float) -> WindowScore:
    z = z_scores(features, stats)
    combined = combined_score(z)
    anomaly = classify_anomaly(z, combined, threshold)
    is_anomalous = anomaly is not AnomalyType.NONE
    return WindowScore(
        z_scores=z,
        combined_score=combined,
        contributions=contributions(z),
        is_anomalous=is_anomalous,
        anomaly_type=anomaly,
        archetype=classify_archetype(features, z, is_anomalous),
    )


def apply_score(window: AnalysisWindow, score: WindowScore) -> AnalysisWindow:
    window.z_scores = score.z_scores
    window.combined_score = score.combined_score
    window.contributions = score.contributions
    window.is_anomalous = score.is_anomalous
    window.anomaly_type = score.anomaly_type
    window.archetype = score.archetype
    return window


def score_window(window: AnalysisWindow, stats: AnalysisStats, threshold: float) -> AnalysisWindow:
    """Score and classify one window in place."""
    return apply_score(window, score_features(window.features, stats, threshold))
