# File: backend/app/core/profile/stats.py
# Version: v0.1.0
"""
Run-level statistics: population mean and standard deviation per feature.
"""

from __future__ import annotations

from statistics import fmean, pstdev
from typing import Sequence

from .constants import EPS
from .models import FEATURES, AnalysisStats, BiophysicalFeatures, Feature


def calculate_stats(features: Sequence[BiophysicalFeatures]) -> AnalysisStats:
    if not features:
        raise ValueError("cannot aggregate statistics over zero windows")
    columns = list(zip(*(f.as_tuple() for f in features)))
    means = tuple(fmean(col) for col in columns)
    stds = tuple(pstdev(col, mu) for col, mu in zip(columns, means))
    return AnalysisStats(mean=means, std=stds)


def std_denominator(stats: AnalysisStats, feature: Feature) -> float:
    """Std used for z-scoring; near-constant features fall back to EPS."""
    s = stats.std[feature]
    return s if s > EPS else EPS


def std_denominators(stats: AnalysisStats) -> tuple:
    return tuple(std_denominator(stats, f) for f in FEATURES)
