# File: backend/app/core/profile/correlation.py
# Version: v0.1.0
"""
Local cross-correlation between H-bond density and stacking density.

For each window i >= lookback, Pearson r over the trailing slice
[i - lookback, i) (the current window is excluded).
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .batch import BatchOptions, map_ordered
from .constants import CORRELATION_LOOKBACK
from .models import AnalysisWindow, CorrelationPoint


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson r; 0.0 for empty input or zero variance."""
    n = len(x)
    if n == 0:
        return 0.0
    mu_x = sum(x) / n
    mu_y = sum(y) / n
    num = den_x = den_y = 0.0
    for a, b in zip(x, y):
        dx = a - mu_x
        dy = b - mu_y
        num += dx * dy
        den_x += dx * dx
        den_y += dy * dy
    den = math.sqrt(den_x * den_y)
    if den == 0:
        return 0.0
    r = num / den
    if math.isnan(r):
        return 0.0
    # rounding can push |r| a hair past 1
    return max(-1.0, min(1.0, r))


def calculate_cross_correlation(
    windows: Sequence[AnalysisWindow],
    lookback: int = CORRELATION_LOOKBACK,
    *,
    options: Optional[BatchOptions] = None,
) -> List[CorrelationPoint]:
    if len(windows) <= lookback:
        return []
    hb = [w.features.hb_per_base for w in windows]
    stack = [w.features.stack_per_base for w in windows]

    def _point(i: int) -> CorrelationPoint:
        return CorrelationPoint(
            index=windows[i].index,
            correlation=pearson(hb[i - lookback : i], stack[i - lookback : i]),
        )

    return map_ordered(_point, range(lookback, len(windows)), options=options)
