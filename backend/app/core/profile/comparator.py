# File: backend/app/core/profile/comparator.py
# Version: v0.1.0
"""
Two-run comparison: align windows by index and report B − A feature deltas.

Alignment truncates to the shorter run; no gap filling. The average divides
by max(aligned, 1), so an empty alignment yields an all-zero average.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from .batch import BatchOptions, map_ordered
from .models import (
    N_FEATURES,
    AnalysisWindow,
    BiophysicalFeatures,
    ComparisonResult,
    WindowDelta,
)


class HasWindows(Protocol):
    windows: Sequence[AnalysisWindow]


def window_delta(index: int, wa: AnalysisWindow, wb: AnalysisWindow) -> WindowDelta:
    diff = BiophysicalFeatures.from_values(
        b - a for a, b in zip(wa.features.as_tuple(), wb.features.as_tuple())
    )
    return WindowDelta(index=index, start=wa.start, end=wa.end, diff=diff)


def compare_profiles(
    result_a: HasWindows,
    result_b: HasWindows,
    *,
    options: Optional[BatchOptions] = None,
) -> ComparisonResult:
    wa = result_a.windows
    wb = result_b.windows
    n = min(len(wa), len(wb))

    deltas: List[WindowDelta] = map_ordered(
        lambda i: window_delta(i, wa[i], wb[i]), range(n), options=options
    )

    sums = [0.0] * N_FEATURES
    for d in deltas:
        for k, v in enumerate(d.diff.as_tuple()):
            sums[k] += v
    avg = BiophysicalFeatures.from_values(s / max(n, 1) for s in sums)
    return ComparisonResult(deltas=deltas, avg_delta=avg)
