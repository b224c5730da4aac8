# File: backend/app/core/profile/engine.py
# Version: v0.1.0
"""
Biophysical profile engine: sanitize → window → features → stats → score → correlate.

Phases 1 (features), 3 (scoring) and 4 (correlation) are per-window maps and
may run on a thread pool. Phase 2 (statistics) is a barrier: it needs every
window's features before any window can be scored. Correlation reads only
phase-1 features.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional

from .batch import BatchOptions, map_ordered
from .comparator import HasWindows, compare_profiles
from .constants import (
    DEFAULT_SALT,
    DEFAULT_SALT_MG,
    DEFAULT_STRIDE,
    DEFAULT_THRESHOLD,
    DEFAULT_WINDOW_SIZE,
)
from .correlation import calculate_cross_correlation
from .features import calculate_window_features, melting_temperature
from .models import (
    AnalysisResult,
    AnalysisWindow,
    Archetype,
    BiologicalSummary,
    ComparisonResult,
)
from .parameters import ProfileParameters
from .salt import get_salt_policy
from .scoring import apply_score, score_features
from .sequence import extract_windows, sanitize_sequence, validate_window_params
from .stats import calculate_stats

logger = logging.getLogger(__name__)


def summarize(windows: List[AnalysisWindow]) -> BiologicalSummary:
    counts = Counter(w.archetype for w in windows)
    return BiologicalSummary(
        archetype_counts={a: counts.get(a, 0) for a in Archetype},
        anomaly_count=sum(1 for w in windows if w.is_anomalous),
        avg_tm=sum(w.tm for w in windows) / len(windows) if windows else 0.0,
    )


def analyze_sequence(
    sequence: str,
    threshold: float = DEFAULT_THRESHOLD,
    window_size: int = DEFAULT_WINDOW_SIZE,
    stride: int = DEFAULT_STRIDE,
    salt: float = DEFAULT_SALT,
    salt_mg: float = DEFAULT_SALT_MG,
    *,
    salt_model: str = "effective",
    options: Optional[BatchOptions] = None,
    log: Optional[logging.Logger] = None,
) -> AnalysisResult:
    """
    Profile one sequence.

    Raises:
        SequenceValidationError: sanitized length < window_size, or W/S < 1.
        ValueError: unknown salt_model.
    """
    log = log or logger
    seq = sanitize_sequence(sequence)
    validate_window_params(len(seq), window_size, stride)
    policy = get_salt_policy(salt_model)

    # Phase 1: windowing + features
    def _build(item) -> AnalysisWindow:
        k, start, end, sub = item
        feats = calculate_window_features(sub, salt, salt_mg, salt_policy=policy)
        return AnalysisWindow(
            index=k, start=start, end=end, sequence=sub,
            features=feats, tm=melting_temperature(feats.gc, salt, salt_mg),
        )

    windows = map_ordered(_build, extract_windows(seq, window_size, stride), options=options)
    log.debug("profile: %d windows (W=%d, S=%d, salt=%s/%s, model=%s)",
              len(windows), window_size, stride, salt, salt_mg, policy.name)

    # Phase 2: barrier
    stats = calculate_stats([w.features for w in windows])

    # Phase 3: scoring + classification
    scores = map_ordered(lambda w: score_features(w.features, stats, threshold), windows, options=options)
    for w, s in zip(windows, scores):
        apply_score(w, s)

    # Phase 4: correlation (phase-1 data only)
    correlation_map = calculate_cross_correlation(windows, options=options)

    summary = summarize(windows)
    log.info(
        "profile: len=%d windows=%d anomalies=%d avg_tm=%.2f",
        len(seq), len(windows), summary.anomaly_count, summary.avg_tm,
    )

    return AnalysisResult(
        windows=windows,
        stats=stats,
        correlation_map=correlation_map,
        threshold_used=threshold,
        multivariate_scores=[w.combined_score for w in windows],
        summary=summary,
        # values already checked above; record them as given
        parameters=ProfileParameters.model_construct(
            threshold=threshold, window_size=window_size, stride=stride,
            salt=salt, salt_mg=salt_mg, salt_model=policy.name,
        ),
    )


class ProfileEngine:
    """Bound parameter set + logger around `analyze_sequence` / `compare_profiles`."""

    def __init__(
        self,
        params: Optional[ProfileParameters] = None,
        options: Optional[BatchOptions] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.params = params or ProfileParameters()
        self.options = options or BatchOptions()
        self.log = logger or logging.getLogger(__name__)

    def analyze(self, sequence: str) -> AnalysisResult:
        p = self.params
        return analyze_sequence(
            sequence,
            threshold=p.threshold,
            window_size=p.window_size,
            stride=p.stride,
            salt=p.salt,
            salt_mg=p.salt_mg,
            salt_model=p.salt_model,
            options=self.options,
            log=self.log,
        )

    def compare(self, result_a: HasWindows, result_b: HasWindows) -> ComparisonResult:
        cmp = compare_profiles(result_a, result_b, options=self.options)
        self.log.info("compare: aligned=%d windows", len(cmp.deltas))
        return cmp

    def compare_sequences(self, seq_a: str, seq_b: str) -> ComparisonResult:
        return self.compare(self.analyze(seq_a), self.analyze(seq_b))
