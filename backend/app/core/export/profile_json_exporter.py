# File: backend/app/core/export/profile_json_exporter.py
# Version: v0.1.0

"""
Export profile runs and comparisons to clean JSON (external feature keys).
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from backend.app.core.profile.models import (
    FEATURES,
    AnalysisResult,
    AnalysisWindow,
    ComparisonResult,
)


def window_to_dict(w: AnalysisWindow) -> Dict[str, Any]:
    return {
        "index": w.index,
        "start": w.start,
        "end": w.end,
        "sequence": w.sequence,
        "features": w.features.as_dict(),
        "zScores": {f.key: w.z(f) for f in FEATURES},
        "combinedScore": w.combined_score,
        "contributions": [
            {"feature": c.feature.key, "score": c.score, "percentage": c.percentage}
            for c in w.contributions
        ],
        "isAnomalous": w.is_anomalous,
        "anomalyType": w.anomaly_type.value,
        "archetype": w.archetype.value,
        "tm": w.tm,
    }


def profile_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    summary = result.summary
    return {
        "windows": [window_to_dict(w) for w in result.windows],
        "stats": result.stats.as_dict(),
        "correlationMap": [
            {"index": p.index, "correlation": p.correlation} for p in result.correlation_map
        ],
        "thresholdUsed": result.threshold_used,
        "multivariateScores": list(result.multivariate_scores),
        "summary": {
            "promoterPotential": summary.promoter_potential,
            "structuralAnchors": summary.structural_anchors,
            "zDnaSites": summary.z_dna_sites,
            "anomalyCount": summary.anomaly_count,
            "avgTm": summary.avg_tm,
            "archetypeCounts": {a.value: n for a, n in summary.archetype_counts.items()},
        },
        "parameters": result.parameters.model_dump() if result.parameters is not None else None,
    }


def comparison_to_dict(cmp: ComparisonResult) -> Dict[str, Any]:
    return {
        "deltas": [
            {"index": d.index, "start": d.start, "end": d.end, "diff": d.diff.as_dict()}
            for d in cmp.deltas
        ],
        "avgDelta": cmp.avg_delta.as_dict(),
    }


def _write_json(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


def export_profile_to_json(
    result: AnalysisResult,
    json_path: Path,
    record_id: str,
    sequence_length: Optional[int] = None,
) -> Dict[str, Any]:
    """Write one profile run to JSON and return the payload."""
    payload: Dict[str, Any] = {"record_id": record_id, "sequence_length": sequence_length}
    payload.update(profile_to_dict(result))
    _write_json(json_path, payload)
    return payload


def export_comparison_to_json(
    cmp: ComparisonResult,
    json_path: Path,
    record_a: str,
    record_b: str,
    extra: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"record_a": record_a, "record_b": record_b}
    if extra:
        payload.update(extra)
    payload.update(comparison_to_dict(cmp))
    _write_json(json_path, payload)
    return payload

