# File: backend/tests/test_window_report.py
# Version: v0.1.0
"""
Tests for the per-window HTML diagnostic report.
"""

from __future__ import annotations

from backend.app.core.profile.engine import analyze_sequence
from backend.app.core.profile.models import (
    AnalysisWindow,
    AnomalyType,
    BiophysicalFeatures,
    Feature,
    FeatureContribution,
)
from backend.app.core.visualization.window_report_html import (
    DISCLAIMER,
    biological_hypothesis,
    build_report_id,
    export_window_report,
    render_window_report,
)


def _window(seq="ACGTACGTACGTACG", driver=Feature.GC, anomaly=AnomalyType.NONE) -> AnalysisWindow:
    w = AnalysisWindow(index=4, start=20, end=35, sequence=seq,
                       features=BiophysicalFeatures.zeros(), tm=55.0)
    w.contributions = [FeatureContribution(feature=driver, score=1.0, percentage=100.0)]
    w.anomaly_type = anomaly
    w.combined_score = 1.0
    return w


def test_report_id_is_deterministic_content_hash():
    a = _window()
    b = _window()
    assert build_report_id(a) == build_report_id(b)
    assert build_report_id(a).startswith("GEN-4-")
    c = _window(seq="ACGTACGTACGTACC")
    assert build_report_id(c) != build_report_id(a)


def test_hypothesis_rules():
    thermal = biological_hypothesis(_window(anomaly=AnomalyType.THERMAL_DIP))
    assert "melting gate" in thermal
    assert thermal.endswith(DISCLAIMER)

    bent = biological_hypothesis(_window(driver=Feature.ZY))
    assert "bent DNA" in bent

    shift = biological_hypothesis(_window(anomaly=AnomalyType.STRUCTURAL_SHIFT))
    assert "bent DNA" in shift

    bend = biological_hypothesis(_window(driver=Feature.BEND))
    assert "nucleosome" in bend
    assert "multivariate deviation" in bend

    methyl = biological_hypothesis(_window(seq="ACGMACGMACGTACG"))
    assert "5-methylcytosine" in methyl


def test_render_escapes_record_id():
    html_doc = render_window_report(_window(), record_id="<chr1>")
    assert "&lt;chr1&gt;" in html_doc
    assert "<chr1>" not in html_doc


def test_export_real_window(tmp_path):
    res = analyze_sequence("ACGT" * 10)
    w = res.windows[2]
    out = export_window_report(w, tmp_path / "r" / "window_2.html", res.parameters, "rec")
    text = out.read_text(encoding="utf-8")
    assert "Window 2" in text
    assert build_report_id(w) in text
    # top-3 attribution bars only
    assert text.count('class="driver"') == 3
