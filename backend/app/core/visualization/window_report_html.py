# File: backend/app/core/visualization/window_report_html.py
# Version: v0.1.0
"""
Render a printable HTML diagnostic report for one scored profile window.

Creates a single, self-contained HTML with:
- Header (engine, threshold used, deterministic report id)
- Methodology paragraph (nearest-neighbor model, salt correction in use)
- Window details (coordinates, combined score, labels, Tm, sequence)
- Top-3 feature attribution bars
- Rule-based biological hypothesis text

The report id is a content hash of the window, so rendering the same window
twice gives the same document.
"""
from __future__ import annotations

import hashlib
import html
from pathlib import Path
from typing import Optional

from backend.app.core.profile.models import AnalysisWindow, AnomalyType, Feature
from backend.app.core.profile.parameters import ProfileParameters

_Z_AXES = (Feature.ZX, Feature.ZY, Feature.ZZ)

DISCLAIMER = (
    "This interpretation is predictive and should be validated experimentally "
    "(e.g., ChIP-seq or ATAC-seq)."
)


def _fmt_float(x: float, nd: int = 3) -> str:
    return f"{float(x):.{nd}f}"


def build_report_id(window: AnalysisWindow) -> str:
    """GEN-<index>-<8 hex of sha256 over the window content>."""
    content = "|".join(
        [
            str(window.index),
            str(window.start),
            str(window.end),
            window.sequence,
            repr(window.combined_score),
            window.anomaly_type.value,
            window.archetype.value,
        ]
    )
    digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
    return f"GEN-{window.index}-{digest[:8]}"


def biological_hypothesis(window: AnalysisWindow) -> str:
    top = window.top_contributions(1)
    driver: Optional[Feature] = top[0].feature if top else None

    parts = [
        "Sequential biophysical modelling indicates this region carries regulatory character."
    ]
    if driver is Feature.BEND:
        parts.append(
            "A high bendability contribution suggests strong nucleosome-wrapping potential "
            "and an active role in 3D chromatin organisation."
        )
    if "M" in window.sequence:
        parts.append(
            "5-methylcytosine (M) raises helix stability and may recruit methyl-binding "
            "domain (MBD) proteins, consistent with locally silenced epigenetic state."
        )
    if window.anomaly_type is AnomalyType.THERMAL_DIP or driver is Feature.DG:
        parts.append(
            "A 'melting gate' or TATA-box-like signature is present: high thermal "
            "accessibility points to a likely enhancer or transcription start site."
        )
    elif window.anomaly_type is AnomalyType.STRUCTURAL_SHIFT or driver in _Z_AXES:
        parts.append(
            "Shifts in the helical displacement coordinates indicate bent DNA, a common "
            "recognition site for architectural chromatin proteins."
        )
    else:
        parts.append(
            "This multivariate deviation reflects unusual structural complexity and may "
            "serve as a mechanical anchor for regulatory protein complexes."
        )
    parts.append(DISCLAIMER)
    return " ".join(parts)


def render_window_report(
    window: AnalysisWindow,
    params: Optional[ProfileParameters] = None,
    record_id: str = "sequence",
) -> str:
    """Return the HTML document for one scored window."""
    p = params or ProfileParameters()
    report_id = build_report_id(window)

    bar_rows = []
    for c in window.top_contributions(3):
        pct = max(0.0, min(100.0, c.percentage))
        bar_rows.append(
            """
        <div class="driver">
          <div class="label mono">{name}</div>
          <div class="bar"><div class="fill" style="width: {width}%"></div><span>{pct}%</span></div>
        </div>
            """.format(
                name=html.escape(c.feature.key.replace("_per_base", "").upper()),
                width=_fmt_float(pct, 1),
                pct=_fmt_float(c.percentage, 1),
            )
        )

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Diagnostic Report {html.escape(report_id)}</title>
  <style>
    body {{ font-family: -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; margin: 24px; color: #0f172a; }}
    h1 {{ text-transform: uppercase; margin: 0.2em 0; }}
    h2 {{ border-left: 4px solid #0f172a; padding-left: 8px; text-transform: uppercase; font-size: 16px; }}
    table {{ border-collapse: collapse; margin: 8px 0; }}
    th, td {{ border-bottom: 1px solid #e2e8f0; padding: 4px 10px; text-align: left; }}
    .mono {{ font-family: ui-monospace, SFMono-Regular, Menlo, Consolas, monospace; font-size: 12px; }}
    .seq {{ word-break: break-all; background: #f8fafc; padding: 10px; }}
    .driver {{ display: flex; gap: 16px; align-items: center; margin: 6px 0; }}
    .driver .label {{ width: 120px; font-weight: bold; }}
    .bar {{ flex: 1; background: #f1f5f9; height: 20px; position: relative; }}
    .bar .fill {{ background: #1e293b; height: 100%; }}
    .bar span {{ position: absolute; right: 8px; top: 2px; font-size: 11px; color: #64748b; }}
    .small {{ color: #64748b; font-size: 11px; }}
    @media print {{ body {{ margin: 0; }} }}
  </style>
</head>
<body>
  <h1>Genomic Diagnostic Report</h1>
  <div class="small mono">ENGINE: NEAREST-NEIGHBOR PROFILE | SENSITIVITY: {_fmt_float(p.threshold, 1)}σ | RECORD: {html.escape(record_id)}</div>

  <h2>1. Methodology</h2>
  <p>Features are computed with nearest-neighbor thermodynamic parameters (SantaLucia, 1998)
  without smoothing. Entropy is salt-corrected ({html.escape(p.salt_model)} model;
  Na<sup>+</sup> {p.salt} M, Mg<sup>2+</sup> {p.salt_mg} M). The combined score is a
  standardized Euclidean distance over {len(Feature)} features (diagonal covariance).</p>

  <h2>2. Window {window.index}</h2>
  <table>
    <tr><th>Coordinates</th><td class="mono">{window.start} - {window.end} bp</td></tr>
    <tr><th>Combined score</th><td class="mono">{_fmt_float(window.combined_score)}</td></tr>
    <tr><th>Anomaly class</th><td>{html.escape(window.anomaly_type.value)}</td></tr>
    <tr><th>Archetype</th><td>{html.escape(window.archetype.value)}</td></tr>
    <tr><th>Tm</th><td class="mono">{_fmt_float(window.tm, 2)} °C</td></tr>
  </table>
  <div class="small">Sequence (M = 5mC)</div>
  <div class="mono seq">{html.escape(window.sequence)}</div>

  <h2>3. Feature attribution</h2>
  {''.join(bar_rows)}

  <h2>4. Predicted structural &amp; epigenetic impact</h2>
  <p>{html.escape(biological_hypothesis(window))}</p>

  <hr />
  <div class="small mono">REPORT {html.escape(report_id)} | Computational model for research use only.</div>
</body>
</html>
"""


def export_window_report(
    window: AnalysisWindow,
    out_html: Path,
    params: Optional[ProfileParameters] = None,
    record_id: str = "sequence",
) -> Path:
    out_html.parent.mkdir(parents=True, exist_ok=True)
    out_html.write_text(render_window_report(window, params, record_id), encoding="utf-8")
    return out_html
