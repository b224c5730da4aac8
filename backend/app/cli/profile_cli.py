# File: backend/app/cli/profile_cli.py
# Version: v0.1.0

"""
Command-line interface for biophysical window profiling.

- Profiles every record of --fasta and writes <id>_profile.json.
- With --compare-fasta, compares each record against the first record of
  that file and writes <id>_comparison.json.
- With --reports, writes one HTML report per anomalous window into
  <id>_reports/.
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from Bio import SeqIO
from pydantic import ValidationError

from backend.app.config.config_profile import load_params
from backend.app.core.export.profile_json_exporter import (
    export_comparison_to_json,
    export_profile_to_json,
)
from backend.app.core.profile.batch import BatchOptions
from backend.app.core.profile.engine import ProfileEngine
from backend.app.core.profile.models import AnalysisResult, SequenceValidationError
from backend.app.core.profile.parameters import ProfileParameters
from backend.app.core.visualization.window_report_html import export_window_report


def _build_params(args: argparse.Namespace) -> ProfileParameters:
    base = load_params(args.params)
    overrides = {
        "threshold": args.threshold,
        "window_size": args.window,
        "stride": args.stride,
        "salt": args.salt,
        "salt_mg": args.salt_mg,
        "salt_model": args.salt_model,
    }
    data = base.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ProfileParameters.model_validate(data)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Biophysical window profile CLI")
    p.add_argument("--fasta", required=True, type=Path, help="Input FASTA with one or more records")
    p.add_argument("--compare-fasta", dest="compare_fasta", type=Path,
                   help="Reference FASTA; its first record is compared against every --fasta record")
    p.add_argument("--outdir", required=True, type=Path, help="Output directory")
    p.add_argument("--params", type=Path, help="Parameter JSON (defaults if omitted)")
    p.add_argument("--threshold", type=float, help="Anomaly threshold (z multiple)")
    p.add_argument("--window", type=int, help="Window size W")
    p.add_argument("--stride", type=int, help="Stride S")
    p.add_argument("--salt", type=float, help="Monovalent salt (M)")
    p.add_argument("--salt-mg", dest="salt_mg", type=float, help="Mg2+ (M)")
    p.add_argument("--salt-model", dest="salt_model", choices=["effective", "monovalent"],
                   help="Entropy salt-correction formula")
    p.add_argument("--workers", type=int, default=1, help="Worker threads (0 = auto)")
    p.add_argument("--reports", action="store_true", help="Write HTML reports for anomalous windows")
    p.add_argument("--log-level", dest="log_level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level (default: INFO)")
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))
    log = logging.getLogger("profile_cli")

    # Startup banner
    log.info("=== profile_cli ===")
    log.info("FASTA=%s | COMPARE=%s | OUTDIR=%s | LOG=%s",
             str(args.fasta), str(args.compare_fasta) if args.compare_fasta else "None",
             str(args.outdir), args.log_level)

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    try:
        params = _build_params(args)
    except ValidationError as e:
        log.error("✗ Invalid parameters: %s", e)
        raise SystemExit(1)
    engine = ProfileEngine(params, options=BatchOptions(workers=args.workers), logger=log)
    log.info("Parameters: %s", params.model_dump())

    reference: Optional[AnalysisResult] = None
    reference_id = ""
    n_fail = 0
    if args.compare_fasta:
        ref_rec = next(SeqIO.parse(str(args.compare_fasta), "fasta"), None)
        if ref_rec is None:
            log.error("✗ No records in %s", args.compare_fasta)
            raise SystemExit(1)
        reference_id = ref_rec.id
        try:
            reference = engine.analyze(str(ref_rec.seq))
        except SequenceValidationError as e:
            log.error("✗ Failed reference %s: %s", reference_id, e)
            raise SystemExit(1)

    n_ok = 0
    for rec in SeqIO.parse(str(args.fasta), "fasta"):
        record_id = rec.id
        seq = str(rec.seq)
        log.info("Processing %s (%d bp)", record_id, len(seq))
        try:
            result = engine.analyze(seq)
        except SequenceValidationError as e:
            log.error("✗ Failed %s: %s", record_id, e)
            n_fail += 1
            continue

        json_path = outdir / f"{record_id}_profile.json"
        export_profile_to_json(result, json_path, record_id, sequence_length=len(seq))
        log.info("Profile written: %s", json_path)

        if reference is not None:
            cmp = engine.compare(reference, result)
            cmp_path = outdir / f"{record_id}_comparison.json"
            export_comparison_to_json(cmp, cmp_path, reference_id, record_id)
            log.info("Comparison written: %s", cmp_path)

        if args.reports:
            report_dir = outdir / f"{record_id}_reports"
            anomalous = [w for w in result.windows if w.is_anomalous]
            for w in anomalous:
                export_window_report(w, report_dir / f"window_{w.index}.html", params, record_id)
            log.info("Reports: %d anomalous windows → %s", len(anomalous), report_dir)

        log.info("✓ Completed %s", record_id)
        n_ok += 1

    log.info("Done: %d ok, %d failed", n_ok, n_fail)
    if n_fail > 0:
        raise SystemExit(1)
    raise SystemExit(0)


if __name__ == "__main__":
    main()
