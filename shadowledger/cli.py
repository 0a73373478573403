"""
ShadowLedger command line.

Usage:
  shadowledger generate --seed 42 --output snapshot.json
  shadowledger score snapshot.json --output results.json
  shadowledger score snapshot.json --output results.csv --format csv
  shadowledger sectors snapshot.json

Detector thresholds come from SHADOWLEDGER_* env vars (or .env); engine
settings likewise. Logs go to stderr, results to the output file or stdout.
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from shadowledger.analysis_engine import DetectionModule, DetectionResult, run_snapshot
from shadowledger.analytics import all_sector_metrics
from shadowledger.config import get_settings, load_detection_config_from_env
from shadowledger.core.exceptions import ShadowLedgerError
from shadowledger.ledger_logging import configure_structlog, get_logger
from shadowledger.snapshot import (
    GeneratorConfig,
    generate_snapshot,
    load_snapshot,
    snapshot_to_records,
)

logger = get_logger(__name__)


def _write_json(payload: Any, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        sys.stdout.write(text + "\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")


def results_frame(results: Sequence[DetectionResult]) -> pd.DataFrame:
    """One flat row per entity: profile, scores, per-module flags and the explanation."""
    rows: list[dict[str, Any]] = []
    for r in results:
        row = r.to_dict()
        row.pop("details", None)
        row["network_distance"] = r.proximity.display
        for m in DetectionModule:
            row[f"{m.value}_flags"] = "; ".join(r.module(m).flags)
        row["explanation"] = " ".join(r.explanations)
        rows.append(row)
    return pd.DataFrame(rows)


def _cmd_generate(args: argparse.Namespace) -> int:
    cfg = GeneratorConfig().scaled(args.scale) if args.scale != 1.0 else GeneratorConfig()
    snapshot = generate_snapshot(seed=args.seed, config=cfg, now=args.now)
    _write_json(snapshot_to_records(snapshot), args.output)
    logger.info(
        "snapshot_written",
        seed=args.seed,
        output=str(args.output) if args.output else "stdout",
    )
    return 0


def _score(args: argparse.Namespace) -> list[DetectionResult]:
    settings = get_settings()
    configure_structlog(settings.log_level, settings.log_format)
    config = load_detection_config_from_env()
    snapshot = load_snapshot(args.snapshot)
    return run_snapshot(snapshot, config, settings=settings, now=args.now)


def _cmd_score(args: argparse.Namespace) -> int:
    results = _score(args)
    if args.format == "csv":
        df = results_frame(results)
        if args.output is None:
            df.to_csv(sys.stdout, index=False)
        else:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(args.output, index=False)
    else:
        _write_json([r.to_dict() for r in results], args.output)
    logger.info(
        "score_saved",
        entities=len(results),
        format=args.format,
        output=str(args.output) if args.output else "stdout",
    )
    return 0


def _cmd_sectors(args: argparse.Namespace) -> int:
    results = _score(args)
    now = time.time() if args.now is None else args.now
    metrics = all_sector_metrics(results, now=now)
    _write_json({name: m.to_dict() for name, m in metrics.items()}, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="shadowledger",
        description="Suspicion scoring and trust decay over an entity relationship graph",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Write a seeded synthetic snapshot as JSON")
    gen.add_argument("--seed", type=int, default=42, help="Random seed (default 42)")
    gen.add_argument("--scale", type=float, default=1.0, help="Multiply every entity count by this factor")
    gen.add_argument("--output", type=Path, default=None, help="Output JSON path (default stdout)")
    gen.add_argument("--now", type=float, default=None, help="Reference Unix time in seconds")
    gen.set_defaults(func=_cmd_generate)

    score = sub.add_parser("score", help="Run the detection engine over a snapshot")
    score.add_argument("snapshot", type=Path, help="Snapshot JSON path")
    score.add_argument("--output", type=Path, default=None, help="Output path (default stdout)")
    score.add_argument("--format", choices=("json", "csv"), default="json")
    score.add_argument("--now", type=float, default=None, help="Reference Unix time in seconds")
    score.set_defaults(func=_cmd_score)

    sectors = sub.add_parser("sectors", help="Score a snapshot and print per-sector metrics")
    sectors.add_argument("snapshot", type=Path, help="Snapshot JSON path")
    sectors.add_argument("--output", type=Path, default=None, help="Output JSON path (default stdout)")
    sectors.add_argument("--now", type=float, default=None, help="Reference Unix time in seconds")
    sectors.set_defaults(func=_cmd_sectors)
    return ap


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ShadowLedgerError as e:
        logger.error("cli_failed", command=args.command, error=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
