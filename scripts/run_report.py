"""Build a pulse analytics report from a JSON snapshot or a CSV directory."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pulse_engine.adapters import csv_adapter, json_adapter
from pulse_engine.config import configure_logging, load_config
from pulse_engine.report import build_report

logger = logging.getLogger(__name__)


def _load_snapshot(path: Path):
    if path.is_dir():
        return csv_adapter.parse(str(path))
    if path.suffix.lower() == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input, expected a .json file or a directory of CSV files")


def main() -> None:
    config = load_config()
    configure_logging(config.log_level)

    parser = argparse.ArgumentParser(description="Run pulse-engine analytics report")
    parser.add_argument("--data", default=config.data_path, help="Path to JSON snapshot or CSV directory")
    parser.add_argument("--period", help="Reference period, e.g. Feb-2026 (defaults to the current month)")
    parser.add_argument("--compare", default=config.compare_mode, choices=["current", "month", "quarter"])
    parser.add_argument("--range", default=config.leaderboard_range, choices=["month", "quarter", "year", "all"])
    args = parser.parse_args()

    try:
        snapshot = _load_snapshot(Path(args.data))
        report = build_report(
            snapshot,
            now=datetime.now(),
            period=args.period,
            compare_mode=args.compare,
            range_name=args.range,
            trend_months=config.trend_months,
            podium_size=config.podium_size,
        )
    except ValueError as exc:
        logger.error("Report failed: %s", exc)
        sys.exit(1)

    print(json.dumps(report, indent=2))

    outputs_dir = Path("outputs")
    outputs_dir.mkdir(parents=True, exist_ok=True)
    out_path = outputs_dir / "pulse_report.json"
    out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Saved pulse report to {out_path}")


if __name__ == "__main__":
    main()
