"""Demo script for pulse-engine."""

import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from pulse_engine.accountability import score_managers
from pulse_engine.adapters.json_adapter import parse
from pulse_engine.leaderboard import build_leaderboard
from pulse_engine.periods import window_bounds
from pulse_engine.risk_model import detect_burnout


def main() -> None:
    snapshot = parse("examples/sample_snapshot.json")
    now = datetime(2026, 10, 19, 12, 0)
    start, end = window_bounds("quarter", now)
    print("Burnout:", detect_burnout(snapshot))
    print("Managers:", score_managers(snapshot, now).rows)
    print("Leaderboard:", build_leaderboard(snapshot, start, end).rows)


if __name__ == "__main__":
    main()
