"""Assemble every analytic into one plain-dict report."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Optional

from pulse_engine.accountability import score_managers
from pulse_engine.directory import filter_directory, summarize_directory
from pulse_engine.leaderboard import build_leaderboard
from pulse_engine.periods import comparison_period, period_for, window_bounds
from pulse_engine.risk_model import detect_burnout
from pulse_engine.rollups import employee_rollup, group_history, group_rollup, group_trends


def build_report(
    snapshot,
    now: datetime,
    period: Optional[str] = None,
    compare_mode: str = "month",
    range_name: str = "quarter",
    trend_months: int = 12,
    podium_size: int = 3,
) -> dict:
    """Run all rollups and scorers for ``period`` (defaults to the period containing ``now``).

    ``skipped_rows`` holds one count per section, so a row that several
    sections drop is reported under each of them rather than summed.
    """

    period = period or period_for(now)
    baseline = comparison_period(period, compare_mode)
    start, end = window_bounds(range_name, now)

    groups = {}
    group_skips = 0
    for group_by in ("department", "project"):
        current = group_rollup(snapshot, group_by, period=period)
        history = group_history(snapshot, group_by, period, months=trend_months)
        # Both groupings read the same submissions, so either count covers the section.
        group_skips = current.skipped
        section = {
            "current": [asdict(row) for row in current.rows],
            "history": [asdict(row) for row in history.rows],
        }
        if baseline is not None:
            trends = group_trends(snapshot, group_by, period, baseline)
            section["trends"] = [asdict(row) for row in trends.rows]
        groups[group_by] = section

    employees = employee_rollup(snapshot)
    directory = filter_directory(employees.rows, sort_key="sentiment")
    managers = score_managers(snapshot, now)
    leaderboard = build_leaderboard(snapshot, start, end, podium_size)

    return {
        "period": period,
        "comparison_period": baseline,
        "generated_at": now.isoformat(),
        "groups": groups,
        "burnout": [asdict(entry) for entry in detect_burnout(snapshot)],
        "managers": [asdict(score) for score in managers.rows],
        "leaderboard": {
            "range": range_name,
            "start": start.isoformat(),
            "end": end.isoformat(),
            "entries": [asdict(entry) for entry in leaderboard.rows],
        },
        "directory": {
            "summary": asdict(summarize_directory(directory)),
            "rows": [asdict(row) for row in directory],
        },
        "skipped_rows": {
            "groups": group_skips,
            "managers": managers.skipped,
            "leaderboard": leaderboard.skipped,
            "directory": employees.skipped,
        },
    }
