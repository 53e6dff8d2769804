"""Employee performance directory: filtering, sorting and headline KPIs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pulse_engine.metrics import mean_or_zero
from pulse_engine.rollups import EmployeeRollup, matches_search

AT_RISK_SENTIMENT = 0.4

SORT_FIELDS = {
    "sentiment": "latest_sentiment",
    "satisfaction": "avg_sat_score",
    "submissionCount": "total_feedback_count",
    "workload": "avg_workload",
    "workLifeBalance": "avg_work_life_balance",
    "pendingActions": "pending_action_count",
}
SORT_ALIASES = {
    "submission_count": "submissionCount",
    "work_life_balance": "workLifeBalance",
    "pending_actions": "pendingActions",
}


@dataclass
class DirectorySummary:
    total: int = 0
    avg_latest_sentiment: float = 0.0
    avg_sat_score: float = 0.0
    at_risk_count: int = 0
    no_feedback_count: int = 0
    pending_action_count: int = 0


def _sort_key(sort_key: str):
    sort_key = SORT_ALIASES.get(sort_key, sort_key)
    if sort_key == "name":
        return lambda row: f"{row.first_name} {row.last_name}".casefold()
    if sort_key not in SORT_FIELDS:
        raise ValueError(f"Unknown sort key '{sort_key}'")
    attr = SORT_FIELDS[sort_key]
    return lambda row: getattr(row, attr)


def filter_directory(
    rows: list[EmployeeRollup],
    search: Optional[str] = None,
    department: Optional[str] = None,
    role: Optional[str] = None,
    sort_key: str = "sentiment",
    descending: bool = False,
) -> list[EmployeeRollup]:
    """Filter and sort an already-fetched employee rollup.

    The sort is stable in both directions, so rows with equal keys keep their
    input order.
    """

    key = _sort_key(sort_key)
    selected = [
        row
        for row in rows
        if matches_search(row, search)
        and (department is None or row.dept_code == department)
        and (role is None or row.role == role)
    ]
    return sorted(selected, key=key, reverse=descending)


def summarize_directory(rows: list[EmployeeRollup]) -> DirectorySummary:
    if not rows:
        return DirectorySummary()
    return DirectorySummary(
        total=len(rows),
        avg_latest_sentiment=mean_or_zero(row.latest_sentiment for row in rows),
        avg_sat_score=mean_or_zero(row.avg_sat_score for row in rows),
        at_risk_count=sum(1 for row in rows if 0 < row.latest_sentiment < AT_RISK_SENTIMENT),
        no_feedback_count=sum(1 for row in rows if row.total_feedback_count == 0),
        pending_action_count=sum(row.pending_action_count for row in rows),
    )
