"""Read-only grouped rollups over a snapshot.

Every rollup returns a ``RollupResult`` whose ``skipped`` field counts the input
rows that referenced a person missing from the snapshot. Those rows are left
out of the aggregates instead of failing the whole query.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Optional, TypeVar

from pulse_engine.metrics import is_overdue, mean_or_zero
from pulse_engine.periods import last_n_periods, parse_period
from pulse_engine.schema import PENDING, Person, Task

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "General"
GROUP_FIELDS = {"department": "dept_code", "project": "project_code"}
DIRECTORY_ROLES = ("Employee", "Manager")

RowT = TypeVar("RowT")


@dataclass
class RollupResult(Generic[RowT]):
    rows: list[RowT] = field(default_factory=list)
    skipped: int = 0


@dataclass
class GroupRollup:
    group: str
    period: str
    avg_sat_score: Optional[float]
    total_feedback_count: int
    distinct_submitter_count: int


@dataclass
class GroupTrend:
    group: str
    period: str
    comparison_period: str
    current_avg: Optional[float]
    comparison_avg: Optional[float]
    delta: Optional[float]


@dataclass
class ManagerRollup:
    manager_email: str
    total_tasks: int = 0
    pending_count: int = 0
    overdue_count: int = 0


@dataclass
class EmployeeRollup:
    user_id: str
    email: str
    first_name: str
    last_name: str
    role: str
    dept_code: Optional[str]
    project_code: Optional[str]
    manager_email: Optional[str]
    avg_sentiment: float = 0.0
    latest_sentiment: float = 0.0
    avg_sat_score: float = 0.0
    latest_sat_score: int = 0
    latest_mood_label: Optional[str] = None
    avg_workload: float = 0.0
    avg_work_life_balance: float = 0.0
    total_feedback_count: int = 0
    pending_action_count: int = 0
    total_action_count: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class KudosTally:
    user_id: str
    kudos_count: int


def _log_skips(query: str, skipped: int) -> None:
    if skipped:
        logger.warning("%s: skipped %d rows referencing unknown persons", query, skipped)


def _group_key(person: Person, group_by: str) -> str:
    return getattr(person, GROUP_FIELDS[group_by]) or DEFAULT_GROUP


def _matches_filters(
    person: Person,
    department: Optional[str],
    project: Optional[str],
    manager_email: Optional[str],
) -> bool:
    if department is not None and _group_key(person, "department") != department:
        return False
    if project is not None and _group_key(person, "project") != project:
        return False
    if manager_email is not None and person.manager_email != manager_email:
        return False
    return True


def group_rollup(
    snapshot,
    group_by: str,
    period: Optional[str] = None,
    department: Optional[str] = None,
    project: Optional[str] = None,
    manager_email: Optional[str] = None,
) -> RollupResult[GroupRollup]:
    """Average satisfaction and feedback counts per (group, period)."""

    if period is not None:
        parse_period(period)
    if group_by not in GROUP_FIELDS:
        raise ValueError(f"Unknown group_by '{group_by}', expected one of {sorted(GROUP_FIELDS)}")

    scores: dict[tuple[str, str], list[int]] = defaultdict(list)
    submitters: dict[tuple[str, str], set[str]] = defaultdict(set)
    skipped = 0

    for submission in snapshot.submissions():
        if period is not None and submission.period != period:
            continue
        person = snapshot.person_by_id(submission.user_id)
        if person is None:
            skipped += 1
            continue
        if not _matches_filters(person, department, project, manager_email):
            continue
        key = (_group_key(person, group_by), submission.period)
        scores[key].append(submission.sat_score)
        submitters[key].add(submission.user_id)

    _log_skips("group_rollup", skipped)
    rows = [
        GroupRollup(
            group=group,
            period=row_period,
            avg_sat_score=mean_or_zero(scores[(group, row_period)]),
            total_feedback_count=len(scores[(group, row_period)]),
            distinct_submitter_count=len(submitters[(group, row_period)]),
        )
        for group, row_period in sorted(scores, key=lambda k: (k[0], parse_period(k[1])))
    ]
    return RollupResult(rows=rows, skipped=skipped)


def group_trends(
    snapshot,
    group_by: str,
    period: str,
    comparison_period: str,
    department: Optional[str] = None,
    project: Optional[str] = None,
    manager_email: Optional[str] = None,
) -> RollupResult[GroupTrend]:
    """Delta of average satisfaction between ``period`` and ``comparison_period`` per group.

    The delta is ``None`` when either period has no submissions for the group,
    so a brand-new group is not mistaken for a stable one.
    """

    filters = {"department": department, "project": project, "manager_email": manager_email}
    current = group_rollup(snapshot, group_by, period=period, **filters)
    baseline = group_rollup(snapshot, group_by, period=comparison_period, **filters)

    current_avg = {row.group: row.avg_sat_score for row in current.rows}
    baseline_avg = {row.group: row.avg_sat_score for row in baseline.rows}

    rows = []
    for group in sorted(set(current_avg) | set(baseline_avg)):
        now_value = current_avg.get(group)
        then_value = baseline_avg.get(group)
        delta = None
        if now_value is not None and then_value is not None:
            delta = now_value - then_value
        rows.append(
            GroupTrend(
                group=group,
                period=period,
                comparison_period=comparison_period,
                current_avg=now_value,
                comparison_avg=then_value,
                delta=delta,
            )
        )
    return RollupResult(rows=rows, skipped=current.skipped + baseline.skipped)


def group_history(
    snapshot,
    group_by: str,
    period: str,
    months: int = 12,
    department: Optional[str] = None,
    project: Optional[str] = None,
    manager_email: Optional[str] = None,
) -> RollupResult[GroupRollup]:
    """Trailing ``months`` series per group, with gap rows for empty periods."""

    periods = last_n_periods(period, months)
    window = set(periods)
    full = group_rollup(
        snapshot, group_by, department=department, project=project, manager_email=manager_email
    )
    found = {(row.group, row.period): row for row in full.rows if row.period in window}
    groups = sorted({group for group, _ in found})

    rows = []
    for group in groups:
        for token in periods:
            rows.append(
                found.get(
                    (group, token),
                    GroupRollup(
                        group=group,
                        period=token,
                        avg_sat_score=None,
                        total_feedback_count=0,
                        distinct_submitter_count=0,
                    ),
                )
            )
    return RollupResult(rows=rows, skipped=full.skipped)


def manager_rollup(snapshot, now: datetime) -> RollupResult[ManagerRollup]:
    """Task totals per manager; overdue is evaluated against ``now`` on every call."""

    by_manager: dict[str, ManagerRollup] = {}
    skipped = 0

    for task in snapshot.tasks():
        if snapshot.person_by_email(task.manager_email) is None:
            skipped += 1
            continue
        row = by_manager.setdefault(task.manager_email, ManagerRollup(manager_email=task.manager_email))
        row.total_tasks += 1
        row.pending_count += 1 if task.status == PENDING else 0
        row.overdue_count += 1 if is_overdue(task.status, task.due_date, now) else 0

    _log_skips("manager_rollup", skipped)
    return RollupResult(rows=[by_manager[email] for email in sorted(by_manager)], skipped=skipped)


def _assignee_email(task: Task) -> str:
    return task.manager_email if task.assigned_to == "Manager" else task.employee_email


def matches_search(row, search: Optional[str]) -> bool:
    """Case-insensitive substring match over name, email, department and project."""

    if not search:
        return True
    needle = search.strip().lower()
    haystack = (
        row.first_name,
        row.last_name,
        row.full_name,
        row.email,
        row.dept_code or "",
        row.project_code or "",
    )
    return any(needle in value.lower() for value in haystack)


def employee_rollup(snapshot, search: Optional[str] = None) -> RollupResult[EmployeeRollup]:
    """Per-person sentiment, satisfaction and action-item aggregates."""

    known_ids = {person.id for person in snapshot.persons()}
    skipped = sum(1 for submission in snapshot.submissions() if submission.user_id not in known_ids)

    actions: dict[str, list[Task]] = defaultdict(list)
    for task in snapshot.tasks():
        assignee = _assignee_email(task)
        if snapshot.person_by_email(assignee) is None:
            skipped += 1
            continue
        actions[assignee].append(task)
    _log_skips("employee_rollup", skipped)

    rows = []
    for person in snapshot.persons():
        if person.role not in DIRECTORY_ROLES or not matches_search(person, search):
            continue

        submissions = snapshot.submissions_for(person.id)
        row = EmployeeRollup(
            user_id=person.id,
            email=person.email,
            first_name=person.first_name,
            last_name=person.last_name,
            role=person.role,
            dept_code=person.dept_code,
            project_code=person.project_code,
            manager_email=person.manager_email,
        )
        if submissions:
            latest = submissions[0]
            row.avg_sentiment = mean_or_zero(s.ai_sentiment for s in submissions if s.ai_sentiment is not None)
            row.latest_sentiment = latest.ai_sentiment or 0.0
            row.avg_sat_score = mean_or_zero(s.sat_score for s in submissions)
            row.latest_sat_score = latest.sat_score
            row.latest_mood_label = latest.mood_label
            row.avg_workload = mean_or_zero(s.workload_level for s in submissions)
            row.avg_work_life_balance = mean_or_zero(s.work_life_balance for s in submissions)
            row.total_feedback_count = len(submissions)

        assigned = actions.get(person.email, [])
        row.total_action_count = len(assigned)
        row.pending_action_count = sum(1 for task in assigned if task.status == PENDING)
        rows.append(row)

    return RollupResult(rows=rows, skipped=skipped)


def recognition_tally(snapshot, start: datetime, end: datetime) -> RollupResult[KudosTally]:
    """Kudos received per person within ``[start, end]``."""

    counts: dict[str, int] = defaultdict(int)
    skipped = 0
    for recognition in snapshot.recognitions_between(start, end):
        if snapshot.person_by_id(recognition.receiver_user_id) is None:
            skipped += 1
            continue
        counts[recognition.receiver_user_id] += 1

    _log_skips("recognition_tally", skipped)
    return RollupResult(
        rows=[KudosTally(user_id=user_id, kudos_count=count) for user_id, count in counts.items()],
        skipped=skipped,
    )
