"""Manager accountability scoring over tracked action items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pulse_engine.metrics import completion_rate, health_tier
from pulse_engine.rollups import ManagerRollup, RollupResult, manager_rollup

MANAGER_ROLES = ("Manager", "SeniorMgmt")


@dataclass
class ManagerScore:
    manager_email: str
    manager_name: str
    report_count: int
    total_tasks: int
    pending_count: int
    overdue_count: int
    completion_rate: int
    health_tier: str


def score_managers(snapshot, now: datetime) -> RollupResult[ManagerScore]:
    """Attach completion rate, health tier and report count to every manager.

    Managers without any tasks are still listed as Healthy with a 0% completion
    rate. Tasks naming an unknown manager are left out and counted in
    ``skipped``.
    """

    tasks = manager_rollup(snapshot, now)
    rollup = {row.manager_email: row for row in tasks.rows}
    for person in snapshot.persons():
        if person.role in MANAGER_ROLES:
            rollup.setdefault(person.email, ManagerRollup(manager_email=person.email))

    scores = []
    for email, row in rollup.items():
        person = snapshot.person_by_email(email)
        scores.append(
            ManagerScore(
                manager_email=email,
                manager_name=person.full_name.strip() or email.split("@")[0],
                report_count=len(snapshot.direct_reports(email)),
                total_tasks=row.total_tasks,
                pending_count=row.pending_count,
                overdue_count=row.overdue_count,
                completion_rate=completion_rate(row.total_tasks, row.pending_count),
                health_tier=health_tier(row.overdue_count),
            )
        )

    scores.sort(key=lambda score: (-score.overdue_count, score.manager_email))
    return RollupResult(rows=scores, skipped=tasks.skipped)
