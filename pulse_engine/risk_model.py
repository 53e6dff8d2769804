"""Burnout risk detection from sentiment drops between consecutive submissions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pulse_engine.metrics import drop_percentage, risk_tier, round_percent

ALERT_TIERS = ("Medium", "High")


@dataclass
class BurnoutRisk:
    """Alert entry for a person whose latest sentiment fell noticeably."""

    user_id: str
    full_name: str
    department: str
    manager_email: str
    current_sentiment: float
    previous_sentiment: float
    drop_percentage: int
    risk_tier: str


def detect_burnout(snapshot, manager_email: Optional[str] = None) -> list[BurnoutRisk]:
    """Return Medium and High risk entries, largest drop first.

    Persons with fewer than two submissions have no history to compare and are
    left out, as are persons whose drop is Low. A missing sentiment score reads
    as 0.
    """

    persons = snapshot.direct_reports(manager_email) if manager_email else snapshot.persons()

    scored: list[tuple[float, BurnoutRisk]] = []
    for person in persons:
        submissions = snapshot.submissions_for(person.id)
        if len(submissions) < 2:
            continue

        current = submissions[0].ai_sentiment or 0.0
        previous = submissions[1].ai_sentiment or 0.0
        drop = drop_percentage(previous, current)
        tier = risk_tier(drop)
        if tier not in ALERT_TIERS:
            continue

        scored.append(
            (
                drop,
                BurnoutRisk(
                    user_id=person.id,
                    full_name=person.full_name,
                    department=person.dept_code or "N/A",
                    manager_email=person.manager_email or "N/A",
                    current_sentiment=current,
                    previous_sentiment=previous,
                    drop_percentage=round_percent(drop),
                    risk_tier=tier,
                ),
            )
        )

    scored.sort(key=lambda item: item[0], reverse=True)
    return [entry for _, entry in scored]
