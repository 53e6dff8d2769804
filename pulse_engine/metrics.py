"""Metric primitives shared by rollups and scorers."""

from __future__ import annotations

from datetime import datetime
from math import floor
from typing import Iterable

import numpy as np

from pulse_engine.schema import COMPLETED

HIGH_RISK_DROP = 0.30
MEDIUM_RISK_DROP = 0.15


def drop_percentage(previous: float, current: float) -> float:
    """Relative decline of ``current`` versus ``previous``; 0 without a positive baseline."""

    if previous > 0:
        return (previous - current) / previous
    return 0.0


def risk_tier(drop: float) -> str:
    if drop > HIGH_RISK_DROP:
        return "High"
    if drop > MEDIUM_RISK_DROP:
        return "Medium"
    return "Low"


def health_tier(overdue_count: int) -> str:
    if overdue_count == 0:
        return "Healthy"
    if overdue_count <= 2:
        return "AtRisk"
    return "Critical"


def round_percent(ratio: float) -> int:
    """Convert a ratio to an integer percent, rounding halves up."""

    return int(floor(ratio * 100 + 0.5))


def completion_rate(total: int, pending: int) -> int:
    if total == 0:
        return 0
    return round_percent((total - pending) / total)


def is_overdue(status: str, due_date: datetime, now: datetime) -> bool:
    return status != COMPLETED and due_date < now


def mean_or_zero(values: Iterable[float]) -> float:
    """Mean of ``values`` as a float, 0.0 when there are none."""

    data = list(values)
    if not data:
        return 0.0
    return float(np.mean(np.asarray(data, dtype=float)))
