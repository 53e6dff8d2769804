from datetime import datetime

import pytest

from pulse_engine.metrics import (
    completion_rate,
    drop_percentage,
    health_tier,
    is_overdue,
    mean_or_zero,
    risk_tier,
    round_percent,
)

TIER_ORDER = {"Low": 0, "Medium": 1, "High": 2}
HEALTH_ORDER = {"Healthy": 0, "AtRisk": 1, "Critical": 2}


def test_drop_percentage_relative_decline():
    assert drop_percentage(0.8, 0.5) == pytest.approx(0.375)
    assert drop_percentage(0.5, 0.5) == 0.0
    assert drop_percentage(0.5, 0.0) == 1.0
    assert drop_percentage(0.5, 0.75) < 0


def test_drop_percentage_without_positive_baseline():
    assert drop_percentage(0.0, 0.4) == 0.0
    assert drop_percentage(-1.0, 0.4) == 0.0


def test_drop_percentage_never_exceeds_one():
    for previous in (0.1, 0.5, 1.0):
        for current in (0.0, 0.2, 0.9, 1.0):
            assert drop_percentage(previous, current) <= 1.0


def test_risk_tier_boundaries():
    assert risk_tier(0.31) == "High"
    assert risk_tier(0.30) == "Medium"
    assert risk_tier(0.2) == "Medium"
    assert risk_tier(0.15) == "Low"
    assert risk_tier(-0.4) == "Low"


def test_risk_tier_is_monotonic():
    drops = [-1.0, 0.0, 0.1, 0.15, 0.16, 0.3, 0.31, 0.9, 1.0]
    tiers = [TIER_ORDER[risk_tier(drop)] for drop in drops]
    assert tiers == sorted(tiers)


def test_health_tier():
    assert health_tier(0) == "Healthy"
    assert health_tier(1) == "AtRisk"
    assert health_tier(2) == "AtRisk"
    assert health_tier(3) == "Critical"
    tiers = [HEALTH_ORDER[health_tier(count)] for count in range(8)]
    assert tiers == sorted(tiers)


def test_completion_rate():
    assert completion_rate(0, 0) == 0
    assert completion_rate(4, 1) == 75
    assert completion_rate(8, 3) == 63
    assert completion_rate(3, 3) == 0
    assert completion_rate(3, 0) == 100
    for total in range(1, 12):
        for pending in range(total + 1):
            assert 0 <= completion_rate(total, pending) <= 100


def test_round_percent_rounds_halves_up():
    assert round_percent(0.375) == 38
    assert round_percent(0.625) == 63
    assert round_percent(0.2) == 20
    assert round_percent(1.0) == 100


def test_is_overdue():
    now = datetime(2026, 2, 10, 12, 0)
    assert is_overdue("Pending", datetime(2026, 2, 1), now)
    assert is_overdue("Blocked", datetime(2026, 2, 10, 11, 59), now)
    assert not is_overdue("Completed", datetime(2026, 2, 1), now)
    assert not is_overdue("InProgress", datetime(2026, 2, 11), now)
    assert not is_overdue("Pending", now, now)


def test_mean_or_zero():
    assert mean_or_zero([]) == 0.0
    assert mean_or_zero([1, 2]) == 1.5
    assert isinstance(mean_or_zero(iter([3, 4, 5])), float)
