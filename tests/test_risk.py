from datetime import datetime, timedelta

from pulse_engine.risk_model import detect_burnout
from pulse_engine.schema import Person, Submission
from pulse_engine.snapshot import Snapshot

BASE = datetime(2026, 1, 15, 9, 0)


def history(user_id, *sentiments):
    return [
        Submission(user_id, f"{month}-2026", 7, "Neutral", 3, 3, sentiment, BASE + timedelta(days=30 * i))
        for i, (month, sentiment) in enumerate(zip(("Jan", "Feb", "Mar"), sentiments))
    ]


def sample_persons():
    return [
        Person("a", "a@example.com", "Employee", "ENG", None, "lead@example.com", first_name="Ada", last_name="Kim"),
        Person("b", "b@example.com", "Employee", "ENG", None, "lead@example.com", first_name="Bo", last_name="Lee"),
        Person("c", "c@example.com", "Employee", "OPS", None, "other@example.com", first_name="Cy", last_name="Fox"),
        Person("d", "d@example.com", "Employee", "OPS", None, "other@example.com", first_name="Di", last_name="Ray"),
        Person("e", "e@example.com", "Employee", None, None, None, first_name="Ed", last_name="Orr"),
    ]


def test_high_risk_drop_is_reported():
    snapshot = Snapshot(sample_persons(), history("a", 0.8, 0.5))
    risks = detect_burnout(snapshot)

    assert len(risks) == 1
    risk = risks[0]
    assert risk.user_id == "a"
    assert risk.full_name == "Ada Kim"
    assert risk.risk_tier == "High"
    assert risk.drop_percentage == 38
    assert risk.current_sentiment == 0.5
    assert risk.previous_sentiment == 0.8


def test_low_risk_and_short_history_are_excluded():
    submissions = history("b", 0.8, 0.7) + history("c", 0.9)
    risks = detect_burnout(Snapshot(sample_persons(), submissions))
    assert risks == []


def test_only_two_most_recent_submissions_count():
    submissions = history("a", 0.2, 0.9, 0.6)
    risks = detect_burnout(Snapshot(sample_persons(), list(reversed(submissions))))
    assert [(r.previous_sentiment, r.current_sentiment, r.risk_tier) for r in risks] == [(0.9, 0.6, "High")]


def test_medium_risk_and_ordering():
    submissions = history("e", 1.0, 0.8) + history("a", 0.8, 0.5)
    risks = detect_burnout(Snapshot(sample_persons(), submissions))

    assert [r.user_id for r in risks] == ["a", "e"]
    assert risks[1].risk_tier == "Medium"
    assert risks[1].drop_percentage == 20
    assert risks[1].department == "N/A"
    assert risks[1].manager_email == "N/A"


def test_missing_sentiment_reads_as_zero():
    submissions = history("a", None, 0.7) + history("b", 0.6, None)
    risks = detect_burnout(Snapshot(sample_persons(), submissions))

    assert [r.user_id for r in risks] == ["b"]
    assert risks[0].drop_percentage == 100
    assert risks[0].current_sentiment == 0.0


def test_manager_filter_limits_to_direct_reports():
    submissions = history("a", 0.8, 0.5) + history("d", 0.8, 0.4)
    snapshot = Snapshot(sample_persons(), submissions)

    assert [r.user_id for r in detect_burnout(snapshot, manager_email="lead@example.com")] == ["a"]
    assert [r.user_id for r in detect_burnout(snapshot)] == ["d", "a"]
