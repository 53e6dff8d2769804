from datetime import datetime
from pathlib import Path

import pytest

from pulse_engine.adapters.json_adapter import parse
from pulse_engine.report import build_report
from pulse_engine.schema import Person, Recognition, Submission, Task
from pulse_engine.snapshot import Snapshot

SAMPLE = Path(__file__).resolve().parents[1] / "examples" / "sample_snapshot.json"
NOW = datetime(2026, 10, 19, 12, 0)


@pytest.fixture
def report():
    return build_report(parse(str(SAMPLE)), now=NOW)


def test_report_periods(report):
    assert report["period"] == "Oct-2026"
    assert report["comparison_period"] == "Sep-2026"
    assert report["skipped_rows"] == {"groups": 0, "managers": 0, "leaderboard": 0, "directory": 0}


def test_report_department_trends(report):
    trends = {row["group"]: row for row in report["groups"]["department"]["trends"]}
    assert trends["ENG"]["current_avg"] == pytest.approx(6.0)
    assert trends["ENG"]["delta"] == pytest.approx(-0.5)
    assert trends["OPS"]["delta"] == pytest.approx(-2.5)


def test_report_project_history(report):
    history = report["groups"]["project"]["history"]
    assert {row["group"] for row in history} == {"CORE", "MOBILE", "FLEET", "General"}
    assert len(history) == 4 * 12


def test_report_burnout(report):
    burnout = [(row["user_id"], row["risk_tier"], row["drop_percentage"]) for row in report["burnout"]]
    assert burnout == [("u4", "High", 38), ("u5", "Medium", 20)]


def test_report_managers(report):
    managers = [(row["manager_email"], row["completion_rate"], row["health_tier"]) for row in report["managers"]]
    assert managers == [
        ("ben.ortiz@example.com", 67, "AtRisk"),
        ("ava.chen@example.com", 0, "Healthy"),
        ("cara.singh@example.com", 50, "Healthy"),
    ]


def test_report_leaderboard(report):
    entries = [(row["user_id"], row["rank"]) for row in report["leaderboard"]["entries"]]
    assert entries == [("u6", 1), ("u4", 1), ("u5", 3), ("u7", 3)]
    assert report["leaderboard"]["start"] == "2026-10-01T00:00:00"


def test_report_directory(report):
    summary = report["directory"]["summary"]
    assert summary["total"] == 6
    assert summary["no_feedback_count"] == 1
    assert summary["at_risk_count"] == 1
    assert summary["pending_action_count"] == 2


def test_report_without_comparison():
    report = build_report(parse(str(SAMPLE)), now=NOW, period="Sep-2026", compare_mode="current")
    assert report["comparison_period"] is None
    assert "trends" not in report["groups"]["department"]


def test_report_counts_skipped_rows_per_section():
    persons = [
        Person("u1", "ana@example.com", "Employee", "ENG", manager_email="mia@example.com", first_name="Ana", last_name="Lopez"),
        Person("m1", "mia@example.com", "Manager", "ENG", first_name="Mia", last_name="Wong"),
    ]
    submissions = [
        Submission("u1", "Oct-2026", 7, "Good", 3, 3, 0.7, datetime(2026, 10, 2)),
        Submission("ghost", "Oct-2026", 2, "Burned Out", 5, 1, 0.1, datetime(2026, 10, 3)),
    ]
    tasks = [
        Task("t1", "ana@example.com", "mia@example.com", "Pending", datetime(2026, 11, 1), "Employee"),
        Task("t2", "nobody@example.com", "mia@example.com", "Pending", datetime(2026, 11, 1), "Employee"),
        Task("t3", "ana@example.com", "gone@example.com", "Pending", datetime(2026, 11, 1), "Employee"),
    ]
    recognitions = [Recognition("u1", "ghost", "Grit", False, datetime(2026, 10, 5))]

    report = build_report(Snapshot(persons, submissions, tasks, recognitions), now=NOW)

    assert report["skipped_rows"] == {"groups": 1, "managers": 1, "leaderboard": 1, "directory": 2}
