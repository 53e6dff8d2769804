"""Row validation shared by the snapshot adapters."""

from __future__ import annotations

from datetime import datetime

from pulse_engine.periods import InvalidPeriodError, parse_period
from pulse_engine.schema import (
    ASSIGNEE_KINDS,
    MOOD_LABELS,
    ROLES,
    TASK_STATUSES,
    Person,
    Recognition,
    Submission,
    Task,
)

_REQUIRED = {
    "Person": ("id", "email", "role"),
    "Submission": (
        "user_id",
        "period",
        "sat_score",
        "mood_label",
        "workload_level",
        "work_life_balance",
        "created_at",
    ),
    "Task": ("id", "employee_email", "manager_email", "status", "due_date", "assigned_to"),
    "Recognition": ("giver_user_id", "receiver_user_id", "value_tag", "created_at"),
}

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no", ""}


def _check_required(entity: str, item: dict, index: int) -> None:
    missing = [name for name in _REQUIRED[entity] if item.get(name) in (None, "")]
    if missing:
        raise ValueError(f"{entity} {index}: missing required fields {missing}")


def _text(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _timestamp(entity: str, item: dict, name: str, index: int) -> datetime:
    value = item[name]
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"{entity} {index}: malformed {name}") from exc


def _bounded_int(entity: str, item: dict, name: str, index: int, low: int, high: int) -> int:
    try:
        value = int(item[name])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{entity} {index}: invalid {name}") from exc
    if not low <= value <= high:
        raise ValueError(f"{entity} {index}: {name} {value} outside {low}-{high}")
    return value


def _choice(entity: str, item: dict, name: str, index: int, allowed: tuple) -> str:
    value = str(item[name]).strip()
    if value not in allowed:
        raise ValueError(f"{entity} {index}: invalid {name} '{value}'")
    return value


def _flag(entity: str, item: dict, name: str, index: int) -> bool:
    value = item.get(name)
    if isinstance(value, bool):
        return value
    text = "" if value is None else str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{entity} {index}: invalid {name} '{value}'")


def parse_person(item: dict, index: int) -> Person:
    _check_required("Person", item, index)
    return Person(
        id=str(item["id"]).strip(),
        email=str(item["email"]).strip(),
        role=_choice("Person", item, "role", index, ROLES),
        dept_code=_text(item.get("dept_code")),
        project_code=_text(item.get("project_code")),
        manager_email=_text(item.get("manager_email")),
        is_admin=_flag("Person", item, "is_admin", index),
        first_name=_text(item.get("first_name")) or "",
        last_name=_text(item.get("last_name")) or "",
    )


def parse_submission(item: dict, index: int) -> Submission:
    _check_required("Submission", item, index)

    period = str(item["period"]).strip()
    try:
        parse_period(period)
    except InvalidPeriodError as exc:
        raise ValueError(f"Submission {index}: invalid period '{period}'") from exc

    sentiment_raw = item.get("ai_sentiment")
    sentiment = None
    if sentiment_raw not in (None, ""):
        try:
            sentiment = float(sentiment_raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Submission {index}: invalid ai_sentiment") from exc
        if not 0.0 <= sentiment <= 1.0:
            raise ValueError(f"Submission {index}: ai_sentiment {sentiment} outside 0-1")

    return Submission(
        user_id=str(item["user_id"]).strip(),
        period=period,
        sat_score=_bounded_int("Submission", item, "sat_score", index, 1, 10),
        mood_label=_choice("Submission", item, "mood_label", index, MOOD_LABELS),
        workload_level=_bounded_int("Submission", item, "workload_level", index, 1, 5),
        work_life_balance=_bounded_int("Submission", item, "work_life_balance", index, 1, 5),
        ai_sentiment=sentiment,
        created_at=_timestamp("Submission", item, "created_at", index),
    )


def parse_task(item: dict, index: int) -> Task:
    _check_required("Task", item, index)
    return Task(
        id=str(item["id"]).strip(),
        employee_email=str(item["employee_email"]).strip(),
        manager_email=str(item["manager_email"]).strip(),
        status=_choice("Task", item, "status", index, TASK_STATUSES),
        due_date=_timestamp("Task", item, "due_date", index),
        assigned_to=_choice("Task", item, "assigned_to", index, ASSIGNEE_KINDS),
    )


def parse_recognition(item: dict, index: int) -> Recognition:
    _check_required("Recognition", item, index)
    return Recognition(
        giver_user_id=str(item["giver_user_id"]).strip(),
        receiver_user_id=str(item["receiver_user_id"]).strip(),
        value_tag=str(item["value_tag"]).strip(),
        is_anonymous=_flag("Recognition", item, "is_anonymous", index),
        created_at=_timestamp("Recognition", item, "created_at", index),
    )
