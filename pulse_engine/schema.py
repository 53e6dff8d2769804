"""Core data schema for pulse-survey records."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

MOOD_LABELS = ("Great", "Good", "Neutral", "Challenged", "Burned Out")
TASK_STATUSES = ("Pending", "InProgress", "Blocked", "Completed")
ASSIGNEE_KINDS = ("Employee", "Manager")
ROLES = ("Employee", "Manager", "SeniorMgmt")

PENDING = "Pending"
COMPLETED = "Completed"


@dataclass
class Submission:
    """One pulse-check response for a single period."""

    user_id: str
    period: str
    sat_score: int
    mood_label: str
    workload_level: int
    work_life_balance: int
    ai_sentiment: Optional[float]
    created_at: datetime


@dataclass
class Task:
    """Action item tracked between an employee and their manager."""

    id: str
    employee_email: str
    manager_email: str
    status: str
    due_date: datetime
    assigned_to: str


@dataclass
class Recognition:
    """Kudos given from one person to another."""

    giver_user_id: str
    receiver_user_id: str
    value_tag: str
    is_anonymous: bool
    created_at: datetime


@dataclass
class Person:
    """Reference data joined into every rollup."""

    id: str
    email: str
    role: str
    dept_code: Optional[str] = None
    project_code: Optional[str] = None
    manager_email: Optional[str] = None
    is_admin: bool = False
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
