"""In-memory snapshot accessor over pulse-survey records."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pulse_engine.schema import Person, Recognition, Submission, Task


@dataclass
class Snapshot:
    """Read-only view of the store used by every rollup.

    Rollups only call the query methods below, so any object exposing the
    same methods (for example one backed by a database session) can be passed
    instead. Errors raised by such an accessor propagate to the caller.
    """

    person_rows: list[Person] = field(default_factory=list)
    submission_rows: list[Submission] = field(default_factory=list)
    task_rows: list[Task] = field(default_factory=list)
    recognition_rows: list[Recognition] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._by_id = {person.id: person for person in self.person_rows}
        self._by_email = {person.email: person for person in self.person_rows}
        self._submissions_by_user: dict[str, list[Submission]] = defaultdict(list)
        for submission in self.submission_rows:
            self._submissions_by_user[submission.user_id].append(submission)

    def persons(self) -> list[Person]:
        return list(self.person_rows)

    def person_by_id(self, person_id: str) -> Optional[Person]:
        return self._by_id.get(person_id)

    def person_by_email(self, email: str) -> Optional[Person]:
        return self._by_email.get(email)

    def direct_reports(self, manager_email: str) -> list[Person]:
        return [person for person in self.person_rows if person.manager_email == manager_email]

    def submissions(self) -> list[Submission]:
        return list(self.submission_rows)

    def submissions_for(self, user_id: str) -> list[Submission]:
        """Submissions for ``user_id``, newest first by ``created_at``."""

        return sorted(self._submissions_by_user.get(user_id, []), key=lambda s: s.created_at, reverse=True)

    def tasks(self) -> list[Task]:
        return list(self.task_rows)

    def recognitions_between(self, start: datetime, end: datetime) -> list[Recognition]:
        return [r for r in self.recognition_rows if start <= r.created_at <= end]
