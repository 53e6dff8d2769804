"""CSV adapter for pulse snapshots stored as one file per record type."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from pulse_engine.adapters.records import parse_person, parse_recognition, parse_submission, parse_task
from pulse_engine.snapshot import Snapshot

logger = logging.getLogger(__name__)

_FILES = {
    "persons.csv": parse_person,
    "submissions.csv": parse_submission,
    "tasks.csv": parse_task,
    "recognitions.csv": parse_recognition,
}


def _read(path: Path, parse_row) -> list:
    if not path.exists():
        return []
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return [parse_row(row, row_number) for row_number, row in enumerate(reader, start=2)]


def parse(directory: str) -> Snapshot:
    """Parse ``persons.csv``, ``submissions.csv``, ``tasks.csv`` and ``recognitions.csv``.

    Missing files load as empty record sets.
    """

    root = Path(directory)
    if not root.is_dir():
        raise ValueError(f"Snapshot directory not found: {directory}")

    persons, submissions, tasks, recognitions = (_read(root / name, parse_row) for name, parse_row in _FILES.items())
    logger.info(
        "Loaded %s: %d persons, %d submissions, %d tasks, %d recognitions",
        directory,
        len(persons),
        len(submissions),
        len(tasks),
        len(recognitions),
    )
    return Snapshot(
        person_rows=persons,
        submission_rows=submissions,
        task_rows=tasks,
        recognition_rows=recognitions,
    )
