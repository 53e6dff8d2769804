"""JSON adapter for pulse snapshots."""

from __future__ import annotations

import json
import logging

from pulse_engine.adapters.records import parse_person, parse_recognition, parse_submission, parse_task
from pulse_engine.snapshot import Snapshot

logger = logging.getLogger(__name__)

_SECTIONS = {
    "persons": parse_person,
    "submissions": parse_submission,
    "tasks": parse_task,
    "recognitions": parse_recognition,
}


def parse(file_path: str) -> Snapshot:
    """Parse a JSON document with ``persons``/``submissions``/``tasks``/``recognitions`` arrays."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object of record arrays")

    sections = {}
    for name, parse_item in _SECTIONS.items():
        items = payload.get(name, [])
        if not isinstance(items, list):
            raise ValueError(f"JSON section '{name}' must be a list of objects")
        sections[name] = [parse_item(item, i) for i, item in enumerate(items, start=1)]

    logger.info(
        "Loaded %s: %d persons, %d submissions, %d tasks, %d recognitions",
        file_path,
        *(len(sections[name]) for name in _SECTIONS),
    )
    return Snapshot(
        person_rows=sections["persons"],
        submission_rows=sections["submissions"],
        task_rows=sections["tasks"],
        recognition_rows=sections["recognitions"],
    )
