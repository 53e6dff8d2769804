"""Recognition leaderboard with standard competition ranking."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence, TypeVar

from pulse_engine.rollups import RollupResult, recognition_tally

PODIUM_SIZE = 3

T = TypeVar("T")


@dataclass
class LeaderboardEntry:
    rank: int
    user_id: str
    full_name: str
    dept_code: str
    kudos_count: int


def competition_rank(items: Sequence[T], key: Callable[[T], float]) -> list[tuple[int, T]]:
    """Rank items already sorted descending by ``key``.

    Tied items share a rank and the next distinct value takes its 1-based
    position, so two items tied for first are followed by rank 3.
    """

    ranked: list[tuple[int, T]] = []
    rank = 0
    for position, item in enumerate(items, start=1):
        if position == 1 or key(item) != key(items[position - 2]):
            rank = position
        ranked.append((rank, item))
    return ranked


def build_leaderboard(
    snapshot, start: datetime, end: datetime, podium_size: int = PODIUM_SIZE
) -> RollupResult[LeaderboardEntry]:
    """Top recognised people in ``[start, end]``, keeping every tie at the cutoff rank."""

    result = recognition_tally(snapshot, start, end)
    tally = sorted(result.rows, key=lambda row: row.kudos_count, reverse=True)

    entries = []
    for rank, row in competition_rank(tally, key=lambda row: row.kudos_count):
        if rank > podium_size:
            break
        person = snapshot.person_by_id(row.user_id)
        entries.append(
            LeaderboardEntry(
                rank=rank,
                user_id=row.user_id,
                full_name=person.full_name,
                dept_code=person.dept_code or "",
                kudos_count=row.kudos_count,
            )
        )
    return RollupResult(rows=entries, skipped=result.skipped)
