"""Month-granularity period tokens ("Feb-2026") and time windows."""

from __future__ import annotations

import re
from datetime import datetime

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_TOKEN_RE = re.compile(r"([A-Z][a-z]{2})-([0-9]{4})")

_COMPARE_OFFSETS = {"current": None, "month": 1, "quarter": 3}


class InvalidPeriodError(ValueError):
    """Raised when a period token is not of the form ``Mon-YYYY``."""


def parse_period(token: str) -> tuple[int, int]:
    """Return ``(year, month_index)`` with a zero-based month index."""

    match = _TOKEN_RE.fullmatch(token) if isinstance(token, str) else None
    if match is None or match.group(1) not in MONTHS:
        raise InvalidPeriodError(f"Invalid period token {token!r}, expected e.g. 'Feb-2026'")
    return int(match.group(2)), MONTHS.index(match.group(1))


def format_period(year: int, month_index: int) -> str:
    return f"{MONTHS[month_index]}-{year:04d}"


def offset_period(token: str, n: int) -> str:
    """Shift ``token`` back by ``n`` whole months (forward when ``n`` is negative)."""

    year, month_index = parse_period(token)
    year_shift, month_index = divmod(month_index - n, 12)
    return format_period(year + year_shift, month_index)


def last_n_periods(token: str, n: int) -> list[str]:
    """Return ``n`` tokens, oldest first, ending with ``token``."""

    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    return [offset_period(token, i) for i in range(n - 1, -1, -1)]


def period_for(moment: datetime) -> str:
    return format_period(moment.year, moment.month - 1)


def comparison_period(token: str, mode: str) -> str | None:
    """Resolve a compare selector (current / month / quarter) to the baseline period."""

    if mode not in _COMPARE_OFFSETS:
        raise ValueError(f"Unknown compare mode '{mode}'")
    parse_period(token)
    offset = _COMPARE_OFFSETS[mode]
    if offset is None:
        return None
    return offset_period(token, offset)


def window_bounds(range_name: str, now: datetime) -> tuple[datetime, datetime]:
    """Return ``(start, end)`` for a named recognition window ending at ``now``."""

    if range_name == "month":
        start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    elif range_name == "quarter":
        quarter_start_month = ((now.month - 1) // 3) * 3 + 1
        start = now.replace(month=quarter_start_month, day=1, hour=0, minute=0, second=0, microsecond=0)
    elif range_name == "year":
        start = now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    elif range_name == "all":
        start = datetime.min.replace(tzinfo=now.tzinfo)
    else:
        raise ValueError(f"Unknown range '{range_name}'")
    return start, now
