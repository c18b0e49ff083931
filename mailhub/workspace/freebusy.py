"""
Tool: Free Slot Finder
Purpose: Compute free intervals in a window given busy intervals

Usage:
    from mailhub.workspace.freebusy import find_free_slots

    slots = find_free_slots(busy, time_min, time_max, timedelta(minutes=30))

Busy intervals may come from several calendars and may overlap. They are
not merged first: the cursor only ever moves forward, which absorbs overlap.
"""

from datetime import datetime, timedelta, timezone
from typing import Iterable

from mailhub.utils import parse_date


Interval = tuple[datetime, datetime]


def find_free_slots(
    busy: Iterable[Interval],
    time_min: datetime,
    time_max: datetime,
    duration: timedelta,
) -> list[Interval]:
    """
    Sweep the window and return free gaps of at least `duration`.

    Args:
        busy: (start, end) pairs, any order
        time_min: Window start
        time_max: Window end
        duration: Minimum slot length

    Returns:
        Chronological, non-overlapping (start, end) pairs
    """
    slots: list[Interval] = []
    cursor = time_min

    for start, end in sorted(busy, key=lambda interval: interval[0]):
        if start - cursor >= duration:
            slots.append((cursor, start))
        if end > cursor:
            cursor = end

    if time_max - cursor >= duration:
        slots.append((cursor, time_max))

    return slots


def parse_instant(value: str) -> datetime:
    """Parse an ISO 8601 timestamp. Naive values are taken as UTC."""
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid timestamp: {value}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_iso_z(value: datetime) -> str:
    """Format as UTC with millisecond precision, e.g. 2024-01-01T09:00:00.000Z."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
