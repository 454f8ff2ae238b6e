"""Module: dates.

Calendar-day helpers. Every datetime the store sees is naive and expressed in
server-local time, so day boundaries are local midnights.
"""

from datetime import date, datetime, time, timedelta

DATE_TOKENS = ("today", "tomorrow")


def to_local_naive(value: datetime) -> datetime:
    # Aware values are shifted into local time, then the tzinfo is dropped.
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def start_of_day(value: datetime | date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: datetime | date) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.max)


def same_day(a: datetime, b: datetime) -> bool:
    return start_of_day(a) == start_of_day(b)


def parse_date_param(value: str, now: datetime | None = None) -> datetime:
    """
    Resolve a ``:date`` path segment.

    ``today`` and ``tomorrow`` are relative to ``now``; anything else must be an
    ISO-8601 date or datetime. Raises ValueError for anything unparseable.
    """
    now = now or datetime.now()
    token = value.strip().lower()
    if token == "today":
        return now
    if token == "tomorrow":
        return now + timedelta(days=1)
    return to_local_naive(datetime.fromisoformat(value.strip()))
