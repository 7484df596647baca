"""Keyword and due-date matching for tag rules."""
from datetime import date, datetime
from typing import Iterable, Optional, Union

from .types import DateRange

DueDate = Union[date, datetime, str, None]


def matches_keywords(content: str, keywords: Iterable[str]) -> bool:
    """True when any keyword occurs anywhere in ``content``.

    Plain substring search, so "art" matches "start". ``content`` is
    expected to be lowercase already.
    """
    return any(keyword.lower() in content for keyword in keywords)


def as_date(value: DueDate) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Accept both "2024-05-01" and full ISO datetimes
    return date.fromisoformat(value[:10])


def days_difference(due_date: DueDate, today: Optional[date] = None) -> int:
    """Signed number of calendar days from today to the due date."""
    due = as_date(due_date)
    if today is None:
        today = date.today()
    elif isinstance(today, datetime):
        today = today.date()
    return (due - today).days


def in_range(due_date: DueDate, date_range: Optional[DateRange], today: Optional[date] = None) -> bool:
    if due_date in (None, "") or date_range is None or not date_range.enabled:
        return False

    diff = days_difference(due_date, today)
    is_after_start = date_range.start_days is None or diff >= date_range.start_days
    is_before_end = date_range.end_days is None or diff <= date_range.end_days
    return is_after_start and is_before_end
