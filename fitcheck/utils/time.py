from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union


DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    # Backend rows carry either YYYY-MM-DD or a full ISO timestamp.
    try:
        return datetime.strptime(s[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def days_since(past: date, today: date) -> int:
    return (today - past).days


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def clamp_to_today(due: date, today: date) -> date:
    """A due date that already passed is due now."""
    return today if due < today else due
