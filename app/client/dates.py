"""Due-date badges shown next to each task."""
from datetime import date, datetime
from typing import NamedTuple, Optional


class DateBadge(NamedTuple):
    text: str
    css_class: str
    date: str


def parse_day(value: Optional[str]) -> Optional[date]:
    """Calendar day of an ISO date or datetime string, None when absent."""
    if not value:
        return None
    return date.fromisoformat(value[:10])


def format_absolute(day: date) -> str:
    # en-US short form, e.g. "Oct 28, 2026"
    return f"{day:%b} {day.day}, {day.year}"


def format_date(date_string: Optional[str], today: Optional[date] = None) -> Optional[DateBadge]:
    day = parse_day(date_string)
    if day is None:
        return None
    today = today or date.today()
    diff = (day - today).days

    if diff < 0:
        return DateBadge("Overdue", "overdue", date_string)
    if diff == 0:
        return DateBadge("Today", "today", date_string)
    if diff == 1:
        return DateBadge("Tomorrow", "", date_string)
    if diff <= 7:
        return DateBadge(f"In {diff} days", "", date_string)
    return DateBadge(format_absolute(day), "", date_string)


def is_overdue(date_string: Optional[str], today: Optional[date] = None) -> bool:
    day = parse_day(date_string)
    if day is None:
        return False
    return day < (today or date.today())


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)
