from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from app.client.dates import parse_day, parse_timestamp

PRIORITY_WEIGHTS = {"high": 3, "medium": 2, "low": 1}

FILTERS = ("all", "active", "completed")
SORT_KEYS = ("priority", "date", "created")


def _completed_last(tasks: List[dict]) -> List[dict]:
    return sorted(tasks, key=lambda t: bool(t.get("completed")))


def sort_tasks(tasks: List[dict], sort_by: str) -> List[dict]:
    """Stable sort; completed tasks always end up below incomplete ones."""
    if sort_by == "priority":
        ordered = sorted(tasks, key=lambda t: -PRIORITY_WEIGHTS.get(t.get("priority"), 0))
    elif sort_by == "date":
        ordered = sorted(tasks, key=lambda t: (
            not t.get("due_date"), parse_day(t.get("due_date")) or datetime.min.date()))
    elif sort_by == "created":
        # newest first; sorted() keeps ties in incoming order even with reverse=True
        ordered = sorted(tasks, key=lambda t: parse_timestamp(t.get("created_at")) or datetime.min, reverse=True)
        ordered = sorted(ordered, key=lambda t: not t.get("created_at"))
    else:
        return list(tasks)
    return _completed_last(ordered)


def filter_tasks(tasks: List[dict], task_filter: str) -> List[dict]:
    if task_filter == "active":
        return [t for t in tasks if not t.get("completed")]
    if task_filter == "completed":
        return [t for t in tasks if t.get("completed")]
    return list(tasks)


@dataclass
class AppState:
    tasks: List[dict] = field(default_factory=list)
    filter: str = "all"
    sort: str = "priority"

    def set_filter(self, value: str) -> None:
        if value not in FILTERS:
            raise ValueError(f"unknown filter: {value}")
        self.filter = value

    def set_sort(self, value: str) -> None:
        if value not in SORT_KEYS:
            raise ValueError(f"unknown sort key: {value}")
        self.sort = value

    def visible_tasks(self) -> List[dict]:
        return sort_tasks(filter_tasks(self.tasks, self.filter), self.sort)

    @property
    def active_count(self) -> int:
        return sum(1 for t in self.tasks if not t.get("completed"))
