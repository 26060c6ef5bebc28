from datetime import date
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from app.client.dates import format_date, is_overdue

env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    autoescape=select_autoescape(["html"]),
)

LOADING_HTML = '<p class="loading">Loading tasks...</p>'


def task_rows(tasks: List[dict], today: Optional[date] = None) -> List[dict]:
    rows = []
    for task in tasks:
        classes = []
        if task.get("completed"):
            classes.append("completed")
        elif is_overdue(task.get("due_date"), today):
            classes.append("overdue")
        rows.append({"task": task, "badge": format_date(task.get("due_date"), today), "classes": classes})
    return rows


def render_tasks(tasks: List[dict], today: Optional[date] = None) -> str:
    return env.get_template("tasks.html").render(rows=task_rows(tasks, today))


def task_count_text(count: int) -> str:
    return f"{count} {'task' if count == 1 else 'tasks'}"
