from datetime import date, timedelta

from app.client.dates import format_date, is_overdue
from app.client.render import render_tasks, task_count_text

TODAY = date(2026, 10, 18)


def _iso(days):
    return (TODAY + timedelta(days=days)).isoformat()


def test_badges():
    assert format_date(None, TODAY) is None
    assert format_date("", TODAY) is None

    overdue = format_date(_iso(-1), TODAY)
    assert (overdue.text, overdue.css_class) == ("Overdue", "overdue")
    assert format_date(_iso(0), TODAY)[:2] == ("Today", "today")
    assert format_date(_iso(1), TODAY).text == "Tomorrow"
    assert format_date(_iso(2), TODAY).text == "In 2 days"
    assert format_date(_iso(7), TODAY).text == "In 7 days"
    assert format_date(_iso(8), TODAY).text == "Oct 26, 2026"
    assert format_date(_iso(10), TODAY).text == "Oct 28, 2026"


def test_badge_keeps_original_string():
    assert format_date("2026-10-19", TODAY).date == "2026-10-19"


def test_is_overdue():
    assert is_overdue(_iso(-3), TODAY)
    assert not is_overdue(_iso(0), TODAY)
    assert not is_overdue(None, TODAY)


def test_render_escapes_text_and_flags_overdue():
    html = render_tasks([
        {"id": 1, "text": "<script>alert(1)</script>", "priority": "high", "completed": False,
         "due_date": _iso(-2), "created_at": None},
        {"id": 2, "text": "done", "priority": "low", "completed": True,
         "due_date": _iso(-2), "created_at": None},
    ], TODAY)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert 'class="task-item overdue" data-id="1"' in html
    assert 'class="task-item completed" data-id="2"' in html
    assert 'data-action="delete" data-id="1"' in html
    assert "Overdue" in html


def test_render_empty_state():
    assert "No tasks found" in render_tasks([], TODAY)


def test_task_count_text():
    assert task_count_text(0) == "0 tasks"
    assert task_count_text(1) == "1 task"
    assert task_count_text(5) == "5 tasks"
