import logging
from contextlib import contextmanager
from datetime import date
from typing import Callable, Optional

import httpx

from app.client.api import ApiError, SessionExpired, TaskApiClient
from app.client.render import LOADING_HTML, render_tasks, task_count_text
from app.client.state import AppState

logger = logging.getLogger(__name__)

NETWORK_ERROR = "Network error, please try again"


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


class TaskListController:
    """Owns the client state and reacts to user actions.

    Actions go through ``dispatch(name, **payload)``; markup only carries
    ``data-action`` names. Every successful mutation reloads the whole list
    from the server instead of patching local state.

    ``confirm`` and ``alert`` are the blocking prompts of the host UI.
    """

    def __init__(
        self,
        api: TaskApiClient,
        confirm: Callable[[str], bool],
        alert: Callable[[str], None],
        today: Optional[date] = None,
    ):
        self.api = api
        self.confirm = confirm
        self.alert = alert
        self.today = today
        self.state = AppState()
        self.view = "tasks"
        self.html = ""
        self.count_text = ""
        self.show_delete_all = False
        self.disabled = set()
        self.handlers = {
            "submit": self.submit_task,
            "toggle": self.toggle_task,
            "delete": self.delete_task,
            "delete_all": self.delete_all_tasks,
            "filter": self.set_filter,
            "sort": self.set_sort,
            "logout": self.logout,
            "reload": self.load_tasks,
            "login": self.login,
            "register": self.register,
        }

    def dispatch(self, action: str, **payload):
        try:
            handler = self.handlers[action]
        except KeyError:
            raise ValueError(f"unknown action: {action}") from None
        return handler(**payload)

    def start(self) -> None:
        if not self.api.session.authenticated:
            self.view = "login"
            return
        self.view = "tasks"
        self.load_tasks()

    @property
    def email(self) -> Optional[str]:
        return self.api.session.email

    @contextmanager
    def _busy(self, control: str):
        self.disabled.add(control)
        try:
            yield
        finally:
            self.disabled.discard(control)

    def _to_login(self) -> None:
        self.state.tasks = []
        self.html = ""
        self.view = "login"

    def _call(self, fn, *args, **kwargs):
        """Run one API call. Returns its result, or None after reporting the failure."""
        try:
            return fn(*args, **kwargs)
        except SessionExpired:
            self._to_login()
        except ApiError as e:
            self.alert(str(e))
        except httpx.TransportError as e:
            logger.warning("request failed: %s", e)
            self.alert(NETWORK_ERROR)
        return None

    def render(self) -> None:
        self.html = render_tasks(self.state.visible_tasks(), self.today)
        self.count_text = task_count_text(self.state.active_count)
        self.show_delete_all = bool(self.state.tasks)

    def load_tasks(self) -> None:
        self.html = LOADING_HTML
        try:
            tasks = self.api.fetch_tasks()
        except SessionExpired:
            self._to_login()
            return
        except ApiError as e:
            logger.error("Failed to fetch tasks: %s", e)
            tasks = []
        except httpx.TransportError as e:
            logger.warning("request failed: %s", e)
            self.alert(NETWORK_ERROR)
            tasks = self.state.tasks
        self.state.tasks = tasks
        self.render()

    def submit_task(self, text: str, priority: str = "medium", due_date: Optional[str] = None) -> bool:
        text = (text or "").strip()
        if not text:
            self.alert("Please enter a task description")
            return False

        with self._busy("submit"):
            created = self._call(self.api.add_task, text, priority, due_date or None)
            if created is None:
                return False
            self.load_tasks()
        return True

    def toggle_task(self, task_id: int, completed: bool) -> bool:
        with self._busy(f"toggle:{task_id}"):
            updated = self._call(self.api.update_task, task_id, completed=completed)
            if self.view == "login":
                return False
            # reload even on failure so the checkbox snaps back to server state
            self.load_tasks()
        return updated is not None

    def delete_task(self, task_id: int) -> bool:
        if not self.confirm("Are you sure you want to delete this task?"):
            return False

        with self._busy(f"delete:{task_id}"):
            if self._call(self.api.delete_task, task_id) is None:
                return False
            self.load_tasks()
        return True

    def delete_all_tasks(self) -> bool:
        count = len(self.state.tasks)
        if count == 0:
            return False

        if not self.confirm(
            f"WARNING: This will permanently delete ALL {count} task{_plural(count)}.\n\n"
            "This action cannot be undone. Are you absolutely sure?"
        ):
            return False
        if not self.confirm(
            f"Are you REALLY sure you want to delete all {count} task{_plural(count)}?\n\n"
            "This cannot be undone!"
        ):
            return False

        with self._busy("delete_all"):
            if self._call(self.api.delete_all_tasks) is None:
                return False
            self.load_tasks()
        return True

    def set_filter(self, value: str) -> None:
        self.state.set_filter(value)
        with self._busy("filter"):
            self.load_tasks()

    def set_sort(self, value: str) -> None:
        self.state.set_sort(value)
        with self._busy("sort"):
            self.load_tasks()

    def login(self, email: str, password: str) -> bool:
        with self._busy("login"):
            if self._call(self.api.login, email, password) is None:
                return False
            self.start()
        return True

    def register(self, email: str, password: str) -> bool:
        with self._busy("register"):
            if self._call(self.api.register, email, password) is None:
                return False
        return self.login(email, password)

    def logout(self) -> None:
        self.api.logout()
        self._to_login()
