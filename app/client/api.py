import logging
from typing import List, Optional

import httpx

from app.client.session import SessionStore

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-success response; the message is the server's error text."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SessionExpired(ApiError):
    """401/403 on an authenticated request. The stored session is already cleared."""


def _error_text(response: httpx.Response, default: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return default
    detail = data.get("detail") if isinstance(data, dict) else None
    return detail if isinstance(detail, str) and detail else default


class TaskApiClient:
    """Thin wrapper over the HTTP API.

    ``http`` is any ``httpx.Client`` pointed at the server; FastAPI's
    ``TestClient`` works too.
    """

    def __init__(self, http: httpx.Client, session: SessionStore):
        self.http = http
        self.session = session

    def _request(self, method: str, url: str, default_error: str, json=None, authenticated: bool = True) -> httpx.Response:
        headers = {}
        if authenticated and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        response = self.http.request(method, url, json=json, headers=headers)

        if authenticated and response.status_code in (401, 403):
            self.session.clear()
            raise SessionExpired(_error_text(response, "Session expired"), response.status_code)
        if response.is_error:
            raise ApiError(_error_text(response, default_error), response.status_code)
        return response

    def register(self, email: str, password: str) -> dict:
        return self._request("POST", "/register", "Registration failed",
                             json={"email": email, "password": password}, authenticated=False).json()

    def login(self, email: str, password: str) -> str:
        response = self._request("POST", "/login", "Login failed",
                                 json={"email": email, "password": password}, authenticated=False)
        data = response.json()
        self.session.save(data["token"], data["email"])
        return data["email"]

    def logout(self) -> None:
        self.session.clear()

    def fetch_tasks(self) -> List[dict]:
        return self._request("GET", "/tasks", "Failed to fetch tasks").json()

    def add_task(self, text: str, priority: str, due_date: Optional[str] = None) -> dict:
        body = {"text": text, "priority": priority, "due_date": due_date or None}
        return self._request("POST", "/tasks", "Failed to add task", json=body).json()

    def update_task(self, task_id: int, **updates) -> dict:
        return self._request("PUT", f"/tasks/{task_id}", "Failed to update task", json=updates).json()

    def delete_task(self, task_id: int) -> dict:
        return self._request("DELETE", f"/tasks/{task_id}", "Failed to delete task").json()

    def delete_all_tasks(self) -> dict:
        return self._request("DELETE", "/tasks", "Failed to delete all tasks").json()


def build_client(base_url: Optional[str] = None, session_path=None) -> TaskApiClient:
    from app import config

    http = httpx.Client(base_url=base_url or config.CLIENT_BASE_URL)
    return TaskApiClient(http, SessionStore(session_path or config.CLIENT_SESSION_PATH))
