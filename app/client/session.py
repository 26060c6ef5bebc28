import json
import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class SessionStore:
    """Token and email persisted to a small JSON file between runs."""

    def __init__(self, path):
        self.path = Path(path)
        self.token: Optional[str] = None
        self.email: Optional[str] = None
        self.load()

    def load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("ignoring unreadable session file %s", self.path)
            return
        self.token = data.get("token")
        self.email = data.get("email")

    def save(self, token: str, email: str) -> None:
        self.token = token
        self.email = email
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # bearer token inside: owner read/write only
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump({"token": token, "email": email}, fh)
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        self.token = None
        self.email = None
        self.path.unlink(missing_ok=True)

    @property
    def authenticated(self) -> bool:
        return bool(self.token)
