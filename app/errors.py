"""Error taxonomy for the API.

Every error is an ``HTTPException`` so FastAPI renders it as
``{"detail": <message>}`` with the matching status code.
"""
from typing import Optional

from fastapi import HTTPException


class AppError(HTTPException):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(status_code=status_code or self.status_code, detail=message)


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400


class AuthError(AppError):
    """Wrong credentials (401), missing token (401) or bad/expired token and foreign rows (403)."""

    status_code = 401


class ConflictError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class InternalError(AppError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


def describe_errors(errors) -> str:
    """Flatten pydantic error dicts into ``"field: message; ..."``."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        msg = err.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"
