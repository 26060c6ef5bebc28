from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from app.models.task import PRIORITIES

PRIORITY_ERROR = "Priority must be low, medium, or high"


def check_priority(value: str) -> str:
    if value not in PRIORITIES:
        raise ValueError(PRIORITY_ERROR)
    return value


def blank_date_to_none(v):
    # the date input sends "" when cleared
    if isinstance(v, str) and not v.strip():
        return None
    return v


class TaskCreate(BaseModel):
    text: str
    priority: str
    due_date: Optional[date] = None

    @field_validator("text")
    @classmethod
    def text_not_empty(cls, v):
        if not v.strip():
            raise ValueError("text cannot be empty")
        return v.strip()

    @field_validator("priority")
    @classmethod
    def priority_allowed(cls, v):
        return check_priority(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, v):
        return blank_date_to_none(v)


class TaskUpdate(BaseModel):
    """Partial update: only the fields present in the request body are applied."""

    text: Optional[str] = None
    priority: Optional[str] = None
    completed: Optional[bool] = None
    due_date: Optional[date] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, v):
        return blank_date_to_none(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TaskOut(BaseModel):
    id: int
    text: str
    priority: str
    completed: bool
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Message(BaseModel):
    message: str
    deleted: Optional[int] = None
