from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, Text, case, false
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

PRIORITIES = ("low", "medium", "high")
PRIORITY_WEIGHTS = {"high": 3, "medium": 2, "low": 1}


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("priority IN ('low', 'medium', 'high')", name="ck_tasks_priority"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    priority = Column(String(6), nullable=False)
    completed = Column(Boolean, nullable=False, default=False, server_default=false())
    due_date = Column(Date, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    owner = relationship("User", back_populates="tasks")

    def __repr__(self):
        return f"<Task(id={self.id}, user_id={self.user_id}, priority='{self.priority}')>"


# high > medium > low, used for server-side ordering
priority_rank = case(PRIORITY_WEIGHTS, value=Task.priority, else_=0)
