import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError as SchemaError
from sqlalchemy.orm import Session

from app.schemas.task import TaskCreate, TaskUpdate, TaskOut, Message, PRIORITY_ERROR
from app.models.task import Task, PRIORITIES, priority_rank
from app.database import get_db
from app.errors import AuthError, NotFoundError, ValidationError, describe_errors
from app.utils.auth import CurrentUser, get_current_user

logger = logging.getLogger(__name__)

# every route below sits behind the bearer-token check
router = APIRouter(prefix="/tasks", tags=["tasks"], dependencies=[Depends(get_current_user)])

NOT_NULLABLE = ("text", "priority", "completed")


def _get_owned_task(db: Session, task_id: int, user: CurrentUser) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError("Task not found")
    if task.user_id != user.id:
        raise AuthError("Unauthorized", status_code=403)
    return task


@router.get("", response_model=List[TaskOut])
def list_tasks(db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    return (
        db.query(Task)
        .filter(Task.user_id == user.id)
        .order_by(priority_rank.desc(), Task.id.desc())
        .all()
    )


@router.post("", response_model=TaskOut, status_code=201)
def create_task(task: TaskCreate, db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    new = Task(
        user_id=user.id,
        text=task.text,
        priority=task.priority,
        completed=False,
        due_date=task.due_date,
    )
    db.add(new)
    db.commit()
    db.refresh(new)
    return new


@router.put("/{task_id}", response_model=TaskOut)
def update_task(task_id: int, body: Any = Body(None), db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    task = _get_owned_task(db, task_id, user)

    # body is parsed only after the owner check so a foreign or missing
    # task is reported as such whatever the payload looks like
    try:
        payload = TaskUpdate.model_validate(body if body is not None else {})
    except SchemaError as e:
        raise ValidationError(describe_errors(e.errors()))

    changes = payload.changes()
    if "priority" in changes and changes["priority"] not in PRIORITIES:
        raise ValidationError(PRIORITY_ERROR)
    for field in NOT_NULLABLE:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null")
    if "text" in changes and not changes["text"].strip():
        raise ValidationError("text cannot be empty")
    if not changes:
        raise ValidationError("No fields to update")
    if "text" in changes:
        changes["text"] = changes["text"].strip()

    for field, value in changes.items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return task


@router.delete("/{task_id}", response_model=Message, response_model_exclude_none=True)
def delete_task(task_id: int, db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    # ownership check and delete are separate statements; a concurrent
    # delete in between is tolerated
    task = _get_owned_task(db, task_id, user)
    db.delete(task)
    db.commit()
    return {"message": "Task deleted successfully"}


@router.delete("", response_model=Message, response_model_exclude_none=True)
def delete_all_tasks(db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    deleted = db.query(Task).filter(Task.user_id == user.id).delete(synchronize_session=False)
    db.commit()
    logger.info("user id=%s deleted all tasks (%d rows)", user.id, deleted)
    return {"message": "All tasks deleted successfully", "deleted": deleted}
