"""Task API — CRUD endpoints for agenda tasks."""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from Data.database import get_db
from Data.models import TaskCategory, User
from services import identity_service, task_service
from .schemas import NonBlankStr, UtcDateTime, utcnow_naive

router = APIRouter()


class TaskCreate(BaseModel):
    id: str | None = None
    title: NonBlankStr
    completed: bool = False
    date: UtcDateTime = Field(default_factory=utcnow_naive)
    category: TaskCategory = TaskCategory.personal


class TaskUpdate(BaseModel):
    completed: bool


@router.post("", status_code=201)
async def create_task(
    body: TaskCreate,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new task."""
    return task_service.create_task(
        db,
        user.email,
        title=body.title,
        task_date=body.date,
        category=body.category.value,
        completed=body.completed,
        task_id=body.id,
    )


@router.get("")
async def list_tasks(
    status: str = Query("all", pattern="^(all|pending|completed)$"),
    day: str = Query("all", pattern="^(all|today|tomorrow)$"),
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """List tasks, optionally filtered by status or day."""
    return task_service.list_tasks(db, user.email, status=status, day=day)


@router.patch("/{task_id}")
async def update_task(
    task_id: str,
    body: TaskUpdate,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Set a task's completion flag."""
    count = task_service.set_completed(db, task_id, user.email, body.completed)
    return {"success": True, "affected": count}


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a task."""
    count = task_service.delete_task(db, task_id, user.email)
    return {"success": True, "affected": count}
