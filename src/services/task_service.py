"""
Task service — CRUD operations for agenda tasks.
"""

from datetime import date, datetime, timedelta, timezone
from sqlalchemy.orm import Session

from Data.database import generate_uuid, insert_row
from Data.models import Task, TaskCategory
from services import notification_service


def create_task(
    db: Session,
    user_email: str,
    title: str,
    task_date: datetime,
    category: str = "personal",
    completed: bool = False,
    task_id: str | None = None,
) -> dict:
    """Create a new task for a user."""
    task = Task(
        id=task_id or generate_uuid(),
        user_email=user_email,
        title=title,
        completed=completed,
        date=task_date,
        category=TaskCategory(category),
    )
    insert_row(db, task)
    notification_service.create_notification(
        db,
        user_email,
        title="Nova Tarefa",
        message=f'Você adicionou a tarefa: "{title}"',
        notif_type="task",
    )
    return {"id": task.id}


def list_tasks(
    db: Session,
    user_email: str,
    status: str = "all",
    day: str = "all",
    today: date | None = None,
) -> list:
    """
    List tasks for a user, newest date first.

    status: "all", "pending" or "completed".
    day: "all", "today" or "tomorrow", relative to ``today`` (default: the
    current UTC date, since task dates are stored as naive UTC).
    """
    query = db.query(Task).filter(Task.user_email == user_email)
    if status == "pending":
        query = query.filter(Task.completed == False)  # noqa: E712
    elif status == "completed":
        query = query.filter(Task.completed == True)  # noqa: E712
    if day in ("today", "tomorrow"):
        start = today or datetime.now(timezone.utc).date()
        if day == "tomorrow":
            start += timedelta(days=1)
        start_dt = datetime.combine(start, datetime.min.time())
        query = query.filter(Task.date >= start_dt,
                             Task.date < start_dt + timedelta(days=1))
    tasks = query.order_by(Task.date.desc()).all()
    return [_task_to_dict(t) for t in tasks]


def set_completed(
    db: Session, task_id: str, user_email: str, completed: bool
) -> int:
    """Set the completion flag. Returns rows updated (0 if absent or not owned)."""
    task = db.query(Task).filter(Task.id == task_id,
                                 Task.user_email == user_email).first()
    if not task:
        return 0
    newly_completed = completed and not task.completed
    task.completed = completed
    db.commit()
    if newly_completed:
        notification_service.create_notification(
            db,
            user_email,
            title="Tarefa Concluída",
            message=f'Parabéns! Você concluiu: "{task.title}"',
            notif_type="task",
        )
    return 1


def delete_task(db: Session, task_id: str, user_email: str) -> int:
    """Delete a task. Returns rows deleted."""
    count = (
        db.query(Task)
        .filter(Task.id == task_id, Task.user_email == user_email)
        .delete()
    )
    db.commit()
    return count


def _task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "user_email": task.user_email,
        "title": task.title,
        "completed": bool(task.completed),
        "date": task.date.isoformat() if task.date else None,
        "category": task.category.value if task.category else "personal",
    }
