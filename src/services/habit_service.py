"""
Habit service — habits and their per-day completion marks.
"""

import logging
from datetime import date
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from Data.database import generate_uuid, insert_row
from Data.models import Habit, HabitCompletion
from services import insights, notification_service

logger = logging.getLogger(__name__)


def create_habit(
    db: Session,
    user_email: str,
    name: str,
    color: str | None = None,
    habit_id: str | None = None,
) -> dict:
    """Create a new habit for a user."""
    habit = Habit(
        id=habit_id or generate_uuid(),
        user_email=user_email,
        name=name,
        color=color or "brand-purple",
    )
    insert_row(db, habit)
    notification_service.create_notification(
        db,
        user_email,
        title="Novo Hábito",
        message=f'Você começou o hábito: "{name}"',
        notif_type="habit",
    )
    return {"id": habit.id}


def list_habits(db: Session, user_email: str, today: date | None = None) -> list:
    """List habits with their completion dates and current streak."""
    today = today or date.today()
    habits = (
        db.query(Habit)
        .filter(Habit.user_email == user_email)
        .order_by(Habit.created_at.asc(), Habit.name.asc())
        .all()
    )
    completions = (
        db.query(HabitCompletion)
        .filter(HabitCompletion.user_email == user_email)
        .order_by(HabitCompletion.date.asc())
        .all()
    )
    dates_by_habit: dict[str, list[date]] = {}
    for c in completions:
        dates_by_habit.setdefault(c.habit_id, []).append(c.date)

    result = []
    for habit in habits:
        dates = dates_by_habit.get(habit.id, [])
        item = _habit_to_dict(habit)
        item["completed_dates"] = [d.isoformat() for d in dates]
        item["streak"] = insights.habit_streak(dates, today)
        result.append(item)
    return result


def delete_habit(db: Session, habit_id: str, user_email: str) -> int:
    """Delete a habit and all its completions in one transaction."""
    db.query(HabitCompletion).filter(
        HabitCompletion.habit_id == habit_id,
        HabitCompletion.user_email == user_email,
    ).delete()
    count = (
        db.query(Habit)
        .filter(Habit.id == habit_id, Habit.user_email == user_email)
        .delete()
    )
    db.commit()
    return count


def toggle_completion(
    db: Session, habit_id: str, user_email: str, day: date
) -> bool | None:
    """
    Flip the completion mark of a habit on ``day``.

    Returns True if the habit is now completed on that day, False if the
    mark was removed, or None when the habit is absent or not owned.
    """
    habit = db.query(Habit).filter(Habit.id == habit_id,
                                   Habit.user_email == user_email).first()
    if not habit:
        return None

    if _remove_completion(db, habit_id, user_email, day):
        db.commit()
        return False

    db.add(HabitCompletion(habit_id=habit_id, user_email=user_email, date=day))
    try:
        db.commit()
    except IntegrityError:
        # A concurrent toggle inserted the mark first; ours removes it.
        db.rollback()
        logger.info("Toggle race on habit %s for %s", habit_id, day)
        _remove_completion(db, habit_id, user_email, day)
        db.commit()
        return False

    notification_service.create_notification(
        db,
        user_email,
        title="Hábito Concluído",
        message=f'Você completou o hábito "{habit.name}" hoje!',
        notif_type="habit",
    )
    return True


def _remove_completion(db: Session, habit_id: str, user_email: str,
                       day: date) -> int:
    return (
        db.query(HabitCompletion)
        .filter(HabitCompletion.habit_id == habit_id,
                HabitCompletion.user_email == user_email,
                HabitCompletion.date == day)
        .delete()
    )


def _habit_to_dict(habit: Habit) -> dict:
    return {
        "id": habit.id,
        "user_email": habit.user_email,
        "name": habit.name,
        "color": habit.color,
    }
