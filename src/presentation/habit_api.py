"""Habit API — habits, weekly grid and completion toggling."""

import datetime as dt
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from Data.database import get_db
from Data.models import User
from services import habit_service, identity_service, insights
from .schemas import NonBlankStr

router = APIRouter()


class HabitCreate(BaseModel):
    id: str | None = None
    name: NonBlankStr
    color: str | None = None


class HabitToggle(BaseModel):
    date: dt.date


@router.get("")
async def list_habits(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """List habits with completion dates and current streak."""
    return habit_service.list_habits(db, user.email)


@router.post("", status_code=201)
async def create_habit(
    body: HabitCreate,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new habit."""
    return habit_service.create_habit(
        db, user.email, name=body.name, color=body.color, habit_id=body.id
    )


@router.get("/week")
async def current_week():
    """Monday..Sunday dates of the current week, for the habit grid."""
    return {"dates": insights.week_dates(dt.date.today())}


@router.delete("/{habit_id}")
async def delete_habit(
    habit_id: str,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a habit and its completions."""
    count = habit_service.delete_habit(db, habit_id, user.email)
    return {"success": True, "affected": count}


@router.post("/{habit_id}/toggle")
async def toggle_habit(
    habit_id: str,
    body: HabitToggle,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Mark the habit done on a date, or unmark it if already done."""
    completed = habit_service.toggle_completion(db, habit_id, user.email, body.date)
    return {
        "success": True,
        "affected": 0 if completed is None else 1,
        "completed": completed,
    }
