"""Mood API — mood journal endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from Data.database import get_db
from Data.models import MoodType, User
from services import identity_service, mood_service
from .schemas import UtcDateTime, utcnow_naive

router = APIRouter()


class MoodCreate(BaseModel):
    id: str | None = None
    date: UtcDateTime = Field(default_factory=utcnow_naive)
    mood: MoodType
    note: str | None = None


@router.get("")
async def list_mood(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    return mood_service.list_entries(db, user.email)


@router.post("", status_code=201)
async def create_mood(
    body: MoodCreate,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Log how the user feels right now."""
    return mood_service.create_entry(
        db,
        user.email,
        mood=body.mood.value,
        note=body.note,
        entry_date=body.date,
        entry_id=body.id,
    )


@router.delete("/{entry_id}")
async def delete_mood(
    entry_id: str,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    count = mood_service.delete_entry(db, entry_id, user.email)
    return {"success": True, "affected": count}
