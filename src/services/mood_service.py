"""
Mood service — log, list and delete mood entries.
"""

from datetime import datetime
from sqlalchemy.orm import Session

from Data.database import generate_uuid, insert_row, utcnow
from Data.models import MoodEntry, MoodType
from services import notification_service

MOOD_NAMES = {
    "happy": "Feliz",
    "calm": "Calmo",
    "neutral": "Neutro",
    "sad": "Triste",
    "angry": "Irritado",
}


def create_entry(
    db: Session,
    user_email: str,
    mood: str,
    note: str | None = None,
    entry_date: datetime | None = None,
    entry_id: str | None = None,
) -> dict:
    """Log a mood entry."""
    entry = MoodEntry(
        id=entry_id or generate_uuid(),
        user_email=user_email,
        date=entry_date or utcnow(),
        mood=MoodType(mood),
        note=note,
    )
    insert_row(db, entry)
    notification_service.create_notification(
        db,
        user_email,
        title="Humor Registrado",
        message=f'Você registrou que está se sentindo "{MOOD_NAMES[mood]}" agora.',
        notif_type="mood",
    )
    return {"id": entry.id}


def list_entries(db: Session, user_email: str, limit: int | None = None) -> list:
    """List mood entries, newest first."""
    query = (
        db.query(MoodEntry)
        .filter(MoodEntry.user_email == user_email)
        .order_by(MoodEntry.date.desc())
    )
    if limit:
        query = query.limit(limit)
    return [_entry_to_dict(e) for e in query.all()]


def delete_entry(db: Session, entry_id: str, user_email: str) -> int:
    count = (
        db.query(MoodEntry)
        .filter(MoodEntry.id == entry_id, MoodEntry.user_email == user_email)
        .delete()
    )
    db.commit()
    return count


def _entry_to_dict(entry: MoodEntry) -> dict:
    return {
        "id": entry.id,
        "user_email": entry.user_email,
        "date": entry.date.isoformat() if entry.date else None,
        "mood": entry.mood.value if entry.mood else "neutral",
        "note": entry.note,
    }
