"""Notification API — endpoints for managing notifications."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from Data.database import get_db
from Data.models import NotificationType, User
from services import identity_service, notification_service
from .schemas import NonBlankStr

router = APIRouter()


class NotificationCreate(BaseModel):
    title: NonBlankStr
    message: str | None = None
    type: NotificationType = NotificationType.system


@router.get("")
async def list_notifications(
    unread_only: bool = False,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """List notifications for the current user."""
    return notification_service.list_notifications(db, user.email, unread_only=unread_only)


@router.post("", status_code=201)
async def create_notification(
    body: NotificationCreate,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    notif = notification_service.create_notification(
        db, user.email, body.title, body.message, body.type.value
    )
    return {"id": notif["id"]}


@router.get("/unread-count")
async def unread_count(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Get the number of unread notifications."""
    return {"count": notification_service.unread_count(db, user.email)}


@router.patch("/read-all")
async def mark_all_read(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Mark all notifications as read."""
    count = notification_service.mark_all_read(db, user.email)
    return {"success": True, "affected": count}


@router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Mark a notification as read."""
    count = notification_service.mark_read(db, notification_id, user.email)
    return {"success": True, "affected": count}


@router.delete("")
async def clear_notifications(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Delete every notification of the current user."""
    count = notification_service.clear_notifications(db, user.email)
    return {"success": True, "affected": count}
