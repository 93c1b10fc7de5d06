"""
Notification service — create, list, mark-read, clear notifications.
"""

from sqlalchemy.orm import Session

from Data.database import insert_row
from Data.models import Notification, NotificationType


def create_notification(
    db: Session,
    user_email: str,
    title: str,
    message: str | None = None,
    notif_type: str = "system",
) -> dict:
    """Create a notification for a user. Id and timestamp are server-side."""
    notif = Notification(
        user_email=user_email,
        title=title,
        message=message,
        type=NotificationType(notif_type),
    )
    insert_row(db, notif)
    return _notif_to_dict(notif)


def list_notifications(
    db: Session, user_email: str, unread_only: bool = False
) -> list:
    """List notifications for a user, newest first."""
    query = db.query(Notification).filter(Notification.user_email == user_email)
    if unread_only:
        query = query.filter(Notification.is_read == False)  # noqa: E712
    notifs = query.order_by(Notification.created_at.desc()).all()
    return [_notif_to_dict(n) for n in notifs]


def unread_count(db: Session, user_email: str) -> int:
    """Return the number of unread notifications."""
    return (
        db.query(Notification)
        .filter(Notification.user_email == user_email,
                Notification.is_read == False)  # noqa: E712
        .count()
    )


def mark_read(db: Session, notification_id: str, user_email: str) -> int:
    """Mark a single notification as read. Returns rows updated."""
    count = (
        db.query(Notification)
        .filter(Notification.id == notification_id,
                Notification.user_email == user_email)
        .update({"is_read": True})
    )
    db.commit()
    return count


def mark_all_read(db: Session, user_email: str) -> int:
    """Mark all notifications as read. Returns count updated."""
    count = (
        db.query(Notification)
        .filter(Notification.user_email == user_email,
                Notification.is_read == False)  # noqa: E712
        .update({"is_read": True})
    )
    db.commit()
    return count


def clear_notifications(db: Session, user_email: str) -> int:
    """Delete every notification of a user. Returns count deleted."""
    count = (
        db.query(Notification)
        .filter(Notification.user_email == user_email)
        .delete()
    )
    db.commit()
    return count


def _notif_to_dict(notif: Notification) -> dict:
    return {
        "id": notif.id,
        "user_email": notif.user_email,
        "title": notif.title,
        "message": notif.message,
        "type": notif.type.value if notif.type else "system",
        "read": bool(notif.is_read),
        "created_at": notif.created_at.isoformat()
        if notif.created_at else None,
    }
