"""
Identity service - maps the client-supplied email to a user record.

The email travels in the ``X-User-Email`` header and is trusted as-is. It
partitions data between users; it is not a credential. Put real
authentication in front of any public deployment.
"""

import logging

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from Data.database import get_db
from Data.models import User

logger = logging.getLogger(__name__)

AVATAR_URL_TEMPLATE = "https://picsum.photos/seed/{email}/200"


def _require_email(email: str | None) -> str:
    email = (email or "").strip()
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is required"
        )
    return email


def resolve_user(db: Session, email: str | None) -> User:
    """Return the user for ``email``, creating it on first sight."""
    email = _require_email(email)
    user = db.query(User).filter(User.email == email).first()
    if user:
        return user

    user = User(
        email=email,
        name=email.split("@")[0],
        avatar_url=AVATAR_URL_TEMPLATE.format(email=email),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created the same user first
        db.rollback()
        return db.query(User).filter(User.email == email).one()
    db.refresh(user)
    logger.info("Created user %s", email)
    return user


def login(db: Session, email: str | None) -> dict:
    """Get-or-create the user and return its record."""
    return user_to_dict(resolve_user(db, email))


def update_user(
    db: Session,
    user: User,
    name: str | None = None,
    avatar_url: str | None = None,
) -> dict:
    """Update the profile. Only provided fields are changed."""
    if name is not None:
        user.name = name
    if avatar_url is not None:
        user.avatar_url = avatar_url
    db.commit()
    db.refresh(user)
    return user_to_dict(user)


def get_current_user(
    x_user_email: str | None = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """FastAPI dependency - resolves the request owner from X-User-Email."""
    return resolve_user(db, x_user_email)


def user_to_dict(user: User) -> dict:
    return {
        "email": user.email,
        "name": user.name,
        "avatar_url": user.avatar_url,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }
