"""User API - email login and profile endpoints."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from Data.database import get_db
from Data.models import User
from services import identity_service

router = APIRouter()


class LoginRequest(BaseModel):
    email: str


class UserUpdate(BaseModel):
    name: str | None = None
    avatar_url: str | None = None


@router.post("/login")
async def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Return the user for this email, creating it on first login."""
    return identity_service.login(db, body.email)


@router.get("/user")
async def get_user(user: User = Depends(identity_service.get_current_user)):
    """Get the current user's profile."""
    return identity_service.user_to_dict(user)


@router.patch("/user")
async def update_user(
    body: UserUpdate,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Update name and/or avatar."""
    identity_service.update_user(db, user, name=body.name,
                                 avatar_url=body.avatar_url)
    return {"success": True}
