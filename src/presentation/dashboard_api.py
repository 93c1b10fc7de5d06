"""Dashboard API — summary, AI insight and report charts."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from Data.database import get_db
from Data.models import User
from services import dashboard_service, identity_service, insight_service

router = APIRouter()


@router.get("/dashboard")
async def dashboard(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Stats, mood trend, pending tasks and recent finance entries."""
    return dashboard_service.get_dashboard(db, user)


@router.get("/dashboard/insight")
async def dashboard_insight(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """
    Short motivational insight from the language model.

    Always succeeds: provider errors and timeouts yield a fixed message.
    """
    snapshot = dashboard_service.get_snapshot(db, user)
    return {"insight": await insight_service.get_insight(snapshot)}


@router.get("/reports")
async def reports(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Chart data for the reports tab."""
    return dashboard_service.get_reports(db, user)
