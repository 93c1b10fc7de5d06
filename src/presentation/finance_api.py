"""Finance API — income/expense records, summary and CSV export."""

from datetime import date
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from Data.database import get_db
from Data.models import FinanceCategory, FinanceType, User
from services import finance_service, identity_service
from .schemas import NonBlankStr, UtcDateTime, utcnow_naive

router = APIRouter()


class FinanceCreate(BaseModel):
    id: str | None = None
    description: NonBlankStr
    amount: float = Field(..., gt=0)
    type: FinanceType
    date: UtcDateTime = Field(default_factory=utcnow_naive)
    category: FinanceCategory = FinanceCategory.other


@router.get("")
async def list_finance(
    entry_type: FinanceType | None = Query(None, alias="type"),
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """List entries, optionally only income or only expense."""
    return finance_service.list_entries(
        db, user.email, entry_type=entry_type.value if entry_type else None
    )


@router.post("", status_code=201)
async def create_finance(
    body: FinanceCreate,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Record an income or an expense."""
    return finance_service.create_entry(
        db,
        user.email,
        description=body.description,
        amount=body.amount,
        entry_type=body.type.value,
        entry_date=body.date,
        category=body.category.value,
        entry_id=body.id,
    )


@router.get("/summary")
async def finance_summary(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Balance, totals and expenses per category."""
    return finance_service.summary(db, user.email)


@router.get("/export")
async def export_finance(
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    """Download all entries as CSV. Nothing is stored server-side."""
    filename = f"financeiro_{date.today().isoformat()}.csv"
    return Response(
        content=finance_service.export_csv(db, user.email),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.delete("/{entry_id}")
async def delete_finance(
    entry_id: str,
    user: User = Depends(identity_service.get_current_user),
    db: Session = Depends(get_db),
):
    count = finance_service.delete_entry(db, entry_id, user.email)
    return {"success": True, "affected": count}
