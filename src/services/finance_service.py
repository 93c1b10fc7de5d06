"""
Finance service — income/expense records, totals and CSV export.
"""

from datetime import datetime
from sqlalchemy.orm import Session

from Data.database import generate_uuid, insert_row
from Data.models import FinanceCategory, FinanceEntry, FinanceType
from services import insights, notification_service


def create_entry(
    db: Session,
    user_email: str,
    description: str,
    amount: float,
    entry_type: str,
    entry_date: datetime,
    category: str = "other",
    entry_id: str | None = None,
) -> dict:
    """Record an income or expense. ``amount`` is positive for both."""
    if amount <= 0:
        raise ValueError("Amount must be greater than zero")
    entry = FinanceEntry(
        id=entry_id or generate_uuid(),
        user_email=user_email,
        description=description,
        amount=amount,
        type=FinanceType(entry_type),
        date=entry_date,
        category=FinanceCategory(category),
    )
    insert_row(db, entry)
    notification_service.create_notification(
        db,
        user_email,
        title="Nova Receita" if entry_type == "income" else "Nova Despesa",
        message=f'Registro de R$ {insights.format_brl(amount)}: "{description}"',
        notif_type="finance",
    )
    return {"id": entry.id}


def list_entries(
    db: Session, user_email: str, entry_type: str | None = None
) -> list:
    """List finance entries, newest first, optionally only income or expense."""
    query = db.query(FinanceEntry).filter(FinanceEntry.user_email == user_email)
    if entry_type:
        query = query.filter(FinanceEntry.type == FinanceType(entry_type))
    entries = query.order_by(FinanceEntry.date.desc()).all()
    return [_entry_to_dict(e) for e in entries]


def delete_entry(db: Session, entry_id: str, user_email: str) -> int:
    count = (
        db.query(FinanceEntry)
        .filter(FinanceEntry.id == entry_id,
                FinanceEntry.user_email == user_email)
        .delete()
    )
    db.commit()
    return count


def summary(db: Session, user_email: str) -> dict:
    """Income, expense and balance totals plus expenses per category."""
    entries = list_entries(db, user_email)
    result = insights.finance_totals(entries)
    result["by_category"] = insights.expense_by_category(entries)
    return result


def export_csv(db: Session, user_email: str) -> str:
    return insights.finance_csv(list_entries(db, user_email))


def _entry_to_dict(entry: FinanceEntry) -> dict:
    return {
        "id": entry.id,
        "user_email": entry.user_email,
        "description": entry.description,
        "amount": entry.amount,
        "type": entry.type.value if entry.type else "expense",
        "date": entry.date.isoformat() if entry.date else None,
        "category": entry.category.value if entry.category else "other",
    }
