"""
Dashboard service — summary views built from the resource services.
"""

from datetime import date, datetime
from sqlalchemy.orm import Session

from Data.models import User
from services import (
    finance_service,
    habit_service,
    insights,
    mood_service,
    task_service,
)


def get_snapshot(db: Session, user: User, today: date | None = None) -> dict:
    """Everything the owner has, in the shape the insight prompt expects."""
    return {
        "user_name": user.name,
        "tasks": task_service.list_tasks(db, user.email),
        "habits": habit_service.list_habits(db, user.email, today=today),
        "mood": mood_service.list_entries(db, user.email),
        "finance": finance_service.list_entries(db, user.email),
    }


def get_dashboard(db: Session, user: User, today: date | None = None) -> dict:
    snapshot = get_snapshot(db, user, today=today)
    tasks = snapshot["tasks"]
    mood = snapshot["mood"]
    latest = mood[0]["mood"] if mood else None
    return {
        "user_name": user.name,
        "completed_tasks": sum(1 for t in tasks if t["completed"]),
        "habits": len(snapshot["habits"]),
        "mood": insights.MOOD_LABELS.get(latest, "Estável") if latest else "Sem dados",
        "balance": insights.finance_balance(snapshot["finance"]),
        # oldest -> newest
        "mood_trend": [insights.mood_trend_value(m["mood"]) for m in reversed(mood[:7])],
        "pending_tasks": [t for t in tasks if not t["completed"]][:3],
        "recent_finance": snapshot["finance"][:2],
    }


def get_reports(db: Session, user: User) -> dict:
    """Chart data: expenses per category, mood levels, completions per habit."""
    finance = finance_service.list_entries(db, user.email)
    mood = mood_service.list_entries(db, user.email, limit=10)
    habits = habit_service.list_habits(db, user.email)
    return {
        "expenses_by_category": [
            {"name": category.capitalize(), "value": total}
            for category, total in insights.expense_by_category(finance).items()
        ],
        "mood_levels": [
            {
                "date": datetime.fromisoformat(m["date"]).strftime("%d/%m"),
                "level": insights.mood_level(m["mood"]),
            }
            for m in reversed(mood)
        ],
        "habit_completions": [
            {"name": h["name"], "completions": len(h["completed_dates"])}
            for h in habits
        ],
    }
