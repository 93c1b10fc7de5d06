"""
Derived views over fetched collections: habit streaks, week windows,
finance aggregation, mood scales and CSV export.

Everything here is a pure function of its input. Entries are the dicts
returned by the resource services, so the same helpers serve the API
and the dashboard.
"""

import csv
import io
from collections.abc import Iterable
from datetime import date, datetime, timedelta

# Dashboard trend bars (0-100) and report line chart (1-5)
MOOD_TREND_SCALE = {"happy": 90, "calm": 75, "neutral": 50, "sad": 30, "angry": 20}
MOOD_LEVEL_SCALE = {"happy": 5, "calm": 4, "neutral": 3, "sad": 2, "angry": 1}

MOOD_LABELS = {
    "happy": "Ótimo",
    "calm": "Calmo",
    "neutral": "Estável",
    "sad": "Para baixo",
    "angry": "Irritado",
}

FINANCE_TYPE_LABELS = {"income": "Receita", "expense": "Despesa"}
CSV_HEADER = ["Data", "Descrição", "Tipo", "Categoria", "Valor"]


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def week_dates(now: date | datetime) -> list[str]:
    """ISO dates Monday..Sunday of the week containing ``now``."""
    today = _as_date(now)
    monday = today - timedelta(days=today.weekday())
    return [(monday + timedelta(days=i)).isoformat() for i in range(7)]


def habit_streak(completed_dates: Iterable, today: date | datetime) -> int:
    """
    Consecutive-day streak ending at the most recent completion.

    A streak survives while the latest completion is today or yesterday;
    anything older means it is broken and the result is 0.
    """
    dates = sorted({_as_date(d) for d in completed_dates}, reverse=True)
    if not dates:
        return 0

    last = dates[0]
    if (_as_date(today) - last).days > 1:
        return 0

    streak = 0
    for i, day in enumerate(dates):
        if day != last - timedelta(days=i):
            break
        streak += 1
    return streak


def finance_balance(entries: Iterable[dict]) -> float:
    """Income minus expenses over every entry."""
    return finance_totals(entries)["balance"]


def finance_totals(entries: Iterable[dict]) -> dict:
    income = expense = 0.0
    for entry in entries:
        if entry["type"] == "income":
            income += entry["amount"]
        else:
            expense += entry["amount"]
    return {"income": income, "expense": expense, "balance": income - expense}


def expense_by_category(entries: Iterable[dict]) -> dict[str, float]:
    """Sum of expense amounts per category. Income is ignored."""
    totals: dict[str, float] = {}
    for entry in entries:
        if entry["type"] != "expense":
            continue
        totals[entry["category"]] = totals.get(entry["category"], 0.0) + entry["amount"]
    return totals


def mood_trend_value(mood: str) -> int:
    return MOOD_TREND_SCALE.get(mood, MOOD_TREND_SCALE["neutral"])


def mood_level(mood: str) -> int:
    return MOOD_LEVEL_SCALE.get(mood, MOOD_LEVEL_SCALE["neutral"])


def format_brl(amount: float) -> str:
    """Format like pt-BR currency without the symbol: 1.234,50"""
    text = f"{amount:,.2f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def finance_csv(entries: Iterable[dict]) -> str:
    """Render finance entries as a flat CSV table (header + one row each)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for entry in entries:
        writer.writerow([
            _as_date(entry["date"]).strftime("%d/%m/%Y"),
            entry["description"],
            FINANCE_TYPE_LABELS.get(entry["type"], entry["type"]),
            entry["category"],
            f"{entry['amount']:.2f}",
        ])
    return buffer.getvalue().rstrip("\n")
