"""
Data layer — database engine, models, and session utilities.
"""

from Data.database import (  # noqa: F401
    engine,
    SessionLocal,
    Base,
    DuplicateIdError,
    get_db,
    init_db,
    insert_row,
    generate_uuid,
    utcnow,
)
from Data.models import (  # noqa: F401
    User,
    Task,
    Habit,
    HabitCompletion,
    MoodEntry,
    FinanceEntry,
    Notification,
    TaskCategory,
    MoodType,
    FinanceType,
    FinanceCategory,
    NotificationType,
)
