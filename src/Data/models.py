"""
SQLAlchemy models for the planner.
Every row is owned by a user through its ``user_email`` column.
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    Date,
    DateTime,
    ForeignKey,
    Float,
    Boolean,
    Enum,
)
import enum

from Data.database import Base, generate_uuid, utcnow


# --------------------------------------------------------------------------- #
# Enums
# --------------------------------------------------------------------------- #

class TaskCategory(str, enum.Enum):
    work = "work"
    personal = "personal"
    health = "health"
    study = "study"


class MoodType(str, enum.Enum):
    happy = "happy"
    calm = "calm"
    neutral = "neutral"
    sad = "sad"
    angry = "angry"


class FinanceType(str, enum.Enum):
    income = "income"
    expense = "expense"


class FinanceCategory(str, enum.Enum):
    food = "food"
    transport = "transport"
    leisure = "leisure"
    bills = "bills"
    salary = "salary"
    other = "other"


class NotificationType(str, enum.Enum):
    task = "task"
    mood = "mood"
    finance = "finance"
    habit = "habit"
    system = "system"


# --------------------------------------------------------------------------- #
# Models
# --------------------------------------------------------------------------- #

class User(Base):
    __tablename__ = "users"

    email = Column(String(255), primary_key=True)
    name = Column(String(255), nullable=False)
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_email = Column(String, ForeignKey("users.email"),
                        nullable=False, index=True)
    title = Column(String(255), nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    date = Column(DateTime, nullable=False)
    category = Column(
        Enum(TaskCategory), default=TaskCategory.personal, nullable=False
    )


class Habit(Base):
    __tablename__ = "habits"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_email = Column(String, ForeignKey("users.email"),
                        nullable=False, index=True)
    name = Column(String(255), nullable=False)
    color = Column(String(50), default="brand-purple")
    created_at = Column(DateTime, default=utcnow)


class HabitCompletion(Base):
    __tablename__ = "habit_completions"

    # No FK cascade: completions are removed explicitly with their habit
    habit_id = Column(String, primary_key=True)
    date = Column(Date, primary_key=True)
    user_email = Column(String, ForeignKey("users.email"),
                        nullable=False, index=True)


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_email = Column(String, ForeignKey("users.email"),
                        nullable=False, index=True)
    date = Column(DateTime, nullable=False, default=utcnow)
    mood = Column(Enum(MoodType), nullable=False)
    note = Column(Text, nullable=True)


class FinanceEntry(Base):
    __tablename__ = "finance_entries"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_email = Column(String, ForeignKey("users.email"),
                        nullable=False, index=True)
    description = Column(String(255), nullable=False)
    amount = Column(Float, nullable=False)  # always positive
    type = Column(Enum(FinanceType), nullable=False)
    date = Column(DateTime, nullable=False)
    category = Column(
        Enum(FinanceCategory), default=FinanceCategory.other, nullable=False
    )


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_email = Column(String, ForeignKey("users.email"),
                        nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=True)
    type = Column(
        Enum(NotificationType), default=NotificationType.system, nullable=False
    )
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utcnow)
