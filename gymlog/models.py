from enum import Enum

from sqlalchemy import CheckConstraint, Index
from sqlmodel import Field, SQLModel


class SetType(str, Enum):
    TOP_SET = "TOP_SET"
    BACK_OFF = "BACK_OFF"


DEFAULT_UNIT = "kg"


class Workout(SQLModel, table=True):
    __tablename__ = "workouts"
    __table_args__ = ({"sqlite_autoincrement": True},)

    id: int | None = Field(default=None, primary_key=True)
    split_index: int
    planned_name: str
    started_at: str  # ISO timestamp
    completed_at: str | None = None


class Log(SQLModel, table=True):
    """A single logged set. A TOP_SET and a BACK_OFF sharing exercise, date and
    weight make up one entry."""

    __tablename__ = "logs"
    __table_args__ = (
        CheckConstraint("set_type IN ('TOP_SET','BACK_OFF')", name="ck_logs_set_type"),
        Index("idx_logs_exercise_date", "exercise_name", "date"),
        Index("idx_logs_workout", "workout_id"),
        {"sqlite_autoincrement": True},
    )

    id: int | None = Field(default=None, primary_key=True)
    workout_id: int = Field(foreign_key="workouts.id", ondelete="CASCADE")
    exercise_name: str
    date: str  # ISO timestamp, shared by both sets of an entry
    weight: float
    unit: str = Field(default=DEFAULT_UNIT, sa_column_kwargs={"server_default": DEFAULT_UNIT})
    reps: int
    set_type: str


class NutritionLog(SQLModel, table=True):
    __tablename__ = "nutrition_logs"
    __table_args__ = (
        Index("idx_nutrition_logs_date", "date"),
        {"sqlite_autoincrement": True},
    )

    id: int | None = Field(default=None, primary_key=True)
    date: str  # calendar day, YYYY-MM-DD
    calories: float = Field(default=0, sa_column_kwargs={"server_default": "0"})
    protein: float = Field(default=0, sa_column_kwargs={"server_default": "0"})
    carbs: float = Field(default=0, sa_column_kwargs={"server_default": "0"})
    fat: float = Field(default=0, sa_column_kwargs={"server_default": "0"})
    food_name: str | None = Field(default="", sa_column_kwargs={"server_default": ""})


QUOTA_ID = 1
DEFAULT_QUOTA = {"calories": 2500.0, "protein": 150.0, "carbs": 300.0, "fat": 80.0}


class NutritionQuota(SQLModel, table=True):
    """Daily targets. Exactly one row, id fixed at 1."""

    __tablename__ = "nutrition_quota"
    __table_args__ = (CheckConstraint("id = 1", name="ck_nutrition_quota_singleton"),)

    id: int = Field(default=QUOTA_ID, primary_key=True)
    calories: float = Field(default=2500, sa_column_kwargs={"server_default": "2500"})
    protein: float = Field(default=150, sa_column_kwargs={"server_default": "150"})
    carbs: float = Field(default=300, sa_column_kwargs={"server_default": "300"})
    fat: float = Field(default=80, sa_column_kwargs={"server_default": "80"})


class SavedFood(SQLModel, table=True):
    __tablename__ = "saved_foods"
    __table_args__ = ({"sqlite_autoincrement": True},)

    id: int | None = Field(default=None, primary_key=True)
    name: str
    calories: float = Field(default=0, sa_column_kwargs={"server_default": "0"})
    protein: float = Field(default=0, sa_column_kwargs={"server_default": "0"})
    carbs: float = Field(default=0, sa_column_kwargs={"server_default": "0"})
    fat: float = Field(default=0, sa_column_kwargs={"server_default": "0"})
