"""Read side of the exercise log: raw sets grouped into top-set / back-off entries."""

import logging
from dataclasses import dataclass

from sqlalchemy import case, func
from sqlmodel import Session, select

from gymlog.models import Log, SetType, Workout
from gymlog.services.schemes import resolve_scheme

logger = logging.getLogger(__name__)

NO_DATA = "No data"


@dataclass
class Entry:
    date: str
    weight: float
    unit: str
    top_reps: int | None
    back_reps: int | None


@dataclass
class HistoryRow:
    id: int
    workout_id: int
    exercise_name: str
    date: str
    weight: float
    unit: str
    reps: int
    set_type: str
    split_index: int
    planned_name: str
    completed_at: str | None


@dataclass
class AddFormDefaults:
    weight: str
    top_reps: int
    back_reps: int


def _format_number(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def list_entries(session: Session, exercise_name: str, limit: int = 50) -> list[Entry]:
    """Entries for one exercise, most recent first.

    Sets are grouped by (date, weight, unit). When a group holds more than one
    set of the same type, the highest reps win.
    """
    top_reps = func.max(case((Log.set_type == SetType.TOP_SET.value, Log.reps)))
    back_reps = func.max(case((Log.set_type == SetType.BACK_OFF.value, Log.reps)))
    statement = (
        select(Log.date, Log.weight, Log.unit, top_reps, back_reps)
        .where(Log.exercise_name == exercise_name)
        .group_by(Log.date, Log.weight, Log.unit)
        .order_by(Log.date.desc())
        .limit(limit)
    )
    return [
        Entry(date=row[0], weight=row[1], unit=row[2], top_reps=row[3], back_reps=row[4])
        for row in session.exec(statement).all()
    ]


def last_entry(session: Session, exercise_name: str) -> Entry | None:
    entries = list_entries(session, exercise_name, limit=1)
    return entries[0] if entries else None


def delete_entry(session: Session, exercise_name: str, date: str) -> int:
    """Delete every set of an exercise logged at ``date``, whatever its weight."""
    logs = session.exec(
        select(Log).where(Log.exercise_name == exercise_name, Log.date == date)
    ).all()
    for log in logs:
        session.delete(log)
    session.commit()
    logger.info("Deleted %d sets of %s at %s", len(logs), exercise_name, date)
    return len(logs)


def distinct_exercises(session: Session) -> list[str]:
    statement = select(Log.exercise_name).group_by(Log.exercise_name).order_by(Log.exercise_name)
    return list(session.exec(statement).all())


def exercise_history(session: Session, exercise_name: str, limit: int = 100) -> list[HistoryRow]:
    """Raw sets with the workout each was logged in, newest first."""
    statement = (
        select(Log, Workout)
        .join(Workout, Workout.id == Log.workout_id)
        .where(Log.exercise_name == exercise_name)
        .order_by(Log.date.desc(), Log.id.desc())
        .limit(limit)
    )
    return [
        HistoryRow(
            id=log.id,
            workout_id=log.workout_id,
            exercise_name=log.exercise_name,
            date=log.date,
            weight=log.weight,
            unit=log.unit,
            reps=log.reps,
            set_type=log.set_type,
            split_index=workout.split_index,
            planned_name=workout.planned_name,
            completed_at=workout.completed_at,
        )
        for log, workout in session.exec(statement).all()
    ]


def add_form_defaults(session: Session, exercise_name: str) -> AddFormDefaults:
    """Prefill for the add form: repeat the last entry, clamped into the scheme."""
    scheme = resolve_scheme(exercise_name)
    entry = last_entry(session, exercise_name)
    if entry is None:
        return AddFormDefaults(weight="0", top_reps=scheme.min, back_reps=scheme.min)
    return AddFormDefaults(
        weight=_format_number(entry.weight) if entry.weight is not None else "0",
        top_reps=scheme.clamp(entry.top_reps) if entry.top_reps is not None else scheme.min,
        back_reps=scheme.clamp(entry.back_reps) if entry.back_reps is not None else scheme.min,
    )


def format_log_line(entry: Entry | None) -> str:
    """``30kg × 10 / 11``; a missing set shows as a dash."""
    if entry is None or (entry.top_reps is None and entry.back_reps is None):
        return NO_DATA
    top = entry.top_reps if entry.top_reps is not None else "—"
    back = entry.back_reps if entry.back_reps is not None else "—"
    return f"{_format_number(entry.weight)}{entry.unit} × {top} / {back}"
