"""Workout records and the write side of the exercise log."""

import logging
import math

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from gymlog.dates import to_iso
from gymlog.errors import NotFoundError, ValidationError
from gymlog.models import DEFAULT_UNIT, Log, SetType, Workout
from gymlog.services.entries import Entry
from gymlog.services.schemes import resolve_scheme
from gymlog.split import SPLIT

logger = logging.getLogger(__name__)


def _require_workout(session: Session, workout_id: int) -> Workout:
    workout = session.get(Workout, workout_id)
    if workout is None:
        raise NotFoundError(f"Workout {workout_id} not found")
    return workout


def _parse_weight(raw) -> float | None:
    try:
        weight = float(str(raw).strip().replace(",", "."))
    except (TypeError, ValueError):
        return None
    return weight if math.isfinite(weight) else None


def _parse_reps(raw) -> int | None:
    try:
        reps = float(raw)
    except (TypeError, ValueError):
        return None
    return math.trunc(reps) if math.isfinite(reps) else None


def start_workout(
    session: Session,
    split_index: int,
    planned_name: str | None = None,
    started_at: str | None = None,
) -> int:
    """Open a new workout for a split day.

    Earlier workouts are left as they are, even if still open.
    """
    if not 0 <= split_index < len(SPLIT):
        raise ValidationError(f"Split index must be between 0 and {len(SPLIT) - 1}")
    workout = Workout(
        split_index=split_index,
        planned_name=planned_name or SPLIT[split_index].name,
        started_at=started_at or to_iso(),
    )
    session.add(workout)
    session.commit()
    session.refresh(workout)
    logger.info("Started workout %d (%s)", workout.id, workout.planned_name)
    return workout.id


def finish_workout(session: Session, workout_id: int, completed_at: str | None = None) -> Workout:
    workout = _require_workout(session, workout_id)
    if workout.completed_at is not None:
        return workout
    workout.completed_at = completed_at or to_iso()
    session.add(workout)
    session.commit()
    session.refresh(workout)
    logger.info("Finished workout %d", workout.id)
    return workout


def get_workout(session: Session, workout_id: int) -> Workout | None:
    return session.get(Workout, workout_id)


def get_active_workout(session: Session) -> Workout | None:
    return session.exec(
        select(Workout)
        .where(Workout.completed_at.is_(None))
        .order_by(Workout.started_at.desc())
        .limit(1)
    ).first()


def get_last_completed_workout(session: Session) -> Workout | None:
    return session.exec(
        select(Workout)
        .where(Workout.completed_at.is_not(None))
        .order_by(Workout.completed_at.desc())
        .limit(1)
    ).first()


def workout_logs(session: Session, workout_id: int) -> list[Log]:
    return list(
        session.exec(
            select(Log).where(Log.workout_id == workout_id).order_by(Log.date.desc(), Log.id.desc())
        ).all()
    )


def add_log(
    session: Session,
    workout_id: int,
    exercise_name: str,
    date: str,
    weight: float,
    reps: int,
    set_type: SetType | str,
    unit: str = DEFAULT_UNIT,
) -> Log:
    """Write a single set. Entries are normally written through ``save_entry``."""
    _require_workout(session, workout_id)
    log = Log(
        workout_id=workout_id,
        exercise_name=exercise_name,
        date=date,
        weight=weight,
        unit=unit or DEFAULT_UNIT,
        reps=reps,
        set_type=SetType(set_type).value,
    )
    session.add(log)
    session.commit()
    session.refresh(log)
    return log


def save_entry(
    session: Session,
    workout_id: int,
    exercise_name: str,
    weight,
    top_reps,
    back_reps,
    date: str | None = None,
) -> Entry:
    """Validate and write one entry: a TOP_SET and a BACK_OFF with the same date and weight.

    Reps are clamped into the exercise's scheme. Both sets are committed
    together or not at all.
    """
    parsed_weight = _parse_weight(weight)
    if parsed_weight is None or parsed_weight < 0:
        raise ValidationError("Enter weight.")
    top, back = _parse_reps(top_reps), _parse_reps(back_reps)
    if top is None or back is None:
        raise ValidationError("Enter both sets.")
    _require_workout(session, workout_id)

    scheme = resolve_scheme(exercise_name)
    date = date or to_iso()
    sets = [
        Log(
            workout_id=workout_id,
            exercise_name=exercise_name,
            date=date,
            weight=parsed_weight,
            unit=DEFAULT_UNIT,
            reps=scheme.clamp(reps),
            set_type=set_type.value,
        )
        for set_type, reps in ((SetType.TOP_SET, top), (SetType.BACK_OFF, back))
    ]
    try:
        session.add_all(sets)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to save entry for %s at %s", exercise_name, date)
        raise

    logger.info("Saved %s: %s × %d / %d", exercise_name, parsed_weight, sets[0].reps, sets[1].reps)
    return Entry(
        date=date,
        weight=parsed_weight,
        unit=DEFAULT_UNIT,
        top_reps=sets[0].reps,
        back_reps=sets[1].reps,
    )
