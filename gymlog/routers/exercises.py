from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, SQLModel

from gymlog.config import settings
from gymlog.database import get_session
from gymlog.dates import format_date_european
from gymlog.errors import NotFoundError, ValidationError
from gymlog.services import entries, sessions
from gymlog.services.entries import Entry
from gymlog.services.schemes import ready_to_upgrade, resolve_scheme

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class SchemeRead(SQLModel):
    min: int
    max: int
    step: int
    unit_label: str
    values: list[int]


class EntryRead(SQLModel):
    date: str
    display_date: str
    weight: float
    unit: str
    top_reps: int | None
    back_reps: int | None


class AddFormRead(SQLModel):
    weight: str
    top_reps: int
    back_reps: int


class ExerciseSummary(SQLModel):
    exercise_name: str
    scheme: SchemeRead
    last_entry: EntryRead | None
    last_line: str
    ready_to_upgrade: bool
    add_form: AddFormRead


class HistoryRead(SQLModel):
    id: int
    workout_id: int
    date: str
    weight: float
    unit: str
    reps: int
    set_type: str
    split_index: int
    planned_name: str
    completed_at: str | None


class EntryCreate(SQLModel):
    workout_id: int
    # Accepted as text so "32,5" works the way it was typed
    weight: str | float | None = None
    top_reps: int | float | None = None
    back_reps: int | float | None = None


def _entry_read(entry: Entry | None) -> EntryRead | None:
    if entry is None:
        return None
    return EntryRead(
        date=entry.date,
        display_date=format_date_european(entry.date),
        weight=entry.weight,
        unit=entry.unit,
        top_reps=entry.top_reps,
        back_reps=entry.back_reps,
    )


def _scheme_read(exercise_name: str) -> SchemeRead:
    scheme = resolve_scheme(exercise_name)
    return SchemeRead(
        min=scheme.min,
        max=scheme.max,
        step=scheme.step,
        unit_label=scheme.unit_label,
        values=scheme.step_values(),
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/", response_model=list[str])
def list_exercises(session: SessionDep):
    return entries.distinct_exercises(session)


@router.get("/{exercise_name}/scheme", response_model=SchemeRead)
def get_scheme(exercise_name: str):
    return _scheme_read(exercise_name)


@router.get("/{exercise_name}/summary", response_model=ExerciseSummary)
def get_summary(exercise_name: str, session: SessionDep):
    """Everything the collapsed card shows, plus the add form prefill."""
    last = entries.last_entry(session, exercise_name)
    defaults = entries.add_form_defaults(session, exercise_name)
    return ExerciseSummary(
        exercise_name=exercise_name,
        scheme=_scheme_read(exercise_name),
        last_entry=_entry_read(last),
        last_line=entries.format_log_line(last),
        ready_to_upgrade=ready_to_upgrade(resolve_scheme(exercise_name), last),
        add_form=AddFormRead(
            weight=defaults.weight,
            top_reps=defaults.top_reps,
            back_reps=defaults.back_reps,
        ),
    )


@router.get("/{exercise_name}/entries", response_model=list[EntryRead])
def list_entries(
    exercise_name: str,
    session: SessionDep,
    limit: Annotated[int | None, Query(ge=1)] = None,
):
    return [
        _entry_read(e)
        for e in entries.list_entries(session, exercise_name, limit or settings.history_limit)
    ]


@router.post("/{exercise_name}/entries", response_model=EntryRead, status_code=201)
def save_entry(exercise_name: str, body: EntryCreate, session: SessionDep):
    try:
        entry = sessions.save_entry(
            session,
            body.workout_id,
            exercise_name,
            body.weight,
            body.top_reps,
            body.back_reps,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Workout not found")
    return _entry_read(entry)


@router.delete("/{exercise_name}/entries", status_code=204)
def delete_entry(exercise_name: str, date: str, session: SessionDep):
    entries.delete_entry(session, exercise_name, date)


@router.get("/{exercise_name}/history", response_model=list[HistoryRead])
def get_history(
    exercise_name: str,
    session: SessionDep,
    limit: Annotated[int, Query(ge=1)] = 100,
):
    return [
        HistoryRead(
            id=row.id,
            workout_id=row.workout_id,
            date=row.date,
            weight=row.weight,
            unit=row.unit,
            reps=row.reps,
            set_type=row.set_type,
            split_index=row.split_index,
            planned_name=row.planned_name,
            completed_at=row.completed_at,
        )
        for row in entries.exercise_history(session, exercise_name, limit)
    ]
