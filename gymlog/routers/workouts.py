from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from gymlog.database import get_session
from gymlog.errors import NotFoundError, ValidationError
from gymlog.models import Workout
from gymlog.services import sessions
from gymlog.split import SPLIT

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class SplitDayRead(SQLModel):
    index: int
    name: str
    subtitle: str
    exercises: list[str]


class WorkoutRead(SQLModel):
    id: int
    split_index: int
    planned_name: str
    started_at: str
    completed_at: str | None


class LogRead(SQLModel):
    id: int
    exercise_name: str
    date: str
    weight: float
    unit: str
    reps: int
    set_type: str


class WorkoutStart(SQLModel):
    split_index: int
    planned_name: str | None = None
    started_at: str | None = None


class WorkoutFinish(SQLModel):
    completed_at: str | None = None


def _workout_read(workout: Workout | None) -> WorkoutRead | None:
    if workout is None:
        return None
    return WorkoutRead(
        id=workout.id,
        split_index=workout.split_index,
        planned_name=workout.planned_name,
        started_at=workout.started_at,
        completed_at=workout.completed_at,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/split", response_model=list[SplitDayRead])
def get_split():
    return [
        SplitDayRead(index=i, name=day.name, subtitle=day.subtitle, exercises=list(day.exercises))
        for i, day in enumerate(SPLIT)
    ]


@router.post("/", response_model=WorkoutRead, status_code=201)
def start_workout(body: WorkoutStart, session: SessionDep):
    try:
        workout_id = sessions.start_workout(
            session, body.split_index, body.planned_name, body.started_at
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _workout_read(sessions.get_workout(session, workout_id))


@router.get("/active", response_model=WorkoutRead | None)
def get_active_workout(session: SessionDep):
    return _workout_read(sessions.get_active_workout(session))


@router.get("/last-completed", response_model=WorkoutRead | None)
def get_last_completed_workout(session: SessionDep):
    return _workout_read(sessions.get_last_completed_workout(session))


@router.get("/{id}", response_model=WorkoutRead)
def get_workout(id: int, session: SessionDep):
    workout = sessions.get_workout(session, id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return _workout_read(workout)


@router.post("/{id}/finish", response_model=WorkoutRead)
def finish_workout(id: int, body: WorkoutFinish, session: SessionDep):
    try:
        workout = sessions.finish_workout(session, id, body.completed_at)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Workout not found")
    return _workout_read(workout)


@router.get("/{id}/logs", response_model=list[LogRead])
def get_workout_logs(id: int, session: SessionDep):
    if sessions.get_workout(session, id) is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return [
        LogRead(
            id=log.id,
            exercise_name=log.exercise_name,
            date=log.date,
            weight=log.weight,
            unit=log.unit,
            reps=log.reps,
            set_type=log.set_type,
        )
        for log in sessions.workout_logs(session, id)
    ]
