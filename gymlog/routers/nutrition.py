from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from gymlog.database import get_session
from gymlog.dates import today_key
from gymlog.errors import NotFoundError, ValidationError
from gymlog.models import NutritionLog
from gymlog.services import nutrition
from gymlog.services.macros import MacroValues, resolve_macros
from gymlog.services.nutrition import FormMode, MacroForm

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]

MacroField = str | float | None


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class MacroInput(SQLModel):
    calories: MacroField = None
    protein: MacroField = None
    carbs: MacroField = None
    fat: MacroField = None


class NutritionLogCreate(MacroInput):
    date: str | None = None
    food_name: str = ""


class MacroRead(SQLModel):
    calories: float
    protein: float
    carbs: float
    fat: float


class ResolutionRead(SQLModel):
    status: str
    can_save: bool
    is_valid: bool
    show_error: bool
    save_disabled: bool
    missing: str | None
    derived_energy: float | None
    values: MacroRead | None


class NutritionLogRead(SQLModel):
    id: int
    date: str
    calories: float
    protein: float
    carbs: float
    fat: float
    food_name: str


class FoodNameUpdate(SQLModel):
    food_name: str | None = None


class DayRead(SQLModel):
    date: str
    totals: MacroRead
    quota: MacroRead


def _macro_read(values: MacroValues) -> MacroRead:
    return MacroRead(**values.as_dict())


def _log_read(log: NutritionLog) -> NutritionLogRead:
    return NutritionLogRead(
        id=log.id,
        date=log.date,
        calories=log.calories,
        protein=log.protein,
        carbs=log.carbs,
        fat=log.fat,
        food_name=log.food_name or "",
    )


def _form(body: MacroInput, mode: FormMode) -> MacroForm:
    return MacroForm(
        inputs={
            "calories": body.calories,
            "protein": body.protein,
            "carbs": body.carbs,
            "fat": body.fat,
        },
        mode=mode,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/resolve", response_model=ResolutionRead)
def resolve(body: MacroInput):
    """Preview what saving these inputs would store, without writing anything."""
    resolution = resolve_macros(body.calories, body.protein, body.carbs, body.fat)
    return ResolutionRead(
        status=resolution.status.value,
        can_save=resolution.can_save,
        is_valid=resolution.is_valid,
        show_error=resolution.show_error,
        save_disabled=resolution.save_disabled,
        missing=resolution.missing,
        derived_energy=resolution.derived_energy,
        values=_macro_read(resolution.values) if resolution.values else None,
    )


@router.post("/logs", response_model=NutritionLogRead, status_code=201)
def add_log(body: NutritionLogCreate, session: SessionDep):
    try:
        log = _form(body, FormMode.LOG).submit(session, day=body.date, food_name=body.food_name)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _log_read(log)


@router.get("/logs", response_model=list[NutritionLogRead])
def list_logs(session: SessionDep, date: str | None = None):
    return [_log_read(log) for log in nutrition.nutrition_logs_for_date(session, date or today_key())]


@router.patch("/logs/{id}", response_model=NutritionLogRead)
def rename_log(id: int, body: FoodNameUpdate, session: SessionDep):
    try:
        log = nutrition.update_food_name(session, id, body.food_name)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Nutrition log not found")
    return _log_read(log)


@router.delete("/logs/{id}", status_code=204)
def delete_log(id: int, session: SessionDep):
    try:
        nutrition.delete_nutrition_log(session, id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Nutrition log not found")


@router.get("/day", response_model=DayRead)
def get_day(session: SessionDep, date: str | None = None):
    day = date or today_key()
    return DayRead(
        date=day,
        totals=_macro_read(nutrition.totals_for_date(session, day)),
        quota=_macro_read(nutrition.get_quota(session)),
    )


@router.get("/quota", response_model=MacroRead)
def get_quota(session: SessionDep):
    return _macro_read(nutrition.get_quota(session))


@router.put("/quota", response_model=MacroRead)
def set_quota(body: MacroInput, session: SessionDep):
    try:
        quota = _form(body, FormMode.QUOTA).submit(session)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _macro_read(quota)
