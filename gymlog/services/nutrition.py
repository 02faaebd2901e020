import logging
from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy import func
from sqlmodel import Session, select

from gymlog.dates import today_key
from gymlog.errors import NotFoundError, ValidationError
from gymlog.models import DEFAULT_QUOTA, QUOTA_ID, NutritionLog, NutritionQuota, SavedFood
from gymlog.services.macros import FIELDS, MacroResolution, MacroValues, resolve_macros

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Daily log
# ---------------------------------------------------------------------------


def add_nutrition_log(
    session: Session,
    values: MacroValues,
    day: str | None = None,
    food_name: str = "",
) -> NutritionLog:
    log = NutritionLog(
        date=day or today_key(),
        food_name=str(food_name or "").strip(),
        **values.as_dict(),
    )
    session.add(log)
    session.commit()
    session.refresh(log)
    logger.info("Logged %s kcal on %s", log.calories, log.date)
    return log


def nutrition_logs_for_date(session: Session, day: str) -> list[NutritionLog]:
    return list(
        session.exec(
            select(NutritionLog).where(NutritionLog.date == day).order_by(NutritionLog.id.desc())
        ).all()
    )


def delete_nutrition_log(session: Session, log_id: int) -> None:
    log = session.get(NutritionLog, log_id)
    if log is None:
        raise NotFoundError(f"Nutrition log {log_id} not found")
    session.delete(log)
    session.commit()


def update_food_name(session: Session, log_id: int, food_name: str | None) -> NutritionLog:
    log = session.get(NutritionLog, log_id)
    if log is None:
        raise NotFoundError(f"Nutrition log {log_id} not found")
    log.food_name = str(food_name or "").strip()
    session.add(log)
    session.commit()
    session.refresh(log)
    return log


def totals_for_date(session: Session, day: str) -> MacroValues:
    row = session.exec(
        select(
            func.coalesce(func.sum(NutritionLog.calories), 0),
            func.coalesce(func.sum(NutritionLog.protein), 0),
            func.coalesce(func.sum(NutritionLog.carbs), 0),
            func.coalesce(func.sum(NutritionLog.fat), 0),
        ).where(NutritionLog.date == day)
    ).one()
    return MacroValues(*(float(v or 0) for v in row))


# ---------------------------------------------------------------------------
# Quota
# ---------------------------------------------------------------------------


def get_quota(session: Session) -> MacroValues:
    quota = session.get(NutritionQuota, QUOTA_ID)
    if quota is None:
        return MacroValues(**DEFAULT_QUOTA)
    return MacroValues(
        calories=quota.calories,
        protein=quota.protein,
        carbs=quota.carbs,
        fat=quota.fat,
    )


def set_quota(session: Session, values: MacroValues) -> MacroValues:
    """Create the quota row if absent, otherwise update it in place."""
    quota = session.get(NutritionQuota, QUOTA_ID) or NutritionQuota(id=QUOTA_ID)
    for name, value in values.as_dict().items():
        setattr(quota, name, value)
    session.add(quota)
    session.commit()
    logger.info("Quota set to %s", values.as_dict())
    return get_quota(session)


# ---------------------------------------------------------------------------
# Saved foods
# ---------------------------------------------------------------------------


def add_saved_food(session: Session, name: str, values: MacroValues) -> SavedFood:
    name = str(name or "").strip()
    if not name:
        raise ValidationError("Enter a name.")
    food = SavedFood(name=name, **values.as_dict())
    session.add(food)
    session.commit()
    session.refresh(food)
    return food


def list_saved_foods(session: Session) -> list[SavedFood]:
    return list(session.exec(select(SavedFood).order_by(SavedFood.id.desc())).all())


def delete_saved_food(session: Session, food_id: int) -> None:
    food = session.get(SavedFood, food_id)
    if food is None:
        raise NotFoundError(f"Saved food {food_id} not found")
    session.delete(food)
    session.commit()


# ---------------------------------------------------------------------------
# Input form
# ---------------------------------------------------------------------------


class FormMode(str, Enum):
    LOG = "log"
    QUOTA = "quota"


def _format_input(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


@dataclass
class MacroForm:
    """The four macro inputs and what a confirmed save does with them.

    In LOG mode a save appends a nutrition log for today; in QUOTA mode it
    replaces the daily targets. Inputs are cleared after a save.
    """

    inputs: dict[str, str] = field(default_factory=lambda: dict.fromkeys(FIELDS, ""))
    mode: FormMode = FormMode.LOG

    @property
    def resolution(self) -> MacroResolution:
        return resolve_macros(**self.inputs)

    def set(self, name: str, raw: str) -> None:
        if name not in FIELDS:
            raise KeyError(name)
        self.inputs[name] = raw

    def clear(self) -> None:
        self.inputs = dict.fromkeys(FIELDS, "")

    def enter_quota_mode(self, session: Session) -> None:
        quota = get_quota(session)
        self.mode = FormMode.QUOTA
        self.inputs = {name: _format_input(value) for name, value in quota.as_dict().items()}

    def exit_quota_mode(self) -> None:
        self.mode = FormMode.LOG
        self.clear()

    def submit(
        self, session: Session, day: str | None = None, food_name: str = ""
    ) -> NutritionLog | MacroValues:
        resolution = self.resolution
        if not resolution.can_save:
            raise ValidationError("Enter at least three of calories, protein, carbs and fat.")
        if not resolution.is_valid:
            raise ValidationError("Calories don't match the macros.")

        if self.mode is FormMode.QUOTA:
            result = set_quota(session, resolution.values)
        else:
            result = add_nutrition_log(session, resolution.values, day=day, food_name=food_name)
        self.clear()
        return result
