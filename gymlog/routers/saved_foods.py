from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from gymlog.database import get_session
from gymlog.errors import NotFoundError, ValidationError
from gymlog.models import SavedFood
from gymlog.services import nutrition
from gymlog.services.macros import MacroValues

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


class SavedFoodRead(SQLModel):
    id: int
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float


class SavedFoodCreate(SQLModel):
    name: str
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0


def _food_read(food: SavedFood) -> SavedFoodRead:
    return SavedFoodRead(
        id=food.id,
        name=food.name,
        calories=food.calories,
        protein=food.protein,
        carbs=food.carbs,
        fat=food.fat,
    )


@router.get("/", response_model=list[SavedFoodRead])
def list_saved_foods(session: SessionDep):
    return [_food_read(food) for food in nutrition.list_saved_foods(session)]


@router.post("/", response_model=SavedFoodRead, status_code=201)
def create_saved_food(body: SavedFoodCreate, session: SessionDep):
    values = MacroValues(calories=body.calories, protein=body.protein, carbs=body.carbs, fat=body.fat)
    try:
        food = nutrition.add_saved_food(session, body.name, values)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _food_read(food)


@router.delete("/{id}", status_code=204)
def delete_saved_food(id: int, session: SessionDep):
    try:
        nutrition.delete_saved_food(session, id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Saved food not found")
