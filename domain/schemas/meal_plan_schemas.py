from datetime import date
from uuid import UUID

from pydantic import BaseModel

from domain.enums import MealChoiceStatus


class MealPlanUpsert(BaseModel):
    status: MealChoiceStatus
    wants_vegetarian: bool = False


class MealPlanResponse(BaseModel):
    user_id: UUID
    date: date
    status: MealChoiceStatus
    wants_vegetarian: bool

    model_config = {"from_attributes": True}
