"""Meal plan routes (one choice per user and date)"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_identity, get_db
from api.responses import created_response
from domain.schemas.meal_plan_schemas import MealPlanResponse, MealPlanUpsert
from services.meal_plan_service import MealPlanService, parse_plan_date

router = APIRouter(
    prefix="/users/{user_id}/mealplans",
    tags=["Meal Plans"],
    dependencies=[Depends(get_current_identity)],
)
logger = logging.getLogger("schoolmeal.api.mealplans")


def get_meal_plan_service(db: Session = Depends(get_db)) -> MealPlanService:
    return MealPlanService(db)


@router.put("/{date}", response_model=MealPlanResponse)
def upsert_meal_plan(
    user_id: UUID,
    date: str,
    payload: MealPlanUpsert,
    service: MealPlanService = Depends(get_meal_plan_service),
):
    """
    Set the user's choice for a date.

    Returns 201 with a Location header when the plan is new, 200 when it was overwritten.
    """
    day = parse_plan_date(date)
    plan, created = service.upsert(user_id, day, payload)
    resp = MealPlanResponse.model_validate(plan)
    if created:
        return created_response(resp, f"/users/{user_id}/mealplans/{day.isoformat()}")
    return resp


@router.get("/{date}", response_model=MealPlanResponse)
def get_meal_plan(
    user_id: UUID,
    date: str,
    service: MealPlanService = Depends(get_meal_plan_service),
):
    day = parse_plan_date(date)
    return MealPlanResponse.model_validate(service.get_for_date(user_id, day))


@router.get("", response_model=List[MealPlanResponse])
def list_meal_plans(
    user_id: UUID,
    date_from: str = Query(..., alias="from", description="First date, yyyy-MM-dd"),
    date_to: str = Query(..., alias="to", description="Last date (inclusive), yyyy-MM-dd"),
    service: MealPlanService = Depends(get_meal_plan_service),
):
    """Plans within [from, to] ordered by date; empty when none exist."""
    start = parse_plan_date(date_from, "from")
    end = parse_plan_date(date_to, "to")
    return [MealPlanResponse.model_validate(p) for p in service.list_range(user_id, start, end)]
