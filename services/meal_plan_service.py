from datetime import date, datetime
from typing import List, Tuple
from uuid import UUID
import re

from sqlalchemy.orm import Session

from domain.models import MealPlan
from domain.schemas.meal_plan_schemas import MealPlanUpsert
from repositories import MealPlanRepository, UserRepository
from services.base import BaseService
from app.exceptions import NotFoundError, ServiceValidationError

INVALID_DATE_MESSAGE = "Invalid date format. Use yyyy-MM-dd."

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_plan_date(raw: str, field: str = "date") -> date:
    """Parse a yyyy-MM-dd path or query value; anything else is rejected."""
    value = (raw or "").strip()
    if not _DATE_PATTERN.match(value):
        raise ServiceValidationError(INVALID_DATE_MESSAGE, details={field: [value]})
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise ServiceValidationError(INVALID_DATE_MESSAGE, details={field: [value]}) from e


class MealPlanService(BaseService):
    """Per-user daily meal choices"""

    def __init__(self, db: Session):
        super().__init__(db, "schoolmeal.mealplans")
        self.users = UserRepository(db)
        self.plans = MealPlanRepository(db)

    def _require_user(self, user_id: UUID) -> None:
        if not self.users.exists(user_id):
            raise NotFoundError("User not found.")

    def upsert(self, user_id: UUID, day: date, data: MealPlanUpsert) -> Tuple[MealPlan, bool]:
        """At most one plan per (user, date); a second call overwrites the first."""
        self._require_user(user_id)
        with self.transaction("Meal plan changed concurrently."):
            plan, created = self.plans.upsert(user_id, day, data.status, data.wants_vegetarian)
        self.log_info(
            "meal_plan_upserted",
            user_id=user_id,
            date=day.isoformat(),
            status=data.status.value,
            created=created,
        )
        return plan, created

    def get_for_date(self, user_id: UUID, day: date) -> MealPlan:
        plan = self.plans.get_for_date(user_id, day)
        if plan is None:
            raise NotFoundError("Meal plan not found.")
        return plan

    def list_range(self, user_id: UUID, start: date, end: date) -> List[MealPlan]:
        if end < start:
            raise ServiceValidationError(
                "'to' must be on or after 'from'.",
                details={"from": [start.isoformat()], "to": [end.isoformat()]},
            )
        self._require_user(user_id)
        return self.plans.list_range(user_id, start, end)
