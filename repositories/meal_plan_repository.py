"""
Meal Plan Repository - Data access layer for daily meal choices
"""

from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import MealChoiceStatus
from domain.models import MealPlan


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def get_for_date(self, user_id: UUID, day: date) -> Optional[MealPlan]:
        """Get the meal plan of a user for one date"""
        return self.db.get(MealPlan, (user_id, day))

    def list_range(self, user_id: UUID, start: date, end: date) -> List[MealPlan]:
        """Meal plans within [start, end] ordered by date"""
        return (
            self.db.query(MealPlan)
            .filter(
                MealPlan.user_id == user_id,
                MealPlan.date >= start,
                MealPlan.date <= end,
            )
            .order_by(MealPlan.date)
            .all()
        )

    def upsert(
        self,
        user_id: UUID,
        day: date,
        status: MealChoiceStatus,
        wants_vegetarian: bool,
    ) -> Tuple[MealPlan, bool]:
        """Insert or overwrite the choice for (user_id, day). Returns (plan, created)."""
        plan = self.get_for_date(user_id, day)
        created = plan is None
        if created:
            plan = MealPlan(user_id=user_id, date=day)
            self.db.add(plan)
        plan.status = status
        plan.wants_vegetarian = wants_vegetarian
        self.db.flush()
        return plan, created
