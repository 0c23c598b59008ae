"""
Daily meal choice model.
"""

from sqlalchemy import Column, Date, Boolean, ForeignKey, Uuid, Enum as SQLEnum

from domain.models.database import Base
from domain.enums import MealChoiceStatus


class MealPlan(Base):
    """A user's meal choice for one calendar date"""

    __tablename__ = "meal_plan"

    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    date = Column(Date, primary_key=True)
    status = Column(SQLEnum(MealChoiceStatus), nullable=False, default=MealChoiceStatus.EATING)
    wants_vegetarian = Column(Boolean, nullable=False, default=False)
