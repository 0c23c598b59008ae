"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.school import School
from domain.models.identity import IdentityUser, IdentityRole, IdentityUserRole
from domain.models.allergy import Allergy
from domain.models.user import User, UserAllergy
from domain.models.menu import MenuWeek, MenuItem, MenuItemAllergen
from domain.models.meal_plan import MealPlan

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # School
    "School",
    # Identity models
    "IdentityUser",
    "IdentityRole",
    "IdentityUserRole",
    # User models
    "Allergy",
    "User",
    "UserAllergy",
    # Menu models
    "MenuWeek",
    "MenuItem",
    "MenuItemAllergen",
    # Meal plan models
    "MealPlan",
]
