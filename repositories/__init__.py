"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.school_repository import SchoolRepository
from repositories.user_repository import UserRepository, UserAllergyRepository
from repositories.allergy_repository import AllergyRepository
from repositories.menu_repository import (
    MenuWeekRepository,
    MenuItemRepository,
    MenuItemAllergenRepository,
    normalize_allergen_codes,
)
from repositories.meal_plan_repository import MealPlanRepository
from repositories.identity_repository import IdentityUserRepository, IdentityRoleRepository

__all__ = [
    "BaseRepository",
    "SchoolRepository",
    "UserRepository",
    "UserAllergyRepository",
    "AllergyRepository",
    "MenuWeekRepository",
    "MenuItemRepository",
    "MenuItemAllergenRepository",
    "normalize_allergen_codes",
    "MealPlanRepository",
    "IdentityUserRepository",
    "IdentityRoleRepository",
]
