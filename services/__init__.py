"""Services package - Business logic layer"""

from services.school_service import SchoolService
from services.user_service import UserService, PROFILE_MISSING_MESSAGE
from services.allergy_service import AllergyService
from services.menu_service import MenuService
from services.meal_plan_service import MealPlanService, parse_plan_date
from services.identity_service import IdentityService

# Note: School, User, Allergy and Identity services are static; Menu and
# MealPlan services are instantiated per request with the session.

__all__ = [
    "SchoolService",
    "UserService",
    "PROFILE_MISSING_MESSAGE",
    "AllergyService",
    "MenuService",
    "MealPlanService",
    "parse_plan_date",
    "IdentityService",
]
