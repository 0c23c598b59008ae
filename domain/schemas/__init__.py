"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.school_schemas import SchoolCreate, SchoolResponse
from domain.schemas.allergy_schemas import (
    AllergyCreate,
    AllergyResponse,
    UserAllergyRequest,
    UserAllergiesReplaceRequest,
    UserAllergyResponse,
)
from domain.schemas.user_schemas import (
    UserCreate,
    UserUpdate,
    UserResponse,
    MyProfileUpdate,
    MyProfileResponse,
    EmailUpdate,
    PasswordChange,
)
from domain.schemas.menu_schemas import (
    MenuWeekCreate,
    MenuWeekResponse,
    MenuWeekDetailResponse,
    MenuItemCreate,
    MenuItemUpdate,
    MenuItemAllergensUpdate,
    MenuItemResponse,
)
from domain.schemas.meal_plan_schemas import MealPlanUpsert, MealPlanResponse
from domain.schemas.auth_schemas import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    TokenResponse,
    IdentityUserResponse,
)

__all__ = [
    # School schemas
    "SchoolCreate",
    "SchoolResponse",
    # Allergy schemas
    "AllergyCreate",
    "AllergyResponse",
    "UserAllergyRequest",
    "UserAllergiesReplaceRequest",
    "UserAllergyResponse",
    # User schemas
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "MyProfileUpdate",
    "MyProfileResponse",
    "EmailUpdate",
    "PasswordChange",
    # Menu schemas
    "MenuWeekCreate",
    "MenuWeekResponse",
    "MenuWeekDetailResponse",
    "MenuItemCreate",
    "MenuItemUpdate",
    "MenuItemAllergensUpdate",
    "MenuItemResponse",
    # Meal plan schemas
    "MealPlanUpsert",
    "MealPlanResponse",
    # Auth schemas
    "RegisterRequest",
    "RegisterResponse",
    "LoginRequest",
    "TokenResponse",
    "IdentityUserResponse",
]
