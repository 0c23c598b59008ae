"""
Domain enums for SchoolMeal application.
Contains all enumeration types used across the domain models.
"""

import enum


class Role(str, enum.Enum):
    """Domain role of a user profile (not the identity role claim)"""

    STUDENT = "student"
    STAFF = "staff"
    KITCHEN = "kitchen"
    ADMIN = "admin"


class MealChoiceStatus(str, enum.Enum):
    """Whether a user eats school lunch on a given day"""

    EATING = "eating"
    NOT_EATING = "not_eating"


class MenuItemType(str, enum.Enum):
    """Kind of dish on the weekly menu"""

    MAIN = "main"
    VEG = "veg"
