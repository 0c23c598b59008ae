"""API routes package"""

from . import auth, health, schools, me, users, allergies, menus, meal_plans, admin

__all__ = ["auth", "health", "schools", "me", "users", "allergies", "menus", "meal_plans", "admin"]
