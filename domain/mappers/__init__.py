"""
Domain mappers package.
Handles transformation between ORM models and DTOs (Data Transfer Objects).
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.menu_mapper import MenuMapper

__all__ = ["UserMapper", "MenuMapper"]
