"""
Domain layer - Business entities, models, schemas, mappers, and enums.
"""

from domain import constants, enums, models, schemas

__all__ = ["constants", "enums", "models", "schemas"]
