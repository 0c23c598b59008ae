from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from domain.constants import ALLERGEN_CODE_MAX_LENGTH
from domain.mappers import MenuMapper
from domain.models import MenuWeek, MenuItem
from domain.schemas.menu_schemas import (
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
    MenuWeekCreate,
    MenuWeekDetailResponse,
)
from repositories import (
    SchoolRepository,
    MenuWeekRepository,
    MenuItemRepository,
    MenuItemAllergenRepository,
    normalize_allergen_codes,
)
from services.base import BaseService
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError

DUPLICATE_WEEK_MESSAGE = "MenuWeek already exists for that school/year/week."


class MenuService(BaseService):
    """Menu authoring: weeks, items, allergen tags and publishing."""

    def __init__(self, db: Session):
        super().__init__(db, "schoolmeal.menus")
        self.schools = SchoolRepository(db)
        self.weeks = MenuWeekRepository(db)
        self.items = MenuItemRepository(db)
        self.allergens = MenuItemAllergenRepository(db)

    # ------------------------------------------------------------------
    # Weeks
    # ------------------------------------------------------------------

    def _get_week(self, menu_week_id: UUID) -> MenuWeek:
        week = self.weeks.get_by_id(menu_week_id)
        if week is None:
            raise NotFoundError("MenuWeek not found.")
        return week

    def create_week(self, school_id: UUID, data: MenuWeekCreate) -> MenuWeek:
        """Create a week; an existing (school, year, week) is a conflict, never overwritten."""
        if not self.schools.exists(school_id):
            raise NotFoundError("School not found.")
        if self.weeks.get_by_natural_key(school_id, data.year, data.week_number) is not None:
            raise ConflictError(DUPLICATE_WEEK_MESSAGE)

        with self.transaction(DUPLICATE_WEEK_MESSAGE):
            week = self.weeks.add(
                MenuWeek(
                    school_id=school_id,
                    year=data.year,
                    week_number=data.week_number,
                    published_at=None,
                )
            )
        self.log_info(
            "menu_week_created",
            menu_week_id=week.menu_week_id,
            school_id=school_id,
            year=data.year,
            week=data.week_number,
        )
        return week

    def list_weeks(self, school_id: UUID) -> List[MenuWeek]:
        if not self.schools.exists(school_id):
            raise NotFoundError("School not found.")
        return self.weeks.list_by_school(school_id)

    def get_week_detail(self, school_id: UUID, year: int, week_number: int) -> MenuWeekDetailResponse:
        week = self.weeks.get_by_natural_key(school_id, year, week_number)
        if week is None:
            raise NotFoundError("MenuWeek not found.")
        items = self.items.list_by_week(week.menu_week_id)
        codes = self.allergens.codes_by_item(i.menu_item_id for i in items)
        return MenuMapper.week_to_detail(week, items, codes)

    def publish_week(self, menu_week_id: UUID, now: Optional[datetime] = None) -> MenuWeek:
        """Publish once: the first timestamp is kept on repeated calls."""
        with self.transaction():
            week = self._get_week(menu_week_id)
            first = self.weeks.publish(week, now or datetime.now(timezone.utc))
        if first:
            self.log_info("menu_week_published", menu_week_id=menu_week_id)
        else:
            self.log_info("menu_week_already_published", menu_week_id=menu_week_id)
        return week

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def _get_item(self, menu_item_id: UUID) -> MenuItem:
        item = self.items.get_by_id(menu_item_id)
        if item is None:
            raise NotFoundError("MenuItem not found.")
        return item

    def list_items(self, menu_week_id: UUID) -> List[MenuItemResponse]:
        self._get_week(menu_week_id)
        items = self.items.list_by_week(menu_week_id)
        codes = self.allergens.codes_by_item(i.menu_item_id for i in items)
        return [MenuMapper.item_to_response(i, codes.get(i.menu_item_id, [])) for i in items]

    def add_item(self, menu_week_id: UUID, data: MenuItemCreate) -> MenuItemResponse:
        self._get_week(menu_week_id)
        with self.transaction():
            item = self.items.add(
                MenuItem(
                    menu_week_id=menu_week_id,
                    day_of_week=data.day_of_week,
                    type=data.type,
                    title=data.title,
                    description=data.description or "",
                )
            )
        self.log_info(
            "menu_item_created",
            menu_item_id=item.menu_item_id,
            menu_week_id=menu_week_id,
            day=data.day_of_week,
        )
        return MenuMapper.item_to_response(item)

    def update_item(self, menu_item_id: UUID, data: MenuItemUpdate) -> MenuItemResponse:
        with self.transaction():
            item = self._get_item(menu_item_id)
            item.day_of_week = data.day_of_week
            item.type = data.type
            item.title = data.title
            item.description = data.description or ""
        self.log_info("menu_item_updated", menu_item_id=menu_item_id)
        return MenuMapper.item_to_response(item, self.allergens.get_codes(menu_item_id))

    def delete_item(self, menu_item_id: UUID) -> None:
        with self.transaction():
            if not self.items.delete(menu_item_id):
                raise NotFoundError("MenuItem not found.")
        self.log_info("menu_item_deleted", menu_item_id=menu_item_id)

    def replace_allergens(self, menu_item_id: UUID, codes: List[str]) -> MenuItemResponse:
        """Replace the item's allergen tags with the normalized, deduplicated codes."""
        item = self._get_item(menu_item_id)
        normalized = normalize_allergen_codes(codes)
        too_long = [c for c in normalized if len(c) > ALLERGEN_CODE_MAX_LENGTH]
        if too_long:
            raise ServiceValidationError(
                f"Allergen codes must be at most {ALLERGEN_CODE_MAX_LENGTH} characters.",
                details={"allergens": too_long},
            )

        with self.transaction("Allergen set changed concurrently."):
            stored = self.allergens.replace_all(menu_item_id, normalized)
        self.log_info("menu_item_allergens_replaced", menu_item_id=menu_item_id, codes=",".join(stored))
        return MenuMapper.item_to_response(item, stored)
