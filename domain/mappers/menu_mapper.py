"""
Menu domain mappers.
Builds nested menu DTOs from explicitly loaded rows (no ORM navigation).
"""

from typing import Iterable, List, Mapping

from domain.models import MenuWeek, MenuItem
from domain.schemas.menu_schemas import (
    MenuItemResponse,
    MenuWeekDetailResponse,
    MenuWeekResponse,
)


class MenuMapper:
    """Mapper for menu transformations."""

    @staticmethod
    def week_to_response(week: MenuWeek) -> MenuWeekResponse:
        return MenuWeekResponse.model_validate(week)

    @staticmethod
    def item_to_response(item: MenuItem, allergens: Iterable[str] = ()) -> MenuItemResponse:
        return MenuItemResponse(
            menu_item_id=item.menu_item_id,
            menu_week_id=item.menu_week_id,
            day_of_week=item.day_of_week,
            type=item.type,
            title=item.title,
            description=item.description or "",
            allergens=list(allergens),
        )

    @staticmethod
    def week_to_detail(
        week: MenuWeek,
        items: Iterable[MenuItem],
        allergens_by_item: Mapping,
    ) -> MenuWeekDetailResponse:
        """
        Assemble a week with its items and each item's allergen codes.

        Args:
            week: MenuWeek row
            items: MenuItem rows of the week, already ordered
            allergens_by_item: menu_item_id -> list of allergen codes

        Returns:
            MenuWeekDetailResponse
        """
        item_dtos: List[MenuItemResponse] = [
            MenuMapper.item_to_response(item, allergens_by_item.get(item.menu_item_id, []))
            for item in items
        ]
        return MenuWeekDetailResponse(
            menu_week_id=week.menu_week_id,
            school_id=week.school_id,
            year=week.year,
            week_number=week.week_number,
            published_at=week.published_at,
            items=item_dtos,
        )
