"""
Menu Repository - Data access layer for menu weeks, items and allergen tags
"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import MenuWeek, MenuItem, MenuItemAllergen


def normalize_allergen_codes(codes: Optional[Iterable[str]]) -> List[str]:
    """Trim and uppercase codes, dropping blanks and repeats (first occurrence wins)."""
    normalized: List[str] = []
    for code in codes or []:
        if code is None:
            continue
        value = code.strip().upper()
        if value and value not in normalized:
            normalized.append(value)
    return normalized


class MenuWeekRepository(BaseRepository[MenuWeek]):
    """Repository for menu weeks"""

    def __init__(self, db: Session):
        super().__init__(db, MenuWeek)

    def get_by_natural_key(self, school_id: UUID, year: int, week_number: int) -> Optional[MenuWeek]:
        return (
            self.db.query(MenuWeek)
            .filter(
                MenuWeek.school_id == school_id,
                MenuWeek.year == year,
                MenuWeek.week_number == week_number,
            )
            .first()
        )

    def list_by_school(self, school_id: UUID) -> List[MenuWeek]:
        return (
            self.db.query(MenuWeek)
            .filter(MenuWeek.school_id == school_id)
            .order_by(MenuWeek.year, MenuWeek.week_number)
            .all()
        )

    def publish(self, week: MenuWeek, now: datetime) -> bool:
        """Set published_at unless already set. Returns True on first publish."""
        if week.published_at is not None:
            return False
        week.published_at = now
        self.db.flush()
        return True


class MenuItemRepository(BaseRepository[MenuItem]):
    """Repository for menu items"""

    def __init__(self, db: Session):
        super().__init__(db, MenuItem)

    def list_by_week(self, menu_week_id: UUID) -> List[MenuItem]:
        return (
            self.db.query(MenuItem)
            .filter(MenuItem.menu_week_id == menu_week_id)
            .order_by(MenuItem.day_of_week, MenuItem.type, MenuItem.title)
            .all()
        )


class MenuItemAllergenRepository(BaseRepository[MenuItemAllergen]):
    """Repository for allergen tags on menu items"""

    def __init__(self, db: Session):
        super().__init__(db, MenuItemAllergen)

    def get_codes(self, menu_item_id: UUID) -> List[str]:
        rows = (
            self.db.query(MenuItemAllergen.allergen_code)
            .filter(MenuItemAllergen.menu_item_id == menu_item_id)
            .order_by(MenuItemAllergen.allergen_code)
            .all()
        )
        return [row[0] for row in rows]

    def codes_by_item(self, menu_item_ids: Iterable[UUID]) -> Dict[UUID, List[str]]:
        """Allergen codes for many items in one query"""
        ids = list(menu_item_ids)
        result: Dict[UUID, List[str]] = defaultdict(list)
        if not ids:
            return result
        rows = (
            self.db.query(MenuItemAllergen)
            .filter(MenuItemAllergen.menu_item_id.in_(ids))
            .order_by(MenuItemAllergen.allergen_code)
            .all()
        )
        for row in rows:
            result[row.menu_item_id].append(row.allergen_code)
        return result

    def replace_all(self, menu_item_id: UUID, codes: Iterable[str]) -> List[str]:
        """Replace the item's allergen set with the normalized codes."""
        normalized = normalize_allergen_codes(codes)
        existing = (
            self.db.query(MenuItemAllergen)
            .filter(MenuItemAllergen.menu_item_id == menu_item_id)
            .all()
        )
        for row in existing:
            self.db.delete(row)
        # deletes must reach the database before the same keys are inserted again
        self.db.flush()
        for code in normalized:
            self.db.add(MenuItemAllergen(menu_item_id=menu_item_id, allergen_code=code))
        self.db.flush()
        return self.get_codes(menu_item_id)
