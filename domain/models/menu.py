"""
Weekly menu models.
"""

from sqlalchemy import (
    Column,
    String,
    Text,
    Integer,
    TIMESTAMP,
    ForeignKey,
    Uuid,
    Enum as SQLEnum,
    UniqueConstraint,
    CheckConstraint,
)
import uuid

from domain.models.database import Base
from domain.enums import MenuItemType


class MenuWeek(Base):
    """A school's menu for one ISO week"""

    __tablename__ = "menu_week"
    __table_args__ = (
        UniqueConstraint("school_id", "year", "week_number", name="uq_menu_week_school_year_week"),
        CheckConstraint("week_number BETWEEN 1 AND 53", name="ck_menu_week_week_number"),
    )

    menu_week_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(
        Uuid,
        ForeignKey("school.school_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    year = Column(Integer, nullable=False)
    week_number = Column(Integer, nullable=False)
    published_at = Column(TIMESTAMP(timezone=True), nullable=True)


class MenuItem(Base):
    """A dish served on one weekday of a menu week"""

    __tablename__ = "menu_item"
    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 1 AND 7", name="ck_menu_item_day_of_week"),
    )

    menu_item_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    menu_week_id = Column(
        Uuid,
        ForeignKey("menu_week.menu_week_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    day_of_week = Column(Integer, nullable=False)  # 1 = Monday, 7 = Sunday
    type = Column(SQLEnum(MenuItemType), nullable=False, default=MenuItemType.MAIN)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")


class MenuItemAllergen(Base):
    """Allergen code tagged on a menu item"""

    __tablename__ = "menu_item_allergen"

    menu_item_id = Column(
        Uuid,
        ForeignKey("menu_item.menu_item_id", ondelete="CASCADE"),
        primary_key=True,
    )
    allergen_code = Column(String(50), primary_key=True)
