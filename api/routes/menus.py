"""Menu routes: weeks, items, allergen tags and publishing"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_identity, get_db, require_roles
from api.responses import created_response, no_content
from domain.constants import ROLE_ADMIN, ROLE_KITCHEN
from domain.mappers import MenuMapper
from domain.schemas.menu_schemas import (
    MenuItemAllergensUpdate,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
    MenuWeekCreate,
    MenuWeekDetailResponse,
    MenuWeekResponse,
)
from services.menu_service import MenuService

router = APIRouter(tags=["Menus"])
logger = logging.getLogger("schoolmeal.api.menus")

kitchen_or_admin = require_roles(ROLE_KITCHEN, ROLE_ADMIN)


def get_menu_service(db: Session = Depends(get_db)) -> MenuService:
    return MenuService(db)


# ----------------------------------------------------------------------
# Weeks
# ----------------------------------------------------------------------


@router.post(
    "/schools/{school_id}/menuweeks",
    response_model=MenuWeekResponse,
    status_code=201,
    dependencies=[Depends(kitchen_or_admin)],
)
def create_menu_week(
    school_id: UUID,
    payload: MenuWeekCreate,
    service: MenuService = Depends(get_menu_service),
):
    """Create an empty, unpublished week. An existing (school, year, week) is a 409."""
    week = service.create_week(school_id, payload)
    return created_response(
        MenuMapper.week_to_response(week),
        f"/schools/{school_id}/menuweeks/{week.year}/{week.week_number}",
    )


@router.get(
    "/schools/{school_id}/menuweeks",
    response_model=List[MenuWeekResponse],
    dependencies=[Depends(get_current_identity)],
)
def list_menu_weeks(school_id: UUID, service: MenuService = Depends(get_menu_service)):
    return [MenuMapper.week_to_response(w) for w in service.list_weeks(school_id)]


@router.get(
    "/schools/{school_id}/menuweeks/{year}/{week}",
    response_model=MenuWeekDetailResponse,
    dependencies=[Depends(get_current_identity)],
)
def get_menu_week(
    school_id: UUID,
    year: int = Path(..., ge=2000, le=2100),
    week: int = Path(..., ge=1, le=53),
    service: MenuService = Depends(get_menu_service),
):
    """Week with its items (ordered by day and type) and each item's allergen codes"""
    return service.get_week_detail(school_id, year, week)


@router.post(
    "/menuweeks/{menu_week_id}/publish",
    response_model=MenuWeekResponse,
    dependencies=[Depends(kitchen_or_admin)],
)
def publish_menu_week(menu_week_id: UUID, service: MenuService = Depends(get_menu_service)):
    """Publish the week. Publishing again keeps the first timestamp."""
    return MenuMapper.week_to_response(service.publish_week(menu_week_id))


# ----------------------------------------------------------------------
# Items
# ----------------------------------------------------------------------


@router.get(
    "/menuweeks/{menu_week_id}/items",
    response_model=List[MenuItemResponse],
    dependencies=[Depends(get_current_identity)],
)
def list_menu_items(menu_week_id: UUID, service: MenuService = Depends(get_menu_service)):
    return service.list_items(menu_week_id)


@router.post(
    "/menuweeks/{menu_week_id}/items",
    response_model=MenuItemResponse,
    status_code=201,
    dependencies=[Depends(kitchen_or_admin)],
)
def add_menu_item(
    menu_week_id: UUID,
    payload: MenuItemCreate,
    service: MenuService = Depends(get_menu_service),
):
    item = service.add_item(menu_week_id, payload)
    return created_response(item, f"/menuitems/{item.menu_item_id}")


@router.put(
    "/menuitems/{menu_item_id}",
    response_model=MenuItemResponse,
    dependencies=[Depends(kitchen_or_admin)],
)
def update_menu_item(
    menu_item_id: UUID,
    payload: MenuItemUpdate,
    service: MenuService = Depends(get_menu_service),
):
    return service.update_item(menu_item_id, payload)


@router.delete(
    "/menuitems/{menu_item_id}",
    status_code=204,
    dependencies=[Depends(kitchen_or_admin)],
)
def delete_menu_item(menu_item_id: UUID, service: MenuService = Depends(get_menu_service)):
    """Delete an item together with its allergen tags."""
    service.delete_item(menu_item_id)
    return no_content()


@router.put(
    "/menuitems/{menu_item_id}/allergens",
    response_model=MenuItemResponse,
    dependencies=[Depends(kitchen_or_admin)],
)
def replace_menu_item_allergens(
    menu_item_id: UUID,
    payload: MenuItemAllergensUpdate,
    service: MenuService = Depends(get_menu_service),
):
    """
    Replace the item's allergen codes.

    Codes are trimmed and uppercased; blanks and repeats are dropped.
    Sending the same list twice leaves the same set.
    """
    return service.replace_allergens(menu_item_id, payload.allergens)
