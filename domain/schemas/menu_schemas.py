from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from domain.enums import MenuItemType


class MenuWeekCreate(BaseModel):
    year: int = Field(..., ge=2000, le=2100)
    week_number: int = Field(..., ge=1, le=53)


class MenuWeekResponse(BaseModel):
    menu_week_id: UUID
    school_id: UUID
    year: int
    week_number: int
    published_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MenuItemCreate(BaseModel):
    day_of_week: int = Field(..., ge=1, le=7, description="1 = Monday, 7 = Sunday")
    type: MenuItemType
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None

    @field_validator("title")
    def strip_title(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v


class MenuItemUpdate(MenuItemCreate):
    pass


class MenuItemAllergensUpdate(BaseModel):
    allergens: List[str] = Field(default_factory=list)


class MenuItemResponse(BaseModel):
    menu_item_id: UUID
    menu_week_id: UUID
    day_of_week: int
    type: MenuItemType
    title: str
    description: str
    allergens: List[str] = []


class MenuWeekDetailResponse(MenuWeekResponse):
    items: List[MenuItemResponse] = []
