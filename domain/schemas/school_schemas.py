from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class SchoolCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    timezone: Optional[str] = Field(None, max_length=64)

    @field_validator("name")
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("timezone")
    def strip_timezone(cls, v):
        if v is None:
            return v
        return v.strip() or None


class SchoolResponse(BaseModel):
    school_id: UUID
    name: str
    timezone: str

    model_config = {"from_attributes": True}
