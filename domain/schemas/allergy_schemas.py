from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from domain.constants import ALLERGY_NAME_MAX_LENGTH, NOTES_MAX_LENGTH


class AllergyCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=ALLERGY_NAME_MAX_LENGTH)

    @field_validator("name")
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class AllergyResponse(BaseModel):
    allergy_id: UUID
    name: str

    model_config = {"from_attributes": True}


class UserAllergyRequest(BaseModel):
    """Single allergy link; notes are mandatory for the "Other" catalog entry."""

    allergy_id: UUID
    notes: Optional[str] = Field(None, max_length=NOTES_MAX_LENGTH)

    @field_validator("notes")
    def strip_notes(cls, v):
        return v.strip() if v is not None else v


class UserAllergiesReplaceRequest(BaseModel):
    allergies: List[UserAllergyRequest] = Field(default_factory=list)


class UserAllergyResponse(BaseModel):
    allergy_id: UUID
    name: str
    notes: str
