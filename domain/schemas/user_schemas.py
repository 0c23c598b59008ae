from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from domain.enums import Role
from domain.schemas.allergy_schemas import UserAllergyResponse


class UserCreate(BaseModel):
    school_id: UUID
    role: Role = Role.STUDENT
    display_name: str = Field("", max_length=200)
    class_group: str = Field("", max_length=50)
    default_vegetarian: bool = False


class UserUpdate(BaseModel):
    """Full replacement of the editable profile fields"""

    display_name: str = Field(..., max_length=200)
    class_group: str = Field("", max_length=50)
    default_vegetarian: bool = False
    role: Role


class UserResponse(BaseModel):
    user_id: UUID
    school_id: UUID
    identity_user_id: Optional[UUID] = None
    role: Role
    display_name: str
    class_group: str
    default_vegetarian: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MyProfileUpdate(BaseModel):
    display_name: str = Field("", max_length=200)
    class_group: str = Field("", max_length=50)
    default_vegetarian: bool = False
    school_id: Optional[UUID] = None


class MyProfileResponse(UserResponse):
    allergies: List[UserAllergyResponse] = []


class EmailUpdate(BaseModel):
    email: EmailStr


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)
