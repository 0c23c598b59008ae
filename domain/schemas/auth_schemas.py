from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class RegisterResponse(BaseModel):
    identity_user_id: UUID
    email: str


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    identity_user_id: UUID
    email: str
    roles: List[str]


class IdentityUserResponse(BaseModel):
    identity_user_id: UUID
    email: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
