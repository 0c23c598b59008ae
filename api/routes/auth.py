"""Registration and login routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db
from api.responses import created_response
from app.config import Settings, get_settings
from domain.schemas.auth_schemas import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from services.identity_service import IdentityService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("schoolmeal.api.auth")


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Create a login identity. New identities get the STUDENT role."""
    identity = IdentityService.register(db, payload)
    body = RegisterResponse(identity_user_id=identity.identity_user_id, email=identity.email)
    return created_response(body, f"/admin/users/{identity.identity_user_id}")


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Exchange email and password for a bearer token"""
    return IdentityService.authenticate(db, payload, settings)
