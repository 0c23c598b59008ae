"""User management routes (admin)"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from api.dependencies import get_db, require_roles
from api.responses import created_response, no_content
from domain.constants import ROLE_ADMIN
from domain.mappers import UserMapper
from domain.schemas.user_schemas import UserCreate, UserResponse, UserUpdate
from services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_roles(ROLE_ADMIN))],
)
logger = logging.getLogger("schoolmeal.api.users")


@router.post("", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Create a user profile that is not linked to a login"""
    user = UserService.create_user(db, payload)
    return created_response(UserMapper.to_response(user), f"/users/{user.user_id}")


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    return UserMapper.to_response(UserService.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: UUID, payload: UserUpdate, db: Session = Depends(get_db)):
    return UserMapper.to_response(UserService.update_user(db, user_id, payload))


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: UUID, db: Session = Depends(get_db)):
    """Delete a user and all their related data."""
    UserService.delete_user(db, user_id)
    return no_content()
