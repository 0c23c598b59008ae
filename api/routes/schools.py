"""School routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_db, get_current_identity, require_roles
from api.responses import created_response, no_content
from app.config import Settings, get_settings
from domain.constants import ROLE_ADMIN
from domain.mappers import UserMapper
from domain.schemas.school_schemas import SchoolCreate, SchoolResponse
from domain.schemas.user_schemas import UserResponse
from services.school_service import SchoolService
from services.user_service import UserService

router = APIRouter(prefix="/schools", tags=["Schools"])
logger = logging.getLogger("schoolmeal.api.schools")


@router.get(
    "",
    response_model=List[SchoolResponse],
    dependencies=[Depends(get_current_identity)],
)
def list_schools(db: Session = Depends(get_db)):
    """All schools ordered by name"""
    return [SchoolResponse.model_validate(s) for s in SchoolService.list_schools(db)]


@router.post(
    "",
    response_model=SchoolResponse,
    status_code=201,
    dependencies=[Depends(require_roles(ROLE_ADMIN))],
)
def create_school(
    payload: SchoolCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    school = SchoolService.create_school(db, payload, settings.default_school_timezone)
    return created_response(SchoolResponse.model_validate(school), f"/schools/{school.school_id}")


@router.get(
    "/{school_id}",
    response_model=SchoolResponse,
    dependencies=[Depends(get_current_identity)],
)
def get_school(school_id: UUID, db: Session = Depends(get_db)):
    return SchoolResponse.model_validate(SchoolService.get_school(db, school_id))


@router.delete(
    "/{school_id}",
    status_code=204,
    dependencies=[Depends(require_roles(ROLE_ADMIN))],
)
def delete_school(school_id: UUID, db: Session = Depends(get_db)):
    """Delete a school together with its users, menus and meal plans."""
    SchoolService.delete_school(db, school_id)
    return no_content()


@router.get(
    "/{school_id}/users",
    response_model=List[UserResponse],
    dependencies=[Depends(require_roles(ROLE_ADMIN))],
)
def list_school_users(school_id: UUID, db: Session = Depends(get_db)):
    """Users of a school ordered by display name"""
    return [UserMapper.to_response(u) for u in UserService.list_by_school(db, school_id)]
