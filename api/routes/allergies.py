"""Allergy catalog and per-user allergy link routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_current_identity, get_db, require_roles
from api.responses import created_response, no_content
from domain.constants import ROLE_ADMIN
from domain.mappers import UserMapper
from domain.schemas.allergy_schemas import (
    AllergyCreate,
    AllergyResponse,
    UserAllergyRequest,
    UserAllergyResponse,
)
from services.allergy_service import AllergyService

router = APIRouter(tags=["Allergies"])
logger = logging.getLogger("schoolmeal.api.allergies")


# Catalog
@router.get(
    "/allergies",
    response_model=List[AllergyResponse],
    dependencies=[Depends(get_current_identity)],
)
def list_allergies(db: Session = Depends(get_db)):
    """Allergy catalog ordered by name"""
    return [AllergyResponse.model_validate(a) for a in AllergyService.list_catalog(db)]


@router.post(
    "/allergies",
    response_model=AllergyResponse,
    status_code=201,
    dependencies=[Depends(require_roles(ROLE_ADMIN))],
)
def create_allergy(payload: AllergyCreate, db: Session = Depends(get_db)):
    allergy = AllergyService.create_allergy(db, payload)
    return created_response(
        AllergyResponse.model_validate(allergy), f"/allergies/{allergy.allergy_id}"
    )


# User links
@router.get(
    "/users/{user_id}/allergies",
    response_model=List[UserAllergyResponse],
    dependencies=[Depends(get_current_identity)],
)
def get_user_allergies(user_id: UUID, db: Session = Depends(get_db)):
    return UserMapper.allergies_to_response(AllergyService.list_user_allergies(db, user_id))


@router.post(
    "/users/{user_id}/allergies",
    response_model=UserAllergyResponse,
    dependencies=[Depends(get_current_identity)],
)
def add_user_allergy(
    user_id: UUID, payload: UserAllergyRequest, db: Session = Depends(get_db)
):
    """
    Link an allergy to the user. Linking one that is already present updates its notes.

    Returns 201 when the link is new, 200 when it was updated.
    """
    link, created = AllergyService.add_user_allergy(db, user_id, payload)
    resp = UserMapper.allergies_to_response([link])[0]
    if created:
        return created_response(resp, f"/users/{user_id}/allergies")
    return resp


@router.delete(
    "/users/{user_id}/allergies/{allergy_id}",
    status_code=204,
    dependencies=[Depends(get_current_identity)],
)
def remove_user_allergy(user_id: UUID, allergy_id: UUID, db: Session = Depends(get_db)):
    AllergyService.remove_user_allergy(db, user_id, allergy_id)
    return no_content()
