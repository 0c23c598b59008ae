"""Self-service routes for the authenticated caller"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging
from typing import List

from api.dependencies import CurrentIdentity, get_current_identity, get_db
from api.responses import created_response, no_content
from app.config import Settings, get_settings
from domain.mappers import UserMapper
from domain.schemas.allergy_schemas import (
    UserAllergiesReplaceRequest,
    UserAllergyRequest,
    UserAllergyResponse,
)
from domain.schemas.user_schemas import (
    EmailUpdate,
    MyProfileResponse,
    MyProfileUpdate,
    PasswordChange,
)
from services.allergy_service import AllergyService
from services.identity_service import IdentityService
from services.user_service import UserService

router = APIRouter(prefix="/users/me", tags=["Me"])
logger = logging.getLogger("schoolmeal.api.me")


@router.get("", response_model=MyProfileResponse)
def get_my_profile(
    db: Session = Depends(get_db),
    identity: CurrentIdentity = Depends(get_current_identity),
    settings: Settings = Depends(get_settings),
):
    """
    Get the caller's profile with allergies.

    The first call after registration creates the profile in the configured
    default school with the STUDENT role.
    """
    user, created = UserService.get_or_provision_profile(
        db, identity.identity_user_id, settings.default_school_id
    )
    if created:
        logger.info(f"profile_created_on_first_access user_id={user.user_id}")
    links = AllergyService.list_user_allergies(db, user.user_id)
    return UserMapper.to_profile_response(user, links)


@router.put("", response_model=MyProfileResponse)
def update_my_profile(
    payload: MyProfileUpdate,
    db: Session = Depends(get_db),
    identity: CurrentIdentity = Depends(get_current_identity),
):
    user = UserService.update_my_profile(db, identity.identity_user_id, payload)
    links = AllergyService.list_user_allergies(db, user.user_id)
    return UserMapper.to_profile_response(user, links)


@router.put("/email", status_code=status.HTTP_204_NO_CONTENT)
def change_my_email(
    payload: EmailUpdate,
    db: Session = Depends(get_db),
    identity: CurrentIdentity = Depends(get_current_identity),
):
    """Change the login email; tokens issued before keep the old email claim."""
    IdentityService.change_email(db, identity.identity_user_id, payload.email)
    return no_content()


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
def change_my_password(
    payload: PasswordChange,
    db: Session = Depends(get_db),
    identity: CurrentIdentity = Depends(get_current_identity),
):
    IdentityService.change_password(
        db, identity.identity_user_id, payload.current_password, payload.new_password
    )
    return no_content()


@router.get("/allergies", response_model=List[UserAllergyResponse])
def get_my_allergies(
    db: Session = Depends(get_db),
    identity: CurrentIdentity = Depends(get_current_identity),
):
    user = UserService.get_profile(db, identity.identity_user_id)
    return UserMapper.allergies_to_response(AllergyService.list_user_allergies(db, user.user_id))


@router.put("/allergies", response_model=List[UserAllergyResponse])
def replace_my_allergies(
    payload: UserAllergiesReplaceRequest,
    db: Session = Depends(get_db),
    identity: CurrentIdentity = Depends(get_current_identity),
):
    """Replace the caller's whole allergy set; an empty list clears it."""
    user = UserService.get_profile(db, identity.identity_user_id)
    links = AllergyService.replace_user_allergies(db, user.user_id, payload.allergies)
    return UserMapper.allergies_to_response(links)


@router.post("/allergies", response_model=UserAllergyResponse)
def add_my_allergy(
    payload: UserAllergyRequest,
    db: Session = Depends(get_db),
    identity: CurrentIdentity = Depends(get_current_identity),
):
    user = UserService.get_profile(db, identity.identity_user_id)
    link, created = AllergyService.add_user_allergy(db, user.user_id, payload)
    resp = UserMapper.allergies_to_response([link])[0]
    if created:
        return created_response(resp, "/users/me/allergies")
    return resp
