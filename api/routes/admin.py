"""Identity administration routes"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from api.dependencies import get_db, require_roles
from api.responses import no_content
from domain.constants import ROLE_ADMIN
from domain.schemas.auth_schemas import IdentityUserResponse
from services.identity_service import IdentityService

router = APIRouter(
    prefix="/admin/users",
    tags=["Admin"],
    dependencies=[Depends(require_roles(ROLE_ADMIN))],
)
logger = logging.getLogger("schoolmeal.api.admin")


@router.get("", response_model=List[IdentityUserResponse])
def list_identities(db: Session = Depends(get_db)):
    """Login identities ordered by email"""
    return [IdentityUserResponse.model_validate(i) for i in IdentityService.list_identities(db)]


@router.get("/{identity_user_id}/roles", response_model=List[str])
def get_roles(identity_user_id: UUID, db: Session = Depends(get_db)):
    return IdentityService.get_roles(db, identity_user_id)


@router.post("/{identity_user_id}/roles/{role}", status_code=204)
def add_role(identity_user_id: UUID, role: str, db: Session = Depends(get_db)):
    """Grant a role; already holding it is not an error."""
    IdentityService.add_role(db, identity_user_id, role)
    return no_content()


@router.delete("/{identity_user_id}/roles/{role}", status_code=204)
def remove_role(identity_user_id: UUID, role: str, db: Session = Depends(get_db)):
    """Revoke a role; not holding it is not an error."""
    IdentityService.remove_role(db, identity_user_id, role)
    return no_content()
