"""
Identity service: registration, login and role administration.
Login records live apart from domain profiles; a profile links to one
through User.identity_user_id.
"""

from datetime import datetime, timezone
from typing import List
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from app.config import Settings
from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from app.security import (
    create_access_token,
    hash_password,
    normalize_role,
    verify_password,
)
from domain.constants import DEFAULT_IDENTITY_ROLE
from domain.models import IdentityUser
from domain.schemas.auth_schemas import LoginRequest, RegisterRequest, TokenResponse
from repositories import IdentityRoleRepository, IdentityUserRepository
from services.base import unit_of_work

logger = logging.getLogger("schoolmeal.identity")

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


class IdentityService:
    """Business logic for login identities"""

    @staticmethod
    def register(db: Session, data: RegisterRequest) -> IdentityUser:
        email = data.email.strip().lower()
        repo = IdentityUserRepository(db)
        if repo.get_by_email(email) is not None:
            raise ConflictError("Email is already registered.")

        with unit_of_work(db, "Email is already registered."):
            identity = repo.add(
                IdentityUser(
                    email=email,
                    password_hash=hash_password(data.password),
                    created_at=datetime.now(timezone.utc),
                )
            )
            repo.add_role(identity.identity_user_id, DEFAULT_IDENTITY_ROLE)
        logger.info(f"identity_registered identity_user_id={identity.identity_user_id}")
        return identity

    @staticmethod
    def authenticate(db: Session, data: LoginRequest, settings: Settings) -> TokenResponse:
        """Check credentials and issue an access token carrying the current roles."""
        repo = IdentityUserRepository(db)
        identity = repo.get_by_email(data.email)
        if identity is None or not verify_password(data.password, identity.password_hash):
            logger.warning("login_failed reason=bad_credentials")
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        roles = repo.get_role_names(identity.identity_user_id)
        ttl = settings.jwt_expiry_minutes * 60
        token = create_access_token(
            str(identity.identity_user_id),
            identity.email,
            roles,
            secret=settings.jwt_secret,
            ttl_seconds=ttl,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
        logger.info(f"login_succeeded identity_user_id={identity.identity_user_id}")
        return TokenResponse(
            access_token=token,
            expires_in=ttl,
            identity_user_id=identity.identity_user_id,
            email=identity.email,
            roles=roles,
        )

    @staticmethod
    def list_identities(db: Session) -> List[IdentityUser]:
        return IdentityUserRepository(db).list_ordered()

    @staticmethod
    def _get_identity(db: Session, identity_user_id: UUID) -> IdentityUser:
        identity = IdentityUserRepository(db).get_by_id(identity_user_id)
        if identity is None:
            raise NotFoundError("User not found.")
        return identity

    @staticmethod
    def get_roles(db: Session, identity_user_id: UUID) -> List[str]:
        IdentityService._get_identity(db, identity_user_id)
        return IdentityUserRepository(db).get_role_names(identity_user_id)

    @staticmethod
    def _checked_role(db: Session, role: str) -> str:
        name = normalize_role(role)
        if not name:
            raise ServiceValidationError("Role is required.")
        if not IdentityRoleRepository(db).role_exists(name):
            raise ServiceValidationError(f"Role '{role}' does not exist.")
        return name

    @staticmethod
    def add_role(db: Session, identity_user_id: UUID, role: str) -> None:
        """Grant a role; granting one already held is a no-op."""
        name = IdentityService._checked_role(db, role)
        IdentityService._get_identity(db, identity_user_id)
        with unit_of_work(db):
            added = IdentityUserRepository(db).add_role(identity_user_id, name)
        logger.info(f"role_granted identity_user_id={identity_user_id} role={name} changed={added}")

    @staticmethod
    def remove_role(db: Session, identity_user_id: UUID, role: str) -> None:
        """Revoke a role; revoking one not held is a no-op."""
        name = IdentityService._checked_role(db, role)
        IdentityService._get_identity(db, identity_user_id)
        with unit_of_work(db):
            removed = IdentityUserRepository(db).remove_role(identity_user_id, name)
        logger.info(f"role_revoked identity_user_id={identity_user_id} role={name} changed={removed}")

    @staticmethod
    def change_email(db: Session, identity_user_id: UUID, new_email: str) -> IdentityUser:
        email = new_email.strip().lower()
        repo = IdentityUserRepository(db)
        identity = IdentityService._get_identity(db, identity_user_id)
        if identity.email == email:
            return identity
        if repo.get_by_email(email) is not None:
            raise ConflictError("Email is already registered.")

        with unit_of_work(db, "Email is already registered."):
            identity.email = email
        logger.info(f"email_changed identity_user_id={identity_user_id}")
        return identity

    @staticmethod
    def change_password(
        db: Session, identity_user_id: UUID, current_password: str, new_password: str
    ) -> None:
        identity = IdentityService._get_identity(db, identity_user_id)
        if not verify_password(current_password, identity.password_hash):
            raise ServiceValidationError(
                "Current password is incorrect.",
                details={"current_password": ["incorrect"]},
            )
        with unit_of_work(db):
            identity.password_hash = hash_password(new_password)
        logger.info(f"password_changed identity_user_id={identity_user_id}")
