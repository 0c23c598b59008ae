from datetime import datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from domain.enums import Role
from domain.models import User
from domain.schemas.user_schemas import UserCreate, UserUpdate, MyProfileUpdate
from repositories import SchoolRepository, UserRepository, IdentityUserRepository
from services.base import unit_of_work
from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServerConfigurationError,
    UnauthorizedError,
)

logger = logging.getLogger("schoolmeal.users")

PROFILE_MISSING_MESSAGE = "User profile not found. Call GET /users/me to create it."


class UserService:
    """Business logic for domain user profiles"""

    @staticmethod
    def get_user(db: Session, user_id: UUID) -> User:
        user = UserRepository(db).get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    @staticmethod
    def list_by_school(db: Session, school_id: UUID) -> List[User]:
        if not SchoolRepository(db).exists(school_id):
            raise NotFoundError("School not found.")
        return UserRepository(db).list_by_school(school_id)

    @staticmethod
    def create_user(db: Session, data: UserCreate) -> User:
        """Create a profile (admin flow; not linked to a login)"""
        if not SchoolRepository(db).exists(data.school_id):
            raise NotFoundError("School not found.")

        with unit_of_work(db, "User could not be created."):
            user = UserRepository(db).add(
                User(
                    school_id=data.school_id,
                    role=data.role,
                    display_name=data.display_name,
                    class_group=data.class_group,
                    default_vegetarian=data.default_vegetarian,
                    created_at=datetime.now(timezone.utc),
                )
            )
        logger.info(f"user_created user_id={user.user_id} school_id={data.school_id}")
        return user

    @staticmethod
    def update_user(db: Session, user_id: UUID, data: UserUpdate) -> User:
        with unit_of_work(db):
            user = UserService.get_user(db, user_id)
            user.display_name = data.display_name
            user.class_group = data.class_group
            user.default_vegetarian = data.default_vegetarian
            user.role = data.role
        logger.info(f"user_updated user_id={user_id} role={data.role.value}")
        return user

    @staticmethod
    def delete_user(db: Session, user_id: UUID) -> None:
        """Delete a profile; meal plans and allergy links cascade."""
        with unit_of_work(db):
            if not UserRepository(db).delete(user_id):
                raise NotFoundError("User not found.")
        logger.info(f"user_deleted user_id={user_id}")

    # ------------------------------------------------------------------
    # Self-service (caller resolved through the identity id)
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_default_school_id(raw: Optional[str]) -> UUID:
        if not raw:
            raise ServerConfigurationError("default_school_id is missing.")
        try:
            return UUID(str(raw))
        except ValueError:
            raise ServerConfigurationError("default_school_id is invalid.")

    @staticmethod
    def get_or_provision_profile(
        db: Session, identity_user_id: UUID, default_school_id: Optional[str]
    ) -> Tuple[User, bool]:
        """
        Return the caller's profile, creating it on first access.
        Returns a tuple of (User, created_flag).
        """
        users = UserRepository(db)
        user = users.get_by_identity_user_id(identity_user_id)
        if user is not None:
            return user, False

        school_id = UserService._parse_default_school_id(default_school_id)
        if not SchoolRepository(db).exists(school_id):
            raise ServerConfigurationError("default_school_id does not reference an existing school.")
        if IdentityUserRepository(db).get_by_id(identity_user_id) is None:
            raise UnauthorizedError("Unknown identity.")

        try:
            with unit_of_work(db, "Profile already exists."):
                user = users.add(
                    User(
                        identity_user_id=identity_user_id,
                        school_id=school_id,
                        role=Role.STUDENT,
                        display_name="",
                        class_group="",
                        default_vegetarian=False,
                        created_at=datetime.now(timezone.utc),
                    )
                )
        except ConflictError:
            # a concurrent first request created it; return that one
            existing = users.get_by_identity_user_id(identity_user_id)
            if existing is None:
                raise
            return existing, False
        logger.info(
            f"profile_provisioned user_id={user.user_id} identity_user_id={identity_user_id} "
            f"school_id={school_id}"
        )
        return user, True

    @staticmethod
    def get_profile(db: Session, identity_user_id: UUID) -> User:
        """The caller's existing profile; never provisions"""
        user = UserRepository(db).get_by_identity_user_id(identity_user_id)
        if user is None:
            raise NotFoundError(PROFILE_MISSING_MESSAGE)
        return user

    @staticmethod
    def update_my_profile(db: Session, identity_user_id: UUID, data: MyProfileUpdate) -> User:
        user = UserService.get_profile(db, identity_user_id)
        if data.school_id is not None and not SchoolRepository(db).exists(data.school_id):
            raise NotFoundError("School not found.")

        with unit_of_work(db):
            user.display_name = data.display_name
            user.class_group = data.class_group
            user.default_vegetarian = data.default_vegetarian
            if data.school_id is not None:
                user.school_id = data.school_id
        logger.info(f"profile_updated user_id={user.user_id}")
        return user
