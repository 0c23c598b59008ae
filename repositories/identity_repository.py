"""
Identity Repository - Data access layer for login records and role membership
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import IdentityUser, IdentityRole, IdentityUserRole


class IdentityUserRepository(BaseRepository[IdentityUser]):
    """Repository for identity users"""

    def __init__(self, db: Session):
        super().__init__(db, IdentityUser)

    def get_by_email(self, email: str) -> Optional[IdentityUser]:
        return (
            self.db.query(IdentityUser)
            .filter(IdentityUser.email == email.strip().lower())
            .first()
        )

    def list_ordered(self) -> List[IdentityUser]:
        return self.db.query(IdentityUser).order_by(IdentityUser.email).all()

    def get_role_names(self, identity_user_id: UUID) -> List[str]:
        rows = (
            self.db.query(IdentityUserRole.role_name)
            .filter(IdentityUserRole.identity_user_id == identity_user_id)
            .order_by(IdentityUserRole.role_name)
            .all()
        )
        return [row[0] for row in rows]

    def has_role(self, identity_user_id: UUID, role: str) -> bool:
        return self.db.get(IdentityUserRole, (identity_user_id, role)) is not None

    def add_role(self, identity_user_id: UUID, role: str) -> bool:
        """Grant a role. Returns False when already a member."""
        if self.has_role(identity_user_id, role):
            return False
        self.db.add(IdentityUserRole(identity_user_id=identity_user_id, role_name=role))
        self.db.flush()
        return True

    def remove_role(self, identity_user_id: UUID, role: str) -> bool:
        """Revoke a role. Returns False when not a member."""
        membership = self.db.get(IdentityUserRole, (identity_user_id, role))
        if membership is None:
            return False
        self.db.delete(membership)
        self.db.flush()
        return True


class IdentityRoleRepository(BaseRepository[IdentityRole]):
    """Repository for role names"""

    def __init__(self, db: Session):
        super().__init__(db, IdentityRole)

    def role_exists(self, name: str) -> bool:
        return self.exists(name)
