"""
Identity (login) models: credentials and role membership.
"""

from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class IdentityUser(Base):
    """Login record; distinct from the domain User profile"""

    __tablename__ = "identity_user"

    identity_user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(320), unique=True, nullable=False)  # stored lowercase
    password_hash = Column(String(255), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())


class IdentityRole(Base):
    """Role name usable in access tokens"""

    __tablename__ = "identity_role"

    name = Column(String(32), primary_key=True)


class IdentityUserRole(Base):
    """Role membership of an identity user"""

    __tablename__ = "identity_user_role"

    identity_user_id = Column(
        Uuid,
        ForeignKey("identity_user.identity_user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    role_name = Column(
        String(32),
        ForeignKey("identity_role.name", ondelete="CASCADE"),
        primary_key=True,
    )
