"""
User-related database models.
"""

from sqlalchemy import (
    Column,
    String,
    Boolean,
    TIMESTAMP,
    ForeignKey,
    Uuid,
    Enum as SQLEnum,
)
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.enums import Role


class User(Base):
    """Domain user profile (school, role, display name)"""

    __tablename__ = "app_user"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(
        Uuid,
        ForeignKey("school.school_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Login record this profile belongs to; admin-created profiles may have none
    identity_user_id = Column(
        Uuid,
        ForeignKey("identity_user.identity_user_id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )
    role = Column(SQLEnum(Role), nullable=False, default=Role.STUDENT)
    display_name = Column(String(200), nullable=False, default="")
    class_group = Column(String(50), nullable=False, default="")
    default_vegetarian = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())


class UserAllergy(Base):
    """Link between a user and a catalog allergy"""

    __tablename__ = "user_allergy"

    user_id = Column(
        Uuid,
        ForeignKey("app_user.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    allergy_id = Column(
        Uuid,
        ForeignKey("allergy.allergy_id", ondelete="CASCADE"),
        primary_key=True,
    )
    notes = Column(String(100), nullable=False, default="")
