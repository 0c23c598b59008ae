"""
School model.
"""

from sqlalchemy import Column, String, Uuid
import uuid

from domain.models.database import Base


class School(Base):
    """A school; owns users and menu weeks"""

    __tablename__ = "school"

    school_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    timezone = Column(String(64), nullable=False, default="Europe/Stockholm")
