"""
Allergy catalog model.
"""

from sqlalchemy import Column, String, Uuid
import uuid

from domain.models.database import Base


class Allergy(Base):
    """Catalog entry users can link to their profile"""

    __tablename__ = "allergy"

    allergy_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
