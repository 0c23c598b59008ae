"""
School Repository - Data access layer for schools
"""

from typing import List
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import School


class SchoolRepository(BaseRepository[School]):
    """Repository for school data access"""

    def __init__(self, db: Session):
        super().__init__(db, School)

    def list_ordered(self) -> List[School]:
        """All schools ordered by name"""
        return self.db.query(School).order_by(School.name).all()
