from typing import List
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from domain.models import School
from domain.schemas.school_schemas import SchoolCreate
from repositories import SchoolRepository
from services.base import unit_of_work
from app.exceptions import NotFoundError

logger = logging.getLogger("schoolmeal.schools")


class SchoolService:
    """Business logic for schools"""

    @staticmethod
    def list_schools(db: Session) -> List[School]:
        return SchoolRepository(db).list_ordered()

    @staticmethod
    def get_school(db: Session, school_id: UUID) -> School:
        school = SchoolRepository(db).get_by_id(school_id)
        if school is None:
            raise NotFoundError("School not found.")
        return school

    @staticmethod
    def create_school(db: Session, data: SchoolCreate, default_timezone: str) -> School:
        repo = SchoolRepository(db)
        with unit_of_work(db, "School could not be created."):
            school = repo.add(
                School(name=data.name, timezone=data.timezone or default_timezone)
            )
        logger.info(f"school_created school_id={school.school_id} name={school.name!r}")
        return school

    @staticmethod
    def delete_school(db: Session, school_id: UUID) -> None:
        """Delete a school; users, menu weeks and everything below them cascade."""
        repo = SchoolRepository(db)
        with unit_of_work(db):
            if not repo.delete(school_id):
                raise NotFoundError("School not found.")
        logger.info(f"school_deleted school_id={school_id}")
