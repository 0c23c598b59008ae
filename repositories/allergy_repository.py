"""
Allergy Repository - Data access layer for the allergy catalog
"""

from typing import Iterable, List, Optional, Set
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Allergy


class AllergyRepository(BaseRepository[Allergy]):
    """Repository for catalog allergies"""

    def __init__(self, db: Session):
        super().__init__(db, Allergy)

    def list_ordered(self) -> List[Allergy]:
        return self.db.query(Allergy).order_by(Allergy.name).all()

    def get_by_name(self, name: str) -> Optional[Allergy]:
        """
        Case-insensitive lookup by name.

        Folding happens in Python: SQLite's lower() only folds ASCII and the
        catalog holds names like "Ägg" and "Nötter".
        """
        wanted = name.strip().casefold()
        for allergy in self.db.query(Allergy).all():
            if allergy.name.casefold() == wanted:
                return allergy
        return None

    def missing_ids(self, allergy_ids: Iterable[UUID]) -> Set[UUID]:
        """Return the subset of ids that are not in the catalog"""
        wanted = set(allergy_ids)
        if not wanted:
            return set()
        found = {
            row[0]
            for row in self.db.query(Allergy.allergy_id)
            .filter(Allergy.allergy_id.in_(wanted))
            .all()
        }
        return wanted - found
