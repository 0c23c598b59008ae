"""
User Repository - Data access layer for user profiles and their allergy links
"""

from typing import Iterable, List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import User, UserAllergy, Allergy


class UserRepository(BaseRepository[User]):
    """Repository for domain user data access"""

    def __init__(self, db: Session):
        super().__init__(db, User)

    def get_by_identity_user_id(self, identity_user_id: UUID) -> Optional[User]:
        """Get the profile linked to a login identity"""
        return (
            self.db.query(User)
            .filter(User.identity_user_id == identity_user_id)
            .first()
        )

    def list_by_school(self, school_id: UUID) -> List[User]:
        """All users of a school ordered by display name"""
        return (
            self.db.query(User)
            .filter(User.school_id == school_id)
            .order_by(User.display_name, User.created_at)
            .all()
        )


class UserAllergyRepository(BaseRepository[UserAllergy]):
    """Repository for user ↔ allergy links"""

    def __init__(self, db: Session):
        super().__init__(db, UserAllergy)

    def get_link(self, user_id: UUID, allergy_id: UUID) -> Optional[UserAllergy]:
        return self.db.get(UserAllergy, (user_id, allergy_id))

    def get_by_user_id(self, user_id: UUID) -> List[UserAllergy]:
        """Get all allergy links for a user"""
        return self.db.query(UserAllergy).filter(UserAllergy.user_id == user_id).all()

    def get_with_names(self, user_id: UUID) -> List[Tuple[UserAllergy, Allergy]]:
        """Allergy links joined with their catalog entry, ordered by allergy name"""
        return (
            self.db.query(UserAllergy, Allergy)
            .join(Allergy, Allergy.allergy_id == UserAllergy.allergy_id)
            .filter(UserAllergy.user_id == user_id)
            .order_by(Allergy.name)
            .all()
        )

    def upsert(self, user_id: UUID, allergy_id: UUID, notes: str) -> Tuple[UserAllergy, bool]:
        """Insert the link or overwrite its notes. Returns (link, created)."""
        link = self.get_link(user_id, allergy_id)
        if link is not None:
            link.notes = notes
            self.db.flush()
            return link, False
        link = UserAllergy(user_id=user_id, allergy_id=allergy_id, notes=notes)
        self.db.add(link)
        self.db.flush()
        return link, True

    def delete_link(self, user_id: UUID, allergy_id: UUID) -> int:
        """Delete a specific link by user_id and allergy_id"""
        count = (
            self.db.query(UserAllergy)
            .filter(
                UserAllergy.user_id == user_id,
                UserAllergy.allergy_id == allergy_id,
            )
            .delete()
        )
        self.db.flush()
        return count

    def replace_all(self, user_id: UUID, links: Iterable[Tuple[UUID, str]]) -> List[UserAllergy]:
        """Replace every link of a user with the given (allergy_id, notes) pairs.

        Duplicate allergy ids keep their first occurrence.
        """
        for existing in self.get_by_user_id(user_id):
            self.db.delete(existing)
        # deletes must reach the database before the same keys are inserted again
        self.db.flush()
        seen = set()
        for allergy_id, notes in links:
            if allergy_id in seen:
                continue
            seen.add(allergy_id)
            self.db.add(UserAllergy(user_id=user_id, allergy_id=allergy_id, notes=notes))
        self.db.flush()
        return self.get_by_user_id(user_id)
