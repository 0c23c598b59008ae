from typing import List, Optional, Sequence, Tuple
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from domain.constants import OTHER_ALLERGY_ID, OTHER_NOTES_MIN_LENGTH, NOTES_MAX_LENGTH
from domain.models import Allergy, UserAllergy
from domain.schemas.allergy_schemas import AllergyCreate, UserAllergyRequest
from repositories import AllergyRepository, UserAllergyRepository, UserRepository
from services.base import unit_of_work
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError

logger = logging.getLogger("schoolmeal.allergies")


def normalize_notes(allergy_id: UUID, notes: Optional[str]) -> str:
    """
    Trim notes and enforce the per-allergy rules.

    The "Other" catalog entry carries no meaning on its own, so it needs a
    description of at least two characters.
    """
    value = (notes or "").strip()
    if len(value) > NOTES_MAX_LENGTH:
        raise ServiceValidationError(
            f"Notes must be at most {NOTES_MAX_LENGTH} characters.",
            details={"notes": [f"max {NOTES_MAX_LENGTH} characters"]},
        )
    if allergy_id == OTHER_ALLERGY_ID:
        if not value:
            raise ServiceValidationError(
                "Notes is required when selecting 'Annan'.",
                details={"notes": ["required for the Other allergy"]},
            )
        if len(value) < OTHER_NOTES_MIN_LENGTH:
            raise ServiceValidationError(
                f"Notes must be at least {OTHER_NOTES_MIN_LENGTH} characters.",
                details={"notes": [f"min {OTHER_NOTES_MIN_LENGTH} characters"]},
            )
    return value


class AllergyService:
    """Business logic for the allergy catalog and users' allergy links"""

    @staticmethod
    def list_catalog(db: Session) -> List[Allergy]:
        return AllergyRepository(db).list_ordered()

    @staticmethod
    def create_allergy(db: Session, data: AllergyCreate) -> Allergy:
        repo = AllergyRepository(db)
        if repo.get_by_name(data.name) is not None:
            raise ConflictError(f"Allergy '{data.name}' already exists.")

        with unit_of_work(db, f"Allergy '{data.name}' already exists."):
            allergy = repo.add(Allergy(name=data.name))
        logger.info(f"allergy_created allergy_id={allergy.allergy_id} name={data.name!r}")
        return allergy

    @staticmethod
    def _require_user(db: Session, user_id: UUID) -> None:
        if not UserRepository(db).exists(user_id):
            raise NotFoundError("User not found.")

    @staticmethod
    def list_user_allergies(db: Session, user_id: UUID) -> List[Tuple[UserAllergy, Allergy]]:
        AllergyService._require_user(db, user_id)
        return UserAllergyRepository(db).get_with_names(user_id)

    @staticmethod
    def add_user_allergy(
        db: Session, user_id: UUID, request: UserAllergyRequest
    ) -> Tuple[Tuple[UserAllergy, Allergy], bool]:
        """
        Link an allergy to a user, or overwrite the notes of an existing link.
        Returns ((link, allergy), created_flag).
        """
        AllergyService._require_user(db, user_id)
        notes = normalize_notes(request.allergy_id, request.notes)
        allergy = AllergyRepository(db).get_by_id(request.allergy_id)
        if allergy is None:
            raise NotFoundError("Allergy not found.")

        with unit_of_work(db, "User already has this allergy."):
            link, created = UserAllergyRepository(db).upsert(user_id, request.allergy_id, notes)
        logger.info(
            f"user_allergy_upserted user_id={user_id} allergy_id={request.allergy_id} created={created}"
        )
        return (link, allergy), created

    @staticmethod
    def replace_user_allergies(
        db: Session, user_id: UUID, requests: Sequence[UserAllergyRequest]
    ) -> List[Tuple[UserAllergy, Allergy]]:
        """Replace the user's whole allergy set in one transaction."""
        AllergyService._require_user(db, user_id)

        links: List[Tuple[UUID, str]] = []
        seen = set()
        for request in requests:
            if request.allergy_id in seen:
                continue
            seen.add(request.allergy_id)
            links.append((request.allergy_id, normalize_notes(request.allergy_id, request.notes)))

        missing = AllergyRepository(db).missing_ids(seen)
        if missing:
            raise NotFoundError(
                "Allergy not found.",
                details={"allergy_ids": sorted(str(m) for m in missing)},
            )

        repo = UserAllergyRepository(db)
        with unit_of_work(db, "Allergy set changed concurrently."):
            repo.replace_all(user_id, links)
        logger.info(f"user_allergies_replaced user_id={user_id} count={len(links)}")
        return repo.get_with_names(user_id)

    @staticmethod
    def remove_user_allergy(db: Session, user_id: UUID, allergy_id: UUID) -> None:
        AllergyService._require_user(db, user_id)
        with unit_of_work(db):
            if UserAllergyRepository(db).delete_link(user_id, allergy_id) == 0:
                raise NotFoundError("User does not have this allergy.")
        logger.info(f"user_allergy_removed user_id={user_id} allergy_id={allergy_id}")
