"""
Idempotent reference-data seeding: allergy catalog, identity roles,
default school and the bootstrap admin identity.
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from app.security import hash_password
from domain.constants import ALLERGY_CATALOG, IDENTITY_ROLES, ROLE_ADMIN
from domain.models.allergy import Allergy
from domain.models.identity import IdentityRole, IdentityUser, IdentityUserRole
from domain.models.school import School

logger = logging.getLogger("schoolmeal.seed")


def seed_allergies(db: Session) -> int:
    added = 0
    for allergy_id, name in ALLERGY_CATALOG:
        if db.get(Allergy, allergy_id) is None:
            db.add(Allergy(allergy_id=allergy_id, name=name))
            added += 1
    return added


def seed_roles(db: Session) -> int:
    added = 0
    for role in IDENTITY_ROLES:
        if db.get(IdentityRole, role) is None:
            db.add(IdentityRole(name=role))
            added += 1
    return added


def seed_default_school(db: Session, school_id_raw, name: str, timezone: str) -> bool:
    if not school_id_raw:
        return False
    try:
        school_id = UUID(str(school_id_raw))
    except ValueError:
        logger.warning(f"default_school_id_invalid value={school_id_raw!r}; not seeding")
        return False
    if db.get(School, school_id) is not None:
        return False
    db.add(School(school_id=school_id, name=name, timezone=timezone))
    return True


def seed_admin(db: Session, email, password) -> bool:
    if not email or not password:
        return False
    email = email.strip().lower()
    identity = db.query(IdentityUser).filter(IdentityUser.email == email).first()
    created = False
    if identity is None:
        identity = IdentityUser(email=email, password_hash=hash_password(password))
        db.add(identity)
        db.flush()
        created = True
    membership = db.get(IdentityUserRole, (identity.identity_user_id, ROLE_ADMIN))
    if membership is None:
        db.add(IdentityUserRole(identity_user_id=identity.identity_user_id, role_name=ROLE_ADMIN))
    return created


def seed_reference_data(db: Session, settings) -> None:
    """Seed everything the API relies on. Safe to run repeatedly."""
    try:
        allergies = seed_allergies(db)
        roles = seed_roles(db)
        # roles must exist before the admin membership references them
        db.flush()
        school = seed_default_school(
            db,
            settings.default_school_id,
            settings.default_school_name,
            settings.default_school_timezone,
        )
        admin = seed_admin(db, settings.initial_admin_email, settings.initial_admin_password)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(
        f"reference_data_seeded allergies_added={allergies} roles_added={roles} "
        f"default_school_created={school} admin_created={admin}"
    )
