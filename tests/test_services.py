"""
Service-layer tests: business rules and transaction handling.

Each test calls services directly with a real session and checks both the
returned values and the state left in the database.
"""

import uuid
from datetime import date, datetime, timezone

import pytest
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServerConfigurationError,
    ServiceValidationError,
    UnauthorizedError,
)
from domain.constants import ALLERGY_CATALOG, OTHER_ALLERGY_ID
from domain.enums import MealChoiceStatus, MenuItemType, Role
from domain.models import Allergy, IdentityUser
from domain.schemas import (
    AllergyCreate,
    LoginRequest,
    MealPlanUpsert,
    MenuItemCreate,
    MenuWeekCreate,
    RegisterRequest,
    UserAllergyRequest,
)
from repositories import IdentityUserRepository, UserRepository
from services import (
    AllergyService,
    IdentityService,
    MealPlanService,
    MenuService,
    UserService,
    parse_plan_date,
)
from services.base import unit_of_work
from test_fixtures import default_school_id, make_identity, make_user, make_week

GLUTEN_ID = ALLERGY_CATALOG[0][0]


# =============================================================================
# UNIT OF WORK
# =============================================================================


def test_unit_of_work_turns_integrity_error_into_conflict(db_session: Session):
    """
    Verifies:
    - a unique violation at commit raises ConflictError with the given message
    - the session is rolled back and usable afterwards
    """
    with pytest.raises(ConflictError) as exc:
        with unit_of_work(db_session, "Allergy exists."):
            db_session.add(Allergy(name="Gluten"))

    assert exc.value.message == "Allergy exists."
    assert db_session.query(Allergy).count() == len(ALLERGY_CATALOG)


def test_unit_of_work_rolls_back_on_error(db_session: Session):
    with pytest.raises(NotFoundError):
        with unit_of_work(db_session):
            db_session.add(Allergy(name="Kiwi"))
            db_session.flush()
            raise NotFoundError("stop")

    assert db_session.query(Allergy).filter(Allergy.name == "Kiwi").first() is None


# =============================================================================
# ALLERGY SERVICE
# =============================================================================


def test_other_allergy_requires_notes(db_session: Session):
    user = make_user(db_session)

    with pytest.raises(ServiceValidationError):
        AllergyService.add_user_allergy(db_session, user.user_id, UserAllergyRequest(allergy_id=OTHER_ALLERGY_ID))
    with pytest.raises(ServiceValidationError):
        AllergyService.add_user_allergy(
            db_session, user.user_id, UserAllergyRequest(allergy_id=OTHER_ALLERGY_ID, notes=" x ")
        )

    (link, allergy), created = AllergyService.add_user_allergy(
        db_session, user.user_id, UserAllergyRequest(allergy_id=OTHER_ALLERGY_ID, notes=" kiwi ")
    )
    assert created is True
    assert link.notes == "kiwi"
    assert allergy.name == "Annan"


def test_regular_allergy_notes_default_to_empty(db_session: Session):
    user = make_user(db_session)

    (link, _), created = AllergyService.add_user_allergy(
        db_session, user.user_id, UserAllergyRequest(allergy_id=GLUTEN_ID)
    )
    assert created is True
    assert link.notes == ""

    (link, _), created = AllergyService.add_user_allergy(
        db_session, user.user_id, UserAllergyRequest(allergy_id=GLUTEN_ID, notes="severe")
    )
    assert created is False
    assert link.notes == "severe"


def test_replace_user_allergies_rejects_unknown_ids_atomically(db_session: Session):
    user = make_user(db_session)
    AllergyService.add_user_allergy(db_session, user.user_id, UserAllergyRequest(allergy_id=GLUTEN_ID))

    with pytest.raises(NotFoundError):
        AllergyService.replace_user_allergies(
            db_session,
            user.user_id,
            [UserAllergyRequest(allergy_id=uuid.uuid4())],
        )

    remaining = AllergyService.list_user_allergies(db_session, user.user_id)
    assert [a.allergy_id for _, a in remaining] == [GLUTEN_ID]


def test_create_allergy_conflict_is_case_insensitive(db_session: Session):
    created = AllergyService.create_allergy(db_session, AllergyCreate(name="Kiwi"))
    assert created.name == "Kiwi"

    with pytest.raises(ConflictError):
        AllergyService.create_allergy(db_session, AllergyCreate(name="kiwi"))
    with pytest.raises(ConflictError):
        AllergyService.create_allergy(db_session, AllergyCreate(name="nÖtter"))


def test_remove_missing_link_is_not_found(db_session: Session):
    user = make_user(db_session)

    with pytest.raises(NotFoundError) as exc:
        AllergyService.remove_user_allergy(db_session, user.user_id, GLUTEN_ID)
    assert exc.value.message == "User does not have this allergy."


# =============================================================================
# MENU SERVICE
# =============================================================================


def test_create_week_conflict_and_missing_school(db_session: Session):
    service = MenuService(db_session)
    service.create_week(default_school_id(), MenuWeekCreate(year=2025, week_number=10))

    with pytest.raises(ConflictError) as exc:
        service.create_week(default_school_id(), MenuWeekCreate(year=2025, week_number=10))
    assert "already exists" in exc.value.message

    with pytest.raises(NotFoundError):
        service.create_week(uuid.uuid4(), MenuWeekCreate(year=2025, week_number=10))


def test_publish_keeps_first_timestamp(db_session: Session):
    week = make_week(db_session)
    service = MenuService(db_session)
    first = datetime(2025, 3, 3, 7, 30, tzinfo=timezone.utc)

    service.publish_week(week.menu_week_id, now=first)
    again = service.publish_week(week.menu_week_id, now=datetime(2025, 3, 4, 7, 30, tzinfo=timezone.utc))

    # SQLite hands timestamps back without tzinfo
    assert again.published_at.replace(tzinfo=timezone.utc) == first


def test_replace_allergens_rejects_overlong_codes(db_session: Session):
    week = make_week(db_session)
    service = MenuService(db_session)
    item = service.add_item(
        week.menu_week_id,
        MenuItemCreate(day_of_week=1, type=MenuItemType.MAIN, title="Lasagne"),
    )

    with pytest.raises(ServiceValidationError):
        service.replace_allergens(item.menu_item_id, ["x" * 51])

    result = service.replace_allergens(item.menu_item_id, ["milk", " Gluten ", "MILK"])
    assert result.allergens == ["GLUTEN", "MILK"]


def test_week_detail_orders_items(db_session: Session):
    week = make_week(db_session, year=2025, week_number=11)
    service = MenuService(db_session)
    service.add_item(week.menu_week_id, MenuItemCreate(day_of_week=2, type=MenuItemType.MAIN, title="Soppa"))
    service.add_item(week.menu_week_id, MenuItemCreate(day_of_week=1, type=MenuItemType.VEG, title="Falafel"))
    service.add_item(week.menu_week_id, MenuItemCreate(day_of_week=1, type=MenuItemType.MAIN, title="Kyckling"))

    detail = service.get_week_detail(default_school_id(), 2025, 11)

    assert [(i.day_of_week, i.type, i.title) for i in detail.items] == [
        (1, MenuItemType.MAIN, "Kyckling"),
        (1, MenuItemType.VEG, "Falafel"),
        (2, MenuItemType.MAIN, "Soppa"),
    ]


# =============================================================================
# MEAL PLAN SERVICE
# =============================================================================


@pytest.mark.parametrize("raw", ["2025-3-1", "2025/03/01", "20250301", "2025-02-30", "", "yesterday"])
def test_parse_plan_date_is_strict(raw):
    with pytest.raises(ServiceValidationError) as exc:
        parse_plan_date(raw)
    assert exc.value.message == "Invalid date format. Use yyyy-MM-dd."


def test_parse_plan_date_accepts_iso():
    assert parse_plan_date("2024-02-29") == date(2024, 2, 29)


def test_meal_plan_range_validation(db_session: Session):
    user = make_user(db_session)
    service = MealPlanService(db_session)

    with pytest.raises(ServiceValidationError):
        service.list_range(user.user_id, date(2025, 3, 10), date(2025, 3, 9))
    assert service.list_range(user.user_id, date(2025, 3, 10), date(2025, 3, 10)) == []

    with pytest.raises(NotFoundError):
        service.upsert(uuid.uuid4(), date(2025, 3, 10), MealPlanUpsert(status=MealChoiceStatus.EATING))


# =============================================================================
# USER SERVICE (provisioning)
# =============================================================================


def test_provisioning_creates_once(db_session: Session):
    identity = make_identity(db_session, "STUDENT")

    user, created = UserService.get_or_provision_profile(
        db_session, identity.identity_user_id, settings.default_school_id
    )
    again, created_again = UserService.get_or_provision_profile(
        db_session, identity.identity_user_id, settings.default_school_id
    )

    assert created is True
    assert created_again is False
    assert again.user_id == user.user_id
    assert user.role == Role.STUDENT
    assert user.school_id == default_school_id()


@pytest.mark.parametrize("raw", [None, "", "not-a-uuid", str(uuid.uuid4())])
def test_provisioning_with_bad_default_school(db_session: Session, raw):
    identity = make_identity(db_session, "STUDENT")

    with pytest.raises(ServerConfigurationError):
        UserService.get_or_provision_profile(db_session, identity.identity_user_id, raw)


def test_provisioning_unknown_identity(db_session: Session):
    with pytest.raises(UnauthorizedError):
        UserService.get_or_provision_profile(db_session, uuid.uuid4(), settings.default_school_id)


def test_provisioning_returns_profile_created_concurrently(db_session: Session, monkeypatch):
    """
    Verifies:
    - when another request inserts the profile between the lookup and the
      insert, the unique violation is absorbed
    - the caller gets the other request's profile with created=False
    """
    identity = make_identity(db_session, "STUDENT")
    winner = make_user(db_session, identity_user_id=identity.identity_user_id)
    winner_id = winner.user_id

    original = UserRepository.get_by_identity_user_id
    calls = []

    def first_lookup_misses(self, identity_user_id):
        calls.append(identity_user_id)
        if len(calls) == 1:
            return None
        return original(self, identity_user_id)

    monkeypatch.setattr(UserRepository, "get_by_identity_user_id", first_lookup_misses)

    user, created = UserService.get_or_provision_profile(
        db_session, identity.identity_user_id, settings.default_school_id
    )

    assert created is False
    assert user.user_id == winner_id
    assert len(calls) == 2


# =============================================================================
# IDENTITY SERVICE
# =============================================================================


def test_register_and_authenticate(db_session: Session):
    identity = IdentityService.register(
        db_session, RegisterRequest(email="Elsa@Example.com", password="hemligt1")
    )
    assert identity.email == "elsa@example.com"

    token = IdentityService.authenticate(
        db_session, LoginRequest(email="ELSA@example.com", password="hemligt1"), settings
    )
    assert token.roles == ["STUDENT"]
    assert token.expires_in == settings.jwt_expiry_minutes * 60

    with pytest.raises(UnauthorizedError):
        IdentityService.authenticate(
            db_session, LoginRequest(email="elsa@example.com", password="wrong-one"), settings
        )
    with pytest.raises(ConflictError):
        IdentityService.register(db_session, RegisterRequest(email="elsa@example.com", password="other12"))


def test_role_grant_and_revoke_are_idempotent(db_session: Session):
    identity = make_identity(db_session, "STUDENT")

    IdentityService.add_role(db_session, identity.identity_user_id, "kitchen")
    IdentityService.add_role(db_session, identity.identity_user_id, "KITCHEN")
    assert IdentityService.get_roles(db_session, identity.identity_user_id) == ["KITCHEN", "STUDENT"]

    IdentityService.remove_role(db_session, identity.identity_user_id, "kitchen")
    IdentityService.remove_role(db_session, identity.identity_user_id, "kitchen")
    assert IdentityService.get_roles(db_session, identity.identity_user_id) == ["STUDENT"]


def test_role_validation(db_session: Session):
    identity = make_identity(db_session)

    with pytest.raises(ServiceValidationError) as exc:
        IdentityService.add_role(db_session, identity.identity_user_id, "  ")
    assert exc.value.message == "Role is required."

    with pytest.raises(ServiceValidationError) as exc:
        IdentityService.add_role(db_session, identity.identity_user_id, "janitor")
    assert exc.value.message == "Role 'janitor' does not exist."

    with pytest.raises(NotFoundError):
        IdentityService.add_role(db_session, uuid.uuid4(), "ADMIN")


def test_change_password_and_email(db_session: Session):
    identity = make_identity(db_session, "STUDENT")
    other = make_identity(db_session, "STUDENT")

    with pytest.raises(ServiceValidationError):
        IdentityService.change_password(db_session, identity.identity_user_id, "wrong", "newpass1")
    IdentityService.change_password(db_session, identity.identity_user_id, "secret123", "newpass1")

    with pytest.raises(ConflictError):
        IdentityService.change_email(db_session, identity.identity_user_id, other.email)
    IdentityService.change_email(db_session, identity.identity_user_id, "New.Address@example.com")

    stored = IdentityUserRepository(db_session).get_by_email("new.address@example.com")
    assert isinstance(stored, IdentityUser)
    assert stored.identity_user_id == identity.identity_user_id
