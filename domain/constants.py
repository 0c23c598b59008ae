"""Fixed reference data seeded into every database."""

from uuid import UUID

OTHER_ALLERGY_ID = UUID("bbbbbbbb-bbbb-bbbb-bbbb-bbbbbbbbbbbb")

ALLERGY_CATALOG = (
    (UUID("11111111-1111-1111-1111-111111111111"), "Gluten"),
    (UUID("22222222-2222-2222-2222-222222222222"), "Laktos"),
    (UUID("33333333-3333-3333-3333-333333333333"), "Mjölkprotein"),
    (UUID("44444444-4444-4444-4444-444444444444"), "Ägg"),
    (UUID("55555555-5555-5555-5555-555555555555"), "Nötter"),
    (UUID("66666666-6666-6666-6666-666666666666"), "Jordnötter"),
    (UUID("77777777-7777-7777-7777-777777777777"), "Soja"),
    (UUID("88888888-8888-8888-8888-888888888888"), "Fisk"),
    (UUID("99999999-9999-9999-9999-999999999999"), "Skaldjur"),
    (UUID("aaaaaaaa-aaaa-aaaa-aaaa-aaaaaaaaaaaa"), "Sesam"),
    (OTHER_ALLERGY_ID, "Annan"),
)

# Identity role names (stored and compared uppercase)
ROLE_ADMIN = "ADMIN"
ROLE_KITCHEN = "KITCHEN"
ROLE_STUDENT = "STUDENT"
ROLE_STAFF = "STAFF"

IDENTITY_ROLES = (ROLE_ADMIN, ROLE_KITCHEN, ROLE_STUDENT, ROLE_STAFF)
DEFAULT_IDENTITY_ROLE = ROLE_STUDENT

NOTES_MAX_LENGTH = 100
OTHER_NOTES_MIN_LENGTH = 2
ALLERGY_NAME_MAX_LENGTH = 100
ALLERGEN_CODE_MAX_LENGTH = 50
