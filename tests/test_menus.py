"""
Menu tests over HTTP: week creation, items, allergen tags and publishing.
"""

import uuid

from sqlalchemy.orm import Session

from test_fixtures import client, default_school_id, make_week

SCHOOL = default_school_id()


def _create_week(headers, year=2025, week_number=10):
    return client.post(
        f"/schools/{SCHOOL}/menuweeks",
        json={"year": year, "week_number": week_number},
        headers=headers,
    )


def _add_item(headers, menu_week_id, day=1, item_type="main", title="Fiskpinnar"):
    return client.post(
        f"/menuweeks/{menu_week_id}/items",
        json={"day_of_week": day, "type": item_type, "title": title, "description": "med potatis"},
        headers=headers,
    )


# =============================================================================
# WEEKS
# =============================================================================


def test_create_week_and_conflict(kitchen_headers):
    r = _create_week(kitchen_headers)
    assert r.status_code == 201
    week = r.json()
    assert week["published_at"] is None
    assert r.headers["Location"] == f"/schools/{SCHOOL}/menuweeks/2025/10"

    dup = _create_week(kitchen_headers)
    assert dup.status_code == 409
    assert dup.json()["message"] == "MenuWeek already exists for that school/year/week."


def test_week_number_bounds(kitchen_headers):
    assert _create_week(kitchen_headers, week_number=0).status_code == 422
    assert _create_week(kitchen_headers, week_number=54).status_code == 422
    assert _create_week(kitchen_headers, week_number=53).status_code == 201


def test_week_for_unknown_school(admin_headers):
    r = client.post(
        f"/schools/{uuid.uuid4()}/menuweeks",
        json={"year": 2025, "week_number": 10},
        headers=admin_headers,
    )
    assert r.status_code == 404


def test_list_weeks_and_missing_detail(db_session: Session, student_headers):
    make_week(db_session, year=2025, week_number=12)
    make_week(db_session, year=2025, week_number=11)

    r = client.get(f"/schools/{SCHOOL}/menuweeks", headers=student_headers)
    assert [w["week_number"] for w in r.json()] == [11, 12]

    missing = client.get(f"/schools/{SCHOOL}/menuweeks/2025/40", headers=student_headers)
    assert missing.status_code == 404


def test_publish_is_idempotent(kitchen_headers, student_headers):
    """
    Verifies:
    - publishing sets published_at
    - publishing again returns 200 and keeps the first timestamp
    - students cannot publish
    """
    week = _create_week(kitchen_headers).json()
    url = f"/menuweeks/{week['menu_week_id']}/publish"

    assert client.post(url, headers=student_headers).status_code == 403

    first = client.post(url, headers=kitchen_headers)
    second = client.post(url, headers=kitchen_headers)

    assert first.status_code == 200
    assert first.json()["published_at"] is not None
    assert second.status_code == 200
    assert second.json()["published_at"] == first.json()["published_at"]

    assert client.post(f"/menuweeks/{uuid.uuid4()}/publish", headers=kitchen_headers).status_code == 404


# =============================================================================
# ITEMS AND ALLERGENS
# =============================================================================


def test_item_lifecycle(kitchen_headers, student_headers):
    week = _create_week(kitchen_headers).json()

    r = _add_item(kitchen_headers, week["menu_week_id"])
    assert r.status_code == 201
    item = r.json()
    assert r.headers["Location"] == f"/menuitems/{item['menu_item_id']}"
    assert item["allergens"] == []

    updated = client.put(
        f"/menuitems/{item['menu_item_id']}",
        json={"day_of_week": 3, "type": "veg", "title": "Linsgryta"},
        headers=kitchen_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["day_of_week"] == 3
    assert updated.json()["type"] == "veg"
    assert updated.json()["description"] == ""

    assert client.delete(f"/menuitems/{item['menu_item_id']}", headers=kitchen_headers).status_code == 204
    assert client.delete(f"/menuitems/{item['menu_item_id']}", headers=kitchen_headers).status_code == 404
    assert client.get(f"/menuweeks/{week['menu_week_id']}/items", headers=student_headers).json() == []


def test_item_validation(kitchen_headers):
    week = _create_week(kitchen_headers).json()

    assert _add_item(kitchen_headers, week["menu_week_id"], day=8).status_code == 422
    assert _add_item(kitchen_headers, week["menu_week_id"], item_type="dessert").status_code == 422
    assert _add_item(kitchen_headers, week["menu_week_id"], title="   ").status_code == 422
    assert _add_item(kitchen_headers, uuid.uuid4()).status_code == 404


def test_allergen_replace_normalizes_and_is_idempotent(kitchen_headers):
    week = _create_week(kitchen_headers).json()
    item = _add_item(kitchen_headers, week["menu_week_id"]).json()
    url = f"/menuitems/{item['menu_item_id']}/allergens"
    payload = {"allergens": [" fish", "Milk", "FISH", "", "milk "]}

    first = client.put(url, json=payload, headers=kitchen_headers)
    second = client.put(url, json=payload, headers=kitchen_headers)

    assert first.status_code == 200
    assert first.json()["allergens"] == ["FISH", "MILK"]
    assert second.json()["allergens"] == ["FISH", "MILK"]

    cleared = client.put(url, json={"allergens": []}, headers=kitchen_headers)
    assert cleared.json()["allergens"] == []


def test_week_detail_includes_items_and_allergens(kitchen_headers, student_headers):
    week = _create_week(kitchen_headers, week_number=15).json()
    soup = _add_item(kitchen_headers, week["menu_week_id"], day=2, title="Ärtsoppa").json()
    _add_item(kitchen_headers, week["menu_week_id"], day=1, item_type="veg", title="Halloumi")
    _add_item(kitchen_headers, week["menu_week_id"], day=1, title="Korv")
    client.put(
        f"/menuitems/{soup['menu_item_id']}/allergens",
        json={"allergens": ["celery"]},
        headers=kitchen_headers,
    )

    r = client.get(f"/schools/{SCHOOL}/menuweeks/2025/15", headers=student_headers)

    assert r.status_code == 200
    detail = r.json()
    assert [(i["day_of_week"], i["type"], i["title"]) for i in detail["items"]] == [
        (1, "main", "Korv"),
        (1, "veg", "Halloumi"),
        (2, "main", "Ärtsoppa"),
    ]
    assert detail["items"][2]["allergens"] == ["CELERY"]
