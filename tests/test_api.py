"""
Tests for the people CRUD API
"""
from unittest.mock import MagicMock

import pytest
from bson.objectid import ObjectId
from fastapi.testclient import TestClient

from api.main_mongo import app, people_conn
from people_mongodb.people_data import PEOPLE_DATA


@pytest.fixture
def api(people):
    """Test client bound to an in-memory people collection"""
    app.dependency_overrides[people_conn] = lambda: people
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_api(api):
    r = api.post("/people/bulk", json=PEOPLE_DATA)
    assert r.status_code == 201
    return api


def test_create_person(api):
    r = api.post("/people", json={"name": "Charlie", "age": 40, "favorite_foods": ["sandwich"]})

    assert r.status_code == 201
    body = r.json()
    assert body["name"] == "Charlie"
    assert ObjectId.is_valid(body["id"])


def test_create_person_requires_name(api):
    r = api.post("/people", json={"age": 3})
    assert r.status_code == 422


def test_bulk_create(api):
    r = api.post("/people/bulk", json=PEOPLE_DATA)

    assert r.status_code == 201
    assert [p["name"] for p in r.json()] == [p["name"] for p in PEOPLE_DATA]


def test_find_by_name(seeded_api):
    r = seeded_api.get("/people", params={"name": "Mary"})
    assert r.status_code == 200
    assert len(r.json()) == 2


def test_find_by_food(seeded_api):
    r = seeded_api.get("/people/by-food/sushi")
    assert r.json()["name"] == "Alice"


def test_find_by_food_missing(seeded_api):
    assert seeded_api.get("/people/by-food/tacos").status_code == 404


def test_get_person_by_id(api):
    created = api.post("/people", json={"name": "Dana"}).json()

    r = api.get(f"/people/{created['id']}")

    assert r.status_code == 200
    assert r.json() == created


def test_get_person_invalid_id(api):
    r = api.get("/people/not-an-id")
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid id"


def test_get_person_missing(api):
    assert api.get(f"/people/{ObjectId()}").status_code == 404


def test_add_favorite_food(api):
    created = api.post("/people", json={"name": "Dana", "favorite_foods": ["soup"]}).json()

    r = api.post(f"/people/{created['id']}/favorite-foods")

    assert r.status_code == 200
    assert r.json()["favorite_foods"] == ["soup", "hamburger"]


def test_add_favorite_food_missing(api):
    r = api.post(f"/people/{ObjectId()}/favorite-foods")
    assert r.status_code == 404
    assert r.json()["detail"] == "Person not found"


def test_update_age_by_name(seeded_api):
    r = seeded_api.patch("/people/by-name/John/age")
    assert r.status_code == 200
    assert r.json()["age"] == 20


def test_update_age_custom_value(seeded_api):
    r = seeded_api.patch("/people/by-name/Peter/age", params={"age": 33})
    assert r.json()["age"] == 33


def test_update_age_missing(seeded_api):
    assert seeded_api.patch("/people/by-name/Zoe/age").status_code == 404


def test_update_age_negative(seeded_api):
    r = seeded_api.patch("/people/by-name/John/age", params={"age": -1})
    assert r.status_code == 422
    assert seeded_api.get("/people", params={"name": "John"}).json()[0]["age"] == 25


def test_delete_person(api):
    created = api.post("/people", json={"name": "Dana"}).json()

    r = api.delete(f"/people/{created['id']}")

    assert r.status_code == 200
    assert r.json()["name"] == "Dana"
    assert api.get(f"/people/{created['id']}").status_code == 404


def test_delete_person_missing(api):
    assert api.delete(f"/people/{ObjectId()}").status_code == 404


def test_delete_many_defaults_to_mary(seeded_api):
    r = seeded_api.delete("/people")
    assert r.json() == {"acknowledged": True, "deleted_count": 2}


def test_delete_many_by_name(seeded_api):
    r = seeded_api.delete("/people", params={"name": "Alice"})
    assert r.json()["deleted_count"] == 1


def test_chain(seeded_api):
    r = seeded_api.get("/people/chain")

    assert r.status_code == 200
    body = r.json()
    assert [p["name"] for p in body] == ["John", "Mary"]
    assert all(p["age"] is None for p in body)


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_health_ping_failure():
    people = MagicMock()
    people.database.client.admin.command.side_effect = Exception("down")
    app.dependency_overrides[people_conn] = lambda: people
    try:
        r = TestClient(app).get("/health")
    finally:
        app.dependency_overrides.clear()
    assert r.status_code == 500


def test_delete_many_empty_name_is_honoured(seeded_api):
    r = seeded_api.delete("/people", params={"name": ""})

    assert r.json()["deleted_count"] == 0
    assert len(seeded_api.get("/people", params={"name": "Mary"}).json()) == 2
