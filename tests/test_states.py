"""Per-user formula state: upsert semantics and listing."""

from formula_finder_api.app.core.db import get_cursor

FORMULAS = "/api/v1/formulas/"
STATES = "/api/v1/states/"


def create_formula(client, headers, name="E=mc^2"):
    response = client.post(FORMULAS, json={"name": name, "expression": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["formula"]["id"]


def upsert(client, headers, formula_id, **fields):
    response = client.put(f"{FORMULAS}{formula_id}/state", json=fields, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]["state"]


def count_rows(user_id, formula_id):
    with get_cursor() as cursor:
        row = cursor.execute(
            "SELECT COUNT(*) AS n FROM user_formula_states WHERE user_id = ? AND formula_id = ?",
            (user_id, formula_id),
        ).fetchone()
        return row["n"]


def test_first_upsert_creates_row_with_defaults(client, auth):
    formula_id = create_formula(client, auth("u1"))

    state = upsert(client, auth("u1"), formula_id, note="remember c squared")

    assert state["user_id"] == "u1"
    assert state["formula_id"] == formula_id
    assert state["is_favorite"] is False
    assert state["familiarity"] == "new"
    assert state["note"] == "remember c squared"
    assert state["created_at"] == state["updated_at"]


def test_empty_upsert_creates_default_row(client, auth):
    formula_id = create_formula(client, auth("u1"))

    state = upsert(client, auth("u1"), formula_id)

    assert state["is_favorite"] is False
    assert state["familiarity"] == "new"
    assert state["note"] is None


def test_upsert_without_body_creates_default_row(client, auth):
    formula_id = create_formula(client, auth("u1"))

    response = client.put(f"{FORMULAS}{formula_id}/state", headers=auth("u1"))

    assert response.status_code == 200, response.text
    state = response.json()["data"]["state"]
    assert state["is_favorite"] is False
    assert state["familiarity"] == "new"
    assert state["note"] is None
    assert count_rows("u1", formula_id) == 1


def test_second_upsert_patches_and_keeps_single_row(client, auth):
    formula_id = create_formula(client, auth("u1"))
    first = upsert(client, auth("u1"), formula_id, is_favorite=True, note="first note")

    second = upsert(client, auth("u1"), formula_id, familiarity="learning")

    assert second["id"] == first["id"]
    assert second["is_favorite"] is True
    assert second["note"] == "first note"
    assert second["familiarity"] == "learning"
    assert second["created_at"] == first["created_at"]
    assert second["updated_at"] >= first["updated_at"]
    assert count_rows("u1", formula_id) == 1


def test_repeated_identical_upsert_is_idempotent(client, auth):
    formula_id = create_formula(client, auth("u1"))

    first = upsert(client, auth("u1"), formula_id, is_favorite=True)
    second = upsert(client, auth("u1"), formula_id, is_favorite=True)

    assert count_rows("u1", formula_id) == 1
    assert {k: v for k, v in second.items() if k != "updated_at"} == {
        k: v for k, v in first.items() if k != "updated_at"
    }


def test_states_are_per_user(client, auth):
    formula_id = create_formula(client, auth("u1"))

    mine = upsert(client, auth("u1"), formula_id, is_favorite=True)
    theirs = upsert(client, auth("u2"), formula_id)

    assert mine["id"] != theirs["id"]
    assert theirs["is_favorite"] is False


def test_upsert_validation(client, auth):
    formula_id = create_formula(client, auth("u1"))

    bad_level = client.put(f"{FORMULAS}{formula_id}/state", json={"familiarity": "expert"}, headers=auth("u1"))
    null_note = client.put(f"{FORMULAS}{formula_id}/state", json={"note": None}, headers=auth("u1"))

    assert bad_level.status_code == 422
    assert null_note.status_code == 422


def test_upsert_for_missing_formula(client, auth):
    response = client.put(f"{FORMULAS}777/state", json={"is_favorite": True}, headers=auth("u1"))

    assert response.status_code == 404


def test_upsert_requires_authentication(client, auth):
    formula_id = create_formula(client, auth("u1"))

    assert client.put(f"{FORMULAS}{formula_id}/state", json={}).status_code == 401


def test_list_states_scoped_to_caller(client, auth):
    first = create_formula(client, auth("u1"), name="a")
    second = create_formula(client, auth("u1"), name="b")
    upsert(client, auth("u1"), first, is_favorite=True)
    upsert(client, auth("u1"), second, familiarity="mastered")
    upsert(client, auth("u2"), first, is_favorite=True)

    everything = client.get(STATES, headers=auth("u1")).json()["data"]
    favorites = client.get(STATES, params={"favorites_only": "true"}, headers=auth("u1")).json()["data"]

    assert everything["total"] == 2
    assert {s["formula_id"] for s in everything["items"]} == {first, second}
    assert favorites["total"] == 1
    assert favorites["items"][0]["formula_id"] == first
    assert all(s["user_id"] == "u1" for s in everything["items"])
