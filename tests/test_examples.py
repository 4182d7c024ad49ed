"""Worked examples: creation inherits formula edit rights, listing is public."""

GROUPS = "/api/v1/groups/"
FORMULAS = "/api/v1/formulas/"


def create_formula(client, headers, group_id=None):
    body = {"name": "Ohm's law", "expression": "V = IR"}
    if group_id is not None:
        body["group_id"] = group_id
    response = client.post(FORMULAS, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]["formula"]["id"]


def owned_formula(client, headers):
    group = client.post(GROUPS, json={"name": "Circuits"}, headers=headers).json()["data"]["group"]
    return create_formula(client, headers, group_id=group["id"])


def test_create_and_list_examples(client, auth):
    formula_id = owned_formula(client, auth("u1"))

    response = client.post(
        f"{FORMULAS}{formula_id}/examples",
        json={
            "title": "Resistor",
            "problem": "I = 2 A, R = 5 ohm. Find V.",
            "solution": "V = 2 * 5 = 10 V",
            "data": {"I": 2, "R": 5, "V": 10},
        },
        headers=auth("u1"),
    )

    assert response.status_code == 201
    example = response.json()["data"]["example"]
    assert example["formula_id"] == formula_id
    assert example["data"] == {"I": 2, "R": 5, "V": 10}
    assert example["created_at"]

    listing = client.get(f"{FORMULAS}{formula_id}/examples", headers=auth("u2"))

    assert listing.status_code == 200
    data = listing.json()["data"]
    assert data["total"] == 1
    assert data["items"][0]["title"] == "Resistor"


def test_create_example_in_foreign_group_is_forbidden(client, auth):
    formula_id = owned_formula(client, auth("u1"))

    response = client.post(
        f"{FORMULAS}{formula_id}/examples",
        json={"problem": "p", "solution": "s"},
        headers=auth("u2"),
    )

    assert response.status_code == 403
    assert client.get(f"{FORMULAS}{formula_id}/examples", headers=auth("u1")).json()["data"]["total"] == 0


def test_create_example_on_ungrouped_formula_by_anyone(client, auth):
    formula_id = create_formula(client, auth("u1"))

    response = client.post(
        f"{FORMULAS}{formula_id}/examples",
        json={"problem": "p", "solution": "s"},
        headers=auth("u2"),
    )

    assert response.status_code == 201
    assert response.json()["data"]["example"]["title"] is None


def test_create_example_for_missing_formula(client, auth):
    response = client.post(
        f"{FORMULAS}404/examples",
        json={"problem": "p", "solution": "s"},
        headers=auth("u1"),
    )

    assert response.status_code == 404


def test_create_example_requires_problem_and_solution(client, auth):
    formula_id = create_formula(client, auth("u1"))

    response = client.post(
        f"{FORMULAS}{formula_id}/examples",
        json={"problem": "p", "solution": ""},
        headers=auth("u1"),
    )

    assert response.status_code == 422


def test_list_examples_of_unknown_formula_is_empty(client, auth):
    response = client.get(f"{FORMULAS}12345/examples", headers=auth("u1"))

    assert response.status_code == 200
    assert response.json()["data"] == {"items": [], "total": 0}


def test_list_examples_requires_authentication(client, auth):
    formula_id = create_formula(client, auth("u1"))

    assert client.get(f"{FORMULAS}{formula_id}/examples").status_code == 401
