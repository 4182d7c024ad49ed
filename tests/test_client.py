"""The requests-based client, driven through the ASGI test client."""

import pytest

from formula_client import FormulaFinderAPI
from formula_finder_api.app.core.security import create_access_token


@pytest.fixture
def api_for(client):
    def _api(user_id):
        token = create_access_token({"sub": user_id})
        return FormulaFinderAPI(base_url="http://testserver", api_key=token, session=client)

    return _api


def test_client_walkthrough(api_for):
    u1, u2 = api_for("u1"), api_for("u2")

    data, error = u1.create_group("Kinematics", subject="Physics")
    assert error is None
    group = data["group"]

    data, error = u1.create_formula("v=u+at", "v=u+at", group_id=group["id"])
    assert error is None
    formula = data["formula"]

    data, error = u2.update_formula(formula["id"], name="mine")
    assert data is None
    assert error["status_code"] == 403
    assert error["code"] == "FORBIDDEN"

    data, error = u1.create_example(formula["id"], "u=0, a=2, t=3", "v = 6")
    assert error is None

    data, error = u2.list_examples(formula["id"])
    assert data["total"] == 1

    data, error = u2.upsert_state(formula["id"], is_favorite=True)
    assert data["state"]["is_favorite"] is True

    data, error = u2.list_states(favorites_only=True)
    assert data["total"] == 1

    data, error = u1.archive_formula(formula["id"])
    assert data["formula"]["is_active"] is False

    data, error = u1.list_formulas(group_id=group["id"])
    assert data["total"] == 0
    data, error = u1.list_formulas(group_id=group["id"], include_inactive=True)
    assert data["total"] == 1

    data, error = u1.update_group(group["id"], is_active=False)
    assert data["group"]["is_active"] is False
    data, error = u1.list_my_groups()
    assert data["total"] == 0
    data, error = u1.list_my_groups(include_inactive=True)
    assert data["total"] == 1


def test_client_reports_validation_errors(api_for):
    data, error = api_for("u1").update_group(1)

    assert data is None
    assert error["status_code"] == 422
    assert "At least one field" in error["message"]


def test_client_without_token(client):
    api = FormulaFinderAPI(base_url="http://testserver", session=client)

    data, error = api.list_formulas()

    assert data is None
    assert error["status_code"] == 401
