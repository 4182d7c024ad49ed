"""Formula Finder API client.

A thin synchronous wrapper around the REST API served by
``formula_finder_api.app.main``.  Each high-level method maps to one
action and returns a tuple ``(data, error)``:

* on success ``data`` is the ``data`` member of the response envelope
  and ``error`` is ``None``;
* on failure ``data`` is ``None`` and ``error`` is a dictionary with the
  keys ``status_code``, ``code`` and ``message``.

The client authenticates with a bearer token (see ``create_token.py``)
and uses the ``requests`` library.  Any object with a compatible
``request`` method (for instance FastAPI's ``TestClient``) may be passed
as ``session``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]


class FormulaFinderAPI:
    """Client for the formula finder API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        prefix: str = "/api/v1",
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``https://example.com``.
            api_key: Bearer token sent in the ``Authorization`` header.
            session: Optional requests session.  If not supplied a
                session is created automatically.
            prefix: Path prefix of the versioned API.
            timeout: Request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + prefix
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
    ) -> Result:
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if params:
            params = {k: _query_value(v) for k, v in params.items() if v is not None}
        logger.debug("Sending %s request to %s", method, url)
        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params or None,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "code": None, "message": str(exc)}
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if response.status_code >= 400:
            error = (payload or {}).get("error") if isinstance(payload, dict) else None
            message = (error or {}).get("message") or response.text
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {
                "status_code": response.status_code,
                "code": (error or {}).get("code"),
                "message": message,
            }
        return (payload or {}).get("data"), None

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------
    def create_group(self, name: str, **fields: Any) -> Result:
        return self._request("POST", "/groups/", json_body={"name": name, **fields})

    def update_group(self, group_id: int, **fields: Any) -> Result:
        return self._request("PATCH", f"/groups/{group_id}", json_body=fields)

    def list_my_groups(self, include_inactive: bool = False) -> Result:
        return self._request("GET", "/groups/mine", params={"include_inactive": include_inactive})

    # ------------------------------------------------------------------
    # Formulas
    # ------------------------------------------------------------------
    def create_formula(self, name: str, expression: str, **fields: Any) -> Result:
        body = {"name": name, "expression": expression, **fields}
        return self._request("POST", "/formulas/", json_body=body)

    def update_formula(self, formula_id: int, **fields: Any) -> Result:
        return self._request("PATCH", f"/formulas/{formula_id}", json_body=fields)

    def archive_formula(self, formula_id: int) -> Result:
        return self._request("POST", f"/formulas/{formula_id}/archive")

    def list_formulas(
        self,
        group_id: Optional[int] = None,
        difficulty: Optional[str] = None,
        include_inactive: bool = False,
    ) -> Result:
        params = {"group_id": group_id, "difficulty": difficulty, "include_inactive": include_inactive}
        return self._request("GET", "/formulas/", params=params)

    # ------------------------------------------------------------------
    # Examples
    # ------------------------------------------------------------------
    def create_example(self, formula_id: int, problem: str, solution: str, **fields: Any) -> Result:
        body = {"problem": problem, "solution": solution, **fields}
        return self._request("POST", f"/formulas/{formula_id}/examples", json_body=body)

    def list_examples(self, formula_id: int) -> Result:
        return self._request("GET", f"/formulas/{formula_id}/examples")

    # ------------------------------------------------------------------
    # User state
    # ------------------------------------------------------------------
    def upsert_state(self, formula_id: int, **fields: Any) -> Result:
        return self._request("PUT", f"/formulas/{formula_id}/state", json_body=fields)

    def list_states(self, favorites_only: bool = False) -> Result:
        return self._request("GET", "/states/", params={"favorites_only": favorites_only})


def _query_value(value: Any) -> Any:
    # Booleans are sent as the lowercase strings FastAPI parses.
    if isinstance(value, bool):
        return "true" if value else "false"
    return value
