"""
User formula state endpoints for API v1.

The state of a formula (favorite flag, note, familiarity) is private to
the caller.  ``PUT /formulas/{formula_id}/state`` creates or patches the
caller's row; ``GET /states/`` lists the caller's rows.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from formula_finder_api.app.core.security import get_current_user
from formula_finder_api.app.schemas.common import Envelope, ItemList
from formula_finder_api.app.schemas.state import StateData, StateRead, StateUpsert
from formula_finder_api.app.services.state_service import StateService

router = APIRouter()


@router.put(
    "/formulas/{formula_id}/state",
    name="upsertUserFormulaState",
    response_model=Envelope[StateData],
)
async def upsert_state(
    formula_id: int,
    state_in: Optional[StateUpsert] = None,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Create or partially update the caller's state for a formula.

    The body may be omitted; the first call then stores the defaults.
    """
    if state_in is None:
        state_in = StateUpsert()
    state = await StateService.upsert_state(formula_id, state_in, current_user["user_id"])
    return {"success": True, "data": {"state": state}}


@router.get("/states/", name="listUserFormulaStates", response_model=Envelope[ItemList[StateRead]])
async def list_states(
    favorites_only: bool = Query(False),
    current_user: dict = Depends(get_current_user),
) -> dict:
    """List the caller's formula states, optionally favorites only."""
    states = await StateService.list_states(current_user["user_id"], favorites_only=favorites_only)
    return {"success": True, "data": {"items": states, "total": len(states)}}
