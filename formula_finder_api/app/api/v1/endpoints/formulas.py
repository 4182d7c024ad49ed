"""
Formula endpoints for API v1.

Creating, updating and archiving a formula require access to the group
it lives in (and, when moving it, to the destination group).  The
listing is a shared catalog: any signed-in user sees every formula
matching the filters.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from formula_finder_api.app.core.security import get_current_user
from formula_finder_api.app.schemas.common import Envelope, ItemList
from formula_finder_api.app.schemas.formula import (
    Difficulty,
    FormulaCreate,
    FormulaData,
    FormulaRead,
    FormulaUpdate,
)
from formula_finder_api.app.services.formula_service import FormulaService

router = APIRouter()


@router.post(
    "/",
    name="createFormula",
    response_model=Envelope[FormulaData],
    status_code=status.HTTP_201_CREATED,
)
async def create_formula(
    formula_in: FormulaCreate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Create a formula, optionally inside a group the caller may use."""
    formula = await FormulaService.create_formula(formula_in, current_user["user_id"])
    return {"success": True, "data": {"formula": formula}}


@router.get("/", name="listFormulas", response_model=Envelope[ItemList[FormulaRead]])
async def list_formulas(
    group_id: Optional[int] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    include_inactive: bool = Query(False),
    current_user: dict = Depends(get_current_user),
) -> dict:
    """List formulas.

    - **group_id** restricts the result to one group.
    - **difficulty** is one of `basic`, `intermediate`, `advanced`.
    - **include_inactive** also returns archived formulas.
    """
    formulas = await FormulaService.list_formulas(
        group_id=group_id,
        difficulty=difficulty,
        include_inactive=include_inactive,
    )
    return {"success": True, "data": {"items": formulas, "total": len(formulas)}}


@router.patch("/{formula_id}", name="updateFormula", response_model=Envelope[FormulaData])
async def update_formula(
    formula_id: int,
    formula_in: FormulaUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Partially update a formula; unspecified fields remain unchanged."""
    formula = await FormulaService.update_formula(formula_id, formula_in, current_user["user_id"])
    return {"success": True, "data": {"formula": formula}}


@router.post("/{formula_id}/archive", name="archiveFormula", response_model=Envelope[FormulaData])
async def archive_formula(
    formula_id: int,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Archive a formula.  The row is kept with ``is_active`` set to false."""
    formula = await FormulaService.archive_formula(formula_id, current_user["user_id"])
    return {"success": True, "data": {"formula": formula}}
