"""
Worked example endpoints for API v1.

Examples are nested under their formula, so this router declares the
full ``/formulas/{formula_id}/examples`` path itself and is included
without a prefix.
"""

from fastapi import APIRouter, Depends, status

from formula_finder_api.app.core.security import get_current_user
from formula_finder_api.app.schemas.common import Envelope, ItemList
from formula_finder_api.app.schemas.example import ExampleCreate, ExampleData, ExampleRead
from formula_finder_api.app.services.example_service import ExampleService

router = APIRouter()


@router.post(
    "/formulas/{formula_id}/examples",
    name="createFormulaExample",
    response_model=Envelope[ExampleData],
    status_code=status.HTTP_201_CREATED,
)
async def create_example(
    formula_id: int,
    example_in: ExampleCreate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Add a worked example to a formula the caller may edit."""
    example = await ExampleService.create_example(formula_id, example_in, current_user["user_id"])
    return {"success": True, "data": {"example": example}}


@router.get(
    "/formulas/{formula_id}/examples",
    name="listFormulaExamples",
    response_model=Envelope[ItemList[ExampleRead]],
)
async def list_examples(
    formula_id: int,
    current_user: dict = Depends(get_current_user),
) -> dict:
    # Examples are readable by every signed-in user regardless of group ownership.
    examples = await ExampleService.list_examples(formula_id)
    return {"success": True, "data": {"items": examples, "total": len(examples)}}
