"""
Formula group endpoints for API v1.

Every route requires a signed-in user.  Creating a group makes the
caller its owner; only the owner may update it.  ``/groups/mine`` lists
the caller's own groups.
"""

from fastapi import APIRouter, Depends, Query, status

from formula_finder_api.app.core.security import get_current_user
from formula_finder_api.app.schemas.common import Envelope, ItemList
from formula_finder_api.app.schemas.group import GroupCreate, GroupData, GroupRead, GroupUpdate
from formula_finder_api.app.services.group_service import GroupService

router = APIRouter()


@router.post(
    "/",
    name="createFormulaGroup",
    response_model=Envelope[GroupData],
    status_code=status.HTTP_201_CREATED,
)
async def create_group(
    group_in: GroupCreate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Create a group owned by the caller."""
    group = await GroupService.create_group(group_in, current_user["user_id"])
    return {"success": True, "data": {"group": group}}


@router.get("/mine", name="listMyFormulaGroups", response_model=Envelope[ItemList[GroupRead]])
async def list_my_groups(
    include_inactive: bool = Query(False),
    current_user: dict = Depends(get_current_user),
) -> dict:
    """List the caller's groups; deactivated ones only with ``include_inactive``."""
    groups = await GroupService.list_my_groups(current_user["user_id"], include_inactive=include_inactive)
    return {"success": True, "data": {"items": groups, "total": len(groups)}}


@router.patch("/{group_id}", name="updateFormulaGroup", response_model=Envelope[GroupData])
async def update_group(
    group_id: int,
    group_in: GroupUpdate,
    current_user: dict = Depends(get_current_user),
) -> dict:
    """Partially update a group.

    Returns 404 when the group does not exist and 403 when it belongs
    to another user.
    """
    group = await GroupService.update_group(group_id, group_in, current_user["user_id"])
    return {"success": True, "data": {"group": group}}
