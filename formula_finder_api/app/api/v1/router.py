"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import examples, formulas, groups, states

router = APIRouter()

router.include_router(groups.router, prefix="/groups", tags=["groups"])
router.include_router(formulas.router, prefix="/formulas", tags=["formulas"])
# The examples and states routers declare their nested paths
# (``/formulas/{formula_id}/...``) themselves and take no prefix.
router.include_router(examples.router, tags=["examples"])
router.include_router(states.router, tags=["states"])
