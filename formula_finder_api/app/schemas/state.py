"""
Pydantic schemas for a user's relationship with a formula.

Each user has at most one state row per formula holding the favorite
flag, a personal note and a self-reported familiarity level.
"""

from typing import ClassVar, Literal, Optional

from pydantic import BaseModel

from .common import PatchModel


Familiarity = Literal["new", "learning", "comfortable", "mastered"]


class StateUpsert(PatchModel):
    """Fields to set on the caller's state for a formula.

    May be empty: the first call then creates a row with the defaults.
    """

    require_changes: ClassVar[bool] = False

    is_favorite: Optional[bool] = None
    note: Optional[str] = None
    familiarity: Optional[Familiarity] = None


class StateRead(BaseModel):
    id: int
    user_id: str
    formula_id: int
    is_favorite: bool
    note: Optional[str]
    familiarity: Familiarity
    created_at: str
    updated_at: str


class StateData(BaseModel):
    state: StateRead
