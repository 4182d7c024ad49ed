"""
Pydantic schemas for formulas.

A formula has a display name, a textual expression (TeX-like or
plain), optional variable metadata and an open ``meta`` mapping.  A
formula may belong to a group; the group's owner then controls who may
edit the formula and its examples.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, StrictInt

from .common import PatchModel


Difficulty = Literal["basic", "intermediate", "advanced"]


class Variable(BaseModel):
    """One entry of a formula's ordered variable list."""

    symbol: str = Field(..., min_length=1, examples=["s"])
    meaning: Optional[str] = Field(None, examples=["displacement"])
    unit: Optional[str] = Field(None, examples=["m"])


class FormulaCreate(BaseModel):
    """Schema for creating a formula."""

    group_id: Optional[StrictInt] = None
    name: str = Field(..., min_length=1, examples=["Equation of motion"])
    expression: str = Field(..., min_length=1, examples=["s = ut + 1/2 a t^2"])
    description: Optional[str] = None
    variables: Optional[List[Variable]] = None
    meta: Optional[Dict[str, Any]] = None
    difficulty: Difficulty = "basic"
    is_active: Optional[bool] = Field(None, description="Defaults to true")


class FormulaUpdate(PatchModel):
    """Schema for updating a formula.

    Supplying ``group_id`` moves the formula to another group, which
    requires access to both the current and the destination group.
    """

    group_id: Optional[StrictInt] = None
    name: Optional[str] = Field(None, min_length=1)
    expression: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    variables: Optional[List[Variable]] = None
    meta: Optional[Dict[str, Any]] = None
    difficulty: Optional[Difficulty] = None
    is_active: Optional[bool] = None


class FormulaRead(BaseModel):
    """Schema for reading a formula."""

    id: int
    group_id: Optional[int]
    name: str
    expression: str
    description: Optional[str]
    variables: Optional[List[Variable]]
    meta: Optional[Dict[str, Any]]
    difficulty: Difficulty
    is_active: bool
    created_at: str
    updated_at: str


class FormulaData(BaseModel):
    formula: FormulaRead
