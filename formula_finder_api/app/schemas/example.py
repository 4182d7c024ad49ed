"""
Pydantic schemas for worked examples.

An example shows how to apply a formula: a problem statement, a
step-by-step solution and optional structured inputs/outputs.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ExampleCreate(BaseModel):
    """Schema for creating an example of the formula named in the path."""

    title: Optional[str] = None
    problem: str = Field(..., min_length=1)
    solution: str = Field(..., min_length=1)
    data: Optional[Dict[str, Any]] = Field(None, description="Structured numeric inputs/outputs")


class ExampleRead(BaseModel):
    id: int
    formula_id: int
    title: Optional[str]
    problem: str
    solution: str
    data: Optional[Dict[str, Any]]
    created_at: str


class ExampleData(BaseModel):
    example: ExampleRead
