"""
Pydantic schemas for formula groups.

A group is a named collection of formulas, e.g. "Physics - Kinematics".
Groups created through the API are owned by their creator; rows with
no owner are shared and may be used by every authenticated user.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .common import PatchModel


class GroupCreate(BaseModel):
    """Schema for creating a formula group."""

    name: str = Field(..., min_length=1, examples=["Kinematics"])
    subject: Optional[str] = Field(None, examples=["Physics"])
    tags: Optional[str] = Field(None, description="Comma or space separated tags")
    description: Optional[str] = None
    slug: Optional[str] = None
    is_active: Optional[bool] = Field(None, description="Defaults to true")


class GroupUpdate(PatchModel):
    """Schema for updating a formula group.

    All fields are optional but at least one must be present.
    """

    name: Optional[str] = Field(None, min_length=1)
    subject: Optional[str] = None
    tags: Optional[str] = None
    description: Optional[str] = None
    slug: Optional[str] = None
    is_active: Optional[bool] = None


class GroupRead(BaseModel):
    """Schema for reading a formula group."""

    id: int
    owner_id: Optional[str]
    name: str
    subject: Optional[str]
    tags: Optional[str]
    description: Optional[str]
    slug: Optional[str]
    is_active: bool
    created_at: str
    updated_at: str


class GroupData(BaseModel):
    group: GroupRead
