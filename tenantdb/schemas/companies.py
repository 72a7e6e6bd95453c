"""
Schemas for company request and response bodies.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompanyCreate(BaseModel):
    """Body of ``POST /api/companies``."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name of the company")
    slug: str = Field(..., min_length=1, max_length=255, description="Unique URL-safe identifier")
    is_active: bool = True


class CompanyUpdate(BaseModel):
    """Body of ``PATCH /api/companies/{id}``; omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    is_active: Optional[bool] = None

    @field_validator("name", "slug", "is_active")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null; omit the field to keep it unchanged")
        return value


class ProjectSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    key: str


class CompanyResponse(BaseModel):
    """A company as returned by the API; absent attributes are omitted."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    projects: Optional[List[ProjectSummary]] = None
