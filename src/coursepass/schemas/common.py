"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(CamelModel):
    """Page position returned by list endpoints."""

    page: int = Field(..., description="1-based page number")
    limit: int = Field(..., description="Page size")
    total: int = Field(..., description="Total number of items")
    total_pages: int = Field(..., description="Number of pages at this page size")
