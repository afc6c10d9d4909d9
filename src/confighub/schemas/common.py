"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

import math

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Page metadata returned by paginated list endpoints."""

    total: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> Pagination:
        return cls(total=total, pages=math.ceil(total / limit), page=page, limit=limit)


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str


class ErrorResponse(BaseModel):
    """Body returned for every handled failure."""

    error: str = Field(..., description="Stable machine-checkable error category")
    detail: str = Field(..., description="Human-readable explanation")
