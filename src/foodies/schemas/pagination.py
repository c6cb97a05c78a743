"""Paged list responses."""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import Field

from foodies.schemas.base import APIResponse


ItemT = TypeVar("ItemT")


class PageResponse(APIResponse, Generic[ItemT]):
    """One page of a larger result set."""

    total: int = Field(..., ge=0, description="Matches across all pages")
    page: int = Field(..., ge=1, description="1-based page number")
    limit: int = Field(..., ge=1, description="Page size")
    total_pages: int = Field(..., ge=0, description="Number of pages")
    items: list[ItemT]

    @classmethod
    def build(
        cls,
        items: list[ItemT],
        *,
        total: int,
        page: int,
        limit: int,
    ) -> PageResponse[ItemT]:
        """Assemble a page, deriving ``total_pages`` from ``total`` and ``limit``."""
        return cls(
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if total else 0,
            items=items,
        )
