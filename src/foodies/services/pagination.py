"""Paging primitives shared by list operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Pagination:
    """Offset pagination derived from a 1-based page number."""

    page: int = 1
    limit: int = 12

    def __post_init__(self) -> None:
        if self.page < 1:
            msg = "page must be >= 1"
            raise ValueError(msg)
        if self.limit < 1:
            msg = "limit must be >= 1"
            raise ValueError(msg)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """Rows of one page plus the total match count before pagination."""

    count: int
    rows: list[T] = field(default_factory=list)
