"""Pagination helpers shared by every list endpoint.

Page and limit arrive as raw query-string values. Anything that is not a
positive integer falls back to the default instead of producing a 422:
``?page=abc&limit=xyz`` behaves exactly like ``?page=1&limit=<default>``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel, Field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

T = TypeVar("T")


def coerce_positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value if value > 0 else default
    if isinstance(value, float):
        return int(value) if value >= 1 else default
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return default
        return parsed if parsed > 0 else default
    return default


def total_pages(total: int, limit: int) -> int:
    if total <= 0 or limit <= 0:
        return 0
    return math.ceil(total / limit)


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @classmethod
    def from_raw(cls, page: Any = None, limit: Any = None, *, default_limit: int = DEFAULT_LIMIT) -> "PageWindow":
        return cls(
            page=coerce_positive_int(page, DEFAULT_PAGE),
            limit=coerce_positive_int(limit, default_limit),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PageResult(Generic[T]):
    items: List[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)


class Page(BaseModel, Generic[T]):
    """Envelope returned by the list endpoints."""

    items: List[T] = Field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total_pages: int = 0

    @classmethod
    def from_result(cls, result: PageResult) -> "Page":
        # items podem ser objetos ORM; o schema do item precisa de from_attributes
        return cls.model_validate(
            {
                "items": result.items,
                "total": result.total,
                "page": result.page,
                "limit": result.limit,
                "total_pages": result.total_pages,
            },
            from_attributes=True,
        )
