from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int
    total_pages: int

    def meta(self) -> dict:
        return {"page": self.page, "limit": self.limit, "total": self.total, "totalPages": self.total_pages}


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def paginate(items: Sequence[T], *, page: int, limit: int) -> Page[T]:
    """Window an already globally sorted sequence.

    Metadata is computed from the un-windowed count.
    """
    skip = page_offset(page, limit)
    return Page(
        items=list(items[skip : skip + limit]),
        page=page,
        limit=limit,
        total=len(items),
        total_pages=total_pages(len(items), limit),
    )
