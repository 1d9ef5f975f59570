"""Shared pagination metadata for list responses."""

from __future__ import annotations

import math

from pydantic import BaseModel

MAX_PAGE_SIZE = 100


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> Pagination:
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit
