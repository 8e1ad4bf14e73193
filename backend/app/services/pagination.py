"""
Agora Backend — Page-Number Pagination
========================================

What:  The pagination contract shared by every list endpoint.
How:   page ≥ 1, limit ≥ 1 (bounded at the route by Query(ge=1, le=100)),
       offset = (page - 1) * limit, totalPages = ceil(totalItems / limit).

Default page sizes (documented per endpoint):
    posts, posts by user, likes by user  → 10
    comments of a post, likes of a post  → 20

Unlike cursor pagination, page numbers let clients jump to arbitrary pages
and display "page X of Y"; ordering is made stable with an id tie-breaker
in the repositories.
"""

import math
from dataclasses import dataclass

from app.schemas.common import PaginationMeta

DEFAULT_POSTS_LIMIT = 10
DEFAULT_COMMENTS_LIMIT = 20
DEFAULT_POST_LIKES_LIMIT = 20
DEFAULT_USER_LIKES_LIMIT = 10
MAX_LIMIT = 100
# Keeps offset = (page - 1) * limit well inside a signed 64-bit INTEGER
MAX_PAGE = 1_000_000


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = DEFAULT_POSTS_LIMIT

    def __post_init__(self):
        if not 1 <= self.page <= MAX_PAGE:
            raise ValueError(f"page must be between 1 and {MAX_PAGE}")
        if self.limit < 1:
            raise ValueError("limit must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total_items: int) -> PaginationMeta:
        total_pages = math.ceil(total_items / self.limit)
        return PaginationMeta(
            current_page=self.page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=self.limit,
            has_next_page=self.page < total_pages,
            has_previous_page=self.page > 1,
        )
