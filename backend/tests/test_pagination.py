"""
Agora Backend — Pagination Unit Tests
=======================================

What:  PageRequest offset arithmetic and the metadata it produces.
"""

import pytest

from app.services.pagination import MAX_PAGE, PageRequest


class TestPageRequest:

    def test_defaults(self):
        page = PageRequest()
        assert page.page == 1
        assert page.limit == 10
        assert page.offset == 0

    def test_offset(self):
        assert PageRequest(page=3, limit=20).offset == 40

    @pytest.mark.parametrize("page, limit", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_non_positive(self, page, limit):
        with pytest.raises(ValueError):
            PageRequest(page=page, limit=limit)

    def test_rejects_page_beyond_cap(self):
        assert PageRequest(page=MAX_PAGE, limit=100).offset == (MAX_PAGE - 1) * 100
        with pytest.raises(ValueError):
            PageRequest(page=MAX_PAGE + 1)


class TestPaginationMeta:

    def test_second_of_two_pages(self):
        meta = PageRequest(page=2, limit=10).meta(15)
        assert meta.current_page == 2
        assert meta.total_pages == 2
        assert meta.total_items == 15
        assert meta.items_per_page == 10
        assert meta.has_next_page is False
        assert meta.has_previous_page is True

    def test_exact_multiple(self):
        meta = PageRequest(page=1, limit=5).meta(10)
        assert meta.total_pages == 2
        assert meta.has_next_page is True
        assert meta.has_previous_page is False

    def test_empty(self):
        meta = PageRequest().meta(0)
        assert meta.total_pages == 0
        assert meta.has_next_page is False

    def test_page_past_the_end(self):
        meta = PageRequest(page=5, limit=10).meta(15)
        assert meta.total_pages == 2
        assert meta.has_next_page is False

    def test_serializes_camel_case(self):
        dumped = PageRequest(page=1, limit=10).meta(3).model_dump(by_alias=True)
        assert set(dumped) == {
            "currentPage", "totalPages", "totalItems",
            "itemsPerPage", "hasNextPage", "hasPreviousPage",
        }
