import pytest
from pydantic import ValidationError

from catalog.schemas.book import BookSearchParams
from catalog.utils.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    clamp_pagination,
    page_window,
)


class TestPageWindow:
    """Test pagination metadata arithmetic."""

    def test_three_pages_for_23_results(self):
        total_pages, _, _ = page_window(total=23, page=1, limit=10)
        assert total_pages == 3

    def test_last_page_has_prev_but_no_next(self):
        assert page_window(total=23, page=3, limit=10) == (3, False, True)

    def test_first_page_has_next_but_no_prev(self):
        assert page_window(total=23, page=1, limit=10) == (3, True, False)

    def test_exact_multiple(self):
        assert page_window(total=20, page=2, limit=10) == (2, False, True)

    def test_no_results(self):
        assert page_window(total=0, page=1, limit=10) == (0, False, False)

    def test_page_past_the_end(self):
        assert page_window(total=5, page=4, limit=10) == (1, False, True)


class TestClampPagination:
    def test_clamps_limit_and_offset(self):
        assert clamp_pagination(500, -3) == (100, 0)
        assert clamp_pagination(0, 10) == (1, 10)


class TestBookSearchParams:
    """Test normalization of search parameters."""

    def test_defaults(self):
        params = BookSearchParams()

        assert params.page == 1
        assert params.limit == DEFAULT_PAGE_SIZE
        assert params.sort_by == "createdAt"
        assert params.order == "desc"
        assert params.search is None
        assert params.genre is None
        assert params.author_name is None

    def test_invalid_sort_field_falls_back_to_created_at(self):
        assert BookSearchParams(sort_by="invalidField").sort_by == "createdAt"

    def test_invalid_order_falls_back_to_desc(self):
        assert BookSearchParams(order="sideways").order == "desc"

    @pytest.mark.parametrize("field", ["title", "publishedYear", "createdAt"])
    def test_valid_sort_fields_kept(self, field):
        assert BookSearchParams(sort_by=field).sort_by == field

    def test_asc_order_kept(self):
        assert BookSearchParams(order="asc").order == "asc"

    def test_limit_capped(self):
        assert BookSearchParams(limit=500).limit == MAX_PAGE_SIZE

    def test_offset(self):
        assert BookSearchParams(page=3, limit=10).offset == 20

    def test_blank_filters_are_dropped(self):
        params = BookSearchParams(search="  ", genre="", author_name=" borges ")

        assert params.search is None
        assert params.genre is None
        assert params.author_name == "borges"

    def test_accepts_camel_case_names(self):
        params = BookSearchParams.model_validate({"sortBy": "title", "authorName": "Allende"})

        assert params.sort_by == "title"
        assert params.author_name == "Allende"

    @pytest.mark.parametrize("page", [0, -1])
    def test_page_must_be_positive(self, page):
        with pytest.raises(ValidationError):
            BookSearchParams(page=page)

    def test_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            BookSearchParams(limit=0)

    def test_immutable(self):
        params = BookSearchParams()
        with pytest.raises(ValidationError):
            params.page = 2
