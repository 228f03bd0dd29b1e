import pytest
from pydantic import ValidationError
from datetime import date
import uuid

from catalog.schemas.author import AuthorCreate, AuthorUpdate
from catalog.schemas.book import BookCreate, BookUpdate


class TestAuthorSchemas:
    """Test author payload validation."""

    def test_author_name_validation(self):
        author = AuthorCreate(name="  Pablo Neruda  ", email="neruda@example.com")
        assert author.name == "Pablo Neruda"

        with pytest.raises(ValidationError) as exc_info:
            AuthorCreate(name="   ", email="neruda@example.com")
        assert "name cannot be empty" in str(exc_info.value)

    def test_author_email_validation(self):
        with pytest.raises(ValidationError):
            AuthorCreate(name="Pablo Neruda", email="not-an-email")

    def test_camel_case_input(self):
        author = AuthorCreate.model_validate(
            {"name": "Pablo Neruda", "email": "neruda@example.com", "birthYear": 1904}
        )
        assert author.birth_year == 1904

    def test_blank_optional_text_becomes_none(self):
        author = AuthorCreate(name="A", email="a@example.com", bio="  ", nationality="")
        assert author.bio is None
        assert author.nationality is None

    @pytest.mark.parametrize("year", [1799, date.today().year + 1])
    def test_birth_year_out_of_range(self, year):
        with pytest.raises(ValidationError) as exc_info:
            AuthorCreate(name="A", email="a@example.com", birth_year=year)
        assert "birthYear must be between" in str(exc_info.value)

    def test_update_tracks_sent_fields(self):
        update = AuthorUpdate.model_validate({"bio": None})
        assert update.model_dump(exclude_unset=True) == {"bio": None}

    def test_update_rejects_null_name(self):
        with pytest.raises(ValidationError) as exc_info:
            AuthorUpdate.model_validate({"name": None})
        assert "name cannot be null" in str(exc_info.value)


class TestBookSchemas:
    """Test book payload validation."""

    def _book(self, **overrides):
        data = {"title": "Rayuela", "description": "Novela", "authorId": str(uuid.uuid4())}
        data.update(overrides)
        return BookCreate.model_validate(data)

    def test_valid_book(self):
        book = self._book(publishedYear=1963, pages=600, isbn=" 978-0394752846 ")
        assert book.published_year == 1963
        assert book.isbn == "978-0394752846"

    @pytest.mark.parametrize("field", ["title", "description"])
    def test_required_text_cannot_be_blank(self, field):
        with pytest.raises(ValidationError) as exc_info:
            self._book(**{field: " "})
        assert f"{field} cannot be empty" in str(exc_info.value)

    def test_missing_author_id(self):
        with pytest.raises(ValidationError):
            BookCreate.model_validate({"title": "T", "description": "D"})

    def test_malformed_author_id(self):
        with pytest.raises(ValidationError):
            self._book(authorId="not-a-uuid")

    @pytest.mark.parametrize("pages", [0, -5])
    def test_pages_must_be_positive(self, pages):
        with pytest.raises(ValidationError) as exc_info:
            self._book(pages=pages)
        assert "pages must be > 0" in str(exc_info.value)

    @pytest.mark.parametrize("year", [999, date.today().year + 1])
    def test_published_year_out_of_range(self, year):
        with pytest.raises(ValidationError):
            self._book(publishedYear=year)

    def test_update_allows_clearing_optional_fields(self):
        update = BookUpdate.model_validate({"genre": None, "pages": None})
        assert update.model_dump(exclude_unset=True) == {"genre": None, "pages": None}

    @pytest.mark.parametrize("field", ["title", "description", "authorId"])
    def test_update_rejects_null_required_fields(self, field):
        with pytest.raises(ValidationError):
            BookUpdate.model_validate({field: None})
