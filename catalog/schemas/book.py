from pydantic import ConfigDict, Field, ValidationInfo, field_validator
from typing import ClassVar, Literal
from datetime import datetime
import uuid

from catalog.schemas.author import AuthorRead, AuthorSummary
from catalog.schemas.common import (
    CamelModel,
    check_year_range,
    clean_optional_text,
    clean_required_text,
)
from catalog.utils.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

EARLIEST_PUBLISHED_YEAR = 1000

BookSortField = Literal["title", "publishedYear", "createdAt"]
SortOrder = Literal["asc", "desc"]


# Book base schema
class BookBase(CamelModel):
    title: str
    description: str
    isbn: str | None = None
    published_year: int | None = None
    genre: str | None = None
    pages: int | None = None
    author_id: uuid.UUID

    @field_validator("title", "description", mode="before")
    @classmethod
    def trim_and_check(cls, v: object, info: ValidationInfo) -> object:
        return clean_required_text(v, info.field_name)

    @field_validator("isbn", "genre", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        return clean_optional_text(v)

    @field_validator("published_year")
    @classmethod
    def published_year_in_range(cls, v: int | None) -> int | None:
        return check_year_range(v, "publishedYear", EARLIEST_PUBLISHED_YEAR)

    @field_validator("pages")
    @classmethod
    def positive_pages(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("pages must be > 0")
        return v

# Book create schema
class BookCreate(BookBase):
    pass

# Book update schema: only the fields present in the body are applied
class BookUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    isbn: str | None = None
    published_year: int | None = None
    genre: str | None = None
    pages: int | None = None
    author_id: uuid.UUID | None = None

    @field_validator("title", "description", "author_id", mode="before")
    @classmethod
    def not_null(cls, v: object, info: ValidationInfo) -> object:
        return clean_required_text(v, info.field_name)

    @field_validator("isbn", "genre", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        return clean_optional_text(v)

    @field_validator("published_year")
    @classmethod
    def published_year_in_range(cls, v: int | None) -> int | None:
        return check_year_range(v, "publishedYear", EARLIEST_PUBLISHED_YEAR)

    @field_validator("pages")
    @classmethod
    def positive_pages(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("pages must be > 0")
        return v

# Book read schema (listings)
class BookRead(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    isbn: str | None = None
    published_year: int | None = None
    genre: str | None = None
    pages: int | None = None
    author_id: uuid.UUID
    created_at: datetime
    author: AuthorSummary

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)

# Book read schema (single record)
class BookDetail(BookRead):
    author: AuthorRead


class BookSearchParams(CamelModel):
    """
    Normalized query for the book search.
    Unknown sort fields fall back to createdAt, unknown orders to desc,
    limit is capped at MAX_PAGE_SIZE.
    """
    search: str | None = None
    genre: str | None = None
    author_name: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    sort_by: BookSortField = "createdAt"
    order: SortOrder = "desc"

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("search", "genre", "author_name", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        return clean_optional_text(v)

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, v: int) -> int:
        return min(v, MAX_PAGE_SIZE)

    @field_validator("sort_by", mode="before")
    @classmethod
    def known_sort_field(cls, v: object) -> object:
        return v if v in ("title", "publishedYear", "createdAt") else "createdAt"

    @field_validator("order", mode="before")
    @classmethod
    def known_order(cls, v: object) -> object:
        return v if v in ("asc", "desc") else "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PaginationMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class BookPage(CamelModel):
    data: list[BookRead]
    pagination: PaginationMeta
