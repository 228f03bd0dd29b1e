from pydantic import EmailStr, field_validator, ConfigDict
from typing import ClassVar
from datetime import datetime
import uuid

from catalog.schemas.common import (
    CamelModel,
    check_year_range,
    clean_optional_text,
    clean_required_text,
)

EARLIEST_BIRTH_YEAR = 1800


# Author base schema
class AuthorBase(CamelModel):
    name: str
    email: EmailStr
    bio: str | None = None
    nationality: str | None = None
    birth_year: int | None = None

    @field_validator("name", mode="before")
    @classmethod
    def trim_and_check(cls, v: object) -> object:
        return clean_required_text(v, "name")

    @field_validator("bio", "nationality", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        return clean_optional_text(v)

    @field_validator("birth_year")
    @classmethod
    def birth_year_in_range(cls, v: int | None) -> int | None:
        return check_year_range(v, "birthYear", EARLIEST_BIRTH_YEAR)

# Author create schema
class AuthorCreate(AuthorBase):
    pass

# Author update schema: only the fields present in the body are applied
class AuthorUpdate(CamelModel):
    name: str | None = None
    email: EmailStr | None = None
    bio: str | None = None
    nationality: str | None = None
    birth_year: int | None = None

    @field_validator("name", mode="before")
    @classmethod
    def trim_and_check(cls, v: object) -> object:
        return clean_required_text(v, "name")

    @field_validator("email", mode="before")
    @classmethod
    def email_not_null(cls, v: object) -> object:
        return clean_required_text(v, "email")

    @field_validator("bio", "nationality", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        return clean_optional_text(v)

    @field_validator("birth_year")
    @classmethod
    def birth_year_in_range(cls, v: int | None) -> int | None:
        return check_year_range(v, "birthYear", EARLIEST_BIRTH_YEAR)

# Author projection embedded in book listings
class AuthorSummary(CamelModel):
    id: uuid.UUID
    name: str
    email: str

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)

# Author read schema
class AuthorRead(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    bio: str | None = None
    nationality: str | None = None
    birth_year: int | None = None
    created_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)

# Author row in the author list
class AuthorListItem(AuthorRead):
    book_count: int = 0

# Book as shown on its author's page
class AuthorBookRead(CamelModel):
    id: uuid.UUID
    title: str
    description: str
    isbn: str | None = None
    published_year: int | None = None
    genre: str | None = None
    pages: int | None = None
    created_at: datetime

    model_config: ClassVar[ConfigDict] = ConfigDict(from_attributes=True)

# Author with books
class AuthorDetail(AuthorRead):
    books: list[AuthorBookRead] = []
