from pydantic import ConfigDict
from typing import ClassVar
import uuid

from catalog.schemas.common import CamelModel


class BookYear(CamelModel):
    title: str
    year: int


class BookPages(CamelModel):
    title: str
    pages: int


# Figures derived from one author's full book list
class AuthorStats(CamelModel):
    total_books: int = 0
    first_book: BookYear | None = None
    latest_book: BookYear | None = None
    average_pages: int = 0
    genres: list[str] = []
    longest_book: BookPages | None = None
    shortest_book: BookPages | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class AuthorStatsRead(AuthorStats):
    author_id: uuid.UUID
    author_name: str


class CatalogSummary(CamelModel):
    total_authors: int
    total_books: int
    average_books_per_author: float
