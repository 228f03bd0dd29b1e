import math
from collections.abc import Iterable
from typing import Protocol

from catalog.schemas.stats import AuthorStats, BookPages, BookYear, CatalogSummary


class StatsBook(Protocol):
    """The book attributes the statistics read; ORM rows satisfy it."""
    title: str
    genre: str | None
    published_year: int | None
    pages: int | None


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def compute_author_stats(books: Iterable[StatsBook]) -> AuthorStats:
    """
    Aggregate an author's books. Pure: the caller supplies the full list.

    Ties keep encounter order: firstBook/latestBook are the first and last
    entries of a stable ascending sort by year, longestBook/shortestBook the
    first and last entries of a stable descending sort by pages.
    """
    books = list(books)
    if not books:
        return AuthorStats()

    with_year = sorted(
        (b for b in books if b.published_year is not None),
        key=lambda b: b.published_year,
    )
    with_pages = [b for b in books if b.pages is not None]
    by_pages = sorted(with_pages, key=lambda b: b.pages, reverse=True)

    genres: list[str] = []
    for book in books:
        if book.genre and book.genre not in genres:
            genres.append(book.genre)

    average_pages = 0
    if with_pages:
        average_pages = round_half_up(sum(b.pages for b in with_pages) / len(with_pages))

    return AuthorStats(
        total_books=len(books),
        first_book=_book_year(with_year[0]) if with_year else None,
        latest_book=_book_year(with_year[-1]) if with_year else None,
        average_pages=average_pages,
        genres=genres,
        longest_book=_book_pages(by_pages[0]) if by_pages else None,
        shortest_book=_book_pages(by_pages[-1]) if by_pages else None,
    )


def compute_catalog_summary(total_authors: int, total_books: int) -> CatalogSummary:
    # One decimal, halves rounded up.
    average = round_half_up(total_books * 10 / total_authors) / 10 if total_authors else 0.0
    return CatalogSummary(
        total_authors=total_authors,
        total_books=total_books,
        average_books_per_author=average,
    )


def _book_year(book: StatsBook) -> BookYear:
    return BookYear(title=book.title, year=book.published_year)


def _book_pages(book: StatsBook) -> BookPages:
    return BookPages(title=book.title, pages=book.pages)
