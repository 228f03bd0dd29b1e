from __future__ import annotations
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import uuid

from catalog.core.errors import CatalogError, ErrorKind
from catalog.core.logging import get_logger
from catalog.schemas.book import (
    BookCreate,
    BookPage,
    BookRead,
    BookSearchParams,
    BookUpdate,
    PaginationMeta,
)
from catalog.repos.author_repo import AuthorRepository
from catalog.repos.book_repo import BookRepository
from catalog.models.book import Book
from catalog.utils.pagination import page_window

logger = get_logger(__name__)


class BookService:
    @staticmethod
    # Create book
    def create_book(db: Session, data: BookCreate) -> Book:
        if not AuthorRepository.exists(db, data.author_id):
            logger.warning("Rejected book for unknown author %s", data.author_id)
            raise CatalogError(ErrorKind.REFERENTIAL, "Author does not exist")

        book = BookRepository.create(db, data)
        logger.info("Created book %s for author %s", book.id, book.author_id)
        return book

    @staticmethod
    # List books
    def list_books(db: Session, genre: str | None = None) -> list[Book]:
        return BookRepository.list(db, genre=genre)

    @staticmethod
    # Search books: filters, sort and one page of results
    def search_books(db: Session, params: BookSearchParams) -> BookPage:
        try:
            books, total = BookRepository.search(db, params)
        except SQLAlchemyError as e:
            raise CatalogError(ErrorKind.INTERNAL, "Book query failed") from e

        total_pages, has_next, has_prev = page_window(total, params.page, params.limit)
        return BookPage(
            data=[BookRead.model_validate(b) for b in books],
            pagination=PaginationMeta(
                page=params.page,
                limit=params.limit,
                total=total,
                total_pages=total_pages,
                has_next=has_next,
                has_prev=has_prev,
            ),
        )

    @staticmethod
    # Get book or raise not found
    def get_book(db: Session, book_id: uuid.UUID) -> Book:
        book = BookRepository.get(db, book_id)
        if book is None:
            raise CatalogError(ErrorKind.NOT_FOUND, "Book not found")
        return book

    @staticmethod
    # Update book with the fields present in the request
    def update_book(db: Session, book_id: uuid.UUID, data: BookUpdate) -> Book:
        book = BookService.get_book(db, book_id)
        changes = data.model_dump(exclude_unset=True)

        author_id = changes.get("author_id")
        if author_id is not None and not AuthorRepository.exists(db, author_id):
            logger.warning("Rejected move of book %s to unknown author %s", book_id, author_id)
            raise CatalogError(ErrorKind.REFERENTIAL, "Author does not exist")

        book = BookRepository.update(db, book, changes)
        logger.info("Updated book %s (%s)", book.id, ", ".join(sorted(changes)) or "no fields")
        return book

    @staticmethod
    # Delete book
    def delete_book(db: Session, book_id: uuid.UUID) -> None:
        book = BookService.get_book(db, book_id)
        BookRepository.delete(db, book)
        logger.info("Deleted book %s", book_id)
