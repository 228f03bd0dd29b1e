from __future__ import annotations
import uuid
from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.sql.expression import ColumnElement

from catalog.core.errors import ErrorKind
from catalog.models.author import Author
from catalog.models.book import Book
from catalog.repos.base import commit_or_raise
from catalog.schemas.book import BookCreate, BookSearchParams

_CONFLICTS = {
    ErrorKind.UNIQUE_CONFLICT: "ISBN already registered",
    ErrorKind.REFERENTIAL: "Author does not exist",
}

_SORT_COLUMNS: dict[str, ColumnElement[object]] = {
    "title": Book.title,
    "publishedYear": Book.published_year,
    "createdAt": Book.created_at,
}


def _search_filters(params: BookSearchParams) -> list[ColumnElement[bool]]:
    filters: list[ColumnElement[bool]] = []
    if params.search:
        filters.append(Book.title.icontains(params.search, autoescape=True))
    if params.genre:
        filters.append(Book.genre == params.genre)
    if params.author_name:
        filters.append(Book.author.has(Author.name.icontains(params.author_name, autoescape=True)))
    return filters


class BookRepository:
    @staticmethod
    # Create a new book
    def create(db: Session, data: BookCreate) -> Book:
        book = Book(**data.model_dump())
        db.add(book)
        commit_or_raise(db, _CONFLICTS)
        return BookRepository.get(db, book.id) or book

    @staticmethod
    # List books, newest first
    def list(db: Session, genre: str | None = None) -> list[Book]:
        stmt = select(Book).options(joinedload(Book.author))
        if genre:
            stmt = stmt.where(Book.genre == genre)
        stmt = stmt.order_by(Book.created_at.desc(), Book.id.asc())
        return list(db.scalars(stmt).all())

    @staticmethod
    # Filtered page of books plus the total match count
    def search(db: Session, params: BookSearchParams) -> tuple[list[Book], int]:
        filters = _search_filters(params)

        count_stmt = select(func.count()).select_from(Book).where(*filters)
        total = db.scalar(count_stmt) or 0
        # Offsets at or past the total never reach the store.
        if params.offset >= total:
            return [], total

        sort_column = _SORT_COLUMNS[params.sort_by]
        direction = sort_column.asc() if params.order == "asc" else sort_column.desc()
        stmt = (
            select(Book)
            .options(joinedload(Book.author))
            .where(*filters)
            .order_by(direction, Book.id.asc())
            .limit(params.limit)
            .offset(params.offset)
        )
        return list(db.scalars(stmt).all()), total

    @staticmethod
    # Get a book by ID
    def get(db: Session, book_id: uuid.UUID) -> Book | None:
        stmt = (
            select(Book)
            .where(Book.id == book_id)
            .options(joinedload(Book.author))
            .execution_options(populate_existing=True)
        )
        return db.scalars(stmt).first()

    @staticmethod
    # All books of one author in insertion order
    def list_for_author(db: Session, author_id: uuid.UUID) -> list[Book]:
        stmt = (
            select(Book)
            .where(Book.author_id == author_id)
            .order_by(Book.created_at.asc(), Book.id.asc())
        )
        return list(db.scalars(stmt).all())

    @staticmethod
    # Check if an ISBN is taken
    def get_by_isbn(db: Session, isbn: str) -> Book | None:
        stmt = select(Book).where(Book.isbn == isbn)
        return db.scalars(stmt).first()

    @staticmethod
    # Apply changed fields
    def update(db: Session, book: Book, changes: dict[str, object]) -> Book:
        for field, value in changes.items():
            setattr(book, field, value)
        commit_or_raise(db, _CONFLICTS)
        return BookRepository.get(db, book.id) or book

    @staticmethod
    # Delete a book
    def delete(db: Session, book: Book) -> None:
        db.delete(book)
        commit_or_raise(db, _CONFLICTS)

    @staticmethod
    # Count books, optionally for one author
    def count(db: Session, author_id: uuid.UUID | None = None) -> int:
        stmt = select(func.count()).select_from(Book)
        if author_id is not None:
            stmt = stmt.where(Book.author_id == author_id)
        return db.scalar(stmt) or 0
