import uuid
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from catalog.core.errors import CatalogError, ErrorKind
from catalog.models.author import Author
from catalog.models.book import Book
from catalog.repos.base import commit_or_raise
from catalog.schemas.author import AuthorCreate
from catalog.utils.pagination import clamp_pagination

_CONFLICTS = {ErrorKind.UNIQUE_CONFLICT: "Email already registered"}


class AuthorRepository:

    @staticmethod
    # Create a new author
    def create(db: Session, data: AuthorCreate) -> Author:
        author = Author(**data.model_dump())
        db.add(author)
        commit_or_raise(db, _CONFLICTS)
        db.refresh(author)
        return author

    @staticmethod
    # List authors with their book counts
    def list(
        db: Session,
        q: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[tuple[Author, int]]:
        limit, offset = clamp_pagination(limit, offset)

        stmt = (
            select(Author, func.count(Book.id))
            .outerjoin(Book, Book.author_id == Author.id)
            .group_by(Author.id)
        )

        if q:
            stmt = stmt.where(Author.name.icontains(q.strip(), autoescape=True))

        stmt = stmt.order_by(Author.name.asc(), Author.id.asc()).limit(limit).offset(offset)
        return [(author, count) for author, count in db.execute(stmt).all()]

    @staticmethod
    # Get an author by ID
    def get(db: Session, author_id: uuid.UUID) -> Author | None:
        return db.get(Author, author_id)

    @staticmethod
    # Get an author by ID with books loaded
    def get_with_books(db: Session, author_id: uuid.UUID) -> Author | None:
        stmt = (
            select(Author)
            .where(Author.id == author_id)
            .options(selectinload(Author.books))
        )
        return db.scalars(stmt).first()

    @staticmethod
    # Get an author by email
    def get_by_email(db: Session, email: str) -> Author | None:
        stmt = select(Author).where(Author.email == email)
        return db.scalars(stmt).first()

    @staticmethod
    # Check if an author exists
    def exists(db: Session, author_id: uuid.UUID) -> bool:
        stmt = select(Author.id).where(Author.id == author_id)
        return db.scalars(stmt).first() is not None

    @staticmethod
    # Apply changed fields
    def update(db: Session, author: Author, changes: dict[str, object]) -> Author:
        for field, value in changes.items():
            setattr(author, field, value)
        commit_or_raise(db, _CONFLICTS)
        db.refresh(author)
        return author

    @staticmethod
    # Delete an author
    def delete(db: Session, author: Author) -> None:
        db.delete(author)
        try:
            commit_or_raise(db, {})
        except CatalogError as e:
            if e.kind is ErrorKind.REFERENTIAL:
                raise CatalogError(ErrorKind.IN_USE, "Author still has books") from e
            raise

    @staticmethod
    # Count authors
    def count(db: Session) -> int:
        return db.scalar(select(func.count()).select_from(Author)) or 0
