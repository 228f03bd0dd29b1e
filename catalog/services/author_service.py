import uuid
from sqlalchemy.orm import Session

from catalog.core.errors import CatalogError, ErrorKind
from catalog.core.logging import get_logger
from catalog.models.author import Author
from catalog.repos.author_repo import AuthorRepository
from catalog.repos.book_repo import BookRepository
from catalog.schemas.author import (
    AuthorBookRead,
    AuthorCreate,
    AuthorDetail,
    AuthorListItem,
    AuthorUpdate,
)
from catalog.schemas.stats import AuthorStatsRead, CatalogSummary
from catalog.services.stats_service import compute_author_stats, compute_catalog_summary

logger = get_logger(__name__)


def _newest_first(books):
    # Undated books go last.
    return sorted(
        books,
        key=lambda b: (b.published_year is not None, b.published_year or 0),
        reverse=True,
    )


class AuthorService:
    @staticmethod
    # Create author
    def create_author(db: Session, data: AuthorCreate) -> Author:
        author = AuthorRepository.create(db, data)
        logger.info("Created author %s", author.id)
        return author

    @staticmethod
    # List authors
    def list_authors(
        db: Session,
        q: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[AuthorListItem]:
        rows = AuthorRepository.list(db, q=q, limit=limit, offset=offset)
        return [
            AuthorListItem.model_validate(author).model_copy(update={"book_count": count})
            for author, count in rows
        ]

    @staticmethod
    # Get author or raise not found
    def get_author(db: Session, author_id: uuid.UUID) -> Author:
        author = AuthorRepository.get(db, author_id)
        if author is None:
            raise CatalogError(ErrorKind.NOT_FOUND, "Author not found")
        return author

    @staticmethod
    # Get author with books
    def get_author_detail(db: Session, author_id: uuid.UUID) -> AuthorDetail:
        author = AuthorRepository.get_with_books(db, author_id)
        if author is None:
            raise CatalogError(ErrorKind.NOT_FOUND, "Author not found")
        detail = AuthorDetail.model_validate(author)
        books = [AuthorBookRead.model_validate(b) for b in _newest_first(author.books)]
        return detail.model_copy(update={"books": books})

    @staticmethod
    # Update author with the fields present in the request
    def update_author(db: Session, author_id: uuid.UUID, data: AuthorUpdate) -> Author:
        author = AuthorService.get_author(db, author_id)
        changes = data.model_dump(exclude_unset=True)
        author = AuthorRepository.update(db, author, changes)
        logger.info("Updated author %s (%s)", author.id, ", ".join(sorted(changes)) or "no fields")
        return author

    @staticmethod
    # Delete an author without books
    def delete_author(db: Session, author_id: uuid.UUID) -> None:
        author = AuthorService.get_author(db, author_id)
        if BookRepository.count(db, author_id=author.id):
            logger.warning("Refused to delete author %s: books still reference it", author.id)
            raise CatalogError(ErrorKind.IN_USE, "Author still has books")
        AuthorRepository.delete(db, author)
        logger.info("Deleted author %s", author_id)

    @staticmethod
    # Statistics over all of the author's books
    def get_author_stats(db: Session, author_id: uuid.UUID) -> AuthorStatsRead:
        author = AuthorService.get_author(db, author_id)
        stats = compute_author_stats(BookRepository.list_for_author(db, author.id))
        return AuthorStatsRead(
            author_id=author.id,
            author_name=author.name,
            **stats.model_dump(),
        )

    @staticmethod
    # Catalog-wide totals
    def get_catalog_summary(db: Session) -> CatalogSummary:
        return compute_catalog_summary(AuthorRepository.count(db), BookRepository.count(db))
