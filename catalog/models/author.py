from __future__ import annotations
import uuid
import datetime
from typing import TYPE_CHECKING
from sqlalchemy import Text, Integer, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from catalog.models.base import Base

if TYPE_CHECKING:
    from catalog.models.book import Book


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


#Author
class Author(Base):
    __tablename__: str = "authors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    nationality: Mapped[str | None] = mapped_column(Text, nullable=True)
    birth_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    # Deletion is left to the foreign key, which refuses authors that own books.
    books: Mapped[list[Book]] = relationship(back_populates="author", passive_deletes="all")
