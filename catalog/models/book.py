from __future__ import annotations
import uuid
import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import ForeignKey, Integer, CheckConstraint, Text, DateTime, Uuid, Constraint
from catalog.models.base import Base
from catalog.models.author import Author, _utcnow

#Book
class Book(Base):
    __tablename__: str = "books"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # NULLs never collide, so books without an ISBN are unconstrained.
    isbn: Mapped[str | None] = mapped_column(Text, nullable=True, unique=True)
    published_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    genre: Mapped[str | None] = mapped_column(Text, nullable=True)
    pages: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("authors.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    author: Mapped[Author] = relationship(back_populates="books")

    __table_args__: tuple[Constraint, ...] = (
            CheckConstraint("pages IS NULL OR pages > 0", name="books_pages_positive"),
    )
