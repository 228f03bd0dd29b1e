from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from catalog.db.session import get_db
from catalog.services.book_service import BookService
from catalog.schemas.book import (
    BookCreate,
    BookDetail,
    BookPage,
    BookRead,
    BookSearchParams,
    BookUpdate,
)
from catalog.schemas.common import MessageResponse
from catalog.utils.pagination import DEFAULT_PAGE_SIZE
from typing import Annotated
import uuid
from starlette.status import (
    HTTP_201_CREATED,
)
router = APIRouter(prefix="/books", tags=["books"])


@router.post("", response_model=BookDetail, status_code=HTTP_201_CREATED)
def create_book(
    data: BookCreate,
    db: Annotated[Session, Depends(get_db)],
):
    return BookService.create_book(db, data)


@router.get("", response_model=list[BookRead])
def list_books(
    db: Annotated[Session, Depends(get_db)],
    genre: Annotated[str | None, Query()] = None,
):
    return BookService.list_books(db, genre=genre)


# Declared before /{book_id} so "search" is not parsed as an id
@router.get("/search", response_model=BookPage)
def search_books(
    db: Annotated[Session, Depends(get_db)],
    search: Annotated[str | None, Query()] = None,
    genre: Annotated[str | None, Query()] = None,
    author_name: Annotated[str | None, Query(alias="authorName")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = DEFAULT_PAGE_SIZE,
    sort_by: Annotated[str, Query(alias="sortBy")] = "createdAt",
    order: Annotated[str, Query()] = "desc",
):
    params = BookSearchParams(
        search=search,
        genre=genre,
        author_name=author_name,
        page=page,
        limit=limit,
        sort_by=sort_by,
        order=order,
    )
    return BookService.search_books(db, params)


@router.get("/{book_id}", response_model=BookDetail)
def get_book(
    book_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    return BookService.get_book(db, book_id)


@router.put("/{book_id}", response_model=BookDetail)
def update_book(
    book_id: uuid.UUID,
    data: BookUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    return BookService.update_book(db, book_id, data)


@router.delete("/{book_id}", response_model=MessageResponse)
def delete_book(
    book_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    BookService.delete_book(db, book_id)
    return MessageResponse(message="Book deleted")
