from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from catalog.db.session import get_db
from catalog.services.author_service import AuthorService
from catalog.schemas.author import (
    AuthorCreate,
    AuthorDetail,
    AuthorListItem,
    AuthorRead,
    AuthorUpdate,
)
from catalog.schemas.common import MessageResponse
from catalog.schemas.stats import AuthorStatsRead
from catalog.core.logging import get_logger
from typing import Annotated
import uuid
from starlette.status import (
    HTTP_201_CREATED,
)
router = APIRouter(prefix="/authors", tags=["authors"])


@router.post("", response_model=AuthorRead, status_code=HTTP_201_CREATED)
def create_author(
    data: AuthorCreate,
    db: Annotated[Session, Depends(get_db)],
):
    return AuthorService.create_author(db, data)


@router.get("", response_model=list[AuthorListItem])
def list_authors(
    db: Annotated[Session, Depends(get_db)],
    q: Annotated[str | None, Query()] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    logger = get_logger(__name__)
    logger.info("Listing authors")
    return AuthorService.list_authors(db, q=q, limit=limit, offset=offset)


@router.get("/{author_id}", response_model=AuthorDetail)
def get_author(
    author_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    return AuthorService.get_author_detail(db, author_id)


@router.put("/{author_id}", response_model=AuthorRead)
def update_author(
    author_id: uuid.UUID,
    data: AuthorUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    return AuthorService.update_author(db, author_id, data)


@router.delete("/{author_id}", response_model=MessageResponse)
def delete_author(
    author_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    AuthorService.delete_author(db, author_id)
    return MessageResponse(message="Author deleted")


@router.get("/{author_id}/stats", response_model=AuthorStatsRead)
def get_author_stats(
    author_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    return AuthorService.get_author_stats(db, author_id)
