from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Annotated

from catalog.db.session import get_db
from catalog.schemas.stats import CatalogSummary
from catalog.services.author_service import AuthorService

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=CatalogSummary)
def get_catalog_summary(db: Annotated[Session, Depends(get_db)]):
    return AuthorService.get_catalog_summary(db)
