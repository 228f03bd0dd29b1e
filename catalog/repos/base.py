from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.core.errors import CatalogError, ErrorKind, classify_integrity_error


def commit_or_raise(db: Session, messages: dict[ErrorKind, str]) -> None:
    """
    Commit the unit of work; constraint violations roll back and surface as CatalogError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        kind = classify_integrity_error(e)
        raise CatalogError(kind, messages.get(kind, "Data integrity violation")) from e
