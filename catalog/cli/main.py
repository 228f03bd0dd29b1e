import json

import click

from catalog.core.config import settings
from catalog.core.errors import CatalogError, ErrorKind
from catalog.core.logging import setup_logging
from catalog.db.session import SessionLocal, init_db
from catalog.schemas.author import AuthorCreate, AuthorRead
from catalog.services.author_service import AuthorService
from catalog.services.seed_service import seed_catalog
from pydantic import ValidationError


@click.group()
@click.version_option(package_name="library-catalog")
def cli() -> None:
    """Library Catalog maintenance commands."""
    setup_logging(settings.LOG_LEVEL)


@cli.command("init-db")
def init_db_cmd() -> None:
    """Create the catalog tables."""
    init_db()
    click.echo("Catalog tables ready.")


@cli.command("seed")
def seed() -> None:
    """Insert the sample authors and books (safe to rerun)."""
    init_db()
    db = SessionLocal()
    try:
        report = seed_catalog(db)
    finally:
        db.close()

    for name in report.authors_created:
        click.echo(f"Author created: {name}")
    for name in report.authors_skipped:
        click.echo(f"Author exists:  {name}")
    for title in report.books_created:
        click.echo(f"Book created:   {title}")
    for title in report.books_skipped:
        click.echo(f"Book exists:    {title}")
    click.echo(
        f"Seed complete: {len(report.authors_created)} author(s), "
        f"{len(report.books_created)} book(s) created."
    )


@cli.command("add-author")
@click.argument("name")
@click.argument("email")
@click.argument("bio", required=False)
@click.argument("nationality", required=False)
@click.argument("birth_year", required=False, type=int)
def add_author(
    name: str,
    email: str,
    bio: str | None,
    nationality: str | None,
    birth_year: int | None,
) -> None:
    """Create one author.

    Example: catalog add-author "Pablo Neruda" neruda@example.com "Poeta chileno" Chileno 1904
    """
    try:
        data = AuthorCreate(
            name=name,
            email=email,
            bio=bio,
            nationality=nationality,
            birth_year=birth_year,
        )
    except ValidationError as exc:
        for err in exc.errors():
            click.echo(f"Error: {err['loc'][-1]}: {err['msg']}", err=True)
        raise SystemExit(1) from exc

    db = SessionLocal()
    try:
        author = AuthorService.create_author(db, data)
    except CatalogError as exc:
        if exc.kind is ErrorKind.UNIQUE_CONFLICT:
            click.echo(f"Error: email {data.email} is already registered", err=True)
        else:
            click.echo(f"Error: could not create author ({exc.message})", err=True)
        raise SystemExit(1) from exc
    finally:
        db.close()

    click.echo("Author created:")
    payload = AuthorRead.model_validate(author).model_dump(mode="json", by_alias=True)
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
