from dataclasses import dataclass, field
from sqlalchemy.orm import Session

from catalog.core.logging import get_logger
from catalog.repos.author_repo import AuthorRepository
from catalog.repos.book_repo import BookRepository
from catalog.schemas.author import AuthorCreate
from catalog.schemas.book import BookCreate

logger = get_logger(__name__)

SEED_AUTHORS: list[dict[str, object]] = [
    {
        "name": "Gabriel García Márquez",
        "email": "gabo@example.com",
        "bio": "Escritor colombiano, premio Nobel de Literatura 1982",
        "nationality": "Colombiano",
        "birth_year": 1927,
    },
    {
        "name": "Isabel Allende",
        "email": "isabel@example.com",
        "bio": "Escritora chilena, una de las más leídas en español",
        "nationality": "Chilena",
        "birth_year": 1942,
    },
    {
        "name": "Jorge Luis Borges",
        "email": "borges@example.com",
        "bio": "Escritor argentino, maestro del cuento corto",
        "nationality": "Argentino",
        "birth_year": 1899,
    },
    {
        "name": "Julio Cortázar",
        "email": "cortazar@example.com",
        "bio": "Escritor argentino, exponente del boom latinoamericano",
        "nationality": "Argentino",
        "birth_year": 1914,
    },
]

# Books reference their author by email
SEED_BOOKS: list[dict[str, object]] = [
    {
        "title": "Cien años de soledad",
        "description": "Una obra maestra del realismo mágico",
        "isbn": "978-0307474728",
        "published_year": 1967,
        "genre": "Realismo mágico",
        "pages": 417,
        "author_email": "gabo@example.com",
    },
    {
        "title": "El amor en los tiempos del cólera",
        "description": "Una historia de amor que trasciende el tiempo",
        "isbn": "978-0307387370",
        "published_year": 1985,
        "genre": "Romance",
        "pages": 368,
        "author_email": "gabo@example.com",
    },
    {
        "title": "La casa de los espíritus",
        "description": "Primera novela de Isabel Allende",
        "isbn": "978-1501117015",
        "published_year": 1982,
        "genre": "Ficción",
        "pages": 448,
        "author_email": "isabel@example.com",
    },
    {
        "title": "Ficciones",
        "description": "Colección de cuentos de Borges",
        "isbn": "978-0142437223",
        "published_year": 1944,
        "genre": "Cuento",
        "pages": 174,
        "author_email": "borges@example.com",
    },
    {
        "title": "Rayuela",
        "description": "Novela experimental de Cortázar",
        "isbn": "978-0394752846",
        "published_year": 1963,
        "genre": "Ficción experimental",
        "pages": 600,
        "author_email": "cortazar@example.com",
    },
]


@dataclass
class SeedReport:
    authors_created: list[str] = field(default_factory=list)
    authors_skipped: list[str] = field(default_factory=list)
    books_created: list[str] = field(default_factory=list)
    books_skipped: list[str] = field(default_factory=list)


def seed_catalog(db: Session) -> SeedReport:
    """
    Insert the sample catalog. Authors are matched by email and books by ISBN;
    records that already exist are left untouched, so reruns are harmless.
    """
    report = SeedReport()
    author_ids = {}

    for raw in SEED_AUTHORS:
        data = AuthorCreate.model_validate(raw)
        author = AuthorRepository.get_by_email(db, data.email)
        if author is None:
            author = AuthorRepository.create(db, data)
            report.authors_created.append(author.name)
        else:
            report.authors_skipped.append(author.name)
        author_ids[data.email] = author.id

    for raw in SEED_BOOKS:
        fields = dict(raw)
        fields["author_id"] = author_ids[fields.pop("author_email")]
        data = BookCreate.model_validate(fields)
        if data.isbn and BookRepository.get_by_isbn(db, data.isbn) is not None:
            report.books_skipped.append(data.title)
            continue
        BookRepository.create(db, data)
        report.books_created.append(data.title)

    logger.info(
        "Seed finished: %d authors and %d books created",
        len(report.authors_created),
        len(report.books_created),
    )
    return report
