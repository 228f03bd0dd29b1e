from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from catalog.core.config import settings
from catalog.core.middleware_correlation import CorrelationIdMiddleware
from catalog.core.logging import get_logger, setup_logging
from catalog.core.errors import register_exception_handlers
from catalog.db.session import init_db


# Routers
from fastapi import APIRouter
from catalog.api.routes.authors import router as authors_router
from catalog.api.routes.books import router as books_router
from catalog.api.routes.stats import router as stats_router


setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        init_db()
        get_logger(__name__).info("Catalog tables ready")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Library Catalog API - manage authors and books, search the catalog and view author statistics.",
    version="1.0.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# CORS middleware - allow the catalog UI to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Middlewares
app.add_middleware(CorrelationIdMiddleware)

# Root endpoint
@app.get("/")
async def root():
    """API root endpoint with basic information."""
    return {
        "message": "Welcome to Library Catalog API",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "api_prefix": settings.API_PREFIX,
        "endpoints": {
            "authors": f"{settings.API_PREFIX}/authors",
            "books": f"{settings.API_PREFIX}/books",
            "book_search": f"{settings.API_PREFIX}/books/search",
            "stats": f"{settings.API_PREFIX}/stats",
        },
    }

register_exception_handlers(app)

# Mount routers
api = APIRouter(prefix=settings.API_PREFIX)
api.include_router(authors_router)
api.include_router(books_router)
api.include_router(stats_router)
app.include_router(api)
