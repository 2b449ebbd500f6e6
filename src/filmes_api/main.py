"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from filmes_api import __version__
from filmes_api.api.errors import register_exception_handlers
from filmes_api.api.routes import health, movies
from filmes_api.config import settings
from filmes_api.database import check_connection, create_engine, create_session_factory
from filmes_api.middleware import RequestLoggingMiddleware, setup_logging

logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("GET", "/", "Informações da API"),
    ("GET", "/health", "Status do sistema"),
    ("GET", "/movies", "Listar todos os filmes"),
    ("POST", "/movies", "Criar novo filme"),
    ("GET", "/movies/{id}", "Buscar filme por ID"),
    ("PUT", "/movies/{id}", "Atualizar filme"),
    ("DELETE", "/movies/{id}", "Deletar filme"),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: open the connection pool and make sure the database answers
    setup_logging(settings.log_level)
    engine = create_engine(settings)
    logger.info(f"Connecting to database {settings.db_name} at {settings.db_host}:{settings.db_port}")
    try:
        await check_connection(engine)
    except Exception:
        await engine.dispose()
        raise
    app.state.session_factory = create_session_factory(engine)

    yield

    # Shutdown: release pooled connections
    await engine.dispose()
    logger.info("Database connection closed")


# Create FastAPI app
app = FastAPI(
    title="API de Filmes",
    description="CRUD API for a movie catalogue",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

# Include routers
app.include_router(health.router)
app.include_router(movies.router, tags=["movies"])


def run() -> None:
    """Start the API under uvicorn using the configured host and port."""
    setup_logging(settings.log_level)
    logger.info(f"Starting server on http://{settings.api_host}:{settings.api_port}")
    for method, path, description in ENDPOINTS:
        logger.info(f"  {method:<6} {path:<14} {description}")
    uvicorn.run(
        "filmes_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
