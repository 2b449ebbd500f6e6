"""Shared test fixtures."""

from collections.abc import Iterator
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI

from filmes_api.api.errors import register_exception_handlers
from filmes_api.api.routes import health, movies
from filmes_api.repositories.movie_repository import MovieRepository


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the database lifespan, for API tests."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health.router)
    app.include_router(movies.router)
    return app


@pytest.fixture
def repository() -> AsyncMock:
    return AsyncMock(spec=MovieRepository)


@pytest.fixture
def movies_app(test_app: FastAPI, repository: AsyncMock) -> Iterator[FastAPI]:
    """``test_app`` with the movie repository replaced by ``repository``."""
    test_app.dependency_overrides[movies.get_movie_repository] = lambda: repository
    try:
        yield test_app
    finally:
        test_app.dependency_overrides.clear()
