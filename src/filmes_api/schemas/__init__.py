"""Pydantic schemas for API requests and responses."""

from filmes_api.schemas.common import ErrorResponse, HealthResponse, MessageResponse
from filmes_api.schemas.movie import (
    MovieCreate,
    MovieListResponse,
    MovieMessageResponse,
    MovieResponse,
    MovieSummary,
    MovieUpdate,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
    "MovieCreate",
    "MovieListResponse",
    "MovieMessageResponse",
    "MovieResponse",
    "MovieSummary",
    "MovieUpdate",
]
