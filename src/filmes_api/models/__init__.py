"""SQLAlchemy ORM models."""

from filmes_api.models.base import Base
from filmes_api.models.movie import Movie

__all__ = ["Base", "Movie"]
