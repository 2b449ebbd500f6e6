"""Data access layer."""

from filmes_api.repositories.movie_repository import MovieRepository, build_update_statement

__all__ = ["MovieRepository", "build_update_statement"]
