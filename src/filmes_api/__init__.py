"""Filmes API: CRUD service for a movie catalogue."""

__version__ = "2.0.0"
