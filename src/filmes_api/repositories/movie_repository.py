"""Persistence gateway for the ``filmes`` table."""

import logging
from typing import Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only
from sqlalchemy.sql.expression import Executable, Update

from filmes_api.exceptions import DeleteFailedError, MovieNotFoundError, StorageError
from filmes_api.models.movie import Movie
from filmes_api.schemas.movie import MovieCreate, MovieSummary, MovieUpdate

logger = logging.getLogger(__name__)

# Column order of the SET clause; also the order values are bound in.
UPDATABLE_FIELDS = (
    "title",
    "description",
    "release_year",
    "duration_minutes",
    "genre",
    "director",
    "rating",
)


def build_update_statement(movie_id: int, changes: dict[str, Any]) -> Update | None:
    """
    Build an UPDATE touching only the supplied fields.

    Assignments are collected as (attribute name, value) pairs in
    ``UPDATABLE_FIELDS`` order and rendered once, each value as a named bind
    parameter. ``updated_at`` is always refreshed.

    Args:
        movie_id: Primary key of the row to update
        changes: Attribute name to new value; unknown keys are ignored

    Returns:
        The statement, or None when there is nothing to change
    """
    assignments: list[tuple[str, Any]] = [
        (field, changes[field]) for field in UPDATABLE_FIELDS if field in changes
    ]
    if not assignments:
        return None

    assignments.append(("updated_at", func.now()))
    return (
        update(Movie)
        .where(Movie.id == movie_id)
        .values(**dict(assignments))
        .execution_options(synchronize_session=False)
    )


class MovieRepository:
    """
    Movie CRUD over a single async session.

    Update and delete read the row first so a missing id surfaces as
    ``MovieNotFoundError`` before any write is attempted.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _execute(self, statement: Executable, action: str) -> Result[Any]:
        try:
            return await self.db.execute(statement)
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"erro ao {action}: {e}") from e

    async def _commit(self, action: str) -> None:
        try:
            await self.db.commit()
        except (SQLAlchemyError, OSError) as e:
            raise StorageError(f"erro ao {action}: {e}") from e

    async def list_summaries(self) -> list[MovieSummary]:
        """All movies as summaries, ordered by id."""
        stmt = (
            select(Movie)
            .options(
                load_only(
                    Movie.id,
                    Movie.title,
                    Movie.release_year,
                    Movie.genre,
                    Movie.director,
                    Movie.rating,
                )
            )
            .order_by(Movie.id.asc())
        )
        result = await self._execute(stmt, "listar filmes")
        movies = result.scalars().all()
        return [MovieSummary.model_validate(movie) for movie in movies]

    async def count(self) -> int:
        stmt = select(func.count()).select_from(Movie)
        result = await self._execute(stmt, "contar filmes")
        return result.scalar_one()

    async def get_by_id(self, movie_id: int) -> Movie:
        """
        Load a movie by primary key.

        Raises:
            MovieNotFoundError: No row has this id
            StorageError: The query failed
        """
        stmt = (
            select(Movie)
            .where(Movie.id == movie_id)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt, "buscar filme")
        movie = result.scalar_one_or_none()
        if movie is None:
            raise MovieNotFoundError(movie_id)
        return movie

    async def create(self, payload: MovieCreate) -> Movie:
        """Insert a movie; the database assigns the id and both timestamps."""
        stmt = (
            insert(Movie)
            .values(
                title=payload.title,
                description=payload.description,
                release_year=payload.release_year,
                duration_minutes=payload.duration_minutes,
                genre=payload.genre,
                director=payload.director,
                rating=payload.rating,
            )
            .returning(Movie)
        )
        result = await self._execute(stmt, "criar filme")
        movie = result.scalar_one()
        await self._commit("criar filme")
        logger.debug(f"Inserted movie {movie.id}")
        return movie

    async def update(self, movie_id: int, payload: MovieUpdate) -> Movie:
        """
        Apply a partial update.

        An empty payload performs no write and returns the row as read.

        Raises:
            MovieNotFoundError: No row has this id
            StorageError: A query failed
        """
        existing = await self.get_by_id(movie_id)

        stmt = build_update_statement(movie_id, payload.changes())
        if stmt is None:
            return existing

        await self._execute(stmt, "atualizar filme")
        await self._commit("atualizar filme")
        return await self.get_by_id(movie_id)

    async def delete(self, movie_id: int) -> None:
        """
        Hard-delete a movie.

        Raises:
            MovieNotFoundError: No row has this id
            DeleteFailedError: The row vanished between the check and the delete
            StorageError: A query failed
        """
        await self.get_by_id(movie_id)

        stmt = (
            delete(Movie)
            .where(Movie.id == movie_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(stmt, "deletar filme")
        if result.rowcount == 0:
            raise DeleteFailedError(movie_id)
        await self._commit("deletar filme")
