"""Movies API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from filmes_api.database import get_db
from filmes_api.exceptions import StorageError, ValidationError
from filmes_api.repositories.movie_repository import MovieRepository
from filmes_api.schemas import (
    ErrorResponse,
    MessageResponse,
    MovieCreate,
    MovieListResponse,
    MovieMessageResponse,
    MovieResponse,
    MovieUpdate,
)
from filmes_api.validation import validate_for_create, validate_for_update

logger = logging.getLogger(__name__)
router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Movie not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid id or payload"}}

# Primary keys are PostgreSQL integers; larger ids are rejected as malformed
MAX_MOVIE_ID = 2**31 - 1
MovieId = Annotated[int, Path(le=MAX_MOVIE_ID)]


def get_movie_repository(db: AsyncSession = Depends(get_db)) -> MovieRepository:
    return MovieRepository(db)


@router.get("/movies", response_model=MovieListResponse)
async def list_movies(
    repository: MovieRepository = Depends(get_movie_repository),
) -> MovieListResponse:
    """
    List every movie as a summary.

    Returns:
        Summaries ordered by id plus the total row count
    """
    logger.info("Listing movies")
    movies = await repository.list_summaries()

    try:
        total = await repository.count()
    except StorageError as e:
        logger.warning(f"Counting movies failed, using page length instead: {e.message}")
        total = len(movies)

    logger.info(f"Listed {len(movies)} movies")
    return MovieListResponse(movies=movies, total=total)


@router.post(
    "/movies",
    response_model=MovieMessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
async def create_movie(
    payload: MovieCreate,
    repository: MovieRepository = Depends(get_movie_repository),
) -> MovieMessageResponse:
    """Validate and store a new movie."""
    logger.info("Creating movie")

    errors = validate_for_create(payload)
    if errors:
        raise ValidationError(errors)

    movie = await repository.create(payload)
    logger.info(f"Created movie {movie.title!r} (id={movie.id})")
    return MovieMessageResponse(
        message="Filme criado com sucesso",
        data=MovieResponse.model_validate(movie),
    )


@router.get(
    "/movies/{movie_id}",
    response_model=MovieResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def get_movie(
    movie_id: MovieId,
    repository: MovieRepository = Depends(get_movie_repository),
) -> MovieResponse:
    logger.info(f"Fetching movie {movie_id}")
    movie = await repository.get_by_id(movie_id)
    logger.info(f"Found movie {movie.title!r}")
    return MovieResponse.model_validate(movie)


@router.put(
    "/movies/{movie_id}",
    response_model=MovieMessageResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def update_movie(
    movie_id: MovieId,
    payload: MovieUpdate,
    repository: MovieRepository = Depends(get_movie_repository),
) -> MovieMessageResponse:
    """
    Partially update a movie.

    Only the fields present in the body change; an empty body is a no-op.
    """
    logger.info(f"Updating movie {movie_id}")

    errors = validate_for_update(payload)
    if errors:
        raise ValidationError(errors)

    movie = await repository.update(movie_id, payload)
    logger.info(f"Updated movie {movie.title!r}")
    return MovieMessageResponse(
        message="Filme atualizado com sucesso",
        data=MovieResponse.model_validate(movie),
    )


@router.delete(
    "/movies/{movie_id}",
    response_model=MessageResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def delete_movie(
    movie_id: MovieId,
    repository: MovieRepository = Depends(get_movie_repository),
) -> MessageResponse:
    logger.info(f"Deleting movie {movie_id}")
    await repository.delete(movie_id)
    logger.info(f"Deleted movie {movie_id}")
    return MessageResponse(message="Filme deletado com sucesso")
