"""Field rules for movie payloads.

Both functions return a list of human-readable violations; an empty list means
the payload is valid. They never raise.
"""

from datetime import date

from filmes_api.schemas.movie import MovieCreate, MovieUpdate

FIRST_FILM_YEAR = 1888  # Roundhay Garden Scene
MAX_YEARS_AHEAD = 5
TITLE_MAX_LENGTH = 255
GENRE_MAX_LENGTH = 100
DIRECTOR_MAX_LENGTH = 255
RATING_MIN = 0.0
RATING_MAX = 10.0


def _check_year(year: int, errors: list[str]) -> None:
    latest = date.today().year + MAX_YEARS_AHEAD
    if year < FIRST_FILM_YEAR:
        errors.append(f"ano de lançamento deve ser maior que {FIRST_FILM_YEAR - 1}")
    elif year > latest:
        errors.append(f"ano de lançamento não pode ser maior que {latest}")


def _check_optional_fields(
    duration_minutes: int | None,
    genre: str | None,
    director: str | None,
    rating: float | None,
    errors: list[str],
) -> None:
    if duration_minutes is not None and duration_minutes <= 0:
        errors.append("duração deve ser maior que 0 minutos")

    if genre is not None and len(genre) > GENRE_MAX_LENGTH:
        errors.append(f"gênero deve ter no máximo {GENRE_MAX_LENGTH} caracteres")

    if director is not None and len(director) > DIRECTOR_MAX_LENGTH:
        errors.append(f"nome do diretor deve ter no máximo {DIRECTOR_MAX_LENGTH} caracteres")

    if rating is not None and not RATING_MIN <= rating <= RATING_MAX:
        errors.append("avaliação deve estar entre 0 e 10")


def validate_for_create(payload: MovieCreate) -> list[str]:
    """
    Validate a creation payload.

    Args:
        payload: Decoded request body

    Returns:
        Violation messages in field order
    """
    errors: list[str] = []

    if not payload.title.strip():
        errors.append("título é obrigatório")
    elif len(payload.title) > TITLE_MAX_LENGTH:
        errors.append(f"título deve ter no máximo {TITLE_MAX_LENGTH} caracteres")

    _check_year(payload.release_year, errors)
    _check_optional_fields(
        payload.duration_minutes,
        payload.genre,
        payload.director,
        payload.rating,
        errors,
    )
    return errors


def validate_for_update(payload: MovieUpdate) -> list[str]:
    """Validate a partial update; only the fields present are checked."""
    errors: list[str] = []

    if payload.title is not None:
        if not payload.title.strip():
            errors.append("título não pode estar vazio")
        elif len(payload.title) > TITLE_MAX_LENGTH:
            errors.append(f"título deve ter no máximo {TITLE_MAX_LENGTH} caracteres")

    if payload.release_year is not None:
        _check_year(payload.release_year, errors)

    _check_optional_fields(
        payload.duration_minutes,
        payload.genre,
        payload.director,
        payload.rating,
        errors,
    )
    return errors
