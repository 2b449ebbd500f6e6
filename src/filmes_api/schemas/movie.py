"""Pydantic schemas for movie data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MovieCreate(BaseModel):
    """
    Payload for creating a movie.

    ``titulo`` and ``ano_lancamento`` default to empty values instead of being
    required so a missing field is reported by validation rather than as a
    malformed body.
    """

    model_config = ConfigDict(populate_by_name=True, strict=True)

    title: str = Field("", alias="titulo")
    description: str | None = Field(None, alias="descricao")
    release_year: int = Field(0, alias="ano_lancamento")
    duration_minutes: int | None = Field(None, alias="duracao_minutos")
    genre: str | None = Field(None, alias="genero")
    director: str | None = Field(None, alias="diretor")
    rating: float | None = Field(None, alias="avaliacao")


class MovieUpdate(BaseModel):
    """Partial update payload; only supplied, non-null fields are applied."""

    model_config = ConfigDict(populate_by_name=True, strict=True)

    title: str | None = Field(None, alias="titulo")
    description: str | None = Field(None, alias="descricao")
    release_year: int | None = Field(None, alias="ano_lancamento")
    duration_minutes: int | None = Field(None, alias="duracao_minutos")
    genre: str | None = Field(None, alias="genero")
    director: str | None = Field(None, alias="diretor")
    rating: float | None = Field(None, alias="avaliacao")

    def changes(self) -> dict[str, object]:
        """Fields present in the payload, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class MovieSummary(BaseModel):
    """Reduced projection used by listings."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str = Field(alias="titulo")
    release_year: int = Field(alias="ano_lancamento")
    genre: str = Field("", alias="genero")
    director: str = Field("", alias="diretor")
    rating: float | None = Field(None, alias="avaliacao")

    @field_validator("genre", "director", mode="before")
    @classmethod
    def _blank_if_missing(cls, value: str | None) -> str:
        return "" if value is None else value


class MovieResponse(BaseModel):
    """Movie response schema."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    title: str = Field(alias="titulo")
    description: str = Field("", alias="descricao")
    release_year: int = Field(alias="ano_lancamento")
    duration_minutes: int | None = Field(None, alias="duracao_minutos")
    genre: str = Field("", alias="genero")
    director: str = Field("", alias="diretor")
    rating: float | None = Field(None, alias="avaliacao")
    created_at: datetime = Field(alias="data_criacao")
    updated_at: datetime = Field(alias="data_atualizacao")

    @field_validator("description", "genre", "director", mode="before")
    @classmethod
    def _blank_if_missing(cls, value: str | None) -> str:
        return "" if value is None else value


class MovieListResponse(BaseModel):
    movies: list[MovieSummary]
    total: int


class MovieMessageResponse(BaseModel):
    """Confirmation message with the affected movie."""

    message: str
    data: MovieResponse
