"""Movie model for the ``filmes`` table."""

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from filmes_api.models.base import Base, TimestampMixin


class Movie(Base, TimestampMixin):
    """
    Movie model.

    Attribute names are English; column names match the existing ``filmes``
    schema and the JSON keys used on the wire.
    """

    __tablename__ = "filmes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column("titulo", String(255), nullable=False)
    description: Mapped[str | None] = mapped_column("descricao", Text, nullable=True)
    release_year: Mapped[int] = mapped_column("ano_lancamento", Integer, nullable=False)
    duration_minutes: Mapped[int | None] = mapped_column("duracao_minutos", Integer, nullable=True)
    genre: Mapped[str | None] = mapped_column("genero", String(100), nullable=True)
    director: Mapped[str | None] = mapped_column("diretor", String(255), nullable=True)
    rating: Mapped[float | None] = mapped_column("avaliacao", Float, nullable=True)

    def __repr__(self) -> str:
        return f"<Movie(id={self.id}, title={self.title!r}, release_year={self.release_year})>"
