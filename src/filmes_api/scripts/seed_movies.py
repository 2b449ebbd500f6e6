"""Seed script: create the ``filmes`` table if needed and add sample movies."""

import asyncio

from sqlalchemy import select

from filmes_api.config import settings
from filmes_api.database import create_engine, create_session_factory
from filmes_api.models import Base, Movie
from filmes_api.repositories import MovieRepository
from filmes_api.schemas import MovieCreate
from filmes_api.validation import validate_for_create

SAMPLE_MOVIES = [
    {
        "titulo": "Cidade de Deus",
        "descricao": "Dois jovens seguem caminhos diferentes numa favela do Rio de Janeiro.",
        "ano_lancamento": 2002,
        "duracao_minutos": 130,
        "genero": "Drama",
        "diretor": "Fernando Meirelles",
        "avaliacao": 8.6,
    },
    {
        "titulo": "Central do Brasil",
        "ano_lancamento": 1998,
        "duracao_minutos": 113,
        "genero": "Drama",
        "diretor": "Walter Salles",
        "avaliacao": 8.0,
    },
    {
        "titulo": "Dune",
        "ano_lancamento": 2021,
        "genero": "Ficção científica",
        "diretor": "Denis Villeneuve",
    },
]


async def seed_movies() -> None:
    """Create the table and insert sample movies whose titles are not present yet."""
    engine = create_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            repository = MovieRepository(session)
            for movie_data in SAMPLE_MOVIES:
                payload = MovieCreate.model_validate(movie_data)

                errors = validate_for_create(payload)
                if errors:
                    print(f"Skipping {payload.title!r}: {', '.join(errors)}")
                    continue

                # Check if movie already exists
                query = select(Movie.id).where(Movie.title == payload.title)
                result = await session.execute(query)
                if result.scalar_one_or_none() is not None:
                    print(f"Movie {payload.title!r} already exists, skipping")
                    continue

                movie = await repository.create(payload)
                print(f"Added movie: {movie.title} (id={movie.id})")

        print("Movie seeding complete")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_movies())
