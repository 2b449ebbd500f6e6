"""Unit tests for the MovieRepository persistence gateway."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from filmes_api.exceptions import DeleteFailedError, MovieNotFoundError, StorageError
from filmes_api.models.movie import Movie
from filmes_api.repositories.movie_repository import MovieRepository, build_update_statement
from filmes_api.schemas import MovieCreate, MovieUpdate

CREATED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_movie(id: int = 1, title: str = "Dune", **fields: object) -> Movie:
    fields.setdefault("release_year", 2021)
    fields.setdefault("created_at", CREATED_AT)
    fields.setdefault("updated_at", CREATED_AT)
    return Movie(id=id, title=title, **fields)


def make_execute_result(
    *,
    scalar_one_or_none: object = None,
    scalar_one: object = None,
    scalars_all: list | None = None,
    rowcount: int = 1,
) -> MagicMock:
    """Build a mock object that mimics an SQLAlchemy execute result."""
    r = MagicMock()
    r.scalar_one_or_none.return_value = scalar_one_or_none
    r.scalar_one.return_value = scalar_one
    r.scalars.return_value.all.return_value = scalars_all if scalars_all is not None else []
    r.rowcount = rowcount
    return r


def make_db(*results: MagicMock) -> AsyncMock:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=list(results))
    db.commit = AsyncMock()
    return db


def compile_sql(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


def executed_sql(db: AsyncMock, call_index: int) -> str:
    return compile_sql(db.execute.await_args_list[call_index].args[0])


# ---------------------------------------------------------------------------
# build_update_statement
# ---------------------------------------------------------------------------


class TestBuildUpdateStatement:
    def test_no_changes_builds_nothing(self) -> None:
        assert build_update_statement(1, {}) is None

    def test_unknown_fields_are_ignored(self) -> None:
        assert build_update_statement(1, {"id": 5, "created_at": CREATED_AT}) is None

    def test_single_field_sets_column_and_timestamp(self) -> None:
        sql = compile_sql(build_update_statement(7, {"title": "X"}))

        assert sql.startswith("UPDATE filmes SET ")
        assert "titulo=" in sql
        assert "data_atualizacao=now()" in sql
        for untouched in ("descricao", "ano_lancamento", "duracao_minutos", "genero", "diretor", "avaliacao"):
            assert untouched not in sql
        assert "WHERE filmes.id = " in sql

    def test_values_are_bound_not_inlined(self) -> None:
        compiled = build_update_statement(7, {"title": "X'; DROP TABLE filmes; --", "rating": 9.5}).compile(
            dialect=postgresql.dialect()
        )

        assert "DROP TABLE" not in str(compiled)
        params = list(compiled.params.values())
        assert "X'; DROP TABLE filmes; --" in params
        assert 9.5 in params
        assert 7 in params

    def test_columns_follow_fixed_order(self) -> None:
        sql = compile_sql(build_update_statement(1, {"rating": 9.0, "genre": "Drama", "title": "X"}))

        assert sql.index("titulo") < sql.index("genero") < sql.index("avaliacao")

    def test_every_field_can_be_updated(self) -> None:
        changes = {
            "title": "X",
            "description": "d",
            "release_year": 2000,
            "duration_minutes": 90,
            "genre": "Drama",
            "director": "Y",
            "rating": 5.0,
        }
        sql = compile_sql(build_update_statement(1, changes))

        for column in ("titulo", "descricao", "ano_lancamento", "duracao_minutos", "genero", "diretor", "avaliacao"):
            assert f"{column}=" in sql


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------


async def test_get_by_id_returns_movie() -> None:
    movie = make_movie(id=3)
    db = make_db(make_execute_result(scalar_one_or_none=movie))

    assert await MovieRepository(db).get_by_id(3) is movie
    assert "WHERE filmes.id = " in executed_sql(db, 0)


async def test_get_by_id_missing_raises_not_found() -> None:
    db = make_db(make_execute_result(scalar_one_or_none=None))

    with pytest.raises(MovieNotFoundError) as exc_info:
        await MovieRepository(db).get_by_id(999999)

    assert exc_info.value.movie_id == 999999
    assert "999999" in exc_info.value.message


async def test_database_errors_are_wrapped() -> None:
    db = AsyncMock()
    cause = OperationalError("SELECT 1", {}, Exception("connection refused"))
    db.execute = AsyncMock(side_effect=cause)

    with pytest.raises(StorageError) as exc_info:
        await MovieRepository(db).get_by_id(1)

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.message.startswith("erro ao buscar filme")
    assert exc_info.value.public_message == "Erro interno do servidor"


async def test_unreachable_database_is_wrapped() -> None:
    db = AsyncMock()
    cause = ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 5432)")
    db.execute = AsyncMock(side_effect=cause)

    with pytest.raises(StorageError) as exc_info:
        await MovieRepository(db).get_by_id(1)

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.status_code == 500


async def test_connection_lost_on_commit_is_wrapped() -> None:
    db = AsyncMock()
    db.execute = AsyncMock(return_value=make_execute_result(scalar_one=make_movie(id=4)))
    db.commit = AsyncMock(side_effect=ConnectionResetError("connection reset by peer"))

    with pytest.raises(StorageError):
        await MovieRepository(db).create(MovieCreate(title="Dune", release_year=2021))


async def test_list_summaries_orders_by_id() -> None:
    movies = [make_movie(id=1, title="Dune"), make_movie(id=2, title="Central do Brasil", genre="Drama")]
    db = make_db(make_execute_result(scalars_all=movies))

    summaries = await MovieRepository(db).list_summaries()

    assert [s.id for s in summaries] == [1, 2]
    assert summaries[0].genre == ""
    assert summaries[1].genre == "Drama"
    assert "ORDER BY filmes.id ASC" in executed_sql(db, 0)


async def test_list_summaries_empty() -> None:
    db = make_db(make_execute_result(scalars_all=[]))

    assert await MovieRepository(db).list_summaries() == []


async def test_count() -> None:
    db = make_db(make_execute_result(scalar_one=4))

    assert await MovieRepository(db).count() == 4
    assert "count(*)" in executed_sql(db, 0)


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


async def test_create_inserts_and_returns_row() -> None:
    stored = make_movie(id=10, title="Dune")
    db = make_db(make_execute_result(scalar_one=stored))
    payload = MovieCreate(title="Dune", release_year=2021)

    movie = await MovieRepository(db).create(payload)

    assert movie is stored
    db.commit.assert_awaited_once()
    sql = executed_sql(db, 0)
    assert sql.startswith("INSERT INTO filmes")
    assert "RETURNING" in sql


async def test_create_stores_absent_optionals_as_null() -> None:
    db = make_db(make_execute_result(scalar_one=make_movie()))
    payload = MovieCreate(title="Dune", release_year=2021)

    await MovieRepository(db).create(payload)

    compiled = db.execute.await_args.args[0].compile(dialect=postgresql.dialect())
    params = compiled.params
    assert "Dune" in params.values()
    assert 2021 in params.values()
    assert sum(value is None for value in params.values()) == 5


async def test_create_failure_does_not_commit() -> None:
    db = AsyncMock()
    db.execute = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down")))

    with pytest.raises(StorageError):
        await MovieRepository(db).create(MovieCreate(title="Dune", release_year=2021))

    db.commit.assert_not_awaited()


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------


async def test_update_with_empty_payload_does_not_write() -> None:
    existing = make_movie(id=1)
    db = make_db(make_execute_result(scalar_one_or_none=existing))

    movie = await MovieRepository(db).update(1, MovieUpdate())

    assert movie is existing
    assert db.execute.await_count == 1
    db.commit.assert_not_awaited()


async def test_update_title_only_touches_title_and_timestamp() -> None:
    existing = make_movie(id=1, title="Dune")
    updated = make_movie(id=1, title="X")
    db = make_db(
        make_execute_result(scalar_one_or_none=existing),
        make_execute_result(),
        make_execute_result(scalar_one_or_none=updated),
    )

    movie = await MovieRepository(db).update(1, MovieUpdate(title="X"))

    assert movie is updated
    sql = executed_sql(db, 1)
    assert sql.startswith("UPDATE filmes SET ")
    assert "titulo=" in sql
    assert "data_atualizacao=now()" in sql
    assert "descricao" not in sql
    assert "avaliacao" not in sql
    db.commit.assert_awaited_once()


async def test_update_ignores_explicit_nulls() -> None:
    existing = make_movie(id=1)
    db = make_db(make_execute_result(scalar_one_or_none=existing))
    payload = MovieUpdate.model_validate({"descricao": None, "avaliacao": None})

    assert await MovieRepository(db).update(1, payload) is existing
    assert db.execute.await_count == 1


async def test_update_missing_movie_raises_before_writing() -> None:
    db = make_db(make_execute_result(scalar_one_or_none=None))

    with pytest.raises(MovieNotFoundError):
        await MovieRepository(db).update(5, MovieUpdate(title="X"))

    assert db.execute.await_count == 1
    db.commit.assert_not_awaited()


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


async def test_delete_removes_row() -> None:
    db = make_db(
        make_execute_result(scalar_one_or_none=make_movie(id=2)),
        make_execute_result(rowcount=1),
    )

    await MovieRepository(db).delete(2)

    assert executed_sql(db, 1).startswith("DELETE FROM filmes WHERE filmes.id = ")
    db.commit.assert_awaited_once()


async def test_delete_missing_movie_raises_not_found() -> None:
    db = make_db(make_execute_result(scalar_one_or_none=None))

    with pytest.raises(MovieNotFoundError):
        await MovieRepository(db).delete(2)

    assert db.execute.await_count == 1


async def test_delete_with_no_affected_rows_raises() -> None:
    db = make_db(
        make_execute_result(scalar_one_or_none=make_movie(id=2)),
        make_execute_result(rowcount=0),
    )

    with pytest.raises(DeleteFailedError):
        await MovieRepository(db).delete(2)

    db.commit.assert_not_awaited()


async def test_get_after_delete_raises_not_found() -> None:
    db = make_db(
        make_execute_result(scalar_one_or_none=make_movie(id=2)),
        make_execute_result(rowcount=1),
        make_execute_result(scalar_one_or_none=None),
    )
    repository = MovieRepository(db)

    await repository.delete(2)
    with pytest.raises(MovieNotFoundError):
        await repository.get_by_id(2)
