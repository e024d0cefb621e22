from __future__ import annotations

import pytest
import sqlalchemy as sa
from sqlalchemy.orm import Session

import pitchside.db.models  # noqa: F401
from pitchside.db import DatabaseConfig, create_db_engine
from pitchside.db.base import Base
from pitchside.db.models.core.player import Player
from pitchside.db.repos.base import UnsupportedDialectError
from pitchside.db.repos.core.player_repo import PlayerRepository
from pitchside.ingestion.payloads import PLAYER_UPDATABLE_COLUMNS, PlayerPayload


def _make_session() -> Session:
    engine = create_db_engine(DatabaseConfig(database_url="sqlite+pysqlite:///:memory:"))
    Base.metadata.create_all(engine)
    return Session(engine)


def test_identity_column_is_never_updated_on_conflict() -> None:
    assert "id" not in PLAYER_UPDATABLE_COLUMNS
    assert "is_popular" not in PLAYER_UPDATABLE_COLUMNS
    assert {"name", "age", "number", "position", "photo"} <= set(PLAYER_UPDATABLE_COLUMNS)


def test_bulk_upsert_empty_list_is_noop() -> None:
    session = _make_session()
    repo = PlayerRepository(session)

    assert repo.bulk_upsert([]) == 0
    assert repo.count() == 0


def test_bulk_upsert_is_idempotent_and_last_write_wins() -> None:
    session = _make_session()
    repo = PlayerRepository(session)

    first = [
        PlayerPayload(id=100, name="Player One", age=20, position="Goalkeeper"),
        PlayerPayload(id=101, name="Player Two", age=21),
    ]
    assert repo.bulk_upsert(first) == 2
    session.commit()

    assert repo.bulk_upsert(first) == 2
    session.commit()
    assert repo.count() == 2

    second = [PlayerPayload(id=100, name="Player One Renamed", age=None, number=1)]
    repo.bulk_upsert(second)
    session.commit()

    row = repo.get(100)
    assert row is not None
    assert row.id == 100
    assert row.name == "Player One Renamed"
    assert row.age is None
    assert row.number == 1
    assert row.position is None
    assert repo.count() == 2


def test_bulk_upsert_preserves_local_popularity_flag() -> None:
    session = _make_session()
    repo = PlayerRepository(session)

    repo.bulk_upsert([PlayerPayload(id=1, name="A")])
    session.commit()
    session.execute(sa.update(Player).where(Player.id == 1).values(is_popular=True))
    session.commit()

    repo.bulk_upsert([PlayerPayload(id=1, name="A2")])
    session.commit()

    row = repo.get(1)
    assert row is not None
    assert row.is_popular is True
    assert row.name == "A2"


def test_bulk_upsert_repeated_id_in_one_call_keeps_last() -> None:
    session = _make_session()
    repo = PlayerRepository(session)

    submitted = repo.bulk_upsert(
        [
            PlayerPayload(id=7, name="First", age=20),
            PlayerPayload(id=8, name="Other"),
            PlayerPayload(id=7, name="Second", age=None),
        ]
    )
    session.commit()

    assert submitted == 3
    assert repo.count() == 2
    row = repo.get(7)
    assert row is not None
    assert (row.name, row.age) == ("Second", None)


def test_upsert_on_unsupported_dialect_names_the_dialect() -> None:
    class _Dialect:
        name = "mysql"

    class _Bind:
        dialect = _Dialect()

    class _Session:
        def get_bind(self) -> _Bind:
            return _Bind()

    repo = PlayerRepository(_Session())  # type: ignore[arg-type]

    with pytest.raises(UnsupportedDialectError, match="mysql") as exc_info:
        repo.upsert_insert()
    assert not isinstance(exc_info.value, NotImplementedError)
