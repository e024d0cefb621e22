from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from pitchside.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class UnsupportedDialectError(RuntimeError):
    def __init__(self, dialect: str) -> None:
        super().__init__(f"ON CONFLICT upserts are not supported on dialect={dialect!r}")
        self.dialect = dialect


class BaseRepository(Generic[ModelT]):
    def __init__(self, session: Session, model: type[ModelT]) -> None:
        self.session = session
        self.model = model

    def add(self, obj: ModelT, *, flush: bool = True) -> ModelT:
        self.session.add(obj)
        if flush:
            self.session.flush()
        return obj

    def get(self, id_: Any) -> ModelT | None:
        return self.session.get(self.model, id_)

    def list_where(self, *predicates: ColumnElement[bool]) -> list[ModelT]:
        stmt = select(self.model).where(*predicates)
        return list(self.session.execute(stmt).scalars().all())

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.model)
        return int(self.session.execute(stmt).scalar_one())

    def upsert_insert(self) -> postgresql.Insert | sqlite.Insert:
        """Dialect-specific INSERT supporting ``ON CONFLICT`` clauses."""

        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(self.model)
        if dialect == "sqlite":
            return sqlite.insert(self.model)
        raise UnsupportedDialectError(dialect)

    def upsert_rows(
        self,
        rows: Iterable[Mapping[str, Any]],
        *,
        key: str,
        update_columns: Sequence[str],
    ) -> None:
        """Single ``INSERT ... ON CONFLICT (key) DO UPDATE`` over ``rows``.

        Rows repeating a key are collapsed to the last one before the statement
        is built; PostgreSQL refuses to update the same row twice in one command.
        """

        by_key: dict[Any, Mapping[str, Any]] = {}
        for row in rows:
            by_key[row[key]] = row
        if not by_key:
            return

        stmt = self.upsert_insert().values([dict(r) for r in by_key.values()])
        set_: dict[str, Any] = {col: stmt.excluded[col] for col in update_columns}
        set_["updated_at"] = func.now()
        self.session.execute(stmt.on_conflict_do_update(index_elements=[key], set_=set_))
