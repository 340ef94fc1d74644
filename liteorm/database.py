"""
Database façade: schema synchronization and CRUD over one SQLite file.

Usage:
    from liteorm import Database, Options

    with Database("database/example.db") as db:
        db.tables(User, Book)
        db.insert(User(name="user1", age=18, vip=False))
        users = db.find(User, Options().where("age <= ? && vip = ?", 50, True))

Every statement is generated from record metadata, executed through the
connection handle, and (for reads) materialized back into records.
Mutations hold the handle's write lock; reads do not.
"""

from __future__ import annotations

import time
from typing import Any, Iterable, List, Optional, Type, TypeVar, Union

from liteorm.config import Settings, get_settings
from liteorm.domain import codec
from liteorm.domain.models import Model
from liteorm.infrastructure.connection import ConnectionHandle
from liteorm.schema.catalog import CatalogSnapshot, snapshot
from liteorm.schema.sync import SchemaChange, plan
from liteorm.sql import templates
from liteorm.sql.options import Options
from liteorm.utils.logging import get_logger

log = get_logger(__name__)

M = TypeVar("M", bound=Model)
Number = Union[int, float]


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def _ids_predicate(ids: Iterable[int]) -> Options:
    return Options().where("id in (?)", [int(i) for i in ids])


class Database:
    """
    Object-relational mapper bound to one SQLite database.

    Parameters
    ----------
    path : str | None
        Database file path (created with its parent directory if missing), or
        ":memory:". Defaults to `Settings.db_path`.
    settings : Settings | None
        Configuration; defaults to the cached environment settings.
    """

    def __init__(self, path: Optional[str] = None, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.path = path or self.settings.db_path
        self._handle = ConnectionHandle(
            self.path,
            check_same_thread=self.settings.check_same_thread,
            echo=self.settings.echo_sql,
        )

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    @property
    def handle(self) -> ConnectionHandle:
        return self._handle

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self) -> None:
        self._handle.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def version(self) -> str:
        rows = self._handle.query("select sqlite_version();")
        return rows[0][0] if rows else "unknown"

    # ------------------------------------------------------------------
    # schema
    # ------------------------------------------------------------------
    def catalog(self) -> CatalogSnapshot:
        return snapshot(self._handle)

    def tables(self, *models: Type[Model]) -> List[SchemaChange]:
        """
        Bring the schema in line with `models` and return the applied changes.

        The first failing statement aborts the rest of the plan.
        """
        with self._handle.mutation() as handle:
            changes = plan(snapshot(handle), models)
            for change in changes:
                handle.execute(change.statement)
                log.info(
                    f"[SCHEMA] {change.action.value} {change.table}.{change.target}",
                    extra={"action": change.action.value, "table": change.table},
                )
        if not changes:
            log.debug("Schema already up to date", extra={"models": [m.__name__ for m in models]})
        return changes

    def drop(self, *models: Type[Model]) -> None:
        with self._handle.mutation() as handle:
            for model in models:
                handle.execute(templates.drop(model))

    # ------------------------------------------------------------------
    # writes
    # ------------------------------------------------------------------
    def insert(self, record: Model) -> Model:
        """Insert a record, stamping timestamps and assigning its id."""
        with self._handle.mutation() as handle:
            record.created_at = now_ms()
            record.updated_at = record.created_at
            record.id = handle.execute_insert(templates.insert(record))
        return record

    def update(self, record: Model, predicate: Optional[str] = None, *args: Any) -> int:
        """
        Write every non-null attribute of `record`.

        Without a predicate the row with `record.id` is updated. Returns the
        number of rows changed.
        """
        if predicate is None:
            predicate, args = "id = ?", (record.id,)
        options = Options().where(predicate, *args)
        with self._handle.mutation() as handle:
            record.updated_at = now_ms()
            return handle.execute(templates.update(record, options))

    def delete(self, model: Type[Model], predicate: Optional[str] = None, *args: Any) -> int:
        """Delete matching rows; no predicate deletes every row."""
        return self._delete(model, Options().where(predicate, *args))

    def delete_by_ids(self, model: Type[Model], ids: Iterable[int]) -> int:
        return self._delete(model, _ids_predicate(ids))

    def delete_all(self, model: Type[Model]) -> int:
        return self._delete(model, None)

    def _delete(self, model: Type[Model], options: Optional[Options]) -> int:
        with self._handle.mutation() as handle:
            return handle.execute(templates.delete(model, options))

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------
    def find(self, model: Type[M], options: Optional[Options] = None) -> List[M]:
        rows = self._handle.query(templates.query(model, options))
        projection = None if options is None or options.selects_all else options.projection
        return [codec.materialize(model, row, projection) for row in rows]

    def find_all(self, model: Type[M]) -> List[M]:
        return self.find(model)

    def find_by_ids(self, model: Type[M], ids: Iterable[int]) -> List[M]:
        return self.find(model, _ids_predicate(ids))

    def find_one(self, model: Type[M], predicate: Optional[str], *args: Any) -> Optional[M]:
        records = self.find(model, Options().where(predicate, *args).limit(1))
        return records[0] if records else None

    def find_by_id(self, model: Type[M], record_id: int) -> Optional[M]:
        return self.find_one(model, "id = ?", int(record_id))

    def first(self, model: Type[M], predicate: Optional[str] = None, *args: Any) -> Optional[M]:
        options = Options().where(predicate, *args).order("id", Options.ASC).limit(1)
        records = self.find(model, options)
        return records[0] if records else None

    def last(self, model: Type[M], predicate: Optional[str] = None, *args: Any) -> Optional[M]:
        options = Options().where(predicate, *args).order("id", Options.DESC).limit(1)
        records = self.find(model, options)
        return records[0] if records else None

    # ------------------------------------------------------------------
    # aggregates
    # ------------------------------------------------------------------
    def _scalar(self, model: Type[Model], expression: str, predicate: Optional[str], args) -> Any:
        options = Options().select(expression).where(predicate, *args)
        rows = self._handle.query(templates.query(model, options))
        return rows[0][0] if rows else None

    def count(self, model: Type[Model], predicate: Optional[str] = None, *args: Any) -> int:
        value = self._scalar(model, "count(*)", predicate, args)
        return int(value) if value is not None else 0

    def average(
        self, model: Type[Model], column: str, predicate: Optional[str] = None, *args: Any
    ) -> float:
        value = self._scalar(model, f"avg({column})", predicate, args)
        return float(value) if value is not None else 0.0

    def sum(
        self, model: Type[Model], column: str, predicate: Optional[str] = None, *args: Any
    ) -> Number:
        value = self._scalar(model, f"sum({column})", predicate, args)
        return value if value is not None else 0

    def max(
        self, model: Type[Model], column: str, predicate: Optional[str] = None, *args: Any
    ) -> Number:
        value = self._scalar(model, f"max({column})", predicate, args)
        return value if value is not None else 0

    def min(
        self, model: Type[Model], column: str, predicate: Optional[str] = None, *args: Any
    ) -> Number:
        value = self._scalar(model, f"min({column})", predicate, args)
        return value if value is not None else 0


def connect(path: Optional[str] = None, settings: Optional[Settings] = None) -> Database:
    """Open a database; equivalent to `Database(path, settings)`."""
    return Database(path, settings)


__all__ = ["Database", "connect", "now_ms"]
