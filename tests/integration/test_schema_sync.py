"""
Integration tests for schema synchronization against a real SQLite file.

Record types are redefined inside tests to simulate a declaration changing
between two runs of an application; each definition maps to the same table
because the table name comes from the class name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Dict, Optional

import pytest

from liteorm import (
    CatalogIntrospectionFailure,
    ChangeAction,
    Column,
    Database,
    DatabaseClosedError,
    Model,
    Settings,
    StatementExecutionFailure,
)
from liteorm.schema import catalog as catalog_module
from sample_models import Book, User


@pytest.fixture
def empty_db(test_settings: Settings):
    database = Database(settings=test_settings)
    try:
        yield database
    finally:
        database.close()


def _actions(changes):
    return [(change.action, change.target) for change in changes]


class TestSnapshot:
    def test_snapshot_reads_tables_columns_and_indexes(self, db: Database):
        catalog = db.catalog()

        assert set(catalog.tables) == {"user", "book"}
        assert catalog.columns("book") == {
            "id": "integer",
            "created_at": "integer",
            "updated_at": "integer",
            "name": "text",
            "author": "text",
            "price": "real",
        }
        assert catalog.find_index("user", "uid") == "user_uid_index"
        assert list(catalog.indexes) == ["user_uid_index"]

    def test_snapshot_skips_internal_tables_and_autoindexes(self, empty_db: Database):
        empty_db.handle.execute(
            "create table tagged (id integer primary key autoincrement, tag text unique);"
        )

        catalog = empty_db.catalog()

        assert set(catalog.tables) == {"tagged"}
        assert catalog.indexes == {}

    def test_snapshot_on_closed_database_fails(self, empty_db: Database):
        empty_db.close()
        with pytest.raises(DatabaseClosedError):
            empty_db.catalog()

    def test_query_failure_becomes_introspection_failure(self, empty_db: Database, monkeypatch):
        def broken_query(statement):
            raise StatementExecutionFailure(statement, "disk I/O error")

        monkeypatch.setattr(empty_db.handle, "query", broken_query)
        with pytest.raises(CatalogIntrospectionFailure, match="disk I/O error"):
            catalog_module.snapshot(empty_db.handle)


class TestSynchronization:
    def test_first_sync_creates_tables_and_indexes(self, empty_db: Database):
        changes = empty_db.tables(User, Book)

        assert _actions(changes) == [
            (ChangeAction.CREATE_TABLE, "user"),
            (ChangeAction.CREATE_INDEX, "user_uid_index"),
            (ChangeAction.CREATE_TABLE, "book"),
        ]

    def test_sync_is_idempotent(self, empty_db: Database):
        empty_db.tables(User, Book)

        assert empty_db.tables(User, Book) == []

    def test_additive_migration_adds_only_missing_column(self, empty_db: Database):
        class Note(Model):
            title: Optional[str] = None

        empty_db.tables(Note)
        empty_db.insert(Note(title="kept"))

        class Note(Model):  # noqa: F811 - the declaration gains a column
            title: Optional[str] = None
            pinned: Optional[bool] = None

        changes = empty_db.tables(Note)

        assert _actions(changes) == [(ChangeAction.ADD_COLUMN, "pinned")]
        assert changes[0].statement == "alter table note add column pinned blob;"
        rows = empty_db.find_all(Note)
        assert [(n.title, n.pinned) for n in rows] == [("kept", None)]

    def test_index_marker_moves_between_attributes(self, empty_db: Database):
        class Track(Model):
            artist: Annotated[Optional[str], Column(index=True)] = None
            album: Optional[str] = None

        class Other(Model):
            code: Annotated[Optional[str], Column(index=True)] = None

        empty_db.tables(Track, Other)

        class Track(Model):  # noqa: F811 - index moves from artist to album
            artist: Optional[str] = None
            album: Annotated[Optional[str], Column(index=True)] = None

        changes = empty_db.tables(Track, Other)

        assert _actions(changes) == [
            (ChangeAction.CREATE_INDEX, "track_album_index"),
            (ChangeAction.DROP_INDEX, "track_artist_index"),
        ]
        catalog = empty_db.catalog()
        assert catalog.find_index("track", "album") == "track_album_index"
        assert catalog.find_index("track", "artist") is None
        assert catalog.find_index("other", "code") == "other_code_index"

    def test_index_of_type_left_out_of_sync_is_dropped(self, empty_db: Database):
        class Gadget(Model):
            serial: Annotated[Optional[str], Column(index=True)] = None

        empty_db.tables(Gadget, User)

        changes = empty_db.tables(User)

        assert _actions(changes) == [(ChangeAction.DROP_INDEX, "gadget_serial_index")]
        catalog = empty_db.catalog()
        assert catalog.find_index("gadget", "serial") is None
        assert catalog.find_index("user", "uid") == "user_uid_index"
        assert "gadget" in catalog.tables

    def test_json_column_added_later_reads_declared_default(self, empty_db: Database):
        class Prefs(Model):
            theme: Optional[str] = None

        empty_db.tables(Prefs)
        empty_db.insert(Prefs(theme="dark"))

        class Prefs(Model):  # noqa: F811 - the declaration gains a JSON column
            theme: Optional[str] = None
            flags: Annotated[Dict[str, bool], Column(json=True)] = {}

        empty_db.tables(Prefs)

        assert empty_db.find_one(Prefs, "theme = ?", "dark").flags == {}

    def test_failed_statement_aborts_remaining_plan(self, empty_db: Database, monkeypatch):
        from liteorm.schema import sync as sync_module

        original = sync_module.templates.create

        def failing_create(model):
            if model is User:
                return "create table user oops;"
            return original(model)

        monkeypatch.setattr(sync_module.templates, "create", failing_create)

        with pytest.raises(StatementExecutionFailure) as excinfo:
            empty_db.tables(Book, User)

        assert "oops" in excinfo.value.statement
        tables = empty_db.catalog().tables
        assert "book" in tables
        assert "user" not in tables

    def test_drop_removes_tables(self, db: Database):
        db.drop(Book)

        assert "book" not in db.catalog().tables
        assert db.tables(User, Book)[0].action is ChangeAction.CREATE_TABLE

    def test_sync_survives_reopen(self, test_settings: Settings, db_path: Path):
        with Database(settings=test_settings) as first:
            first.tables(User, Book)
            first.insert(User(name="persisted"))

        with Database(str(db_path)) as second:
            assert second.tables(User, Book) == []
            assert second.find_one(User, "name = ?", "persisted") is not None
