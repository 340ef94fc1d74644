"""
Catalog introspection: what the live database currently contains.

A `CatalogSnapshot` is read once per synchronization call and only used to
compute the schema diff. Internal `sqlite_*` tables and automatic indexes
(primary key / unique constraints) are left out; only indexes created with
`create index` take part in index reconciliation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol, Sequence, Tuple

from liteorm.domain.codec import quote
from liteorm.errors import CatalogIntrospectionFailure, StatementExecutionFailure
from liteorm.sql import templates
from liteorm.sql.options import Options
from liteorm.utils.logging import get_logger

log = get_logger(__name__)

MASTER_TABLE = "sqlite_master"
CREATED_INDEX_ORIGIN = "c"


class RowSource(Protocol):
    """Anything that can run a query and hand back name-addressable rows."""

    def query(self, statement: str) -> Sequence: ...


@dataclass(frozen=True)
class IndexInfo:
    name: str
    table: str
    columns: Tuple[str, ...]

    @property
    def column(self) -> Optional[str]:
        """Target column of a single-column index, else None."""
        return self.columns[0] if len(self.columns) == 1 else None


@dataclass
class CatalogSnapshot:
    """Tables (column -> lower-cased type) and explicitly created indexes."""

    tables: Dict[str, Dict[str, str]] = field(default_factory=dict)
    indexes: Dict[str, IndexInfo] = field(default_factory=dict)

    def has_table(self, table: str) -> bool:
        return table in self.tables

    def columns(self, table: str) -> Dict[str, str]:
        return self.tables.get(table, {})

    def find_index(self, table: str, column: str) -> Optional[str]:
        """Name of an existing single-column index on `table.column`."""
        for info in self.indexes.values():
            if info.table == table and info.column == column:
                return info.name
        return None


def _read_columns(source: RowSource, table: str) -> Dict[str, str]:
    rows = source.query(f"pragma table_info({quote(table)});")
    return {row["name"]: (row["type"] or "").lower() for row in rows}


def _read_indexes(source: RowSource, table: str) -> Dict[str, IndexInfo]:
    indexes: Dict[str, IndexInfo] = {}
    for row in source.query(f"pragma index_list({quote(table)});"):
        if row["origin"] != CREATED_INDEX_ORIGIN:
            continue
        name = row["name"]
        info_rows = sorted(
            source.query(f"pragma index_info({quote(name)});"), key=lambda r: r["seqno"]
        )
        indexes[name] = IndexInfo(
            name=name,
            table=table,
            columns=tuple(r["name"] for r in info_rows if r["name"] is not None),
        )
    return indexes


def snapshot(source: RowSource) -> CatalogSnapshot:
    """
    Read every table, its columns and its created indexes.

    Raises
    ------
    CatalogIntrospectionFailure
        If any catalog query fails.
    """
    statement = templates.query(MASTER_TABLE, Options().where("type = ?", "table"))
    catalog = CatalogSnapshot()
    try:
        for row in source.query(statement):
            table = row["name"]
            if table.startswith("sqlite_"):
                continue
            catalog.tables[table] = _read_columns(source, table)
            catalog.indexes.update(_read_indexes(source, table))
    except StatementExecutionFailure as exc:
        raise CatalogIntrospectionFailure(f"cannot read catalog: {exc.reason}") from exc
    log.debug(
        "Catalog snapshot",
        extra={"tables": len(catalog.tables), "indexes": len(catalog.indexes)},
    )
    return catalog


__all__ = ["CatalogSnapshot", "IndexInfo", "RowSource", "snapshot"]
