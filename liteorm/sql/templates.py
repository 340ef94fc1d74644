"""
SQL statement templates.

Pure functions from record metadata (and an optional `Options`) to one
complete statement string terminated by `;`. Clause order is fixed:
select, from, where, group by, order by, limit, offset.
"""

from __future__ import annotations

from typing import List, Optional, Type, Union

from liteorm.domain.codec import NULL, encode
from liteorm.domain.descriptor import describe, table_name
from liteorm.domain.models import Model
from liteorm.errors import EmptyRecordError
from liteorm.sql.options import Options

PRIMARY_KEY = "id"


def _statement(*clauses: Optional[str]) -> str:
    return " ".join(clause for clause in clauses if clause) + ";"


def _where(options: Optional[Options]) -> Optional[str]:
    if options is None or options.where_predicate is None:
        return None
    return f"where {options.where_predicate}"


def index_name(table: str, column: str) -> str:
    """Name of the index the mapper keeps on `table.column`."""
    return f"{table}_{column}_index"


def create(model: Type[Model]) -> str:
    descriptor = describe(model)
    columns = [f"{PRIMARY_KEY} integer primary key"]
    columns.extend(
        f"{name} {sql_type}"
        for name, sql_type in descriptor.columns_with_type()
        if name != PRIMARY_KEY
    )
    return _statement(f"create table {descriptor.table} ({', '.join(columns)})")


def add_column(table: str, column: str, sql_type: str) -> str:
    return _statement(f"alter table {table} add column {column} {sql_type}")


def create_index(model: Type[Model], column: str) -> str:
    table = table_name(model)
    return _statement(f"create index {index_name(table, column)} on {table} ({column})")


def drop_index(name: str) -> str:
    return _statement(f"drop index {name}")


def drop(model: Type[Model]) -> str:
    return _statement(f"drop table {table_name(model)}")


def insert(record: Model) -> str:
    descriptor = describe(type(record))
    columns: List[str] = []
    values: List[str] = []
    for attribute in descriptor:
        if attribute.name == PRIMARY_KEY:
            continue
        columns.append(attribute.name)
        values.append(encode(record, attribute))
    if not columns:
        raise EmptyRecordError(f"{type(record).__name__} has no persistable attributes")
    return _statement(
        f"insert into {descriptor.table} ({', '.join(columns)}) values ({', '.join(values)})"
    )


def update(record: Model, options: Optional[Options] = None) -> str:
    descriptor = describe(type(record))
    assignments = []
    for attribute in descriptor:
        if attribute.name == PRIMARY_KEY:
            continue
        value = encode(record, attribute)
        if value != NULL:
            assignments.append(f"{attribute.name} = {value}")
    if not assignments:
        raise EmptyRecordError(f"{type(record).__name__} has no non-null attributes to update")
    return _statement(f"update {descriptor.table} set {', '.join(assignments)}", _where(options))


def delete(model: Type[Model], options: Optional[Options] = None) -> str:
    return _statement(f"delete from {table_name(model)}", _where(options))


def query(source: Union[str, Type[Model]], options: Optional[Options] = None) -> str:
    table = source if isinstance(source, str) else table_name(source)
    if options is None:
        return _statement(f"select * from {table}")
    limit = options.limit_size
    if limit is None and options.offset_size is not None:
        # SQLite only accepts offset after a limit; -1 means unbounded.
        limit = -1
    return _statement(
        f"select {options.select_columns or '*'}",
        f"from {table}",
        _where(options),
        f"group by {options.group_columns}" if options.group_columns is not None else None,
        f"order by {options.order_columns}" if options.order_columns is not None else None,
        f"limit {limit}" if limit is not None else None,
        f"offset {options.offset_size}" if options.offset_size is not None else None,
    )


__all__ = [
    "PRIMARY_KEY",
    "index_name",
    "create",
    "add_column",
    "create_index",
    "drop_index",
    "drop",
    "insert",
    "update",
    "delete",
    "query",
]
