"""
Schema synchronization: diff declared record types against the catalog.

`plan` is a pure function from a `CatalogSnapshot` and an ordered set of
record types to the DDL that brings the database in line with them:

1. a missing table is created;
2. an existing table gains any declared column it lacks (existing column
   types are never altered);
3. every index marker reuses an existing index on the same column or gets a
   new one;
4. created indexes anywhere in the catalog that no marker still wants are
   dropped.

Applying the same type set twice therefore yields an empty plan the second
time.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Type

from liteorm.domain.descriptor import describe
from liteorm.domain.models import Model
from liteorm.schema.catalog import CatalogSnapshot
from liteorm.sql import templates


class ChangeAction(str, enum.Enum):
    CREATE_TABLE = "create_table"
    ADD_COLUMN = "add_column"
    CREATE_INDEX = "create_index"
    DROP_INDEX = "drop_index"


@dataclass(frozen=True)
class SchemaChange:
    """One DDL statement of a synchronization plan."""

    action: ChangeAction
    table: str
    target: str
    statement: str


def plan(catalog: CatalogSnapshot, models: Iterable[Type[Model]]) -> List[SchemaChange]:
    changes: List[SchemaChange] = []
    wanted_indexes: Set[str] = set()
    seen: Set[Type[Model]] = set()

    for model in models:
        if model in seen:
            continue
        seen.add(model)
        descriptor = describe(model)
        table = descriptor.table

        if not catalog.has_table(table):
            changes.append(
                SchemaChange(ChangeAction.CREATE_TABLE, table, table, templates.create(model))
            )
        else:
            existing = catalog.columns(table)
            for column, sql_type in descriptor.columns_with_type():
                if column not in existing:
                    changes.append(
                        SchemaChange(
                            ChangeAction.ADD_COLUMN,
                            table,
                            column,
                            templates.add_column(table, column, sql_type),
                        )
                    )

        for column in descriptor.indexed:
            current = catalog.find_index(table, column)
            if current is not None:
                wanted_indexes.add(current)
            else:
                changes.append(
                    SchemaChange(
                        ChangeAction.CREATE_INDEX,
                        table,
                        templates.index_name(table, column),
                        templates.create_index(model, column),
                    )
                )

    stale: Dict[str, str] = {
        name: info.table
        for name, info in catalog.indexes.items()
        if name not in wanted_indexes
    }
    for name in sorted(stale):
        changes.append(
            SchemaChange(ChangeAction.DROP_INDEX, stale[name], name, templates.drop_index(name))
        )
    return changes


__all__ = ["ChangeAction", "SchemaChange", "plan"]
