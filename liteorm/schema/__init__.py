"""
Schema package for liteorm.

Catalog introspection and the create/alter/index diff that keeps the live
database in line with declared record types.
"""

from liteorm.schema.catalog import CatalogSnapshot, IndexInfo, snapshot
from liteorm.schema.sync import ChangeAction, SchemaChange, plan

__all__ = [
    "CatalogSnapshot",
    "ChangeAction",
    "IndexInfo",
    "SchemaChange",
    "plan",
    "snapshot",
]
