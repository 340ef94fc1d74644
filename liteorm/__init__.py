"""
liteorm - a lightweight object mapper for embedded SQLite databases.

Declare record types as pydantic models, and the mapper keeps the database
schema in line with them and builds every statement from their metadata:

- Schema synchronization (create table, add column, index diffing)
- Statement templates for insert/update/delete/select
- A fluent option set for projection, filtering, ordering and paging
- Typed re-hydration of rows, including JSON-encoded attributes

Text literals are rendered inline into statements rather than bound as
parameters; keep untrusted input out of predicate text.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "Apache-2.0"

# Public API exports
from liteorm.config import Settings, get_settings
from liteorm.database import Database, connect
from liteorm.domain.descriptor import Column, ColumnKind, TypeDescriptor, describe
from liteorm.domain.models import Model
from liteorm.errors import (
    CatalogIntrospectionFailure,
    DatabaseClosedError,
    EmptyRecordError,
    LiteOrmError,
    MalformedOptionSet,
    StatementExecutionFailure,
    UnsupportedAttributeType,
)
from liteorm.schema import CatalogSnapshot, ChangeAction, SchemaChange
from liteorm.sql.options import Options
from liteorm.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Mapping
    "Database",
    "connect",
    "Model",
    "Column",
    "ColumnKind",
    "TypeDescriptor",
    "describe",
    "Options",
    # Schema
    "CatalogSnapshot",
    "ChangeAction",
    "SchemaChange",
    # Errors
    "LiteOrmError",
    "UnsupportedAttributeType",
    "CatalogIntrospectionFailure",
    "StatementExecutionFailure",
    "MalformedOptionSet",
    "EmptyRecordError",
    "DatabaseClosedError",
    # Logging
    "configure_logging",
    "get_logger",
]
