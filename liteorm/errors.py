"""
Exception taxonomy for liteorm.

Every failure surfaced by the mapper derives from `LiteOrmError` so callers can
catch the whole family at once. Nothing in this package retries; errors abort
the current operation and propagate.
"""

from __future__ import annotations

from typing import Any, Optional


class LiteOrmError(Exception):
    """Base exception for liteorm errors."""


class UnsupportedAttributeType(LiteOrmError):
    """Raised when a declared attribute type has no SQL mapping."""

    def __init__(self, model: str, attribute: str, annotation: Any) -> None:
        self.model = model
        self.attribute = attribute
        self.annotation = annotation
        super().__init__(
            f"{model}.{attribute}: unsupported attribute type {annotation!r} "
            "(expected int, float, str, bool or a json=True column)"
        )


class CatalogIntrospectionFailure(LiteOrmError):
    """Raised when table, column or index metadata cannot be read."""


class StatementExecutionFailure(LiteOrmError):
    """Raised when SQLite rejects or fails a generated statement."""

    def __init__(self, statement: str, reason: Optional[str] = None) -> None:
        self.statement = statement
        self.reason = reason
        message = f"statement failed: {statement}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedOptionSet(LiteOrmError):
    """Raised when an Options builder is given inconsistent input."""


class EmptyRecordError(LiteOrmError):
    """Raised when a record has nothing to write."""


class DatabaseClosedError(LiteOrmError):
    """Raised when an operation is attempted on a closed database."""


__all__ = [
    "LiteOrmError",
    "UnsupportedAttributeType",
    "CatalogIntrospectionFailure",
    "StatementExecutionFailure",
    "MalformedOptionSet",
    "EmptyRecordError",
    "DatabaseClosedError",
]
