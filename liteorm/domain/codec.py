"""
Value codec: record attributes to SQL literals and result cells back to values.

Literals are rendered inline into statement text. Text literals have embedded
single quotes doubled, which is SQLite's own escape; predicate text supplied
by callers is still inserted verbatim and must not carry untrusted input.
"""

from __future__ import annotations

import sqlite3
from functools import lru_cache
from typing import Any, Collection, Dict, Optional, Type, TypeVar

from pydantic import TypeAdapter

from liteorm.domain.descriptor import Attribute, ColumnKind, describe
from liteorm.domain.models import Model

M = TypeVar("M", bound=Model)

NULL = "null"


def quote(text: str) -> str:
    """Single-quote a text literal."""
    return "'" + text.replace("'", "''") + "'"


def literal(value: Any) -> str:
    """
    Render an arbitrary Python value as an SQL literal.

    Strings are quoted, booleans become 1/0, None becomes null, and lists,
    tuples and sets expand to comma-separated literals for `in (?)` clauses.
    """
    if value is None:
        return NULL
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ", ".join(literal(item) for item in value)
    return str(value)


@lru_cache(maxsize=None)
def _adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def encode(record: Model, attribute: Attribute) -> str:
    """Literal for one attribute of a live record."""
    value = getattr(record, attribute.name)
    if value is None:
        return NULL
    if attribute.kind is ColumnKind.JSON:
        return quote(_adapter(attribute.annotation).dump_json(value).decode("utf-8"))
    if attribute.kind is ColumnKind.TEXT:
        return quote(str(value))
    if attribute.kind is ColumnKind.BOOLEAN:
        return "1" if value else "0"
    if attribute.kind is ColumnKind.REAL:
        return repr(float(value))
    return str(int(value))


def decode(row: sqlite3.Row, attribute: Attribute) -> Any:
    """Read and coerce the cell of `attribute` from a result row."""
    cell = row[attribute.name]
    if cell is None:
        return None if attribute.nullable else attribute.blank()
    kind = attribute.kind
    if kind is ColumnKind.JSON:
        if isinstance(cell, bytes):
            cell = cell.decode("utf-8")
        return _adapter(attribute.annotation).validate_json(cell)
    if kind is ColumnKind.INTEGER:
        return int(cell)
    if kind is ColumnKind.REAL:
        return float(cell)
    if kind is ColumnKind.BOOLEAN:
        if isinstance(cell, bytes):
            return cell not in (b"", b"0", b"\x00")
        return bool(int(cell)) if isinstance(cell, (int, float)) else cell not in ("", "0")
    if isinstance(cell, bytes):
        return cell.decode("utf-8")
    return str(cell)


def materialize(
    model: Type[M],
    row: sqlite3.Row,
    projection: Optional[Collection[str]] = None,
) -> M:
    """
    Build a record from a result row.

    With a projection only the named attributes are decoded; every other
    attribute keeps its default (or its kind's zero value), so the record is
    always complete.
    """
    wanted = set(projection) if projection else None
    values: Dict[str, Any] = {}
    for attribute in describe(model):
        if wanted is not None and attribute.name not in wanted:
            values[attribute.name] = attribute.blank()
        else:
            values[attribute.name] = decode(row, attribute)
    # Ignored attributes without a default would otherwise be left unset.
    for name, info in model.model_fields.items():
        if name not in values and info.is_required():
            values[name] = None
    return model.model_construct(**values)


__all__ = ["NULL", "quote", "literal", "encode", "decode", "materialize"]
