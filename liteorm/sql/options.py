"""
Query option set: projection, filter, grouping, ordering and paging.

An `Options` instance is built fresh for each call and read by the statement
templates. Predicates are templated textually: `?` placeholders are replaced
by literals and `&&`/`||` are accepted as `and`/`or`.

Example
-------
    Options().select("name", "age").where("age <= ? && vip = ?", 50, True)
    # where_predicate == "age <= 50 and vip = 1"
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from liteorm.domain.codec import literal
from liteorm.errors import MalformedOptionSet

PLACEHOLDER = "?"


def _normalize_operators(predicate: str) -> str:
    return predicate.replace("&&", "and").replace("||", "or")


def render_predicate(predicate: str, args: Tuple[Any, ...]) -> str:
    """
    Substitute positional placeholders with literal arguments.

    Every `?` counts as a placeholder, including one inside a quoted literal
    of the predicate text; pass such values as arguments instead
    (`where("name = ?", "who?")`).

    Raises
    ------
    MalformedOptionSet
        If the number of placeholders differs from the number of arguments.
    """
    parts = _normalize_operators(predicate).split(PLACEHOLDER)
    expected = len(parts) - 1
    if expected != len(args):
        raise MalformedOptionSet(
            f"predicate {predicate!r} has {expected} placeholder(s) but {len(args)} argument(s)"
        )
    rendered = [parts[0]]
    for arg, tail in zip(args, parts[1:]):
        rendered.append(literal(arg))
        rendered.append(tail)
    return "".join(rendered)


class Options:
    """Fluent builder for select/where/group/order/limit/offset clauses."""

    ASC = "asc"
    DESC = "desc"

    def __init__(self) -> None:
        self.projection: Optional[Tuple[str, ...]] = None
        self.select_columns: Optional[str] = None
        self.where_predicate: Optional[str] = None
        self.group_columns: Optional[str] = None
        self.order_columns: Optional[str] = None
        self.limit_size: Optional[int] = None
        self.offset_size: Optional[int] = None

    def select(self, *columns: str) -> "Options":
        """Project onto `columns`; `select("a, b")` and `select("a", "b")` are equivalent."""
        names = tuple(
            part.strip() for column in columns for part in column.split(",") if part.strip()
        )
        if not names:
            raise MalformedOptionSet("select() needs at least one column")
        self.projection = names
        self.select_columns = ", ".join(names)
        return self

    def where(self, predicate: Optional[str], *args: Any) -> "Options":
        if predicate is None:
            self.where_predicate = None
        else:
            self.where_predicate = render_predicate(predicate, args)
        return self

    def group(self, columns: str) -> "Options":
        self.group_columns = columns
        return self

    def order(self, columns: str, direction: Optional[str] = None) -> "Options":
        if direction is None:
            self.order_columns = columns
            return self
        if direction.lower() not in (self.ASC, self.DESC):
            raise MalformedOptionSet(f"order direction must be 'asc' or 'desc', got {direction!r}")
        self.order_columns = f"{columns} {direction.lower()}"
        return self

    def limit(self, size: int) -> "Options":
        if size < 0:
            raise MalformedOptionSet(f"limit must be >= 0, got {size}")
        self.limit_size = int(size)
        return self

    def offset(self, size: int) -> "Options":
        if size < 0:
            raise MalformedOptionSet(f"offset must be >= 0, got {size}")
        self.offset_size = int(size)
        return self

    @property
    def selects_all(self) -> bool:
        return self.projection is None or "*" in self.projection

    def __repr__(self) -> str:
        fields = (
            ("select", self.select_columns),
            ("where", self.where_predicate),
            ("group", self.group_columns),
            ("order", self.order_columns),
            ("limit", self.limit_size),
            ("offset", self.offset_size),
        )
        inner = ", ".join(f"{name}={value!r}" for name, value in fields if value is not None)
        return f"Options({inner})"


__all__ = ["Options", "render_predicate"]
