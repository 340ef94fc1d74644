"""
Type descriptors: the persisted shape of a record type.

A descriptor is computed once per `Model` subclass from its pydantic field
declarations and cached. It lists the persisted attributes in declaration
order (ancestor fields first), each mapped to one of a closed set of column
kinds, plus the attributes that carry an index marker.

Per-attribute markers are attached with `typing.Annotated`:

    class User(Model):
        uid: Annotated[Optional[int], Column(index=True)] = None
        labels: Annotated[Optional[List[str]], Column(json=True)] = None
        scratch: Annotated[Optional[str], Column(ignore=True)] = None
"""

from __future__ import annotations

import enum
import types
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic.fields import FieldInfo

from liteorm.errors import UnsupportedAttributeType

if TYPE_CHECKING:
    from liteorm.domain.models import Model


@dataclass(frozen=True)
class Column:
    """
    Declarative column markers.

    Attributes
    ----------
    index : bool
        A single-column index should exist on this attribute.
    ignore : bool
        The attribute is never persisted.
    json : bool
        The value is stored as JSON text instead of by its declared type.
    """

    index: bool = False
    ignore: bool = False
    json: bool = False


class ColumnKind(enum.Enum):
    """Supported attribute kinds and the SQLite type each one maps to."""

    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"
    BOOLEAN = "blob"
    JSON = "json"

    @property
    def sql_type(self) -> str:
        return "text" if self is ColumnKind.JSON else self.value

    @property
    def zero(self) -> Any:
        return _ZERO_VALUES[self]


_ZERO_VALUES = {
    ColumnKind.INTEGER: 0,
    ColumnKind.REAL: 0.0,
    ColumnKind.TEXT: "",
    ColumnKind.BOOLEAN: False,
    ColumnKind.JSON: None,
}

# bool must be checked before int.
_SCALAR_KINDS: Tuple[Tuple[type, ColumnKind], ...] = (
    (bool, ColumnKind.BOOLEAN),
    (int, ColumnKind.INTEGER),
    (float, ColumnKind.REAL),
    (str, ColumnKind.TEXT),
)


@dataclass(frozen=True)
class Attribute:
    """One persisted attribute of a record type."""

    name: str
    annotation: Any
    kind: ColumnKind
    index: bool = False
    nullable: bool = False
    field_info: Optional[FieldInfo] = field(default=None, compare=False, repr=False)

    @property
    def sql_type(self) -> str:
        return self.kind.sql_type

    @property
    def json(self) -> bool:
        return self.kind is ColumnKind.JSON

    def blank(self) -> Any:
        """Value held by an attribute that was not read from the database."""
        if self.field_info is not None and not self.field_info.is_required():
            return self.field_info.get_default(call_default_factory=True)
        if self.nullable:
            return None
        return self.kind.zero


@dataclass(frozen=True)
class TypeDescriptor:
    """Ordered persisted attributes of one record type."""

    model: Type["Model"]
    table: str
    attributes: Tuple[Attribute, ...]
    indexed: Tuple[str, ...]

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    @property
    def names(self) -> List[str]:
        return [attr.name for attr in self.attributes]

    def columns_with_type(self) -> List[Tuple[str, str]]:
        return [(attr.name, attr.sql_type) for attr in self.attributes]

    def attribute(self, name: str) -> Optional[Attribute]:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


def table_name(model: type) -> str:
    """Persisted table name of a record type."""
    return model.__name__.lower()


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1 and len(args) < len(get_args(annotation)):
            return args[0], True
    return annotation, False


def _column_marker(info: FieldInfo) -> Column:
    for item in info.metadata:
        if isinstance(item, Column):
            return item
    return Column()


def _resolve_kind(model: type, name: str, annotation: Any, marker: Column) -> ColumnKind:
    if marker.json:
        return ColumnKind.JSON
    for python_type, kind in _SCALAR_KINDS:
        if annotation is python_type:
            return kind
    raise UnsupportedAttributeType(model.__name__, name, annotation)


@lru_cache(maxsize=None)
def describe(model: Type["Model"]) -> TypeDescriptor:
    """
    Build (once) the descriptor of a record type.

    Raises
    ------
    UnsupportedAttributeType
        If an attribute's declared type maps to no column kind.
    """
    attributes: List[Attribute] = []
    for name, info in model.model_fields.items():
        marker = _column_marker(info)
        if marker.ignore:
            continue
        annotation, nullable = _unwrap_optional(info.annotation)
        kind = _resolve_kind(model, name, annotation, marker)
        attributes.append(
            Attribute(
                name=name,
                # JSON columns decode into the full declared shape, Optional included.
                annotation=info.annotation if kind is ColumnKind.JSON else annotation,
                kind=kind,
                index=marker.index,
                nullable=nullable,
                field_info=info,
            )
        )
    return TypeDescriptor(
        model=model,
        table=table_name(model),
        attributes=tuple(attributes),
        indexed=tuple(attr.name for attr in attributes if attr.index),
    )


__all__ = ["Column", "ColumnKind", "Attribute", "TypeDescriptor", "describe", "table_name"]
