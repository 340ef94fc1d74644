"""
Base class for persisted records.

Subclass `Model` to declare a record type; every subclass maps to one table
named after the lower-cased class name. The mapper owns `id`, `created_at` and
`updated_at`; callers only set the remaining attributes.
"""
from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from liteorm.domain.descriptor import describe

M = TypeVar("M", bound="Model")

MANAGED_ATTRIBUTES = frozenset({"id", "created_at", "updated_at"})


class Model(BaseModel):
    """
    Persisted record base.

    Descriptors are built when a subclass is defined, so an attribute with an
    unsupported type fails at class-definition time rather than at first use.
    """

    id: int = Field(0, description="Autoincrement primary key; 0 until inserted.")
    created_at: Optional[int] = Field(None, description="Insert time, epoch milliseconds.")
    updated_at: Optional[int] = Field(None, description="Last update time, epoch milliseconds.")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=False,
    )

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        describe(cls)

    def set(self: M, **values: Any) -> M:
        """Assign caller-owned attributes and return the same record."""
        managed = MANAGED_ATTRIBUTES.intersection(values)
        if managed:
            raise ValueError(f"attributes managed by the mapper: {', '.join(sorted(managed))}")
        for name, value in values.items():
            if name not in type(self).model_fields:
                raise AttributeError(f"{type(self).__name__} has no attribute {name!r}")
            setattr(self, name, value)
        return self

    def to_json(self) -> str:
        return self.model_dump_json()


__all__ = ["Model", "MANAGED_ATTRIBUTES"]
