"""
Domain package for liteorm.

Record base class, column markers, type descriptors and the value codec that
moves attribute values in and out of SQL. Keep this package free of I/O.
"""

from liteorm.domain.descriptor import Attribute, Column, ColumnKind, TypeDescriptor, describe
from liteorm.domain.models import Model

__all__ = [
    "Attribute",
    "Column",
    "ColumnKind",
    "Model",
    "TypeDescriptor",
    "describe",
]
