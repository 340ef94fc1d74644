"""
SQL package for liteorm.

Query option builder and the statement templates that turn record metadata
into SQL text. Nothing here touches a connection.
"""

from liteorm.sql import templates
from liteorm.sql.options import Options, render_predicate

__all__ = [
    "Options",
    "render_predicate",
    "templates",
]
