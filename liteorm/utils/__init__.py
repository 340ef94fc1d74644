"""
Utilities package for liteorm.

Exports shared helpers for logging and other cross-cutting concerns.
Keep this package lightweight and free of mapping logic.
"""

from liteorm.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
