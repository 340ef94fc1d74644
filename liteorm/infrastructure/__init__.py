"""
Infrastructure package for liteorm.

Centralizes SQLite connectivity: opening the database file, the shared
connection handle, and its mutation lock. Keep this layer focused on I/O and
resource management, decoupled from SQL generation.
"""

from liteorm.infrastructure.connection import MEMORY_PATH, ConnectionHandle, open_connection

__all__ = [
    "ConnectionHandle",
    "MEMORY_PATH",
    "open_connection",
]
