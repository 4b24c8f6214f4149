# src/bloom/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from typing import Protocol


class KeyValueBackend(Protocol):
    """
    String-keyed store for a single opaque serialized value per key.

    Implementations: SQLite table, one JSON file per key, in-memory dict (tests).
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...
