"""
Store Module - Data source collaborators for quiz sessions.

The store is the only place games come from and results go to.
The in-memory store is a reference implementation; nothing here
defines a persistence format.
"""

from .base import GameStore, StoreError
from .catalogue import (
    CatalogueError,
    DEFAULT_CATALOGUE,
    default_games,
    load_catalogue,
    parse_catalogue,
)
from .memory import InMemoryGameStore

__all__ = [
    "GameStore",
    "StoreError",
    "CatalogueError",
    "DEFAULT_CATALOGUE",
    "default_games",
    "load_catalogue",
    "parse_catalogue",
    "InMemoryGameStore",
]
