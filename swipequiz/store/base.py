"""
Game Store - Interface for the data source behind a session.

A GameStore:
- Creates a new game (deck, title, left/right meaning)
- Persists the final result of a session

Both calls are asynchronous. How decks are built and how results
are stored is up to the implementation.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.state import Game, GameResult


class StoreError(Exception):
    """Raised by a store when a game cannot be created or a result stored."""


class GameStore(ABC):
    """
    Abstract base class for game stores.

    Implementations return coroutines. A store that works on worker
    threads may return a concurrent.futures.Future instead; the session
    controller hands its completion back to the owning event loop.
    """

    @abstractmethod
    async def create_new_game(self) -> Game:
        """
        Create a new game.

        Returns:
            The Game to play

        Raises:
            StoreError: if no game can be produced
        """
        pass

    @abstractmethod
    async def store_result(self, result: GameResult) -> None:
        """
        Persist the result of a finished session.

        Raises:
            StoreError: if the result could not be stored
        """
        pass
