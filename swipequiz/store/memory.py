"""
In-memory store - Reference GameStore backed by a catalogue.

Picks a game at random from the catalogue and shuffles its deck.
Results are kept in memory for the lifetime of the store.
"""

from __future__ import annotations
import asyncio
import logging
import random
from dataclasses import replace

from ..engine_core.state import Game, GameResult
from .base import GameStore, StoreError
from .catalogue import default_games

logger = logging.getLogger(__name__)


class InMemoryGameStore(GameStore):
    """
    GameStore that never touches disk.

    Args:
        games: Games to choose from (built-in catalogue if None)
        seed: Random seed for reproducible decks
        latency: Simulated delay in seconds for each call
        shuffle: Shuffle the deck of each new game
    """

    def __init__(
        self,
        games: list[Game] | None = None,
        seed: int | None = None,
        latency: float = 0.0,
        shuffle: bool = True,
    ):
        self.games = list(games) if games is not None else default_games()
        self.latency = latency
        self.shuffle = shuffle
        self.results: list[GameResult] = []
        self._rng = random.Random(seed)

    @property
    def last_result(self) -> GameResult | None:
        return self.results[-1] if self.results else None

    async def create_new_game(self) -> Game:
        if self.latency:
            await asyncio.sleep(self.latency)

        if not self.games:
            raise StoreError("Catalogue is empty")

        game = self._rng.choice(self.games)
        if self.shuffle:
            cards = list(game.cards)
            self._rng.shuffle(cards)
            game = replace(game, cards=tuple(cards))

        logger.debug("Created game '%s' (%d cards)", game.title, game.deck_size)
        return game

    async def store_result(self, result: GameResult) -> None:
        if self.latency:
            await asyncio.sleep(self.latency)

        self.results.append(result)
        logger.debug(
            "Stored result for '%s': %d/%d",
            result.title, result.earned_points, result.total_points,
        )
