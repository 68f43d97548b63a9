"""
Pytest fixtures for swipequiz tests.
"""

import asyncio

import pytest

from ..engine_core.state import Card, Game, GameResult, Show
from ..session.navigation import RecordingNavigator
from ..store.base import GameStore, StoreError


SHOW_A = Show(id="show_a", title="Target A")
SHOW_B = Show(id="show_b", title="Target B")


class ScriptedStore(GameStore):
    """
    Store double whose calls can be held open and made to fail.

    Set hold_create/hold_store to keep a call in flight until the
    matching release_*() is called.
    """

    def __init__(
        self,
        game: Game | None = None,
        create_error: Exception | None = None,
        store_error: Exception | None = None,
        hold_create: bool = False,
        hold_store: bool = False,
    ):
        self.game = game
        self.create_error = create_error
        self.store_error = store_error
        self.hold_create = hold_create
        self.hold_store = hold_store
        self.create_calls = 0
        self.stored: list[GameResult] = []
        self._create_gate: asyncio.Event | None = None
        self._store_gate: asyncio.Event | None = None

    async def create_new_game(self) -> Game:
        self.create_calls += 1
        if self.hold_create:
            self._create_gate = asyncio.Event()
            await self._create_gate.wait()
        if self.create_error:
            raise self.create_error
        return self.game

    async def store_result(self, result: GameResult) -> None:
        if self.hold_store:
            self._store_gate = asyncio.Event()
            await self._store_gate.wait()
        if self.store_error:
            raise self.store_error
        self.stored.append(result)

    def release_create(self):
        self._create_gate.set()

    def release_store(self):
        self._store_gate.set()


@pytest.fixture
def two_card_game() -> Game:
    """Card 1 belongs to the left show, card 2 to the right show."""
    return Game(
        title="A or B?",
        cards=(
            Card(character="Card 1", show=SHOW_A),
            Card(character="Card 2", show=SHOW_B),
        ),
        left_show=SHOW_A,
        right_show=SHOW_B,
    )


@pytest.fixture
def five_card_game() -> Game:
    shows = [SHOW_A, SHOW_B, SHOW_B, SHOW_A, SHOW_B]
    return Game(
        title="Five cards",
        cards=tuple(
            Card(character=f"Character {i}", show=show)
            for i, show in enumerate(shows, start=1)
        ),
        left_show=SHOW_A,
        right_show=SHOW_B,
    )


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def store_error() -> StoreError:
    return StoreError("backend unavailable")
