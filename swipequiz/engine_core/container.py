"""
State Container - Single source of truth for view-facing state.

All mutation goes through update():
1. Copy the current snapshot into a mutable draft
2. Let the caller change any fields on the draft
3. Freeze the draft into a new snapshot and replace the old one
4. Notify observers once with the committed snapshot

Observers never see a half-applied update.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging

from .state import Game, GameState

logger = logging.getLogger(__name__)

StateObserver = Callable[[GameState], None]


@dataclass
class GameStateDraft:
    """Mutable working copy of a GameState, only valid inside update()."""
    game: Game | None
    is_loading: bool

    @classmethod
    def from_state(cls, state: GameState) -> GameStateDraft:
        return cls(game=state.game, is_loading=state.is_loading)

    def freeze(self) -> GameState:
        return GameState(game=self.game, is_loading=self.is_loading)


class StateContainer:
    """
    Holds the current GameState and publishes every committed change.

    Usage:
        container = StateContainer()
        unsubscribe = container.subscribe(render)

        def apply(draft):
            draft.game = game
            draft.is_loading = False

        container.update(apply)
    """

    def __init__(self):
        self._observers: list[StateObserver] = []
        self._state = self.initialize()

    def initialize(self) -> GameState:
        """Default snapshot: no game yet, still loading."""
        return GameState(game=None, is_loading=True)

    @property
    def state(self) -> GameState:
        """The latest committed snapshot."""
        return self._state

    def update(self, mutator: Callable[[GameStateDraft], None]) -> GameState:
        """
        Apply a batch of field changes and publish the result.

        Observers are notified exactly once per call, even if the
        mutator changed nothing.
        """
        draft = GameStateDraft.from_state(self._state)
        mutator(draft)
        self._state = draft.freeze()

        logger.debug(
            "State committed (loading=%s, game=%s)",
            self._state.is_loading,
            self._state.game.title if self._state.game else None,
        )

        for observer in list(self._observers):
            observer(self._state)
        return self._state

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """Register an observer. Returns a callable that unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def clear_observers(self):
        """Drop all observers (teardown)."""
        self._observers.clear()
