"""
Session Controller - Drives one quiz session from load to scored result.

LIFECYCLE:
1. Construction → ask the store for a new game (async)
2. Game arrives → reset cursor/answers, publish game, clear loading
3. Each swipe → judge card at cursor, append answer, advance cursor
4. Last card judged → build result, ask the store to persist it (async)
5. Result stored → navigate to the result screen

    LOADING → READY(cursor=0..N) → COMPLETING → FINISHED

THREADING:
- The controller belongs to the asyncio event loop it was built on
- Swipes are synchronous and must be registered from that loop
- Store calls run as tasks on that loop; futures completed on worker
  threads are handed back to the loop before any state is touched
- dispose() cancels pending store calls and no continuation mutates
  state once the controller is disposed
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Coroutine, TYPE_CHECKING
import asyncio
import concurrent.futures
import logging

from ..engine_core.container import StateContainer
from ..engine_core.scoring import build_result, judge_swipe
from ..engine_core.state import DirectionType, Game, GameAnswer, GameResult, GameState

if TYPE_CHECKING:
    from ..store.base import GameStore
    from .navigation import Navigator

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    """Phase of a quiz session."""
    LOADING = "loading"  # Waiting for the store to create a game
    READY = "ready"  # Game loaded, accepting swipes
    COMPLETING = "completing"  # All cards judged, result being stored
    FINISHED = "finished"  # Result stored, navigated to result screen


class GameDispatcher(ABC):
    """Events the game screen sends to its controller."""

    @abstractmethod
    def swiped_next(self, direction: DirectionType) -> None:
        """The user swiped the current card away."""
        pass


class GameSessionController(GameDispatcher):
    """
    Controller for a single quiz session.

    Must be constructed inside a running event loop.

    Usage:
        controller = GameSessionController(store, navigator)
        controller.container.subscribe(render)

        # later, per user gesture
        controller.swiped_next(DirectionType.LEFT)

        # on screen teardown
        controller.dispose()
    """

    def __init__(
        self,
        store: GameStore,
        navigator: Navigator,
        container: StateContainer | None = None,
    ):
        self.store = store
        self.navigator = navigator
        self.container = container or StateContainer()

        # Raises RuntimeError when there is no running loop to own the session
        self._loop = asyncio.get_running_loop()

        self._phase = SessionPhase.LOADING
        self._cursor = 0
        self._answers: list[GameAnswer] = []
        self._pending: set[asyncio.Task] = set()
        self._disposed = False

        # Last store failure, for the layer above to inspect
        self.last_error: BaseException | None = None

        self._launch(self._load_game(), name="create_new_game")

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self.container.state

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def answers(self) -> tuple[GameAnswer, ...]:
        """Answers so far, in swipe order."""
        return tuple(self._answers)

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    # =========================================================================
    # Swipes
    # =========================================================================

    def swiped_next(self, direction: DirectionType) -> None:
        self.register_swipe(direction)

    def register_swipe(self, direction: DirectionType) -> None:
        """
        Judge the card at the cursor and advance.

        Swipes before the game is loaded, after the last card, or after
        disposal are ignored.

        Raises:
            ValueError: if direction is not a swipe direction
        """
        self._check_owner()
        direction = DirectionType(direction)

        if self._disposed:
            logger.debug("Swipe ignored: session disposed")
            return

        game = self.container.state.game
        if game is None:
            logger.debug("Swipe ignored: no game loaded")
            return

        if self._phase != SessionPhase.READY:
            logger.debug("Swipe ignored: session is %s", self._phase.value)
            return

        card = game.cards[self._cursor]
        answer = judge_swipe(game, card, direction)

        logger.debug(
            "Card %d/%d '%s' swiped %s (right=%s)",
            self._cursor + 1, game.deck_size, card.character,
            direction.value, answer.is_right_answer,
        )

        self._answers.append(answer)
        self._cursor += 1
        if self._cursor == game.deck_size:
            self._complete(game)

    def _complete(self, game: Game):
        """All cards judged: build the result and hand it to the store."""
        result = build_result(game.title, self._answers)
        self._phase = SessionPhase.COMPLETING

        logger.info(
            "Session '%s' complete: %d/%d",
            result.title, result.earned_points, result.total_points,
        )

        self._launch(self._submit_result(result), name="store_result")

    # =========================================================================
    # Store calls
    # =========================================================================

    async def _load_game(self):
        try:
            game = await self._call_store(self.store.create_new_game)
        except Exception as e:
            if self._disposed:
                return
            # Stays in loading; recovery belongs to the store or a higher layer
            self.last_error = e
            logger.warning("Game creation failed: %s", e, exc_info=True)
            return

        if self._disposed:
            logger.debug("Discarding game '%s': session disposed", game.title)
            return

        self._cursor = 0
        self._answers = []
        self._phase = SessionPhase.READY

        def apply(draft):
            draft.game = game
            draft.is_loading = False

        self.container.update(apply)
        logger.info("Game '%s' loaded with %d cards", game.title, game.deck_size)

    async def _submit_result(self, result: GameResult):
        try:
            await self._call_store(lambda: self.store.store_result(result))
        except Exception as e:
            if self._disposed:
                return
            # No navigation and no retry
            self.last_error = e
            logger.warning("Storing result failed: %s", e, exc_info=True)
            return

        if self._disposed:
            logger.debug("Result stored after disposal, not navigating")
            return

        self._phase = SessionPhase.FINISHED
        self.navigator.go_to_result_screen()

    async def _call_store(self, call: Callable[[], Any]) -> Any:
        """
        Invoke a store method and wait for it on the owning loop.

        Accepts coroutines and concurrent.futures.Future; the latter
        are completed on a worker thread and posted back to this loop.
        """
        outcome = call()
        if isinstance(outcome, concurrent.futures.Future):
            return await asyncio.wrap_future(outcome, loop=self._loop)
        return await outcome

    # =========================================================================
    # Task bookkeeping
    # =========================================================================

    def _launch(self, coro: Coroutine, name: str):
        task = self._loop.create_task(coro, name=name)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _check_owner(self):
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is not self._loop:
            raise RuntimeError(
                "Swipes must be registered from the event loop that owns the session"
            )

    async def wait_idle(self):
        """
        Wait until no store call is in flight.

        Cancelled calls are skipped. Any other error raised while handling
        a store call (an observer failing inside update, say) is re-raised.
        """
        errors: list[Exception] = []
        while self._pending:
            outcomes = await asyncio.gather(*list(self._pending), return_exceptions=True)
            errors.extend(o for o in outcomes if isinstance(o, Exception))
        if errors:
            logger.error("Session task failed: %s", errors[0])
            raise errors[0]

    def dispose(self):
        """
        Tear down the session.

        Pending store calls are cancelled and their results discarded.
        Safe to call more than once.
        """
        if self._disposed:
            return
        self._disposed = True
        for task in list(self._pending):
            task.cancel()
        self.container.clear_observers()
        logger.debug("Session disposed in phase %s", self._phase.value)
