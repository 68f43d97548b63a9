"""
API Service - Business logic layer between the HTTP app and sessions.

The service:
1. Creates and ends sessions
2. Forwards swipes to session controllers
3. Converts engine objects into response schemas
4. Exposes state snapshots to streaming clients

This layer is framework-agnostic but must run inside the event loop
that owns the sessions (controllers schedule store calls on it).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from ..engine_core.state import Game, GameState
from ..session import Session, SessionManager, SessionPhase
from ..store.memory import InMemoryGameStore
from .schemas import (
    AnswerInfo,
    Direction,
    ErrorCode,
    ErrorResponse,
    GameInfo,
    GameStateResponse,
    ResultResponse,
    SessionResponse,
    SessionStatus,
    SwipeResponse,
)

logger = logging.getLogger(__name__)


def _default_manager() -> SessionManager:
    return SessionManager(store_factory=InMemoryGameStore)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService.from_catalogue(games)

        session = service.create_session()
        await service.settle(session.session_id)

        response = service.swipe(session.session_id, Direction.LEFT)
    """
    session_manager: SessionManager = field(default_factory=_default_manager)

    @classmethod
    def from_catalogue(
        cls,
        games: list[Game] | None = None,
        latency: float = 0.0,
    ) -> APIService:
        """Service whose sessions draw from the given games."""
        def store_factory():
            return InMemoryGameStore(games=games, latency=latency)

        return cls(session_manager=SessionManager(store_factory=store_factory))

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self) -> SessionResponse:
        """Create a session. Its game loads in the background."""
        session = self.session_manager.create_session()
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    async def settle(self, session_id: str):
        """Wait for the session's in-flight store calls to finish."""
        session = self.session_manager.get_session(session_id)
        if session:
            await session.controller.wait_idle()

    # =========================================================================
    # Game loop
    # =========================================================================

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self.state_to_response(session_id, session.controller.state)

    def swipe(
        self, session_id: str, direction: Direction
    ) -> SwipeResponse | ErrorResponse:
        """
        Register a swipe.

        Ignored swipes (game not loaded, deck finished) are reported
        with accepted=False rather than as errors.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        controller = session.controller
        before = controller.cursor
        controller.register_swipe(direction.to_direction_type())
        accepted = controller.cursor != before

        game = controller.state.game
        return SwipeResponse(
            session_id=session_id,
            accepted=accepted,
            status=SessionStatus(session.phase.value),
            cursor=controller.cursor,
            deck_size=game.deck_size if game else None,
            answer=AnswerInfo.from_answer(controller.answers[-1]) if accepted else None,
        )

    def get_result(self, session_id: str) -> ResultResponse | ErrorResponse:
        """The stored result, once the session reached the result screen."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = None
        if session.phase == SessionPhase.FINISHED and isinstance(session.store, InMemoryGameStore):
            result = session.store.last_result

        if result is None:
            return ErrorResponse(
                error=f"Session {session_id} has no stored result yet",
                error_code=ErrorCode.RESULT_NOT_READY,
            )
        return ResultResponse.from_result(session_id, result)

    def subscribe(
        self,
        session_id: str,
        observer: Callable[[GameState], None],
    ) -> Callable[[], None] | None:
        """Observe state snapshots of a session. None if it doesn't exist."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return None
        return session.controller.container.subscribe(observer)

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    @staticmethod
    def state_to_response(session_id: str, state: GameState) -> GameStateResponse:
        return GameStateResponse(
            session_id=session_id,
            is_loading=state.is_loading,
            game=GameInfo.from_game(state.game) if state.game else None,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        controller = session.controller
        game = controller.state.game
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.phase.value),
            title=game.title if game else None,
            cursor=controller.cursor,
            deck_size=game.deck_size if game else None,
            at_result_screen=session.navigator.at_result_screen,
            created_at=session.created_at,
            last_error=str(controller.last_error) if controller.last_error else None,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        logger.debug("Session %s not found", session_id)
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )
