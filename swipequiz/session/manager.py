"""
Session Manager - Creates and tracks quiz sessions.

LIFECYCLE:
1. Client starts a session → controller built, store asked for a game
2. Client swipes through the deck
3. Last swipe → result stored → session navigates to the result screen
4. Client ends the session → controller disposed, session forgotten

Sessions are ephemeral: nothing here survives a restart. Stored
results live in whatever store each session was given.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable
import logging
import time
import uuid

from ..store.base import GameStore
from .controller import GameSessionController, SessionPhase
from .navigation import RecordingNavigator

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    One quiz play-through.

    Holds the controller, the store it talks to and the navigator
    that records when the result screen was reached.
    """
    session_id: str
    controller: GameSessionController
    store: GameStore
    navigator: RecordingNavigator
    created_at: float
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def phase(self) -> SessionPhase:
        return self.controller.phase

    def is_active(self) -> bool:
        """A session is active until it reaches the result screen."""
        return not self.controller.is_disposed and self.phase != SessionPhase.FINISHED


class SessionManager:
    """
    Manages quiz sessions.

    Must be used from inside the event loop that owns the sessions.

    Args:
        store_factory: Builds the store for each new session
    """

    def __init__(self, store_factory: Callable[[], GameStore]):
        self.store_factory = store_factory
        self._sessions: dict[str, Session] = {}

    def create_session(self, metadata: dict[str, Any] | None = None) -> Session:
        """Create a session; its game starts loading immediately."""
        session_id = str(uuid.uuid4())
        store = self.store_factory()
        navigator = RecordingNavigator()

        session = Session(
            session_id=session_id,
            controller=GameSessionController(store=store, navigator=navigator),
            store=store,
            navigator=navigator,
            created_at=time.time(),
            metadata=metadata or {},
        )

        self._sessions[session_id] = session
        logger.info("Session %s created", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and dispose its controller.

        Any store call still in flight is discarded.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.controller.dispose()
        logger.info("Session %s ended in phase %s", session_id, session.phase.value)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)

    def end_all(self):
        """Dispose every session (shutdown)."""
        for session_id in list(self._sessions):
            self.end_session(session_id)
