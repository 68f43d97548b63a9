"""
Session Module - Drives quiz sessions.

A session is one play-through of a game:
- Created when the user starts a quiz
- Loads its game from the store
- Judges swipes until the deck is exhausted
- Hands the result to the store and moves to the result screen

Sessions are ephemeral and live only in memory.
"""

from .controller import GameDispatcher, GameSessionController, SessionPhase
from .navigation import Navigator, RecordingNavigator
from .manager import Session, SessionManager

__all__ = [
    "GameDispatcher",
    "GameSessionController",
    "SessionPhase",
    "Navigator",
    "RecordingNavigator",
    "Session",
    "SessionManager",
]
