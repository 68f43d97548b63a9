"""
API Module - HTTP interface to quiz sessions.

A client:
1. Starts a session
2. Polls or streams the state until the game has loaded
3. Swipes through the deck
4. Reads the stored result

All state is session-scoped and held in memory.
"""

from .schemas import (
    AnswerInfo,
    CardInfo,
    Direction,
    ErrorCode,
    ErrorResponse,
    GameInfo,
    GameStateResponse,
    ResultResponse,
    SessionResponse,
    SessionStatus,
    ShowInfo,
    SwipeRequest,
    SwipeResponse,
)
from .service import APIService
from .app import create_app

__all__ = [
    "AnswerInfo",
    "CardInfo",
    "Direction",
    "ErrorCode",
    "ErrorResponse",
    "GameInfo",
    "GameStateResponse",
    "ResultResponse",
    "SessionResponse",
    "SessionStatus",
    "ShowInfo",
    "SwipeRequest",
    "SwipeResponse",
    "APIService",
    "create_app",
]
