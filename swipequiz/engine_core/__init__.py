"""
Engine Core - Quiz data model, state container and scoring.

The engine core is framework-free:
1. Defines the immutable quiz model (cards, games, answers, results)
2. Holds view-facing state in a StateContainer
3. Judges swipes and tallies results
"""

from .state import (
    Card,
    DirectionType,
    Game,
    GameAnswer,
    GameResult,
    GameState,
    Show,
)
from .container import GameStateDraft, StateContainer, StateObserver
from .scoring import build_result, claimed_show, is_right_answer, judge_swipe

__all__ = [
    "Card",
    "DirectionType",
    "Game",
    "GameAnswer",
    "GameResult",
    "GameState",
    "Show",
    "GameStateDraft",
    "StateContainer",
    "StateObserver",
    "build_result",
    "claimed_show",
    "is_right_answer",
    "judge_swipe",
]
