"""
Scoring - Judges swipes and tallies results.

Pure functions only: (game, card, direction) -> answer,
(title, answers) -> result. No state is held here.
"""

from __future__ import annotations
from typing import Iterable

from .state import Card, DirectionType, Game, GameAnswer, GameResult, Show


def claimed_show(game: Game, direction: DirectionType) -> Show:
    """The show a swipe in this direction claims, fixed per game."""
    return game.show_for(direction)


def is_right_answer(right_show: Show, answer_show: Show) -> bool:
    """Strict identity match on show ids. No partial credit."""
    return answer_show.id == right_show.id


def judge_swipe(game: Game, card: Card, direction: DirectionType) -> GameAnswer:
    """Judge a single swipe against a card."""
    answer_show = claimed_show(game, direction)
    return GameAnswer(
        character=card.character,
        is_right_answer=is_right_answer(card.show, answer_show),
        answer_show=answer_show,
        right_show=card.show,
    )


def build_result(title: str, answers: Iterable[GameAnswer]) -> GameResult:
    """
    Build the final result from answers in swipe order.

    The result lists answers most recent first; the result screen
    depends on that ordering.
    """
    log = list(answers)
    return GameResult(
        title=title,
        answers=tuple(reversed(log)),
        total_points=len(log),
        earned_points=sum(1 for a in log if a.is_right_answer),
    )
