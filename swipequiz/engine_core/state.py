"""
Game State - Quiz data model and the view-facing state snapshot.

Design principles:
- Immutable: every model is a frozen dataclass
- Snapshot-based: GameState is replaced, never mutated in place
- Identity by id: shows are compared by their unique id only
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class DirectionType(Enum):
    """Swipe directions."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Show:
    """
    A matching target.

    Two shows are the same target iff their ids match; the title is
    display-only.
    """
    id: str
    title: str = ""


@dataclass(frozen=True)
class Card:
    """One quiz unit: a character and the show it truly belongs to."""
    character: str
    show: Show


@dataclass(frozen=True)
class Game:
    """
    A deck of cards plus the fixed meaning of each swipe direction.

    left_show/right_show apply to every card in the game.
    """
    title: str
    cards: tuple[Card, ...]
    left_show: Show
    right_show: Show

    def __post_init__(self):
        # Lists are accepted for convenience but stored as tuples
        if not isinstance(self.cards, tuple):
            object.__setattr__(self, "cards", tuple(self.cards))
        if not self.cards:
            raise ValueError(f"Game '{self.title}' has an empty deck")

    @property
    def deck_size(self) -> int:
        return len(self.cards)

    def show_for(self, direction: DirectionType) -> Show:
        """Get the show claimed by swiping in a direction."""
        if direction == DirectionType.LEFT:
            return self.left_show
        return self.right_show


@dataclass(frozen=True)
class GameAnswer:
    """
    One judged swipe.

    answer_show is what the user claimed, right_show is the card's true show.
    """
    character: str
    is_right_answer: bool
    answer_show: Show
    right_show: Show


@dataclass(frozen=True)
class GameResult:
    """
    Final scored result of a session.

    answers are ordered most recent swipe first.
    """
    title: str
    answers: tuple[GameAnswer, ...] = field(default_factory=tuple)
    total_points: int = 0
    earned_points: int = 0


@dataclass(frozen=True)
class GameState:
    """
    What the view needs to render.

    game stays None until the store hands back a new game.
    """
    game: Game | None = None
    is_loading: bool = True

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            game=kwargs.get("game", self.game),
            is_loading=kwargs.get("is_loading", self.is_loading),
        )
