"""
Tests for the quiz model and scoring.

Tests:
- Game construction rules
- Direction to show mapping
- Identity-based judging
- Result building
"""

from dataclasses import FrozenInstanceError

import pytest

from ..engine_core.state import Card, DirectionType, Game, GameAnswer, Show
from ..engine_core.scoring import build_result, claimed_show, is_right_answer, judge_swipe
from .conftest import SHOW_A, SHOW_B


class TestGameModel:
    """Tests for the immutable model."""

    def test_empty_deck_rejected(self):
        """A game needs at least one card."""
        with pytest.raises(ValueError):
            Game(title="Empty", cards=(), left_show=SHOW_A, right_show=SHOW_B)

    def test_cards_stored_as_tuple(self):
        """A list of cards is frozen into a tuple."""
        game = Game(
            title="List",
            cards=[Card(character="X", show=SHOW_A)],
            left_show=SHOW_A,
            right_show=SHOW_B,
        )
        assert isinstance(game.cards, tuple)
        assert game.deck_size == 1

    def test_models_are_frozen(self, two_card_game):
        """Games cannot be changed after creation."""
        with pytest.raises(FrozenInstanceError):
            two_card_game.title = "Changed"


class TestJudging:
    """Tests for swipe judging."""

    def test_claimed_show_follows_direction(self, two_card_game):
        """LEFT claims left_show, RIGHT claims right_show."""
        assert claimed_show(two_card_game, DirectionType.LEFT) == SHOW_A
        assert claimed_show(two_card_game, DirectionType.RIGHT) == SHOW_B

    def test_identity_is_by_id(self):
        """Titles don't matter, ids do."""
        assert is_right_answer(Show("x", "One title"), Show("x", "Another title"))
        assert not is_right_answer(Show("x", "Same"), Show("y", "Same"))

    def test_left_swipe_on_left_card_is_right(self, two_card_game):
        """Swiping LEFT when left_show is the card's show is correct."""
        card = two_card_game.cards[0]
        answer = judge_swipe(two_card_game, card, DirectionType.LEFT)

        assert answer.is_right_answer
        assert answer.character == "Card 1"
        assert answer.answer_show == SHOW_A
        assert answer.right_show == SHOW_A

    def test_right_swipe_on_left_card_is_wrong(self, two_card_game):
        """Swiping RIGHT in the same case is incorrect."""
        card = two_card_game.cards[0]
        answer = judge_swipe(two_card_game, card, DirectionType.RIGHT)

        assert not answer.is_right_answer
        assert answer.answer_show == SHOW_B
        assert answer.right_show == SHOW_A

    def test_right_swipe_on_right_card_is_right(self, two_card_game):
        """And vice versa for right_show."""
        card = two_card_game.cards[1]
        assert judge_swipe(two_card_game, card, DirectionType.RIGHT).is_right_answer
        assert not judge_swipe(two_card_game, card, DirectionType.LEFT).is_right_answer


class TestBuildResult:
    """Tests for result building."""

    def _answer(self, name: str, right: bool) -> GameAnswer:
        return GameAnswer(
            character=name,
            is_right_answer=right,
            answer_show=SHOW_A,
            right_show=SHOW_A if right else SHOW_B,
        )

    def test_answers_are_reversed(self):
        """Most recent swipe comes first."""
        log = [self._answer("first", True), self._answer("second", False), self._answer("third", True)]
        result = build_result("Quiz", log)

        assert [a.character for a in result.answers] == ["third", "second", "first"]

    def test_points(self):
        """total counts answers, earned counts right ones."""
        log = [self._answer("a", True), self._answer("b", False), self._answer("c", True)]
        result = build_result("Quiz", log)

        assert result.title == "Quiz"
        assert result.total_points == 3
        assert result.earned_points == 2
        assert result.earned_points <= result.total_points

    def test_input_log_untouched(self):
        """Building a result doesn't reorder the caller's log."""
        log = [self._answer("a", True), self._answer("b", True)]
        build_result("Quiz", log)

        assert [a.character for a in log] == ["a", "b"]
