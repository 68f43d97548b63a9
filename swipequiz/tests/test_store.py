"""
Tests for the reference store and catalogue loading.
"""

import asyncio
import json

import pytest

from ..engine_core.state import GameResult
from ..store import (
    CatalogueError,
    DEFAULT_CATALOGUE,
    InMemoryGameStore,
    StoreError,
    default_games,
    load_catalogue,
    parse_catalogue,
)


def _catalogue(**overrides):
    game = {
        "title": "A or B?",
        "left_show": {"id": "a", "title": "A"},
        "right_show": {"id": "b", "title": "B"},
        "cards": [
            {"character": "One", "show": {"id": "a", "title": "A"}},
            {"character": "Two", "show": {"id": "b", "title": "B"}},
        ],
    }
    game.update(overrides)
    return {"games": [game]}


class TestCatalogue:
    """Tests for catalogue validation."""

    def test_default_catalogue_is_valid(self):
        """The built-in catalogue parses into games."""
        games = default_games()

        assert len(games) == len(DEFAULT_CATALOGUE["games"])
        assert all(game.deck_size > 0 for game in games)

    def test_parse(self):
        games = parse_catalogue(_catalogue())

        assert len(games) == 1
        game = games[0]
        assert game.left_show.id == "a"
        assert [c.character for c in game.cards] == ["One", "Two"]

    def test_same_sides_rejected(self):
        """Left and right must be different shows."""
        with pytest.raises(CatalogueError):
            parse_catalogue(_catalogue(right_show={"id": "a", "title": "A again"}))

    def test_card_outside_sides_rejected(self):
        """Every card must belong to one of the two sides."""
        cards = [{"character": "Stranger", "show": {"id": "c"}}]
        with pytest.raises(CatalogueError):
            parse_catalogue(_catalogue(cards=cards))

    def test_empty_deck_rejected(self):
        with pytest.raises(CatalogueError):
            parse_catalogue(_catalogue(cards=[]))

    def test_empty_catalogue_rejected(self):
        with pytest.raises(CatalogueError):
            parse_catalogue({"games": []})

    def test_load_file(self, tmp_path):
        path = tmp_path / "catalogue.json"
        path.write_text(json.dumps(_catalogue()), encoding="utf-8")

        games = load_catalogue(path)

        assert games[0].title == "A or B?"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogueError):
            load_catalogue(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogueError):
            load_catalogue(path)


class TestInMemoryGameStore:
    """Tests for InMemoryGameStore."""

    def test_seeded_games_reproducible(self):
        """Same seed, same game and deck order."""
        async def draw(seed):
            return await InMemoryGameStore(seed=seed).create_new_game()

        assert asyncio.run(draw(7)) == asyncio.run(draw(7))

    def test_shuffle_keeps_cards(self, five_card_game):
        """Shuffling reorders but never adds or drops cards."""
        store = InMemoryGameStore(games=[five_card_game], seed=3)
        game = asyncio.run(store.create_new_game())

        assert sorted(c.character for c in game.cards) == sorted(
            c.character for c in five_card_game.cards
        )
        assert game.left_show == five_card_game.left_show

    def test_no_shuffle(self, five_card_game):
        store = InMemoryGameStore(games=[five_card_game], shuffle=False)

        assert asyncio.run(store.create_new_game()) == five_card_game

    def test_empty_store_fails(self):
        store = InMemoryGameStore(games=[])

        with pytest.raises(StoreError):
            asyncio.run(store.create_new_game())

    def test_store_result(self):
        """Stored results are kept in order."""
        store = InMemoryGameStore()
        first = GameResult(title="First", total_points=1, earned_points=1)
        second = GameResult(title="Second", total_points=2, earned_points=0)

        assert store.last_result is None
        asyncio.run(store.store_result(first))
        asyncio.run(store.store_result(second))

        assert store.results == [first, second]
        assert store.last_result is second
