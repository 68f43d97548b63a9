"""
Catalogue - Games the reference store can hand out.

A catalogue is JSON:

    {
        "games": [
            {
                "title": "...",
                "left_show": {"id": "...", "title": "..."},
                "right_show": {"id": "...", "title": "..."},
                "cards": [{"character": "...", "show": {"id": "...", "title": "..."}}]
            }
        ]
    }

Files are validated with pydantic before being turned into Game objects.
"""

from __future__ import annotations
import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from ..engine_core.state import Card, Game, Show

logger = logging.getLogger(__name__)


class ShowEntry(BaseModel):
    id: str = Field(..., min_length=1)
    title: str = ""


class CardEntry(BaseModel):
    character: str = Field(..., min_length=1)
    show: ShowEntry


class GameEntry(BaseModel):
    title: str
    left_show: ShowEntry
    right_show: ShowEntry
    cards: list[CardEntry] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_sides(self) -> GameEntry:
        if self.left_show.id == self.right_show.id:
            raise ValueError("left_show and right_show must differ")
        sides = {self.left_show.id, self.right_show.id}
        for card in self.cards:
            if card.show.id not in sides:
                raise ValueError(
                    f"Card '{card.character}' belongs to '{card.show.id}', "
                    f"which is neither the left nor the right show"
                )
        return self

    def to_game(self) -> Game:
        return Game(
            title=self.title,
            cards=tuple(
                Card(character=c.character, show=_to_show(c.show))
                for c in self.cards
            ),
            left_show=_to_show(self.left_show),
            right_show=_to_show(self.right_show),
        )


class CatalogueFile(BaseModel):
    games: list[GameEntry] = Field(..., min_length=1)


def _to_show(entry: ShowEntry) -> Show:
    return Show(id=entry.id, title=entry.title)


class CatalogueError(ValueError):
    """Catalogue file is missing or malformed."""


def parse_catalogue(data: dict) -> list[Game]:
    """Validate catalogue data and build games from it."""
    try:
        catalogue = CatalogueFile.model_validate(data)
    except ValidationError as e:
        raise CatalogueError(f"Invalid catalogue: {e}") from e
    return [entry.to_game() for entry in catalogue.games]


def load_catalogue(path: str | Path) -> list[Game]:
    """Load and validate a catalogue file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogueError(f"Catalogue not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogueError(f"Catalogue is not valid JSON: {path}: {e}") from e

    games = parse_catalogue(data)
    logger.info("Loaded %d game(s) from %s", len(games), path)
    return games


# =============================================================================
# Built-in catalogue
# =============================================================================

_FRIENDS = {"id": "friends", "title": "Friends"}
_OFFICE = {"id": "the_office", "title": "The Office"}
_SIMPSONS = {"id": "simpsons", "title": "The Simpsons"}
_FUTURAMA = {"id": "futurama", "title": "Futurama"}

DEFAULT_CATALOGUE = {
    "games": [
        {
            "title": "Friends or The Office?",
            "left_show": _FRIENDS,
            "right_show": _OFFICE,
            "cards": [
                {"character": "Chandler Bing", "show": _FRIENDS},
                {"character": "Dwight Schrute", "show": _OFFICE},
                {"character": "Phoebe Buffay", "show": _FRIENDS},
                {"character": "Pam Beesly", "show": _OFFICE},
                {"character": "Gunther", "show": _FRIENDS},
                {"character": "Stanley Hudson", "show": _OFFICE},
            ],
        },
        {
            "title": "Springfield or New New York?",
            "left_show": _SIMPSONS,
            "right_show": _FUTURAMA,
            "cards": [
                {"character": "Ned Flanders", "show": _SIMPSONS},
                {"character": "Bender", "show": _FUTURAMA},
                {"character": "Zoidberg", "show": _FUTURAMA},
                {"character": "Apu", "show": _SIMPSONS},
                {"character": "Kif Kroker", "show": _FUTURAMA},
            ],
        },
    ],
}


def default_games() -> list[Game]:
    return parse_catalogue(DEFAULT_CATALOGUE)
