"""
Navigation - The one screen transition a session needs.
"""

from __future__ import annotations
from abc import ABC, abstractmethod


class Navigator(ABC):
    """Moves the app to the result screen once a result is stored."""

    @abstractmethod
    def go_to_result_screen(self) -> None:
        """Fire-and-forget transition. No payload is passed."""
        pass


class RecordingNavigator(Navigator):
    """
    Navigator that only records transition requests.

    Used by the API (the client polls the session status) and in tests.
    """

    def __init__(self):
        self.transitions: list[str] = []

    def go_to_result_screen(self) -> None:
        self.transitions.append("result")

    @property
    def at_result_screen(self) -> bool:
        return bool(self.transitions)
