"""
Swipe Quiz - Session controller for a swipe-based matching quiz.

Each session presents a deck of cards. The player swipes every card
left or right, each side standing for one show; the engine provides:
- An immutable, observable state snapshot for the view
- Swipe judging and result scoring
- The session lifecycle around an asynchronous game store
- An HTTP API and a terminal client
"""

__version__ = "0.1.0"
