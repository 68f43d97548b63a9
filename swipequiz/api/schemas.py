"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client (game screen,
result screen) and the session controller.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- RESULT_NOT_READY: Session has not reached the result screen yet
- VALIDATION_ERROR: Request body is invalid
- INTERNAL_ERROR: Unexpected failure
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from ..engine_core.state import DirectionType, Game, GameAnswer, GameResult, Show


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    LOADING = "loading"
    READY = "ready"
    COMPLETING = "completing"
    FINISHED = "finished"


class Direction(str, Enum):
    """Swipe directions."""
    LEFT = "left"
    RIGHT = "right"

    def to_direction_type(self) -> DirectionType:
        return DirectionType(self.value)


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    RESULT_NOT_READY = "RESULT_NOT_READY"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class ShowInfo(BaseModel):
    """A matching target."""
    id: str
    title: str = ""

    @classmethod
    def from_show(cls, show: Show) -> "ShowInfo":
        return cls(id=show.id, title=show.title)


class CardInfo(BaseModel):
    """A card as the game screen shows it. The true show is not sent."""
    character: str


class GameInfo(BaseModel):
    """A loaded game."""
    title: str
    left_show: ShowInfo
    right_show: ShowInfo
    cards: list[CardInfo] = Field(default_factory=list)

    @classmethod
    def from_game(cls, game: Game) -> "GameInfo":
        return cls(
            title=game.title,
            left_show=ShowInfo.from_show(game.left_show),
            right_show=ShowInfo.from_show(game.right_show),
            cards=[CardInfo(character=c.character) for c in game.cards],
        )


class AnswerInfo(BaseModel):
    """One judged swipe."""
    character: str
    is_right_answer: bool
    answer_show: ShowInfo = Field(..., description="Show the user claimed")
    right_show: ShowInfo = Field(..., description="Show the character belongs to")

    @classmethod
    def from_answer(cls, answer: GameAnswer) -> "AnswerInfo":
        return cls(
            character=answer.character,
            is_right_answer=answer.is_right_answer,
            answer_show=ShowInfo.from_show(answer.answer_show),
            right_show=ShowInfo.from_show(answer.right_show),
        )


# =============================================================================
# Request Models
# =============================================================================

class SwipeRequest(BaseModel):
    """Swipe the current card."""
    direction: Direction


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Session status."""
    session_id: str
    status: SessionStatus
    title: Optional[str] = None
    cursor: int = 0
    deck_size: Optional[int] = None
    at_result_screen: bool = False
    created_at: float
    last_error: Optional[str] = Field(None, description="Last store failure, if any")


class GameStateResponse(BaseModel):
    """View-facing state snapshot."""
    session_id: str
    is_loading: bool
    game: Optional[GameInfo] = None


class SwipeResponse(BaseModel):
    """Outcome of a swipe."""
    session_id: str
    accepted: bool = Field(..., description="False if the swipe was ignored")
    status: SessionStatus
    cursor: int
    deck_size: Optional[int] = None
    answer: Optional[AnswerInfo] = None


class ResultResponse(BaseModel):
    """Stored result of a finished session."""
    session_id: str
    title: str
    answers: list[AnswerInfo] = Field(..., description="Most recent swipe first")
    total_points: int
    earned_points: int

    @classmethod
    def from_result(cls, session_id: str, result: GameResult) -> "ResultResponse":
        return cls(
            session_id=session_id,
            title=result.title,
            answers=[AnswerInfo.from_answer(a) for a in result.answers],
            total_points=result.total_points,
            earned_points=result.earned_points,
        )


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
