"""
FastAPI Application - REST API for the swipe quiz.

Endpoints:
    POST   /api/v1/sessions               Start a session (game loads async)
    GET    /api/v1/sessions               List active sessions
    GET    /api/v1/sessions/{id}          Session status
    DELETE /api/v1/sessions/{id}          End session
    GET    /api/v1/sessions/{id}/state    View-facing state snapshot
    POST   /api/v1/sessions/{id}/swipe    Swipe the current card
    GET    /api/v1/sessions/{id}/result   Stored result (after the last swipe)
    WS     /api/v1/sessions/{id}/ws       Stream of state snapshots
    GET    /api/v1/health                 Health check

All responses are JSON with explicit Pydantic schemas.
"""

from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional, Union
import asyncio
import json
import logging
import os

from fastapi import FastAPI, Query, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..store.catalogue import default_games, load_catalogue
from .service import APIService
from .schemas import (
    EndSessionResponse,
    ErrorCode,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    ResultResponse,
    SessionListResponse,
    SessionResponse,
    SwipeRequest,
    SwipeResponse,
)

logger = logging.getLogger(__name__)

# Environment configuration
SWIPEQUIZ_ENV = os.getenv("SWIPEQUIZ_ENV", "development")
SWIPEQUIZ_CATALOGUE = os.getenv("SWIPEQUIZ_CATALOGUE", None)
SWIPEQUIZ_STORE_LATENCY = float(os.getenv("SWIPEQUIZ_STORE_LATENCY", "0"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from the
            configured catalogue if not provided)

    Returns:
        FastAPI application instance
    """
    if service is None:
        games = load_catalogue(SWIPEQUIZ_CATALOGUE) if SWIPEQUIZ_CATALOGUE else default_games()
        service = APIService.from_catalogue(games, latency=SWIPEQUIZ_STORE_LATENCY)
    api_service = service

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("swipequiz API starting (%s)", SWIPEQUIZ_ENV)
        yield
        api_service.session_manager.end_all()

    app = FastAPI(
        title="Swipe Quiz API",
        description="""
Swipe-based matching quiz.

## Flow

1. `POST /sessions` starts a session; the game loads in the background
   (`status=loading` until it arrives)
2. `POST /sessions/{id}/swipe` once per card, `left` or `right`
3. After the last card the result is stored and the session moves to
   `status=finished`
4. `GET /sessions/{id}/result` returns the result, most recent swipe first
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=message, error_code=error_code).model_dump(mode="json"),
        )

    def error_to_json(error: ErrorResponse) -> JSONResponse:
        status_code = 404 if error.error_code == ErrorCode.SESSION_NOT_FOUND else 409
        return make_error_response(error.error_code, error.error, status_code=status_code)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Start a quiz session",
    )
    async def create_session(
        wait: bool = Query(False, description="Wait until the game has loaded"),
    ) -> Union[SessionResponse, JSONResponse]:
        """Start a session. The game is requested from the store right away."""
        response = api_service.create_session()
        if wait:
            await api_service.settle(response.session_id)
            response = api_service.get_session(response.session_id)
            if isinstance(response, ErrorResponse):
                return error_to_json(response)
        return response

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a session. Store calls still in flight are discarded."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get the view-facing state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/swipe",
        response_model=SwipeResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Swipe the current card",
    )
    async def swipe(
        session_id: str, request: SwipeRequest
    ) -> Union[SwipeResponse, JSONResponse]:
        """
        Swipe the current card left or right.

        The swipe that judges the last card also waits for the result
        to be stored, so the response already carries the final status.
        """
        response = api_service.swipe(session_id, request.direction)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        if response.accepted and response.cursor == response.deck_size:
            await api_service.settle(session_id)
            status = api_service.get_session(session_id)
            if isinstance(status, SessionResponse):
                response = response.model_copy(update={"status": status.status})
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/result",
        response_model=ResultResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get the stored result",
    )
    async def get_result(session_id: str) -> Union[ResultResponse, JSONResponse]:
        response = api_service.get_result(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        Stream of state snapshots.

        Messages from server:
        - state_update: a snapshot was committed
        - error: unknown session or bad message

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        queue: asyncio.Queue = asyncio.Queue()
        unsubscribe = api_service.subscribe(session_id, queue.put_nowait)
        if unsubscribe is None:
            await websocket.send_json({
                "type": "error",
                "payload": {"message": f"Session {session_id} not found"},
            })
            await websocket.close()
            return

        async def pump():
            while True:
                state = await queue.get()
                await websocket.send_json({
                    "type": "state_update",
                    "payload": APIService.state_to_response(session_id, state).model_dump(mode="json"),
                })

        # Initial state
        initial = api_service.get_game_state(session_id)
        await websocket.send_json({"type": "state_update", "payload": initial.model_dump(mode="json")})
        sender = asyncio.create_task(pump())

        try:
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if isinstance(message, dict) and message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})
        except WebSocketDisconnect:
            logger.debug("WebSocket for session %s disconnected", session_id)
        finally:
            unsubscribe()
            sender.cancel()

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(status="healthy", service="swipequiz", version=__version__)

    return app
