"""
FastAPI Application - REST API for game clients.

Endpoints:
    POST   /api/v1/sessions                       Create game session
    GET    /api/v1/sessions                       List sessions
    GET    /api/v1/sessions/{id}                  Get session status
    DELETE /api/v1/sessions/{id}                  End session
    GET    /api/v1/sessions/{id}/state            Get game state
    POST   /api/v1/sessions/{id}/actions          Apply an action
    GET    /api/v1/sessions/{id}/legal-actions    List available actions
    POST   /api/v1/sessions/{id}/undo             Undo the last action

Rule rejections (avoiding twice, drinking a potion that is not in the
room, acting after game over) are not errors: the response has
changed=false and the unchanged state. A missing card or healing amount
is an INVALID_ACTION error.
"""

from typing import Optional, Union
import os

# Environment configuration
SCOUNDREL_ENV = os.getenv("SCOUNDREL_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

API_VERSION = "1.0.0"


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        CreateSessionRequest,
        ActionRequest,
        SessionResponse,
        GameStateResponse,
        ActionResponse,
        LegalActionsResponse,
        UndoResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        ErrorCode,
    )

    app = FastAPI(
        title="Scoundrel Engine API",
        description="""
Solitaire dungeon crawl card game engine.

## Game Loop

1. `POST /sessions` to shuffle a new dungeon
2. `POST /actions` with `draw_room` to reveal a room
3. Resolve cards with `fight_monster`, `use_weapon`, `use_health_potion`, `equip_weapon`,
   or skip the room with `avoid_room`
4. Draw again once one card is left; the game ends when the dungeon runs out or health hits 0

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_ACTION` | Action is missing its card or healing amount |
| `SESSION_NOT_FOUND` | Session does not exist |
| `VALIDATION_ERROR` | Session settings could not be used |
        """,
        version=API_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_to_json(error: ErrorResponse) -> JSONResponse:
        status_code = 404 if error.error_code == ErrorCode.SESSION_NOT_FOUND else 400
        return make_error_response(
            error.error_code, error.error, status_code=status_code, details=error.details
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Optional[CreateSessionRequest] = None,
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session with a shuffled dungeon.

        Pass `seed` for a reproducible deck.
        """
        response = api_service.create_session(body or CreateSessionRequest())
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all session IDs."""
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
        """Get the current status of a game session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and release its state."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the current game state. The dungeon is reported by size only."""
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=ActionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid action"},
            404: {"model": ErrorResponse, "description": "Session not found"},
        },
        tags=["Game Loop"],
        summary="Apply an action",
    )
    async def apply_action(
        session_id: str,
        body: ActionRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """
        Apply an action to the session's game.

        **Request Body:**
        ```json
        {"action_type": "use_weapon", "card": {"suit": "S", "rank": "8"}}
        ```
        """
        response = api_service.dispatch(session_id, body)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/legal-actions",
        response_model=LegalActionsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="List available actions",
    )
    async def get_legal_actions(session_id: str) -> Union[LegalActionsResponse, JSONResponse]:
        """List the actions available right now, marking the one a card click would pick."""
        response = api_service.get_legal_actions(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/undo",
        response_model=UndoResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Undo the last action",
    )
    async def undo(session_id: str) -> Union[UndoResponse, JSONResponse]:
        """Step back to the state before the last applied action."""
        response = api_service.undo(session_id)
        if isinstance(response, ErrorResponse):
            return error_to_json(response)
        return response

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="scoundrel-engine",
            version=API_VERSION,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Scoundrel Engine API",
            "version": API_VERSION,
            "environment": SCOUNDREL_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn scoundrel.api.app:app
app = create_app()
