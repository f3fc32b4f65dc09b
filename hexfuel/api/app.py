"""
FastAPI Application - REST API for game front-ends.

Endpoints:
    POST   /api/v1/sessions                   Create game session
    GET    /api/v1/sessions                   List sessions
    GET    /api/v1/sessions/{id}              Get session status
    DELETE /api/v1/sessions/{id}              End session
    GET    /api/v1/sessions/{id}/state        Get game state
    GET    /api/v1/sessions/{id}/legal-moves  Legal destinations for the side to move
    POST   /api/v1/sessions/{id}/move         Make the human's move
    POST   /api/v1/sessions/{id}/restart      Start a new game
    WS     /api/v1/sessions/{id}/ws           Events for real-time updates

AI Turn Flow:
    POST /move applies the human's move and, unless the game ended,
    the AI's reply. Both moves are in the response and are pushed to
    WebSocket listeners as move_applied events (then game_over, if any).

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import json
import logging

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ALLOWED_ORIGINS
from .service import APIService, event_info
from .schemas import (
    # Request models
    CreateSessionRequest,
    MoveRequestBody,
    # Response models
    EndSessionResponse,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    LegalMovesResponse,
    MoveResponse,
    SessionListResponse,
    SessionResponse,
    # Enums
    ErrorCode,
)

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.ILLEGAL_MOVE: 400,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.NOT_YOUR_TURN: 409,
    ErrorCode.GAME_OVER: 409,
}


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Hexfuel API",
        description="""
Hex grid fuel duel - one human against a heuristic AI.

## Rules in brief

Move in a straight line along any of the six hex directions, as far as
your fuel allows. You pay one fuel per cell travelled and gain (or lose)
the value of the cell you land on. The cell you leave is destroyed.
The game ends when someone cannot move or only two cells remain.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `ILLEGAL_MOVE` | Destination breaks the move rules |
| `NOT_YOUR_TURN` | The AI is to move |
| `GAME_OVER` | The game has finished |
| `VALIDATION_ERROR` | Request body is malformed |
        """,
        version=__version__,
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

    # WebSocket connections
    ws_connections: dict[str, list[WebSocket]] = {}
    app.state.ws_connections = ws_connections

    # =========================================================================
    # Error helpers
    # =========================================================================

    def error_response(error: ErrorResponse) -> JSONResponse:
        """Wrap an ErrorResponse with its HTTP status."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    async def broadcast_to_session(session_id: str, message: dict):
        """Broadcast a message to all WebSocket connections for a session."""
        if session_id in ws_connections:
            dead_connections = []
            for ws in ws_connections[session_id]:
                try:
                    await ws.send_json(message)
                except (WebSocketDisconnect, RuntimeError):
                    dead_connections.append(ws)
            for ws in dead_connections:
                ws_connections[session_id].remove(ws)
            if not ws_connections[session_id]:
                del ws_connections[session_id]

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed request bodies use the same error shape as engine rejections."""
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        return error_response(ErrorResponse(
            error=errors[0]["msg"] if errors else "Invalid request",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": errors},
        ))

    async def broadcast_events(session_id: str, events) -> None:
        for event in events:
            await broadcast_to_session(session_id, {
                "type": event.event_type.value,
                "payload": event_info(event).model_dump(mode="json"),
            })

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(body: Optional[CreateSessionRequest] = None) -> SessionResponse:
        """Create a new game. The human moves first."""
        return api_service.create_session(body or CreateSessionRequest())

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
            return error_response(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        ws_connections.pop(session_id, None)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Board cells, both movers, whose turn it is and the outcome once finished."""
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return error_response(response)
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/legal-moves",
        response_model=LegalMovesResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="List legal destinations",
    )
    async def get_legal_moves(session_id: str) -> Union[LegalMovesResponse, JSONResponse]:
        response = api_service.get_legal_moves(session_id)
        if isinstance(response, ErrorResponse):
            return error_response(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/move",
        response_model=MoveResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Illegal move"},
            404: {"model": ErrorResponse, "description": "Session not found"},
            409: {"model": ErrorResponse, "description": "Not your turn or game over"},
        },
        tags=["Game"],
        summary="Make the human's move",
    )
    async def make_move(
        session_id: str,
        body: MoveRequestBody,
    ) -> Union[MoveResponse, JSONResponse]:
        """
        Move the human piece to a cell.

        **Request Body:**
        ```json
        {"q": -2, "r": 1, "s": 1}
        ```
        `s` may be left out.
        """
        response, events = api_service.make_move(session_id, body)
        if isinstance(response, ErrorResponse):
            return error_response(response)

        await broadcast_events(session_id, events)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start a new game",
    )
    async def restart(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Regenerate the board and reset both movers."""
        response, events = api_service.restart(session_id)
        if isinstance(response, ErrorResponse):
            return error_response(response)

        await broadcast_events(session_id, events)
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Full game state (sent on connect)
        - move_applied: A move was applied
        - game_over: Game ended, with the outcome
        - restarted: A new game started
        - error: Error occurred

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        ws_connections.setdefault(session_id, []).append(websocket)

        try:
            response = api_service.get_game_state(session_id)
            if isinstance(response, ErrorResponse):
                await websocket.send_json({
                    "type": "error",
                    "payload": response.model_dump(mode="json"),
                })
            else:
                await websocket.send_json({
                    "type": "state_update",
                    "payload": response.model_dump(mode="json"),
                })

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
                if message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})

        except WebSocketDisconnect:
            logger.debug("WebSocket for session %s disconnected", session_id)
        finally:
            connections = ws_connections.get(session_id, [])
            if websocket in connections:
                connections.remove(websocket)
            if not connections:
                ws_connections.pop(session_id, None)

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
        return HealthResponse(
            status="healthy",
            service="hexfuel",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Hexfuel API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn hexfuel.api.app:app
app = create_app()
