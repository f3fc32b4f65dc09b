"""
API Module - Front-end interface.

Exposes the engine via REST API (and a WebSocket event feed).
A front-end:
1. Creates a game session
2. Reads the board and the legal destinations
3. Submits the human's moves and receives the AI's replies
4. Restarts when the game is over

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequestBody,
    # Responses
    SessionResponse,
    GameStateResponse,
    LegalMovesResponse,
    MoveResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    CoordInfo,
    CellInfo,
    MoverInfo,
    MoveInfo,
    OutcomeInfo,
    EventInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "MoveRequestBody",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "LegalMovesResponse",
    "MoveResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "CoordInfo",
    "CellInfo",
    "MoverInfo",
    "MoveInfo",
    "OutcomeInfo",
    "EventInfo",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
