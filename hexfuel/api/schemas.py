"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a front-end and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- ILLEGAL_MOVE: Destination breaks the move rules
- NOT_YOUR_TURN: The AI is to move
- GAME_OVER: The game has finished; restart to play again
- VALIDATION_ERROR: Malformed request
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, model_validator


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    YOUR_TURN = "your_turn"
    AI_TURN = "ai_turn"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    GAME_OVER = "GAME_OVER"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CoordInfo(BaseModel):
    """Cube coordinate."""
    q: int
    r: int
    s: int


class CellInfo(BaseModel):
    """A board cell for display."""
    q: int
    r: int
    s: int
    value: int
    occupied: str = Field("none", description="none, human, ai")
    active: bool = True


class MoverInfo(BaseModel):
    """A mover's position and fuel."""
    side: str = Field(description="human or ai")
    position: CoordInfo
    fuel: int
    facing_angle: float = Field(description="Degrees, for drawing the piece")


class OutcomeInfo(BaseModel):
    """How a finished game ended."""
    winner: str = Field(description="human, ai, draw")
    human_fuel: int
    ai_fuel: int
    reason: str = Field(description="no_moves, two_cells_remain")
    message: str


class MoveInfo(BaseModel):
    """A move that was applied."""
    side: str
    origin: CoordInfo
    destination: CoordInfo
    distance: int
    cell_value: int
    fuel_before: int
    fuel_after: int


class EventInfo(BaseModel):
    """An event pushed to front-ends."""
    type: str = Field(description="move_applied, game_over, restarted")
    move: Optional[MoveInfo] = None
    outcome: Optional[OutcomeInfo] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    human_player_name: str = Field("Player", description="Display name for the human player")
    seed: Optional[int] = Field(None, description="Seed for a reproducible board")


class MoveRequestBody(BaseModel):
    """Destination for the human's move; `s` may be omitted (axial input)."""
    q: int
    r: int
    s: Optional[int] = None

    @model_validator(mode="after")
    def check_cube(self):
        if self.s is not None and self.q + self.r + self.s != 0:
            raise ValueError("q + r + s must be 0")
        return self

    def cube(self) -> tuple[int, int, int]:
        s = self.s if self.s is not None else -self.q - self.r
        return (self.q, self.r, s)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    human_player_name: str
    human_fuel: int
    ai_fuel: int
    move_count: int = 0
    created_at: float = 0.0
    api_version: str = "v1"


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    status: SessionStatus
    turn: str
    phase: str
    human: MoverInfo
    ai: MoverInfo
    cells: list[CellInfo] = Field(default_factory=list)
    active_count: int
    move_count: int = 0
    outcome: Optional[OutcomeInfo] = None
    api_version: str = "v1"


class LegalMovesResponse(BaseModel):
    """Legal destinations for the side to move."""
    session_id: str
    side: str
    moves: list[CellInfo] = Field(default_factory=list)
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """Response after the human's move (and the AI's reply, if any)."""
    session_id: str
    success: bool
    status: SessionStatus
    moves: list[MoveInfo] = Field(default_factory=list)
    events: list[EventInfo] = Field(default_factory=list)
    ai_explanation: Optional[str] = None
    game_state: Optional[GameStateResponse] = None
    api_version: str = "v1"


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
