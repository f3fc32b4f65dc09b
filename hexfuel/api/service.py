"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Formats responses for front-ends

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..config import default_seed
from ..engine_core.action import AppliedMove
from ..engine_core.board import Cell
from ..engine_core.hex_coord import CubeCoord
from ..engine_core.state import CellView, GameSnapshot, MoverView, Outcome, Side
from ..session import GameEvent, LoopState, Session, SessionManager
from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequestBody,
    # Responses
    ErrorResponse,
    GameStateResponse,
    LegalMovesResponse,
    MoveResponse,
    SessionResponse,
    # Shared
    CellInfo,
    CoordInfo,
    EventInfo,
    MoveInfo,
    MoverInfo,
    OutcomeInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest(seed=3))
        response = service.make_move(session.session_id, MoveRequestBody(q=-2, r=1))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Create a new game session, clearing out stale finished ones first."""
        self.session_manager.cleanup_stale_sessions()
        seed = request.seed if request.seed is not None else default_seed()
        session = self.session_manager.create_session(
            human_player_name=request.human_player_name,
            seed=seed,
        )
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._session_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)
        return self._build_game_state(session)

    def get_legal_moves(self, session_id: str) -> LegalMovesResponse | ErrorResponse:
        """Legal destinations for whoever is to move (none once the game is over)."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id)

        loop = session.loop
        cells = [] if loop.state.is_over else loop.legal_moves()
        return LegalMovesResponse(
            session_id=session_id,
            side=loop.state.turn.value,
            moves=[_cell_info(cell) for cell in cells],
        )

    def make_move(
        self,
        session_id: str,
        body: MoveRequestBody,
    ) -> tuple[MoveResponse | ErrorResponse, list[GameEvent]]:
        """
        Apply the human's move.

        Returns the response and the events to broadcast.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id), []

        result = session.loop.request_move(Side.HUMAN, CubeCoord(*body.cube()))
        if not result.success:
            return ErrorResponse(
                error=result.errors[0] if result.errors else "Move rejected",
                error_code=ErrorCode(result.error_code or ErrorCode.ILLEGAL_MOVE.value),
                details={"destination": dict(zip("qrs", body.cube()))},
            ), []

        response = MoveResponse(
            session_id=session_id,
            success=True,
            status=_loop_state_to_status(result.loop_state),
            moves=[_move_info(move) for move in result.moves],
            events=[event_info(event) for event in result.events],
            ai_explanation=result.ai_decision.explanation if result.ai_decision else None,
            game_state=self._build_game_state(session),
        )
        return response, result.events

    def restart(self, session_id: str) -> tuple[GameStateResponse | ErrorResponse, list[GameEvent]]:
        """Start a new game in the same session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _session_not_found(session_id), []

        result = session.loop.restart()
        return self._build_game_state(session), result.events

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _session_to_response(self, session: Session) -> SessionResponse:
        state = session.loop.state
        return SessionResponse(
            session_id=session.session_id,
            status=_loop_state_to_status(session.loop.loop_state),
            human_player_name=session.human_player_name,
            human_fuel=state.human.fuel,
            ai_fuel=state.ai.fuel,
            move_count=state.move_count,
            created_at=session.created_at,
        )

    def _build_game_state(self, session: Session) -> GameStateResponse:
        return snapshot_to_response(
            session.session_id,
            session.loop.current(),
            _loop_state_to_status(session.loop.loop_state),
        )


def snapshot_to_response(
    session_id: str,
    snapshot: GameSnapshot,
    status: SessionStatus,
) -> GameStateResponse:
    """Convert a GameSnapshot to its API form."""
    return GameStateResponse(
        session_id=session_id,
        status=status,
        turn=snapshot.turn.value,
        phase=snapshot.phase.value,
        human=_mover_info(snapshot.human),
        ai=_mover_info(snapshot.ai),
        cells=[_cell_info(cell) for cell in snapshot.cells],
        active_count=snapshot.active_count,
        move_count=snapshot.move_count,
        outcome=_outcome_info(snapshot.outcome) if snapshot.outcome else None,
    )


def event_info(event: GameEvent) -> EventInfo:
    return EventInfo(
        type=event.event_type.value,
        move=_move_info(event.move) if event.move else None,
        outcome=_outcome_info(event.outcome) if event.outcome else None,
    )


def _loop_state_to_status(loop_state: LoopState) -> SessionStatus:
    mapping = {
        LoopState.HUMAN_TURN: SessionStatus.YOUR_TURN,
        LoopState.AI_TURN: SessionStatus.AI_TURN,
        LoopState.GAME_OVER: SessionStatus.GAME_OVER,
    }
    return mapping[loop_state]


def _session_not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


def _coord_info(coord: CubeCoord) -> CoordInfo:
    return CoordInfo(q=coord.q, r=coord.r, s=coord.s)


def _cell_info(cell: Cell | CellView) -> CellInfo:
    return CellInfo(
        q=cell.q,
        r=cell.r,
        s=cell.s,
        value=cell.value,
        occupied=cell.occupied.value,
        active=cell.active,
    )


def _mover_info(mover: MoverView) -> MoverInfo:
    return MoverInfo(
        side=mover.side.value,
        position=_coord_info(mover.position),
        fuel=mover.fuel,
        facing_angle=mover.facing_angle,
    )


def _move_info(move: AppliedMove) -> MoveInfo:
    return MoveInfo(
        side=move.side.value,
        origin=_coord_info(move.origin),
        destination=_coord_info(move.destination),
        distance=move.distance,
        cell_value=move.cell_value,
        fuel_before=move.fuel_before,
        fuel_after=move.fuel_after,
    )


def _outcome_info(outcome: Outcome) -> OutcomeInfo:
    return OutcomeInfo(
        winner=outcome.winner.value,
        human_fuel=outcome.human_fuel,
        ai_fuel=outcome.ai_fuel,
        reason=outcome.reason.value,
        message=outcome.message,
    )
