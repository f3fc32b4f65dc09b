"""
Engine Core - Hex geometry, board state and move resolution.

The engine:
1. Builds the board and places both movers
2. Validates move requests against the move rules
3. Applies legal moves via the reducer
4. Detects the end of the game
"""

from .hex_coord import CubeCoord, DIRECTIONS, distance, direction, is_straight_line, round_cube
from .board import Board, Cell, Occupant
from .state import (
    GameOverReason,
    GamePhase,
    GameSnapshot,
    GameState,
    Mover,
    Outcome,
    Side,
    Winner,
)
from .action import AppliedMove, MoveRequest, MoveResult
from .move_rules import check_move, is_legal, legal_destinations
from .reducer import apply_move, declare_stuck, determine_outcome
from .errors import (
    HexFuelError,
    IllegalMove,
    IllegalMoveReason,
    MalformedBoard,
    NoMovement,
    NoMoves,
    NotStraightLine,
)

__all__ = [
    "CubeCoord",
    "DIRECTIONS",
    "distance",
    "direction",
    "is_straight_line",
    "round_cube",
    "Board",
    "Cell",
    "Occupant",
    "GameOverReason",
    "GamePhase",
    "GameSnapshot",
    "GameState",
    "Mover",
    "Outcome",
    "Side",
    "Winner",
    "AppliedMove",
    "MoveRequest",
    "MoveResult",
    "check_move",
    "is_legal",
    "legal_destinations",
    "apply_move",
    "declare_stuck",
    "determine_outcome",
    "HexFuelError",
    "IllegalMove",
    "IllegalMoveReason",
    "MalformedBoard",
    "NoMovement",
    "NoMoves",
    "NotStraightLine",
]
