"""
Errors - Exception taxonomy for the engine.

- IllegalMove: a rejected move request. Recoverable, state is unchanged.
- NoMoves: the AI has nowhere to go. A termination trigger, not a fault.
- MalformedBoard: the fixed starting cells are missing from the board.
"""

from __future__ import annotations
from enum import Enum


class HexFuelError(Exception):
    """Base class for all engine errors."""


class IllegalMoveReason(Enum):
    """Why a move request was rejected."""
    NO_SUCH_CELL = "no_such_cell"
    CELL_INACTIVE = "cell_inactive"
    CELL_OCCUPIED = "cell_occupied"
    INSUFFICIENT_FUEL = "insufficient_fuel"
    NO_MOVEMENT = "no_movement"
    NOT_STRAIGHT_LINE = "not_straight_line"
    NOT_YOUR_TURN = "not_your_turn"
    GAME_OVER = "game_over"


class IllegalMove(HexFuelError):
    """A move that the rules do not allow."""

    def __init__(self, reason: IllegalMoveReason, message: str = ""):
        self.reason = reason
        self.message = message or reason.value.replace("_", " ")
        super().__init__(self.message)


class NoMoves(HexFuelError):
    """The mover has no legal destinations."""


class MalformedBoard(HexFuelError):
    """The board is missing a cell the game requires."""


class NoMovement(ValueError):
    """Direction requested between a coordinate and itself."""


class NotStraightLine(ValueError):
    """Two coordinates do not lie on one of the six hex rays."""
