"""
Action System - Move requests and their results.

A move request names who is moving and where to. The reducer answers
with a MoveResult: either the applied move with its effects, or the
IllegalMove that rejected it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import IllegalMove, IllegalMoveReason
from .hex_coord import CubeCoord
from .state import Side

if TYPE_CHECKING:
    from .state import Outcome


@dataclass(frozen=True)
class MoveRequest:
    """A request to move `side` to `destination`."""
    side: Side
    destination: CubeCoord

    @classmethod
    def to(cls, side: Side, q: int, r: int, s: int | None = None) -> MoveRequest:
        """Factory accepting cube (q, r, s) or axial (q, r) coordinates."""
        if s is None:
            return cls(side=side, destination=CubeCoord.from_axial(q, r))
        return cls(side=side, destination=CubeCoord(q, r, s))


@dataclass
class AppliedMove:
    """Effects of a move that went through."""
    side: Side
    origin: CubeCoord
    destination: CubeCoord
    distance: int
    cell_value: int
    fuel_before: int
    fuel_after: int

    def describe(self) -> str:
        who = "You" if self.side is Side.HUMAN else "Computer"
        return (
            f"{who} moved {self.origin} -> {self.destination} "
            f"(distance {self.distance}, platform {self.cell_value:+d}, "
            f"fuel {self.fuel_before} -> {self.fuel_after})"
        )


@dataclass
class MoveResult:
    """
    Result of applying a move request.

    Contains:
    - Whether the move succeeded
    - The applied move (if succeeded)
    - The rejection (if failed)
    - The outcome, if this move ended the game
    """
    success: bool
    move: AppliedMove | None = None
    error: IllegalMove | None = None
    outcome: Outcome | None = None
    changes: list[str] = field(default_factory=list)

    @property
    def error_code(self) -> str | None:
        if self.error is None:
            return None
        if self.error.reason in (IllegalMoveReason.NOT_YOUR_TURN, IllegalMoveReason.GAME_OVER):
            return self.error.reason.name
        return "ILLEGAL_MOVE"

    @classmethod
    def failure(cls, error: IllegalMove) -> MoveResult:
        return cls(success=False, error=error)

    @classmethod
    def applied(cls, move: AppliedMove, outcome: Outcome | None = None) -> MoveResult:
        changes = [move.describe()]
        if outcome is not None:
            changes.append(outcome.message)
        return cls(success=True, move=move, outcome=outcome, changes=changes)
