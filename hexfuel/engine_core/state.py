"""
Game State - The state container for one game.

Design principles:
- The board owns every cell; movers refer to cells by coordinate only
- Mutated in place, and only by the reducer
- Snapshots are immutable copies for front-ends
- A restart builds a brand new GameState rather than resetting this one
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import random

from ..config import (
    AI_FACING,
    AI_START,
    BOARD_RADIUS,
    HUMAN_FACING,
    HUMAN_START,
    STARTING_FUEL,
)
from .board import Board, Occupant
from .errors import MalformedBoard
from .hex_coord import CubeCoord


class Side(Enum):
    """The two participants."""
    HUMAN = "human"
    AI = "ai"

    @property
    def other(self) -> Side:
        return Side.AI if self is Side.HUMAN else Side.HUMAN

    @property
    def occupant(self) -> Occupant:
        return Occupant.HUMAN if self is Side.HUMAN else Occupant.AI


class GamePhase(Enum):
    """High-level game phases."""
    IN_PROGRESS = "in_progress"
    OVER = "over"


class Winner(Enum):
    HUMAN = "human"
    AI = "ai"
    DRAW = "draw"


class GameOverReason(Enum):
    NO_MOVES = "no_moves"
    TWO_CELLS_REMAIN = "two_cells_remain"


@dataclass
class Mover:
    """
    A piece on the board.

    `position` is a key into the board, resolved with Board.find_cell.
    """
    side: Side
    position: CubeCoord
    fuel: int = STARTING_FUEL
    facing_angle: float = 0.0


@dataclass(frozen=True)
class Outcome:
    """How a finished game ended."""
    winner: Winner
    human_fuel: int
    ai_fuel: int
    reason: GameOverReason

    @property
    def message(self) -> str:
        """End-of-game text for display."""
        h, a = self.human_fuel, self.ai_fuel
        if self.reason is GameOverReason.TWO_CELLS_REMAIN:
            if self.winner is Winner.HUMAN:
                return f"Game Over! You win with {h} fuel vs computer's {a}!"
            if self.winner is Winner.AI:
                return f"Game Over! Computer wins with {a} fuel vs your {h}!"
            return f"Game Over! It's a draw! Both players have {h} fuel."
        if self.winner is Winner.AI:
            return f"Game Over! You have no valid moves left. Computer wins with {a} fuel!"
        return f"Game Over! Computer has no valid moves left. You win with {h} fuel!"


# =============================================================================
# Snapshots
# =============================================================================

@dataclass(frozen=True)
class CellView:
    q: int
    r: int
    s: int
    value: int
    occupied: Occupant
    active: bool


@dataclass(frozen=True)
class MoverView:
    side: Side
    position: CubeCoord
    fuel: int
    facing_angle: float


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game at one point in time."""
    cells: tuple[CellView, ...]
    human: MoverView
    ai: MoverView
    turn: Side
    phase: GamePhase
    active_count: int
    move_count: int
    outcome: Outcome | None = None


# =============================================================================
# Game state
# =============================================================================

@dataclass
class GameState:
    """
    Complete state of one game.

    This is the canonical state the engine operates on.
    All changes go through the reducer.
    """
    board: Board
    human: Mover
    ai: Mover
    turn: Side = Side.HUMAN
    phase: GamePhase = GamePhase.IN_PROGRESS
    outcome: Outcome | None = None
    move_count: int = 0
    seed: int | None = None

    @classmethod
    def new(
        cls,
        rng: random.Random | None = None,
        radius: int = BOARD_RADIUS,
        seed: int | None = None,
    ) -> GameState:
        """
        Start a fresh game: new random board, both movers on their fixed
        starting cells with full fuel, human to move.

        Raises:
            MalformedBoard: a starting cell does not exist for this radius
        """
        if rng is None:
            rng = random.Random(seed)
        board = Board.generate(radius, rng)
        return cls.on_board(board, seed=seed)

    @classmethod
    def on_board(cls, board: Board, seed: int | None = None) -> GameState:
        """Place both movers on their starting cells of an existing board."""
        human = Mover(side=Side.HUMAN, position=CubeCoord(*HUMAN_START), facing_angle=HUMAN_FACING)
        ai = Mover(side=Side.AI, position=CubeCoord(*AI_START), facing_angle=AI_FACING)

        for mover in (human, ai):
            cell = board.find_cell(mover.position)
            if cell is None:
                raise MalformedBoard(
                    f"Starting cell {mover.position} for {mover.side.value} "
                    f"is not on a radius {board.radius} board"
                )
            cell.occupied = mover.side.occupant

        return cls(board=board, human=human, ai=ai, seed=seed)

    @property
    def is_over(self) -> bool:
        return self.phase is GamePhase.OVER

    def mover(self, side: Side) -> Mover:
        return self.human if side is Side.HUMAN else self.ai

    @property
    def current_mover(self) -> Mover:
        return self.mover(self.turn)

    def current(self) -> GameSnapshot:
        """Immutable snapshot for front-ends."""
        return GameSnapshot(
            cells=tuple(
                CellView(
                    q=cell.q,
                    r=cell.r,
                    s=cell.s,
                    value=cell.value,
                    occupied=cell.occupied,
                    active=cell.active,
                )
                for cell in self.board
            ),
            human=_mover_view(self.human),
            ai=_mover_view(self.ai),
            turn=self.turn,
            phase=self.phase,
            active_count=self.board.active_count(),
            move_count=self.move_count,
            outcome=self.outcome,
        )


def _mover_view(mover: Mover) -> MoverView:
    return MoverView(
        side=mover.side,
        position=mover.position,
        fuel=mover.fuel,
        facing_angle=mover.facing_angle,
    )
