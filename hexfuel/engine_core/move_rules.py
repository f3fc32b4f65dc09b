"""
Move Rules - Legality of moves.

A destination is legal for a mover when:
1. The cell exists and is still active
2. Nobody stands on it
3. Its distance is within the mover's fuel
4. It lies on one of the six rays from the mover's position

Cells between the start and the destination are not checked: a ray may
pass over destroyed or occupied cells.

Used by:
1. The reducer to validate requested moves
2. Bots to enumerate candidates
3. Termination checks (a side with no legal destinations is stuck)
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from .errors import IllegalMove, IllegalMoveReason, NoMovement, NotStraightLine
from .hex_coord import direction, distance

if TYPE_CHECKING:
    from .board import Board, Cell
    from .state import Mover

logger = logging.getLogger(__name__)


def check_move(mover: Mover, destination: Cell | None, board: Board) -> int:
    """
    Validate a single destination.

    Returns the travel distance for a legal move.

    Raises:
        IllegalMove: with the first rule the destination breaks
    """
    if destination is None:
        raise IllegalMove(IllegalMoveReason.NO_SUCH_CELL, "No cell at that position")
    if not destination.active:
        raise IllegalMove(IllegalMoveReason.CELL_INACTIVE, f"Cell {destination.coord} has been destroyed")
    if not destination.is_free:
        raise IllegalMove(IllegalMoveReason.CELL_OCCUPIED, f"Cell {destination.coord} is occupied")

    dist = distance(mover.position, destination.coord)
    if dist > mover.fuel:
        raise IllegalMove(
            IllegalMoveReason.INSUFFICIENT_FUEL,
            f"Not enough fuel: distance {dist}, fuel {mover.fuel}",
        )

    try:
        direction(mover.position, destination.coord)
    except NoMovement:
        raise IllegalMove(IllegalMoveReason.NO_MOVEMENT, "Cannot move to the current position")
    except NotStraightLine:
        raise IllegalMove(
            IllegalMoveReason.NOT_STRAIGHT_LINE,
            f"Cell {destination.coord} is not in a straight line from {mover.position}",
        )

    return dist


def is_legal(mover: Mover, destination: Cell | None, board: Board) -> bool:
    """Check a single destination without raising."""
    try:
        check_move(mover, destination, board)
    except IllegalMove as e:
        logger.debug("Move %s -> %s rejected: %s", mover.side.value,
                     destination.coord if destination else None, e.message)
        return False
    return True


def legal_destinations(mover: Mover, board: Board) -> list[Cell]:
    """All legal destinations for the mover, in board order."""
    legal = []
    for cell in board:
        if not cell.is_free:
            continue
        if distance(mover.position, cell.coord) > mover.fuel:
            continue
        try:
            direction(mover.position, cell.coord)
        except ValueError:
            continue
        legal.append(cell)
    return legal


def has_legal_move(mover: Mover, board: Board) -> bool:
    return bool(legal_destinations(mover, board))
