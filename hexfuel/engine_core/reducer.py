"""
Reducer - Applies moves to game state.

The reducer is the single point of state mutation.
All moves must go through apply_move().

Design principles:
- Validates before applying; a rejected move changes nothing
- Returns MoveResult with success/failure
- Checks termination after every applied move, before the turn passes
"""

from __future__ import annotations
import logging

from ..config import MIN_ACTIVE_CELLS
from .action import AppliedMove, MoveRequest, MoveResult
from .board import Occupant
from .errors import IllegalMove, IllegalMoveReason
from .move_rules import check_move, has_legal_move
from .state import GamePhase, GameOverReason, GameState, Outcome, Side, Winner

logger = logging.getLogger(__name__)


def apply_move(state: GameState, request: MoveRequest) -> MoveResult:
    """
    Apply a move request to the game state.

    On success the mover pays the distance in fuel and collects the
    destination value, the origin cell is destroyed, and either the game
    ends or the turn passes to the other side.
    """
    try:
        _validate_turn(state, request.side)
        mover = state.mover(request.side)
        destination = state.board.find_cell(request.destination)
        dist = check_move(mover, destination, state.board)
    except IllegalMove as e:
        logger.debug("Rejected %s move to %s: %s", request.side.value, request.destination, e.message)
        return MoveResult.failure(e)

    origin = state.board.get(mover.position)
    fuel_before = mover.fuel

    # No clamping: fuel may go negative or exceed the starting amount
    mover.fuel = mover.fuel - dist + destination.value

    origin.occupied = Occupant.NONE
    origin.active = False
    destination.occupied = request.side.occupant
    mover.position = destination.coord
    state.move_count += 1

    move = AppliedMove(
        side=request.side,
        origin=origin.coord,
        destination=destination.coord,
        distance=dist,
        cell_value=destination.value,
        fuel_before=fuel_before,
        fuel_after=mover.fuel,
    )
    logger.info(move.describe())

    outcome = determine_outcome(state)
    if outcome is not None:
        finish_game(state, outcome)
    else:
        state.turn = request.side.other

    return MoveResult.applied(move, outcome)


def _validate_turn(state: GameState, side: Side) -> None:
    if state.phase is GamePhase.OVER:
        raise IllegalMove(IllegalMoveReason.GAME_OVER, "Game is over - no moves allowed")
    if side is not state.turn:
        raise IllegalMove(IllegalMoveReason.NOT_YOUR_TURN, f"Not {side.value}'s turn")


def determine_outcome(state: GameState) -> Outcome | None:
    """
    Termination check. Returns the outcome if the game is over, else None.

    Precedence:
    1. Two or fewer active cells: higher fuel wins, equal is a draw
    2. A side without legal moves loses, whatever the fuel totals
       (if both are stuck the human is reported first)
    """
    human_fuel, ai_fuel = state.human.fuel, state.ai.fuel

    if state.board.active_count() <= MIN_ACTIVE_CELLS:
        if human_fuel > ai_fuel:
            winner = Winner.HUMAN
        elif ai_fuel > human_fuel:
            winner = Winner.AI
        else:
            winner = Winner.DRAW
        return Outcome(winner, human_fuel, ai_fuel, GameOverReason.TWO_CELLS_REMAIN)

    if not has_legal_move(state.human, state.board):
        return Outcome(Winner.AI, human_fuel, ai_fuel, GameOverReason.NO_MOVES)
    if not has_legal_move(state.ai, state.board):
        return Outcome(Winner.HUMAN, human_fuel, ai_fuel, GameOverReason.NO_MOVES)

    return None


def declare_stuck(state: GameState, side: Side) -> Outcome:
    """
    End the game because `side` cannot move.

    The normal termination check takes precedence when it already
    reports an outcome.
    """
    outcome = determine_outcome(state)
    if outcome is None:
        winner = Winner.HUMAN if side is Side.AI else Winner.AI
        outcome = Outcome(winner, state.human.fuel, state.ai.fuel, GameOverReason.NO_MOVES)
    finish_game(state, outcome)
    return outcome


def finish_game(state: GameState, outcome: Outcome) -> None:
    state.phase = GamePhase.OVER
    state.outcome = outcome
    logger.info(outcome.message)
