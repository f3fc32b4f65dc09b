"""
Tests for the reducer (state transitions).

Tests:
- Move application
- State mutation correctness
- Validation
- Termination and outcomes
"""

import random

import pytest

from ..engine_core.action import MoveRequest
from ..engine_core.board import Board, Occupant
from ..engine_core.errors import IllegalMoveReason, MalformedBoard
from ..engine_core.hex_coord import CubeCoord
from ..engine_core.reducer import apply_move, declare_stuck, determine_outcome
from ..engine_core.state import GameOverReason, GamePhase, GameState, Side, Winner


DEST = CubeCoord(1, 1, -2)  # three cells up the human's north-east ray


class TestApplyMove:
    """Tests for applying legal moves."""

    def test_fuel_and_board_after_move(self, build_state, human_start):
        """Distance 3 onto a +7 cell: 12 - 3 + 7 = 16."""
        state = build_state(values={DEST: 7})
        active_before = state.board.active_count()

        result = apply_move(state, MoveRequest(Side.HUMAN, DEST))

        assert result.success
        assert state.human.fuel == 16
        assert state.human.position == DEST

        origin = state.board.find_cell(human_start)
        assert origin.active is False
        assert origin.occupied is Occupant.NONE

        dest = state.board.find_cell(DEST)
        assert dest.occupied is Occupant.HUMAN
        assert dest.active

        assert state.board.active_count() == active_before - 1
        assert state.turn is Side.AI
        assert state.move_count == 1

    def test_applied_move_record(self, build_state, human_start):
        state = build_state(values={DEST: 7})
        result = apply_move(state, MoveRequest.to(Side.HUMAN, 1, 1))

        move = result.move
        assert move.side is Side.HUMAN
        assert move.origin == human_start
        assert move.destination == DEST
        assert move.distance == 3
        assert move.cell_value == 7
        assert (move.fuel_before, move.fuel_after) == (12, 16)
        assert result.outcome is None
        assert result.changes == [move.describe()]

    def test_fuel_can_go_negative(self, build_state):
        dest = CubeCoord(2, 0, -2)
        state = build_state(values={dest: -9})
        apply_move(state, MoveRequest(Side.HUMAN, dest))
        assert state.human.fuel == 12 - 4 - 9

    def test_fuel_is_not_capped(self, build_state):
        dest = CubeCoord(-1, 3, -2)
        state = build_state(values={dest: 9})
        apply_move(state, MoveRequest(Side.HUMAN, dest))
        assert state.human.fuel == 20

    def test_players_alternate(self, uniform_state):
        apply_move(uniform_state, MoveRequest(Side.HUMAN, DEST))
        result = apply_move(uniform_state, MoveRequest(Side.AI, CubeCoord(2, -3, 1)))
        assert result.success
        assert uniform_state.turn is Side.HUMAN
        assert uniform_state.ai.fuel == 12 - 1 + 5


class TestValidation:
    """Rejected moves leave the state untouched."""

    def _assert_unchanged(self, state, human_start):
        assert state.human.position == human_start
        assert state.human.fuel == 12
        assert state.board.active_count() == 61
        assert state.move_count == 0
        assert state.turn is Side.HUMAN

    def test_illegal_destination(self, uniform_state, human_start):
        result = apply_move(uniform_state, MoveRequest(Side.HUMAN, CubeCoord(0, 3, -3)))
        assert not result.success
        assert result.error.reason is IllegalMoveReason.NOT_STRAIGHT_LINE
        assert result.error_code == "ILLEGAL_MOVE"
        self._assert_unchanged(uniform_state, human_start)

    def test_off_board_destination(self, uniform_state, human_start):
        result = apply_move(uniform_state, MoveRequest(Side.HUMAN, CubeCoord(-2, 9, -7)))
        assert not result.success
        assert result.error.reason is IllegalMoveReason.NO_SUCH_CELL
        self._assert_unchanged(uniform_state, human_start)

    def test_wrong_turn(self, uniform_state, human_start):
        result = apply_move(uniform_state, MoveRequest(Side.AI, CubeCoord(2, -3, 1)))
        assert not result.success
        assert result.error_code == "NOT_YOUR_TURN"
        self._assert_unchanged(uniform_state, human_start)

    def test_no_moves_after_game_over(self, build_state):
        state = build_state(values={DEST: 7}, keep_active=[DEST])
        assert apply_move(state, MoveRequest(Side.HUMAN, DEST)).outcome is not None

        result = apply_move(state, MoveRequest(Side.AI, CubeCoord(2, -3, 1)))
        assert not result.success
        assert result.error_code == "GAME_OVER"


class TestTermination:
    """Tests for the end-of-game check."""

    @pytest.mark.parametrize("ai_fuel,winner", [
        (10, Winner.HUMAN),
        (20, Winner.AI),
        (16, Winner.DRAW),
    ])
    def test_two_cells_remain(self, build_state, ai_fuel, winner):
        state = build_state(values={DEST: 7}, keep_active=[DEST])
        state.ai.fuel = ai_fuel

        result = apply_move(state, MoveRequest(Side.HUMAN, DEST))

        assert state.board.active_count() == 2
        assert state.phase is GamePhase.OVER
        assert result.outcome.reason is GameOverReason.TWO_CELLS_REMAIN
        assert result.outcome.winner is winner
        assert (result.outcome.human_fuel, result.outcome.ai_fuel) == (16, ai_fuel)
        assert state.outcome == result.outcome

    def test_draw_message(self, build_state):
        state = build_state(values={DEST: 7}, keep_active=[DEST])
        state.ai.fuel = 16
        result = apply_move(state, MoveRequest(Side.HUMAN, DEST))
        assert result.outcome.message == "Game Over! It's a draw! Both players have 16 fuel."

    def test_opponent_stuck_loses(self, uniform_state):
        uniform_state.ai.fuel = 0
        result = apply_move(uniform_state, MoveRequest(Side.HUMAN, DEST))
        assert result.outcome.winner is Winner.HUMAN
        assert result.outcome.reason is GameOverReason.NO_MOVES
        assert "Computer has no valid moves left" in result.outcome.message

    def test_mover_stranding_itself_loses(self, build_state):
        """12 - 3 - 9 leaves no fuel to move again."""
        state = build_state(values={DEST: -9})
        result = apply_move(state, MoveRequest(Side.HUMAN, DEST))
        assert state.human.fuel == 0
        assert result.outcome.winner is Winner.AI
        assert result.outcome.reason is GameOverReason.NO_MOVES

    def test_stuck_beats_fuel_lead(self, build_state):
        """Human ends on 16 fuel against 12 but has no free cell on any ray."""
        off_ray = CubeCoord(0, 3, -3)
        ai_only = CubeCoord(2, -3, 1)
        state = build_state(values={DEST: 7}, keep_active=[DEST, off_ray, ai_only])

        result = apply_move(state, MoveRequest(Side.HUMAN, DEST))

        assert state.board.active_count() == 4
        assert state.human.fuel > state.ai.fuel
        assert result.outcome.winner is Winner.AI
        assert result.outcome.reason is GameOverReason.NO_MOVES

    def test_both_stuck_reports_human_first(self, uniform_state):
        uniform_state.human.fuel = 0
        uniform_state.ai.fuel = 0
        outcome = determine_outcome(uniform_state)
        assert outcome.winner is Winner.AI
        assert outcome.reason is GameOverReason.NO_MOVES

    def test_game_goes_on(self, uniform_state):
        assert determine_outcome(uniform_state) is None

    def test_declare_stuck(self, uniform_state):
        uniform_state.turn = Side.AI
        outcome = declare_stuck(uniform_state, Side.AI)
        assert outcome.winner is Winner.HUMAN
        assert uniform_state.is_over


class TestNewGame:
    """Tests for building the initial state."""

    def test_initial_state(self, seeded_state, human_start, ai_start):
        assert seeded_state.human.position == human_start
        assert seeded_state.ai.position == ai_start
        assert seeded_state.human.fuel == seeded_state.ai.fuel == 12
        assert seeded_state.turn is Side.HUMAN
        assert seeded_state.phase is GamePhase.IN_PROGRESS
        assert seeded_state.board.find_cell(human_start).occupied is Occupant.HUMAN
        assert seeded_state.board.find_cell(ai_start).occupied is Occupant.AI

    def test_facing_angles(self, seeded_state):
        assert seeded_state.human.facing_angle == 30.0
        assert seeded_state.ai.facing_angle == 210.0

    def test_start_cells_missing(self):
        with pytest.raises(MalformedBoard):
            GameState.new(random.Random(1), radius=3)

    def test_on_board_requires_start_cells(self):
        with pytest.raises(MalformedBoard):
            GameState.on_board(Board.from_values(2, {}))

    def test_snapshot_is_a_copy(self, uniform_state):
        snapshot = uniform_state.current()
        apply_move(uniform_state, MoveRequest(Side.HUMAN, DEST))

        assert snapshot.move_count == 0
        assert snapshot.turn is Side.HUMAN
        assert snapshot.active_count == 61
        assert snapshot.human.fuel == 12
        assert len(snapshot.cells) == 61
