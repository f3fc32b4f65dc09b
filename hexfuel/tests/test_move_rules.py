"""
Tests for move legality.

Tests:
- Legal destination enumeration
- Single-target validation and rejection reasons
- Rays pass over destroyed and occupied cells
"""

import pytest

from ..engine_core.board import Occupant
from ..engine_core.errors import IllegalMove, IllegalMoveReason
from ..engine_core.hex_coord import CubeCoord, distance, is_straight_line
from ..engine_core.move_rules import check_move, has_legal_move, is_legal, legal_destinations


class TestLegalDestinations:
    """Tests for enumerating legal moves."""

    def test_every_destination_satisfies_the_rules(self, seeded_state):
        for mover in (seeded_state.human, seeded_state.ai):
            for cell in legal_destinations(mover, seeded_state.board):
                assert cell.active
                assert cell.is_free
                assert distance(mover.position, cell.coord) <= mover.fuel
                assert is_straight_line(mover.position, cell.coord)

    def test_enumeration_matches_single_checks(self, seeded_state):
        mover = seeded_state.human
        legal = legal_destinations(mover, seeded_state.board)
        expected = [c for c in seeded_state.board if is_legal(mover, c, seeded_state.board)]
        assert legal == expected

    def test_opening_moves_from_human_start(self, uniform_state):
        """Rays that leave the board contribute nothing."""
        coords = {c.coord for c in legal_destinations(uniform_state.human, uniform_state.board)}
        assert CubeCoord(-1, 3, -2) in coords
        assert CubeCoord(2, 0, -2) in coords
        assert CubeCoord(-2, 0, 2) in coords
        assert CubeCoord(-1, 4, -3) in coords
        assert CubeCoord(-1, 2, -1) not in coords
        assert all(is_straight_line(uniform_state.human.position, c) for c in coords)

    def test_fuel_limits_reach(self, uniform_state):
        uniform_state.human.fuel = 1
        for cell in legal_destinations(uniform_state.human, uniform_state.board):
            assert distance(uniform_state.human.position, cell.coord) == 1

    def test_no_fuel_no_moves(self, uniform_state):
        uniform_state.ai.fuel = 0
        assert legal_destinations(uniform_state.ai, uniform_state.board) == []
        assert not has_legal_move(uniform_state.ai, uniform_state.board)

    def test_rays_jump_over_destroyed_cells(self, uniform_state):
        board = uniform_state.board
        board.find_cell(-1, 3, -2).active = False
        board.find_cell(0, 2, -2).active = False
        coords = {c.coord for c in legal_destinations(uniform_state.human, board)}
        assert CubeCoord(1, 1, -2) in coords

    def test_rays_jump_over_occupied_cells(self, uniform_state):
        board = uniform_state.board
        board.find_cell(-1, 3, -2).occupied = Occupant.AI
        coords = {c.coord for c in legal_destinations(uniform_state.human, board)}
        assert CubeCoord(-1, 3, -2) not in coords
        assert CubeCoord(0, 2, -2) in coords


class TestCheckMove:
    """Tests for single-target validation."""

    def _reason(self, mover, cell, board):
        with pytest.raises(IllegalMove) as excinfo:
            check_move(mover, cell, board)
        return excinfo.value.reason

    def test_legal_move_returns_distance(self, uniform_state):
        cell = uniform_state.board.find_cell(1, 1, -2)
        assert check_move(uniform_state.human, cell, uniform_state.board) == 3

    def test_missing_cell(self, uniform_state):
        assert self._reason(uniform_state.human, None, uniform_state.board) is IllegalMoveReason.NO_SUCH_CELL

    def test_inactive_cell(self, uniform_state):
        cell = uniform_state.board.find_cell(-1, 3, -2)
        cell.active = False
        assert self._reason(uniform_state.human, cell, uniform_state.board) is IllegalMoveReason.CELL_INACTIVE

    def test_occupied_cell(self, uniform_state):
        cell = uniform_state.board.find_cell(uniform_state.ai.position)
        uniform_state.human.fuel = 20
        assert self._reason(uniform_state.human, cell, uniform_state.board) is IllegalMoveReason.CELL_OCCUPIED

    def test_own_cell_is_rejected(self, uniform_state):
        cell = uniform_state.board.find_cell(uniform_state.human.position)
        assert not is_legal(uniform_state.human, cell, uniform_state.board)

    def test_insufficient_fuel(self, uniform_state):
        uniform_state.human.fuel = 2
        cell = uniform_state.board.find_cell(1, 1, -2)
        assert self._reason(uniform_state.human, cell, uniform_state.board) is IllegalMoveReason.INSUFFICIENT_FUEL

    def test_not_straight_line(self, uniform_state):
        cell = uniform_state.board.find_cell(0, 3, -3)
        assert self._reason(uniform_state.human, cell, uniform_state.board) is IllegalMoveReason.NOT_STRAIGHT_LINE

    def test_no_movement(self, uniform_state):
        """A free cell under a mover's own coordinate is a zero-length move."""
        cell = uniform_state.board.find_cell(uniform_state.human.position)
        cell.occupied = Occupant.NONE
        assert self._reason(uniform_state.human, cell, uniform_state.board) is IllegalMoveReason.NO_MOVEMENT

    def test_is_legal_never_raises(self, uniform_state):
        assert is_legal(uniform_state.human, None, uniform_state.board) is False
        cell = uniform_state.board.find_cell(1, 1, -2)
        assert is_legal(uniform_state.human, cell, uniform_state.board) is True
