"""
Pytest fixtures for Hexfuel tests.
"""

import random

import pytest

from ..config import AI_START, HUMAN_START
from ..engine_core.board import Board
from ..engine_core.hex_coord import CubeCoord
from ..engine_core.state import GameState


@pytest.fixture
def human_start() -> CubeCoord:
    return CubeCoord(*HUMAN_START)


@pytest.fixture
def ai_start() -> CubeCoord:
    return CubeCoord(*AI_START)


@pytest.fixture
def seeded_state() -> GameState:
    """A randomly generated game with a fixed seed."""
    return GameState.new(random.Random(42), seed=42)


@pytest.fixture
def uniform_board() -> Board:
    """Full radius 4 board where every cell is worth +5."""
    return Board.from_values(4, {}, default=5)


@pytest.fixture
def uniform_state(uniform_board: Board) -> GameState:
    """Fresh game on the uniform board."""
    return GameState.on_board(uniform_board)


@pytest.fixture
def build_state():
    """
    Factory for hand-built games.

    Args:
        values: cell values by coordinate (others are +5)
        keep_active: if given, every other unoccupied cell is destroyed
    """
    def build(values=None, keep_active=None):
        board = Board.from_values(4, values or {}, default=5)
        state = GameState.on_board(board)
        if keep_active is not None:
            keep = set(keep_active) | {state.human.position, state.ai.position}
            for cell in board:
                if cell.coord not in keep:
                    cell.active = False
        return state

    return build
