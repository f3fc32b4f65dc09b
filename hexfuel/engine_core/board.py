"""
Board - The hexagonal grid and its cells.

The board owns every cell for the whole session. Cells are never removed
or recreated: a cell that a mover departs is marked inactive and stays in
storage, so lookups on destroyed cells still succeed.

Cells keep their generation order (q-major, then r). That order is the
enumeration order for legal moves and AI candidates, which makes the AI
deterministic for a given board.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator
import random

from ..config import NEGATIVE_VALUES, POSITIVE_VALUES
from .hex_coord import CubeCoord


class Occupant(Enum):
    """Who stands on a cell."""
    NONE = "none"
    HUMAN = "human"
    AI = "ai"


@dataclass(eq=False)
class Cell:
    """
    A single platform on the board.

    Identity is the object itself: two cells are equal only if they are
    the same cell of the same board.
    """
    coord: CubeCoord
    value: int
    occupied: Occupant = Occupant.NONE
    active: bool = True

    @property
    def q(self) -> int:
        return self.coord.q

    @property
    def r(self) -> int:
        return self.coord.r

    @property
    def s(self) -> int:
        return self.coord.s

    @property
    def is_free(self) -> bool:
        """Active and unoccupied."""
        return self.active and self.occupied is Occupant.NONE


def random_cell_value(rng: random.Random) -> int:
    """Coin flip for the sign, then a uniform magnitude in 5..9."""
    if rng.random() < 0.5:
        return rng.choice(NEGATIVE_VALUES)
    return rng.choice(POSITIVE_VALUES)


class Board:
    """Hexagon of radius R holding 3R² + 3R + 1 cells."""

    def __init__(self, radius: int, cells: list[Cell]):
        self.radius = radius
        self._cells = cells
        self._index: dict[CubeCoord, Cell] = {cell.coord: cell for cell in cells}

    @classmethod
    def generate(cls, radius: int, rng: random.Random | None = None) -> Board:
        """Build a full hexagon with randomly valued cells."""
        rng = rng or random.Random()
        cells = [
            Cell(coord=coord, value=random_cell_value(rng))
            for coord in hexagon_coords(radius)
        ]
        return cls(radius, cells)

    @classmethod
    def from_values(cls, radius: int, values: dict[CubeCoord, int], default: int = 5) -> Board:
        """Build a hexagon with chosen values; cells not listed get `default`."""
        cells = [
            Cell(coord=coord, value=values.get(coord, default))
            for coord in hexagon_coords(radius)
        ]
        return cls(radius, cells)

    @property
    def cells(self) -> list[Cell]:
        return self._cells

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def find_cell(self, q: CubeCoord | int, r: int | None = None, s: int | None = None) -> Cell | None:
        """
        Exact-match lookup.

        Accepts a CubeCoord or three integers. Returns None for coordinates
        off the board (including non-cube triples).
        """
        if isinstance(q, CubeCoord):
            return self._index.get(q)
        if r is None or s is None or q + r + s != 0:
            return None
        return self._index.get(CubeCoord(q, r, s))

    def get(self, coord: CubeCoord) -> Cell:
        """Lookup that raises KeyError for missing cells."""
        return self._index[coord]

    def active_count(self) -> int:
        return sum(1 for cell in self._cells if cell.active)


def hexagon_coords(radius: int) -> list[CubeCoord]:
    """All coordinates within `radius` of the origin, q-major order."""
    coords = []
    for q in range(-radius, radius + 1):
        r1 = max(-radius, -q - radius)
        r2 = min(radius, -q + radius)
        for r in range(r1, r2 + 1):
            coords.append(CubeCoord(q, r, -q - r))
    return coords


def cell_count(radius: int) -> int:
    return 3 * radius * radius + 3 * radius + 1
