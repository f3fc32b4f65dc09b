"""
Hex Coordinates - Cube coordinate geometry.

Every cell is addressed by a cube coordinate (q, r, s) with q + r + s = 0.
The same type is used for direction and displacement vectors.

Moves travel along rays: any positive multiple of one of the six unit
directions, not just a single step to a neighbour.

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations
from dataclasses import dataclass
import math

from .errors import NoMovement, NotStraightLine


@dataclass(frozen=True)
class CubeCoord:
    """Immutable cube coordinate."""
    q: int
    r: int
    s: int

    def __post_init__(self):
        if self.q + self.r + self.s != 0:
            raise ValueError(
                f"Invalid cube coordinate ({self.q}, {self.r}, {self.s}): q + r + s must be 0"
            )

    @classmethod
    def from_axial(cls, q: int, r: int) -> CubeCoord:
        return cls(q, r, -q - r)

    def __add__(self, other: CubeCoord) -> CubeCoord:
        return CubeCoord(self.q + other.q, self.r + other.r, self.s + other.s)

    def __sub__(self, other: CubeCoord) -> CubeCoord:
        return CubeCoord(self.q - other.q, self.r - other.r, self.s - other.s)

    def scale(self, factor: int) -> CubeCoord:
        return CubeCoord(self.q * factor, self.r * factor, self.s * factor)

    def length(self) -> int:
        """Distance from the origin."""
        return max(abs(self.q), abs(self.r), abs(self.s))

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.q, self.r, self.s)

    def __str__(self) -> str:
        return f"({self.q}, {self.r}, {self.s})"


ORIGIN = CubeCoord(0, 0, 0)

# Unit directions, clockwise from east
DIRECTIONS: tuple[CubeCoord, ...] = (
    CubeCoord(1, 0, -1),
    CubeCoord(1, -1, 0),
    CubeCoord(0, -1, 1),
    CubeCoord(-1, 0, 1),
    CubeCoord(-1, 1, 0),
    CubeCoord(0, 1, -1),
)


def distance(a: CubeCoord, b: CubeCoord) -> int:
    """Hex distance: the largest absolute coordinate difference."""
    return max(abs(a.q - b.q), abs(a.r - b.r), abs(a.s - b.s))


def _sign(x: int) -> int:
    return (x > 0) - (x < 0)


def direction(start: CubeCoord, end: CubeCoord) -> CubeCoord:
    """
    Unit direction of the ray from start to end.

    The delta is normalized by its largest component. The move is a ray
    only if the result is one of the six unit directions.

    Raises:
        NoMovement: start and end are the same coordinate
        NotStraightLine: end is not on any ray from start
    """
    dq = end.q - start.q
    dr = end.r - start.r
    ds = end.s - start.s
    scale = max(abs(dq), abs(dr), abs(ds))
    if scale == 0:
        raise NoMovement(f"No movement from {start} to itself")

    # Divisibility keeps the normalization exact in integers
    if dq % scale or dr % scale or ds % scale:
        raise NotStraightLine(f"{end} is not in a straight line from {start}")

    nq, nr = dq // scale, dr // scale
    is_valid = (
        (abs(nq) == 1 and nr == 0)
        or (abs(nr) == 1 and nq == 0)
        or (abs(nq) == 1 and abs(nr) == 1 and _sign(nq) == -_sign(nr))
    )
    if not is_valid:
        raise NotStraightLine(f"{end} is not in a straight line from {start}")

    return CubeCoord(nq, nr, -nq - nr)


def is_straight_line(start: CubeCoord, end: CubeCoord) -> bool:
    """True if end lies on one of the six rays from start (and differs from it)."""
    try:
        direction(start, end)
    except ValueError:
        return False
    return True


def round_cube(q: float, r: float, s: float) -> CubeCoord:
    """
    Round a fractional cube coordinate to the nearest cell.

    Each component is rounded independently, then the one with the largest
    rounding error is recomputed from the other two so q + r + s = 0.
    Used by front-ends that map pointer positions onto the grid.
    """
    rq = _round_half_up(q)
    rr = _round_half_up(r)
    rs = _round_half_up(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs
    else:
        rs = -rq - rr

    return CubeCoord(rq, rr, rs)


def _round_half_up(x: float) -> int:
    # round() is banker's rounding; halves go towards +inf here
    return math.floor(x + 0.5)
