"""
Heuristic Evaluator - Scores candidate moves for the AI.

A move to cell c, at distance d from the mover, scores:

    value_weight      * c.value
  + efficiency_weight * (c.value / d)
  - centrality_weight * (distance of c from the board centre)
  + mobility_weight   * future_options(c)

future_options is a cheap one-ply look at mobility: the number of free
cells within reach of c on the fuel left after the move. It ignores the
ray rule on purpose.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.hex_coord import distance

if TYPE_CHECKING:
    from ..engine_core.board import Board, Cell
    from ..engine_core.state import Mover


@dataclass(frozen=True)
class ScoringWeights:
    """
    Weights for the move heuristic.

    Higher values = more importance.
    """
    value: float = 2.0  # Platform value
    efficiency: float = 10.0  # Value gained per cell travelled
    centrality: float = 0.5  # Penalty per ring away from the centre
    mobility: float = 0.3  # Per reachable cell after the move


@dataclass
class MoveEvaluation:
    """Result of scoring one candidate move."""
    cell: Cell
    score: float
    distance: int
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class HeuristicEvaluator:
    """Scores candidate destinations using weighted features."""

    def __init__(self, weights: ScoringWeights | None = None):
        self.weights = weights or ScoringWeights()

    def evaluate(self, mover: Mover, cell: Cell, board: Board) -> MoveEvaluation:
        """Score a move of `mover` to `cell`. The move must travel at least one cell."""
        dist = distance(mover.position, cell.coord)
        w = self.weights

        features = {
            "value": w.value * cell.value,
            "efficiency": w.efficiency * (cell.value / dist),
            "centrality": -w.centrality * cell.coord.length(),
            "mobility": w.mobility * self.future_options(mover, cell, board),
        }

        return MoveEvaluation(
            cell=cell,
            score=sum(features.values()),
            distance=dist,
            feature_breakdown=features,
        )

    def score(self, mover: Mover, cell: Cell, board: Board) -> float:
        return self.evaluate(mover, cell, board).score

    def future_options(self, mover: Mover, cell: Cell, board: Board) -> int:
        """Free cells, other than `cell`, within reach of it on the projected fuel."""
        projected_fuel = mover.fuel - distance(mover.position, cell.coord) + cell.value
        return sum(
            1
            for h in board
            if h.is_free and h is not cell and distance(h.coord, cell.coord) <= projected_fuel
        )
