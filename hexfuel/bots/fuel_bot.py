"""
Fuel Bot - The heuristic AI opponent.

The bot:
- Scores every legal destination with the HeuristicEvaluator
- Takes the strictly highest score
- Breaks ties by enumeration order (first candidate wins)

There is no randomness anywhere in the choice, so the same board and
mover state always produce the same move.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import logging

from ..engine_core.errors import NoMoves
from ..engine_core.move_rules import legal_destinations
from .evaluator import HeuristicEvaluator
from .policy import BotDecision, BotPolicy

if TYPE_CHECKING:
    from ..engine_core.board import Board, Cell
    from ..engine_core.state import GameState, Mover, Side

logger = logging.getLogger(__name__)


@dataclass
class FuelBot(BotPolicy):
    """
    Heuristic AI with a one-ply mobility lookahead.

    Usage:
        bot = FuelBot()
        cell = bot.choose_move(state.ai, state.board)
    """
    evaluator: HeuristicEvaluator = field(default_factory=HeuristicEvaluator)

    def choose_move(self, mover: Mover, board: Board) -> Cell:
        """
        Pick the destination for `mover`.

        Raises:
            NoMoves: the mover has no legal destinations
        """
        return self._decide(mover, board, legal_destinations(mover, board)).destination

    def select_move(
        self,
        state: GameState,
        side: Side,
        candidates: list[Cell],
    ) -> BotDecision:
        return self._decide(state.mover(side), state.board, candidates)

    def _decide(self, mover: Mover, board: Board, candidates: list[Cell]) -> BotDecision:
        if not candidates:
            raise NoMoves(f"{mover.side.value} has no legal moves")

        best = None
        scores = []
        for cell in candidates:
            evaluation = self.evaluator.evaluate(mover, cell, board)
            scores.append((cell.coord.as_tuple(), evaluation.score))
            # Strict comparison keeps the first of equal scores
            if best is None or evaluation.score > best.score:
                best = evaluation

        logger.debug("AI evaluated moves: %s", scores)

        return BotDecision(
            destination=best.cell,
            explanation=(
                f"Best of {len(candidates)} moves: {best.cell.coord} "
                f"(value {best.cell.value:+d}, distance {best.distance})"
            ),
            score=best.score,
            evaluated_moves=len(candidates),
            candidate_scores=scores,
        )
