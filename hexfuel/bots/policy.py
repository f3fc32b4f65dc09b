"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes the game state and the legal destinations for its side
and returns a decision. Policies only read the state; the game loop
applies the chosen move through the reducer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import random

from ..engine_core.errors import NoMoves

if TYPE_CHECKING:
    from ..engine_core.board import Cell
    from ..engine_core.state import GameState, Side


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The destination cell
    - Explanation (for UI/debugging)
    - Scores of every candidate, in enumeration order
    """
    destination: Cell
    explanation: str = ""
    score: float = 0.0
    evaluated_moves: int = 0
    candidate_scores: list[tuple[tuple[int, int, int], float]] = field(default_factory=list)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    Implementations can range from simple baselines to
    heuristic or search-based players.
    """

    @abstractmethod
    def select_move(
        self,
        state: GameState,
        side: Side,
        candidates: list[Cell],
    ) -> BotDecision:
        """
        Select a destination from the legal candidates.

        Args:
            state: Current game state
            side: Which mover the bot controls
            candidates: Legal destinations, in board order

        Returns:
            BotDecision with the selected cell

        Raises:
            NoMoves: candidates is empty
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - picks a legal destination uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_move(
        self,
        state: GameState,
        side: Side,
        candidates: list[Cell],
    ) -> BotDecision:
        if not candidates:
            raise NoMoves(f"{side.value} has no legal moves")

        cell = self.rng.choice(candidates)
        return BotDecision(
            destination=cell,
            explanation="Selected randomly",
            evaluated_moves=len(candidates),
        )


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always takes the first legal destination.

    Used for deterministic testing.
    """

    def select_move(
        self,
        state: GameState,
        side: Side,
        candidates: list[Cell],
    ) -> BotDecision:
        if not candidates:
            raise NoMoves(f"{side.value} has no legal moves")

        return BotDecision(
            destination=candidates[0],
            explanation="Selected first legal move",
            evaluated_moves=1,
        )
