"""
Bots module - AI opponents.

Provides:
- BotPolicy: Interface for bot decision-making
- HeuristicEvaluator: Scores candidate moves
- FuelBot: The heuristic AI opponent
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .evaluator import HeuristicEvaluator, MoveEvaluation, ScoringWeights
from .fuel_bot import FuelBot

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "HeuristicEvaluator",
    "MoveEvaluation",
    "ScoringWeights",
    "FuelBot",
]
