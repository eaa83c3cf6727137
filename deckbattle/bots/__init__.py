"""
Bots module - Auto-play implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- GreedyPolicy / FirstLegalPolicy / RandomPolicy
- HeuristicEvaluator: Scores candidate actions
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, GreedyPolicy, POLICIES
from .evaluator import HeuristicEvaluator, EvaluationWeights

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "GreedyPolicy",
    "POLICIES",
    "HeuristicEvaluator",
    "EvaluationWeights",
]
