"""
Bot Policy - Interface for auto-play decision-making.

A BotPolicy takes a battle session and the legal actions and returns
a decision. Used for headless simulation and as a hint for players.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import random
from typing import TYPE_CHECKING, Any

from .evaluator import HeuristicEvaluator

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.session import BattleSession


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - Confidence in the decision
    """
    action: Action
    explanation: str = ""
    confidence: float = 1.0

    # Evaluation details (for debugging)
    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    """

    @abstractmethod
    def select_action(
        self,
        session: BattleSession,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            session: Current battle
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    def select_reward(self, offered: list[str]) -> str | None:
        """Pick a reward card id from the offer, or None to skip."""
        return offered[0] if offered else None

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(
        self,
        session: BattleSession,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )

    def select_reward(self, offered: list[str]) -> str | None:
        if not offered:
            return None
        return self.rng.choice(offered)


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - always selects the first legal action.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_action(
        self,
        session: BattleSession,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        return BotDecision(
            action=legal_actions[0],
            explanation="Selected first legal action",
            evaluated_actions=1,
        )


class GreedyPolicy(BotPolicy):
    """
    Greedy policy - plays the action with the best immediate score.

    Ends the turn once no card play scores above ending the turn.
    Ties go to the earlier action, so play is deterministic.
    """

    def __init__(self, evaluator: HeuristicEvaluator | None = None):
        self.evaluator = evaluator or HeuristicEvaluator()

    def select_action(
        self,
        session: BattleSession,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        best_action = legal_actions[0]
        best = self.evaluator.evaluate_action(session, best_action)
        for action in legal_actions[1:]:
            evaluation = self.evaluator.evaluate_action(session, action)
            if evaluation.score > best.score:
                best_action, best = action, evaluation

        return BotDecision(
            action=best_action,
            explanation=f"Best score {best.score:.1f}",
            evaluated_actions=len(legal_actions),
            best_score=best.score,
            evaluation_details=best.feature_breakdown,
        )


POLICIES = {
    "greedy": GreedyPolicy,
    "first": FirstLegalPolicy,
    "random": RandomPolicy,
}
