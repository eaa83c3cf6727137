"""
Heuristic Evaluator - Scores battle actions for bot decision-making.

The evaluator assigns a numeric score to a candidate action based on:
- Damage features (health removed, defense stripped, enemies finished off)
- Defense features (incoming attacks covered by block)
- Sustain features (health restored, energy gained)
- Cost features (self damage, energy spent)

Weights can be adjusted to create different play styles.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from ..engine_core.action import ActionType
from ..engine_core.cards import CardCategory, NormalizedCard
from ..engine_core.combat_math import apply_damage
from ..engine_core.state import IntentKind

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.session import BattleSession
    from ..engine_core.state import EnemyState


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    # Damage-related
    damage_dealt: float = 1.0
    kill_bonus: float = 15.0
    defense_stripped: float = 0.5  # Per point of enemy defense removed

    # Defense-related
    block_needed: float = 1.2  # Per point of incoming damage covered
    block_surplus: float = 0.1  # Per point beyond incoming damage

    # Sustain
    health_restored: float = 0.8
    energy_gained: float = 3.0

    # Costs
    self_damage: float = -1.0
    energy_spent: float = -0.1

    # Turn flow
    end_turn: float = 0.0
    unknown_card: float = -1.0


@dataclass
class ActionEvaluation:
    """Result of scoring one action."""
    score: float
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class HeuristicEvaluator:
    """
    Scores actions from the current battle state without applying them.

    Used by bots for greedy play:
    1. Generate legal actions
    2. Score each action
    3. Select the best one
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate_action(self, session: BattleSession, action: Action) -> ActionEvaluation:
        if action.action_type == ActionType.END_TURN:
            return ActionEvaluation(score=self.weights.end_turn)
        if action.action_type != ActionType.PLAY_CARD:
            return ActionEvaluation(score=0.0)

        card = session.card_in_hand(action.payload.card_instance_id)
        if card is None:
            return ActionEvaluation(score=float("-inf"))
        normalized = session.normalized(card)

        features: dict[str, float] = {}
        if normalized.category == CardCategory.ATTACK:
            features.update(self._evaluate_attack(session, normalized, action.payload.target_id))
        elif normalized.category == CardCategory.DEFEND:
            features.update(self._evaluate_block(session, normalized.value))
        elif normalized.category == CardCategory.HEAL:
            missing = session.player.max_health - session.player.health
            features["heal"] = min(normalized.value, missing) * self.weights.health_restored
        elif normalized.category == CardCategory.ENERGY_GAIN:
            others = len(session.deck.hand) - 1
            features["energy"] = normalized.value * self.weights.energy_gained if others else 0.0
        else:
            features["unknown"] = self.weights.unknown_card

        features["cost"] = normalized.cost * self.weights.energy_spent
        return ActionEvaluation(score=sum(features.values()), feature_breakdown=features)

    def _evaluate_attack(
        self,
        session: BattleSession,
        card: NormalizedCard,
        target_id: str | None,
    ) -> dict[str, float]:
        living = session.machine.living_enemies()
        if card.all_enemies:
            targets = living
        else:
            targets = [e for e in living if e.enemy_id == target_id]

        dealt = 0
        stripped = 0
        kills = 0
        for enemy in targets:
            health_lost, defense_lost = _simulate_hits(enemy, card.value, card.hits)
            dealt += health_lost
            stripped += defense_lost
            if health_lost >= enemy.health:
                kills += 1

        features = {
            "damage": dealt * self.weights.damage_dealt,
            "stripped": stripped * self.weights.defense_stripped,
            "kills": kills * self.weights.kill_bonus,
        }
        if card.self_damage:
            features["self_damage"] = card.self_damage * self.weights.self_damage
        return features

    def _evaluate_block(self, session: BattleSession, value: int) -> dict[str, float]:
        incoming = sum(
            e.intent.value
            for e in session.machine.living_enemies()
            if e.intent.kind == IntentKind.ATTACK
        )
        uncovered = max(0, incoming - session.player.defense)
        needed = min(value, uncovered)
        return {
            "block": needed * self.weights.block_needed
            + (value - needed) * self.weights.block_surplus,
        }


def _simulate_hits(enemy: EnemyState, amount: int, hits: int) -> tuple[int, int]:
    """Health lost and defense stripped if `enemy` took `hits` hits of `amount`."""
    target = replace(enemy)
    stripped = 0
    for _ in range(hits):
        stripped += apply_damage(target, amount).blocked_damage
    return enemy.health - target.health, stripped
