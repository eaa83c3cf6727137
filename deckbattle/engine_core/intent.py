"""Enemy intent selection."""

from __future__ import annotations
import math

from ..catalog.templates import EnemyTemplate
from ..config import BattleRules, DEFAULT_RULES
from .rng import RandomDraw
from .state import Intent


def select_intent(
    template: EnemyTemplate,
    random_draw: RandomDraw,
    rules: BattleRules = DEFAULT_RULES,
) -> Intent:
    """
    Choose an enemy's next action.

    The defend roll comes first, so an enemy with both attack and
    defense still defends on a defend_chance_percent roll.
    """
    if template.defense and random_draw() * 100 < rules.defend_chance_percent:
        return Intent.defend(template.defense)
    if template.attack:
        return Intent.attack(template.attack)
    return Intent.attack(
        math.floor(random_draw() * rules.fallback_attack_span) + rules.fallback_attack_min
    )
