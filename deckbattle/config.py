"""
Configuration - Rule constants and process settings.

Rule constants live in BattleRules so a test or a variant can swap them
without touching the engine. Process settings come from the environment.
"""

from __future__ import annotations
from dataclasses import dataclass
import os
import sys

from loguru import logger


# Environment configuration
DECKBATTLE_LOG_LEVEL = os.getenv("DECKBATTLE_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
DECKBATTLE_SEED = os.getenv("DECKBATTLE_SEED")


@dataclass(frozen=True)
class BattleRules:
    """Tunable numbers of the battle system."""
    hand_size: int = 5

    # Intent selection
    defend_chance_percent: int = 30
    fallback_attack_min: int = 5
    fallback_attack_span: int = 6  # 5..10 inclusive

    # Victory healing by stage tier
    heal_fractions: tuple[tuple[str, float], ...] = (("boss", 0.6), ("mid-boss", 0.4))
    default_heal_fraction: float = 0.25

    # Reward offer size by stage tier
    reward_counts: tuple[tuple[str, int], ...] = (("boss", 5), ("mid-boss", 4))
    default_reward_count: int = 3

    # New campaign player
    starting_health: int = 80
    starting_energy: int = 3

    def heal_fraction(self, tier) -> float:
        return dict(self.heal_fractions).get(getattr(tier, "value", tier), self.default_heal_fraction)

    def reward_count(self, tier) -> int:
        return dict(self.reward_counts).get(getattr(tier, "value", tier), self.default_reward_count)


DEFAULT_RULES = BattleRules()


def default_seed() -> int | None:
    """Seed configured for new sessions, if any."""
    if DECKBATTLE_SEED is None or DECKBATTLE_SEED == "":
        return None
    return int(DECKBATTLE_SEED)


def configure_logging(level: str | None = None) -> None:
    """Route loguru output to stderr at the configured level."""
    logger.remove()
    logger.add(sys.stderr, level=(level or DECKBATTLE_LOG_LEVEL).upper())
