"""
Combat Math - Damage, heal, defense and energy arithmetic.

Shared by the player and enemies. Defense absorbs damage first, and only
the absorbed portion is removed from defense.
"""

from __future__ import annotations
from dataclasses import dataclass

from loguru import logger

from .state import PlayerState, EnemyState

Combatant = PlayerState | EnemyState


@dataclass(frozen=True)
class DamageResult:
    """Breakdown of a single damage application."""
    actual_damage: int  # went to health
    blocked_damage: int  # absorbed by defense


def apply_damage(target: Combatant, amount: int) -> DamageResult:
    """Apply `amount` damage to `target`, defense first."""
    blocked = min(target.defense, amount)
    to_health = amount - blocked
    target.defense -= blocked
    target.health = max(0, target.health - to_health)
    logger.debug(
        "damage {} -> blocked {}, to health {} (defense {}, health {})",
        amount, blocked, to_health, target.defense, target.health,
    )
    return DamageResult(actual_damage=to_health, blocked_damage=blocked)


def apply_heal(target: Combatant, amount: int) -> int:
    """Heal up to max health. Returns the new health."""
    target.health = min(target.max_health, target.health + amount)
    return target.health


def apply_defense(target: Combatant, amount: int) -> int:
    """Add defense without a cap. Returns the new defense."""
    target.defense += amount
    return target.defense


def apply_energy_delta(state: PlayerState, amount: int) -> int:
    """
    Add `amount` energy (negative to pay a cost).

    No clamping: callers check affordability first.
    """
    state.energy += amount
    return state.energy
