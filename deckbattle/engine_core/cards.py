"""
Card Normalization - Runtime view of a card template.

A template may carry several effect fields; a NormalizedCard resolves
them to one category and one value. Normalization never raises:
templates with no usable effect become UNKNOWN with value 0.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..catalog.templates import CardTemplate


class CardCategory(Enum):
    """Resolved effect category."""
    ATTACK = "attack"
    DEFEND = "defend"
    HEAL = "heal"
    ENERGY_GAIN = "energy_gain"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NormalizedCard:
    card_id: str
    name: str
    cost: int
    category: CardCategory
    value: int
    hits: int = 1
    self_damage: int = 0
    all_enemies: bool = False

    @property
    def needs_target(self) -> bool:
        """Single-target attacks need an enemy chosen."""
        return self.category == CardCategory.ATTACK and not self.all_enemies


def _as_int(value) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def normalize_card(template: CardTemplate) -> NormalizedCard:
    """
    Resolve a template to a single effect.

    An attack is a card with damage whose type is "attack" or unset.
    Anything else takes the first non-zero of block, heal, energy.
    """
    card_type = getattr(template, "card_type", None)
    damage = _as_int(getattr(template, "damage", 0))
    block = _as_int(getattr(template, "block", 0))
    heal = _as_int(getattr(template, "heal", 0))
    energy = _as_int(getattr(template, "energy", 0))

    if damage and card_type in (None, "attack"):
        category, value = CardCategory.ATTACK, damage
    elif block:
        category, value = CardCategory.DEFEND, block
    elif heal:
        category, value = CardCategory.HEAL, heal
    elif energy:
        category, value = CardCategory.ENERGY_GAIN, energy
    else:
        category, value = CardCategory.UNKNOWN, 0

    is_attack = category == CardCategory.ATTACK
    return NormalizedCard(
        card_id=str(getattr(template, "card_id", "")),
        name=str(getattr(template, "name", "")),
        cost=_as_int(getattr(template, "cost", 0)),
        category=category,
        value=value,
        hits=_as_int(getattr(template, "hits", 0)) or 1,
        self_damage=_as_int(getattr(template, "self_damage", 0)) if is_attack else 0,
        all_enemies=bool(getattr(template, "all_enemies", False)) and is_attack,
    )
