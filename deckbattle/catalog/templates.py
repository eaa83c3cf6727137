"""
Catalog Templates - Static, read-only game data.

Card, enemy and stage definitions are supplied to a battle at start
and never mutated. Runtime state (health, piles, intents) lives in the
engine; these are only the blueprints.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class StageTier(str, Enum):
    """Difficulty tier of a stage."""
    BOSS = "boss"
    MID_BOSS = "mid-boss"
    NORMAL = "normal"


class UnknownCardError(KeyError):
    """Raised when a card id is not in the catalog."""


class UnknownEnemyError(KeyError):
    """Raised when an enemy template name is not in the catalog."""


class UnknownStageError(KeyError):
    """Raised when a stage id is not in the catalog."""


@dataclass(frozen=True)
class CardTemplate:
    """
    Definition of a card.

    Numeric effect fields are optional; zero means "absent".
    `card_type` mirrors the data files ("attack", "skill", "power") and
    may be left out, in which case a damage value alone marks an attack.
    """
    card_id: str
    name: str
    cost: int = 0
    card_type: str | None = None

    # Effects
    damage: int = 0
    block: int = 0
    heal: int = 0
    energy: int = 0

    # Modifiers
    hits: int = 0  # 0 means a single hit
    all_enemies: bool = False
    self_damage: int = 0

    description: str = ""
    rarity: str = "common"


@dataclass(frozen=True)
class EnemyTemplate:
    """Definition of an enemy type."""
    name: str
    health: int
    attack: int = 0
    defense: int = 0
    is_boss: bool = False
    description: str = ""


@dataclass(frozen=True)
class StageDescriptor:
    """A node on the campaign map."""
    stage_id: str
    name: str
    enemies: tuple[str, ...] = ()
    tier: StageTier = StageTier.NORMAL
    next_stages: tuple[str, ...] = ()
    description: str = ""


@dataclass
class Catalog:
    """
    All static data for a campaign.

    Lookups raise the Unknown*Error family rather than returning None so
    a typo in content surfaces immediately.
    """
    cards: dict[str, CardTemplate] = field(default_factory=dict)
    enemies: dict[str, EnemyTemplate] = field(default_factory=dict)
    stages: dict[str, StageDescriptor] = field(default_factory=dict)

    starter_deck: list[str] = field(default_factory=list)
    reward_pool: list[str] = field(default_factory=list)
    first_stage: str = ""

    def get_card(self, card_id: str) -> CardTemplate:
        try:
            return self.cards[card_id]
        except KeyError:
            raise UnknownCardError(card_id) from None

    def get_enemy(self, name: str) -> EnemyTemplate:
        try:
            return self.enemies[name]
        except KeyError:
            raise UnknownEnemyError(name) from None

    def get_stage(self, stage_id: str) -> StageDescriptor:
        try:
            return self.stages[stage_id]
        except KeyError:
            raise UnknownStageError(stage_id) from None

    def build_deck(self, card_ids: list[str]) -> list[CardTemplate]:
        """Resolve a list of card ids to templates, keeping order."""
        return [self.get_card(cid) for cid in card_ids]
