"""
Battle State - Runtime state of the player, enemies and campaign.

Design principles:
- Plain mutable dataclasses, owned by a single battle session
- Mutated only through combat_math and the card resolver
- Invariants are checkable at any point via check_invariants()
- Static definitions live in the catalog; this module holds live values
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class TurnPhase(Enum):
    """Whose turn it is."""
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"


class IntentKind(Enum):
    """Kinds of enemy intent."""
    ATTACK = "attack"
    DEFEND = "defend"
    NONE = "none"


class InvariantError(AssertionError):
    """A battle invariant was violated. Always a programming defect."""


@dataclass(frozen=True)
class Intent:
    """An enemy's declared next action."""
    kind: IntentKind
    value: int = 0

    @classmethod
    def attack(cls, value: int) -> Intent:
        return cls(kind=IntentKind.ATTACK, value=value)

    @classmethod
    def defend(cls, value: int) -> Intent:
        return cls(kind=IntentKind.DEFEND, value=value)

    @classmethod
    def none(cls) -> Intent:
        return cls(kind=IntentKind.NONE)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "value": self.value}


@dataclass
class PlayerState:
    """
    The player's combat numbers.

    Energy may exceed max_energy after bonus energy cards; health may not
    exceed max_health.
    """
    health: int
    max_health: int
    energy: int
    max_energy: int
    defense: int = 0

    def to_dict(self) -> dict:
        return {
            "health": self.health,
            "max_health": self.max_health,
            "energy": self.energy,
            "max_energy": self.max_energy,
            "defense": self.defense,
        }


@dataclass
class EnemyState:
    """A living enemy in the current battle."""
    enemy_id: str
    name: str
    health: int
    max_health: int
    defense: int = 0
    intent: Intent = field(default_factory=Intent.none)

    @property
    def is_dead(self) -> bool:
        return self.health <= 0

    def to_dict(self) -> dict:
        return {
            "enemy_id": self.enemy_id,
            "name": self.name,
            "health": self.health,
            "max_health": self.max_health,
            "defense": self.defense,
            "intent": self.intent.to_dict(),
        }


@dataclass
class CampaignState:
    """
    Progress carried between battles.

    Outcome handlers copy battle results in here; the battle session
    itself is discarded once the battle ends.
    """
    player: PlayerState
    deck: list[str] = field(default_factory=list)  # card ids
    stages_cleared: list[str] = field(default_factory=list)
    current_stage: str = ""
    game_over: bool = False

    # Offered after a victory, cleared on pick or skip
    pending_rewards: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "player": self.player.to_dict(),
            "deck": list(self.deck),
            "stages_cleared": list(self.stages_cleared),
            "current_stage": self.current_stage,
            "game_over": self.game_over,
            "pending_rewards": list(self.pending_rewards),
        }


def check_invariants(
    player: PlayerState,
    enemies: Iterable[EnemyState] = (),
    piles: Iterable[Iterable] | None = None,
    expected_cards: Iterable | None = None,
) -> None:
    """
    Raise InvariantError if any battle invariant is broken.

    - health, defense and energy are never negative
    - player health never exceeds max health
    - when piles and expected_cards are given, the union of the piles
      equals expected_cards as a multiset
    """
    errors = []

    if player.health < 0:
        errors.append(f"player health is negative ({player.health})")
    if player.health > player.max_health:
        errors.append(f"player health {player.health} exceeds max {player.max_health}")
    if player.defense < 0:
        errors.append(f"player defense is negative ({player.defense})")
    if player.energy < 0:
        errors.append(f"player energy is negative ({player.energy})")

    for enemy in enemies:
        if enemy.health < 0:
            errors.append(f"enemy {enemy.enemy_id} health is negative ({enemy.health})")
        if enemy.defense < 0:
            errors.append(f"enemy {enemy.enemy_id} defense is negative ({enemy.defense})")

    if piles is not None and expected_cards is not None:
        actual: Counter = Counter()
        for pile in piles:
            actual.update(pile)
        if actual != Counter(expected_cards):
            errors.append("pile contents changed during the battle")

    if errors:
        raise InvariantError("; ".join(errors))
