"""
Card Resolver - Applies a normalized card to the battle.

Order of operations:
1. Affordability check (failure mutates nothing)
2. Target check for single-target attacks (failure mutates nothing)
3. Energy payment
4. Effect by category

State changes are announced on the event channel; the resolver never
talks to the presentation layer any other way.
"""

from __future__ import annotations
from typing import Sequence

from loguru import logger

from .cards import CardCategory, NormalizedCard
from .combat_math import (
    DamageResult, apply_damage, apply_defense, apply_energy_delta, apply_heal,
)
from .events import BattleEvent, EventChannel
from .state import EnemyState, PlayerState


class CardResolver:
    """Resolves card plays for one player."""

    def __init__(self, player: PlayerState, events: EventChannel):
        self.player = player
        self.events = events

    def use_card(
        self,
        card: NormalizedCard,
        target: EnemyState | None,
        enemies: Sequence[EnemyState],
    ) -> bool:
        """
        Play `card`. Returns False, with no state change, when the player
        cannot afford it or a single-target attack has no living target.
        """
        if self.player.energy < card.cost:
            logger.debug("cannot afford {} (cost {}, energy {})", card.name, card.cost, self.player.energy)
            return False

        if card.needs_target and not self._is_valid_target(target, enemies):
            logger.warning("{} needs a living target, got {}", card.name, target and target.enemy_id)
            return False

        apply_energy_delta(self.player, -card.cost)
        self.events.emit(BattleEvent.energy_changed(self.player.energy))
        logger.debug("played {} ({}, value {})", card.name, card.category.value, card.value)

        if card.category == CardCategory.ATTACK:
            self._resolve_attack(card, target, enemies)
        elif card.category == CardCategory.DEFEND:
            apply_defense(self.player, card.value)
            self.events.emit(BattleEvent.defense_changed(self.player.defense))
        elif card.category == CardCategory.HEAL:
            apply_heal(self.player, card.value)
            self.events.emit(BattleEvent.health_changed(self.player.health))
        elif card.category == CardCategory.ENERGY_GAIN:
            apply_energy_delta(self.player, card.value)
            self.events.emit(BattleEvent.energy_changed(self.player.energy))
        else:
            logger.warning("{} has no recognised effect; cost paid, nothing applied", card.name)

        return True

    def _resolve_attack(
        self,
        card: NormalizedCard,
        target: EnemyState | None,
        enemies: Sequence[EnemyState],
    ) -> None:
        if card.all_enemies:
            for enemy in list(enemies):
                if enemy.is_dead:
                    continue
                for _ in range(card.hits):
                    apply_damage(enemy, card.value)
        else:
            for _ in range(card.hits):
                apply_damage(target, card.value)

        if card.self_damage:
            self.damage_player(card.self_damage)

    def damage_player(self, amount: int) -> DamageResult:
        """Damage the player through defense and announce the breakdown."""
        result = apply_damage(self.player, amount)
        self.events.emit(BattleEvent.player_took_damage(result.actual_damage, result.blocked_damage))
        self.events.emit(BattleEvent.health_changed(self.player.health))
        self.events.emit(BattleEvent.defense_changed(self.player.defense))
        return result

    @staticmethod
    def _is_valid_target(target: EnemyState | None, enemies: Sequence[EnemyState]) -> bool:
        if target is None or target.is_dead:
            return False
        return any(e is target for e in enemies)
