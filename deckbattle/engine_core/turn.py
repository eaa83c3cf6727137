"""
Turn State Machine - Player turn / enemy turn alternation.

The machine owns the living-enemies collection. Nothing outside it gets
a mutable handle: callers address enemies by id and read snapshots.

Enemy actions run in two steps so a presentation layer can delay damage
until its animation finishes:
1. stage_next_enemy_action() picks the next enemy in order and executes
   its intent (a Defend lands immediately, an Attack is announced)
2. commit_enemy_action() lands the staged Attack on the player

A staged action whose enemy has left play, or whose battle has ended,
commits as a no-op.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, Mapping

from loguru import logger

from ..catalog.templates import EnemyTemplate
from ..config import BattleRules, DEFAULT_RULES
from .cards import NormalizedCard
from .combat_math import DamageResult, apply_defense
from .deck import DeckEngine
from .events import BattleEvent, EventChannel
from .intent import select_intent
from .resolver import CardResolver
from .rng import RandomDraw
from .state import EnemyState, Intent, IntentKind, PlayerState, TurnPhase


@dataclass
class StagedEnemyAction:
    """An enemy action announced but not yet landed."""
    enemy_id: str
    intent: Intent
    committed: bool = False

    @property
    def needs_commit(self) -> bool:
        return self.intent.kind == IntentKind.ATTACK and not self.committed

    def to_dict(self) -> dict:
        return {
            "enemy_id": self.enemy_id,
            "intent": self.intent.to_dict(),
            "committed": self.committed,
        }


class TurnStateMachine:
    """Drives one battle from the first player turn to battle end."""

    def __init__(
        self,
        player: PlayerState,
        enemies: Iterable[EnemyState],
        deck: DeckEngine,
        events: EventChannel,
        random_draw: RandomDraw,
        enemy_templates: Mapping[str, EnemyTemplate] | None = None,
        rules: BattleRules = DEFAULT_RULES,
    ):
        self.player = player
        self._enemies: list[EnemyState] = list(enemies)
        self.deck = deck
        self.events = events
        self.rules = rules
        self._random_draw = random_draw
        self._templates = dict(enemy_templates or {})
        self._resolver = CardResolver(player, events)

        self.phase = TurnPhase.PLAYER_TURN
        self.turn_number = 0
        self.outcome: bool | None = None  # True win, False loss
        self._end_announced = False

        self._enemy_queue: list[str] = []
        self.pending_action: StagedEnemyAction | None = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def battle_over(self) -> bool:
        return self._end_announced

    @property
    def enemies(self) -> tuple[EnemyState, ...]:
        """Copies of the living enemies, in acting order."""
        return tuple(replace(e) for e in self._enemies)

    @property
    def enemy_ids(self) -> list[str]:
        return [e.enemy_id for e in self._enemies]

    def living_enemies(self) -> list[EnemyState]:
        return [replace(e) for e in self._enemies if not e.is_dead]

    def _find_enemy(self, enemy_id: str | None) -> EnemyState | None:
        for enemy in self._enemies:
            if enemy.enemy_id == enemy_id:
                return enemy
        return None

    # ------------------------------------------------------------------
    # Player turn
    # ------------------------------------------------------------------

    def start_player_turn(self) -> None:
        """Reset defense, refill energy and draw a fresh hand."""
        if self.battle_over:
            logger.warning("start_player_turn ignored: battle is over")
            return
        self.phase = TurnPhase.PLAYER_TURN
        self.turn_number += 1
        self.player.defense = 0
        self.player.energy = self.player.max_energy
        self.deck.draw(self.rules.hand_size)
        self.events.emit(BattleEvent.player_turn_start())
        self.events.emit(BattleEvent.energy_changed(self.player.energy))
        self.events.emit(BattleEvent.defense_changed(self.player.defense))
        logger.debug("turn {}: player turn, hand {}", self.turn_number, len(self.deck.hand))

    def end_player_turn(self) -> None:
        """Hand discarding is the caller's job."""
        self.phase = TurnPhase.ENEMY_TURN

    def use_card(self, card: NormalizedCard, target_id: str | None = None) -> bool:
        """
        Play a card against the enemy with `target_id` (if any), then
        remove every enemy it defeated.
        """
        if self.battle_over:
            return False
        target = self._find_enemy(target_id)
        if not self._resolver.use_card(card, target, self._enemies):
            return False
        self.reap_defeated()
        if self.player.health <= 0:
            self.check_battle_end()
        return True

    # ------------------------------------------------------------------
    # Enemy turn
    # ------------------------------------------------------------------

    def start_enemy_turn(self) -> None:
        """Announce the enemy turn and queue every living enemy in order."""
        self.phase = TurnPhase.ENEMY_TURN
        self._enemy_queue = [e.enemy_id for e in self._enemies if not e.is_dead]
        self.pending_action = None
        self.events.emit(BattleEvent.enemy_turn_start())

    def execute_enemy_action(self, enemy_id: str) -> StagedEnemyAction | None:
        """
        Carry out an enemy's current intent and pick its next one.

        Attack is announced and staged for commit; Defend lands now.
        """
        enemy = self._find_enemy(enemy_id)
        if enemy is None or self.battle_over:
            return None

        intent = enemy.intent
        staged = StagedEnemyAction(enemy_id=enemy.enemy_id, intent=intent)
        if intent.kind == IntentKind.ATTACK:
            self.events.emit(BattleEvent.enemy_action(enemy, intent))
        elif intent.kind == IntentKind.DEFEND:
            apply_defense(enemy, intent.value)
            staged.committed = True
        else:
            staged.committed = True

        self.reselect_intent(enemy)
        return staged

    def stage_next_enemy_action(self) -> StagedEnemyAction | None:
        """
        Execute the next queued enemy. Returns the staged action, or None
        once the queue is empty, in which case the player turn starts.

        An uncommitted attack is returned again instead of staging another.
        """
        if self.pending_action is not None and self.pending_action.needs_commit:
            return self.pending_action
        self.pending_action = None
        if self.battle_over or self.phase != TurnPhase.ENEMY_TURN:
            return None

        while self._enemy_queue:
            staged = self.execute_enemy_action(self._enemy_queue.pop(0))
            if staged is None:
                continue
            self.pending_action = staged
            return staged

        self.start_player_turn()
        return None

    def commit_enemy_action(self, staged: StagedEnemyAction) -> DamageResult | None:
        """Land a staged attack. Stale or repeated commits do nothing."""
        if staged.committed:
            return None
        staged.committed = True
        if self.battle_over or self._find_enemy(staged.enemy_id) is None:
            logger.debug("dropped stale action from {}", staged.enemy_id)
            return None

        result = self._resolver.damage_player(staged.intent.value)
        if self.player.health <= 0:
            self.check_battle_end()
        return result

    def run_enemy_turn(self) -> list[StagedEnemyAction]:
        """Start the enemy turn and commit every action immediately."""
        actions = []
        self.start_enemy_turn()
        while True:
            staged = self.stage_next_enemy_action()
            if staged is None:
                break
            self.commit_enemy_action(staged)
            actions.append(staged)
        return actions

    def reselect_intent(self, enemy: EnemyState) -> Intent:
        template = self._templates.get(enemy.name)
        if template is None:
            enemy.intent = Intent.none()
        else:
            enemy.intent = select_intent(template, self._random_draw, self.rules)
        return enemy.intent

    # ------------------------------------------------------------------
    # Defeat and battle end
    # ------------------------------------------------------------------

    def on_enemy_defeated(self, enemy_id: str) -> None:
        """Remove an enemy from play. Removing an absent enemy is a no-op."""
        if self._remove_enemy(enemy_id):
            self.check_battle_end()

    def reap_defeated(self) -> None:
        """Remove every dead enemy, then check the battle end once."""
        dead = [e.enemy_id for e in self._enemies if e.is_dead]
        for enemy_id in dead:
            self._remove_enemy(enemy_id)
        if dead:
            self.check_battle_end()

    def _remove_enemy(self, enemy_id: str) -> bool:
        enemy = self._find_enemy(enemy_id)
        if enemy is None:
            logger.warning("enemy {} already removed", enemy_id)
            return False
        self._enemies.remove(enemy)
        logger.debug("enemy {} defeated, {} left", enemy_id, len(self._enemies))
        self.events.emit(BattleEvent.enemy_defeated(enemy))
        return True

    def check_battle_end(self) -> bool | None:
        """
        Victory is checked before defeat. Returns True/False once the
        battle is decided, None while it goes on. The battle_end event is
        emitted only the first time.
        """
        if not any(not e.is_dead for e in self._enemies):
            outcome = True
        elif self.player.health <= 0:
            outcome = False
        else:
            return None

        if not self._end_announced:
            self._end_announced = True
            self.outcome = outcome
            self._enemy_queue = []
            logger.debug("battle end: {}", "victory" if outcome else "defeat")
            self.events.emit(BattleEvent.battle_end(outcome))
        return self.outcome

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def snapshot(self) -> dict:
        """Read-only view for the presentation layer."""
        return {
            "phase": self.phase.value,
            "turn_number": self.turn_number,
            "battle_over": self.battle_over,
            "outcome": self.outcome,
            "player": self.player.to_dict(),
            "enemies": [e.to_dict() for e in self._enemies],
            "pending_action": self.pending_action.to_dict() if self.pending_action else None,
        }
