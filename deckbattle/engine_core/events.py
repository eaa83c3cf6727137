"""
Battle Events - Outbound notifications to the presentation layer.

Every state change the presentation layer may want to show is emitted
as a BattleEvent through one EventChannel. The channel keeps a log so
tests (and the WebSocket bridge) can read back exactly what was
announced, in order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from .state import EnemyState, Intent


class EventKind(Enum):
    """Notification types."""
    PLAYER_TURN_START = "player_turn_start"
    ENEMY_TURN_START = "enemy_turn_start"
    ENEMY_ACTION = "enemy_action"
    PLAYER_TOOK_DAMAGE = "player_took_damage"
    ENEMY_DEFEATED = "enemy_defeated"
    BATTLE_END = "battle_end"
    ENERGY_CHANGED = "energy_changed"
    DEFENSE_CHANGED = "defense_changed"
    HEALTH_CHANGED = "health_changed"
    RESHUFFLE_OCCURRED = "reshuffle_occurred"


@dataclass(frozen=True)
class BattleEvent:
    """A single notification with a value payload."""
    kind: EventKind
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def player_turn_start(cls) -> BattleEvent:
        return cls(EventKind.PLAYER_TURN_START)

    @classmethod
    def enemy_turn_start(cls) -> BattleEvent:
        return cls(EventKind.ENEMY_TURN_START)

    @classmethod
    def enemy_action(cls, enemy: EnemyState, intent: Intent) -> BattleEvent:
        return cls(EventKind.ENEMY_ACTION, {
            "enemy_id": enemy.enemy_id,
            "name": enemy.name,
            "intent": intent.to_dict(),
        })

    @classmethod
    def player_took_damage(cls, actual_damage: int, blocked_damage: int) -> BattleEvent:
        return cls(EventKind.PLAYER_TOOK_DAMAGE, {
            "actual_damage": actual_damage,
            "blocked_damage": blocked_damage,
        })

    @classmethod
    def enemy_defeated(cls, enemy: EnemyState) -> BattleEvent:
        return cls(EventKind.ENEMY_DEFEATED, {
            "enemy_id": enemy.enemy_id,
            "name": enemy.name,
        })

    @classmethod
    def battle_end(cls, victory: bool) -> BattleEvent:
        return cls(EventKind.BATTLE_END, {"victory": victory})

    @classmethod
    def energy_changed(cls, value: int) -> BattleEvent:
        return cls(EventKind.ENERGY_CHANGED, {"value": value})

    @classmethod
    def defense_changed(cls, value: int) -> BattleEvent:
        return cls(EventKind.DEFENSE_CHANGED, {"value": value})

    @classmethod
    def health_changed(cls, value: int) -> BattleEvent:
        return cls(EventKind.HEALTH_CHANGED, {"value": value})

    @classmethod
    def reshuffle_occurred(cls, cards: int) -> BattleEvent:
        return cls(EventKind.RESHUFFLE_OCCURRED, {"cards": cards})

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "payload": dict(self.payload)}


Listener = Callable[[BattleEvent], None]


class EventChannel:
    """
    Ordered notification channel.

    Listeners are called synchronously in subscription order. Every
    emitted event is also appended to `log` until drained.
    """

    def __init__(self):
        self._listeners: list[Listener] = []
        self.log: list[BattleEvent] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: BattleEvent) -> None:
        self.log.append(event)
        for listener in list(self._listeners):
            listener(event)

    def drain(self) -> list[BattleEvent]:
        """Return and clear the event log."""
        events, self.log = self.log, []
        return events

    def kinds(self) -> list[EventKind]:
        return [e.kind for e in self.log]
