"""
Action System - Actions, payloads, and results.

Actions represent:
1. Input from the presentation layer (card clicked, enemy clicked,
   pointer left a card)
2. Direct commands (play card, end turn)
3. Enemy-turn pacing (commit the staged enemy action)

All battle state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Pointer input
    SELECT_CARD = "select_card"  # Card clicked
    DESELECT_CARD = "deselect_card"  # Pointer left the selected card
    CHOOSE_TARGET = "choose_target"  # Enemy clicked

    # Direct commands
    PLAY_CARD = "play_card"
    END_TURN = "end_turn"

    # Enemy turn
    COMMIT_ENEMY_ACTION = "commit_enemy_action"


class ErrorCodes:
    """Stable error codes carried by failed ActionResults."""
    BATTLE_OVER = "BATTLE_OVER"
    NOT_PLAYER_TURN = "NOT_PLAYER_TURN"
    NOT_ENOUGH_ENERGY = "NOT_ENOUGH_ENERGY"
    INVALID_TARGET = "INVALID_TARGET"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    NO_CARD_SELECTED = "NO_CARD_SELECTED"
    NOTHING_STAGED = "NOTHING_STAGED"
    NO_HANDLER = "NO_HANDLER"
    NO_BATTLE = "NO_BATTLE"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types have different payload shapes.
    This is a generic container; validation happens in the reducer.
    """
    card_instance_id: str | None = None
    target_id: str | None = None  # enemy id

    # Generic params
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class Action:
    """
    A complete action to be applied to a battle.

    Actions are:
    - Logged for replay
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)
    timestamp: float | None = None
    action_id: str | None = None

    @classmethod
    def select_card(cls, card_instance_id: str) -> Action:
        """Factory for a card click."""
        return cls(
            action_type=ActionType.SELECT_CARD,
            payload=ActionPayload(card_instance_id=card_instance_id),
        )

    @classmethod
    def deselect_card(cls) -> Action:
        return cls(action_type=ActionType.DESELECT_CARD)

    @classmethod
    def choose_target(cls, target_id: str) -> Action:
        """Factory for an enemy click."""
        return cls(
            action_type=ActionType.CHOOSE_TARGET,
            payload=ActionPayload(target_id=target_id),
        )

    @classmethod
    def play_card(cls, card_instance_id: str, target_id: str | None = None) -> Action:
        """Factory for playing a card directly."""
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(card_instance_id=card_instance_id, target_id=target_id),
        )

    @classmethod
    def end_turn(cls) -> Action:
        return cls(action_type=ActionType.END_TURN)

    @classmethod
    def commit_enemy_action(cls) -> Action:
        return cls(action_type=ActionType.COMMIT_ENEMY_ACTION)

    def describe(self) -> str:
        """Short human-readable form for logs."""
        parts = [self.action_type.value]
        if self.payload.card_instance_id:
            parts.append(self.payload.card_instance_id)
        if self.payload.target_id:
            parts.append(f"-> {self.payload.target_id}")
        return " ".join(parts)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - The battle session (if succeeded)
    - Errors (if failed)
    - Events emitted while applying (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # BattleSession
    error: str | None = None
    error_code: str | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)  # Human-readable changes
    events: list[Any] = field(default_factory=list)  # list[BattleEvent]

    # Enemy action waiting for commit, if any
    staged_action: Any | None = None  # StagedEnemyAction

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
