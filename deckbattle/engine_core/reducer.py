"""
Reducer - Applies actions to a battle session.

The reducer is the single entry point for inbound input.
All battle changes requested from outside go through apply_action().

Design principles:
- Validates before applying
- Returns ActionResult with success/failure and a stable error code
- Rejected input mutates nothing
- Delegates card effects to the turn machine and card resolver
"""

from __future__ import annotations
from dataclasses import dataclass

from loguru import logger

from .action import Action, ActionType, ActionResult, ErrorCodes
from .session import BattleSession
from .state import InvariantError, TurnPhase


PLAYER_TURN_ACTIONS = {
    ActionType.SELECT_CARD,
    ActionType.CHOOSE_TARGET,
    ActionType.PLAY_CARD,
    ActionType.END_TURN,
}


@dataclass
class Reducer:
    """
    Reducer applies actions to a battle session.

    Stateless - all state is in BattleSession.
    With check_invariants set, every successful action is followed by
    an invariant check.
    """
    check_invariants: bool = True

    def apply(self, session: BattleSession, action: Action) -> ActionResult:
        """
        Apply an action to the battle.

        Returns ActionResult with the session or an error.
        """
        validation_error = self._validate_action(session, action)
        if validation_error:
            return validation_error

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCodes.NO_HANDLER,
            )

        first_event = len(session.events.log)
        result = handler(session, action)
        result.events = session.events.log[first_event:]

        if result.success:
            session.action_history.append(action)
            logger.debug("applied {}", action.describe())
            if self.check_invariants:
                try:
                    session.check_invariants()
                except InvariantError:
                    logger.exception("invariant broken after {}", action.describe())
                    raise
        return result

    def _validate_action(self, session: BattleSession, action: Action) -> ActionResult | None:
        """
        Validate that an action is legal in the current state.

        Returns a failure result if invalid, None if valid.
        """
        if session.battle_over and action.action_type != ActionType.DESELECT_CARD:
            return ActionResult.failure("Battle is over", error_code=ErrorCodes.BATTLE_OVER)

        if action.action_type in PLAYER_TURN_ACTIONS and session.phase != TurnPhase.PLAYER_TURN:
            return ActionResult.failure("Not the player's turn", error_code=ErrorCodes.NOT_PLAYER_TURN)

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SELECT_CARD: self._handle_select_card,
            ActionType.DESELECT_CARD: self._handle_deselect_card,
            ActionType.CHOOSE_TARGET: self._handle_choose_target,
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.COMMIT_ENEMY_ACTION: self._handle_commit_enemy_action,
        }
        return handlers.get(action_type)

    def _handle_select_card(self, session: BattleSession, action: Action) -> ActionResult:
        """
        Handle a card click.

        First click selects. A second click on a card that needs a target
        deselects it; on any other card it plays it.
        """
        instance_id = action.payload.card_instance_id
        card = session.card_in_hand(instance_id)
        if card is None:
            return ActionResult.failure(
                f"Card {instance_id} is not in hand",
                error_code=ErrorCodes.CARD_NOT_IN_HAND,
            )

        normalized = session.normalized(card)
        if normalized.cost > session.player.energy:
            return ActionResult.failure("Not enough energy", error_code=ErrorCodes.NOT_ENOUGH_ENERGY)

        if session.selected_card_id != instance_id:
            session.selected_card_id = instance_id
            return ActionResult.success_with_state(session, changes=[f"Selected {normalized.name}"])

        if normalized.needs_target:
            session.selected_card_id = None
            return ActionResult.success_with_state(session, changes=[f"Deselected {normalized.name}"])

        return self._play(session, instance_id, None)

    def _handle_deselect_card(self, session: BattleSession, action: Action) -> ActionResult:
        """Handle the pointer leaving the selected card."""
        if session.selected_card_id is None:
            return ActionResult.success_with_state(session)
        session.selected_card_id = None
        return ActionResult.success_with_state(session, changes=["Selection cleared"])

    def _handle_choose_target(self, session: BattleSession, action: Action) -> ActionResult:
        """Handle an enemy click: plays the selected single-target attack."""
        card = session.card_in_hand(session.selected_card_id)
        if card is None or not session.normalized(card).needs_target:
            return ActionResult.failure(
                "No attack card selected",
                error_code=ErrorCodes.NO_CARD_SELECTED,
            )
        return self._play(session, card.instance_id, action.payload.target_id)

    def _handle_play_card(self, session: BattleSession, action: Action) -> ActionResult:
        """Handle a direct play command."""
        return self._play(session, action.payload.card_instance_id, action.payload.target_id)

    def _play(self, session: BattleSession, instance_id: str | None, target_id: str | None) -> ActionResult:
        card = session.card_in_hand(instance_id)
        if card is None:
            return ActionResult.failure(
                f"Card {instance_id} is not in hand",
                error_code=ErrorCodes.CARD_NOT_IN_HAND,
            )

        normalized = session.normalized(card)
        if normalized.cost > session.player.energy:
            return ActionResult.failure("Not enough energy", error_code=ErrorCodes.NOT_ENOUGH_ENERGY)

        if not session.play_card(card.instance_id, target_id):
            return ActionResult.failure(
                f"{normalized.name} needs a living enemy target",
                error_code=ErrorCodes.INVALID_TARGET,
            )

        changes = [f"Played {normalized.name}" + (f" on {target_id}" if target_id else "")]
        if session.battle_over:
            changes.append("Victory" if session.outcome else "Defeat")
        return ActionResult.success_with_state(session, changes=changes)

    def _handle_end_turn(self, session: BattleSession, action: Action) -> ActionResult:
        """End the player turn and stage the first enemy action."""
        session.end_turn()
        staged = session.machine.stage_next_enemy_action()
        result = ActionResult.success_with_state(session, changes=["Enemy turn"])
        result.staged_action = staged
        return result

    def _handle_commit_enemy_action(self, session: BattleSession, action: Action) -> ActionResult:
        """Land the staged enemy action and stage the next one."""
        machine = session.machine
        staged = machine.pending_action
        if machine.phase != TurnPhase.ENEMY_TURN or staged is None:
            return ActionResult.failure("No enemy action is staged", error_code=ErrorCodes.NOTHING_STAGED)

        changes = []
        damage = machine.commit_enemy_action(staged)
        if damage is not None:
            changes.append(
                f"{staged.enemy_id} hit for {damage.actual_damage} ({damage.blocked_damage} blocked)"
            )

        next_staged = machine.stage_next_enemy_action()
        if session.battle_over:
            changes.append("Victory" if session.outcome else "Defeat")
        elif next_staged is None:
            changes.append("Player turn")

        result = ActionResult.success_with_state(session, changes=changes)
        result.staged_action = next_staged
        return result


def apply_action(session: BattleSession, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(session, action)
