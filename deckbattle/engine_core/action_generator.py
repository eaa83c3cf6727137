"""
Action Generator - Generates all legal actions for a battle.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to show available actions
3. Validation (is this action in legal_actions?)

Design: Generates direct PLAY_CARD / END_TURN / COMMIT_ENEMY_ACTION
actions. Pointer actions (select, choose target) are UI input, not moves.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Action
from .session import BattleSession
from .state import TurnPhase


@dataclass
class ActionGenerator:
    """Generates legal actions for the current battle state."""

    def generate(self, session: BattleSession) -> list[Action]:
        """
        Generate every legal action.

        Card plays come first, in hand order; END_TURN is always last.
        """
        if session.battle_over:
            return []

        if session.phase == TurnPhase.ENEMY_TURN:
            if session.machine.pending_action is not None:
                return [Action.commit_enemy_action()]
            return []

        actions = self._generate_card_plays(session)
        actions.append(Action.end_turn())
        return actions

    def _generate_card_plays(self, session: BattleSession) -> list[Action]:
        actions = []
        targets = [e.enemy_id for e in session.machine.living_enemies()]
        for card in session.deck.hand:
            normalized = session.normalized(card)
            if normalized.cost > session.player.energy:
                continue
            if normalized.needs_target:
                for target_id in targets:
                    actions.append(Action.play_card(card.instance_id, target_id))
            else:
                actions.append(Action.play_card(card.instance_id))
        return actions


def legal_actions(session: BattleSession) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    generator = ActionGenerator()
    return generator.generate(session)


def is_legal(session: BattleSession, action: Action) -> bool:
    """Check if a specific action is legal."""
    for a in legal_actions(session):
        if (
            a.action_type == action.action_type
            and a.payload.card_instance_id == action.payload.card_instance_id
            and a.payload.target_id == action.payload.target_id
        ):
            return True
    return False

