"""
Engine Core - Deterministic battle resolution.

The engine is the runtime that:
1. Builds a BattleSession from the campaign and a stage
2. Resolves card plays through combat math
3. Alternates player and enemy turns
4. Applies inbound actions via the reducer
5. Copies the outcome back into the campaign
"""

from .state import (
    PlayerState,
    EnemyState,
    CampaignState,
    Intent,
    IntentKind,
    TurnPhase,
    InvariantError,
    check_invariants,
)
from .combat_math import DamageResult, apply_damage, apply_heal, apply_defense, apply_energy_delta
from .cards import CardCategory, NormalizedCard, normalize_card
from .events import BattleEvent, EventChannel, EventKind
from .deck import CardInstance, DeckEngine
from .intent import select_intent
from .resolver import CardResolver
from .turn import TurnStateMachine, StagedEnemyAction
from .outcome import win_battle, lose_battle, roll_reward_cards, pick_reward, skip_reward
from .session import BattleSession, BattleSetupError, start_battle
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCodes
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions
from .rng import RandomDraw, seeded_source, fixed_source

__all__ = [
    "PlayerState",
    "EnemyState",
    "CampaignState",
    "Intent",
    "IntentKind",
    "TurnPhase",
    "InvariantError",
    "check_invariants",
    "DamageResult",
    "apply_damage",
    "apply_heal",
    "apply_defense",
    "apply_energy_delta",
    "CardCategory",
    "NormalizedCard",
    "normalize_card",
    "BattleEvent",
    "EventChannel",
    "EventKind",
    "CardInstance",
    "DeckEngine",
    "select_intent",
    "CardResolver",
    "TurnStateMachine",
    "StagedEnemyAction",
    "win_battle",
    "lose_battle",
    "roll_reward_cards",
    "pick_reward",
    "skip_reward",
    "BattleSession",
    "BattleSetupError",
    "start_battle",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCodes",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "RandomDraw",
    "seeded_source",
    "fixed_source",
]
