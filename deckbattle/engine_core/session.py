"""
Battle Session - The aggregate state of one battle.

A BattleSession bundles the player, the turn machine (which owns the
enemies), the three piles, the event channel and the card selection.
It is built from the campaign at battle start and discarded at battle
end, after settle() has copied the outcome back into the campaign.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any
import uuid

from loguru import logger

from ..catalog.templates import Catalog, StageDescriptor
from ..config import BattleRules, DEFAULT_RULES
from .cards import NormalizedCard, normalize_card
from .deck import CardInstance, DeckEngine
from .events import EventChannel
from .intent import select_intent
from .outcome import lose_battle, roll_reward_cards, win_battle
from .rng import RandomDraw
from .state import CampaignState, EnemyState, PlayerState, TurnPhase, check_invariants
from .turn import TurnStateMachine


class BattleSetupError(Exception):
    """A battle cannot start from the given campaign."""


@dataclass
class BattleSession:
    """One battle in progress."""
    battle_id: str
    stage: StageDescriptor
    machine: TurnStateMachine
    random_draw: RandomDraw
    rules: BattleRules = DEFAULT_RULES

    selected_card_id: str | None = None
    action_history: list[Any] = field(default_factory=list)  # list[Action]
    settled: bool = False

    # Instance ids dealt at setup, for the pile invariant
    _dealt: list[str] = field(default_factory=list, repr=False)

    @property
    def player(self) -> PlayerState:
        return self.machine.player

    @property
    def deck(self) -> DeckEngine:
        return self.machine.deck

    @property
    def events(self) -> EventChannel:
        return self.machine.events

    @property
    def phase(self) -> TurnPhase:
        return self.machine.phase

    @property
    def battle_over(self) -> bool:
        return self.machine.battle_over

    @property
    def outcome(self) -> bool | None:
        return self.machine.outcome

    @property
    def hand(self) -> list[CardInstance]:
        return list(self.deck.hand)

    def card_in_hand(self, instance_id: str | None) -> CardInstance | None:
        if instance_id is None:
            return None
        return self.deck.find_in_hand(instance_id)

    def normalized(self, card: CardInstance) -> NormalizedCard:
        return normalize_card(card.template)

    def play_card(self, instance_id: str, target_id: str | None = None) -> bool:
        """
        Play a card from hand. On success the card moves to the discard
        pile and any selection is cleared; on failure it stays in hand.
        """
        card = self.card_in_hand(instance_id)
        if card is None:
            return False
        if not self.machine.use_card(self.normalized(card), target_id):
            return False
        self.deck.remove_from_hand(instance_id)
        self.deck.discard(card)
        self.selected_card_id = None
        return True

    def end_turn(self) -> None:
        """Discard the hand and hand over to the enemies."""
        self.selected_card_id = None
        self.deck.discard_all()
        self.machine.end_player_turn()
        self.machine.start_enemy_turn()

    def check_invariants(self) -> None:
        """Raise InvariantError if the battle state is inconsistent."""
        check_invariants(
            self.player,
            self.machine.enemies,
            piles=[[c.instance_id for c in pile] for pile in self.deck.piles()],
            expected_cards=self._dealt,
        )

    def settle(self, campaign: CampaignState, catalog: Catalog) -> bool | None:
        """
        Copy a finished battle into the campaign.

        Victory clears the stage and rolls a reward offer; defeat ends the
        campaign. Returns the outcome, or None if the battle is still on.
        Settling twice has no further effect.
        """
        if not self.battle_over:
            return None
        if self.settled:
            return self.outcome
        self.settled = True

        if self.outcome:
            win_battle(self.stage, campaign, self.player, self.rules)
            campaign.pending_rewards = roll_reward_cards(
                catalog, self.stage, self.random_draw, self.rules
            )
        else:
            lose_battle(campaign, self.player)
        return self.outcome

    def snapshot(self) -> dict:
        """Read-only copy of everything the presentation layer shows."""
        data = self.machine.snapshot()
        hand = []
        for card in self.deck.hand:
            norm = self.normalized(card)
            hand.append({
                "instance_id": card.instance_id,
                "card_id": card.card_id,
                "name": norm.name,
                "cost": norm.cost,
                "category": norm.category.value,
                "value": norm.value,
                "hits": norm.hits,
                "all_enemies": norm.all_enemies,
                "needs_target": norm.needs_target,
                "description": card.template.description,
                "playable": norm.cost <= self.player.energy,
            })
        data.update({
            "battle_id": self.battle_id,
            "stage_id": self.stage.stage_id,
            "hand": hand,
            "draw_pile_count": len(self.deck.draw_pile),
            "discard_pile_count": len(self.deck.discard_pile),
            "selected_card_id": self.selected_card_id,
        })
        return data


def start_battle(
    catalog: Catalog,
    campaign: CampaignState,
    stage_id: str | None,
    random_draw: RandomDraw,
    rules: BattleRules = DEFAULT_RULES,
    battle_id: str | None = None,
) -> BattleSession:
    """
    Build a battle for `stage_id` (default: the campaign's current stage)
    and start the first player turn.

    Enemy names missing from the catalog are skipped.
    """
    if campaign.game_over:
        raise BattleSetupError("Campaign is over")

    stage = catalog.get_stage(stage_id or campaign.current_stage)
    events = EventChannel()

    enemies = []
    templates = {}
    for slot, name in enumerate(stage.enemies):
        template = catalog.enemies.get(name)
        if template is None:
            logger.warning("stage {} lists unknown enemy {}", stage.stage_id, name)
            continue
        templates[name] = template
        enemies.append(EnemyState(
            enemy_id=f"enemy-{slot}",
            name=template.name,
            health=template.health,
            max_health=template.health,
            intent=select_intent(template, random_draw, rules),
        ))

    cards = [
        CardInstance(instance_id=f"card-{i}", template=catalog.get_card(card_id))
        for i, card_id in enumerate(campaign.deck)
    ]
    deck = DeckEngine(random_draw, events)
    deck.initialize(cards)

    player = replace(campaign.player, defense=0)
    machine = TurnStateMachine(
        player=player,
        enemies=enemies,
        deck=deck,
        events=events,
        random_draw=random_draw,
        enemy_templates=templates,
        rules=rules,
    )
    session = BattleSession(
        battle_id=battle_id or str(uuid.uuid4()),
        stage=stage,
        machine=machine,
        random_draw=random_draw,
        rules=rules,
        _dealt=[c.instance_id for c in cards],
    )
    logger.info(
        "battle {} started at stage {} against {}",
        session.battle_id, stage.stage_id, [e.name for e in enemies],
    )
    machine.start_player_turn()
    if not enemies:
        machine.check_battle_end()
    return session
