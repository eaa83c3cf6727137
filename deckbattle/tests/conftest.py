"""
Pytest fixtures for Deckbattle tests.
"""

import pytest

from ..catalog import Catalog, CardTemplate, EnemyTemplate, StageDescriptor, StageTier
from ..config import BattleRules
from ..engine_core.events import EventChannel
from ..engine_core.rng import fixed_source
from ..engine_core.session import start_battle
from ..engine_core.state import CampaignState, EnemyState, PlayerState
from ..games.dungeon import create_dungeon_catalog


TEST_CARDS = [
    CardTemplate("strike", "Strike", cost=1, card_type="attack", damage=6),
    CardTemplate("defend", "Defend", cost=1, card_type="skill", block=5),
    CardTemplate("focus", "Focus", cost=0, card_type="skill", energy=2),
    CardTemplate("heal", "Heal", cost=1, card_type="skill", heal=8),
    CardTemplate("sweep", "Sweep", cost=1, card_type="attack", damage=5, hits=2, all_enemies=True),
    CardTemplate("meteor", "Meteor", cost=5, card_type="attack", damage=30),
    CardTemplate("frenzy", "Frenzy", cost=0, card_type="attack", damage=8, self_damage=3),
    CardTemplate("dud", "Dud", cost=1, card_type="skill"),
]

TEST_ENEMIES = [
    EnemyTemplate("Dummy", health=20, attack=6),
    EnemyTemplate("Shield", health=30, attack=8, defense=5),
    EnemyTemplate("Brute", health=12),
]

TEST_STAGES = [
    StageDescriptor("a", "Training Yard", enemies=("Dummy", "Shield"), next_stages=("b", "x")),
    StageDescriptor("b", "Gate", enemies=("Dummy",), tier=StageTier.MID_BOSS, next_stages=("c",)),
    StageDescriptor("x", "Side Room", enemies=("Brute",), next_stages=("c",)),
    StageDescriptor("c", "Throne", enemies=("Dummy",), tier=StageTier.BOSS),
]

BASIC_DECK = ["strike", "defend", "focus", "heal", "sweep"]


@pytest.fixture
def catalog() -> Catalog:
    """Small catalog with one card of each effect kind."""
    return Catalog(
        cards={c.card_id: c for c in TEST_CARDS},
        enemies={e.name: e for e in TEST_ENEMIES},
        stages={s.stage_id: s for s in TEST_STAGES},
        starter_deck=list(BASIC_DECK),
        reward_pool=["meteor", "frenzy", "dud", "sweep"],
        first_stage="a",
    )


@pytest.fixture
def dungeon_catalog() -> Catalog:
    return create_dungeon_catalog()


@pytest.fixture
def rules() -> BattleRules:
    return BattleRules()


@pytest.fixture
def events() -> EventChannel:
    return EventChannel()


@pytest.fixture
def player() -> PlayerState:
    return PlayerState(health=50, max_health=80, energy=3, max_energy=3)


@pytest.fixture
def enemy() -> EnemyState:
    return EnemyState(enemy_id="enemy-0", name="Dummy", health=20, max_health=20)


@pytest.fixture
def campaign(catalog) -> CampaignState:
    return CampaignState(
        player=PlayerState(health=80, max_health=80, energy=3, max_energy=3),
        deck=list(BASIC_DECK),
        current_stage="a",
    )


@pytest.fixture
def make_battle(catalog, campaign):
    """
    Build a started battle.

    Draws default to 0.5, which makes every enemy with an attack value
    choose Attack. With a deck of five cards the whole deck is in hand.
    """
    def _make(stage_id="a", deck=None, draws=(0.5,), health=None):
        if deck is not None:
            campaign.deck = list(deck)
        if health is not None:
            campaign.player.health = health
        return start_battle(catalog, campaign, stage_id, fixed_source(draws), battle_id="test")
    return _make


def card_in_hand(session, card_id):
    """Instance id of the first card in hand with this card id."""
    for card in session.deck.hand:
        if card.card_id == card_id:
            return card.instance_id
    raise AssertionError(f"{card_id} not in hand")


@pytest.fixture
def quick_catalog(catalog) -> Catalog:
    """Test catalog whose first and final stages hold one 12-health Brute each."""
    catalog.stages["a"] = StageDescriptor("a", "Yard", enemies=("Brute",), next_stages=("b", "x"))
    catalog.stages["c"] = StageDescriptor("c", "Throne", enemies=("Brute",), tier=StageTier.BOSS)
    return catalog
