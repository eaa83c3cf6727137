"""
Dungeon Setup - Builds the catalog and a fresh campaign.

This module handles:
- Assembling the catalog from cards, enemies and stages
- Validating it before use
- Creating the starting campaign state
"""

from __future__ import annotations

from ...catalog import Catalog, validate_catalog
from ...config import BattleRules, DEFAULT_RULES
from ...engine_core.state import CampaignState, PlayerState
from .cards import STARTER_CARDS, REWARD_CARDS, all_cards
from .enemies import all_enemies
from .stages import FIRST_STAGE, all_stages


def create_dungeon_catalog(validate: bool = True) -> Catalog:
    """
    Create the built-in dungeon catalog.

    Raises CatalogValidationError if validate=True and the data is
    inconsistent.
    """
    catalog = Catalog(
        cards=all_cards(),
        enemies=all_enemies(),
        stages=all_stages(),
        starter_deck=[card.card_id for card in STARTER_CARDS],
        reward_pool=[card.card_id for card in REWARD_CARDS],
        first_stage=FIRST_STAGE,
    )
    if validate:
        validate_catalog(catalog, raise_on_error=True)
    return catalog


def new_campaign(catalog: Catalog, rules: BattleRules = DEFAULT_RULES) -> CampaignState:
    """A campaign at the first stage with the starter deck."""
    player = PlayerState(
        health=rules.starting_health,
        max_health=rules.starting_health,
        energy=rules.starting_energy,
        max_energy=rules.starting_energy,
    )
    return CampaignState(
        player=player,
        deck=list(catalog.starter_deck),
        current_stage=catalog.first_stage,
    )
