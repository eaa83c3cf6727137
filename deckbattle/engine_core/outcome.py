"""
Battle Outcome - Copies battle results into the campaign.

- win_battle: clear the stage, heal by tier, advance the map
- lose_battle: end the campaign
- roll_reward_cards / pick_reward / skip_reward: post-victory card offer
"""

from __future__ import annotations
import math

from loguru import logger

from ..catalog.templates import Catalog, StageDescriptor
from ..config import BattleRules, DEFAULT_RULES
from .combat_math import apply_heal
from .rng import RandomDraw, randint_below
from .state import CampaignState, PlayerState


def win_battle(
    stage: StageDescriptor,
    campaign: CampaignState,
    player: PlayerState,
    rules: BattleRules = DEFAULT_RULES,
) -> int:
    """
    Record a victory on `stage`.

    Heals `player` by floor(max_health * fraction) for the stage tier,
    clamped to max health, and carries the result into the campaign.
    Returns the amount actually healed.
    """
    if stage.stage_id not in campaign.stages_cleared:
        campaign.stages_cleared.append(stage.stage_id)

    before = player.health
    heal_amount = math.floor(player.max_health * rules.heal_fraction(stage.tier))
    apply_heal(player, heal_amount)
    campaign.player.health = player.health
    campaign.player.max_health = player.max_health

    if stage.next_stages:
        campaign.current_stage = stage.next_stages[0]

    logger.info(
        "stage {} cleared, healed {} (health {}/{}), next {}",
        stage.stage_id, player.health - before, player.health, player.max_health,
        campaign.current_stage,
    )
    return player.health - before


def lose_battle(campaign: CampaignState, player: PlayerState | None = None) -> None:
    """Mark the campaign as over."""
    if player is not None:
        campaign.player.health = player.health
    campaign.game_over = True
    campaign.pending_rewards = []
    logger.info("campaign lost at stage {}", campaign.current_stage)


def roll_reward_cards(
    catalog: Catalog,
    stage: StageDescriptor,
    random_draw: RandomDraw,
    rules: BattleRules = DEFAULT_RULES,
) -> list[str]:
    """Pick distinct reward card ids from the pool, count by stage tier."""
    pool = list(dict.fromkeys(catalog.reward_pool))
    count = min(rules.reward_count(stage.tier), len(pool))
    offered = []
    for _ in range(count):
        offered.append(pool.pop(randint_below(random_draw, len(pool))))
    return offered


def pick_reward(campaign: CampaignState, card_id: str) -> bool:
    """Add an offered card to the deck. Returns False if it was not offered."""
    if card_id not in campaign.pending_rewards:
        return False
    campaign.deck.append(card_id)
    campaign.pending_rewards = []
    logger.info("reward {} added to deck ({} cards)", card_id, len(campaign.deck))
    return True


def skip_reward(campaign: CampaignState) -> None:
    campaign.pending_rewards = []
