"""
Dungeon - The built-in campaign.

A ten-stage dungeon crawl with branching paths, two mid-boss floors
on every route and a final boss.

This module contains:
- Starter and reward card definitions
- Enemy templates
- The stage map
- Catalog and campaign setup
"""

from .cards import STARTER_CARDS, REWARD_CARDS
from .enemies import DUNGEON_ENEMIES
from .stages import DUNGEON_STAGES, FIRST_STAGE
from .setup import create_dungeon_catalog, new_campaign

__all__ = [
    "STARTER_CARDS",
    "REWARD_CARDS",
    "DUNGEON_ENEMIES",
    "DUNGEON_STAGES",
    "FIRST_STAGE",
    "create_dungeon_catalog",
    "new_campaign",
]
