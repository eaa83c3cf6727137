"""
Dungeon Stages - The ten-stage campaign map.

Stages branch after the first floor and rejoin at the final dungeon.
Winning a stage moves the campaign to the first of its next stages.
"""

from ...catalog.templates import StageDescriptor, StageTier


DUNGEON_STAGES = [
    StageDescriptor(
        "1", "Goblin Den",
        enemies=("Goblin Warrior", "Orc Shieldbearer", "Mage"),
        next_stages=("2", "3"),
        description="A dungeon for beginners.",
    ),
    StageDescriptor(
        "2", "Orc Fortress",
        enemies=("Hardened Goblin", "Elite Orc", "Archmage"),
        next_stages=("4", "5"),
        description="Stronghold of the orcs.",
    ),
    StageDescriptor(
        "3", "Mage Tower",
        enemies=("Mage", "Magic Golem", "Mage"),
        next_stages=("4", "6"),
        description="A tower of arcane secrets.",
    ),
    StageDescriptor(
        "4", "Mid-boss: Dragon Rider",
        enemies=("Dragon Rider",),
        tier=StageTier.MID_BOSS,
        next_stages=("7", "8"),
        description="A mighty dragon rider.",
    ),
    StageDescriptor(
        "5", "Dark Forest",
        enemies=("Dark Wolf", "Shadow Mage", "Dark Wolf"),
        next_stages=("7",),
        description="A forest steeped in darkness.",
    ),
    StageDescriptor(
        "6", "Fire Cavern",
        enemies=("Fire Spirit", "Lava Golem", "Fire Spirit"),
        next_stages=("8",),
        description="A cave of roaring flames.",
    ),
    StageDescriptor(
        "7", "Mid-boss: Shadow Lord",
        enemies=("Shadow Lord",),
        tier=StageTier.MID_BOSS,
        next_stages=("9",),
        description="A lord who wields the power of shadow.",
    ),
    StageDescriptor(
        "8", "Mid-boss: Flame Archmage",
        enemies=("Flame Archmage",),
        tier=StageTier.MID_BOSS,
        next_stages=("9",),
        description="An archmage of fire magic.",
    ),
    StageDescriptor(
        "9", "Final Dungeon",
        enemies=("Ancient Guardian", "Magic Knight", "Ancient Guardian"),
        next_stages=("10",),
        description="The road to the final boss.",
    ),
    StageDescriptor(
        "10", "Final Boss: Demon King",
        enemies=("Demon King",),
        tier=StageTier.BOSS,
        description="The source of all evil.",
    ),
]

FIRST_STAGE = "1"


def all_stages() -> dict[str, StageDescriptor]:
    return {stage.stage_id: stage for stage in DUNGEON_STAGES}
