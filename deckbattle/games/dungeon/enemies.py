"""Dungeon Enemies - Enemy templates, keyed by name."""

from ...catalog.templates import EnemyTemplate


DUNGEON_ENEMIES = [
    EnemyTemplate("Goblin Warrior", health=25, attack=7),
    EnemyTemplate("Orc Shieldbearer", health=35, attack=5, defense=8),
    EnemyTemplate("Mage", health=20, attack=12),
    EnemyTemplate("Hardened Goblin", health=35, attack=10),
    EnemyTemplate("Elite Orc", health=50, attack=8, defense=12),
    EnemyTemplate("Archmage", health=30, attack=15),
    EnemyTemplate("Magic Golem", health=60, attack=12, defense=10),
    EnemyTemplate("Dragon Rider", health=80, attack=18, defense=15, is_boss=True),
    EnemyTemplate("Dark Wolf", health=30, attack=10),
    EnemyTemplate("Shadow Mage", health=25, attack=14),
    EnemyTemplate("Fire Spirit", health=28, attack=11),
    EnemyTemplate("Lava Golem", health=70, attack=16, defense=12),
    EnemyTemplate("Shadow Lord", health=100, attack=20, defense=20, is_boss=True),
    EnemyTemplate("Flame Archmage", health=90, attack=22, is_boss=True),
    EnemyTemplate("Ancient Guardian", health=60, attack=14, defense=18),
    EnemyTemplate("Magic Knight", health=55, attack=16, defense=14),
    EnemyTemplate(
        "Demon King", health=150, attack=25, defense=25, is_boss=True,
        description="Source of all evil.",
    ),
]


def all_enemies() -> dict[str, EnemyTemplate]:
    return {enemy.name: enemy for enemy in DUNGEON_ENEMIES}
