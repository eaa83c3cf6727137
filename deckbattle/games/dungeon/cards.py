"""
Dungeon Cards - Starter deck and reward pool.

Starter cards make up the opening deck, one copy each. Reward cards are
offered after victories.

Card structure:
- Cost in energy
- One effect field (damage, block, heal, energy); extra fields are
  ignored by normalization except hits, all_enemies and self_damage
- Type: "attack" or "skill"
"""

from ...catalog.templates import CardTemplate


STARTER_CARDS = [
    CardTemplate(
        card_id="strike", name="Strike", card_type="attack", cost=1, damage=6,
        description="Deal 6 damage to an enemy.",
    ),
    CardTemplate(
        card_id="defend", name="Defend", card_type="skill", cost=1, block=5,
        description="Gain 5 block.",
    ),
    CardTemplate(
        card_id="anger", name="Anger", card_type="attack", cost=0, damage=4,
        description="Deal 4 damage to an enemy.",
    ),
    CardTemplate(
        card_id="slash", name="Slash", card_type="attack", cost=1, damage=7,
        description="Deal 7 damage to an enemy.",
    ),
    CardTemplate(
        card_id="focus", name="Focus", card_type="skill", cost=0, energy=2,
        description="Gain 2 energy.",
    ),
    CardTemplate(
        card_id="heal", name="Heal", card_type="skill", cost=1, heal=8,
        description="Restore 8 health.",
    ),
    CardTemplate(
        card_id="iron_wall", name="Iron Wall", card_type="skill", cost=1, block=8,
        description="Gain 8 block.",
    ),
]

REWARD_CARDS = [
    CardTemplate(
        card_id="sword_wind", name="Sword Wind", card_type="attack", cost=1, damage=4,
        all_enemies=True, rarity="uncommon",
        description="Deal 4 damage to all enemies.",
    ),
    CardTemplate(
        card_id="fireball", name="Fireball", card_type="attack", cost=2, damage=12,
        rarity="uncommon",
        description="Deal 12 damage to an enemy.",
    ),
    CardTemplate(
        card_id="ice_lance", name="Ice Lance", card_type="attack", cost=1, damage=8,
        rarity="uncommon",
        description="Deal 8 damage to an enemy.",
    ),
    CardTemplate(
        card_id="lightning", name="Lightning", card_type="attack", cost=2, damage=10,
        all_enemies=True, rarity="rare",
        description="Deal 10 damage to all enemies.",
    ),
    CardTemplate(
        card_id="magic_shield", name="Magic Shield", card_type="skill", cost=2, block=12,
        rarity="uncommon",
        description="Gain 12 block.",
    ),
    CardTemplate(
        card_id="storm_blade", name="Storm Blade", card_type="attack", cost=2, damage=15,
        rarity="rare",
        description="Deal 15 damage to an enemy.",
    ),
    # Block takes precedence, so only the block applies
    CardTemplate(
        card_id="regenerate", name="Regenerate", card_type="skill", cost=1, heal=5, block=5,
        rarity="uncommon",
        description="Restore 5 health and gain 5 block.",
    ),
    CardTemplate(
        card_id="arrow_barrage", name="Arrow Barrage", card_type="attack", cost=1, damage=3,
        hits=3, rarity="uncommon",
        description="Deal 3 damage to an enemy 3 times.",
    ),
    CardTemplate(
        card_id="frenzy", name="Frenzy", card_type="attack", cost=0, damage=8,
        self_damage=3, rarity="uncommon",
        description="Deal 8 damage to an enemy. Take 3 damage.",
    ),
    CardTemplate(
        card_id="dark_orb", name="Dark Orb", card_type="attack", cost=3, damage=18,
        rarity="rare",
        description="Deal 18 damage to an enemy.",
    ),
    CardTemplate(
        card_id="greater_heal", name="Greater Heal", card_type="skill", cost=2, heal=15,
        rarity="rare",
        description="Restore 15 health.",
    ),
    CardTemplate(
        card_id="double_slash", name="Double Slash", card_type="attack", cost=1, damage=5,
        hits=2, rarity="uncommon",
        description="Deal 5 damage to an enemy twice.",
    ),
    CardTemplate(
        card_id="full_guard", name="Full Guard", card_type="skill", cost=3, block=20,
        rarity="rare",
        description="Gain 20 block.",
    ),
]


def all_cards() -> dict[str, CardTemplate]:
    return {card.card_id: card for card in STARTER_CARDS + REWARD_CARDS}
