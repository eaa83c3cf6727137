"""
Tests for combat arithmetic, randomness, card normalization and intents.

Tests:
- Defense absorbs damage and only loses the absorbed amount
- Heal clamping
- Fixed random sources
- Card normalization precedence
- Intent selection
"""

import pytest

from ..catalog import CardTemplate, EnemyTemplate
from ..config import BattleRules
from ..engine_core.cards import CardCategory, normalize_card
from ..engine_core.combat_math import (
    apply_damage, apply_defense, apply_energy_delta, apply_heal,
)
from ..engine_core.intent import select_intent
from ..engine_core.rng import fixed_source, randint_below, seeded_source, shuffle
from ..engine_core.state import EnemyState, IntentKind, PlayerState


class TestApplyDamage:
    """Tests for apply_damage."""

    @pytest.mark.parametrize("amount,defense", [(0, 0), (4, 10), (10, 4), (7, 7), (12, 0)])
    def test_damage_breakdown(self, amount, defense):
        """blocked = min(defense, amount); only the blocked part leaves defense."""
        target = EnemyState("e", "Dummy", health=20, max_health=20, defense=defense)

        result = apply_damage(target, amount)

        blocked = min(defense, amount)
        assert result.blocked_damage == blocked
        assert result.actual_damage == amount - blocked
        assert target.defense == defense - blocked
        assert target.health == max(0, 20 - (amount - blocked))

    def test_small_hit_keeps_remaining_defense(self):
        """A hit smaller than defense leaves the rest of the defense."""
        target = PlayerState(health=30, max_health=30, energy=3, max_energy=3, defense=10)
        apply_damage(target, 4)
        assert target.defense == 6
        assert target.health == 30

    def test_health_floors_at_zero(self):
        target = EnemyState("e", "Dummy", health=5, max_health=20)
        result = apply_damage(target, 50)
        assert target.health == 0
        assert result.actual_damage == 50
        assert target.is_dead


class TestOtherMath:
    """Tests for heal, defense and energy helpers."""

    def test_heal_clamps_to_max(self, player):
        player.health = 75
        assert apply_heal(player, 20) == 80

    def test_heal_below_max(self, player):
        assert apply_heal(player, 8) == 58

    def test_defense_has_no_cap(self, player):
        apply_defense(player, 500)
        assert apply_defense(player, 5) == 505

    def test_energy_may_exceed_max(self, player):
        assert apply_energy_delta(player, 4) == 7

    def test_energy_payment(self, player):
        assert apply_energy_delta(player, -2) == 1


class TestRandomSources:
    """Tests for injected randomness."""

    def test_fixed_source_cycles(self):
        draw = fixed_source([0.1, 0.2])
        assert [draw() for _ in range(4)] == [0.1, 0.2, 0.1, 0.2]

    def test_fixed_source_rejects_empty(self):
        with pytest.raises(ValueError):
            fixed_source([])

    def test_fixed_source_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            fixed_source([1.0])

    def test_seeded_sources_repeat(self):
        a, b = seeded_source(42), seeded_source(42)
        assert [a() for _ in range(5)] == [b() for _ in range(5)]

    def test_randint_below_stays_in_range(self):
        assert randint_below(fixed_source([0.0]), 3) == 0
        assert randint_below(fixed_source([0.9999999]), 3) == 2

    def test_shuffle_preserves_items(self):
        items = list(range(10))
        result = shuffle(items, seeded_source(3))
        assert result is items
        assert sorted(result) == list(range(10))


class TestNormalizeCard:
    """Tests for card normalization."""

    def test_untyped_damage_is_attack(self):
        card = normalize_card(CardTemplate("c", "C", cost=1, damage=6))
        assert card.category == CardCategory.ATTACK
        assert card.value == 6
        assert card.needs_target

    def test_skill_with_damage_is_not_attack(self):
        card = normalize_card(CardTemplate("c", "C", card_type="skill", damage=6, block=4))
        assert card.category == CardCategory.DEFEND
        assert card.value == 4

    def test_block_beats_heal(self):
        card = normalize_card(CardTemplate("c", "C", card_type="skill", heal=5, block=5))
        assert card.category == CardCategory.DEFEND

    def test_heal_beats_energy(self):
        card = normalize_card(CardTemplate("c", "C", card_type="skill", heal=3, energy=2))
        assert card.category == CardCategory.HEAL
        assert card.value == 3

    def test_energy_card(self):
        card = normalize_card(CardTemplate("c", "C", card_type="skill", energy=2))
        assert card.category == CardCategory.ENERGY_GAIN
        assert not card.needs_target

    def test_no_effect_is_unknown(self):
        card = normalize_card(CardTemplate("c", "C", cost=1, card_type="power"))
        assert card.category == CardCategory.UNKNOWN
        assert card.value == 0

    def test_hits_default_to_one(self):
        assert normalize_card(CardTemplate("c", "C", damage=3)).hits == 1
        assert normalize_card(CardTemplate("c", "C", damage=3, hits=3)).hits == 3

    def test_all_enemies_needs_no_target(self):
        card = normalize_card(CardTemplate("c", "C", card_type="attack", damage=4, all_enemies=True))
        assert card.all_enemies
        assert not card.needs_target

    def test_modifiers_ignored_on_non_attacks(self):
        card = normalize_card(CardTemplate("c", "C", card_type="skill", block=5, self_damage=3, all_enemies=True))
        assert card.self_damage == 0
        assert not card.all_enemies

    def test_negative_cost_reads_as_zero(self):
        assert normalize_card(CardTemplate("c", "C", cost=-2, block=1)).cost == 0


class TestSelectIntent:
    """Tests for enemy intent selection."""

    def test_low_roll_defends(self):
        """A roll of 0.1 is under the 30% defend chance."""
        template = EnemyTemplate("Shield", health=30, attack=8, defense=5)
        draw = fixed_source([0.1])
        for _ in range(5):
            intent = select_intent(template, draw)
            assert intent.kind == IntentKind.DEFEND
            assert intent.value == 5

    def test_high_roll_attacks_with_template_value(self):
        template = EnemyTemplate("Shield", health=30, attack=8, defense=5)
        intent = select_intent(template, fixed_source([0.5]))
        assert intent.kind == IntentKind.ATTACK
        assert intent.value == 8

    def test_no_defense_never_defends(self):
        template = EnemyTemplate("Dummy", health=20, attack=6)
        intent = select_intent(template, fixed_source([0.0]))
        assert intent.kind == IntentKind.ATTACK
        assert intent.value == 6

    @pytest.mark.parametrize("roll,expected", [(0.0, 5), (0.5, 8), (0.9999, 10)])
    def test_fallback_attack_range(self, roll, expected):
        """Enemies without an attack value hit for 5..10."""
        template = EnemyTemplate("Brute", health=12)
        intent = select_intent(template, fixed_source([roll]))
        assert intent.kind == IntentKind.ATTACK
        assert intent.value == expected

    def test_custom_defend_chance(self):
        template = EnemyTemplate("Shield", health=30, attack=8, defense=5)
        rules = BattleRules(defend_chance_percent=60)
        assert select_intent(template, fixed_source([0.5]), rules).kind == IntentKind.DEFEND
