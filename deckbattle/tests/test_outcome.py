"""
Tests for battle outcomes and campaign bookkeeping.

Tests:
- Victory healing by tier
- Stage clearing and map advance
- Reward offers
"""

from ..catalog import StageDescriptor, StageTier
from ..engine_core.outcome import (
    lose_battle, pick_reward, roll_reward_cards, skip_reward, win_battle,
)
from ..engine_core.rng import fixed_source
from ..engine_core.state import PlayerState
from .conftest import card_in_hand


def battle_player(health, max_health=80):
    return PlayerState(health=health, max_health=max_health, energy=0, max_energy=3)


class TestWinBattle:
    """Tests for win_battle."""

    def test_normal_stage_heals_quarter(self, catalog, campaign):
        player = battle_player(50)

        healed = win_battle(catalog.get_stage("a"), campaign, player)

        assert healed == 20
        assert player.health == 70
        assert campaign.player.health == 70
        assert campaign.stages_cleared == ["a"]
        assert campaign.current_stage == "b"

    def test_mid_boss_heals_forty_percent(self, catalog, campaign):
        player = battle_player(10)
        win_battle(catalog.get_stage("b"), campaign, player)
        assert player.health == 42

    def test_boss_heals_sixty_percent_floored(self, catalog, campaign):
        player = battle_player(10, max_health=75)
        win_battle(catalog.get_stage("c"), campaign, player)
        # floor(75 * 0.6) = 45
        assert player.health == 55
        assert campaign.player.max_health == 75

    def test_heal_clamped_at_max(self, catalog, campaign):
        player = battle_player(75)
        assert win_battle(catalog.get_stage("a"), campaign, player) == 5
        assert player.health == 80

    def test_clearing_twice_does_not_duplicate(self, catalog, campaign):
        stage = catalog.get_stage("a")
        win_battle(stage, campaign, battle_player(50))
        win_battle(stage, campaign, battle_player(50))
        assert campaign.stages_cleared == ["a"]

    def test_final_stage_keeps_pointer(self, catalog, campaign):
        campaign.current_stage = "c"
        win_battle(catalog.get_stage("c"), campaign, battle_player(50))
        assert campaign.current_stage == "c"


class TestLoseBattle:
    def test_marks_game_over(self, campaign):
        campaign.pending_rewards = ["meteor"]
        lose_battle(campaign, battle_player(0))
        assert campaign.game_over
        assert campaign.player.health == 0
        assert campaign.pending_rewards == []


class TestRewards:
    """Tests for the reward offer."""

    def test_offer_size_by_tier(self, catalog):
        draw = fixed_source([0.3, 0.7])
        assert len(roll_reward_cards(catalog, catalog.get_stage("a"), draw)) == 3
        # Pool has four distinct cards; boss wants five
        assert len(roll_reward_cards(catalog, catalog.get_stage("c"), draw)) == 4

    def test_offer_is_distinct(self, catalog):
        catalog.reward_pool = ["meteor", "meteor", "frenzy", "dud", "sweep"]
        offered = roll_reward_cards(catalog, catalog.get_stage("b"), fixed_source([0.0]))
        assert len(offered) == 4
        assert len(set(offered)) == 4

    def test_offer_is_deterministic(self, catalog):
        stage = catalog.get_stage("a")
        assert roll_reward_cards(catalog, stage, fixed_source([0.0])) == ["meteor", "frenzy", "dud"]

    def test_pick_reward(self, campaign):
        campaign.pending_rewards = ["meteor", "dud"]
        assert pick_reward(campaign, "meteor")
        assert campaign.deck[-1] == "meteor"
        assert campaign.pending_rewards == []

    def test_pick_unoffered_card(self, campaign):
        campaign.pending_rewards = ["meteor"]
        assert not pick_reward(campaign, "frenzy")
        assert campaign.pending_rewards == ["meteor"]
        assert "frenzy" not in campaign.deck

    def test_skip_reward(self, campaign):
        campaign.pending_rewards = ["meteor"]
        deck = list(campaign.deck)
        skip_reward(campaign)
        assert campaign.pending_rewards == []
        assert campaign.deck == deck


class TestSettle:
    """Tests for BattleSession.settle."""

    def test_settle_victory_offers_rewards(self, make_battle, catalog, campaign):
        session = make_battle(stage_id="b", deck=["focus", "meteor", "strike", "defend", "heal"])
        session.play_card(card_in_hand(session, "focus"))
        session.play_card(card_in_hand(session, "meteor"), "enemy-0")

        assert session.settle(campaign, catalog) is True
        assert campaign.stages_cleared == ["b"]
        assert campaign.current_stage == "c"
        assert len(campaign.pending_rewards) == 4

        offered = list(campaign.pending_rewards)
        assert session.settle(campaign, catalog) is True
        assert campaign.pending_rewards == offered

    def test_settle_ongoing_battle(self, make_battle, catalog, campaign):
        assert make_battle().settle(campaign, catalog) is None
        assert campaign.stages_cleared == []

    def test_settle_defeat(self, make_battle, catalog, campaign):
        session = make_battle(health=5)
        session.end_turn()
        session.machine.run_enemy_turn()

        assert session.settle(campaign, catalog) is False
        assert campaign.game_over

    def test_tier_enum_and_string_lookup(self, rules):
        assert rules.heal_fraction(StageTier.BOSS) == rules.heal_fraction("boss") == 0.6
        assert rules.reward_count(StageTier.NORMAL) == 3
        stage = StageDescriptor("z", "Z", tier=StageTier.MID_BOSS)
        assert rules.reward_count(stage.tier) == 4

    def test_rules_are_hashable(self, rules):
        from ..config import DEFAULT_RULES

        assert hash(rules) == hash(DEFAULT_RULES)
        assert {rules, DEFAULT_RULES} == {DEFAULT_RULES}
