"""
Tests for bot action selection and legality.

Tests:
- Bots select legal actions
- Evaluator scoring
- Reward choice
"""

import pytest

from ..bots import (
    BotPolicy, EvaluationWeights, FirstLegalPolicy, GreedyPolicy, HeuristicEvaluator,
    POLICIES, RandomPolicy,
)
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import is_legal, legal_actions
from ..engine_core.reducer import apply_action
from .conftest import card_in_hand


class TestBotActionLegality:
    """Tests that bots only select legal actions."""

    @pytest.mark.parametrize("policy", [FirstLegalPolicy(), RandomPolicy(seed=1), GreedyPolicy()])
    def test_bot_selects_legal_action(self, make_battle, policy):
        session = make_battle()
        legal = legal_actions(session)

        decision = policy.select_action(session, legal)

        assert is_legal(session, decision.action)

    @pytest.mark.parametrize("policy", [FirstLegalPolicy(), RandomPolicy(seed=1), GreedyPolicy()])
    def test_no_legal_actions_raises(self, make_battle, policy):
        with pytest.raises(ValueError):
            policy.select_action(make_battle(), [])

    def test_random_policy_is_seeded(self, make_battle):
        session = make_battle()
        legal = legal_actions(session)
        picks_a = [RandomPolicy(seed=4).select_action(session, legal).action for _ in range(3)]
        picks_b = [RandomPolicy(seed=4).select_action(session, legal).action for _ in range(3)]
        assert [a.describe() for a in picks_a] == [b.describe() for b in picks_b]

    def test_policy_registry(self):
        assert set(POLICIES) == {"greedy", "first", "random"}
        assert all(issubclass(p, BotPolicy) for p in POLICIES.values())
        assert GreedyPolicy().get_name() == "GreedyPolicy"


class TestGreedyPolicy:
    """Tests for greedy selection."""

    def test_prefers_area_damage(self, make_battle):
        """Sweep hits both enemies twice; nothing else comes close."""
        session = make_battle()
        decision = GreedyPolicy().select_action(session, legal_actions(session))
        assert decision.action.payload.card_instance_id == card_in_hand(session, "sweep")
        assert decision.best_score > 0

    def test_prefers_killing_blow(self, make_battle):
        session = make_battle(stage_id="x")
        session.machine._enemies[0].health = 4
        decision = GreedyPolicy().select_action(session, legal_actions(session))
        assert decision.action.payload.card_instance_id in {
            card_in_hand(session, "strike"),
            card_in_hand(session, "sweep"),
        }
        assert decision.evaluation_details["kills"] > 0

    def test_ends_turn_when_nothing_helps(self, make_battle):
        session = make_battle(deck=["heal"])
        decision = GreedyPolicy().select_action(session, legal_actions(session))
        assert decision.action.action_type == ActionType.END_TURN

    def test_wears_down_heavy_defense(self, make_battle):
        """Attacks keep landing when defense soaks every hit."""
        session = make_battle(stage_id="x")
        session.machine._enemies[0].defense = 40
        policy = GreedyPolicy()

        for _ in range(200):
            if session.battle_over:
                break
            decision = policy.select_action(session, legal_actions(session))
            assert apply_action(session, decision.action).success

        assert session.battle_over
        assert session.outcome is True

    def test_enemy_turn_commits(self, make_battle):
        session = make_battle()
        session.end_turn()
        session.machine.stage_next_enemy_action()
        decision = GreedyPolicy().select_action(session, legal_actions(session))
        assert decision.action.action_type == ActionType.COMMIT_ENEMY_ACTION


class TestEvaluator:
    """Tests for HeuristicEvaluator."""

    def test_attack_through_defense(self, make_battle):
        session = make_battle()
        session.machine._enemies[1].defense = 4
        strike = card_in_hand(session, "strike")

        evaluation = HeuristicEvaluator().evaluate_action(session, Action.play_card(strike, "enemy-1"))

        assert evaluation.feature_breakdown["damage"] == 2

    def test_fully_blocked_attack_beats_ending_turn(self, make_battle):
        session = make_battle()
        session.machine._enemies[1].defense = 30
        strike = card_in_hand(session, "strike")

        evaluation = HeuristicEvaluator().evaluate_action(session, Action.play_card(strike, "enemy-1"))

        assert evaluation.feature_breakdown["damage"] == 0
        assert evaluation.feature_breakdown["stripped"] == pytest.approx(3.0)
        assert evaluation.score > EvaluationWeights().end_turn
        assert session.machine.enemies[1].defense == 30

    def test_block_values_incoming_damage(self, make_battle):
        session = make_battle()
        evaluation = HeuristicEvaluator().evaluate_action(
            session, Action.play_card(card_in_hand(session, "defend"))
        )
        # 14 incoming, block 5 fully needed
        assert evaluation.feature_breakdown["block"] == pytest.approx(6.0)

    def test_heal_at_full_health_is_worthless(self, make_battle):
        session = make_battle()
        evaluation = HeuristicEvaluator().evaluate_action(
            session, Action.play_card(card_in_hand(session, "heal"))
        )
        assert evaluation.feature_breakdown["heal"] == 0
        assert evaluation.score < 0

    def test_custom_weights(self, make_battle):
        session = make_battle()
        evaluator = HeuristicEvaluator(EvaluationWeights(end_turn=100.0))
        decision = GreedyPolicy(evaluator).select_action(session, legal_actions(session))
        assert decision.action.action_type == ActionType.END_TURN

    def test_missing_card_scores_lowest(self, make_battle):
        evaluation = HeuristicEvaluator().evaluate_action(make_battle(), Action.play_card("card-99"))
        assert evaluation.score == float("-inf")


class TestRewardChoice:
    """Tests for reward selection."""

    def test_default_takes_first(self):
        assert FirstLegalPolicy().select_reward(["a", "b"]) == "a"
        assert GreedyPolicy().select_reward([]) is None

    def test_random_picks_offered(self):
        policy = RandomPolicy(seed=2)
        assert policy.select_reward(["a", "b", "c"]) in {"a", "b", "c"}
        assert policy.select_reward([]) is None
