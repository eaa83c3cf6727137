"""
Tests for API Pydantic schemas.

Validates that:
- Request/response models serialize correctly
- Error codes are properly structured
- Engine snapshots validate against the battle schema
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_error_response_schema(self):
        """ErrorResponse carries a code and the API version."""
        from deckbattle.api.schemas import ErrorResponse, ErrorCode

        response = ErrorResponse(
            error="Action rejected",
            error_code=ErrorCode.ACTION_REJECTED,
            details={"reason": "NOT_ENOUGH_ENERGY"},
        )

        data = response.model_dump(mode="json")
        assert data["error_code"] == "ACTION_REJECTED"
        assert data["details"]["reason"] == "NOT_ENOUGH_ENERGY"
        assert data["api_version"] == "v1"

    def test_error_code_is_required(self):
        from deckbattle.api.schemas import ErrorResponse

        with pytest.raises(ValidationError):
            ErrorResponse(error="Missing code")

    def test_unknown_error_code_rejected(self):
        from deckbattle.api.schemas import ErrorResponse

        with pytest.raises(ValidationError):
            ErrorResponse(error="x", error_code="NOT_A_CODE")

    def test_battle_snapshot_validates(self, make_battle):
        """The engine snapshot is a valid BattleStateResponse."""
        from deckbattle.api.schemas import BattleStateResponse, CardCategory, TurnPhase

        response = BattleStateResponse.model_validate(make_battle().snapshot())

        assert response.phase == TurnPhase.PLAYER_TURN
        assert response.turn_number == 1
        assert response.outcome is None
        assert len(response.enemies) == 2
        assert response.enemies[1].intent.value == 8
        assert {c.category for c in response.hand} == {
            CardCategory.ATTACK, CardCategory.DEFEND, CardCategory.ENERGY_GAIN, CardCategory.HEAL,
        }
        assert response.draw_pile_count == 0

    def test_card_info_flags(self, make_battle):
        from deckbattle.api.schemas import BattleStateResponse

        response = BattleStateResponse.model_validate(make_battle().snapshot())
        by_id = {c.card_id: c for c in response.hand}

        assert by_id["strike"].needs_target
        assert not by_id["sweep"].needs_target
        assert by_id["sweep"].all_enemies
        assert by_id["sweep"].hits == 2
        assert all(c.playable for c in response.hand)

    def test_staged_action_schema(self):
        from deckbattle.api.schemas import StagedActionInfo, IntentKind

        staged = StagedActionInfo.model_validate({
            "enemy_id": "enemy-0",
            "intent": {"kind": "attack", "value": 6},
        })
        assert staged.intent.kind == IntentKind.ATTACK
        assert not staged.committed

    def test_request_defaults(self):
        from deckbattle.api.schemas import (
            CreateSessionRequest, PickRewardRequest, PlayCardRequest, StartBattleRequest,
        )

        assert CreateSessionRequest().seed is None
        assert StartBattleRequest().stage_id is None
        assert PickRewardRequest().card_id is None
        assert PlayCardRequest(card_instance_id="card-1").target_id is None

    def test_play_card_requires_card(self):
        from deckbattle.api.schemas import PlayCardRequest

        with pytest.raises(ValidationError):
            PlayCardRequest(target_id="enemy-0")

    def test_stage_tier_values(self):
        from deckbattle.api.schemas import StageInfo, StageTier

        stage = StageInfo(stage_id="4", name="Mid-boss", tier="mid-boss")
        assert stage.tier == StageTier.MID_BOSS
        assert stage.next_stages == []
