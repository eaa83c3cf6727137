"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages sessions
3. Maps engine rejections to error codes
4. Formats read-only snapshots for the browser

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Methods return either the response model or an ErrorResponse.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from loguru import logger

from .schemas import (
    # Requests
    CreateSessionRequest,
    StartBattleRequest,
    PickRewardRequest,
    # Responses
    ActionResponse,
    BattleStateResponse,
    EndSessionResponse,
    ErrorResponse,
    LegalActionsResponse,
    SessionResponse,
    StageListResponse,
    # Shared
    ActionInfo,
    EventInfo,
    StageInfo,
    StagedActionInfo,
    # Enums
    ErrorCode,
)
from ..catalog import UnknownStageError
from ..engine_core.action import Action, ErrorCodes
from ..engine_core.action_generator import legal_actions
from ..engine_core.session import BattleSetupError
from ..session import Session, SessionError, SessionManager, SessionState


@dataclass
class APIService:
    """
    Main API service for the browser client.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(CreateSessionRequest(seed=7))

        # Fight
        service.start_battle(session_id, StartBattleRequest())
        service.click_card(session_id, "card-3")
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        session = self.session_manager.create_session(seed=request.seed)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> EndSessionResponse:
        success = self.session_manager.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def list_stages(self) -> StageListResponse:
        catalog = self.session_manager.catalog
        return StageListResponse(
            stages=[
                StageInfo(
                    stage_id=stage.stage_id,
                    name=stage.name,
                    tier=stage.tier.value,
                    enemies=list(stage.enemies),
                    next_stages=list(stage.next_stages),
                    description=stage.description,
                )
                for stage in catalog.stages.values()
            ],
            first_stage=catalog.first_stage,
        )

    # =========================================================================
    # Battles
    # =========================================================================

    def start_battle(
        self,
        session_id: str,
        request: StartBattleRequest,
    ) -> BattleStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        if session.state == SessionState.IN_BATTLE:
            return ErrorResponse(
                error="A battle is already in progress",
                error_code=ErrorCode.BATTLE_IN_PROGRESS,
            )
        try:
            battle = session.start_battle(request.stage_id)
        except (SessionError, BattleSetupError, UnknownStageError) as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.STAGE_NOT_AVAILABLE,
                details={"available_stages": session.available_stages()},
            )
        return BattleStateResponse.model_validate(battle.snapshot())

    def get_battle(self, session_id: str) -> BattleStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        if session.battle is None:
            return ErrorResponse(error="No battle has been started", error_code=ErrorCode.NO_BATTLE)
        return BattleStateResponse.model_validate(session.battle.snapshot())

    def get_legal_actions(self, session_id: str) -> LegalActionsResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        actions = legal_actions(session.battle) if session.battle else []
        return LegalActionsResponse(
            session_id=session_id,
            actions=[
                ActionInfo(
                    action_type=a.action_type.value,
                    card_instance_id=a.payload.card_instance_id,
                    target_id=a.payload.target_id,
                )
                for a in actions
            ],
        )

    def click_card(self, session_id: str, card_instance_id: str) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.select_card(card_instance_id))

    def pointer_out(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.deselect_card())

    def click_enemy(self, session_id: str, enemy_id: str) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.choose_target(enemy_id))

    def play_card(
        self,
        session_id: str,
        card_instance_id: str,
        target_id: str | None = None,
    ) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.play_card(card_instance_id, target_id))

    def end_turn(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.end_turn())

    def commit_enemy_action(self, session_id: str) -> ActionResponse | ErrorResponse:
        return self.apply_action(session_id, Action.commit_enemy_action())

    def apply_action(self, session_id: str, action: Action) -> ActionResponse | ErrorResponse:
        """Apply a battle action and describe the result."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        result = session.apply(action)
        if not result.success:
            logger.debug("session {} rejected {}: {}", session_id, action.describe(), result.error)
            return ErrorResponse(
                error=result.error or "Action rejected",
                error_code=(
                    ErrorCode.NO_BATTLE if result.error_code == ErrorCodes.NO_BATTLE
                    else ErrorCode.ACTION_REJECTED
                ),
                details={"reason": result.error_code},
            )

        staged = result.staged_action
        return ActionResponse(
            success=True,
            session_status=session.state.value,
            state_changes=result.state_changes,
            events=[EventInfo(**event.to_dict()) for event in result.events],
            staged_action=StagedActionInfo.model_validate(staged.to_dict()) if staged else None,
            battle=BattleStateResponse.model_validate(session.battle.snapshot()),
            pending_rewards=list(session.campaign.pending_rewards),
        )

    # =========================================================================
    # Rewards
    # =========================================================================

    def pick_reward(self, session_id: str, request: PickRewardRequest) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        try:
            session.pick_reward(request.card_id)
        except SessionError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.REWARD_NOT_OFFERED,
                details={"pending_rewards": list(session.campaign.pending_rewards)},
            )
        return self._session_to_response(session)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _session_to_response(self, session: Session) -> SessionResponse:
        data = session.snapshot()
        data["status"] = data.pop("state")
        data["created_at"] = session.created_at
        return SessionResponse.model_validate(data)


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error="Session not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
        details={"session_id": session_id},
    )
