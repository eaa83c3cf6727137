"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between the browser presentation layer
and the engine. All responses include explicit types for OpenAPI schema
generation. Battle views are copies; no response exposes live state.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- NO_BATTLE: The session has no battle in progress
- BATTLE_IN_PROGRESS: A battle is already running
- STAGE_NOT_AVAILABLE: The stage cannot be fought now
- ACTION_REJECTED: The engine refused the action (see details.reason)
- REWARD_NOT_OFFERED: The card is not part of the reward offer
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    IN_BATTLE = "in_battle"
    CHOOSING_REWARD = "choosing_reward"
    BETWEEN_BATTLES = "between_battles"
    GAME_OVER = "game_over"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class TurnPhase(str, Enum):
    """Whose turn it is."""
    PLAYER_TURN = "player_turn"
    ENEMY_TURN = "enemy_turn"


class IntentKind(str, Enum):
    """Enemy intent kinds."""
    ATTACK = "attack"
    DEFEND = "defend"
    NONE = "none"


class CardCategory(str, Enum):
    """Resolved card effect categories."""
    ATTACK = "attack"
    DEFEND = "defend"
    HEAL = "heal"
    ENERGY_GAIN = "energy_gain"
    UNKNOWN = "unknown"


class StageTier(str, Enum):
    """Stage difficulty tiers."""
    BOSS = "boss"
    MID_BOSS = "mid-boss"
    NORMAL = "normal"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    NO_BATTLE = "NO_BATTLE"
    BATTLE_IN_PROGRESS = "BATTLE_IN_PROGRESS"
    STAGE_NOT_AVAILABLE = "STAGE_NOT_AVAILABLE"
    ACTION_REJECTED = "ACTION_REJECTED"
    REWARD_NOT_OFFERED = "REWARD_NOT_OFFERED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """The player's combat numbers."""
    health: int
    max_health: int
    energy: int
    max_energy: int
    defense: int = 0


class IntentInfo(BaseModel):
    """An enemy's declared next action."""
    kind: IntentKind
    value: int = 0


class EnemyInfo(BaseModel):
    """A living enemy."""
    enemy_id: str
    name: str
    health: int
    max_health: int
    defense: int = 0
    intent: IntentInfo


class CardInfo(BaseModel):
    """A card in hand, already normalized."""
    instance_id: str = Field(description="Use this id for card clicks and plays")
    card_id: str
    name: str
    cost: int
    category: CardCategory
    value: int
    hits: int = 1
    all_enemies: bool = False
    needs_target: bool = Field(False, description="Single-target attacks need an enemy click")
    description: str = ""
    playable: bool = Field(True, description="Whether the player can afford it now")


class StagedActionInfo(BaseModel):
    """An enemy action waiting for commit."""
    enemy_id: str
    intent: IntentInfo
    committed: bool = False


class EventInfo(BaseModel):
    """A notification emitted by the engine."""
    kind: str = Field(description="player_turn_start, enemy_action, battle_end, ...")
    payload: dict[str, Any] = Field(default_factory=dict)


class CampaignInfo(BaseModel):
    """Progress carried between battles."""
    player: PlayerInfo
    deck: list[str] = Field(default_factory=list)
    stages_cleared: list[str] = Field(default_factory=list)
    current_stage: str
    game_over: bool = False
    pending_rewards: list[str] = Field(default_factory=list)


class StageInfo(BaseModel):
    """A node on the campaign map."""
    stage_id: str
    name: str
    tier: StageTier
    enemies: list[str] = Field(default_factory=list)
    next_stages: list[str] = Field(default_factory=list)
    description: str = ""


class ActionInfo(BaseModel):
    """A legal action."""
    action_type: str
    card_instance_id: Optional[str] = None
    target_id: Optional[str] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new campaign session."""
    seed: Optional[int] = Field(None, description="Seed for reproducible battles")


class StartBattleRequest(BaseModel):
    """Request to start a battle."""
    stage_id: Optional[str] = Field(None, description="Defaults to the current stage")


class CardClickRequest(BaseModel):
    """A click on a card in hand."""
    card_instance_id: str


class EnemyClickRequest(BaseModel):
    """A click on an enemy."""
    enemy_id: str


class PlayCardRequest(BaseModel):
    """Play a card directly, bypassing the click flow."""
    card_instance_id: str
    target_id: Optional[str] = Field(None, description="Required for single-target attacks")


class PickRewardRequest(BaseModel):
    """Take a reward card, or skip with card_id=null."""
    card_id: Optional[str] = None


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class BattleStateResponse(BaseModel):
    """Read-only snapshot of a battle."""
    battle_id: str
    stage_id: str
    phase: TurnPhase
    turn_number: int
    battle_over: bool = False
    outcome: Optional[bool] = Field(None, description="true victory, false defeat, null ongoing")
    player: PlayerInfo
    enemies: list[EnemyInfo] = Field(default_factory=list)
    hand: list[CardInfo] = Field(default_factory=list)
    draw_pile_count: int = 0
    discard_pile_count: int = 0
    selected_card_id: Optional[str] = None
    pending_action: Optional[StagedActionInfo] = None
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    campaign: CampaignInfo
    available_stages: list[str] = Field(default_factory=list)
    battle: Optional[BattleStateResponse] = None
    battles_fought: int = 0
    created_at: float = 0.0
    api_version: str = "v1"


class ActionResponse(BaseModel):
    """Result of an accepted battle action."""
    success: bool
    session_status: SessionStatus
    state_changes: list[str] = Field(default_factory=list)
    events: list[EventInfo] = Field(default_factory=list)
    staged_action: Optional[StagedActionInfo] = None
    battle: BattleStateResponse
    pending_rewards: list[str] = Field(default_factory=list)
    api_version: str = "v1"


class LegalActionsResponse(BaseModel):
    """Legal actions in the current battle."""
    session_id: str
    actions: list[ActionInfo] = Field(default_factory=list)


class StageListResponse(BaseModel):
    """The campaign map."""
    stages: list[StageInfo]
    first_stage: str


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
