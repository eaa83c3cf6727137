"""
API Module - Browser client interface.

Exposes the engine via REST API for a browser front end.
The client:
1. Creates a campaign session
2. Starts battles on the stage map
3. Sends card and enemy clicks
4. Commits each staged enemy action after animating it
5. Picks reward cards between battles

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    StartBattleRequest,
    CardClickRequest,
    EnemyClickRequest,
    PlayCardRequest,
    PickRewardRequest,
    # Responses
    ActionResponse,
    BattleStateResponse,
    SessionResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    EnemyInfo,
    CardInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "StartBattleRequest",
    "CardClickRequest",
    "EnemyClickRequest",
    "PlayCardRequest",
    "PickRewardRequest",
    # Responses
    "ActionResponse",
    "BattleStateResponse",
    "SessionResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "EnemyInfo",
    "CardInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
