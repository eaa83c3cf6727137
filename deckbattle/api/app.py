"""
FastAPI Application - REST API for the browser client.

Endpoints:
    GET    /api/v1/stages                                Campaign map
    POST   /api/v1/sessions                              Create campaign session
    GET    /api/v1/sessions                              List active sessions
    GET    /api/v1/sessions/{id}                         Get session status
    DELETE /api/v1/sessions/{id}                         End session
    POST   /api/v1/sessions/{id}/battle                  Start a battle
    GET    /api/v1/sessions/{id}/battle                  Battle snapshot
    GET    /api/v1/sessions/{id}/battle/legal-actions    Legal actions
    POST   /api/v1/sessions/{id}/battle/card-click       Click a card in hand
    POST   /api/v1/sessions/{id}/battle/enemy-click      Click an enemy
    POST   /api/v1/sessions/{id}/battle/pointer-out      Pointer left the card
    POST   /api/v1/sessions/{id}/battle/play             Play a card directly
    POST   /api/v1/sessions/{id}/battle/end-turn         End the player turn
    POST   /api/v1/sessions/{id}/battle/commit           Commit staged enemy action
    POST   /api/v1/sessions/{id}/reward                  Pick or skip a reward
    WS     /api/v1/sessions/{id}/ws                      WebSocket for events

Enemy Turn Flow:
    1. POST /end-turn returns the first staged enemy action
    2. The client animates it, then POSTs /commit
    3. Each /commit returns the next staged action, or none once
       the player's next turn has begun

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import json

from fastapi import FastAPI, WebSocket, WebSocketDisconnect, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .. import __version__
from ..config import ALLOWED_ORIGINS, configure_logging
from .service import APIService
from .schemas import (
    # Request models
    CreateSessionRequest,
    StartBattleRequest,
    CardClickRequest,
    EnemyClickRequest,
    PlayCardRequest,
    PickRewardRequest,
    # Response models
    ActionResponse,
    BattleStateResponse,
    EndSessionResponse,
    ErrorResponse,
    HealthResponse,
    LegalActionsResponse,
    SessionListResponse,
    SessionResponse,
    StageListResponse,
    # Enums
    ErrorCode,
)


ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INTERNAL_ERROR: 500,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    configure_logging()

    app = FastAPI(
        title="Deck Battle API",
        description="""
Turn-based deck battle engine for a browser client.

## Enemy Turn Flow

After `POST /battle/end-turn`:

1. The response carries `staged_action`, the next enemy action
2. Defends have already landed; attacks land on `POST /battle/commit`
3. Each commit stages the following enemy, until the player turn begins

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `NO_BATTLE` | No battle has been started |
| `BATTLE_IN_PROGRESS` | Finish the current battle first |
| `STAGE_NOT_AVAILABLE` | Stage cannot be fought now |
| `ACTION_REJECTED` | Engine refused the action, see `details.reason` |
| `REWARD_NOT_OFFERED` | Card is not in the reward offer |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # WebSocket connections
    ws_connections: dict[str, list[WebSocket]] = {}
    app.state.ws_connections = ws_connections

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int | None = None,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code or ERROR_STATUS.get(error_code, 409),
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def from_error(response: ErrorResponse) -> JSONResponse:
        return make_error_response(response.error_code, response.error, details=response.details)

    async def broadcast_to_session(session_id: str, message: dict):
        """Broadcast a message to all WebSocket connections for a session."""
        if session_id in ws_connections:
            dead_connections = []
            for ws in ws_connections[session_id]:
                try:
                    await ws.send_json(message)
                except (WebSocketDisconnect, RuntimeError):
                    dead_connections.append(ws)
            for ws in dead_connections:
                drop_connection(session_id, ws)

    def drop_connection(session_id: str, websocket: WebSocket) -> None:
        connections = ws_connections.get(session_id, [])
        if websocket in connections:
            connections.remove(websocket)
        if not connections:
            ws_connections.pop(session_id, None)

    async def action_reply(
        session_id: str,
        response: Union[ActionResponse, ErrorResponse],
    ) -> Union[ActionResponse, JSONResponse]:
        if isinstance(response, ErrorResponse):
            return from_error(response)

        payload = response.model_dump(mode="json")
        await broadcast_to_session(session_id, {"type": "battle_update", "payload": payload})
        if response.battle.battle_over:
            await broadcast_to_session(session_id, {
                "type": "battle_end",
                "payload": {
                    "victory": response.battle.outcome,
                    "pending_rewards": response.pending_rewards,
                },
            })
        return response

    # =========================================================================
    # Campaign Map
    # =========================================================================

    @app.get(
        "/api/v1/stages",
        response_model=StageListResponse,
        tags=["Campaign"],
        summary="List the campaign stages",
    )
    async def list_stages() -> StageListResponse:
        """The stage graph. Each stage links to the stages unlocked by clearing it."""
        return api_service.list_stages()

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new campaign session",
    )
    async def create_session(request: Optional[CreateSessionRequest] = None) -> SessionResponse:
        """
        Create a new campaign session.

        Pass a `seed` for reproducible shuffles and enemy intents.
        """
        response = api_service.create_session(request or CreateSessionRequest())
        logger.info("created session {}", response.session_id)
        return response

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the campaign progress and any live battle."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return from_error(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a campaign session",
    )
    async def end_session(
        session_id: str,
        reason: str = Query("user_ended", description="Reason for ending"),
    ) -> EndSessionResponse:
        """End a campaign session and release resources."""
        return api_service.end_session(session_id, reason)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    # =========================================================================
    # Battle Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/battle",
        response_model=BattleStateResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="Start a battle",
    )
    async def start_battle(
        session_id: str,
        request: Optional[StartBattleRequest] = None,
    ) -> Union[BattleStateResponse, JSONResponse]:
        """
        Start a battle on a stage.

        Without `stage_id` the campaign's current stage is used.
        Any reward still on offer is skipped.
        """
        response = api_service.start_battle(session_id, request or StartBattleRequest())
        if isinstance(response, ErrorResponse):
            return from_error(response)
        await broadcast_to_session(session_id, {
            "type": "battle_start",
            "payload": response.model_dump(mode="json"),
        })
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/battle",
        response_model=BattleStateResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="Get the battle snapshot",
    )
    async def get_battle(session_id: str) -> Union[BattleStateResponse, JSONResponse]:
        """Read-only view of the current or last battle."""
        response = api_service.get_battle(session_id)
        if isinstance(response, ErrorResponse):
            return from_error(response)
        return response

    @app.get(
        "/api/v1/sessions/{session_id}/battle/legal-actions",
        response_model=LegalActionsResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="List legal actions",
    )
    async def get_legal_actions(session_id: str) -> Union[LegalActionsResponse, JSONResponse]:
        response = api_service.get_legal_actions(session_id)
        if isinstance(response, ErrorResponse):
            return from_error(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/battle/card-click",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="Click a card in hand",
    )
    async def click_card(
        session_id: str,
        request: CardClickRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """
        Select a card, or act on the selected one.

        A second click plays a card that needs no target, and
        deselects a single-target attack.
        """
        response = api_service.click_card(session_id, request.card_instance_id)
        return await action_reply(session_id, response)

    @app.post(
        "/api/v1/sessions/{session_id}/battle/enemy-click",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="Click an enemy",
    )
    async def click_enemy(
        session_id: str,
        request: EnemyClickRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """Play the selected single-target attack on this enemy."""
        response = api_service.click_enemy(session_id, request.enemy_id)
        return await action_reply(session_id, response)

    @app.post(
        "/api/v1/sessions/{session_id}/battle/pointer-out",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="Clear the card selection",
    )
    async def pointer_out(session_id: str) -> Union[ActionResponse, JSONResponse]:
        response = api_service.pointer_out(session_id)
        return await action_reply(session_id, response)

    @app.post(
        "/api/v1/sessions/{session_id}/battle/play",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="Play a card",
    )
    async def play_card(
        session_id: str,
        request: PlayCardRequest,
    ) -> Union[ActionResponse, JSONResponse]:
        """Play a card in one request, without the click flow."""
        response = api_service.play_card(session_id, request.card_instance_id, request.target_id)
        return await action_reply(session_id, response)

    @app.post(
        "/api/v1/sessions/{session_id}/battle/end-turn",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="End the player turn",
    )
    async def end_turn(session_id: str) -> Union[ActionResponse, JSONResponse]:
        """Discard the hand and stage the first enemy action."""
        response = api_service.end_turn(session_id)
        return await action_reply(session_id, response)

    @app.post(
        "/api/v1/sessions/{session_id}/battle/commit",
        response_model=ActionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Battle"],
        summary="Commit the staged enemy action",
    )
    async def commit_enemy_action(session_id: str) -> Union[ActionResponse, JSONResponse]:
        """Land the staged enemy attack and stage the next one."""
        response = api_service.commit_enemy_action(session_id)
        return await action_reply(session_id, response)

    # =========================================================================
    # Reward Endpoint
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/reward",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
        tags=["Campaign"],
        summary="Pick or skip a reward card",
    )
    async def pick_reward(
        session_id: str,
        request: PickRewardRequest,
    ) -> Union[SessionResponse, JSONResponse]:
        """Add an offered card to the deck, or skip with `card_id: null`."""
        response = api_service.pick_reward(session_id, request)
        if isinstance(response, ErrorResponse):
            return from_error(response)
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - session_update: Session snapshot on connect
        - battle_start: A battle began
        - battle_update: An action was applied (carries its events)
        - battle_end: The battle finished
        - error: Error occurred

        Messages from client:
        - ping: Keep-alive
        """
        await websocket.accept()

        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            await websocket.send_json({
                "type": "error",
                "payload": response.model_dump(mode="json"),
            })
            await websocket.close()
            return

        ws_connections.setdefault(session_id, []).append(websocket)

        try:
            await websocket.send_json({
                "type": "session_update",
                "payload": response.model_dump(mode="json"),
            })

            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                if isinstance(message, dict) and message.get("type") == "ping":
                    await websocket.send_json({"type": "pong"})

        except WebSocketDisconnect:
            logger.debug("websocket for session {} disconnected", session_id)
        finally:
            drop_connection(session_id, websocket)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="deckbattle",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Deck Battle API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn deckbattle.api.app:app
app = create_app()
