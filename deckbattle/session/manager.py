"""
Session Manager - Creates and manages campaign sessions.

LIFECYCLE:
1. Client creates a session -> fresh campaign at the first stage
2. Client starts a battle on an available stage
3. During the battle:
   - Client sends pointer input and commands as actions
   - Reducer validates and applies them
   - Events stream back to the client
4. Battle ends -> outcome copied into the campaign, battle discarded
   - Victory: reward offer, then the next battle
   - Defeat: campaign over
5. Session ended or cleaned up -> ALL state deleted

PERSISTENCE RULES:
- Sessions are in-memory only
- Battle state never outlives its battle
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import time
import uuid

from loguru import logger

from ..catalog import Catalog
from ..config import BattleRules, DEFAULT_RULES, default_seed
from ..engine_core.action import Action, ActionResult, ErrorCodes
from ..engine_core.outcome import pick_reward, skip_reward
from ..engine_core.reducer import Reducer
from ..engine_core.rng import RandomDraw, seeded_source
from ..engine_core.session import BattleSession, start_battle
from ..engine_core.state import CampaignState
from ..games.dungeon import create_dungeon_catalog, new_campaign


class SessionState(Enum):
    """State of a campaign session."""
    CREATED = "created"  # Waiting for the first battle
    IN_BATTLE = "in_battle"
    CHOOSING_REWARD = "choosing_reward"
    BETWEEN_BATTLES = "between_battles"
    GAME_OVER = "game_over"  # Lost a battle
    COMPLETED = "completed"  # Cleared the final stage
    ABANDONED = "abandoned"  # Ended by the client


class SessionError(Exception):
    """An operation is not allowed in the session's current state."""


@dataclass
class Session:
    """
    An in-memory campaign session.

    Contains:
    - The catalog the campaign plays from
    - Campaign progress
    - The live battle, if any
    - The random source shared by every battle in the session
    """
    session_id: str
    catalog: Catalog
    campaign: CampaignState
    random_draw: RandomDraw
    created_at: float
    seed: int | None = None
    rules: BattleRules = DEFAULT_RULES

    state: SessionState = SessionState.CREATED
    battle: BattleSession | None = None
    reducer: Reducer = field(default_factory=Reducer)
    battles_fought: int = 0
    last_active: float = 0.0

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state in {
            SessionState.CREATED,
            SessionState.IN_BATTLE,
            SessionState.CHOOSING_REWARD,
            SessionState.BETWEEN_BATTLES,
        }

    def touch(self) -> None:
        self.last_active = time.time()

    def available_stages(self) -> list[str]:
        """
        Stages the player may fight next: the current stage plus the
        other branches out of the last cleared stage.
        """
        if self.campaign.game_over or self.state == SessionState.COMPLETED:
            return []
        available = [self.campaign.current_stage]
        if self.campaign.stages_cleared:
            last = self.catalog.stages.get(self.campaign.stages_cleared[-1])
            if last is not None:
                for stage_id in last.next_stages:
                    if stage_id not in available:
                        available.append(stage_id)
        return [s for s in available if s not in self.campaign.stages_cleared]

    def start_battle(self, stage_id: str | None = None) -> BattleSession:
        """
        Start a battle on `stage_id` (default: the current stage).

        An outstanding reward offer is skipped.
        """
        if not self.is_active():
            raise SessionError(f"Session is {self.state.value}")
        if self.battle is not None and not self.battle.battle_over:
            raise SessionError("A battle is already in progress")

        stage_id = stage_id or self.campaign.current_stage
        if stage_id not in self.available_stages():
            raise SessionError(f"Stage {stage_id} is not available")

        if self.campaign.pending_rewards:
            skip_reward(self.campaign)

        self.battles_fought += 1
        self.battle = start_battle(
            self.catalog,
            self.campaign,
            stage_id,
            self.random_draw,
            self.rules,
            battle_id=f"{self.session_id}-{self.battles_fought}",
        )
        self.state = SessionState.IN_BATTLE
        self.touch()
        self._after_battle_step()
        return self.battle

    def apply(self, action: Action) -> ActionResult:
        """Apply an action to the live battle and settle it if it ended."""
        if self.battle is None or self.state != SessionState.IN_BATTLE:
            return ActionResult.failure("No battle in progress", error_code=ErrorCodes.NO_BATTLE)
        self.touch()
        result = self.reducer.apply(self.battle, action)
        if result.success:
            self._after_battle_step()
        return result

    def _after_battle_step(self) -> None:
        battle = self.battle
        if battle is None or not battle.battle_over or battle.settled:
            return
        victory = battle.settle(self.campaign, self.catalog)
        if not victory:
            self.state = SessionState.GAME_OVER
        elif not battle.stage.next_stages:
            self.state = SessionState.COMPLETED
            logger.info("session {} completed the campaign", self.session_id)
        elif self.campaign.pending_rewards:
            self.state = SessionState.CHOOSING_REWARD
        else:
            self.state = SessionState.BETWEEN_BATTLES

    def pick_reward(self, card_id: str | None) -> None:
        """Take an offered card, or skip the offer with None."""
        if self.state != SessionState.CHOOSING_REWARD:
            raise SessionError("No reward is on offer")
        if card_id is None:
            skip_reward(self.campaign)
        elif not pick_reward(self.campaign, card_id):
            raise SessionError(f"Card {card_id} was not offered")
        self.state = SessionState.BETWEEN_BATTLES
        self.touch()

    def snapshot(self) -> dict:
        """Read-only view of the session."""
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "campaign": self.campaign.to_dict(),
            "available_stages": self.available_stages(),
            "battle": self.battle.snapshot() if self.battle else None,
            "battles_fought": self.battles_fought,
        }


class SessionManager:
    """
    Manages campaign sessions.

    Responsibilities:
    - Create sessions with a fresh campaign
    - Track active sessions
    - Clean up finished and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, catalog: Catalog | None = None, rules: BattleRules = DEFAULT_RULES):
        self._sessions: dict[str, Session] = {}
        self.catalog = catalog or create_dungeon_catalog()
        self.rules = rules

    def create_session(self, seed: int | None = None) -> Session:
        """
        Create a new campaign session.

        Args:
            seed: Seed for the session's random source; falls back to the
                configured default, then to an unseeded source

        Returns:
            New Session ready to start its first battle
        """
        if seed is None:
            seed = default_seed()
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            catalog=self.catalog,
            campaign=new_campaign(self.catalog, self.rules),
            random_draw=seeded_source(seed),
            created_at=now,
            seed=seed,
            rules=self.rules,
            last_active=now,
        )
        self._sessions[session.session_id] = session
        logger.info("session {} created (seed {})", session.session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.is_active():
            session.state = SessionState.ABANDONED
        session.battle = None
        logger.info("session {} ended ({})", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove sessions idle for longer than max_age_seconds.

        Returns the number removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active > max_age_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
