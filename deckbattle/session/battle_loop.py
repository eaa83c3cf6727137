"""
Battle Loop - Headless auto-play driver.

The loop:
1. Start a battle on the current stage
2. Ask the policy for an action among the legal ones
3. Apply it through the session (enemy actions are committed at once)
4. On victory, let the policy pick a reward
5. Repeat until the campaign is lost, completed, or a limit is hit
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from loguru import logger

from ..engine_core.action_generator import legal_actions
from .manager import SessionState

if TYPE_CHECKING:
    from .manager import Session
    from ..bots import BotPolicy


class LoopState(Enum):
    """State of the battle loop."""
    READY = "ready"
    IN_BATTLE = "in_battle"
    GAME_OVER = "game_over"
    COMPLETED = "completed"
    STOPPED = "stopped"  # Hit a limit


@dataclass
class BattleReport:
    """Result of one auto-played battle."""
    stage_id: str
    victory: bool | None
    turns: int = 0
    actions: list[str] = field(default_factory=list)
    health_after: int = 0
    reward_taken: str | None = None


@dataclass
class RunResult:
    """
    Result of running the loop.

    Contains one report per battle fought.
    """
    success: bool
    loop_state: LoopState
    battles: list[BattleReport] = field(default_factory=list)
    stages_cleared: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


class BattleLoop:
    """
    Drives a session with a bot policy.

    Usage:
        loop = BattleLoop(session, GreedyPolicy())
        result = loop.run_campaign()
    """

    def __init__(self, session: Session, policy: BotPolicy, max_actions_per_battle: int = 2000):
        self.session = session
        self.policy = policy
        self.max_actions_per_battle = max_actions_per_battle
        self.state = LoopState.READY

    def play_battle(self, stage_id: str | None = None) -> BattleReport:
        """Fight one battle to its end (or the action limit)."""
        battle = self.session.start_battle(stage_id)
        self.state = LoopState.IN_BATTLE
        report = BattleReport(stage_id=battle.stage.stage_id, victory=None)

        for _ in range(self.max_actions_per_battle):
            if battle.battle_over:
                break
            legal = legal_actions(battle)
            if not legal:
                break
            decision = self.policy.select_action(battle, legal)
            result = self.session.apply(decision.action)
            if not result.success:
                # Rejected action: stop instead of retrying
                logger.error("policy action {} failed: {}", decision.action.describe(), result.error)
                break
            report.actions.append(decision.action.describe())

        report.victory = battle.outcome
        report.turns = battle.machine.turn_number
        report.health_after = self.session.campaign.player.health

        if self.session.state == SessionState.CHOOSING_REWARD:
            choice = self.policy.select_reward(list(self.session.campaign.pending_rewards))
            self.session.pick_reward(choice)
            report.reward_taken = choice

        self._update_state()
        logger.info(
            "battle at stage {}: {} after {} turns",
            report.stage_id,
            {True: "victory", False: "defeat", None: "unfinished"}[report.victory],
            report.turns,
        )
        return report

    def run_campaign(self, max_battles: int = 20) -> RunResult:
        """Play battles until the campaign ends or max_battles is reached."""
        result = RunResult(success=True, loop_state=self.state)
        for _ in range(max_battles):
            if not self.session.is_active():
                break
            report = self.play_battle()
            result.battles.append(report)
            if report.victory is None:
                result.success = False
                result.errors.append(f"Battle at stage {report.stage_id} did not finish")
                self.state = LoopState.STOPPED
                break
        else:
            if self.session.is_active():
                self.state = LoopState.STOPPED

        result.loop_state = self.state
        result.stages_cleared = list(self.session.campaign.stages_cleared)
        return result

    def _update_state(self) -> None:
        if self.session.state == SessionState.GAME_OVER:
            self.state = LoopState.GAME_OVER
        elif self.session.state == SessionState.COMPLETED:
            self.state = LoopState.COMPLETED
        elif self.session.state == SessionState.IN_BATTLE:
            self.state = LoopState.STOPPED
        else:
            self.state = LoopState.READY
