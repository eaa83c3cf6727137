"""
Session Module - Manages in-memory campaign sessions.

A session represents one play-through of the campaign:
- Created when a client starts a campaign
- Holds campaign progress and the live battle
- Settles each battle into the campaign when it ends
- Destroyed when the client ends it or it goes stale

Sessions are EPHEMERAL:
- No persistence to database
- Battles are discarded once settled
"""

from .manager import SessionManager, Session, SessionState, SessionError
from .battle_loop import BattleLoop, LoopState, BattleReport, RunResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "SessionError",
    "BattleLoop",
    "LoopState",
    "BattleReport",
    "RunResult",
]
