"""
Session Module - Manages ephemeral game sessions.

A session represents one human playing the AI:
- Created when the user starts a game
- Holds the game loop and current game state
- Runs AI turns and reports events
- Destroyed when the user leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import EventType, GameEvent, GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "EventType",
    "GameEvent",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
