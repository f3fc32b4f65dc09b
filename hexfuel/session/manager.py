"""
Session Manager - Creates and manages game sessions.

A session is one human playing against the AI:
- Created when the user starts a game
- Holds a GameLoop, which owns the current GameState
- Restarting replaces the game, not the session
- Ended explicitly or cleaned up when stale

Sessions are EPHEMERAL:
- In memory only, no persistence
- Game history is not kept
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import time
import uuid

from ..bots import BotPolicy
from .game_loop import GameLoop

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game finished, can be restarted
    ENDED = "ended"  # Session closed


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The game loop (and through it the current game)
    - Who is playing
    """
    session_id: str
    loop: GameLoop
    created_at: float
    human_player_name: str = "Player"
    closed: bool = False

    @property
    def state(self) -> SessionState:
        if self.closed:
            return SessionState.ENDED
        if self.loop.state.is_over:
            return SessionState.GAME_OVER
        return SessionState.ACTIVE

    def is_active(self) -> bool:
        """Check if session is still open."""
        return not self.closed


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        human_player_name: str = "Player",
        seed: int | None = None,
        bot: BotPolicy | None = None,
        auto_play_ai: bool = True,
    ) -> Session:
        """
        Create a new game session.

        Args:
            human_player_name: Display name for the human
            seed: Optional seed for a reproducible board
            bot: AI policy (defaults to FuelBot)
            auto_play_ai: Whether the AI replies inside each human move

        Returns:
            New Session with a game ready for the human's first move
        """
        session_id = str(uuid.uuid4())
        loop = GameLoop(bot=bot, seed=seed, auto_play_ai=auto_play_ai)

        session = Session(
            session_id=session_id,
            loop=loop,
            created_at=time.time(),
            human_player_name=human_player_name,
        )
        self._sessions[session_id] = session
        logger.info("Created session %s (seed=%s)", session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop it from memory.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.closed = True
        logger.info("Ended session %s", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
            and session.state is SessionState.GAME_OVER
        ]

        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
