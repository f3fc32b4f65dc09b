"""
Game Loop - Drives one game between the human and the AI.

The loop:
1. Human requests a move
2. Engine validates and applies it
3. If the game goes on, the AI picks and plays its reply
4. Listeners are told about every applied move and the end of the game
5. Repeat until the game is over; restart starts a brand new game

The loop owns its GameState. Nothing else mutates it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable
import logging
import random

from ..bots import BotDecision, BotPolicy, FuelBot
from ..engine_core.action import AppliedMove, MoveRequest
from ..engine_core.board import Cell
from ..engine_core.errors import IllegalMove, IllegalMoveReason, NoMoves
from ..engine_core.hex_coord import CubeCoord
from ..engine_core.move_rules import legal_destinations
from ..engine_core.reducer import apply_move, declare_stuck
from ..engine_core.state import GameSnapshot, GameState, Outcome, Side

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    HUMAN_TURN = "human_turn"
    AI_TURN = "ai_turn"
    GAME_OVER = "game_over"


class EventType(Enum):
    MOVE_APPLIED = "move_applied"
    GAME_OVER = "game_over"
    RESTARTED = "restarted"


@dataclass(frozen=True)
class GameEvent:
    """Something a front-end should react to."""
    event_type: EventType
    move: AppliedMove | None = None
    outcome: Outcome | None = None


@dataclass
class TurnResult:
    """
    Result of processing a request.

    Contains the moves that were applied (the human's and possibly the
    AI's reply), the events emitted, and any rejection.
    """
    success: bool
    loop_state: LoopState

    moves: list[AppliedMove] = field(default_factory=list)
    events: list[GameEvent] = field(default_factory=list)

    # Errors
    errors: list[str] = field(default_factory=list)
    error_code: str | None = None

    # AI reasoning, if the AI moved
    ai_decision: BotDecision | None = None

    # Game over info
    outcome: Outcome | None = None


Listener = Callable[[GameEvent], None]


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(seed=7)
        loop.subscribe(print)

        result = loop.request_move(Side.HUMAN, CubeCoord(-2, 1, 1))
        if not result.success:
            show_error(result.errors)

        snapshot = loop.current()
    """

    def __init__(
        self,
        bot: BotPolicy | None = None,
        seed: int | None = None,
        auto_play_ai: bool = True,
        state: GameState | None = None,
    ):
        self.seed = seed
        self.rng = random.Random(seed)
        self.bot = bot or FuelBot()
        self.auto_play_ai = auto_play_ai
        self.state = state or GameState.new(self.rng, seed=seed)
        self._listeners: list[Listener] = []

    @property
    def loop_state(self) -> LoopState:
        if self.state.is_over:
            return LoopState.GAME_OVER
        if self.state.turn is Side.AI:
            return LoopState.AI_TURN
        return LoopState.HUMAN_TURN

    def current(self) -> GameSnapshot:
        """Read-only snapshot of the current game."""
        return self.state.current()

    def legal_moves(self, side: Side | None = None) -> list[Cell]:
        """Legal destinations for `side` (default: whoever is to move)."""
        side = side or self.state.turn
        return legal_destinations(self.state.mover(side), self.state.board)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def request_move(self, actor: Side, destination: CubeCoord) -> TurnResult:
        """
        Move `actor` to `destination`.

        A rejected request leaves the game untouched. When the move hands
        the turn to the AI and auto_play_ai is set, the AI replies before
        this returns.
        """
        result = apply_move(self.state, MoveRequest(side=actor, destination=destination))
        if not result.success:
            return self._rejected(result.error, result.error_code)

        events = self._emit_move(result.move, result.outcome)
        turn = TurnResult(
            success=True,
            loop_state=self.loop_state,
            moves=[result.move],
            events=events,
            outcome=result.outcome,
        )

        if self.auto_play_ai and actor is Side.HUMAN and self.loop_state is LoopState.AI_TURN:
            reply = self.play_ai_turn()
            turn.moves.extend(reply.moves)
            turn.events.extend(reply.events)
            turn.errors.extend(reply.errors)
            turn.ai_decision = reply.ai_decision
            turn.outcome = reply.outcome
            turn.loop_state = reply.loop_state

        return turn

    def play_ai_turn(self) -> TurnResult:
        """Let the bot pick and play the AI's move."""
        if self.state.is_over:
            return self._rejected(
                IllegalMove(IllegalMoveReason.GAME_OVER, "Game is over - no moves allowed"),
                IllegalMoveReason.GAME_OVER.name,
            )
        if self.state.turn is not Side.AI:
            return self._rejected(
                IllegalMove(IllegalMoveReason.NOT_YOUR_TURN, "Not ai's turn"),
                IllegalMoveReason.NOT_YOUR_TURN.name,
            )

        candidates = legal_destinations(self.state.ai, self.state.board)
        try:
            decision = self.bot.select_move(self.state, Side.AI, candidates)
        except NoMoves:
            outcome = declare_stuck(self.state, Side.AI)
            event = GameEvent(EventType.GAME_OVER, outcome=outcome)
            self._emit(event)
            return TurnResult(
                success=True,
                loop_state=self.loop_state,
                events=[event],
                outcome=outcome,
            )

        logger.debug("%s chose %s: %s", self.bot.get_name(), decision.destination.coord, decision.explanation)
        result = apply_move(
            self.state,
            MoveRequest(side=Side.AI, destination=decision.destination.coord),
        )
        if not result.success:
            # Bots only pick from legal destinations
            logger.error("%s picked an illegal move: %s", self.bot.get_name(), result.error)
            return self._rejected(result.error, result.error_code)

        return TurnResult(
            success=True,
            loop_state=self.loop_state,
            moves=[result.move],
            events=self._emit_move(result.move, result.outcome),
            ai_decision=decision,
            outcome=result.outcome,
        )

    def restart(self) -> TurnResult:
        """
        Throw the current game away and start a new one.

        The board is regenerated with fresh values from the loop's RNG.
        """
        self.state = GameState.new(self.rng, seed=self.seed)
        event = GameEvent(EventType.RESTARTED)
        self._emit(event)
        logger.info("Game restarted")
        return TurnResult(success=True, loop_state=self.loop_state, events=[event])

    def _rejected(self, error: IllegalMove, error_code: str | None) -> TurnResult:
        return TurnResult(
            success=False,
            loop_state=self.loop_state,
            errors=[error.message],
            error_code=error_code,
        )

    def _emit_move(self, move: AppliedMove, outcome: Outcome | None) -> list[GameEvent]:
        events = [GameEvent(EventType.MOVE_APPLIED, move=move)]
        if outcome is not None:
            events.append(GameEvent(EventType.GAME_OVER, outcome=outcome))
        for event in events:
            self._emit(event)
        return events

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
