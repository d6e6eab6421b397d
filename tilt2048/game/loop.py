"""Round-by-round driver for a session of games.

The loop is a small state machine over an explicit `GameState`:

    SPAWNING -> CHECK_TERMINAL -> AWAITING_MOVE -> APPLYING -> SPAWNING
                       |
                       +-> TERMINAL   (only NEW_GAME / QUIT honoured)

`step` advances exactly one phase for a given state; `play` and `run`
pull signals from the input source until a game or the session ends.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from tilt2048.config import GameConfig
from tilt2048.core.board import Board
from tilt2048.core.tilt import Direction, GameStatus, check_terminal, tilt, would_change
from tilt2048.game.events import GameListener
from tilt2048.game.sources import InputSource, Signal, TileSource

logger = logging.getLogger(__name__)

SPAWN_VALUES = (2, 4)


class Phase(Enum):
    SPAWNING = "spawning"
    CHECK_TERMINAL = "check_terminal"
    AWAITING_MOVE = "awaiting_move"
    APPLYING = "applying"
    TERMINAL = "terminal"
    QUIT = "quit"


@dataclass
class SessionScore:
    current: int = 0
    max: int = 0


@dataclass
class GameState:
    board: Board
    score: SessionScore = field(default_factory=SessionScore)
    phase: Phase = Phase.SPAWNING
    status: GameStatus = GameStatus.IN_PROGRESS
    pending: Direction | None = None
    # Set when a NEW_GAME signal replaced this state.
    restarted: bool = False

    @property
    def awaiting_signal(self) -> bool:
        return self.phase in (Phase.AWAITING_MOVE, Phase.TERMINAL)

    @property
    def over(self) -> bool:
        return self.phase is Phase.TERMINAL


def spawn_tile(board: Board, tiles: TileSource) -> tuple[int, int, int] | None:
    """Place one tile from `tiles` on an empty cell.

    Proposals with a value other than 2 or 4, or landing on an occupied (or
    off-board) cell, are discarded and the source is asked again. Returns the placed (value, row, col), or None
    without consulting the source when the board is full.
    """
    if board.is_full():
        return None
    value, row, col = tiles()
    while value not in SPAWN_VALUES or board.get(row, col) != 0:
        value, row, col = tiles()
    board.set(row, col, value)
    return value, row, col


class GameLoop:
    def __init__(
        self,
        tiles: TileSource,
        inputs: InputSource,
        listener: GameListener | None = None,
        config: GameConfig | None = None,
    ):
        self.tiles = tiles
        self.inputs = inputs
        self.listener = listener if listener is not None else GameListener()
        self.config = (config or GameConfig()).validate()

    def new_state(self, max_score: int = 0) -> GameState:
        """Fresh board and zero score, keeping the session maximum."""
        state = GameState(board=Board(self.config.size), score=SessionScore(0, max_score))
        self.listener.score_updated(0, max_score)
        # SPAWNING places the last starting tile
        for _ in range(self.config.start_tiles - 1):
            self._spawn(state)
        logger.debug("new game on a %dx%d board", self.config.size, self.config.size)
        return state

    def step(self, state: GameState, signal: Signal | None = None) -> GameState:
        phase = state.phase
        if phase is Phase.SPAWNING:
            self._spawn(state)
            state.phase = Phase.CHECK_TERMINAL
        elif phase is Phase.CHECK_TERMINAL:
            self._check_terminal(state)
        elif phase is Phase.APPLYING:
            self._apply(state)
        elif state.awaiting_signal:
            if signal is None:
                raise ValueError(f"Phase {phase.name} needs an input signal")
            return self._handle_signal(state, signal)
        return state

    def play(self, state: GameState | None = None) -> GameState:
        """Play one game until NEW_GAME or QUIT arrives.

        Returns the final state; its phase is QUIT after a quit, otherwise the
        returned state is the freshly started next game (``restarted`` set).
        """
        if state is None:
            state = self.new_state()
        while True:
            signal = self.inputs() if state.awaiting_signal else None
            state = self.step(state, signal)
            if state.phase is Phase.QUIT or state.restarted:
                return state

    def run(self) -> SessionScore:
        """Play games until QUIT; returns the session score."""
        state = self.new_state()
        while True:
            state = self.play(state)
            if state.phase is Phase.QUIT:
                logger.info("session ended, max score %d", state.score.max)
                return state.score
            state.restarted = False

    # --- Phase handlers ---
    def _spawn(self, state: GameState) -> None:
        placed = spawn_tile(state.board, self.tiles)
        if placed is None:
            logger.debug("board full, spawn skipped")
            return
        self.listener.tile_placed(*placed)

    def _check_terminal(self, state: GameState) -> None:
        status = check_terminal(state.board, self.config.win_threshold)
        state.status = status
        if status is GameStatus.IN_PROGRESS:
            state.phase = Phase.AWAITING_MOVE
            return
        score = state.score
        if score.current > score.max:
            score.max = score.current
        self.listener.score_updated(score.current, score.max)
        self.listener.game_over()
        logger.info("game %s with score %d", status.value, score.current)
        state.phase = Phase.TERMINAL

    def _handle_signal(self, state: GameState, signal: Signal) -> GameState:
        if signal is Signal.QUIT:
            state.phase = Phase.QUIT
            return state
        if signal is Signal.NEW_GAME:
            fresh = self.new_state(max_score=state.score.max)
            fresh.restarted = True
            return fresh
        direction = signal.direction
        if state.phase is Phase.TERMINAL or direction is None:
            return state
        if not would_change(state.board, direction):
            logger.debug("ignoring %s: nothing moves", direction.name)
            return state
        state.pending = direction
        state.phase = Phase.APPLYING
        return state

    def _apply(self, state: GameState) -> None:
        direction = state.pending
        state.pending = None
        outcome = tilt(state.board, direction)
        state.score.current += outcome.score_delta
        for event in outcome.events:
            self.listener.forward(event)
        self.listener.score_updated(state.score.current, state.score.max)
        state.phase = Phase.SPAWNING
