"""Collaborators that feed the game loop: tile sources and input sources.

Any zero-argument callable works as either; the classes here cover seeded
random play, fixed scripts, and input arriving from another thread.
"""

import queue
from enum import Enum
from typing import Callable, Iterable

import numpy as np
from gymnasium.utils import seeding

from tilt2048.core.board import SIZE
from tilt2048.core.tilt import Direction


class Signal(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"
    NEW_GAME = "new_game"
    QUIT = "quit"

    @property
    def direction(self) -> Direction | None:
        """The tilt direction this signal requests, or None for control signals."""
        return _SIGNAL_DIRECTIONS.get(self)


_SIGNAL_DIRECTIONS = {
    Signal.NORTH: Direction.NORTH,
    Signal.EAST: Direction.EAST,
    Signal.SOUTH: Direction.SOUTH,
    Signal.WEST: Direction.WEST,
}

DIRECTION_SIGNALS = tuple(_SIGNAL_DIRECTIONS)

Tile = tuple[int, int, int]
TileSource = Callable[[], Tile]
InputSource = Callable[[], Signal]


class RandomTileSource:
    """
    Proposes (value, row, col) uniformly over the whole board.

    The loop re-asks when the proposed cell is taken, so this source does not
    need to know the board. Values are 2 with probability `spawn_prob_2`,
    otherwise 4.
    """

    def __init__(
        self,
        size: int = SIZE,
        spawn_prob_2: float = 0.9,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.size = int(size)
        self.spawn_prob_2 = float(spawn_prob_2)
        if rng is None:
            rng, seed = seeding.np_random(seed)
        self.rng = rng
        self.seed = seed

    def __call__(self) -> Tile:
        value = 2 if self.rng.random() < self.spawn_prob_2 else 4
        row, col = self.rng.integers(0, self.size, size=2)
        return value, int(row), int(col)


class ScriptedTileSource:
    """Replays a fixed sequence of (value, row, col) tiles."""

    def __init__(self, tiles: Iterable[Tile]):
        self._tiles = iter(tiles)

    def __call__(self) -> Tile:
        try:
            return next(self._tiles)
        except StopIteration:
            raise RuntimeError("Scripted tile source is exhausted") from None


class ScriptedInput:
    """Replays a fixed sequence of signals, then answers QUIT forever."""

    def __init__(self, signals: Iterable[Signal]):
        self._signals = iter(signals)

    def __call__(self) -> Signal:
        return next(self._signals, Signal.QUIT)


class QueueInput:
    """
    Blocking input backed by a thread-safe queue.

    Producers on any thread call `put`; the game loop's thread is the only
    consumer, so all board mutation stays on that thread.
    """

    def __init__(self, maxsize: int = 0):
        self._queue: queue.Queue[Signal] = queue.Queue(maxsize)

    def put(self, signal: Signal) -> None:
        if not isinstance(signal, Signal):
            raise TypeError(f"Expected a Signal, got {signal!r}")
        self._queue.put(signal)

    def __call__(self) -> Signal:
        return self._queue.get()
