"""Output events and the presentation-layer listener interface."""

import logging
from dataclasses import dataclass

from tilt2048.core.tilt import Position, TileMerged, TileMoved

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TilePlaced:
    value: int
    row: int
    col: int


@dataclass(frozen=True)
class ScoreUpdated:
    current: int
    max_score: int


@dataclass(frozen=True)
class GameOver:
    pass


class GameListener:
    """Receives everything the game loop reports. All hooks default to no-ops."""

    def tile_placed(self, value: int, row: int, col: int) -> None:
        pass

    def tile_moved(self, value: int, source: Position, dest: Position) -> None:
        pass

    def tile_merged(self, old_value: int, new_value: int, source: Position, dest: Position) -> None:
        pass

    def score_updated(self, current: int, max_score: int) -> None:
        pass

    def game_over(self) -> None:
        pass

    def forward(self, event) -> None:
        """Dispatch a tilt event record to the matching hook."""
        if isinstance(event, TileMerged):
            self.tile_merged(event.old_value, event.new_value, event.source, event.dest)
        elif isinstance(event, TileMoved):
            self.tile_moved(event.value, event.source, event.dest)
        else:
            raise TypeError(f"Not a tilt event: {event!r}")


class EventRecorder(GameListener):
    """Keeps every event in order; handy for tests and for layering a move log."""

    def __init__(self):
        self.events: list = []

    def tile_placed(self, value, row, col):
        self.events.append(TilePlaced(value, row, col))

    def tile_moved(self, value, source, dest):
        self.events.append(TileMoved(value, source, dest))

    def tile_merged(self, old_value, new_value, source, dest):
        self.events.append(TileMerged(old_value, new_value, source, dest))

    def score_updated(self, current, max_score):
        self.events.append(ScoreUpdated(current, max_score))

    def game_over(self):
        self.events.append(GameOver())

    def of_type(self, kind) -> list:
        return [e for e in self.events if isinstance(e, kind)]

    def clear(self) -> None:
        self.events.clear()


class LoggingListener(GameListener):
    def __init__(self, level: int = logging.DEBUG):
        self.level = level

    def tile_placed(self, value, row, col):
        logger.log(self.level, "placed %d at (%d, %d)", value, row, col)

    def tile_moved(self, value, source, dest):
        if source != dest:
            logger.log(self.level, "moved %d %s -> %s", value, source, dest)

    def tile_merged(self, old_value, new_value, source, dest):
        logger.log(self.level, "merged %d %s into %s -> %d", old_value, source, dest, new_value)

    def score_updated(self, current, max_score):
        logger.log(self.level, "score %d (max %d)", current, max_score)

    def game_over(self):
        logger.log(self.level, "game over")
