from .board import Board, OUT_OF_RANGE, SIZE, WIN_THRESHOLD
from .tilt import (
    Direction,
    GameStatus,
    MoveOutcome,
    TileMerged,
    TileMoved,
    check_terminal,
    tilt,
    to_canonical,
    valid_directions,
    would_change,
)

__all__ = [
    "Board",
    "OUT_OF_RANGE",
    "SIZE",
    "WIN_THRESHOLD",
    "Direction",
    "GameStatus",
    "MoveOutcome",
    "TileMerged",
    "TileMoved",
    "check_terminal",
    "tilt",
    "to_canonical",
    "valid_directions",
    "would_change",
]
