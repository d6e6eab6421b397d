"""Slide-and-merge rules for all four directions.

Every tilt is computed as a slide toward row 0 of a "canonical" view of the
board. `to_canonical` supplies the pair of coordinate maps that turn a real
board so that the requested side faces canonical row 0, so a single routine
serves NORTH, EAST, SOUTH and WEST.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from tilt2048.core.board import Board, WIN_THRESHOLD
from tilt2048.errors import InvalidDirection

Position = tuple[int, int]
CoordMap = Callable[[int, int], Position]


class Direction(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class TileMoved:
    value: int
    source: Position
    dest: Position

    @property
    def distance(self) -> int:
        return abs(self.source[0] - self.dest[0]) + abs(self.source[1] - self.dest[1])


@dataclass(frozen=True)
class TileMerged:
    old_value: int
    new_value: int
    source: Position
    dest: Position


@dataclass(frozen=True)
class MoveOutcome:
    changed: bool
    score_delta: int = 0
    events: tuple = field(default_factory=tuple)

    @property
    def merges(self) -> list[TileMerged]:
        return [e for e in self.events if isinstance(e, TileMerged)]


# (real -> canonical, canonical -> real) for a board of side n.
# Canonical row 0 is the side the tiles slide toward.
_REMAPS: dict[Direction, Callable[[int], tuple[CoordMap, CoordMap]]] = {
    Direction.NORTH: lambda n: (
        lambda r, c: (r, c),
        lambda r, c: (r, c),
    ),
    Direction.EAST: lambda n: (
        lambda r, c: (n - 1 - c, r),
        lambda r, c: (c, n - 1 - r),
    ),
    Direction.SOUTH: lambda n: (
        lambda r, c: (n - 1 - r, n - 1 - c),
        lambda r, c: (n - 1 - r, n - 1 - c),
    ),
    Direction.WEST: lambda n: (
        lambda r, c: (c, n - 1 - r),
        lambda r, c: (n - 1 - c, r),
    ),
}


def to_canonical(direction: Direction, size: int) -> tuple[CoordMap, CoordMap]:
    """Return (forward, inverse) coordinate maps for tilting toward `direction`.

    `forward` takes a real (row, col) to canonical coordinates, `inverse` takes
    canonical coordinates back to the real board.
    """
    try:
        make = _REMAPS[direction]
    except (KeyError, TypeError):
        raise InvalidDirection(f"Unknown direction: {direction!r}") from None
    return make(size)


def _slide_column(column: list[int], to_real: Callable[[int], Position], events: list) -> tuple[bool, int]:
    """Slide one canonical column toward index 0 in place.

    Returns (moved, score_delta); appends move/merge events in scan order.
    """
    changed = False
    score = 0
    merged = [False] * len(column)
    for r in range(1, len(column)):
        value = column[r]
        if value == 0:
            continue
        x = r - 1
        while x >= 0 and column[x] == 0:
            x -= 1
        if x >= 0 and column[x] == value and not merged[x]:
            new_value = value * 2
            events.append(TileMerged(value, new_value, to_real(r), to_real(x)))
            merged[x] = True
            column[r] = 0
            column[x] = new_value
            score += new_value
            changed = True
        else:
            dest = x + 1
            events.append(TileMoved(value, to_real(r), to_real(dest)))
            column[r] = 0
            column[dest] = value
            if dest != r:
                changed = True
    return changed, score


def tilt(board: Board, direction: Direction) -> MoveOutcome:
    """Tilt `board` toward `direction`, mutating it, and report what happened."""
    n = board.size
    _, inverse = to_canonical(direction, n)

    # canonical snapshot, indexed [canonical_col][canonical_row]
    columns = [[board.get(*inverse(r, c)) for r in range(n)] for c in range(n)]

    changed = False
    score_delta = 0
    events: list = []
    for c, column in enumerate(columns):
        col_changed, col_score = _slide_column(column, lambda r, c=c: inverse(r, c), events)
        changed = changed or col_changed
        score_delta += col_score

    if changed:
        for c, column in enumerate(columns):
            for r, value in enumerate(column):
                board.set(*inverse(r, c), value)
    return MoveOutcome(changed=changed, score_delta=score_delta, events=tuple(events))


def would_change(board: Board, direction: Direction) -> bool:
    return tilt(board.copy(), direction).changed


def valid_directions(board: Board) -> list[Direction]:
    return [d for d in Direction if would_change(board, d)]


def check_terminal(board: Board, win_threshold: int = WIN_THRESHOLD) -> GameStatus:
    """Classify the board: WON on any tile equal to the threshold, LOST when
    full with no equal neighbours, else IN_PROGRESS.
    """
    n = board.size
    has_pair = False
    for r in range(n):
        for c in range(n):
            value = board.get(r, c)
            if value == win_threshold:
                return GameStatus.WON
            if not has_pair and value in (
                board.get(r - 1, c),
                board.get(r, c + 1),
                board.get(r + 1, c),
                board.get(r, c - 1),
            ):
                has_pair = True
    if not has_pair and board.is_full():
        return GameStatus.LOST
    return GameStatus.IN_PROGRESS
