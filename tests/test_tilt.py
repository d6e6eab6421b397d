import numpy as np
import pytest

from tilt2048.core.board import Board
from tilt2048.core.tilt import (
    Direction,
    GameStatus,
    TileMerged,
    TileMoved,
    check_terminal,
    tilt,
    to_canonical,
    valid_directions,
    would_change,
)
from tilt2048.errors import InvalidDirection


def row_board(row):
    return Board.from_rows([row, [0] * 4, [0] * 4, [0] * 4])


def random_board(rng, size=4, fill=0.6):
    exps = rng.integers(1, 6, size=(size, size))
    mask = rng.random((size, size)) < fill
    return Board.from_rows(np.where(mask, 2 ** exps, 0))


def test_west_merge_then_slide():
    board = row_board([2, 2, 4, 0])
    outcome = tilt(board, Direction.WEST)
    assert outcome.changed
    assert outcome.score_delta == 4
    assert board.to_array()[0].tolist() == [4, 4, 0, 0]
    assert outcome.events == (
        TileMerged(2, 4, (0, 1), (0, 0)),
        TileMoved(4, (0, 2), (0, 1)),
    )


def test_east_merges_at_edge():
    board = row_board([2, 0, 2, 2])
    outcome = tilt(board, Direction.EAST)
    assert outcome.changed
    assert outcome.score_delta == 4
    assert board.to_array()[0].tolist() == [0, 0, 2, 4]
    assert outcome.events == (
        TileMerged(2, 4, (0, 2), (0, 3)),
        TileMoved(2, (0, 0), (0, 2)),
    )


def test_north_and_south_columns():
    board = Board.from_rows([[2, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0]])
    outcome = tilt(board, Direction.NORTH)
    assert board.to_array()[:, 0].tolist() == [4, 4, 0, 0]
    assert outcome.score_delta == 4
    assert outcome.events == (
        TileMerged(2, 4, (2, 0), (0, 0)),
        TileMoved(4, (3, 0), (1, 0)),
    )

    board = Board.from_rows([[2, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0]])
    outcome = tilt(board, Direction.SOUTH)
    assert board.to_array()[:, 0].tolist() == [0, 0, 4, 4]
    assert outcome.score_delta == 4
    assert outcome.events == (
        TileMoved(2, (2, 0), (2, 0)),
        TileMerged(2, 4, (0, 0), (2, 0)),
    )


def test_no_triple_merge():
    board = row_board([2, 2, 2, 0])
    outcome = tilt(board, Direction.WEST)
    assert board.to_array()[0].tolist() == [4, 2, 0, 0]
    assert len(outcome.merges) == 1

    board = row_board([2, 2, 2, 2])
    outcome = tilt(board, Direction.WEST)
    assert board.to_array()[0].tolist() == [4, 4, 0, 0]
    assert outcome.score_delta == 8

    # merged tile never absorbs the tile that slides in behind it
    board = row_board([4, 2, 2, 0])
    tilt(board, Direction.WEST)
    assert board.to_array()[0].tolist() == [4, 4, 0, 0]


def test_packed_row_does_not_change():
    board = row_board([2, 4, 8, 16])
    before = board.to_array()
    outcome = tilt(board, Direction.WEST)
    assert not outcome.changed
    assert outcome.score_delta == 0
    assert np.array_equal(board.to_array(), before)
    # zero-distance moves are still reported
    assert all(isinstance(e, TileMoved) and e.distance == 0 for e in outcome.events)


def test_empty_board_has_no_events():
    outcome = tilt(Board(4), Direction.SOUTH)
    assert not outcome.changed
    assert outcome.events == ()


@pytest.mark.parametrize("direction", list(Direction))
def test_remap_round_trips(direction):
    forward, inverse = to_canonical(direction, 4)
    cells = {(r, c) for r in range(4) for c in range(4)}
    assert {forward(r, c) for r, c in cells} == cells
    for r, c in cells:
        assert inverse(*forward(r, c)) == (r, c)


def test_remap_faces_direction_to_row_zero():
    edges = {
        Direction.NORTH: {(0, c) for c in range(4)},
        Direction.SOUTH: {(3, c) for c in range(4)},
        Direction.WEST: {(r, 0) for r in range(4)},
        Direction.EAST: {(r, 3) for r in range(4)},
    }
    for direction, edge in edges.items():
        _, inverse = to_canonical(direction, 4)
        assert {inverse(0, c) for c in range(4)} == edge


def test_unknown_direction():
    with pytest.raises(InvalidDirection):
        to_canonical("up", 4)
    with pytest.raises(InvalidDirection):
        tilt(Board(4), None)


@pytest.mark.parametrize("direction", list(Direction))
def test_tilt_invariants_on_random_boards(direction):
    rng = np.random.default_rng(2048)
    for _ in range(200):
        board = random_board(rng)
        total = board.total()
        count = board.occupied_count()
        outcome = tilt(board, direction)

        assert board.total() == total
        assert board.occupied_count() == count - len(outcome.merges)
        assert board.occupied_count() == int(np.count_nonzero(board.to_array()))
        assert outcome.score_delta == sum(e.new_value for e in outcome.merges)

        values = board.to_array()
        nz = values[values > 0]
        assert (values >= 0).all()
        assert ((nz & (nz - 1)) == 0).all()

        # tiles are packed, so a second tilt can only change the board by merging
        again = tilt(board, direction)
        if not outcome.merges:
            assert not again.changed
        assert again.changed == bool(again.merges)


def test_changed_matches_board_difference():
    rng = np.random.default_rng(7)
    for _ in range(100):
        board = random_board(rng)
        for direction in Direction:
            trial = board.copy()
            outcome = tilt(trial, direction)
            assert outcome.changed == (trial != board)
            assert would_change(board, direction) == outcome.changed


def test_terminal_full_board_without_pairs():
    board = Board.from_rows([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ])
    assert check_terminal(board) is GameStatus.LOST
    assert valid_directions(board) == []


def test_full_board_with_pair_is_not_terminal():
    board = Board.from_rows([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 4],
    ])
    assert check_terminal(board) is GameStatus.IN_PROGRESS
    assert Direction.WEST in valid_directions(board)


def test_no_pairs_but_not_full_is_not_terminal():
    board = Board.from_rows([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 0],
    ])
    assert check_terminal(board) is GameStatus.IN_PROGRESS


def test_win_threshold_takes_priority():
    board = Board.from_rows([[2048, 0], [0, 0]])
    assert check_terminal(board) is GameStatus.WON
    board = Board.from_rows([[2, 4], [4, 32]])
    assert check_terminal(board, win_threshold=32) is GameStatus.WON
    assert check_terminal(board) is GameStatus.LOST
