import numpy as np

from tilt2048.errors import OutOfBounds

# Default geometry and goal; GameConfig overrides both.
SIZE = 4
WIN_THRESHOLD = 2048

# Largest value a cell can hold.
MAX_VALUE = int(np.iinfo(np.int32).max)

# Returned by Board.get for coordinates off the board. Never equal to a tile.
OUT_OF_RANGE = -1


class Board:
    """
    Square grid of tile values, 0 meaning empty.

    - Cells live in an (size, size) int32 array
    - The occupied-cell count is kept in step with every write
    - Reads outside the grid return OUT_OF_RANGE, writes raise OutOfBounds
    """

    def __init__(self, size: int = SIZE):
        if int(size) < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = int(size)
        self._cells = np.zeros((self.size, self.size), dtype=np.int32)
        self._count = 0

    @classmethod
    def from_rows(cls, rows) -> "Board":
        """Build a board from a square nested sequence of non-negative ints."""
        grid = np.asarray(rows, dtype=np.int64)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1] or grid.shape[0] == 0:
            raise ValueError("Board must be a non-empty square matrix.")
        if (grid < 0).any():
            raise ValueError("Tile values must be non-negative.")
        if (grid > MAX_VALUE).any():
            raise ValueError(f"Tile values must not exceed {MAX_VALUE}.")
        board = cls(grid.shape[0])
        board._cells[:, :] = grid
        board._count = int(np.count_nonzero(board._cells))
        return board

    def _in_range(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> int:
        if not self._in_range(row, col):
            return OUT_OF_RANGE
        return int(self._cells[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        if not self._in_range(row, col):
            raise OutOfBounds(row, col, self.size)
        value = int(value)
        if value < 0:
            raise ValueError(f"Tile values must be non-negative, got {value}")
        if value > MAX_VALUE:
            raise ValueError(f"Tile values must not exceed {MAX_VALUE}, got {value}")
        old = int(self._cells[row, col])
        if old == 0 and value != 0:
            self._count += 1
        elif old != 0 and value == 0:
            self._count -= 1
        self._cells[row, col] = value

    def clear(self) -> None:
        self._cells.fill(0)
        self._count = 0

    def is_full(self) -> bool:
        return self._count == self.size * self.size

    def occupied_count(self) -> int:
        return self._count

    # --- Derived views ---
    def copy(self) -> "Board":
        other = Board(self.size)
        other._cells[:, :] = self._cells
        other._count = self._count
        return other

    def to_array(self) -> np.ndarray:
        return self._cells.copy()

    def max_tile(self) -> int:
        return int(self._cells.max())

    def total(self) -> int:
        return int(self._cells.sum(dtype=np.int64))

    def empty_cells(self) -> list[tuple[int, int]]:
        return [(int(r), int(c)) for r, c in np.argwhere(self._cells == 0)]

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._cells, other._cells)

    def __repr__(self):
        rows = ", ".join(str([int(v) for v in row]) for row in self._cells)
        return f"Board([{rows}])"
