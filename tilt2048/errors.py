"""Exception types raised by the board engine."""


class GameError(Exception):
    """Base class for all tilt2048 errors."""


class OutOfBounds(GameError, IndexError):
    """A board coordinate outside [0, size) was used for a write."""

    def __init__(self, row: int, col: int, size: int):
        super().__init__(f"({row}, {col}) is outside a {size}x{size} board")
        self.row = row
        self.col = col
        self.size = size


class InvalidDirection(GameError, ValueError):
    """An unrecognised direction reached the coordinate remap."""


class ConfigError(GameError, ValueError):
    """Configuration values are inconsistent or out of range."""
