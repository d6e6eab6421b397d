"""tilt2048: 2048 board engine, game loop and Gymnasium environment.

Expose the engine entry points and the environment as `Game2048Env`.
"""

from .config import GameConfig, load_config
from .core import Board, Direction, GameStatus, MoveOutcome, check_terminal, tilt
from .envs.game2048 import Game2048Env
from .errors import ConfigError, GameError, InvalidDirection, OutOfBounds
from .game import GameLoop, Signal

__all__ = [
    "GameConfig",
    "load_config",
    "Board",
    "Direction",
    "GameStatus",
    "MoveOutcome",
    "check_terminal",
    "tilt",
    "Game2048Env",
    "ConfigError",
    "GameError",
    "InvalidDirection",
    "OutOfBounds",
    "GameLoop",
    "Signal",
]
