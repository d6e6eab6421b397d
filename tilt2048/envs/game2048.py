import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tilt2048.core.board import Board
from tilt2048.core.tilt import Direction, GameStatus, check_terminal, tilt, would_change
from tilt2048.game.loop import spawn_tile
from tilt2048.game.sources import RandomTileSource

# Action index -> tilt direction
ACTIONS = (Direction.NORTH, Direction.SOUTH, Direction.WEST, Direction.EAST)


class Game2048Env(gym.Env):
    """
    Gymnasium-compatible view of the board engine.

    - Actions: 0=up, 1=down, 2=left, 3=right
    - Observation: (size, size) int32 grid of tile values
    - Reward: score gained by the move (sum of merged tile values)
    - Terminated: when a tile reaches the target
    - Truncated: when the board is full and nothing can merge
    """

    metadata = {"render_modes": []}

    def __init__(self, size: int = 4, target: int = 2048, spawn_prob_2: float = 0.9, start_tiles: int = 2):
        super().__init__()
        self.size = int(size)
        self.target = int(target)
        self.spawn_prob_2 = float(spawn_prob_2)
        self.start_tiles = int(start_tiles)

        self.action_space = spaces.Discrete(len(ACTIONS))
        # Conservative upper bound for tile values
        self.observation_space = spaces.Box(low=0, high=2 ** 16, shape=(self.size, self.size), dtype=np.int32)

        self.board = Board(self.size)
        self.score: int = 0
        self.prev_action: int = -1
        self.prev_moved: bool = False
        self._tiles: RandomTileSource | None = None

    def reset(self, *, seed: int | None = None, options: dict | None = None):
        super().reset(seed=seed)
        self._tiles = RandomTileSource(self.size, self.spawn_prob_2, rng=self.np_random)
        self.board.clear()
        self.score = 0
        self.prev_action = -1
        self.prev_moved = False
        for _ in range(self.start_tiles):
            spawn_tile(self.board, self._tiles)
        info = {
            "score": self.score,
            "prev_action": self.prev_action,
            "prev_moved": self.prev_moved,
        }
        return self.board.to_array(), info

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise gym.error.InvalidAction(f"Invalid action: {action}")
        assert self._tiles is not None, "call reset() before step()"

        valid_before = self.valid_actions()

        outcome = tilt(self.board, ACTIONS[int(action)])
        reward = outcome.score_delta
        self.score += reward
        if outcome.changed:
            spawn_tile(self.board, self._tiles)

        status = check_terminal(self.board, self.target)
        terminated = status is GameStatus.WON
        truncated = status is GameStatus.LOST

        self.prev_action = int(action)
        self.prev_moved = bool(outcome.changed)

        info = {
            "score": self.score,
            "moved": self.prev_moved,
            "merges": len(outcome.merges),
            "max_tile": self.board.max_tile(),
            "valid_actions": valid_before,
            "valid_actions_next": self.valid_actions(),
            "prev_action": self.prev_action,
            "prev_moved": self.prev_moved,
        }
        return self.board.to_array(), float(reward), bool(terminated), bool(truncated), info

    def valid_actions(self) -> np.ndarray:
        """Boolean mask of actions that would change the current board."""
        return np.array([would_change(self.board, d) for d in ACTIONS], dtype=bool)
