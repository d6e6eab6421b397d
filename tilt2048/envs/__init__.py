from .game2048 import ACTIONS, Game2048Env

__all__ = ["ACTIONS", "Game2048Env"]
