from .events import EventRecorder, GameListener, GameOver, LoggingListener, ScoreUpdated, TilePlaced
from .loop import GameLoop, GameState, Phase, SessionScore, spawn_tile
from .sources import QueueInput, RandomTileSource, ScriptedInput, ScriptedTileSource, Signal

__all__ = [
    "EventRecorder",
    "GameListener",
    "GameOver",
    "LoggingListener",
    "ScoreUpdated",
    "TilePlaced",
    "GameLoop",
    "GameState",
    "Phase",
    "SessionScore",
    "spawn_tile",
    "QueueInput",
    "RandomTileSource",
    "ScriptedInput",
    "ScriptedTileSource",
    "Signal",
]
