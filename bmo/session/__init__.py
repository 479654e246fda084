"""
Game sessions built on the core: tic-tac-toe matches and maze runs.
"""
from __future__ import annotations

from .match import IDLE, IN_PROGRESS, TERMINAL, Match
from .maze_run import (
    BLOCKED,
    DIRECTION_DELTAS,
    GAME_COMPLETE,
    INACTIVE,
    KEY_BINDINGS,
    LEVEL_COMPLETE,
    MOVED,
    TIME_UP,
    MazeRun,
    level_score,
)

__all__ = [
    "Match",
    "IDLE",
    "IN_PROGRESS",
    "TERMINAL",
    "MazeRun",
    "level_score",
    "DIRECTION_DELTAS",
    "KEY_BINDINGS",
    "MOVED",
    "BLOCKED",
    "LEVEL_COMPLETE",
    "GAME_COMPLETE",
    "INACTIVE",
    "TIME_UP",
]
