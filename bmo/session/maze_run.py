"""
Maze escape run: walks the player through successive generated levels.
The grid only holds walls and paths; the player's position lives here.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from config import MazeSettings, get_maze_settings
from bmo.maze import MazeGenerator
from bmo.types import Coordinate, MazeGrid

logger = logging.getLogger(__name__)

MOVED = "moved"
BLOCKED = "blocked"
LEVEL_COMPLETE = "level_complete"
GAME_COMPLETE = "game_complete"
INACTIVE = "inactive"
TIME_UP = "time_up"

DIRECTION_DELTAS: Dict[str, Coordinate] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}

KEY_BINDINGS: Dict[str, str] = {
    "w": "up", "s": "down", "a": "left", "d": "right",
    "k": "up", "j": "down", "h": "left", "l": "right",
}


def level_score(level: int, moves: int, time_left: int) -> int:
    """Points for clearing `level`: time bonus, move bonus and a flat level bonus."""
    time_bonus = max(0, time_left * 10)
    move_bonus = max(0, (200 - moves) * 5)
    return time_bonus + move_bonus + level * 1000


class MazeRun:
    """Tracks level, position, moves, clock and score for one maze run."""

    def __init__(self, generator: Optional[MazeGenerator] = None,
                 settings: Optional[MazeSettings] = None):
        self.settings: MazeSettings = settings or get_maze_settings()
        self.generator = generator or MazeGenerator(self.settings)
        self.level = 1
        self.score = 0
        self.moves = 0
        self.time_left = self.time_limit(1)
        self.grid: Optional[MazeGrid] = None
        self.position: Optional[Coordinate] = None
        self.started = False
        self.completed = False

    def time_limit(self, level: int) -> int:
        """Full base time on level 1, then `time_step_per_level` less per level down to the floor."""
        s = self.settings
        if level <= 1:
            return s.base_time_limit
        return max(s.min_time_limit, s.base_time_limit - level * s.time_step_per_level)

    def start(self) -> None:
        self.score = 0
        self.completed = False
        self._enter_level(1)
        self.started = True

    def restart_level(self) -> None:
        """Fresh maze for the current level; score so far is kept."""
        self._enter_level(self.level)
        self.started = True

    def move(self, direction: str) -> str:
        """Step one cell; returns one of the outcome constants."""
        if direction not in DIRECTION_DELTAS:
            raise ValueError(f"Unknown direction {direction!r}")
        if not self.started or self.completed or self.grid is None or self.position is None:
            return INACTIVE

        dr, dc = DIRECTION_DELTAS[direction]
        last = self.grid.size - 1
        r, c = self.position
        dest = (min(max(r + dr, 0), last), min(max(c + dc, 0), last))
        if not self.grid.is_path(dest):
            return BLOCKED

        self.position = dest
        self.moves += 1
        if dest != self.grid.exit:
            return MOVED

        self.score += level_score(self.level, self.moves, self.time_left)
        if self.level < self.settings.total_levels:
            logger.info("level %d cleared in %d moves", self.level, self.moves)
            self._enter_level(self.level + 1)
            return LEVEL_COMPLETE

        self.completed = True
        self.started = False
        logger.info("maze run complete: score %d", self.score)
        return GAME_COMPLETE

    def tick(self, seconds: int = 1) -> Optional[str]:
        """Advance the level clock; returns TIME_UP when it runs out."""
        if not self.started or self.completed:
            return None
        self.time_left = max(0, self.time_left - seconds)
        if self.time_left == 0:
            self.started = False
            logger.info("time up on level %d", self.level)
            return TIME_UP
        return None

    def _enter_level(self, level: int) -> None:
        self.level = level
        self.grid = self.generator.generate(level)
        self.position = self.grid.start
        self.moves = 0
        self.time_left = self.time_limit(level)
