"""
Procedural maze generation.

Two strategies are available:

- ``backtracker`` (default): iterative recursive-backtracking over the odd
  cells. Every carved cell is reachable from the start by construction and
  the result is a perfect maze before any level augmentation.
- ``patterns``: themed layouts picked by ``level % 5`` (lattice, spiral,
  scatter, cross, braid). Spiral and cross are connected by construction.
  Lattice usually connects and is regenerated until it does; scatter and
  braid are too sparse for that and are patched after a single carve. The
  patch (and the fallback once lattice runs out of attempts) carves the
  cheapest route from start to exit.

Higher levels open a bounded number of extra random cells. Openings are only
ever added, so connectivity established earlier is preserved.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from config import MazeSettings, get_maze_settings
from bmo.pathing import is_connected, repair_connectivity
from bmo.types import (
    MIN_GRID_SIZE,
    PATH,
    WALL,
    Coordinate,
    MazeGrid,
    default_exit,
    default_start,
    is_valid_grid_size,
)

logger = logging.getLogger(__name__)

# Two-cell moves between odd "room" cells: up, right, down, left
CARVE_STEPS = ((-2, 0), (0, 2), (2, 0), (0, -2))

Pattern = Callable[[np.ndarray, random.Random], None]


def blank_grid(size: int) -> np.ndarray:
    """All-wall grid."""
    return np.full((size, size), WALL, dtype=np.int8)


def _interior(size: int, r: int, c: int) -> bool:
    return 0 < r < size - 1 and 0 < c < size - 1


def carve_backtracking(size: int, rng: random.Random,
                       start: Coordinate = (1, 1)) -> Tuple[np.ndarray, int]:
    """Carve a perfect maze; returns (cells, carving_steps).

    Each step opens one wall cell and one room cell, so the grid ends with
    ``1 + 2 * carving_steps`` path cells.
    """
    cells = blank_grid(size)
    visited = np.zeros((size, size), dtype=bool)
    stack: List[Coordinate] = [start]
    visited[start] = True
    cells[start] = PATH
    steps = 0

    while stack:
        r, c = stack[-1]
        neighbors = [
            (r + dr, c + dc)
            for dr, dc in CARVE_STEPS
            if _interior(size, r + dr, c + dc) and not visited[r + dr, c + dc]
        ]
        if neighbors:
            nr, nc = rng.choice(neighbors)
            cells[(r + nr) // 2, (c + nc) // 2] = PATH
            cells[nr, nc] = PATH
            visited[nr, nc] = True
            stack.append((nr, nc))
            steps += 1
        else:
            stack.pop()
    return cells, steps


# ----------------------------
# Themed patterns
# ----------------------------
def _pattern_lattice(cells: np.ndarray, rng: random.Random) -> None:
    """Open every room cell and, with 70% odds each, its lower and right walls."""
    n = cells.shape[0]
    for i in range(1, n - 1, 2):
        for j in range(1, n - 1, 2):
            cells[i, j] = PATH
            if rng.random() > 0.3 and i + 1 < n - 1:
                cells[i + 1, j] = PATH
            if rng.random() > 0.3 and j + 1 < n - 1:
                cells[i, j + 1] = PATH


def _pattern_spiral(cells: np.ndarray, rng: random.Random) -> None:
    """Clockwise inward spiral corridor, one wall between rings."""
    n = cells.shape[0]
    r, c = 1, 1
    dr, dc = 0, 1
    cells[r, c] = PATH
    turns = 0
    while turns < 4:
        nr, nc = r + 2 * dr, c + 2 * dc
        if _interior(n, nr, nc) and cells[nr, nc] == WALL:
            cells[r + dr, c + dc] = PATH
            cells[nr, nc] = PATH
            r, c = nr, nc
            turns = 0
        else:
            dr, dc = dc, -dr
            turns += 1


def _pattern_scatter(cells: np.ndarray, rng: random.Random) -> None:
    """Each interior cell opens with probability 0.4."""
    n = cells.shape[0]
    for i in range(1, n - 1):
        for j in range(1, n - 1):
            if rng.random() > 0.6:
                cells[i, j] = PATH


def _pattern_cross(cells: np.ndarray, rng: random.Random) -> None:
    """Full middle row and column, spurs from start and exit onto the middle row,
    plus small L-shaped rooms on a 3-cell stride."""
    n = cells.shape[0]
    mid = n // 2
    cells[1:n - 1, mid] = PATH
    cells[mid, 1:n - 1] = PATH
    cells[1:mid + 1, 1] = PATH
    cells[mid:n - 1, n - 2] = PATH
    for i in range(2, n - 2, 3):
        for j in range(2, n - 2, 3):
            cells[i, j] = PATH
            if i + 1 < n - 1:
                cells[i + 1, j] = PATH
            if j + 1 < n - 1:
                cells[i, j + 1] = PATH


def _pattern_braid(cells: np.ndarray, rng: random.Random) -> None:
    """Every room cell knocks through to one random room neighbour."""
    n = cells.shape[0]
    for i in range(1, n - 1, 2):
        for j in range(1, n - 1, 2):
            cells[i, j] = PATH
            directions = [(di, dj) for di, dj in CARVE_STEPS if _interior(n, i + di, j + dj)]
            if directions:
                di, dj = rng.choice(directions)
                cells[i + di // 2, j + dj // 2] = PATH
                cells[i + di, j + dj] = PATH


PATTERNS: Dict[str, Pattern] = {
    "lattice": _pattern_lattice,
    "spiral": _pattern_spiral,
    "scatter": _pattern_scatter,
    "cross": _pattern_cross,
    "braid": _pattern_braid,
}
PATTERN_ORDER: Tuple[str, ...] = ("lattice", "spiral", "scatter", "cross", "braid")
# Too sparse to connect on their own; carved once, then patched
PATCHED_PATTERNS = frozenset({"scatter", "braid"})


def pattern_for_level(level_index: int) -> str:
    return PATTERN_ORDER[level_index % len(PATTERN_ORDER)]


class MazeGenerator:
    """Generates one playable MazeGrid per level."""

    def __init__(self, settings: Optional[MazeSettings] = None,
                 seed: Optional[int] = None, strategy: Optional[str] = None) -> None:
        self.settings: MazeSettings = settings or get_maze_settings()
        self.strategy = (strategy or self.settings.strategy).lower()
        if self.strategy not in ("backtracker", "patterns"):
            raise ValueError(f"Unknown maze strategy {self.strategy!r}")
        self.rng = random.Random(seed)

    def extra_path_budget(self, level_index: int) -> int:
        s = self.settings
        return min(level_index * s.extra_paths_per_level, s.max_extra_paths)

    def generate(self, level_index: int, grid_size: Optional[int] = None) -> MazeGrid:
        """Build the maze for `level_index`; start is (1, 1), exit is (N-2, N-2)."""
        size = self.settings.grid_size if grid_size is None else grid_size
        if not is_valid_grid_size(size):
            raise ValueError(f"grid_size must be an odd integer >= {MIN_GRID_SIZE}, got {size!r}")
        if level_index < 0:
            raise ValueError("level_index must be non-negative")

        start, exit_ = default_start(size), default_exit(size)
        if self.strategy == "backtracker":
            cells, steps = carve_backtracking(size, self.rng, start)
            attempts, repaired = 1, 0
        else:
            cells, attempts, repaired = self._carve_pattern(level_index, size, start, exit_)
            steps = 0

        extra = self._add_extra_paths(cells, self.extra_path_budget(level_index))
        logger.debug("level %d maze (%s, %dx%d): %d steps, %d extra openings, "
                     "%d attempt(s), %d repaired walls",
                     level_index, self.strategy, size, size, steps, extra, attempts, repaired)
        return MazeGrid(
            cells=cells,
            start=start,
            exit=exit_,
            level=level_index,
            strategy=self.strategy,
            carving_steps=steps,
            extra_paths=extra,
            attempts=attempts,
            repaired_walls=repaired,
        )

    def _carve_pattern(self, level_index: int, size: int, start: Coordinate,
                       exit_: Coordinate) -> Tuple[np.ndarray, int, int]:
        """Returns (cells, attempts, walls opened by the repair pass)."""
        name = pattern_for_level(level_index)
        pattern = PATTERNS[name]
        patched = name in PATCHED_PATTERNS
        max_attempts = 1 if patched else self.settings.max_generation_attempts
        cells = blank_grid(size)
        for attempt in range(1, max_attempts + 1):
            cells = blank_grid(size)
            pattern(cells, self.rng)
            self._open_endpoints(cells, start, exit_)
            if is_connected(cells, start, exit_):
                return cells, attempt, 0
            logger.debug("%s pattern attempt %d left the exit unreachable", name, attempt)

        carved = repair_connectivity(cells, start, exit_)
        if patched:
            logger.debug("%s pattern patched; repair pass opened %d walls", name, carved)
        else:
            logger.warning("%s pattern failed %d times; repair pass opened %d walls",
                           name, max_attempts, carved)
        return cells, max_attempts, carved

    @staticmethod
    def _open_endpoints(cells: np.ndarray, start: Coordinate, exit_: Coordinate) -> None:
        sr, sc = start
        er, ec = exit_
        cells[start] = PATH
        cells[sr, sc + 1] = PATH
        cells[sr + 1, sc] = PATH
        cells[exit_] = PATH
        cells[er, ec - 1] = PATH
        cells[er - 1, ec] = PATH

    def _add_extra_paths(self, cells: np.ndarray, budget: int) -> int:
        """Roll `budget` random interior cells and open the walls among them."""
        n = cells.shape[0]
        opened = 0
        for _ in range(budget):
            r = self.rng.randrange(1, n - 1)
            c = self.rng.randrange(1, n - 1)
            if cells[r, c] == WALL:
                cells[r, c] = PATH
                opened += 1
        return opened


def generate_maze(level_index: int, grid_size: Optional[int] = None,
                  seed: Optional[int] = None, strategy: Optional[str] = None) -> MazeGrid:
    """One-shot helper around MazeGenerator."""
    return MazeGenerator(seed=seed, strategy=strategy).generate(level_index, grid_size)
