"""
Type definitions and shared records for the BMO games core.

This module provides:
- Type aliases for boards, marks and grid coordinates
- The immutable MazeGrid record produced by the maze generator
- Validation helpers and constants shared by the search and maze modules
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import numpy as np

# Tic-tac-toe
Mark = int          # X (1), O (-1) or EMPTY (0)
CellIndex = int     # 0..8, row-major
Board = List[Mark]  # 9 marks
GameResult = Tuple[int, Optional[CellIndex]]  # (score, best_cell)

EMPTY: Mark = 0
X: Mark = 1
O: Mark = -1
TIE = "tie"
NO_MOVE: Optional[CellIndex] = None

BOARD_CELLS = 9
VALID_MARKS = (EMPTY, X, O)
MARK_SYMBOLS = {X: "X", O: "O", EMPTY: " "}

DIFFICULTIES = ("easy", "medium", "hard")

# Maze
Coordinate = Tuple[int, int]  # (row, col)

PATH = 0
WALL = 1
MIN_GRID_SIZE = 5


def is_valid_difficulty(difficulty: Any) -> bool:
    """Check if a value names a known difficulty."""
    return difficulty in DIFFICULTIES


def is_valid_grid_size(size: Any) -> bool:
    """Grid sizes must be odd integers of at least MIN_GRID_SIZE."""
    return isinstance(size, int) and size >= MIN_GRID_SIZE and size % 2 == 1


def default_start(size: int) -> Coordinate:
    return (1, 1)


def default_exit(size: int) -> Coordinate:
    return (size - 2, size - 2)


@dataclass(frozen=True, eq=False)
class MazeGrid:
    """
    Immutable result of one maze generation.

    `cells` is a square int8 array of WALL/PATH values and is made read-only
    on construction. The player's position is not part of the grid.
    """
    cells: np.ndarray
    start: Coordinate
    exit: Coordinate
    level: int = 0
    strategy: str = "backtracker"
    carving_steps: int = 0
    extra_paths: int = 0
    attempts: int = 1
    repaired_walls: int = 0

    def __post_init__(self) -> None:
        if self.cells.ndim != 2 or self.cells.shape[0] != self.cells.shape[1]:
            raise ValueError("Maze cells must be a square 2-D array")
        if not is_valid_grid_size(int(self.cells.shape[0])):
            raise ValueError(f"Maze size must be odd and >= {MIN_GRID_SIZE}")
        for name, coord in (("start", self.start), ("exit", self.exit)):
            if not self.in_bounds(coord):
                raise ValueError(f"{name} {coord} lies outside the grid")
            if self.cells[coord] != PATH:
                raise ValueError(f"{name} {coord} must be a path cell")
        self.cells.flags.writeable = False

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    def in_bounds(self, coord: Coordinate) -> bool:
        r, c = coord
        n = self.cells.shape[0]
        return 0 <= r < n and 0 <= c < n

    def is_path(self, coord: Coordinate) -> bool:
        """A move onto `coord` is legal iff it is inside the grid and not a wall."""
        return self.in_bounds(coord) and self.cells[coord] == PATH

    def path_cells(self) -> List[Coordinate]:
        rows, cols = np.nonzero(self.cells == PATH)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def count_path_cells(self) -> int:
        return int(np.count_nonzero(self.cells == PATH))

    def to_rows(self) -> List[List[int]]:
        """Plain nested-list copy of the cells (0 = path, 1 = wall)."""
        return self.cells.tolist()

    def render(self, wall: str = "#", path: str = ".",
               marks: Optional[dict] = None) -> str:
        """Render the grid as text; `marks` maps coordinates to overlay glyphs."""
        marks = marks or {}
        lines = []
        for r in range(self.size):
            row = []
            for c in range(self.size):
                if (r, c) in marks:
                    row.append(marks[(r, c)])
                else:
                    row.append(wall if self.cells[r, c] == WALL else path)
            lines.append("".join(row))
        return "\n".join(lines)
