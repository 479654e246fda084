"""BMO games core: tic-tac-toe opponent search and procedural mazes.

Usage examples:
    from bmo import choose_move, new_board
    from bmo import MazeGenerator, shortest_path
    from bmo.session import Match, MazeRun
"""
from __future__ import annotations

# Types
from .types import (
    EMPTY,
    NO_MOVE,
    O,
    PATH,
    TIE,
    WALL,
    X,
    MazeGrid,
)

# Tic-tac-toe
from .board import (
    new_board,
    empty_cells,
    winner,
    is_terminal,
    outcome,
    apply_move,
    side_to_move,
    validate_board,
    board_to_str,
    parse_board,
)
from .search import (
    SearchStrategy,
    MinimaxEngine,
    DifficultyPolicy,
    Opponent,
    get_search_strategy,
    get_opponent,
    best_move,
    choose_move,
)

# Maze
from .maze import MazeGenerator, generate_maze
from .pathing import shortest_path, is_connected, is_perfect
