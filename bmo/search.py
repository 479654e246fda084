"""
Search interfaces and the tic-tac-toe opponent.

MinimaxEngine is an exhaustive minimax with alpha-beta pruning. Difficulty is
applied by DifficultyPolicy as a single random bypass before the search runs,
so the search itself stays deterministic.
"""
from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional

from config import get_engine_settings
from bmo.board import empty_cells, is_full, opponent, validate_board, winner
from bmo.types import (
    EMPTY,
    NO_MOVE,
    O,
    X,
    Board,
    CellIndex,
    GameResult,
    Mark,
    is_valid_difficulty,
)

logger = logging.getLogger(__name__)

WIN_SCORE = 10
INF = 10**9


@dataclass
class SearchStats:
    """Node and cutoff counters for the most recent search."""
    nodes: int = 0
    cutoffs: int = 0

    def reset(self) -> None:
        self.nodes = 0
        self.cutoffs = 0


def terminal_score(board: Board, as_player: Mark, depth: int) -> Optional[int]:
    """Score a finished position from `as_player`'s view; None if play continues.

    Faster wins and slower losses score better.
    """
    w = winner(board)
    if w == as_player:
        return WIN_SCORE - depth
    if w is not None:
        return depth - WIN_SCORE
    if is_full(board):
        return 0
    return None


class SearchStrategy(ABC):
    """Abstract interface for search strategies."""

    @abstractmethod
    def search(self, board: Board, player: Mark = O) -> GameResult:  # pragma: no cover
        raise NotImplementedError


class MinimaxEngine(SearchStrategy):
    """Exhaustive minimax over the remaining game tree with optional alpha-beta cutoffs."""

    def __init__(self, use_pruning: bool = True) -> None:
        self.use_pruning = bool(use_pruning)
        self.stats = SearchStats()

    def minimax(self, board: Board, side: Mark, as_player: Mark, depth: int,
                alpha: int, beta: int) -> int:
        """Value of `board` with `side` to move; `board` is restored before returning."""
        self.stats.nodes += 1
        score = terminal_score(board, as_player, depth)
        if score is not None:
            return score

        maximizing = side == as_player
        best: int = -INF if maximizing else INF
        for idx in empty_cells(board):
            board[idx] = side
            val = self.minimax(board, opponent(side), as_player, depth + 1, alpha, beta)
            board[idx] = EMPTY
            if maximizing:
                best = max(best, val)
                alpha = max(alpha, val)
            else:
                best = min(best, val)
                beta = min(beta, val)
            if self.use_pruning and beta <= alpha:
                self.stats.cutoffs += 1
                break
        return best

    def search(self, board: Board, player: Mark = O) -> GameResult:
        """Best (score, cell) for `player`; the earliest cell wins ties."""
        self.stats.reset()
        work: Board = list(board)
        moves: List[CellIndex] = empty_cells(work)
        if not moves or winner(work) is not None:
            return (0, NO_MOVE)

        best_score: int = -INF
        best_move: Optional[CellIndex] = NO_MOVE
        alpha: int = -INF
        for idx in moves:
            work[idx] = player
            sc = self.minimax(work, opponent(player), player, 0, alpha, INF)
            work[idx] = EMPTY
            if sc > best_score:
                best_score = sc
                best_move = idx
            if self.use_pruning and best_score > alpha:
                alpha = best_score
        logger.debug("search for %s: cell=%s score=%d nodes=%d cutoffs=%d",
                     "X" if player == X else "O", best_move, best_score,
                     self.stats.nodes, self.stats.cutoffs)
        return (int(best_score), best_move)


class DifficultyPolicy:
    """Decides, once per move request, whether to skip the search and play randomly."""

    def __init__(self, probabilities: Optional[Dict[str, float]] = None,
                 rng: Optional[random.Random] = None) -> None:
        if probabilities is None:
            probabilities = get_engine_settings().random_move_probability
        self.probabilities: Dict[str, float] = dict(probabilities)
        self.rng = rng or random.Random()

    def bypass_probability(self, difficulty: str) -> float:
        if not is_valid_difficulty(difficulty):
            raise ValueError(f"Unknown difficulty {difficulty!r}")
        return self.probabilities.get(difficulty, 0.0)

    def random_move(self, board: Board, difficulty: str) -> Optional[CellIndex]:
        """A uniformly random empty cell if the bypass fires, else None."""
        p = self.bypass_probability(difficulty)
        moves = empty_cells(board)
        if p <= 0.0 or not moves:
            return None
        if self.rng.random() < p:
            return self.rng.choice(moves)
        return None


class Opponent:
    """The automated player: difficulty bypass first, exhaustive search otherwise."""

    def __init__(self, strategy: Optional[SearchStrategy] = None,
                 policy: Optional[DifficultyPolicy] = None,
                 as_player: Mark = O) -> None:
        if as_player not in (X, O):
            raise ValueError("as_player must be X or O")
        self.strategy: SearchStrategy = strategy or get_search_strategy()
        self.policy: DifficultyPolicy = policy or DifficultyPolicy()
        self.as_player = as_player

    def choose_move(self, board: Board, difficulty: Optional[str] = None) -> Optional[CellIndex]:
        """Cell to play for `as_player`, or NO_MOVE when the board is finished."""
        validate_board(board)
        if difficulty is None:
            difficulty = get_engine_settings().default_difficulty
        if not empty_cells(board) or winner(board) is not None:
            return NO_MOVE

        random_pick = self.policy.random_move(board, difficulty)
        if random_pick is not None:
            logger.debug("difficulty %s bypassed search: random cell %d", difficulty, random_pick)
            return random_pick

        _, idx = self.strategy.search(board, self.as_player)
        return idx


def get_search_strategy() -> SearchStrategy:
    """Factory for the default search strategy (alpha-beta unless disabled in config)."""
    return MinimaxEngine(use_pruning=get_engine_settings().use_pruning)


def get_opponent(seed: Optional[int] = None, as_player: Mark = O) -> Opponent:
    """Opponent with its own random source; falls back to the configured seed."""
    if seed is None:
        seed = get_engine_settings().seed
    policy = DifficultyPolicy(rng=random.Random(seed))
    return Opponent(get_search_strategy(), policy, as_player=as_player)


def best_move(board: Board, player: Mark = O) -> GameResult:
    """Deterministic full-strength search for `player`."""
    validate_board(board)
    return get_search_strategy().search(board, player)


def choose_move(board: Board, difficulty: str = "hard",
                seed: Optional[int] = None) -> Optional[CellIndex]:
    """Convenience wrapper: the O opponent's move at `difficulty`."""
    return get_opponent(seed).choose_move(board, difficulty)
