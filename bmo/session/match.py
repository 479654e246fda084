"""
Tic-tac-toe match state: board, turn order, history and the running scoreboard.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple, Union

from config import get_engine_settings
from bmo.board import apply_move, is_legal_move, new_board, opponent, outcome
from bmo.search import Opponent, get_opponent
from bmo.types import O, TIE, X, Board, CellIndex, Mark

logger = logging.getLogger(__name__)

IDLE = "idle"
IN_PROGRESS = "in_progress"
TERMINAL = "terminal"

MODES = ("player", "bot")


class Match:
    """One series of tic-tac-toe games, either two humans or human X against BMO O."""

    def __init__(self, mode: str = "bot", difficulty: Optional[str] = None,
                 opponent_engine: Optional[Opponent] = None):
        if mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}")
        self.mode = mode
        self.difficulty = difficulty or get_engine_settings().default_difficulty
        self.opponent = opponent_engine or get_opponent(as_player=O)
        self.board: Board = new_board()
        self.current_player: Mark = X
        self.state = IDLE
        self.winner: Optional[Union[Mark, str]] = None
        self.last_move: Optional[CellIndex] = None
        self.history: List[Tuple[Board, Mark, Optional[CellIndex]]] = []
        self.x_wins = 0
        self.o_wins = 0
        self.ties = 0

    def start(self) -> None:
        """Begin a fresh game; the scoreboard is kept."""
        self.board = new_board()
        self.current_player = X
        self.winner = None
        self.last_move = None
        self.history.clear()
        self.state = IN_PROGRESS

    def reset(self) -> None:
        """Back to idle with a cleared scoreboard."""
        self.start()
        self.state = IDLE
        self.x_wins = self.o_wins = self.ties = 0

    def is_bot_turn(self) -> bool:
        return self.mode == "bot" and self.current_player == self.opponent.as_player

    def play(self, index: CellIndex) -> bool:
        """Place the current player's mark; in bot mode BMO answers straight away."""
        if self.state != IN_PROGRESS or self.is_bot_turn():
            return False
        if not is_legal_move(self.board, index):
            return False
        self._place(index)
        if self.state == IN_PROGRESS and self.is_bot_turn():
            self.bot_move()
        return True

    def bot_move(self) -> Optional[CellIndex]:
        """Let the opponent play its move; returns the cell or None if it could not move."""
        if self.state != IN_PROGRESS or not self.is_bot_turn():
            return None
        idx = self.opponent.choose_move(self.board, self.difficulty)
        if idx is None:
            return None
        self._place(idx)
        return idx

    def undo(self) -> bool:
        """Take back the last human move (and BMO's reply in bot mode)."""
        if not self.history:
            return False
        plies = 2 if self.mode == "bot" and len(self.history) >= 2 and not self.is_bot_turn() else 1
        if self.state == TERMINAL:
            self._uncount(self.winner)
        for _ in range(plies):
            self.board, self.current_player, self.last_move = self.history.pop()
        self.winner = None
        self.state = IN_PROGRESS
        return True

    def scoreboard(self) -> Dict[str, int]:
        return {"x_wins": self.x_wins, "o_wins": self.o_wins, "ties": self.ties}

    def _place(self, index: CellIndex) -> None:
        self.history.append((list(self.board), self.current_player, self.last_move))
        self.board = apply_move(self.board, index, self.current_player)
        self.last_move = index
        self.current_player = opponent(self.current_player)
        self._check_game_end()

    def _check_game_end(self) -> None:
        result = outcome(self.board)
        if result is None:
            return
        self.state = TERMINAL
        self.winner = result
        if result == X:
            self.x_wins += 1
        elif result == O:
            self.o_wins += 1
        elif result == TIE:
            self.ties += 1
        logger.info("game over: %s", "tie" if result == TIE else ("X" if result == X else "O"))

    def _uncount(self, result: Optional[Union[Mark, str]]) -> None:
        if result == X:
            self.x_wins -= 1
        elif result == O:
            self.o_wins -= 1
        elif result == TIE:
            self.ties -= 1
