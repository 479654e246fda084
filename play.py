from __future__ import annotations

import argparse
from typing import Optional

from config import get_engine_settings, get_ui_settings, setup_logging
from bmo.board import board_to_str
from bmo.maze import MazeGenerator
from bmo.search import get_opponent
from bmo.session import (
    GAME_COMPLETE,
    KEY_BINDINGS,
    LEVEL_COMPLETE,
    TERMINAL,
    Match,
    MazeRun,
)
from bmo.types import O, TIE, X

WALL_GLYPHS = {True: "█", False: "#"}


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play the BMO mini-games in a terminal")
    sub = ap.add_subparsers(dest="game", required=True)

    ttt = sub.add_parser("tictactoe", help="Tic-tac-toe against BMO or a friend")
    ttt.add_argument("--mode", choices=["bot", "player"], default="bot", help="opponent type")
    ttt.add_argument("--difficulty", choices=["easy", "medium", "hard"],
                     default=None, help="BMO difficulty (default from config)")
    ttt.add_argument("--seed", type=int, default=None, help="seed BMO's random choices")

    maze = sub.add_parser("maze", help="Guide BMO out of successive mazes")
    maze.add_argument("--size", type=int, default=None, help="odd grid size (default from config)")
    maze.add_argument("--strategy", choices=["backtracker", "patterns"], default=None)
    maze.add_argument("--seed", type=int, default=None, help="seed the maze generator")
    return ap.parse_args(argv)


def read_cell(match: Match) -> Optional[int]:
    while True:
        raw = input(f"Play {'X' if match.current_player == X else 'O'} at [0-8] (q quits): ").strip()
        if raw.lower() == "q":
            return None
        try:
            idx = int(raw)
        except ValueError:
            print("Please type a number 0..8.")
            continue
        if match.play(idx):
            return idx
        print("Illegal move. Try again.")


def run_tictactoe(args: argparse.Namespace) -> None:
    ui = get_ui_settings()
    difficulty = args.difficulty or get_engine_settings().default_difficulty
    match = Match(mode=args.mode, difficulty=difficulty,
                  opponent_engine=get_opponent(seed=args.seed, as_player=O))
    while True:
        match.start()
        while match.state != TERMINAL:
            print(board_to_str(match.board, show_indices=ui.show_indices))
            if read_cell(match) is None:
                return
            if match.mode == "bot" and match.last_move is not None and match.current_player == X:
                print(f"BMO plays at {match.last_move}")
        print(board_to_str(match.board))
        w = match.winner
        print("Winner:", "Draw" if w == TIE else ("X" if w == X else "O"))
        print("Score:", match.scoreboard())
        if input("Play again? [y/N] ").strip().lower() != "y":
            return


def run_maze(args: argparse.Namespace) -> None:
    ui = get_ui_settings()
    run = MazeRun()
    if args.size is not None or args.strategy is not None or args.seed is not None:
        settings = run.settings
        if args.size is not None:
            settings = settings.model_copy(update={"grid_size": args.size})
        run = MazeRun(MazeGenerator(settings, seed=args.seed, strategy=args.strategy), settings)
    run.start()
    wall = WALL_GLYPHS[ui.use_unicode]
    print("Move with w/a/s/d (or h/j/k/l), q quits.")
    while run.started:
        print(f"\nLevel {run.level}/{run.settings.total_levels}  moves {run.moves}  score {run.score}")
        print(run.grid.render(wall=wall, path=" ", marks={run.position: "B", run.grid.exit: "E"}))
        key = input("> ").strip().lower()
        if key == "q":
            return
        direction = KEY_BINDINGS.get(key)
        if direction is None:
            continue
        result = run.move(direction)
        if result == LEVEL_COMPLETE:
            print(f"Level cleared! On to level {run.level}.")
        elif result == GAME_COMPLETE:
            print(f"You escaped every maze! Final score {run.score}.")


def main(argv: Optional[list] = None) -> None:
    setup_logging()
    args = parse_args(argv)
    if args.game == "tictactoe":
        run_tictactoe(args)
    else:
        run_maze(args)


if __name__ == "__main__":
    main()
