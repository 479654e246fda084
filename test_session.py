import random

import pytest

from config import MazeSettings
from bmo.maze import MazeGenerator
from bmo.pathing import shortest_path
from bmo.search import DifficultyPolicy, MinimaxEngine, Opponent
from bmo.session import (
    BLOCKED,
    GAME_COMPLETE,
    IDLE,
    IN_PROGRESS,
    INACTIVE,
    LEVEL_COMPLETE,
    MOVED,
    TERMINAL,
    TIME_UP,
    Match,
    MazeRun,
    level_score,
)
from bmo.types import EMPTY, O, TIE, X

PROBS = {"easy": 0.7, "medium": 0.3, "hard": 0.0}


def bot_match(difficulty="hard", seed=0) -> Match:
    opp = Opponent(MinimaxEngine(), DifficultyPolicy(PROBS, random.Random(seed)), as_player=O)
    return Match(mode="bot", difficulty=difficulty, opponent_engine=opp)


# ----------------------------
# Tic-tac-toe match
# ----------------------------
def test_match_lifecycle():
    m = bot_match()
    assert m.state == IDLE
    assert not m.play(4)
    m.start()
    assert m.state == IN_PROGRESS
    assert m.play(4)
    # BMO answered immediately
    assert m.board.count(O) == 1
    assert m.current_player == X
    assert not m.play(4)
    assert not m.play(9)


def test_player_mode_alternates_and_counts_wins():
    m = Match(mode="player")
    m.start()
    for idx in (0, 3, 1, 4, 2):
        assert m.play(idx)
    assert m.state == TERMINAL
    assert m.winner == X
    assert m.scoreboard() == {"x_wins": 1, "o_wins": 0, "ties": 0}
    assert not m.play(5)


def test_tie_is_recorded():
    m = Match(mode="player")
    m.start()
    for idx in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        assert m.play(idx)
    assert m.winner == TIE
    assert m.ties == 1


def test_hard_bot_never_loses_to_random_human():
    m = bot_match()
    rng = random.Random(2024)
    for _ in range(30):
        m.start()
        while m.state != TERMINAL:
            free = [i for i, v in enumerate(m.board) if v == EMPTY]
            assert m.play(rng.choice(free))
        assert m.winner != X
    assert m.x_wins == 0
    assert m.o_wins + m.ties == 30


def test_undo_takes_back_human_and_bot_plies():
    m = bot_match()
    m.start()
    m.play(0)
    assert m.board.count(EMPTY) == 7
    assert m.undo()
    assert m.board.count(EMPTY) == 9
    assert m.current_player == X
    assert not m.undo()


def test_undo_after_game_end_restores_scoreboard():
    m = Match(mode="player")
    m.start()
    for idx in (0, 3, 1, 4, 2):
        m.play(idx)
    assert m.x_wins == 1
    assert m.undo()
    assert m.x_wins == 0
    assert m.state == IN_PROGRESS
    assert m.current_player == X


def test_reset_clears_scoreboard():
    m = Match(mode="player")
    m.start()
    for idx in (0, 3, 1, 4, 2):
        m.play(idx)
    m.reset()
    assert m.state == IDLE
    assert m.scoreboard() == {"x_wins": 0, "o_wins": 0, "ties": 0}


def test_unknown_mode():
    with pytest.raises(ValueError):
        Match(mode="online")


# ----------------------------
# Maze run
# ----------------------------
DIRS = {(-1, 0): "up", (1, 0): "down", (0, -1): "left", (0, 1): "right"}


def small_run(levels=2) -> MazeRun:
    s = MazeSettings(grid_size=7, total_levels=levels)
    return MazeRun(MazeGenerator(s, seed=3), s)


def walk_to_exit(run: MazeRun) -> str:
    route = shortest_path(run.grid.cells, run.position, run.grid.exit)
    assert route is not None
    result = None
    for (r0, c0), (r1, c1) in zip(route, route[1:]):
        result = run.move(DIRS[(r1 - r0, c1 - c0)])
        if (r1, c1) != route[-1]:
            assert result == MOVED
    return result


def test_maze_run_progresses_through_levels():
    run = small_run(levels=2)
    assert run.move("up") == INACTIVE
    run.start()
    assert run.level == 1
    assert run.position == run.grid.start

    assert walk_to_exit(run) == LEVEL_COMPLETE
    assert run.level == 2
    assert run.moves == 0
    assert run.position == run.grid.start
    assert run.score > 0

    first_score = run.score
    assert walk_to_exit(run) == GAME_COMPLETE
    assert run.completed
    assert run.score > first_score
    assert run.move("down") == INACTIVE


def test_walls_block_moves():
    run = small_run()
    run.start()
    # (0, 1) is border wall
    assert run.move("up") == BLOCKED
    assert run.position == (1, 1)
    assert run.moves == 0
    with pytest.raises(ValueError):
        run.move("north")


def test_clock_runs_out():
    run = small_run()
    run.start()
    assert run.time_left == run.time_limit(1)
    assert run.tick(run.time_left - 1) is None
    assert run.tick(1) == TIME_UP
    assert not run.started
    assert run.move("down") == INACTIVE
    run.restart_level()
    assert run.started
    assert run.time_left == run.time_limit(1)


def test_time_limit_shrinks_with_floor():
    run = small_run()
    assert run.time_limit(1) == 300
    assert run.time_limit(2) == 270
    assert run.time_limit(5) == 225
    assert run.time_limit(10) == 180


def test_first_level_gets_the_full_clock():
    run = small_run(levels=2)
    run.start()
    assert run.time_left == 300
    assert walk_to_exit(run) == LEVEL_COMPLETE
    assert run.time_left == 270


def test_level_score():
    assert level_score(1, 20, 100) == 1000 + 900 + 1000
    assert level_score(3, 250, 0) == 3000
