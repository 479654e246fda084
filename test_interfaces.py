import random

from bmo.board import new_board, parse_board
from bmo.search import (
    DifficultyPolicy,
    MinimaxEngine,
    Opponent,
    SearchStrategy,
    get_opponent,
    get_search_strategy,
)
from bmo.types import O, X


class FirstEmptyStrategy(SearchStrategy):
    """Trivial strategy used to check Opponent only depends on the interface."""

    def __init__(self):
        self.calls = 0

    def search(self, board, player=O):
        self.calls += 1
        return 0, board.index(0)


def test_factories_work():
    strat = get_search_strategy()
    assert isinstance(strat, SearchStrategy)
    score, move = strat.search(parse_board("XX..O...."), O)
    assert isinstance(score, int)
    assert move == 2

    opp = get_opponent(seed=1)
    assert opp.as_player == O
    assert opp.choose_move(parse_board("XX..O...."), "hard") == 2


def test_opponent_accepts_any_strategy():
    strat = FirstEmptyStrategy()
    opp = Opponent(strat, DifficultyPolicy({"easy": 0.7, "medium": 0.3, "hard": 0.0}, random.Random(0)))
    assert opp.choose_move(parse_board("X........"), "hard") == 1
    assert strat.calls == 1


def test_bypass_runs_before_the_search():
    strat = FirstEmptyStrategy()
    always = DifficultyPolicy({"easy": 1.0, "medium": 1.0, "hard": 1.0}, random.Random(0))
    opp = Opponent(strat, always)
    for _ in range(20):
        opp.choose_move(parse_board("X........"), "easy")
    assert strat.calls == 0


def test_engine_plays_either_side():
    engine = MinimaxEngine()
    _, move_x = engine.search(parse_board("XX.OO...."), X)
    _, move_o = engine.search(parse_board("XX.OO...."), O)
    assert move_x == 2
    assert move_o == 5
    assert engine.search(new_board(), X)[1] is not None
