import numpy as np

from bmo.pathing import (
    count_open_edges,
    is_connected,
    is_perfect,
    open_neighbors,
    reachable_from,
    repair_connectivity,
    shortest_path,
)
from bmo.types import PATH, WALL


def grid_from(rows):
    """Build cells from strings: '#' wall, '.' path."""
    return np.array([[WALL if ch == "#" else PATH for ch in row] for row in rows], dtype=np.int8)


CORRIDOR = grid_from([
    "#####",
    "#...#",
    "###.#",
    "#...#",
    "#####",
])

SPLIT = grid_from([
    "#####",
    "#.#.#",
    "#.#.#",
    "#.#.#",
    "#####",
])

LOOP = grid_from([
    "#####",
    "#...#",
    "#.#.#",
    "#...#",
    "#####",
])


def test_open_neighbors():
    assert open_neighbors(CORRIDOR, (1, 1)) == [(1, 2)]
    assert sorted(open_neighbors(CORRIDOR, (1, 3))) == [(1, 2), (2, 3)]


def test_shortest_path_follows_corridor():
    route = shortest_path(CORRIDOR, (1, 1), (3, 1))
    assert route == [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3), (3, 2), (3, 1)]


def test_unreachable_goal():
    assert shortest_path(SPLIT, (1, 1), (3, 3)) is None
    assert not is_connected(SPLIT, (1, 1), (3, 3))
    assert reachable_from(SPLIT, (0, 0)) == set()


def test_perfectness():
    assert is_perfect(CORRIDOR, (1, 1))
    assert count_open_edges(LOOP) == 8
    assert not is_perfect(LOOP, (1, 1))
    assert not is_perfect(SPLIT, (1, 1))


def test_repair_opens_fewest_walls():
    cells = SPLIT.copy()
    carved = repair_connectivity(cells, (1, 1), (3, 3))
    assert carved == 1
    assert is_connected(cells, (1, 1), (3, 3))


def test_repair_on_solid_grid():
    cells = np.full((5, 5), WALL, dtype=np.int8)
    carved = repair_connectivity(cells, (1, 1), (3, 3))
    # start and goal are opened up front; three cells in between
    assert carved == 3
    assert len(shortest_path(cells, (1, 1), (3, 3))) == 5
    assert np.all(cells[0, :] == WALL) and np.all(cells[:, 4] == WALL)
