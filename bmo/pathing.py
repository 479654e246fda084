"""
Grid graph helpers for maze cells: reachability, shortest paths and repair.
All functions take the raw WALL/PATH array so they can run on grids that are
still being carved.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional, Set

import numpy as np

from bmo.types import PATH, WALL, Coordinate

STEPS = ((-1, 0), (0, 1), (1, 0), (0, -1))


def _in_bounds(cells: np.ndarray, r: int, c: int) -> bool:
    return 0 <= r < cells.shape[0] and 0 <= c < cells.shape[1]


def open_neighbors(cells: np.ndarray, coord: Coordinate) -> List[Coordinate]:
    """Orthogonally adjacent PATH cells."""
    r, c = coord
    nbrs: List[Coordinate] = []
    for dr, dc in STEPS:
        rr, cc = r + dr, c + dc
        if _in_bounds(cells, rr, cc) and cells[rr, cc] == PATH:
            nbrs.append((rr, cc))
    return nbrs


def reachable_from(cells: np.ndarray, start: Coordinate) -> Set[Coordinate]:
    """Every PATH cell connected to `start` (empty if `start` is a wall)."""
    if not _in_bounds(cells, *start) or cells[start] != PATH:
        return set()
    seen: Set[Coordinate] = {start}
    q: Deque[Coordinate] = deque([start])
    while q:
        cur = q.popleft()
        for nxt in open_neighbors(cells, cur):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


def is_connected(cells: np.ndarray, start: Coordinate, goal: Coordinate) -> bool:
    return goal in reachable_from(cells, start)


def reconstruct_path(came_from: Dict[Coordinate, Coordinate], end: Coordinate) -> List[Coordinate]:
    path = [end]
    while path[-1] in came_from:
        path.append(came_from[path[-1]])
    path.reverse()
    return path


def shortest_path(cells: np.ndarray, start: Coordinate, goal: Coordinate) -> Optional[List[Coordinate]]:
    """BFS route of PATH cells from `start` to `goal` inclusive, or None."""
    if not _in_bounds(cells, *start) or cells[start] != PATH:
        return None
    q: Deque[Coordinate] = deque([start])
    visited = {start}
    came_from: Dict[Coordinate, Coordinate] = {}
    while q:
        cur = q.popleft()
        if cur == goal:
            return reconstruct_path(came_from, cur)
        for nxt in open_neighbors(cells, cur):
            if nxt not in visited:
                visited.add(nxt)
                came_from[nxt] = cur
                q.append(nxt)
    return None


def count_open_edges(cells: np.ndarray) -> int:
    """Number of adjacent PATH-PATH pairs (horizontal plus vertical)."""
    open_ = cells == PATH
    horizontal = np.count_nonzero(open_[:, :-1] & open_[:, 1:])
    vertical = np.count_nonzero(open_[:-1, :] & open_[1:, :])
    return int(horizontal + vertical)


def is_perfect(cells: np.ndarray, start: Coordinate) -> bool:
    """True if every PATH cell hangs off `start` in a single tree (no loops, no islands)."""
    total = int(np.count_nonzero(cells == PATH))
    if len(reachable_from(cells, start)) != total:
        return False
    return count_open_edges(cells) == total - 1


def repair_connectivity(cells: np.ndarray, start: Coordinate, goal: Coordinate) -> int:
    """Carve the route from `start` to `goal` that breaks the fewest walls.

    0-1 BFS: stepping onto a PATH costs 0, onto a WALL costs 1. Border cells
    are never carved. Mutates `cells` in place and returns the number of walls
    opened.
    """
    n_rows, n_cols = cells.shape
    cells[start] = PATH
    cells[goal] = PATH
    dist: Dict[Coordinate, int] = {start: 0}
    came_from: Dict[Coordinate, Coordinate] = {}
    dq: Deque[Coordinate] = deque([start])
    while dq:
        cur = dq.popleft()
        if cur == goal:
            break
        r, c = cur
        for dr, dc in STEPS:
            rr, cc = r + dr, c + dc
            if not (0 < rr < n_rows - 1 and 0 < cc < n_cols - 1):
                continue
            w = 1 if cells[rr, cc] == WALL else 0
            nd = dist[cur] + w
            if nd < dist.get((rr, cc), nd + 1):
                dist[(rr, cc)] = nd
                came_from[(rr, cc)] = cur
                if w:
                    dq.append((rr, cc))
                else:
                    dq.appendleft((rr, cc))

    carved = 0
    for coord in reconstruct_path(came_from, goal):
        if cells[coord] == WALL:
            cells[coord] = PATH
            carved += 1
    return carved
