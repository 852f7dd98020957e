"""
Single-agent grid shortest-path search.

4-directional, unit-cost moves over a boolean walkable map. ``astar`` is the
default finder; ``bfs`` is a heuristic-free alternative with the same
contract, handy for cross-checking path lengths.
"""

from __future__ import annotations

import heapq
from collections import deque
from typing import Dict, Iterator, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

Coord = Tuple[int, int]
Action = Tuple[int, int, str]
ACTIONS: List[Action] = [
    (0, -1, "N"),
    (0, 1, "S"),
    (1, 0, "E"),
    (-1, 0, "W"),
]


@runtime_checkable
class PathFinder(Protocol):
    """Shortest 4-directional path including both ends, or None."""

    def __call__(self, walkable: np.ndarray, start: Coord, goal: Coord) -> Optional[List[Coord]]:
        ...


def in_bounds(H: int, W: int, x: int, y: int) -> bool:
    return 0 <= x < W and 0 <= y < H


def is_free(walkable: np.ndarray, cell: Coord) -> bool:
    H, W = walkable.shape
    x, y = cell
    return in_bounds(H, W, x, y) and bool(walkable[y, x])


def neighbors(walkable: np.ndarray, x: int, y: int) -> Iterator[Tuple[int, int, str]]:
    H, W = walkable.shape
    for dx, dy, a in ACTIONS:
        nx, ny = x + dx, y + dy
        if in_bounds(H, W, nx, ny) and walkable[ny, nx]:
            yield nx, ny, a


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _reconstruct(came: Dict[Coord, Optional[Coord]], goal: Coord) -> List[Coord]:
    path = []
    node: Optional[Coord] = goal
    while node is not None:
        path.append(node)
        node = came[node]
    return list(reversed(path))


def astar(walkable: np.ndarray, start: Coord, goal: Coord) -> Optional[List[Coord]]:
    if not (is_free(walkable, start) and is_free(walkable, goal)):
        return None

    openpq: List[Tuple[int, int, Coord]] = []
    heapq.heappush(openpq, (manhattan(start, goal), 0, start))
    came: Dict[Coord, Optional[Coord]] = {start: None}
    g: Dict[Coord, int] = {start: 0}

    while openpq:
        _, cost, cur = heapq.heappop(openpq)
        if cur == goal:
            return _reconstruct(came, cur)
        if cost > g[cur]:
            continue  # stale heap entry
        cx, cy = cur
        for nx, ny, _ in neighbors(walkable, cx, cy):
            ng = g[cur] + 1
            if (nx, ny) not in g or ng < g[(nx, ny)]:
                g[(nx, ny)] = ng
                came[(nx, ny)] = cur
                heapq.heappush(openpq, (ng + manhattan((nx, ny), goal), ng, (nx, ny)))
    return None


def bfs(walkable: np.ndarray, start: Coord, goal: Coord) -> Optional[List[Coord]]:
    if not (is_free(walkable, start) and is_free(walkable, goal)):
        return None

    came: Dict[Coord, Optional[Coord]] = {start: None}
    frontier = deque([start])
    while frontier:
        cur = frontier.popleft()
        if cur == goal:
            return _reconstruct(came, cur)
        for nx, ny, _ in neighbors(walkable, cur[0], cur[1]):
            if (nx, ny) not in came:
                came[(nx, ny)] = cur
                frontier.append((nx, ny))
    return None


FINDERS: Dict[str, PathFinder] = {
    "astar": astar,
    "bfs": bfs,
}


def get_finder(name: str) -> PathFinder:
    try:
        return FINDERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown path finder {name!r}; expected one of {sorted(FINDERS)}") from None


def path_to_actions(path: Sequence[Coord]) -> List[str]:
    if not path or len(path) < 2:
        return []
    moves = {(dx, dy): a for dx, dy, a in ACTIONS}
    out: List[str] = []
    for (x1, y1), (x2, y2) in zip(path, path[1:]):
        out.append(moves.get((x2 - x1, y2 - y1), "WAIT"))
    return out


def path_length(path: Optional[Sequence[Coord]]) -> Optional[int]:
    if not path:
        return None
    return len(path) - 1


__all__ = [
    "ACTIONS",
    "FINDERS",
    "PathFinder",
    "astar",
    "bfs",
    "get_finder",
    "in_bounds",
    "is_free",
    "manhattan",
    "neighbors",
    "path_length",
    "path_to_actions",
]
