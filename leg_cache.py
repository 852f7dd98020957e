"""
Pairwise shortest-path cache between planner landmarks.

Every unordered pair of landmarks (start and goals) is searched once; the
opposite direction is served by reversing the stored path.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Tuple

from grid_layouts import Coord, GridLayout
from grid_planning import PathFinder, astar

logger = logging.getLogger(__name__)

Pair = Tuple[Coord, Coord]


class UnreachableGoalError(RuntimeError):
    def __init__(self, source: Coord, target: Coord, landmark: Optional[Coord] = None):
        self.source = source
        self.target = target
        self.landmark = landmark if landmark is not None else target
        super().__init__(f"No path between {source} and {target}; landmark {self.landmark} is unreachable")


@dataclass(frozen=True)
class Leg:
    source: Coord
    target: Coord
    path: Tuple[Coord, ...]

    @property
    def length(self) -> int:
        return len(self.path) - 1

    def reversed(self) -> "Leg":
        return Leg(source=self.target, target=self.source, path=tuple(reversed(self.path)))


class LegCache:
    """Write-once map from landmark pairs to legs.

    Only one direction of each pair is stored; ``leg(b, a)`` reverses the
    stored ``a -> b`` leg.
    """

    def __init__(self, landmarks: Iterable[Coord], legs: Dict[Pair, Leg], searches: int):
        self.landmarks: Tuple[Coord, ...] = tuple(landmarks)
        self._legs = dict(legs)
        self.searches = searches

    def __len__(self) -> int:
        return len(self._legs)

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        a, b = pair
        return a == b and a in self.landmarks or (a, b) in self._legs or (b, a) in self._legs

    def leg(self, a: Coord, b: Coord) -> Leg:
        if a == b:
            if a not in self.landmarks:
                raise KeyError(a)
            return Leg(source=a, target=a, path=(a,))
        stored = self._legs.get((a, b))
        if stored is not None:
            return stored
        stored = self._legs.get((b, a))
        if stored is not None:
            return stored.reversed()
        raise KeyError((a, b))

    def length(self, a: Coord, b: Coord) -> int:
        return self.leg(a, b).length


def _dedupe(landmarks: Iterable[Coord]) -> List[Coord]:
    seen = set()
    out: List[Coord] = []
    for xy in landmarks:
        if xy not in seen:
            seen.add(xy)
            out.append(xy)
    return out


def build_leg_cache(
    layout: GridLayout,
    landmarks: Optional[Iterable[Coord]] = None,
    finder: PathFinder = astar,
    max_workers: Optional[int] = None,
) -> LegCache:
    """Search every landmark pair once and return the populated cache.

    Raises ``UnreachableGoalError`` on the first pair the finder cannot
    connect. Pairs are checked in landmark order, so the reported pair does
    not depend on ``max_workers``.
    """
    points = _dedupe(layout.landmarks if landmarks is None else landmarks)
    pairs: List[Pair] = list(combinations(points, 2))

    def search(pair: Pair) -> Optional[List[Coord]]:
        return finder(layout.walkable, pair[0], pair[1])

    legs: Dict[Pair, Leg] = {}

    def store(pair: Pair, path: Optional[List[Coord]]) -> None:
        a, b = pair
        if path is None:
            unreachable = a if b == layout.start else b
            raise UnreachableGoalError(a, b, landmark=unreachable)
        legs[pair] = Leg(source=a, target=b, path=tuple(path))
        logger.debug("Leg %s -> %s length=%d", a, b, len(path) - 1)

    if max_workers and max_workers > 1 and len(pairs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            for pair, path in zip(pairs, executor.map(search, pairs)):
                store(pair, path)
    else:
        # stop at the first failed search
        for pair in pairs:
            store(pair, search(pair))

    logger.debug("Built leg cache: %d landmarks, %d searches", len(points), len(pairs))
    return LegCache(points, legs, searches=len(pairs))


__all__ = [
    "Leg",
    "LegCache",
    "UnreachableGoalError",
    "build_leg_cache",
]
