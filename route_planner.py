"""
Multi-goal route planning: visit every goal once from a fixed start.

Legs between landmarks come from ``leg_cache``; this module enumerates the
visiting orders, stitches legs into routes and keeps the quickest and the
slowest one.

Exhaustive search evaluates k! orders (O(k!·k) leg concatenations after
O(k²) searches), so it is meant for single-digit goal counts. The
``max_goals`` setting rejects larger inputs up front; a Held-Karp
(O(2^k·k²)) selector would be the replacement for bigger k.
"""

from __future__ import annotations

import logging
import math
import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from itertools import islice, permutations
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from grid_layouts import Coord, GridLayout, Rows, parse_grid
from grid_planning import PathFinder, get_finder, path_to_actions
from leg_cache import LegCache, build_leg_cache
from planner_settings import PlannerSettings, settings as default_settings

logger = logging.getLogger(__name__)

Order = Tuple[Coord, ...]

ORDERS_PER_WORKER = 64


class DegenerateInputWarning(UserWarning):
    pass


class GoalLimitExceededError(ValueError):
    def __init__(self, goals: int, limit: int):
        self.goals = goals
        self.limit = limit
        super().__init__(
            f"{goals} goals means {math.factorial(goals)} visiting orders; limit is {limit} goals"
        )


@dataclass(frozen=True)
class Route:
    order: Order
    cells: Tuple[Coord, ...]
    length: int
    index: int = 0

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, i):
        return self.cells[i]

    def __iter__(self) -> Iterator[Coord]:
        return iter(self.cells)

    def actions(self) -> List[str]:
        return path_to_actions(self.cells)


@dataclass(frozen=True)
class RouteSelection:
    quickest: Route
    slowest: Route
    stats: Dict[str, object] = field(default_factory=dict)


# ---------- Order enumeration ----------
def count_orders(k: int) -> int:
    return math.factorial(k)


def enumerate_orders(goals: Sequence[Coord]) -> Iterator[Order]:
    """Yield every permutation of ``goals`` lazily; one empty order when there are none."""
    return permutations(tuple(goals))


def end_insertion_orders(goals: Sequence[Coord]) -> Iterator[Order]:
    """Orders built by prepending or appending each goal to every partial order.

    Yields 2**k orders, with repeats, and misses permutations once k >= 3.
    Kept for comparing against plans made with that scheme; use
    ``enumerate_orders`` for an exhaustive search.
    """
    partial: List[Order] = [()]
    for goal in goals:
        grown: List[Order] = []
        for order in partial:
            grown.append(order + (goal,))
            grown.append((goal,) + order)
        partial = grown
    return iter(partial)


STRATEGIES: Dict[str, Callable[[Sequence[Coord]], Iterator[Order]]] = {
    "exhaustive": enumerate_orders,
    "end_insertion": end_insertion_orders,
}


# ---------- Route assembly + selection ----------
def assemble_route(
    start: Coord,
    order: Sequence[Coord],
    cache: LegCache,
    index: int = 0,
    return_to_start: bool = False,
) -> Route:
    stops = list(order)
    if return_to_start and stops:
        stops.append(start)
    cells: List[Coord] = [start]
    length = 0
    pos = start
    for stop in stops:
        leg = cache.leg(pos, stop)
        cells.extend(leg.path[1:])
        length += leg.length
        pos = stop
    return Route(order=tuple(order), cells=tuple(cells), length=length, index=index)


def select_routes(
    start: Coord,
    orders: Iterable[Sequence[Coord]],
    cache: LegCache,
    return_to_start: bool = False,
    max_workers: Optional[int] = None,
) -> RouteSelection:
    """Return the minimum- and maximum-length routes over ``orders``.

    The first route seeds both bests. With ``max_workers > 1`` routes are
    evaluated on a thread pool; ties still resolve to the lowest order index.
    """
    indexed = enumerate(orders)

    def build(item: Tuple[int, Sequence[Coord]]) -> Route:
        i, order = item
        return assemble_route(start, order, cache, index=i, return_to_start=return_to_start)

    quickest: Optional[Route] = None
    slowest: Optional[Route] = None
    evaluated = 0

    def consider(route: Route) -> None:
        nonlocal quickest, slowest, evaluated
        evaluated += 1
        if quickest is None or slowest is None:
            quickest = slowest = route
            return
        # lowest index wins ties, whatever order the routes arrive in
        if (route.length, route.index) < (quickest.length, quickest.index):
            quickest = route
        if (route.length, -route.index) > (slowest.length, -slowest.index):
            slowest = route

    if max_workers and max_workers > 1:
        # bounded batches: only one batch of routes is alive at a time
        batch_size = max_workers * ORDERS_PER_WORKER
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            while True:
                batch = list(islice(indexed, batch_size))
                if not batch:
                    break
                for route in executor.map(build, batch):
                    consider(route)
    else:
        for item in indexed:
            consider(build(item))

    if quickest is None or slowest is None:
        raise ValueError("No visiting orders to evaluate")

    return RouteSelection(
        quickest=quickest,
        slowest=slowest,
        stats={
            "orders_evaluated": evaluated,
            "quickest_length": quickest.length,
            "slowest_length": slowest.length,
        },
    )


def plan_routes(
    layout: Union[GridLayout, Rows],
    *,
    finder: Union[PathFinder, str, None] = None,
    strategy: Optional[str] = None,
    return_to_start: Optional[bool] = None,
    max_goals: Optional[int] = None,
    settings: Optional[PlannerSettings] = None,
) -> RouteSelection:
    """Find the quickest and slowest routes from the start through every goal.

    ``layout`` is a parsed ``GridLayout`` or raw grid rows. Keyword arguments
    override the matching ``PlannerSettings`` fields.

    Raises ``MalformedGridError`` for bad rows, ``GoalLimitExceededError``
    above the goal ceiling and ``UnreachableGoalError`` when a goal cannot be
    reached. Zero goals emits ``DegenerateInputWarning`` and returns the
    start-only route for both.
    """
    cfg = settings or default_settings
    if not isinstance(layout, GridLayout):
        layout = parse_grid(layout)

    if finder is None:
        finder = cfg.finder
    if isinstance(finder, str):
        finder = get_finder(finder)
    strategy = strategy or cfg.strategy
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy {strategy!r}; expected one of {sorted(STRATEGIES)}")
    closed = cfg.return_to_start if return_to_start is None else return_to_start
    limit = cfg.max_goals if max_goals is None else max_goals

    k = len(layout.goals)
    if limit and k > limit:
        raise GoalLimitExceededError(k, limit)
    if k == 0:
        logger.warning("Layout has no goals; returning start-only route")
        warnings.warn("Layout has no goals; quickest and slowest are the start cell alone", DegenerateInputWarning, stacklevel=2)

    cache = build_leg_cache(layout, finder=finder, max_workers=cfg.leg_workers)
    selection = select_routes(
        layout.start,
        STRATEGIES[strategy](layout.goals),
        cache,
        return_to_start=closed,
        max_workers=cfg.order_workers,
    )
    selection.stats.update({"goals": k, "legs_searched": cache.searches, "strategy": strategy})
    logger.info(
        "Planned %d goals (%s): %d orders, quickest=%d slowest=%d",
        k,
        strategy,
        selection.stats["orders_evaluated"],
        selection.quickest.length,
        selection.slowest.length,
    )
    return selection


__all__ = [
    "DegenerateInputWarning",
    "GoalLimitExceededError",
    "Route",
    "RouteSelection",
    "assemble_route",
    "count_orders",
    "end_insertion_orders",
    "enumerate_orders",
    "plan_routes",
    "select_routes",
]
