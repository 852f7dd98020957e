"""
ASCII grid layouts for the multi-goal route planner.

Parses rows of single-character symbols into a walkable map plus the start
and goal landmarks the planner needs.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np

Coord = Tuple[int, int]  # (x, y) = (column, row)
Rows = Union[str, Sequence[str], Sequence[Sequence[str]]]


class MalformedGridError(ValueError):
    """Raised when grid rows cannot describe a valid layout."""


class CellKind(enum.Enum):
    WALKABLE = "."
    BLOCKED = "#"
    START = "@"
    GOAL = "$"

    @property
    def walkable(self) -> bool:
        return self is not CellKind.BLOCKED


SYMBOLS: Dict[str, CellKind] = {kind.value: kind for kind in CellKind}


@dataclass(frozen=True)
class LayoutConfig:
    ascii_rows: Sequence[str]


@dataclass(frozen=True, eq=False)
class GridLayout:
    width: int
    height: int
    walkable: np.ndarray  # bool, shape (height, width), indexed [y, x]
    start: Coord
    goals: Tuple[Coord, ...]
    rows: Tuple[str, ...]

    @property
    def landmarks(self) -> Tuple[Coord, ...]:
        return (self.start,) + self.goals

    def in_bounds(self, cell: Coord) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, cell: Coord) -> bool:
        return self.in_bounds(cell) and bool(self.walkable[cell[1], cell[0]])

    def kind_at(self, cell: Coord) -> CellKind:
        if not self.in_bounds(cell):
            raise IndexError(f"Cell {cell} outside {self.width}x{self.height} grid")
        x, y = cell
        return SYMBOLS[self.rows[y][x]]


DEMO_LAYOUT = LayoutConfig(
    ascii_rows=(
        "#########################",
        "#.......................#",
        "#.......................#",
        "#........$.###..........#",
        "#........#######........#",
        "#..........###..........#",
        "#...........#.........$.#",
        "#..###..................#",
        "#.#######.......#####...#",
        "#..#####.........######.#",
        "#.................####..#",
        "#.......................#",
        "#.......................#",
        "#.......................#",
        "##.........##....##.....#",
        "###.......####.$#####...#",
        "####.......##...###.....#",
        "######.........###......#",
        "#######........##.......#",
        "########.......##.$.....#",
        "#.............###.......#",
        "#.............##........#",
        "#.......................#",
        "#.@.....................#",
        "#########################",
    ),
)


def _normalize_rows(rows: Rows) -> List[str]:
    if isinstance(rows, str):
        return rows.strip("\n").splitlines()
    return ["".join(row) for row in rows]


def _validate_ascii(rows: Sequence[str]) -> None:
    if not rows or not rows[0]:
        raise MalformedGridError("Grid is empty")
    W = len(rows[0])
    for idx, row in enumerate(rows):
        if len(row) != W:
            raise MalformedGridError(f"Row {idx} expected width {W}, got {len(row)}")


def parse_grid(rows: Rows) -> GridLayout:
    """Parse grid rows into a ``GridLayout``.

    ``rows`` may be a list of strings, a list of symbol lists, or a single
    newline-separated string. Goals are collected in row-major order.
    """
    text_rows = _normalize_rows(rows)
    _validate_ascii(text_rows)
    H, W = len(text_rows), len(text_rows[0])

    walkable = np.zeros((H, W), dtype=bool)
    starts: List[Coord] = []
    goals: List[Coord] = []
    for y, row in enumerate(text_rows):
        for x, ch in enumerate(row):
            kind = SYMBOLS.get(ch)
            if kind is None:
                raise MalformedGridError(f"Unknown symbol {ch!r} at {(x, y)}")
            walkable[y, x] = kind.walkable
            if kind is CellKind.START:
                starts.append((x, y))
            elif kind is CellKind.GOAL:
                goals.append((x, y))

    if not starts:
        raise MalformedGridError("No start marker '@' found")
    if len(starts) > 1:
        raise MalformedGridError(f"Expected exactly one start marker '@', found {len(starts)} at {starts}")

    walkable.setflags(write=False)
    return GridLayout(
        width=W,
        height=H,
        walkable=walkable,
        start=starts[0],
        goals=tuple(goals),
        rows=tuple(text_rows),
    )


def make_demo_layout(config: LayoutConfig = DEMO_LAYOUT) -> GridLayout:
    return parse_grid(config.ascii_rows)


__all__ = [
    "Coord",
    "CellKind",
    "DEMO_LAYOUT",
    "GridLayout",
    "LayoutConfig",
    "MalformedGridError",
    "make_demo_layout",
    "parse_grid",
]
