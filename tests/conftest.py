# tests/conftest.py
import pytest

from grid_layouts import parse_grid


@pytest.fixture
def single_goal_rows():
    return ["@.$"]


@pytest.fixture
def open_two_goal_rows():
    # start (0,0), goals (2,0) and (0,2)
    return [
        "@.$",
        "...",
        "$..",
    ]


@pytest.fixture
def detour_rows():
    # wall at (1,0) forces a detour to the left goal
    return [
        "$#@..$",
        "......",
    ]


@pytest.fixture
def pocket_rows():
    # goal at (3,1) is walled off
    return [
        "@.###",
        "..#$#",
        "..###",
    ]


@pytest.fixture
def three_goal_layout():
    return parse_grid(
        [
            "@...$",
            ".##..",
            "$.#..",
            "....$",
        ]
    )
