import numpy as np
import pytest

from grid_layouts import (
    DEMO_LAYOUT,
    CellKind,
    MalformedGridError,
    make_demo_layout,
    parse_grid,
)


def test_parse_grid_extracts_start_goals_and_walls(detour_rows):
    layout = parse_grid(detour_rows)

    assert (layout.width, layout.height) == (6, 2)
    assert layout.start == (2, 0)
    assert layout.goals == ((0, 0), (5, 0))
    assert layout.walkable.dtype == np.bool_
    assert layout.walkable.shape == (2, 6)
    assert not layout.is_walkable((1, 0))
    assert layout.is_walkable((2, 0))  # start is walkable
    assert layout.is_walkable((0, 0))  # goal is walkable
    assert not layout.is_walkable((6, 0))
    assert layout.kind_at((1, 0)) is CellKind.BLOCKED
    assert layout.kind_at((5, 0)) is CellKind.GOAL


def test_parse_grid_accepts_symbol_lists_and_text():
    from_lists = parse_grid([["@", "."], ["#", "$"]])
    from_text = parse_grid("@.\n#$\n")

    assert from_lists.rows == from_text.rows == ("@.", "#$")
    assert from_lists.start == from_text.start == (0, 0)
    assert from_lists.goals == from_text.goals == ((1, 1),)


def test_goals_in_row_major_order(three_goal_layout):
    assert three_goal_layout.goals == ((4, 0), (0, 2), (4, 3))
    assert three_goal_layout.landmarks[0] == three_goal_layout.start


def test_walkable_map_is_read_only(single_goal_rows):
    layout = parse_grid(single_goal_rows)
    with pytest.raises(ValueError):
        layout.walkable[0, 0] = False


@pytest.mark.parametrize(
    "rows, fragment",
    [
        (["@.$", "@.."], "exactly one start"),
        (["..$", "..."], "No start"),
        (["@..", ".."], "Row 1 expected width 3"),
        ([], "empty"),
        ([""], "empty"),
        (["@.x"], "Unknown symbol 'x'"),
    ],
)
def test_malformed_grids_raise(rows, fragment):
    with pytest.raises(MalformedGridError, match=fragment):
        parse_grid(rows)


def test_malformed_grid_error_is_value_error():
    assert issubclass(MalformedGridError, ValueError)


def test_demo_layout_parses():
    layout = make_demo_layout()

    assert (layout.width, layout.height) == (25, 25)
    assert layout.start == (2, 23)
    assert layout.goals == ((9, 3), (22, 6), (15, 15), (18, 19))
    assert len(DEMO_LAYOUT.ascii_rows) == 25

