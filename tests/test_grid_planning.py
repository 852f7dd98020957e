import pytest

from grid_layouts import make_demo_layout, parse_grid
from grid_planning import PathFinder, astar, bfs, get_finder, manhattan, path_length, path_to_actions


@pytest.mark.parametrize("finder", [astar, bfs])
def test_finder_detours_around_wall(finder, detour_rows):
    layout = parse_grid(detour_rows)
    path = finder(layout.walkable, (2, 0), (0, 0))

    assert path[0] == (2, 0) and path[-1] == (0, 0)
    assert path_length(path) == 4
    assert all(layout.is_walkable(c) for c in path)
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1


@pytest.mark.parametrize("finder", [astar, bfs])
def test_finder_returns_none_when_unreachable(finder, pocket_rows):
    layout = parse_grid(pocket_rows)
    assert finder(layout.walkable, layout.start, (3, 1)) is None


@pytest.mark.parametrize("finder", [astar, bfs])
def test_finder_rejects_blocked_or_outside_endpoints(finder, detour_rows):
    layout = parse_grid(detour_rows)
    assert finder(layout.walkable, (2, 0), (1, 0)) is None
    assert finder(layout.walkable, (2, 0), (9, 9)) is None


def test_finder_same_cell():
    layout = parse_grid(["@$"])
    assert astar(layout.walkable, (0, 0), (0, 0)) == [(0, 0)]
    assert bfs(layout.walkable, (0, 0), (0, 0)) == [(0, 0)]


def test_astar_and_bfs_agree_on_demo_layout():
    layout = make_demo_layout()
    points = layout.landmarks
    for a in points:
        for b in points:
            assert path_length(astar(layout.walkable, a, b)) == path_length(bfs(layout.walkable, a, b))


def test_path_to_actions():
    assert path_to_actions([(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]) == ["E", "S", "W", "N"]
    assert path_to_actions([(0, 0)]) == []


def test_get_finder():
    assert get_finder("astar") is astar
    assert get_finder("BFS") is bfs
    with pytest.raises(ValueError, match="Unknown path finder"):
        get_finder("dijkstra")


def test_finders_satisfy_path_finder_protocol():
    assert isinstance(astar, PathFinder)
    assert isinstance(bfs, PathFinder)
    assert not isinstance("astar", PathFinder)
