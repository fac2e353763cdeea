from rogulator.systems.geometry import manhattan
from rogulator.systems.pathfinding import find_path, next_step


def _open_grid(make_floor, w, h):
    return make_floor(["." * w for _ in range(h)])


def test_open_room_path_is_shortest_and_cardinal(make_floor):
    floor = _open_grid(make_floor, 5, 5)
    path = find_path(floor, (0, 0), (4, 4), 20, [])
    assert path is not None
    assert len(path) == 9
    assert path[0] == (0, 0)
    assert path[-1] == (4, 4)
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1


def test_blocking_every_neighbour_of_goal_yields_no_path(make_floor):
    floor = _open_grid(make_floor, 5, 5)
    goal = (2, 2)
    blocked = [(1, 2), (3, 2), (2, 1), (2, 3)]
    assert find_path(floor, (0, 0), goal, 20, blocked) is None


def test_path_routes_around_blocked_cells(make_floor):
    floor = _open_grid(make_floor, 5, 3)
    path = find_path(floor, (0, 1), (4, 1), 20, [(2, 1)])
    assert path is not None
    assert (2, 1) not in path
    assert len(path) == 7


def test_walls_are_impassable(make_floor):
    floor = make_floor([
        ".#.",
        ".#.",
        "...",
    ])
    path = find_path(floor, (0, 0), (2, 0))
    assert path == [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0)]


def test_unwalkable_goal_has_no_path(make_floor):
    floor = make_floor(["..#"])
    assert find_path(floor, (0, 0), (2, 0)) is None


def test_depth_bound_cuts_off_long_searches(make_floor):
    floor = make_floor(["." * 30])
    assert find_path(floor, (0, 0), (25, 0), max_depth=20) is None
    exact = find_path(floor, (0, 0), (20, 0), max_depth=20)
    assert exact is not None and len(exact) == 21
    longer = find_path(floor, (0, 0), (25, 0), max_depth=30)
    assert longer is not None and len(longer) == 26


def test_next_step_is_second_path_cell(make_floor):
    floor = _open_grid(make_floor, 5, 1)
    assert next_step(floor, (0, 0), (4, 0)) == (1, 0)
    assert next_step(floor, (2, 0), (2, 0)) is None
