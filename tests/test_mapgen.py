from collections import deque

import pytest

from rogulator import mapgen
from rogulator.config import GameConfig, get_run_config
from rogulator.mapgen import carve_corridor, generate_floor, rects_overlap, room_kind_sequence
from rogulator.rng import new_rng
from rogulator.state.world import CHAMBER, DEAD_END, ENTRY, EXIT, FLOOR, STAIRS_DOWN, WALL, Floor

SEEDS = [1, 2, 3, 42, 1337, 9001]


def _generate(seed, size="quick", floor_number=1):
    return generate_floor(floor_number, get_run_config(size), new_rng(seed))


def _flood(floor, start):
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if (nx, ny) in seen or not floor.is_walkable(nx, ny):
                continue
            seen.add((nx, ny))
            queue.append((nx, ny))
    return seen


@pytest.mark.parametrize("seed", SEEDS)
def test_every_room_center_reachable_from_entry(seed):
    floor, start = _generate(seed, "medium")
    reachable = _flood(floor, start)
    for room in floor.rooms:
        assert room.center in reachable


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_do_not_overlap_with_padding(seed):
    floor, _ = _generate(seed, "medium")
    cfg = GameConfig()
    rects = [(r.x, r.y, r.width, r.height) for r in floor.rooms]
    for i, a in enumerate(rects):
        for b in rects[i + 1:]:
            assert not rects_overlap(a, b, cfg.room_padding)


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_stay_inside_the_outer_wall(seed):
    floor, _ = _generate(seed)
    for room in floor.rooms:
        assert room.x >= 1 and room.y >= 1
        assert room.x + room.width <= floor.width - 1
        assert room.y + room.height <= floor.height - 1


@pytest.mark.parametrize("seed", SEEDS)
def test_start_and_stairs_positions(seed):
    floor, start = _generate(seed)
    entry = floor.first_room_of_kind(ENTRY) or floor.rooms[0]
    exit_room = floor.first_room_of_kind(EXIT) or floor.rooms[-1]
    assert start == entry.center
    assert floor.down_stairs == exit_room.center
    assert floor.kind_at(exit_room.center) == STAIRS_DOWN


@pytest.mark.parametrize("seed", SEEDS)
def test_population_skips_entry_room(seed):
    floor, _ = _generate(seed, "medium")
    entry = floor.first_room_of_kind(ENTRY)
    for mob in floor.monsters.values():
        assert not entry.contains(mob.pos)
        assert floor.kind_at(mob.pos) == FLOOR
        assert mob.hp == mob.template.hp
    assert 0 <= len(floor.items) <= 2
    for item in floor.items.values():
        assert not entry.contains(item.pos)
        assert floor.kind_at(item.pos) == FLOOR


@pytest.mark.parametrize("seed", SEEDS)
def test_first_floor_has_one_macguffin_in_exit_room(seed):
    floor, _ = _generate(seed)
    exit_room = floor.first_room_of_kind(EXIT) or floor.rooms[-1]
    assert floor.macguffin is not None
    assert not floor.macguffin.collected
    assert exit_room.contains(floor.macguffin.pos)
    assert floor.kind_at(floor.macguffin.pos) == FLOOR


@pytest.mark.parametrize("seed", SEEDS)
def test_macguffin_sampled_on_the_stairs_shifts_east(seed, monkeypatch):
    monkeypatch.setattr(mapgen, "random_interior_pos", lambda room, rng: room.center)
    floor, _ = _generate(seed)
    sx, sy = floor.down_stairs
    assert floor.macguffin is not None
    assert floor.macguffin.pos == (sx + 1, sy)
    assert floor.kind_at(floor.macguffin.pos) == FLOOR
    assert floor.kind_at(floor.down_stairs) == STAIRS_DOWN


def test_later_floors_have_no_macguffin():
    floor, _ = _generate(5, "short", floor_number=2)
    assert floor.number == 2
    assert floor.macguffin is None


def test_same_seed_same_floor():
    a, start_a = _generate(77)
    b, start_b = _generate(77)
    assert start_a == start_b
    assert a.rooms == b.rooms
    assert [(m.id, m.pos) for m in a.monsters.values()] == [(m.id, m.pos) for m in b.monsters.values()]
    assert [[t.kind for t in row] for row in a.tiles] == [[t.kind for t in row] for row in b.tiles]


def test_instance_ids_are_unique():
    floor, _ = _generate(11, "medium")
    ids = [r.id for r in floor.rooms] + list(floor.monsters) + list(floor.items)
    if floor.macguffin:
        ids.append(floor.macguffin.id)
    assert len(ids) == len(set(ids))


def test_room_kind_sequence_starts_with_entry_and_exit():
    kinds = room_kind_sequence(6, new_rng(3))
    assert kinds[:2] == [ENTRY, EXIT]
    assert len(kinds) == 6
    assert set(kinds[2:]) <= {CHAMBER, DEAD_END}


def test_tiles_start_unexplored():
    floor, _ = _generate(8)
    assert not any(t.explored or t.visible for row in floor.tiles for t in row)


def test_corridor_goes_horizontal_then_vertical():
    floor = Floor(number=1, width=10, height=10, fill=WALL)
    carve_corridor(floor, (1, 1), (5, 6))
    assert all(floor.kind_at((x, 1)) == FLOOR for x in range(1, 6))
    assert all(floor.kind_at((5, y)) == FLOOR for y in range(1, 7))
    assert floor.kind_at((1, 6)) == WALL


def test_overlap_padding():
    assert rects_overlap((0, 0, 5, 5), (6, 0, 5, 5), padding=2)
    assert not rects_overlap((0, 0, 5, 5), (8, 0, 5, 5), padding=2)


def test_crowded_floor_degrades_without_failing():
    cfg = GameConfig(floor_width=12, floor_height=12, room_placement_attempts=5)
    floor, start = generate_floor(1, get_run_config("medium"), new_rng(4), cfg)
    assert 1 <= len(floor.rooms) < 6
    assert floor.is_walkable(*start)
