"""Floor generation: typed rooms joined by L-shaped corridors, then populated."""
from __future__ import annotations

import itertools
from typing import Callable, List, Optional, Tuple

from rogulator.config import ROOM_SIZES, GameConfig, RunConfig
from rogulator.content.templates import TemplateRegistry, default_templates
from rogulator.log import get_logger
from rogulator.rng import RNG
from rogulator.state.entities import spawn_item, spawn_macguffin, spawn_monster
from rogulator.state.world import (
    CHAMBER,
    DEAD_END,
    ENTRY,
    EXIT,
    FLOOR,
    STAIRS_DOWN,
    WALL,
    Floor,
    Room,
)

logger = get_logger(__name__)

Pos = Tuple[int, int]
Rect = Tuple[int, int, int, int]  # x, y, w, h


def _id_counter() -> Callable[[str], str]:
    ids = itertools.count(1)
    return lambda prefix: f"{prefix}_{next(ids)}"


def carve_room(floor: Floor, rect: Rect) -> None:
    x, y, w, h = rect
    for yy in range(y, y + h):
        for xx in range(x, x + w):
            floor.set_kind(xx, yy, FLOOR)


def carve_h_tunnel(floor: Floor, x1: int, x2: int, y: int) -> None:
    for xx in range(min(x1, x2), max(x1, x2) + 1):
        floor.set_kind(xx, y, FLOOR)


def carve_v_tunnel(floor: Floor, y1: int, y2: int, x: int) -> None:
    for yy in range(min(y1, y2), max(y1, y2) + 1):
        floor.set_kind(x, yy, FLOOR)


def carve_corridor(floor: Floor, start: Pos, end: Pos) -> None:
    """Horizontal leg first, then vertical."""
    (x1, y1), (x2, y2) = start, end
    carve_h_tunnel(floor, x1, x2, y1)
    carve_v_tunnel(floor, y1, y2, x2)


def rects_overlap(a: Rect, b: Rect, padding: int) -> bool:
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return not (
        ax + aw + padding < bx
        or bx + bw + padding < ax
        or ay + ah + padding < by
        or by + bh + padding < ay
    )


def room_kind_sequence(rooms_per_floor: int, rng: RNG, chamber_chance: float = 0.7) -> List[str]:
    kinds = [ENTRY, EXIT]
    for _ in range(2, rooms_per_floor):
        kinds.append(CHAMBER if rng.chance(chamber_chance) else DEAD_END)
    return kinds


def try_place_room(
    kind: str, placed: List[Rect], floor: Floor, rng: RNG, cfg: GameConfig
) -> Optional[Rect]:
    size = ROOM_SIZES[kind]
    for _ in range(cfg.room_placement_attempts):
        w = rng.randint(size.min_w, size.max_w)
        h = rng.randint(size.min_h, size.max_h)
        x = rng.randint(1, floor.width - w - 1)
        y = rng.randint(1, floor.height - h - 1)
        candidate = (x, y, w, h)
        if not any(rects_overlap(candidate, other, cfg.room_padding) for other in placed):
            return candidate
    return None


def random_interior_pos(room: Room, rng: RNG) -> Pos:
    return (
        rng.randint(room.x + 1, room.x + room.width - 2),
        rng.randint(room.y + 1, room.y + room.height - 2),
    )


def generate_floor(
    floor_number: int,
    run_config: RunConfig,
    rng: RNG,
    cfg: Optional[GameConfig] = None,
    templates: Optional[TemplateRegistry] = None,
    new_id: Optional[Callable[[str], str]] = None,
) -> Tuple[Floor, Pos]:
    """Build a floor and return it with the player's start position.

    Never fails: rooms that cannot be placed within the retry budget are
    skipped, and spawns that land on a non-floor tile are dropped.
    """
    cfg = cfg or GameConfig()
    templates = templates or default_templates()
    new_id = new_id or _id_counter()

    floor = Floor(number=floor_number, width=cfg.floor_width, height=cfg.floor_height, fill=WALL)

    # --- rooms ---
    placed: List[Rect] = []
    kinds = room_kind_sequence(run_config.rooms_per_floor, rng, cfg.chamber_chance)
    for kind in kinds:
        rect = try_place_room(kind, placed, floor, rng, cfg)
        if rect is None:
            logger.debug("floor %d: no space for %s room after %d attempts",
                         floor_number, kind, cfg.room_placement_attempts)
            continue
        carve_room(floor, rect)
        placed.append(rect)
        x, y, w, h = rect
        floor.rooms.append(Room(new_id("room"), kind, x, y, w, h))

    if not floor.rooms:
        # Degenerate floor: a single open tile in the middle.
        start = (floor.width // 2, floor.height // 2)
        floor.set_kind(*start, FLOOR)
        logger.warning("floor %d: no rooms placed", floor_number)
        return floor, start

    # --- corridors, in placement order ---
    for prev, room in zip(floor.rooms, floor.rooms[1:]):
        carve_corridor(floor, prev.center, room.center)

    entry_room = floor.first_room_of_kind(ENTRY) or floor.rooms[0]
    exit_room = floor.first_room_of_kind(EXIT) or floor.rooms[-1]

    stairs = exit_room.center
    floor.set_kind(*stairs, STAIRS_DOWN)
    floor.down_stairs = stairs
    start = entry_room.center

    # --- population ---
    others = [r for r in floor.rooms if r is not entry_room]

    monster_pool = templates.monster_list()
    for room in others:
        if not rng.chance(cfg.monster_spawn_chance):
            continue
        tmpl = rng.choice(monster_pool)
        pos = random_interior_pos(room, rng)
        if floor.kind_at(pos) == FLOOR:
            mob = spawn_monster(new_id("monster"), tmpl, pos)
            floor.monsters[mob.id] = mob

    item_pool = templates.item_list()
    item_count = rng.randint(cfg.items_per_floor_min, cfg.items_per_floor_max)
    for _ in range(item_count):
        if not others:
            break
        room = rng.choice(others)
        tmpl = rng.choice(item_pool)
        pos = random_interior_pos(room, rng)
        if floor.kind_at(pos) == FLOOR:
            item = spawn_item(new_id("item"), tmpl, pos)
            floor.items[item.id] = item

    if floor_number == 1:
        tmpl = rng.choice(templates.macguffin_list())
        pos = random_interior_pos(exit_room, rng)
        if floor.kind_at(pos) != FLOOR:
            pos = (pos[0] + 1, pos[1])
        if floor.kind_at(pos) == FLOOR:
            floor.macguffin = spawn_macguffin(new_id("macguffin"), tmpl, pos)

    logger.debug(
        "floor %d: %d/%d rooms, %d monsters, %d items, macguffin=%s",
        floor_number, len(floor.rooms), len(kinds), len(floor.monsters), len(floor.items),
        floor.macguffin.name if floor.macguffin else None,
    )
    return floor, start
