from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass
class GameConfig:
    # view (pygame front end)
    view_width: int = 1024
    view_height: int = 480
    tile_size: int = 24
    viewport_tiles_w: int = 21  # odd so the player sits in the middle
    viewport_tiles_h: int = 15
    seed: int | None = None
    log_level: str = "INFO"

    # player
    player_starting_hp: int = 30
    player_base_damage: int = 2

    # healing
    heal_amount: int = 1
    heal_interval_moving: int = 10  # heal every N turns while moving
    heal_interval_resting: int = 3  # heal every N turns while resting

    # combat
    min_damage: int = 1  # floor after armor reduction

    # visibility / awareness
    view_radius: int = 8
    monster_detection_range: float = 8.0

    # generation
    floor_width: int = 50
    floor_height: int = 40
    monster_spawn_chance: float = 0.5
    items_per_floor_min: int = 1
    items_per_floor_max: int = 2
    room_placement_attempts: int = 30
    room_padding: int = 2
    chamber_chance: float = 0.7  # remaining filler rooms are dead ends

    # pathfinding
    pathfinding_max_depth: int = 20

    # messages
    max_messages: int = 50

    # narrative snapshot
    narrative_monster_radius: int = 5
    narrative_recent_events: int = 3


@dataclass(frozen=True)
class RunConfig:
    size: str
    floors: int
    rooms_per_floor: int
    threads_max: int = 0


RUN_CONFIGS: Dict[str, RunConfig] = {
    "quick": RunConfig("quick", floors=1, rooms_per_floor=5, threads_max=0),
    "short": RunConfig("short", floors=3, rooms_per_floor=5, threads_max=1),
    "medium": RunConfig("medium", floors=6, rooms_per_floor=6, threads_max=2),
    "long": RunConfig("long", floors=12, rooms_per_floor=5, threads_max=3),
    "epic": RunConfig("epic", floors=20, rooms_per_floor=5, threads_max=5),
}


@dataclass(frozen=True)
class RoomSize:
    min_w: int
    max_w: int
    min_h: int
    max_h: int


ROOM_SIZES: Dict[str, RoomSize] = {
    "entry": RoomSize(5, 7, 5, 7),
    "exit": RoomSize(5, 7, 5, 7),
    "corridor": RoomSize(3, 3, 5, 9),
    "chamber": RoomSize(5, 9, 5, 9),
    "dead_end": RoomSize(4, 5, 4, 5),
}


def get_run_config(size: str) -> RunConfig:
    try:
        return RUN_CONFIGS[size]
    except KeyError:
        raise ValueError(f"Unknown run size {size!r}; expected one of {sorted(RUN_CONFIGS)}") from None
