from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from rogulator.state.entities import Item, Macguffin, Monster

Pos = Tuple[int, int]

# Tile kinds
FLOOR = "floor"
WALL = "wall"
DOOR = "door"
STAIRS_DOWN = "stairs_down"
STAIRS_UP = "stairs_up"

# Room kinds ("corridor" is reserved; the generator never places one)
ENTRY = "entry"
EXIT = "exit"
CHAMBER = "chamber"
DEAD_END = "dead_end"
CORRIDOR = "corridor"


@dataclass
class Tile:
    kind: str = WALL
    explored: bool = False
    visible: bool = False

    @property
    def walkable(self) -> bool:
        return self.kind != WALL


def _make_grid(width: int, height: int, kind: str) -> List[List[Tile]]:
    return [[Tile(kind) for _ in range(width)] for _ in range(height)]


@dataclass(frozen=True)
class Room:
    id: str
    kind: str
    x: int
    y: int
    width: int
    height: int

    @property
    def center(self) -> Pos:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def contains(self, pos: Pos) -> bool:
        px, py = pos
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height


@dataclass
class Floor:
    """One dungeon level: the tile grid plus everything living on it.

    Monsters and items are keyed by instance id; dict order is spawn order,
    which is also the order monsters take their turns in.
    """
    number: int
    width: int
    height: int
    fill: str = WALL
    tiles: List[List[Tile]] = field(init=False)
    rooms: List[Room] = field(default_factory=list)
    monsters: Dict[str, Monster] = field(default_factory=dict)
    items: Dict[str, Item] = field(default_factory=dict)
    macguffin: Optional[Macguffin] = None
    down_stairs: Optional[Pos] = None

    def __post_init__(self) -> None:
        self.tiles = _make_grid(self.width, self.height, self.fill)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_tile(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self.tiles[y][x]

    def set_kind(self, x: int, y: int, kind: str) -> None:
        tile = self.get_tile(x, y)
        if tile:
            tile.kind = kind

    def kind_at(self, pos: Pos) -> Optional[str]:
        tile = self.get_tile(*pos)
        return tile.kind if tile else None

    def is_walkable(self, x: int, y: int) -> bool:
        tile = self.get_tile(x, y)
        return bool(tile and tile.walkable)

    def clear_visibility(self) -> None:
        for row in self.tiles:
            for tile in row:
                tile.visible = False

    # --- entity queries ---

    def monster_at(self, pos: Pos) -> Optional[Monster]:
        for monster in self.monsters.values():
            if monster.pos == pos and monster.alive:
                return monster
        return None

    def living_monsters(self) -> List[Monster]:
        return [m for m in self.monsters.values() if m.alive]

    def item_at(self, pos: Pos) -> Optional[Item]:
        for item in self.items.values():
            if item.pos == pos:
                return item
        return None

    def room_at(self, pos: Pos) -> Optional[Room]:
        for room in self.rooms:
            if room.contains(pos):
                return room
        return None

    def first_room_of_kind(self, kind: str) -> Optional[Room]:
        for room in self.rooms:
            if room.kind == kind:
                return room
        return None
