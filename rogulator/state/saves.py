"""Save/load helpers: GameState <-> plain JSON-compatible dicts.

Templates are embedded in the blob so a save loads without the content
registry. Per-turn ``visible`` flags are not stored; resume the game and the
engine recomputes them.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from rogulator.config import RunConfig
from rogulator.state.actors import Player
from rogulator.state.entities import (
    Item,
    ItemTemplate,
    Macguffin,
    MacguffinTemplate,
    Monster,
    MonsterTemplate,
)
from rogulator.state.game_state import GameMessage, GameState, MessageLog
from rogulator.state.world import DOOR, FLOOR, STAIRS_DOWN, STAIRS_UP, WALL, Floor, Room

SAVE_VERSION = 1

_KIND_TO_CHAR = {FLOOR: ".", WALL: "#", DOOR: "+", STAIRS_DOWN: ">", STAIRS_UP: "<"}
_CHAR_TO_KIND = {v: k for k, v in _KIND_TO_CHAR.items()}


def _pos(value) -> tuple:
    return (int(value[0]), int(value[1]))


def _template(tmpl) -> Optional[Dict[str, Any]]:
    return asdict(tmpl) if tmpl is not None else None


def _save_floor(floor: Floor) -> Dict[str, Any]:
    return {
        "number": floor.number,
        "width": floor.width,
        "height": floor.height,
        "tiles": ["".join(_KIND_TO_CHAR[t.kind] for t in row) for row in floor.tiles],
        "explored": ["".join("1" if t.explored else "0" for t in row) for row in floor.tiles],
        "rooms": [asdict(r) for r in floor.rooms],
        "monsters": [
            {"id": m.id, "template": asdict(m.template), "pos": list(m.pos), "hp": m.hp}
            for m in floor.monsters.values()
        ],
        "items": [
            {"id": i.id, "template": asdict(i.template), "pos": list(i.pos)}
            for i in floor.items.values()
        ],
        "macguffin": (
            {
                "id": floor.macguffin.id,
                "template": asdict(floor.macguffin.template),
                "pos": list(floor.macguffin.pos),
                "collected": floor.macguffin.collected,
            }
            if floor.macguffin
            else None
        ),
        "down_stairs": list(floor.down_stairs) if floor.down_stairs else None,
    }


def _load_floor(data: Dict[str, Any]) -> Floor:
    floor = Floor(number=data["number"], width=data["width"], height=data["height"])
    for y, (row, seen) in enumerate(zip(data["tiles"], data["explored"])):
        for x, (ch, flag) in enumerate(zip(row, seen)):
            try:
                kind = _CHAR_TO_KIND[ch]
            except KeyError:
                raise ValueError(f"Unknown tile {ch!r} at {(x, y)} in save") from None
            tile = floor.tiles[y][x]
            tile.kind = kind
            tile.explored = flag == "1"
    floor.rooms = [Room(**r) for r in data.get("rooms", [])]
    for m in data.get("monsters", []):
        mob = Monster(m["id"], MonsterTemplate(**m["template"]), _pos(m["pos"]), m["hp"])
        floor.monsters[mob.id] = mob
    for i in data.get("items", []):
        item = Item(i["id"], ItemTemplate(**i["template"]), _pos(i["pos"]))
        floor.items[item.id] = item
    mg = data.get("macguffin")
    if mg:
        floor.macguffin = Macguffin(
            mg["id"], MacguffinTemplate(**mg["template"]), _pos(mg["pos"]), mg.get("collected", False)
        )
    if data.get("down_stairs"):
        floor.down_stairs = _pos(data["down_stairs"])
    return floor


def save_game(state: GameState) -> Dict[str, Any]:
    player = state.player
    return {
        "version": SAVE_VERSION,
        "run_id": state.run_id,
        "config": asdict(state.config),
        "player": {
            "pos": list(player.pos),
            "hp": player.hp,
            "max_hp": player.max_hp,
            "weapon": _template(player.weapon),
            "armor": _template(player.armor),
            "trinket": _template(player.trinket),
            "gold": player.gold,
            "keys": player.keys,
            "has_macguffin": player.has_macguffin,
        },
        "floor": _save_floor(state.floor),
        "floor_number": state.floor_number,
        "turn": state.turn,
        "status": state.status,
        "messages": {
            "capacity": state.messages.capacity,
            "entries": [asdict(m) for m in state.messages],
        },
        "current_room_id": state.current_room_id,
        "previous_room_id": state.previous_room_id,
        "monsters_defeated": state.monsters_defeated,
        "killed_by": state.killed_by,
    }


def load_game(data: Dict[str, Any]) -> GameState:
    if data.get("version") != SAVE_VERSION:
        raise ValueError(f"Unsupported save version {data.get('version')!r}")

    def item_tmpl(raw: Optional[Dict[str, Any]]) -> Optional[ItemTemplate]:
        return ItemTemplate(**raw) if raw else None

    p = data["player"]
    player = Player(
        pos=_pos(p["pos"]),
        hp=p["hp"],
        max_hp=p["max_hp"],
        weapon=item_tmpl(p.get("weapon")),
        armor=item_tmpl(p.get("armor")),
        trinket=item_tmpl(p.get("trinket")),
        gold=p.get("gold", 0),
        keys=p.get("keys", 0),
        has_macguffin=p.get("has_macguffin", False),
    )
    log = data.get("messages", {})
    entries: List[GameMessage] = [GameMessage(**m) for m in log.get("entries", [])]
    return GameState(
        run_id=data["run_id"],
        config=RunConfig(**data["config"]),
        player=player,
        floor=_load_floor(data["floor"]),
        floor_number=data.get("floor_number", 1),
        turn=data.get("turn", 0),
        status=data["status"],
        messages=MessageLog(log.get("capacity", 50), entries),
        current_room_id=data.get("current_room_id"),
        previous_room_id=data.get("previous_room_id"),
        monsters_defeated=data.get("monsters_defeated", 0),
        killed_by=data.get("killed_by"),
    )
