"""Shared test fixtures."""
from typing import Callable, List, Optional, Sequence

import pytest

from rogulator.config import GameConfig, get_run_config
from rogulator.game import Game
from rogulator.rng import RNG, new_rng
from rogulator.state.actors import create_player
from rogulator.state.entities import ItemTemplate, MonsterTemplate, spawn_item, spawn_monster
from rogulator.state.game_state import GameState, MessageLog
from rogulator.state.world import FLOOR, STAIRS_DOWN, WALL, Floor

_ASCII_KINDS = {"#": WALL, ".": FLOOR, ">": STAIRS_DOWN}


@pytest.fixture()
def rng() -> RNG:
    """Seeded random source."""
    return new_rng(1234)


@pytest.fixture()
def make_floor() -> Callable[[Sequence[str]], Floor]:
    """Build a Floor from ASCII rows ('#' wall, '.' floor, '>' stairs down)."""

    def _make(rows: Sequence[str]) -> Floor:
        floor = Floor(number=1, width=len(rows[0]), height=len(rows))
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                floor.set_kind(x, y, _ASCII_KINDS[ch])
                if ch == ">":
                    floor.down_stairs = (x, y)
        return floor

    return _make


@pytest.fixture()
def monster_template() -> Callable[..., MonsterTemplate]:
    def _tmpl(
        name: str = "Rat",
        hp: int = 4,
        damage: int = 1,
        speed: float = 1.0,
        behavior: str = "aggressive",
    ) -> MonsterTemplate:
        return MonsterTemplate(
            id=name.lower(), name=name, hp=hp, damage=damage, speed=speed, behavior=behavior
        )

    return _tmpl


@pytest.fixture()
def item_template() -> Callable[..., ItemTemplate]:
    def _tmpl(name: str, type: str, effect: int) -> ItemTemplate:
        return ItemTemplate(id=name.lower().replace(" ", "_"), name=name, type=type, effect=effect)

    return _tmpl


@pytest.fixture()
def add_monster(monster_template):
    """Put a monster on a floor: add_monster(floor, pos, **template_fields)."""
    counter = iter(range(1, 1000))

    def _add(floor: Floor, pos, **fields):
        mob = spawn_monster(f"monster_t{next(counter)}", monster_template(**fields), pos)
        floor.monsters[mob.id] = mob
        return mob

    return _add


@pytest.fixture()
def add_item(item_template):
    counter = iter(range(1, 1000))

    def _add(floor: Floor, pos, name: str, type: str, effect: int):
        item = spawn_item(f"item_t{next(counter)}", item_template(name, type, effect), pos)
        floor.items[item.id] = item
        return item

    return _add


@pytest.fixture()
def make_game(rng) -> Callable[..., Game]:
    """A Game resumed on a hand-built floor."""

    def _make(
        floor: Floor,
        player_pos,
        hp: Optional[int] = None,
        cfg: Optional[GameConfig] = None,
        narrator=None,
    ) -> Game:
        cfg = cfg or GameConfig()
        player = create_player(player_pos, cfg.player_starting_hp)
        if hp is not None:
            player.hp = hp
        state = GameState(
            run_id="run-test",
            config=get_run_config("quick"),
            player=player,
            floor=floor,
            messages=MessageLog(cfg.max_messages),
        )
        room = floor.room_at(player_pos)
        state.current_room_id = room.id if room else None
        game = Game(cfg, rng, narrator=narrator)
        game.resume(state)
        return game

    return _make


@pytest.fixture()
def open_room(make_floor) -> Floor:
    """7x5 floor: a 5x3 walkable interior walled in."""
    rows: List[str] = [
        "#######",
        "#.....#",
        "#.....#",
        "#.....#",
        "#######",
    ]
    return make_floor(rows)
