from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from rogulator.state.entities import ItemTemplate

Pos = Tuple[int, int]


@dataclass
class Player:
    pos: Pos
    hp: int = 30
    max_hp: int = 30
    weapon: Optional[ItemTemplate] = None
    armor: Optional[ItemTemplate] = None
    trinket: Optional[ItemTemplate] = None  # reserved slot, nothing fills it yet
    gold: int = 0
    keys: int = 0
    has_macguffin: bool = False

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def weapon_bonus(self) -> int:
        return self.weapon.effect if self.weapon else 0

    @property
    def armor_bonus(self) -> int:
        return self.armor.effect if self.armor else 0


def create_player(pos: Pos, hp: int) -> Player:
    return Player(pos=pos, hp=hp, max_hp=hp)
