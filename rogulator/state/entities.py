"""Content templates and the live instances spawned from them.

A template is immutable content loaded from YAML. An instance references its
template and adds the per-spawn mutable fields (id, position, hp, ...).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Pos = Tuple[int, int]

MONSTER_BEHAVIORS = ("aggressive", "passive", "fleeing", "stationary")
MONSTER_DISPOSITIONS = ("hostile", "neutral", "friendly")
ITEM_TYPES = ("weapon", "armor", "consumable", "key", "gold")
MACGUFFIN_QUIRKS = ("fragile", "glowing", "heavy", "attracts_enemies")


@dataclass(frozen=True)
class MonsterTemplate:
    id: str
    name: str
    hp: int
    damage: int
    speed: float  # chance to act each turn, 0..1
    behavior: str = "aggressive"
    disposition: str = "hostile"
    glyph: str = "m"
    color: str = "#FF7878"
    ai_seed: Optional[str] = None


@dataclass(frozen=True)
class ItemTemplate:
    id: str
    name: str
    type: str
    effect: int  # damage for weapons, defense for armor, heal for consumables, amount for gold
    glyph: str = "?"
    color: str = "#FFFFFF"
    ai_seed: Optional[str] = None


@dataclass(frozen=True)
class MacguffinTemplate:
    id: str
    name: str
    description: str
    glyph: str = "*"
    color: str = "#FFFFFF"
    quirk: Optional[str] = None
    ai_seed: Optional[str] = None


@dataclass
class Monster:
    id: str
    template: MonsterTemplate
    pos: Pos
    hp: int

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def damage(self) -> int:
        return self.template.damage

    @property
    def speed(self) -> float:
        return self.template.speed

    @property
    def behavior(self) -> str:
        return self.template.behavior

    @property
    def alive(self) -> bool:
        return self.hp > 0


@dataclass
class Item:
    id: str
    template: ItemTemplate
    pos: Pos

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def type(self) -> str:
        return self.template.type

    @property
    def effect(self) -> int:
        return self.template.effect


@dataclass
class Macguffin:
    id: str
    template: MacguffinTemplate
    pos: Pos
    collected: bool = False

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def description(self) -> str:
        return self.template.description


def spawn_monster(instance_id: str, template: MonsterTemplate, pos: Pos) -> Monster:
    return Monster(id=instance_id, template=template, pos=pos, hp=template.hp)


def spawn_item(instance_id: str, template: ItemTemplate, pos: Pos) -> Item:
    return Item(id=instance_id, template=template, pos=pos)


def spawn_macguffin(instance_id: str, template: MacguffinTemplate, pos: Pos) -> Macguffin:
    return Macguffin(id=instance_id, template=template, pos=pos)
