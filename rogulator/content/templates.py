"""YAML-backed template registry for monsters, items and macguffins."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, TypeVar

import yaml

from rogulator.log import get_logger
from rogulator.state.entities import (
    ITEM_TYPES,
    MACGUFFIN_QUIRKS,
    MONSTER_BEHAVIORS,
    MONSTER_DISPOSITIONS,
    ItemTemplate,
    MacguffinTemplate,
    MonsterTemplate,
)

logger = get_logger(__name__)

CONTENT_DIR = Path(__file__).resolve().parent

T = TypeVar("T")


def _build_monster(entry: dict) -> MonsterTemplate:
    speed = float(entry.get("speed", 1.0))
    if not 0.0 <= speed <= 1.0:
        raise ValueError(f"Monster {entry.get('id')!r} speed {speed} outside 0..1")
    behavior = entry.get("behavior", "aggressive")
    if behavior not in MONSTER_BEHAVIORS:
        raise ValueError(f"Monster {entry.get('id')!r} has unknown behavior {behavior!r}")
    disposition = entry.get("disposition", "hostile")
    if disposition not in MONSTER_DISPOSITIONS:
        raise ValueError(f"Monster {entry.get('id')!r} has unknown disposition {disposition!r}")
    return MonsterTemplate(
        id=entry["id"],
        name=entry["name"],
        hp=int(entry["hp"]),
        damage=int(entry.get("damage", 1)),
        speed=speed,
        behavior=behavior,
        disposition=disposition,
        glyph=entry.get("glyph", "m"),
        color=entry.get("color", "#FF7878"),
        ai_seed=entry.get("ai_seed"),
    )


def _build_item(entry: dict) -> ItemTemplate:
    item_type = entry["type"]
    if item_type not in ITEM_TYPES:
        raise ValueError(f"Item {entry.get('id')!r} has unknown type {item_type!r}")
    return ItemTemplate(
        id=entry["id"],
        name=entry["name"],
        type=item_type,
        effect=int(entry.get("effect", 0)),
        glyph=entry.get("glyph", "?"),
        color=entry.get("color", "#FFFFFF"),
        ai_seed=entry.get("ai_seed"),
    )


def _build_macguffin(entry: dict) -> MacguffinTemplate:
    quirk = entry.get("quirk")
    if quirk is not None and quirk not in MACGUFFIN_QUIRKS:
        raise ValueError(f"Macguffin {entry.get('id')!r} has unknown quirk {quirk!r}")
    return MacguffinTemplate(
        id=entry["id"],
        name=entry["name"],
        description=entry.get("description", ""),
        glyph=entry.get("glyph", "*"),
        color=entry.get("color", "#FFFFFF"),
        quirk=quirk,
        ai_seed=entry.get("ai_seed"),
    )


def _load(path: Path, build: Callable[[dict], T]) -> Dict[str, T]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Template file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    if not isinstance(data, list):
        raise ValueError(f"Template file malformed (expected a list): {path}")
    templates: Dict[str, T] = {}
    for entry in data:
        if not isinstance(entry, dict) or "id" not in entry:
            raise ValueError(f"Template entry without an id in {path}: {entry!r}")
        try:
            tmpl = build(entry)
        except KeyError as exc:
            raise ValueError(f"Template {entry['id']!r} in {path} is missing field {exc}") from exc
        templates[entry["id"]] = tmpl
    logger.debug("loaded %d templates from %s", len(templates), path)
    return templates


@dataclass
class TemplateRegistry:
    monsters: Dict[str, MonsterTemplate] = field(default_factory=dict)
    items: Dict[str, ItemTemplate] = field(default_factory=dict)
    macguffins: Dict[str, MacguffinTemplate] = field(default_factory=dict)

    def monster(self, tmpl_id: str) -> MonsterTemplate:
        return _lookup(self.monsters, tmpl_id, "monster")

    def item(self, tmpl_id: str) -> ItemTemplate:
        return _lookup(self.items, tmpl_id, "item")

    def macguffin(self, tmpl_id: str) -> MacguffinTemplate:
        return _lookup(self.macguffins, tmpl_id, "macguffin")

    # Lists keep YAML order so seeded picks stay stable.
    def monster_list(self) -> List[MonsterTemplate]:
        return list(self.monsters.values())

    def item_list(self) -> List[ItemTemplate]:
        return list(self.items.values())

    def macguffin_list(self) -> List[MacguffinTemplate]:
        return list(self.macguffins.values())


def _lookup(table: Dict[str, T], tmpl_id: str, what: str) -> T:
    if tmpl_id not in table:
        raise KeyError(f"Unknown {what} template id {tmpl_id!r}")
    return table[tmpl_id]


def load_templates(content_dir: Path | str | None = None) -> TemplateRegistry:
    """Load all three template files from a content directory."""
    root = Path(content_dir) if content_dir is not None else CONTENT_DIR
    return TemplateRegistry(
        monsters=_load(root / "monsters.yaml", _build_monster),
        items=_load(root / "items.yaml", _build_item),
        macguffins=_load(root / "macguffins.yaml", _build_macguffin),
    )


_DEFAULT_REGISTRY: Optional[TemplateRegistry] = None


def default_templates() -> TemplateRegistry:
    """The shipped content, loaded once per process."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = load_templates()
    return _DEFAULT_REGISTRY
