"""Boundary with an optional narrative (flavor text) collaborator.

The engine never depends on a narrator: it hands over a JSON-serializable
snapshot and accepts a string back, or nothing. No text-generation client
ships here; anything implementing :class:`Narrator` can be plugged in.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Protocol

from rogulator.state.game_state import GameState

# Events the engine reports
ROOM_ENTERED = "room_entered"
MACGUFFIN_PICKUP = "macguffin_pickup"
VICTORY = "victory"
DEFEAT = "defeat"
MONSTER_SLAIN = "monster_slain"

SYSTEM_PROMPT = """You are The Loom, the narrative engine for Rogulator, a roguelike dungeon crawler.
Your role is to weave engaging, atmospheric descriptions that bring the dungeon to life.

Style guidelines:
- Be concise but evocative (1-3 sentences typically)
- Match the tone to the situation (tense in combat, mysterious in exploration)
- Occasional dry humor is welcome
- Reference the player's state when relevant (low health = desperation, new weapon = confidence)
- Never break the fourth wall unless specifically appropriate

The dungeon aesthetic: a strange place between mundane and mythic.
A "grocery run" might be a corner store that's somehow become a labyrinth."""


class Narrator(Protocol):
    def narrate(self, event: str, context: Dict[str, Any]) -> Optional[str]:
        ...


class NullNarrator:
    """Always silent. The game plays identically with or without text."""

    def narrate(self, event: str, context: Dict[str, Any]) -> Optional[str]:
        return None


def build_context(state: GameState, monster_radius: int = 5, recent_events: int = 3) -> Dict[str, Any]:
    """Snapshot of what the narrator is allowed to know."""
    player = state.player
    floor = state.floor
    room = floor.room_at(player.pos)
    px, py = player.pos
    nearby = [
        {"name": m.name, "hp": m.hp}
        for m in floor.living_monsters()
        if abs(m.pos[0] - px) <= monster_radius and abs(m.pos[1] - py) <= monster_radius
    ]
    macguffin = floor.macguffin
    return {
        "floor_number": state.floor_number,
        "room_type": room.kind if room else "corridor",
        "player_hp": f"{player.hp}/{player.max_hp}",
        "player_weapon": player.weapon.name if player.weapon else "bare fists",
        "has_macguffin": player.has_macguffin,
        "macguffin_name": macguffin.name if macguffin else None,
        "nearby_monsters": nearby,
        "recent_events": [m.text for m in state.messages.tail(recent_events)],
    }


def context_json(context: Dict[str, Any]) -> str:
    return json.dumps(context, indent=2)


# ---------------------------------------------------------------------------
# Prompt builders for a text-generation client


def room_description_prompt(context: Dict[str, Any]) -> str:
    return (
        f"Given this game state:\n{context_json(context)}\n\n"
        "Generate a brief atmospheric description of the room the player just entered.\n"
        "1-2 sentences. Focus on mood and any notable features."
    )


def combat_narration_prompt(attacker: str, target: str, damage: int, target_hp: int, was_kill: bool) -> str:
    remaining = "DEFEATED" if was_kill else target_hp
    return (
        "Narrate this combat action in one vivid sentence:\n"
        f"- Attacker: {attacker}\n"
        f"- Target: {target}\n"
        f"- Damage dealt: {damage}\n"
        f"- Target HP remaining: {remaining}\n\n"
        "Be dramatic but brief. Vary your descriptions."
    )


def monster_encounter_prompt(name: str, context: Dict[str, Any], ai_seed: Optional[str] = None) -> str:
    background = f"Background: {ai_seed}\n" if ai_seed else ""
    return (
        f"A {name} is encountered.\n{background}\n"
        f"Game context:\n{context_json(context)}\n\n"
        "Generate a brief (1 sentence) description of how this creature appears or reacts to the player."
    )


def macguffin_pickup_prompt(name: str, description: str) -> str:
    return (
        f"The player just picked up the {name}.\nDescription: {description}\n\n"
        "Generate a brief (1-2 sentences) moment of acquisition. "
        "Make it feel significant but not overwrought."
    )


def victory_prompt(macguffin_name: str, turns: int, monsters_defeated: int) -> str:
    return (
        f"The player escaped the dungeon with the {macguffin_name}!\n"
        f"- Turns taken: {turns}\n"
        f"- Enemies defeated: {monsters_defeated}\n\n"
        "Generate a brief (2-3 sentences) victory message."
    )


def defeat_prompt(killed_by: str, floor_number: int) -> str:
    return (
        f"The player was defeated by a {killed_by} on floor {floor_number}.\n\n"
        "Generate a brief (1-2 sentences) death message. Dark but not cruel."
    )


def prompt_for(event: str, state: GameState, context: Dict[str, Any]) -> str:
    """Pick the prompt matching an engine event."""
    macguffin = state.floor.macguffin
    if event == MACGUFFIN_PICKUP and macguffin:
        return macguffin_pickup_prompt(macguffin.name, macguffin.description)
    if event == VICTORY:
        name = macguffin.name if macguffin else "treasure"
        return victory_prompt(name, state.turn, state.monsters_defeated)
    if event == DEFEAT:
        return defeat_prompt(state.killed_by or "monster", state.floor_number)
    if event == MONSTER_SLAIN and context.get("combat"):
        c = context["combat"]
        return combat_narration_prompt(c["attacker"], c["target"], c["damage"], c["target_hp"], c["was_kill"])
    nearby = context.get("nearby_monsters")
    if event == ROOM_ENTERED and nearby:
        name = nearby[0]["name"]
        seed = next((m.template.ai_seed for m in state.floor.living_monsters() if m.name == name), None)
        return monster_encounter_prompt(name, context, seed)
    return room_description_prompt(context)
