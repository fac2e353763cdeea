"""Monster behaviours and dispatcher.

Each behaviour returns ``(action_name, params)`` where the action is one of
``"attack"``, ``"move"`` (params: ``to``) or ``"wait"``. The turn engine
applies the result; nothing in here mutates state.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Tuple

from rogulator.rng import RNG
from rogulator.state.entities import Monster
from rogulator.state.world import Floor
from rogulator.systems.geometry import distance, is_cardinally_adjacent
from rogulator.systems.pathfinding import DEFAULT_MAX_DEPTH, next_step

Pos = Tuple[int, int]
Decision = Tuple[str, Dict[str, Any]]

WAIT: Decision = ("wait", {})


def choose_action(
    monster: Monster,
    player_pos: Pos,
    floor: Floor,
    rng: RNG,
    blocked: Iterable[Pos] = (),
    detection_range: float = 8.0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Decision:
    """Decide what a monster does this turn.

    The speed roll and detection range gate every behaviour; a cardinally
    adjacent player is always attacked. Past that, ``behavior`` picks the
    brain.
    """
    if rng.random() >= monster.speed:
        return WAIT
    if distance(monster.pos, player_pos) > detection_range:
        return WAIT
    if is_cardinally_adjacent(monster.pos, player_pos):
        return ("attack", {})

    brain = BEHAVIORS.get(monster.behavior, _hold_ground)
    return brain(monster, player_pos, floor, blocked, max_depth)


# ---------------------------------------------------------------------------
# Behaviours


def _chase(monster: Monster, player_pos: Pos, floor: Floor, blocked: Iterable[Pos], max_depth: int) -> Decision:
    """Step along the shortest path toward the player."""
    others = [p for p in blocked if p != monster.pos]
    step = next_step(floor, monster.pos, player_pos, others, max_depth)
    if step is None or step == player_pos:
        return WAIT
    return ("move", {"to": step})


def _hold_ground(monster: Monster, player_pos: Pos, floor: Floor, blocked: Iterable[Pos], max_depth: int) -> Decision:
    """Fleeing and stationary monsters only fight back when adjacent."""
    return WAIT


BEHAVIORS: Dict[str, Callable[..., Decision]] = {
    "aggressive": _chase,
    "passive": _chase,
    "fleeing": _hold_ground,
    "stationary": _hold_ground,
}
