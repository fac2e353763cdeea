"""Grid position helpers shared by the engine systems.

Positions are plain ``(x, y)`` integer tuples.
"""
from __future__ import annotations

import math
from typing import Dict, Tuple

Pos = Tuple[int, int]

DIRECTIONS: Dict[str, Pos] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}

# Expansion order for 4-connected searches.
CARDINAL_STEPS: Tuple[Pos, ...] = tuple(DIRECTIONS.values())


def offset(pos: Pos, delta: Pos) -> Pos:
    return (pos[0] + delta[0], pos[1] + delta[1])


def step(pos: Pos, direction: str) -> Pos:
    try:
        delta = DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"Unknown direction {direction!r}; expected one of {list(DIRECTIONS)}") from None
    return offset(pos, delta)


def distance(a: Pos, b: Pos) -> float:
    """Euclidean distance."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def manhattan(a: Pos, b: Pos) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def chebyshev(a: Pos, b: Pos) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def is_cardinally_adjacent(a: Pos, b: Pos) -> bool:
    return manhattan(a, b) == 1


def direction_toward(origin: Pos, target: Pos) -> str:
    """Dominant-axis single step from origin toward target; ties go horizontal."""
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    if abs(dx) >= abs(dy):
        return "right" if dx > 0 else "left"
    return "down" if dy > 0 else "up"
