"""A* over the 4-connected walkable grid."""
from __future__ import annotations

import heapq
from typing import Dict, Iterable, List, Optional, Set, Tuple

from rogulator.state.world import Floor
from rogulator.systems.geometry import CARDINAL_STEPS, manhattan, offset

Pos = Tuple[int, int]

DEFAULT_MAX_DEPTH = 20


def find_path(
    floor: Floor,
    start: Pos,
    goal: Pos,
    max_depth: int = DEFAULT_MAX_DEPTH,
    blocked: Iterable[Pos] = (),
) -> Optional[List[Pos]]:
    """Shortest cardinal-step path from start to goal, both inclusive.

    ``blocked`` cells are impassable for this search only. Returns None when
    the goal is unwalkable, unreachable, or further than ``max_depth`` steps.
    """
    if not floor.is_walkable(*goal):
        return None

    blocked_set: Set[Pos] = set(blocked)
    g_score: Dict[Pos, int] = {start: 0}
    came_from: Dict[Pos, Pos] = {}
    closed: Set[Pos] = set()
    order = 0
    open_heap: List[Tuple[int, int, Pos]] = [(manhattan(start, goal), order, start)]

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current in closed:
            continue  # stale heap entry
        if current == goal:
            return _reconstruct(came_from, current)
        closed.add(current)

        g = g_score[current]
        if g >= max_depth:
            return None

        for delta in CARDINAL_STEPS:
            nxt = offset(current, delta)
            if nxt in closed or nxt in blocked_set:
                continue
            if not floor.is_walkable(*nxt):
                continue
            tentative = g + 1
            if tentative < g_score.get(nxt, tentative + 1):
                g_score[nxt] = tentative
                came_from[nxt] = current
                order += 1
                heapq.heappush(open_heap, (tentative + manhattan(nxt, goal), order, nxt))

    return None


def _reconstruct(came_from: Dict[Pos, Pos], node: Pos) -> List[Pos]:
    path = [node]
    while node in came_from:
        node = came_from[node]
        path.append(node)
    path.reverse()
    return path


def next_step(
    floor: Floor,
    origin: Pos,
    target: Pos,
    blocked: Iterable[Pos] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Optional[Pos]:
    """The first move along the path toward target, or None."""
    path = find_path(floor, origin, target, max_depth, blocked)
    if not path or len(path) < 2:
        return None
    return path[1]
