from __future__ import annotations

from typing import List, Tuple

from rogulator.state.world import Floor

Pos = Tuple[int, int]

DEFAULT_VIEW_RADIUS = 8


def line_points(x0: int, y0: int, x1: int, y1: int) -> List[Pos]:
    points = []
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0
    while True:
        points.append((x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy
    return points


def has_line_of_sight(floor: Floor, a: Pos, b: Pos) -> bool:
    """True unless a wall sits strictly between a and b."""
    for (x, y) in line_points(a[0], a[1], b[0], b[1]):
        tile = floor.get_tile(x, y)
        if tile is None:
            return False
        if (x, y) == a:
            continue
        if (x, y) == b:
            return True
        if not tile.walkable:
            return False
    return True


def update_visibility(floor: Floor, viewer: Pos, radius: int = DEFAULT_VIEW_RADIUS) -> None:
    """Recompute ``visible`` from scratch; ``explored`` only ever accumulates."""
    floor.clear_visibility()
    px, py = viewer
    r2 = radius * radius
    for y in range(py - radius, py + radius + 1):
        for x in range(px - radius, px + radius + 1):
            if not floor.in_bounds(x, y):
                continue
            dx = x - px
            dy = y - py
            if dx * dx + dy * dy > r2:
                continue
            if has_line_of_sight(floor, viewer, (x, y)):
                tile = floor.tiles[y][x]
                tile.visible = True
                tile.explored = True
    # the viewer always sees its own tile
    tile = floor.get_tile(px, py)
    if tile:
        tile.visible = True
        tile.explored = True


def is_visible(floor: Floor, pos: Pos) -> bool:
    tile = floor.get_tile(*pos)
    return bool(tile and tile.visible)


def is_explored(floor: Floor, pos: Pos) -> bool:
    tile = floor.get_tile(*pos)
    return bool(tile and tile.explored)
