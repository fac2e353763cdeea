"""Pygame-based ASCII-style renderer: a player-centred map viewport and a status panel."""
from __future__ import annotations

from typing import Optional, Tuple

import pygame

from rogulator.game import Game
from rogulator.state.game_state import LOST, WON, GameState
from rogulator.state.world import DOOR, FLOOR, STAIRS_DOWN, STAIRS_UP, WALL

Pos = Tuple[int, int]
Color = Tuple[int, int, int]

TILE_GLYPHS = {FLOOR: ".", WALL: "#", DOOR: "+", STAIRS_DOWN: ">", STAIRS_UP: "<"}

MESSAGE_COLORS = {
    "info": (200, 205, 215),
    "combat": (255, 120, 120),
    "pickup": (255, 220, 110),
    "system": (120, 200, 255),
}


def hex_to_rgb(value: str, default: Color = (220, 230, 240)) -> Color:
    """'#RRGGBB' -> (r, g, b); anything unparsable falls back to default."""
    text = value.lstrip("#")
    if len(text) != 6:
        return default
    try:
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
    except ValueError:
        return default


def viewport_origin(center: Pos, floor_size: Tuple[int, int], view_size: Tuple[int, int]) -> Pos:
    """Top-left tile of a view_size window centred on ``center``, clamped to the floor."""
    cx, cy = center
    fw, fh = floor_size
    vw, vh = view_size
    ox = min(max(0, cx - vw // 2), max(0, fw - vw))
    oy = min(max(0, cy - vh // 2), max(0, fh - vh))
    return ox, oy


class AsciiRenderer:
    def __init__(self, width: int, height: int, tile: int, view_tiles: Tuple[int, int] = (21, 15)) -> None:
        pygame.init()
        self.width = width
        self.height = height
        self.tile = tile
        self.view_w, self.view_h = view_tiles
        self.map_x = 8
        self.map_y = 8
        self.panel_x = self.map_x + self.view_w * tile + 16
        self.surface = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Rogulator")
        self.map_font = pygame.font.SysFont("consolas", tile)
        self.font = pygame.font.SysFont("consolas", 20)
        self.small_font = pygame.font.SysFont("consolas", 16)
        self.big_font = pygame.font.SysFont("consolas", 36)
        self.bg = (10, 10, 20)
        self.fg = (220, 230, 240)
        self.dim = (70, 75, 95)
        self.player_color = (255, 210, 80)
        self.stairs_color = (120, 200, 255)
        self.hp_color = (200, 80, 80)
        self.bar_bg = (40, 40, 60)
        self._origin: Pos = (0, 0)

    # --- coordinates ---

    def pixel_to_tile(self, pos: Pos) -> Optional[Pos]:
        """Map a mouse position to a floor tile, or None outside the viewport."""
        px = pos[0] - self.map_x
        py = pos[1] - self.map_y
        if px < 0 or py < 0:
            return None
        tx, ty = px // self.tile, py // self.tile
        if tx >= self.view_w or ty >= self.view_h:
            return None
        return (self._origin[0] + tx, self._origin[1] + ty)

    # --- drawing ---

    def draw(self, game: Game) -> None:
        self.surface.fill(self.bg)
        state = game.state
        self.draw_map(state)
        self.draw_status(state)
        if state.status in (WON, LOST):
            self.draw_banner(state)
        pygame.display.flip()

    def _glyph(self, ch: str, color: Color, tile_pos: Pos) -> None:
        x = self.map_x + (tile_pos[0] - self._origin[0]) * self.tile
        y = self.map_y + (tile_pos[1] - self._origin[1]) * self.tile
        text = self.map_font.render(ch, True, color)
        self.surface.blit(text, (x + (self.tile - text.get_width()) // 2, y))

    def draw_map(self, state: GameState) -> None:
        floor = state.floor
        player = state.player
        self._origin = viewport_origin(player.pos, (floor.width, floor.height), (self.view_w, self.view_h))
        ox, oy = self._origin

        for y in range(oy, min(floor.height, oy + self.view_h)):
            for x in range(ox, min(floor.width, ox + self.view_w)):
                tile = floor.tiles[y][x]
                if not tile.explored:
                    continue
                if tile.kind == STAIRS_DOWN:
                    color = self.stairs_color
                else:
                    color = self.fg if tile.visible else self.dim
                self._glyph(TILE_GLYPHS.get(tile.kind, "?"), color, (x, y))

        # entities only where the player can currently see
        mg = floor.macguffin
        if mg and not mg.collected and floor.tiles[mg.pos[1]][mg.pos[0]].visible:
            self._glyph(mg.template.glyph, hex_to_rgb(mg.template.color), mg.pos)
        for item in floor.items.values():
            if floor.tiles[item.pos[1]][item.pos[0]].visible:
                self._glyph(item.template.glyph, hex_to_rgb(item.template.color), item.pos)
        for mob in floor.living_monsters():
            if floor.tiles[mob.pos[1]][mob.pos[0]].visible:
                self._glyph(mob.template.glyph, hex_to_rgb(mob.template.color), mob.pos)

        self._glyph("@", self.player_color, player.pos)

    def draw_status(self, state: GameState) -> None:
        player = state.player
        x = self.panel_x
        y = 8

        # hp bar
        bar_w = self.width - x - 16
        pygame.draw.rect(self.surface, self.bar_bg, pygame.Rect(x, y, bar_w, 18))
        frac = player.hp / player.max_hp if player.max_hp else 0
        pygame.draw.rect(self.surface, self.hp_color, pygame.Rect(x, y, int(bar_w * frac), 18))
        self.surface.blit(self.small_font.render(f"HP {player.hp}/{player.max_hp}", True, self.fg), (x + 6, y + 1))
        y += 28

        mg = state.floor.macguffin
        if player.has_macguffin:
            objective = "Reach the stairs (>)"
        elif mg:
            objective = f"Find the {mg.name}"
        else:
            objective = "Find the exit"

        lines = [
            f"Floor {state.floor_number}/{state.config.floors}   Turn {state.turn}",
            f"Weapon: {player.weapon.name if player.weapon else 'bare fists'}",
            f"Armor:  {player.armor.name if player.armor else 'none'}",
            f"Gold: {player.gold}   Keys: {player.keys}",
            f"Objective: {objective}",
        ]
        for line in lines:
            self.surface.blit(self.font.render(line, True, self.fg), (x, y))
            y += 24

        y += 12
        for msg in state.messages.tail(5):
            color = MESSAGE_COLORS.get(msg.type, self.fg)
            self.surface.blit(self.small_font.render(msg.text, True, color), (x, y))
            y += 20

    def draw_banner(self, state: GameState) -> None:
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        self.surface.blit(overlay, (0, 0))
        if state.status == WON:
            title, color = "VICTORY", (255, 220, 110)
            sub = f"Escaped in {state.turn} turns, {state.monsters_defeated} foes defeated"
        else:
            title, color = "GAME OVER", (255, 100, 100)
            sub = f"Slain by the {state.killed_by}" if state.killed_by else "You have fallen"
        big = self.big_font.render(title, True, color)
        small = self.font.render(sub + "  -  press N for a new run", True, self.fg)
        self.surface.blit(big, ((self.width - big.get_width()) // 2, self.height // 2 - 40))
        self.surface.blit(small, ((self.width - small.get_width()) // 2, self.height // 2 + 8))

    def teardown(self) -> None:
        pygame.quit()
