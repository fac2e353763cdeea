from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

import pygame

MOD_MASK = pygame.KMOD_SHIFT | pygame.KMOD_CTRL | pygame.KMOD_ALT


def encode_keybinding(keycode: int, mods: int = 0) -> int:
    """
    Encode a key + modifiers into a single int so bindings can distinguish combos.
    """
    return int(keycode) | ((int(mods) & MOD_MASK) << 16)


# Single-key commands (non-movement).
DEFAULT_BINDINGS: Dict[str, List[int]] = {
    "quit": [encode_keybinding(pygame.K_ESCAPE)],
    "rest": [encode_keybinding(pygame.K_SPACE), encode_keybinding(pygame.K_PERIOD), encode_keybinding(pygame.K_KP5)],
    "new_game": [encode_keybinding(pygame.K_n)],
}

# Movement bindings (keycode -> direction name understood by Game.move)
DEFAULT_MOVE_BINDINGS: Dict[int, str] = {
    encode_keybinding(pygame.K_UP): "up",
    encode_keybinding(pygame.K_DOWN): "down",
    encode_keybinding(pygame.K_LEFT): "left",
    encode_keybinding(pygame.K_RIGHT): "right",
    encode_keybinding(pygame.K_w): "up",
    encode_keybinding(pygame.K_s): "down",
    encode_keybinding(pygame.K_a): "left",
    encode_keybinding(pygame.K_d): "right",
    encode_keybinding(pygame.K_KP8): "up",
    encode_keybinding(pygame.K_KP2): "down",
    encode_keybinding(pygame.K_KP4): "left",
    encode_keybinding(pygame.K_KP6): "right",
}


@dataclass
class GameCommand:
    """Logical game command produced from raw keyboard / mouse input."""
    kind: str
    direction: Optional[str] = None           # for "move"

    # Mouse-specific fields
    mouse_pos: Optional[Tuple[int, int]] = None
    mouse_button: Optional[int] = None


class GameInput:
    """
    Maps pygame events to abstract game commands.

    Knows nothing about the renderer or the game state; the engine loop
    decides what a command means (e.g. translating a click's pixel position
    into a tile).
    """

    def __init__(
        self,
        *,
        bindings: Optional[Dict[str, Iterable[int]]] = None,
        move_bindings: Optional[Dict[int, str]] = None,
    ) -> None:
        self.bindings: Dict[str, List[int]] = {k: list(v) for k, v in DEFAULT_BINDINGS.items()}
        self.move_bindings: Dict[int, str] = dict(DEFAULT_MOVE_BINDINGS)
        if bindings:
            for kind, codes in bindings.items():
                self.bindings[kind] = list(codes)
        if move_bindings:
            self.move_bindings.update({int(k): v for k, v in move_bindings.items()})

    def handle_event(self, event: pygame.event.Event) -> List[GameCommand]:
        if event.type == pygame.QUIT:
            return [GameCommand("quit")]
        if event.type == pygame.KEYDOWN:
            return self.handle_keydown(event)
        if event.type == pygame.MOUSEBUTTONDOWN:
            return self.handle_mousebutton(event)
        return []

    def handle_keydown(self, event: pygame.event.Event) -> List[GameCommand]:
        key = event.key
        combined = encode_keybinding(key, getattr(event, "mod", 0))

        for kind in ("quit", "new_game", "rest"):
            if combined in self.bindings.get(kind, []):
                return [GameCommand(kind)]

        if combined in self.move_bindings:
            return [GameCommand("move", direction=self.move_bindings[combined])]
        return []

    def handle_mousebutton(self, event: pygame.event.Event) -> List[GameCommand]:
        """Left clicks only; the engine turns the pixel into a tile."""
        if getattr(event, "button", None) != 1:
            return []
        return [
            GameCommand(
                kind="click",
                mouse_pos=getattr(event, "pos", None),
                mouse_button=1,
            )
        ]
