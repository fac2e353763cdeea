"""
Engine entry point: owns the event/update/render loop.

Input becomes GameCommands, commands become Game intents, and the renderer
only ever reads the resulting state.
"""
from __future__ import annotations

from typing import Optional

import pygame

from rogulator.config import GameConfig, RunConfig
from rogulator.game import Game
from rogulator.log import get_logger
from rogulator.narrative import Narrator
from rogulator.render.ascii import AsciiRenderer
from rogulator.rng import new_rng
from rogulator.scenes.game_input import GameCommand, GameInput

logger = get_logger(__name__)


class Engine:
    def __init__(self, cfg: GameConfig, run_config: RunConfig, narrator: Optional[Narrator] = None) -> None:
        pygame.init()
        self.cfg = cfg
        self.run_config = run_config
        self.narrator = narrator
        self.rng = new_rng(cfg.seed)
        self.renderer = AsciiRenderer(
            cfg.view_width, cfg.view_height, cfg.tile_size,
            (cfg.viewport_tiles_w, cfg.viewport_tiles_h),
        )
        self.input = GameInput()
        self.game = self._new_game()
        self.running = True

    def _new_game(self) -> Game:
        # one rng across runs so a seeded session replays identically
        game = Game(self.cfg, self.rng, narrator=self.narrator)
        game.start(self.run_config)
        return game

    def apply(self, cmd: GameCommand) -> None:
        if cmd.kind == "quit":
            self.running = False
        elif cmd.kind == "new_game":
            self.game = self._new_game()
        elif cmd.kind == "rest":
            self.game.rest()
        elif cmd.kind == "move" and cmd.direction:
            self.game.move(cmd.direction)
        elif cmd.kind == "click" and cmd.mouse_pos:
            tile = self.renderer.pixel_to_tile(cmd.mouse_pos)
            if tile is not None:
                self.game.click(tile)

    def run(self) -> None:
        clock = pygame.time.Clock()
        try:
            while self.running:
                for event in pygame.event.get():
                    for cmd in self.input.handle_event(event):
                        self.apply(cmd)
                self.renderer.draw(self.game)
                clock.tick(30)
        finally:
            logger.info("shutting down")
            self.renderer.teardown()
