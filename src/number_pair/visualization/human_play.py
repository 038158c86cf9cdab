from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict

import pygame

from number_pair.game import NumberPairGame
from number_pair.storage import DEFAULT_SAVE_PATH, JsonFileStore
from .renderer import Renderer


def _toggle_sum(game: NumberPairGame) -> None:
    game.set_rules(sum_enabled=not game.rules.sum_enabled)


def _toggle_equal(game: NumberPairGame) -> None:
    game.set_rules(equal_enabled=not game.rules.equal_enabled)


KEY_TO_COMMAND: Dict[int, Callable[[NumberPairGame], object]] = {
    pygame.K_n: NumberPairGame.new_game,
    pygame.K_u: NumberPairGame.undo,
    pygame.K_h: NumberPairGame.request_hint,
    pygame.K_s: NumberPairGame.shuffle,
    pygame.K_1: _toggle_sum,
    pygame.K_2: _toggle_equal,
}


def run(save_path: Path | str = DEFAULT_SAVE_PATH) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    try:
        clock = pygame.time.Clock()
        renderer = Renderer()
        game = NumberPairGame(store=JsonFileStore(save_path), presenter=renderer)
        game.boot()

        screen = pygame.display.set_mode(renderer.window_size(game.board.size))
        pygame.display.set_caption("Number Pair")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            command(game)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    cell = renderer.cell_at(*event.pos, game.board.size)
                    if cell is not None:
                        game.tap(*cell)

            # Timer text is redrawn every frame from the start timestamp
            renderer.draw(screen, game)
            clock.tick(30)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
