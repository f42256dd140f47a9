from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from stackfall.game import Command, FallingBlockGame, GameConfig
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_RETURN: Command.SPAWN,
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play stackfall with the keyboard.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=16)
    p.add_argument("--gravity", type=float, default=0.5, help="seconds per gravity tick")
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="INFO")
    return p


def run(game: FallingBlockGame, renderer: Renderer, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        screen = pygame.display.set_mode(renderer.window_size(game.snapshot()))
        pygame.display.set_caption("stackfall")

        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            game.handle(command)

            # Gravity
            game.advance(clock.get_time() / 1000.0)

            renderer.draw(screen, game.snapshot())
            clock.tick(fps)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    game = FallingBlockGame(GameConfig(gravity_interval=args.gravity, random_seed=args.seed))
    run(game, Renderer(cell_size=args.cell_size), fps=args.fps)
    print(f"Final score: {game.score} ({game.lines_cleared_total} lines)")


if __name__ == "__main__":  # pragma: no cover
    main()
