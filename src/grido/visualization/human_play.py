from __future__ import annotations

import argparse
from collections import deque
from typing import Deque, Dict

import pygame

from grido.game import Action, GameConfig, GridoGame, compose_frame
from grido.utils.logging import setup_logger
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.UP,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_TAB: Action.ROTATE,
    pygame.K_RETURN: Action.DROP,
    pygame.K_BACKSPACE: Action.SWAP,
    pygame.K_p: Action.PAUSE,
    pygame.K_q: Action.QUIT,
    pygame.K_n: Action.RESTART,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Grido")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--width", type=int, default=16)
    p.add_argument("--height", type=int, default=12)
    p.add_argument("--font-size", type=int, default=18)
    p.add_argument("--fps", type=int, default=50)
    p.add_argument("--log-level", type=str, default="info")
    return p


def run(config: GameConfig, font_size: int = 18, fps: int = 50) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = GridoGame(config)
        renderer = Renderer(font_size=font_size)

        frame = compose_frame(game)
        screen = pygame.display.set_mode(renderer.window_size(frame))
        pygame.display.set_caption("Grido")

        pending: Deque[Action] = deque()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in KEY_TO_ACTION:
                        pending.append(KEY_TO_ACTION[event.key])

            # One logical input per frame
            game.step(pending.popleft() if pending else Action.NONE)
            if game.quit_requested:
                running = False

            renderer.draw(screen, compose_frame(game))
            clock.tick(fps)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="grido", level=args.log_level)
    config = GameConfig(width=args.width, height=args.height, random_seed=args.seed)
    run(config, font_size=args.font_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
