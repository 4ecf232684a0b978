from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from falling_blocks.game import Clock, Game, GameConfig, GameState, Key
from .renderer import Renderer


KEY_TO_GAME_KEY: Dict[int, Key] = {
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_p: Key.P,
    pygame.K_SPACE: Key.SPACE,
    pygame.K_UP: Key.UP,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_d: Key.D,
}


def handle_event(game: Game, event: pygame.event.Event) -> bool:
    """Forward one pygame event to the game. Returns False when the window should close."""
    if event.type == pygame.QUIT:
        return False
    if event.type in (pygame.KEYDOWN, pygame.KEYUP):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_r and game.state == GameState.GAME_OVER:
            game.reset()
            return True
        key = KEY_TO_GAME_KEY.get(event.key)
        if key is not None:
            game.handle_key(key, event.type == pygame.KEYDOWN)
    elif event.type == pygame.WINDOWFOCUSLOST:
        game.on_focus_changed(False)
    elif event.type == pygame.WINDOWFOCUSGAINED:
        game.on_focus_changed(True)
    elif event.type == pygame.ACTIVEEVENT and event.state & pygame.APPINPUTFOCUS:
        game.on_focus_changed(bool(event.gain))
    return True


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=32)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", type=str, default="WARNING")
    return p


def run(seed: int | None = None, cell_size: int = 32, fps: int = 60) -> None:
    pygame.init()
    try:
        game = Game(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Falling Blocks")
        font = pygame.font.SysFont(None, 28)

        frame_clock = pygame.time.Clock()
        clock = Clock(pygame.time.get_ticks())

        running = True
        while running:
            for event in pygame.event.get():
                if not handle_event(game, event):
                    running = False

            game.update(clock.update(pygame.time.get_ticks()))

            renderer.draw(screen, game, font)
            pygame.display.flip()
            frame_clock.tick(fps)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
