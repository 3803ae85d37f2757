# main.py
import argparse

import pygame # type: ignore
from .config import WIDTH, HEIGHT, CAPTION, FONT_SIZE, Config
from .game import Ticker, new_game, handle_input, draw_game, draw_game_over


def parse_args(argv=None) -> Config:
    parser = argparse.ArgumentParser(prog="snek")
    parser.add_argument("--seed", type=int, default=None, help="seed for item placement")
    parser.add_argument("--ups", type=int, default=12, help="update ticks per second")
    parser.add_argument("--debug", action="store_true", help="print every tick")
    args = parser.parse_args(argv)
    return Config(seed=args.seed, ticks_per_second=args.ups, debug=args.debug)

def main(argv=None):
    cfg = parse_args(argv)

    pygame.init()
    font = pygame.font.SysFont(None, FONT_SIZE)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(CAPTION)
    clock = pygame.time.Clock()

    game = new_game(cfg)
    ticker = Ticker(cfg.ticks_per_second, start_ms=pygame.time.get_ticks())

    try:
        while True:
            # 1) input
            if not handle_input(game):
                break

            # 2) update (fixed rate, independent of frame timing)
            for _ in range(ticker.due(pygame.time.get_ticks())):
                if not game.step():
                    break

            # 3) render
            draw_game(screen, font, game.snapshot())
            if game.over is not None:
                draw_game_over(screen, font, game.over)
                pygame.display.flip()
                raise SystemExit(game.over.value)
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()

if __name__ == "__main__":
    main()
