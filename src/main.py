import logging
import sys

import pygame

from audio import Audio
from game import Game
from highscores import HighScoreStore, HighScoreTable
from renderer import Renderer
from settings import Config, WIDTH, HEIGHT, MAX_WIDTH, MAX_HEIGHT, FPS, TITLE


def main():
    config = Config.from_env()
    logging.basicConfig(level=config.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    info = pygame.display.Info()
    width = min(MAX_WIDTH, info.current_w - 20) if info.current_w > 0 else WIDTH
    height = min(MAX_HEIGHT, info.current_h - 20) if info.current_h > 0 else HEIGHT
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    pygame.display.set_caption(TITLE)
    pygame.key.start_text_input()

    audio = Audio(enabled=not config.mute)
    high_scores = HighScoreTable(HighScoreStore(config.highscore_file))
    game = Game(width, height, audio=audio, high_scores=high_scores)
    renderer = Renderer(screen)
    clock = pygame.time.Clock()

    while not game.request_quit:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                game.request_quit = True
            else:
                game.handle_event(event)

        game.update()
        renderer.draw(game.snapshot(), game.shake.next_offset())
        pygame.display.flip()
        clock.tick(FPS)

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
