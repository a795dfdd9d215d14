#!/usr/bin/env python3

from tilecam.core.config import load_game_config
from tilecam.logging_config import setup_logging
from tilecam.renderers.pygame_renderer import PygameRenderer
from tilecam.game.game import Game


def main():
    logger = setup_logging()
    config = load_game_config()

    renderer = PygameRenderer(config.window)

    game = Game(renderer, config)

    try:
        game.run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception:
        logger.exception("Fatal error")
        raise


if __name__ == "__main__":
    main()
