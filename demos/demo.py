#!/usr/bin/env python3

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tilecam.core.config import load_game_config
from tilecam.core.renderer import RendererConfig
from tilecam.logging_config import setup_logging
from tilecam.renderers.simple_renderer import SimpleRenderer
from tilecam.game.game import Game


def main():
    print("Tile Map Demo - Headless Mode")
    print("Pans diagonally for a few frames, zooms in and out, then quits.")
    print("")

    setup_logging()
    config = load_game_config()

    renderer = SimpleRenderer(
        RendererConfig(width=config.window.width, height=config.window.height,
                       title="Tile Map Demo (headless)", target_fps=2),
        demo_mode=True,
        auto_quit_at=10,
    )

    game = Game(renderer, config)
    game.run()

    print("\nDemo complete!")
    print("Run 'python main.py' for the interactive pygame window.")


if __name__ == "__main__":
    main()
