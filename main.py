"""
This module serves as the main entry point for the Outbreak game.

It resolves the configuration, sets up logging, and hands a curses screen to the
GameEngine, which owns the game loop.

Architecture Role:
    - Entry Point: Bootstraps the application.
    - Environment Setup: Uses curses.wrapper to safely initialize/teardown the terminal.

Modification History:
    - 2026-10-19: Adapted for the Outbreak engine; configuration from outbreak.json and
      OUTBREAK_* environment variables.
"""

import curses
import logging

from outbreak.config import Config
from outbreak.engine import GameEngine
from outbreak.logger import setup_logging


def main(screen):
    """
    Runs the game on the curses screen provided by curses.wrapper().

    Args:
        screen (curses.window): The main curses screen object.

    Raises:
        Exception: Propagates any unhandled exception from the engine after logging it,
                   so curses is torn down correctly before crashing.
    """
    config = Config()
    loaded = config.try_load()
    config.apply_env()

    setup_logging(config.LOG_FILE)
    logger = logging.getLogger(__name__)
    logger.info("Starting Outbreak (config file loaded: %s, policy: %s)",
                loaded, config.POLICY.value)

    try:
        engine = GameEngine(screen, config)
        engine.run()
    except Exception as e:
        logger.exception("An unhandled exception occurred during game execution:")
        raise e
    finally:
        logger.info("Game shutting down.")


if __name__ == '__main__':
    curses.wrapper(main)
