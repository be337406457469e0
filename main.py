# main.py

import pygame
import constants
import logging
import logger_setup
import numpy as np
from scene_loader import SceneLoader
from show import FireworksShow
from timeline import MonotonicClock

# Get the application's dedicated logger
logger = logging.getLogger("fireworks")


def open_window(fit_to_display: bool) -> pygame.Surface:
    """
    Opens the display window. The size is taken once, at startup, and the
    window is not resized afterwards.
    """
    if fit_to_display:
        info = pygame.display.Info()
        size = (info.current_w, info.current_h)
    else:
        size = (constants.WIDTH, constants.HEIGHT)

    screen = pygame.display.set_mode(size)
    pygame.display.set_caption(constants.TITLE)
    logger.info(f"Window opened at {size[0]}x{size[1]}.")
    return screen


def wait_for_quit():
    """Keeps the failure message on screen until the window is closed."""
    clock = pygame.time.Clock()
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return
        clock.tick(constants.FPS)


def main():
    """
    Main function to initialize and run the fireworks show.
    """
    # --- Setup ---
    config = logger_setup.load_config()
    logger_setup.setup_logging(config)
    show_config = config['show']

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config['master_seed'])
    logger.info(f"Master RNG initialized with seed: {config['master_seed']}")

    # --- Initialization ---
    pygame.init()
    screen = open_window(show_config.get('fit_to_display', True))

    show = FireworksShow(screen, show_config, rng, clock=MonotonicClock())
    loader = SceneLoader(show_config['scene_path'])

    # --- Run ---
    if not show.start_show(loader):
        wait_for_quit()

    logger.info("Application shutting down.")
    pygame.quit()


if __name__ == "__main__":
    main()
