# main.py

import pygame
import constants
import json
import logging
import logger_setup
import numpy as np
from canvas import PygameCanvas
from fireworks_system import FireworksDisplay

# Get the application's dedicated logger
logger = logging.getLogger("fireworks")

STATUS_LOG_INTERVAL = 100  # Frames


def run_animation_loop(display: FireworksDisplay, clock: pygame.time.Clock, fps: int, max_frames: int = None):
    """
    Drives the display at a steady frame rate until the window is closed.

    Left clicks are forwarded to the display as launch requests.
    """
    running = True
    tick = 0

    while running and (max_frames is None or tick < max_frames):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                display.launch_at(*event.pos)

        display.tick()

        # --- Logging (throttled) ---
        if tick % STATUS_LOG_INTERVAL == 0:
            logger.debug(
                f"Tick={tick}, "
                f"Fireworks={len(display.fireworks)}, "
                f"Particles={len(display.particles)}, "
                f"Launched={display.fireworks_launched}, "
                f"Exploded={display.fireworks_exploded}, "
                f"FPS={clock.get_fps():.1f}"
            )

        pygame.display.flip()
        clock.tick(fps)
        tick += 1

    return tick


def main(config_path='config.json'):
    """
    Main function to initialize and run the fireworks animation.
    """
    # --- Setup ---
    logger_setup.setup_logging(config_path)

    with open(config_path, 'r') as f:
        config = json.load(f)
    display_config = config.get('display', {})

    logger.info("Application starting...")
    logger.info(f"Loaded configuration: {config}")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config.get('master_seed'))
    logger.info(f"Master RNG initialized with seed: {config.get('master_seed')}")

    # --- Initialization ---
    pygame.init()
    width = display_config.get('width', constants.WIDTH)
    height = display_config.get('height', constants.HEIGHT)
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(display_config.get('title', constants.TITLE))
    screen.fill(constants.BLACK)
    clock = pygame.time.Clock()

    try:
        display = FireworksDisplay(PygameCanvas(screen), config.get('fireworks', {}), rng)
        frames = run_animation_loop(display, clock, display_config.get('fps', constants.FPS))
        logger.info(f"Animation stopped after {frames} frames.")
    finally:
        logger.info("Application shutting down.")
        pygame.quit()

if __name__ == "__main__":
    main()
