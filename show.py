# show.py

import logging
import numpy as np
import pygame
import constants
from fire_elements import ELEMENT_TYPES
from scene_loader import SceneLoadFailure
from timeline import MonotonicClock

logger = logging.getLogger("fireworks")


class FireworksShow:
    """
    Owns the drawing surface and the fire elements, and drives the frame loop.

    Each frame clears the surface and advances every element. When every
    element reports `ended` in the same frame, all of them are reset together,
    so the show restarts as a unit.

    Data Contract:
    - Inputs:
        - screen (pygame.Surface): The surface to draw on; its size is fixed at startup.
        - config (dict): The 'show' section of the config file.
        - rng (np.random.Generator): The master seeded random number generator.
        - clock: Object with a now() method in milliseconds. Defaults to pygame's ticks.
    - Outputs: None. This class modifies its internal state and the surface.
    - Side Effects: Draws to the surface; flips the display when the surface is the display.
    - Invariants: reset() is only ever called on all elements at once.
    """
    def __init__(self, screen: pygame.Surface, config: dict, rng: np.random.Generator, clock=None):
        self.screen = screen
        self.bounds = screen.get_size()
        self.config = config
        self.rng = rng
        self.clock = clock if clock is not None else MonotonicClock()

        self.pool_sizes = {
            "Fountain": config.get('fountain_particles', constants.FOUNTAIN_PARTICLES),
            "Rocket": config.get('rocket_particles', constants.ROCKET_PARTICLES),
        }

        self.elements = []
        self.running = False
        self.frame_count = 0
        self.cycle_count = 0

        logger.info(f"FireworksShow created for a {self.bounds[0]}x{self.bounds[1]} surface.")

    # --- Scene loading ---

    def build_element(self, descriptor):
        """
        Creates the fire element a descriptor asks for, or None when its type
        is not one the show knows.
        """
        element_type = ELEMENT_TYPES.get(descriptor.type)
        if element_type is None:
            logger.warning(f"Skipping fire element with unknown type {descriptor.type!r}.")
            return None
        return element_type(
            descriptor,
            self.bounds,
            self.clock,
            self.rng,
            num_particles=self.pool_sizes[descriptor.type],
        )

    def load_data(self, loader) -> list:
        """
        Fetches the scene from the loader and builds the fire elements.
        Raises SceneLoadFailure when the scene is unusable.
        """
        descriptors = loader.load()

        elements = []
        for descriptor in descriptors:
            try:
                element = self.build_element(descriptor)
            except ValueError as e:
                raise SceneLoadFailure(f"Invalid {descriptor.type} descriptor: {e}") from e
            if element is not None:
                elements.append(element)

        self.elements = elements
        logger.info(f"Built {len(elements)} fire element(s) from {len(descriptors)} descriptor(s).")
        return self.elements

    def show_load_failure(self):
        """Puts a heading on the surface so a failed load is not a silent blank window."""
        if not pygame.font.get_init():
            pygame.font.init()
        font = pygame.font.Font(None, constants.LOAD_FAILURE_FONT_SIZE)
        text = font.render(constants.LOAD_FAILURE_MESSAGE, True, constants.WHITE)
        rect = text.get_rect(midtop=(self.bounds[0] // 2, self.bounds[1] // 10))
        self.screen.blit(text, rect)
        self._present()

    def start_show(self, loader, max_frames: int = None) -> bool:
        """
        Loads the scene and runs the show.

        Returns False, without ever starting the frame loop, when the scene
        cannot be loaded.
        """
        try:
            self.load_data(loader)
        except SceneLoadFailure as e:
            logger.error(f"Fireworks show can't start: {e}")
            self.show_load_failure()
            return False

        self.run(max_frames=max_frames)
        return True

    # --- Frame loop ---

    def all_ended(self) -> bool:
        return all(element.ended for element in self.elements)

    def step(self) -> bool:
        """
        Runs one frame of the show. Returns True when this frame ended the
        cycle and every element was reset.
        """
        self.screen.fill(constants.BACKGROUND_COLOR)

        for element in self.elements:
            element.advance(self.screen)

        self.frame_count += 1

        if not self.all_ended():
            return False

        for element in self.elements:
            element.reset()
        self.cycle_count += 1
        logger.info(f"Show cycle {self.cycle_count} finished at frame {self.frame_count}; restarting.")
        return True

    def run(self, max_frames: int = None):
        """
        The main loop: one step per rendered frame, paced at constants.FPS.
        Ends when the window is closed, stop() is called, or after max_frames.
        """
        frame_clock = pygame.time.Clock()
        self.running = True
        logger.info("Animation loop started.")

        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.stop()

            if not self.running:
                break

            self.step()
            self._present()
            frame_clock.tick(constants.FPS)

            if max_frames is not None and self.frame_count >= max_frames:
                self.stop()

        logger.info(f"Animation loop stopped after {self.frame_count} frames.")

    def stop(self):
        self.running = False

    def _present(self):
        if self.screen is pygame.display.get_surface():
            pygame.display.flip()
