# particle.py

import pygame
import numpy as np
import constants


class Particle:
    """
    Represents a single spark of a fire element.

    A particle is a passive data holder: the owning fountain or rocket
    integrates its motion. Fountain particles use (vx, vy) and a ceiling;
    burst particles use a fixed angle and a decaying speed.

    Data Contract:
    - Inputs:
        - x, y (float): The emission point of the owning element.
        - color (tuple): RGB color shared by the owner.
        - rng (np.random.Generator): Source of all per-particle randomness.
        - ceiling (float | None): Ceiling offset of the owning fountain.
        - angle (float | None): Radial direction of a burst particle.
    - Invariants: Once `done` is set the particle is neither moved, faded nor
      drawn until reinitialize() is called.
    """
    def __init__(self, x: float, y: float, color: tuple, rng: np.random.Generator,
                 ceiling: float = None, angle: float = None):
        self.rng = rng
        self.radius = constants.PARTICLE_RADIUS
        self.color = color
        self.angle = angle

        # The emission point sits one diameter below the owner.
        self.init_x = x
        self.init_y = y + self.radius * 2

        # Each fountain particle gets its own slightly jittered ceiling.
        self.ceiling = None
        if ceiling is not None:
            self.ceiling = ceiling + rng.random() * constants.CEILING_JITTER

        # Only burst particles move by angle and speed.
        self.speed = None
        if angle is not None:
            self.speed = float(rng.uniform(*constants.BURST_SPEED_RANGE))

        self.reinitialize()

    def reinitialize(self):
        """
        Puts the particle back at its emission point with a fresh upward velocity
        and clears every lifecycle flag.
        """
        self.done = False
        self.ready = False
        self.fading = False
        self.opacity = 1.0

        self.x = self.init_x
        self.y = self.init_y

        self.vx = float(self.rng.uniform(*constants.INITIAL_VX_RANGE))
        self.vy = float(self.rng.uniform(*constants.INITIAL_VY_RANGE))

    def recycle(self):
        """Re-emits a fountain particle from the nozzle with a new jet velocity."""
        self.x = self.init_x
        self.y = self.init_y - self.radius
        self.vx = float(self.rng.uniform(*constants.RECYCLE_VX_RANGE))
        self.vy = float(self.rng.uniform(*constants.RECYCLE_VY_RANGE))
        self.ready = True

    def schedule_life_countdown(self, timeline):
        """
        Gives a burst particle a finite visible lifetime: after a random delay
        it starts fading, and a fixed time later it is done.
        """
        def start_fading():
            self.fading = True
            timeline.schedule(constants.FADE_DURATION, finish)

        def finish():
            self.done = True

        delay = float(self.rng.uniform(*constants.FADE_DELAY_RANGE))
        timeline.schedule(delay, start_fading)

    @property
    def draw_color(self):
        """
        The color actually painted: the placeholder before the first emission,
        otherwise the particle's color darkened by its opacity.
        """
        if not self.ready:
            return constants.PLACEHOLDER_COLOR
        opacity = min(max(self.opacity, 0.0), 1.0)
        return tuple(int(channel * opacity) for channel in self.color)

    def draw(self, screen: pygame.Surface):
        """
        Draws the particle on the screen.
        """
        if self.done:
            return
        pygame.draw.circle(screen, self.draw_color, (int(self.x), int(self.y)), self.radius)
