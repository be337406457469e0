# fire_elements.py

import logging
import numpy as np
import pygame
import constants
from colour import hex_to_rgb
from particle import Particle
from timeline import Timeline

logger = logging.getLogger("fireworks")


class FireElement:
    """
    One independently scheduled unit of the show.

    Every element goes through the same gates: `started` once its timers are
    armed, `emitting` after `begin` milliseconds, `stopping` after a further
    `duration` milliseconds, and `ended` once nothing of it is left on screen.
    The gates are only cleared by reset().

    Data Contract:
    - Inputs:
        - descriptor (ElementDescriptor): Scene data for this element.
        - bounds (tuple): The (width, height) of the drawing surface.
        - clock: Object with a now() method in milliseconds.
        - rng (np.random.Generator): The master random number generator.
    - Outputs: None. Subclasses draw onto the surface given to advance().
    - Invariants: Deferred callbacks only set gate flags; positions are only
      changed inside advance().
    """
    kind = "FireElement"

    def __init__(self, descriptor, bounds: tuple, clock, rng: np.random.Generator):
        self.width, self.height = bounds
        self.rng = rng
        # All particles of an element share one color, so parse it once.
        self.color = hex_to_rgb(descriptor.colour)
        self.begin = descriptor.begin
        self.duration = descriptor.duration
        self.timeline = Timeline(clock)
        self._clear_gates()

    def _clear_gates(self):
        self.started = False
        self.emitting = False
        self.stopping = False
        self.ended = False

    def _arm_timers(self):
        """On the first frame, schedules both phase transitions from the same origin."""
        if self.started:
            return
        self.timeline.schedule(self.begin, self._start_emitting)
        self.timeline.schedule(self.begin + self.duration, self._start_stopping)
        self.started = True

    def _start_emitting(self):
        if not self.emitting:
            logger.debug(f"{self} emitting.")
        self.emitting = True

    def _start_stopping(self):
        if not self.stopping:
            logger.debug(f"{self} stopping.")
        self.stopping = True

    @property
    def phase(self) -> str:
        if self.ended:
            return "ended"
        if self.stopping:
            return "stopping"
        if self.emitting:
            return "emitting"
        if self.started:
            return "waiting"
        return "idle"

    def advance(self, screen: pygame.Surface):
        raise NotImplementedError

    def reset(self):
        """Returns the element to its idle state for the next show cycle."""
        self.timeline.clear()
        self._clear_gates()

    def __repr__(self):
        return f"{self.kind}(begin={self.begin}, duration={self.duration}, phase={self.phase})"


class Fountain(FireElement):
    """
    A continuous jet of particles rising from the bottom edge.

    While emitting, a particle that leaves its column is sent back to the
    nozzle. Once stopping, leaving particles are retired instead, so the jet
    drains out rather than vanishing.
    """
    kind = "Fountain"

    def __init__(self, descriptor, bounds: tuple, clock, rng: np.random.Generator,
                 num_particles: int = constants.FOUNTAIN_PARTICLES):
        super().__init__(descriptor, bounds, clock, rng)
        self.x = self.width / 2 + descriptor.position.x
        self.y = self.height
        self.max_y = descriptor.position.y

        self.particles = [
            Particle(self.x, self.y, self.color, rng, ceiling=self.max_y)
            for _ in range(num_particles)
        ]

    def _left_column(self, part: Particle) -> bool:
        return (
            part.x + part.radius > self.width
            or part.x - part.radius < 0
            or part.y + part.radius < self.height + part.ceiling
        )

    def advance(self, screen: pygame.Surface):
        """
        Moves and draws every live particle for one frame.
        """
        self.timeline.fire_due()
        self._arm_timers()

        if not self.emitting:
            return

        for part in self.particles:
            if part.done:
                continue

            part.x += part.vx
            part.y += part.vy

            if self._left_column(part):
                if self.stopping:
                    part.done = True
                    continue
                part.recycle()

            part.draw(screen)

        # The fountain is closed only when every particle has drained out.
        self.ended = self.stopping and all(part.done for part in self.particles)

    def reset(self):
        for part in self.particles:
            part.reinitialize()
        super().reset()


class Rocket(FireElement):
    """
    A projectile that climbs at constant velocity and then bursts.

    The burst starts when `duration` has elapsed, or earlier if the projectile
    crosses TOP_CLAMP, so a rocket never flies off the top of the screen.
    Burst particles are created at the projectile's position on the first
    bursting frame and thrown away on reset().
    """
    kind = "Rocket"

    def __init__(self, descriptor, bounds: tuple, clock, rng: np.random.Generator,
                 num_particles: int = constants.ROCKET_PARTICLES):
        if descriptor.velocity is None:
            raise ValueError("Rocket descriptor requires a Velocity")
        super().__init__(descriptor, bounds, clock, rng)
        self.radius = constants.ROCKET_RADIUS
        self.num_particles = num_particles

        self.init_x = self.width / 2 + descriptor.position.x
        self.init_y = self.height + descriptor.position.y
        self.x = self.init_x
        self.y = self.init_y

        # Scene velocities are per second, and up is positive.
        self.vx = descriptor.velocity.x / constants.VELOCITY_DIVISOR
        self.vy = -(descriptor.velocity.y / constants.VELOCITY_DIVISOR)

        self.particles = []
        self.bursting = False

    @property
    def phase(self) -> str:
        if self.ended:
            return "ended"
        if self.stopping:
            return "bursting"
        if self.emitting:
            return "rising"
        return super().phase

    def _advance_projectile(self, screen: pygame.Surface):
        self.x += self.vx
        self.y += self.vy

        if self.y < constants.TOP_CLAMP:
            logger.debug(f"{self} reached the top clamp at y={self.y:.1f}; bursting early.")
            self._start_stopping()
            return

        pygame.draw.circle(screen, self.color, (int(self.x), int(self.y)), self.radius)

    def _burst(self):
        """Creates the burst particles around the projectile's current position."""
        self.particles = []
        for _ in range(self.num_particles):
            angle = self.rng.random() * (np.pi * 2)
            part = Particle(self.x, self.y, self.color, self.rng, angle=angle)
            part.ready = True
            part.schedule_life_countdown(self.timeline)
            self.particles.append(part)
        self.bursting = True
        logger.debug(f"{self} burst into {len(self.particles)} particles at ({self.x:.1f}, {self.y:.1f}).")

    def advance(self, screen: pygame.Surface):
        """
        Climbs the projectile until stopping, then animates the burst.
        """
        self.timeline.fire_due()
        self._arm_timers()

        if not self.emitting:
            return

        if not self.stopping:
            self._advance_projectile(screen)
            return

        if not self.bursting:
            self._burst()

        for part in self.particles:
            if part.done:
                continue

            # Exponential slowdown plus a constant downward drift.
            part.speed *= constants.BURST_DECAY
            part.x += np.cos(part.angle) * part.speed
            part.y += np.sin(part.angle) * part.speed + constants.BURST_GRAVITY

            if part.fading:
                part.opacity = max(part.opacity - constants.FADE_STEP, 0.0)

            part.draw(screen)

        self.ended = all(part.done for part in self.particles)

    def reset(self):
        self.particles = []
        self.bursting = False
        self.x = self.init_x
        self.y = self.init_y
        super().reset()


# Closed set of element kinds a scene may declare.
ELEMENT_TYPES = {
    Fountain.kind: Fountain,
    Rocket.kind: Rocket,
}
