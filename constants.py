# constants.py

"""
Application Constants

This module defines static configuration values for the fireworks show.
These are not expected to change between runs; per-run values (seed,
scene file, pool sizes) live in config.json.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Fallback screen dimensions, used when the window is not fitted to the display
WIDTH = 1280  # Pixels
HEIGHT = 720  # Pixels

# Framerate
FPS = 60  # Frames per second

# Colors (RGB)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

BACKGROUND_COLOR = BLACK
PLACEHOLDER_COLOR = BLACK  # Drawn for fountain particles that have not been emitted yet

# Window Title
TITLE = "Fireworks Show"

# Failure heading shown when the scene cannot be loaded
LOAD_FAILURE_MESSAGE = "Fireworks Show can't start"
LOAD_FAILURE_FONT_SIZE = 64  # Points

# Pool sizes
FOUNTAIN_PARTICLES = 200
ROCKET_PARTICLES = 500

# Particle geometry
PARTICLE_RADIUS = 2  # Pixels
ROCKET_RADIUS = 2  # Pixels

# Fountain emission velocities (pixels per frame)
INITIAL_VX_RANGE = (-2.0, 2.0)
INITIAL_VY_RANGE = (-107.0, -7.0)
RECYCLE_VX_RANGE = (-2.0, 2.0)
RECYCLE_VY_RANGE = (-15.0, -5.0)
CEILING_JITTER = 100  # Pixels of random extra height per particle

# Rocket projectile
VELOCITY_DIVISOR = 60  # Scene velocities are per second; divide to get per frame
TOP_CLAMP = 20  # Pixels from the top edge; crossing it forces the burst

# Burst physics
BURST_SPEED_RANGE = (-32.0, -2.0)  # Pixels per frame
BURST_DECAY = 0.91  # Multiplicative speed decay per frame
BURST_GRAVITY = 4  # Constant downward drift, pixels per frame
FADE_STEP = 0.1  # Opacity lost per frame while fading

# Burst particle lifetime
FADE_DELAY_RANGE = (400, 850)  # Milliseconds before fading starts
FADE_DURATION = 500  # Milliseconds from fading to done
