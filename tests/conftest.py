import os

# Headless pygame for surfaces and fonts.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from scene_loader import ElementDescriptor, Vector
from timeline import ManualClock

BOUNDS = (800, 600)
FRAME_MS = 16


def make_descriptor(type="Fountain", colour="0xFF8800", begin=0, duration=1000,
                    position=(0, -300), velocity=None):
    return ElementDescriptor(
        type=type,
        colour=colour,
        begin=begin,
        duration=duration,
        position=Vector(*position),
        velocity=Vector(*velocity) if velocity is not None else None,
    )


def run_frames(element, clock, screen, frames, frame_ms=FRAME_MS):
    """Advances an element once per frame, moving the clock between frames."""
    for _ in range(frames):
        element.advance(screen)
        clock.advance(frame_ms)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def screen():
    return pygame.Surface(BOUNDS)


@pytest.fixture
def circles(monkeypatch):
    """Records every pygame.draw.circle call as (color, center, radius)."""
    calls = []

    def record(surface, color, center, radius, *args, **kwargs):
        calls.append((tuple(color), tuple(center), radius))

    monkeypatch.setattr(pygame.draw, "circle", record)
    return calls


@pytest.fixture(scope="session", autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()
