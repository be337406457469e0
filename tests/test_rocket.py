import math

import pytest

import constants
from conftest import BOUNDS, FRAME_MS, make_descriptor, run_frames
from fire_elements import Fountain, Rocket


def make_rocket(clock, rng, num_particles=50, **kwargs):
    kwargs.setdefault("type", "Rocket")
    kwargs.setdefault("position", (0, 0))
    kwargs.setdefault("velocity", (0, 600))
    return Rocket(make_descriptor(**kwargs), BOUNDS, clock, rng, num_particles=num_particles)


def projectile_calls(circles, rocket):
    return [call for call in circles if call[2] == rocket.radius and call[0] == rocket.color]


def test_rocket_requires_a_velocity(clock, rng):
    with pytest.raises(ValueError):
        Rocket(make_descriptor(type="Rocket", velocity=None), BOUNDS, clock, rng)


def test_rocket_velocity_is_scaled_to_frames(clock, rng):
    rocket = make_rocket(clock, rng, position=(50, -20), velocity=(120, 600))
    assert (rocket.init_x, rocket.init_y) == (BOUNDS[0] / 2 + 50, BOUNDS[1] - 20)
    assert rocket.vx == pytest.approx(2.0)
    assert rocket.vy == pytest.approx(-10.0)


def test_scenario_duration_governs_when_rocket_stays_low(clock, rng, screen):
    rocket = make_rocket(clock, rng, begin=0, duration=500)

    rocket.advance(screen)
    assert rocket.y == rocket.init_y

    # One 10 unit step per frame until the duration timer fires.
    clock.set(1)
    rocket.advance(screen)
    assert rocket.y == pytest.approx(rocket.init_y - 10)

    while not rocket.stopping:
        clock.advance(FRAME_MS)
        rocket.advance(screen)

    assert clock.now() >= 500
    assert rocket.y > constants.TOP_CLAMP
    assert rocket.bursting
    assert len(rocket.particles) == 50


def test_scenario_top_clamp_governs_when_rocket_climbs_fast(clock, rng, screen, circles):
    rocket = make_rocket(clock, rng, begin=0, duration=60000)

    for _ in range(200):
        rocket.advance(screen)
        if rocket.stopping:
            break
        clock.advance(FRAME_MS)

    assert rocket.stopping
    assert clock.now() < 60000
    assert rocket.y < constants.TOP_CLAMP
    assert all(center[1] >= constants.TOP_CLAMP for _, center, _ in projectile_calls(circles, rocket))
    # Bursting begins on the following frame, at the clamped position.
    assert not rocket.bursting
    clock.advance(FRAME_MS)
    rocket.advance(screen)
    assert rocket.bursting
    assert all(part.init_x == rocket.x for part in rocket.particles)


def test_burst_particles_are_ready_and_slow_down(clock, rng, screen):
    rocket = make_rocket(clock, rng, begin=0, duration=100, num_particles=20)
    while not rocket.bursting:
        clock.advance(FRAME_MS)
        rocket.advance(screen)

    for part in rocket.particles:
        assert part.ready
        assert 0 <= part.angle < 2 * math.pi

    speeds = [abs(part.speed) for part in rocket.particles]
    clock.advance(FRAME_MS)
    rocket.advance(screen)
    for before, part in zip(speeds, rocket.particles):
        assert abs(part.speed) == pytest.approx(before * constants.BURST_DECAY)


def test_burst_fades_and_ends(clock, rng, screen):
    rocket = make_rocket(clock, rng, begin=0, duration=100, num_particles=30)

    for _ in range(400):
        rocket.advance(screen)
        assert rocket.ended == (rocket.bursting and all(part.done for part in rocket.particles))
        if rocket.ended:
            break
        clock.advance(FRAME_MS)

    assert rocket.ended
    assert all(0.0 <= part.opacity < 1.0 for part in rocket.particles)


def test_empty_burst_ends_immediately(clock, rng, screen):
    rocket = make_rocket(clock, rng, begin=0, duration=50, num_particles=0)
    run_frames(rocket, clock, screen, 10)
    assert rocket.bursting
    assert rocket.ended


def test_reset_discards_burst_and_returns_to_origin(clock, rng, screen):
    rocket = make_rocket(clock, rng, begin=0, duration=100)
    run_frames(rocket, clock, screen, 20)
    assert rocket.bursting

    rocket.reset()

    assert rocket.particles == []
    assert not rocket.bursting
    assert (rocket.x, rocket.y) == (rocket.init_x, rocket.init_y)
    assert rocket.phase == "idle"
    assert len(rocket.timeline) == 0


def record_gates(elements, clock, screen, start, frames):
    clock.set(start)
    history = []
    for _ in range(frames):
        for element in elements:
            element.advance(screen)
        history.append([
            (element.started, element.emitting, element.stopping) for element in elements
        ])
        clock.advance(FRAME_MS)
    return history


def test_reset_then_replay_reproduces_gate_transitions(clock, rng, screen):
    elements = [
        make_rocket(clock, rng, begin=100, duration=60000),
        make_rocket(clock, rng, begin=50, duration=300, velocity=(0, 120)),
        Fountain(make_descriptor(begin=200, duration=400), BOUNDS, clock, rng, num_particles=20),
    ]

    first = record_gates(elements, clock, screen, start=0, frames=120)
    for element in elements:
        element.reset()
    second = record_gates(elements, clock, screen, start=123456, frames=120)

    assert first == second


def test_rocket_phases_follow_its_climb_and_burst(clock, rng, screen):
    rocket = make_rocket(clock, rng, begin=0, duration=100, num_particles=5)
    assert rocket.phase == "idle"

    rocket.advance(screen)
    assert rocket.phase == "waiting"

    clock.advance(FRAME_MS)
    rocket.advance(screen)
    assert rocket.phase == "rising"

    seen = set()
    for _ in range(200):
        clock.advance(FRAME_MS)
        rocket.advance(screen)
        seen.add(rocket.phase)
        if rocket.ended:
            break

    assert "bursting" in seen
    assert rocket.phase == "ended"
