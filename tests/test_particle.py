import numpy as np
import pytest

from constants import DEFAULT_DAMPING, DEFAULT_GRAVITY, DEFAULT_MAX_SPEED, WINDOW_HEIGHT, WINDOW_WIDTH
from simulation import ParticleSystem


def test_mass_is_radius_squared(system):
    particle = system.spawn(100.0, 100.0, 4.0)
    assert particle.mass == pytest.approx(16.0)
    assert particle.radius == pytest.approx(4.0)


def test_single_step_under_gravity(system):
    particle = system.spawn(600.0, 400.0, 3.0)
    particle.integrate(0.1)

    assert particle.velocity[0] == pytest.approx(0.0)
    assert particle.velocity[1] == pytest.approx(DEFAULT_GRAVITY * 0.1)
    assert particle.position[0] == pytest.approx(600.0)
    assert particle.position[1] == pytest.approx(400.0981)


def test_speed_is_capped_and_direction_kept(system):
    particle = system.spawn(600.0, 400.0, 3.0)
    particle.velocity[:] = (3000.0, 4000.0)
    system.gravity = 0.0

    particle.integrate(0.001)

    assert particle.speed == pytest.approx(DEFAULT_MAX_SPEED)
    vx, vy = particle.velocity
    assert vx / vy == pytest.approx(3.0 / 4.0)


def test_speed_below_cap_is_untouched(system):
    particle = system.spawn(600.0, 400.0, 3.0)
    particle.velocity[:] = (30.0, -40.0)
    system.gravity = 0.0

    particle.integrate(0.01)

    assert tuple(particle.velocity) == pytest.approx((30.0, -40.0))


def test_left_wall_reflects_and_damps(system):
    particle = system.spawn(5.0, 400.0, 3.0)
    particle.velocity[:] = (-100.0, 0.0)
    system.gravity = 0.0

    particle.integrate(0.1)

    assert particle.position[0] == pytest.approx(3.0)
    assert particle.velocity[0] == pytest.approx(100.0 * DEFAULT_DAMPING)
    assert abs(particle.velocity[0]) < 100.0


def test_floor_reflects_and_damps(system):
    particle = system.spawn(600.0, WINDOW_HEIGHT - 5.0, 5.0)
    particle.velocity[:] = (0.0, 200.0)
    system.gravity = 0.0

    particle.integrate(0.1)

    assert particle.position[1] == pytest.approx(WINDOW_HEIGHT - 5.0)
    assert particle.velocity[1] == pytest.approx(-200.0 * DEFAULT_DAMPING)


def test_right_wall_reflects_and_damps(system):
    particle = system.spawn(WINDOW_WIDTH - 5.0, 400.0, 4.0)
    particle.velocity[:] = (150.0, 0.0)
    system.gravity = 0.0

    particle.integrate(0.1)

    assert particle.position[0] == pytest.approx(WINDOW_WIDTH - 4.0)
    assert particle.velocity[0] == pytest.approx(-150.0 * DEFAULT_DAMPING)


def test_ceiling_reflects_and_damps(system):
    particle = system.spawn(600.0, 6.0, 3.0)
    particle.velocity[:] = (0.0, -80.0)
    system.gravity = 0.0

    particle.integrate(0.1)

    assert particle.position[1] == pytest.approx(3.0)
    assert particle.velocity[1] == pytest.approx(80.0 * DEFAULT_DAMPING)


def test_min_bound_wins_when_both_walls_are_crossed():
    # Wider than the world, so the particle overlaps both walls on each axis
    system = ParticleSystem({'gravity': 0.0}, 10, 10, rng=np.random.default_rng(0))
    particle = system.spawn(5.0, 5.0, 6.0)
    particle.velocity[:] = (1.0, 1.0)

    particle.integrate(0.1)

    assert tuple(particle.position) == pytest.approx((6.0, 6.0))
    assert tuple(particle.velocity) == pytest.approx((-DEFAULT_DAMPING, -DEFAULT_DAMPING))


def test_containment_holds_for_random_particles(system):
    rng = np.random.default_rng(7)
    particles = [system.spawn(x, y, r) for x, y, r in zip(
        rng.uniform(0, WINDOW_WIDTH, 50), rng.uniform(0, WINDOW_HEIGHT, 50), rng.uniform(3, 15, 50)
    )]
    for particle in particles:
        particle.velocity[:] = rng.uniform(-2000, 2000, 2)

    for _ in range(20):
        for particle in particles:
            particle.integrate(0.5)
            x, y = particle.position
            r = particle.radius
            assert r <= x <= WINDOW_WIDTH - r
            assert r <= y <= WINDOW_HEIGHT - r
            assert particle.speed <= DEFAULT_MAX_SPEED + 1e-9


def test_apply_force_scales_with_inverse_mass(system):
    light = system.spawn(100.0, 100.0, 2.0)
    heavy = system.spawn(300.0, 100.0, 4.0)

    light.apply_force((8.0, -4.0), 0.5)
    heavy.apply_force((8.0, -4.0), 0.5)

    assert tuple(light.velocity) == pytest.approx((1.0, -0.5))
    assert tuple(heavy.velocity) == pytest.approx((0.25, -0.125))


def test_render_color_tracks_speed(system):
    particle = system.spawn(600.0, 400.0, 3.0)
    assert particle.render_color() == (255, 0, 0)

    particle.velocity[:] = (DEFAULT_MAX_SPEED * 2 / 3, 0.0)
    assert particle.render_color() == (0, 0, 255)


def test_base_color_is_assigned_but_independent_of_render(system):
    particle = system.spawn(600.0, 400.0, 3.0)
    base = particle.base_color
    assert len(base) == 3
    assert all(0 <= channel < 255 for channel in base)


def test_handles_survive_storage_growth(system):
    first = system.spawn(10.0, 10.0, 3.0)
    for i in range(300):
        system.spawn(50.0 + i, 50.0, 3.0)
    first.velocity[:] = (1.0, 2.0)

    assert system[0] == first
    assert tuple(system.velocities[0]) == (1.0, 2.0)
    assert tuple(first.position) == (10.0, 10.0)
