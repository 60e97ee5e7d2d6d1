import numpy as np
import pytest

from forces import ForceField


@pytest.fixture
def field():
    return ForceField(attraction=50.0, repulsion=10.0, interaction_radius=100.0)


def test_equilibrium_distance(field):
    assert field.equilibrium_distance == pytest.approx(5.0)
    assert field.strength(5.0) == pytest.approx(0.0)


def test_strength_sign_across_the_band(field):
    # The inverse-square term dominates up close and pulls the pair together;
    # beyond the equilibrium the inverse term wins and pushes it apart.
    assert field.strength(1e-3) > 1e6
    assert field.strength(1.0) == pytest.approx(40.0)
    assert field.strength(10.0) == pytest.approx(-0.5)
    near_edge = field.strength(99.999)
    assert -0.1 < near_edge < 0


def test_strength_is_zero_outside_the_band(field):
    assert field.strength(0.0) == 0.0
    assert field.strength(100.0) == 0.0
    assert field.strength(250.0) == 0.0


def test_pair_forces_point_along_the_separation(field):
    positions = np.array([[100.0, 100.0], [110.0, 100.0]])
    forces = field.compute(positions)

    expected = field.strength(10.0)
    # Beyond equilibrium: each particle is pushed away from the other
    assert expected < 0
    assert tuple(forces[0]) == pytest.approx((expected, 0.0))
    assert tuple(forces[1]) == pytest.approx((-expected, 0.0))


def test_close_pair_pulls_together(field):
    positions = np.array([[100.0, 100.0], [100.0, 102.0]])
    forces = field.compute(positions)

    assert forces[0, 1] == pytest.approx(field.strength(2.0))
    assert forces[0, 1] > 0
    assert forces[1, 1] < 0


def test_distant_and_coincident_pairs_are_ignored(field):
    positions = np.array([[100.0, 100.0], [100.0, 100.0], [400.0, 400.0]])
    forces = field.compute(positions)
    assert np.all(forces == 0.0)


def test_forces_sum_over_all_neighbours(field):
    positions = np.array([[100.0, 100.0], [120.0, 100.0], [100.0, 130.0]])
    forces = field.compute(positions)

    assert forces[0, 0] == pytest.approx(field.strength(20.0))
    assert forces[0, 1] == pytest.approx(field.strength(30.0))


def test_apply_divides_by_mass(field):
    positions = np.array([[100.0, 100.0], [110.0, 100.0]])
    velocities = np.zeros((2, 2))
    masses = np.array([1.0, 4.0])

    field.apply(positions, velocities, masses, 0.5)

    strength = field.strength(10.0)
    assert tuple(velocities[0]) == pytest.approx((strength * 0.5, 0.0))
    assert tuple(velocities[1]) == pytest.approx((-strength * 0.5 / 4.0, 0.0))


def test_apply_with_no_particles_is_a_no_op(field):
    velocities = np.zeros((0, 2))
    field.apply(np.zeros((0, 2)), velocities, np.zeros(0), 0.1)
    assert velocities.shape == (0, 2)
