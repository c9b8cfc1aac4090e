"""Tests for body storage."""

import numpy as np
import pytest
from nbody_gravity.physics.body import Body, BodyArray
from nbody_gravity.physics.vector import as_vec3, magnitude


def test_body_defaults():
    body = Body([1, 2, 3], mass=5)
    np.testing.assert_array_equal(body.position, [1.0, 2.0, 3.0])
    np.testing.assert_array_equal(body.velocity, np.zeros(3))
    assert body.mass == 5.0


@pytest.mark.parametrize("mass", [0.0, -1.0])
def test_body_rejects_non_positive_mass(mass):
    with pytest.raises(ValueError):
        Body([0.0, 0.0, 0.0], mass=mass)


def test_vec3_helpers():
    with pytest.raises(ValueError):
        as_vec3([1.0, 2.0])
    assert magnitude(np.array([3.0, 4.0, 0.0])) == pytest.approx(5.0)


def test_from_bodies_and_indexing():
    bodies = BodyArray.from_bodies([
        Body([0.0, 0.0, 0.0], mass=1.0),
        Body([1.0, 0.0, 0.0], [0.0, 5.0, 0.0], mass=9.0),
        Body([2.0, 0.0, 0.0], mass=3.0, acceleration=[1.0, 1.0, 1.0]),
    ])
    assert len(bodies) == bodies.n_bodies == 3
    assert bodies.central_index == 1
    assert bodies.total_mass == pytest.approx(13.0)
    np.testing.assert_array_equal(bodies.non_central_indices(), [0, 2])
    np.testing.assert_array_equal(bodies.accelerations[2], [1.0, 1.0, 1.0])

    copy = bodies[1]
    copy.position[0] = 100.0
    assert bodies.positions[1, 0] == 1.0


def test_body_array_validation():
    with pytest.raises(ValueError):
        BodyArray(np.zeros((2, 3)), np.zeros((3, 3)), [1.0, 1.0])
    with pytest.raises(ValueError):
        BodyArray(np.zeros((2, 3)), np.zeros((2, 3)), [1.0, 0.0])
    with pytest.raises(ValueError):
        BodyArray(np.zeros((0, 3)), np.zeros((0, 3)), [])
    with pytest.raises(ValueError):
        BodyArray(np.zeros((2, 3)), np.zeros((2, 3)), [1.0, 1.0], central_index=2)


def test_reset_and_copy():
    bodies = BodyArray(np.zeros((2, 3)), np.zeros((2, 3)), [1.0, 2.0])
    bodies.accelerations[:] = 7.0
    other = bodies.copy()
    bodies.reset_accelerations()
    assert not np.any(bodies.accelerations)
    assert np.all(other.accelerations == 7.0)
    assert other.central_index == bodies.central_index


def test_snapshot_is_read_only_copy():
    bodies = BodyArray(np.zeros((2, 3)), np.zeros((2, 3)), [1.0, 2.0])
    positions, velocities, masses = bodies.snapshot()
    with pytest.raises(ValueError):
        positions[0, 0] = 1.0
    bodies.positions[0, 0] = 2.0
    assert positions[0, 0] == 0.0
