"""Tests for numerical integrators."""

import numpy as np
from nbody_gravity.physics.body import BodyArray
from nbody_gravity.physics.integrators import EulerIntegrator, Integrator


def test_euler_integrator(config):
    """Kick, then drift with the new velocity, then clear."""
    integrator = EulerIntegrator()
    bodies = BodyArray(
        [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]],
        [[0.0, 0.0, 0.0], [0.0, 1000.0, 0.0]],
        [2e30, 1e24],
    )
    bodies.accelerations[1] = [0.0, 0.0, 50.0]

    integrator.step(bodies, config)

    np.testing.assert_allclose(bodies.velocities[1], [0.0, 1000.0, 50.0])
    scale = config.time_step / config.to_meters
    np.testing.assert_allclose(bodies.positions[1], [1.0, 1000.0 * scale, 50.0 * scale])
    np.testing.assert_array_equal(bodies.positions[0], [0.0, 0.0, 0.0])
    assert not np.any(bodies.accelerations)
    assert isinstance(integrator, Integrator)
    assert integrator.name == "euler"
    assert integrator.order == 1


def test_euler_keeps_arrays_in_place(config):
    bodies = BodyArray(np.zeros((3, 3)), np.ones((3, 3)), [1.0, 2.0, 3.0])
    positions = bodies.positions
    velocities = bodies.velocities
    EulerIntegrator().step(bodies, config)
    assert bodies.positions is positions
    assert bodies.velocities is velocities
