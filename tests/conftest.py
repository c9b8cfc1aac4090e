"""Shared fixtures."""

import numpy as np
import pytest
from nbody_gravity.physics.body import BodyArray
from nbody_gravity.utils.config import SimulationConfig


@pytest.fixture
def config():
    """Small single-threaded configuration."""
    return SimulationConfig(n_bodies=64, n_steps=2, workers=1, width=64, height=64, dot_size=4)


@pytest.fixture
def cluster():
    """Central star plus 120 bodies scattered in a 4 AU cube, unequal masses."""
    rng = np.random.default_rng(1234)
    n = 121
    positions = rng.uniform(-2.0, 2.0, size=(n, 3))
    positions[0] = 0.0
    velocities = rng.normal(0.0, 1.0e4, size=(n, 3))
    masses = rng.uniform(1.0e24, 5.0e24, size=n)
    masses[0] = 2.0e30
    return BodyArray(positions, velocities, masses, central_index=0)
