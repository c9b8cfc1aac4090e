"""Diagnostics for N-body simulations."""

import numpy as np
from typing import Tuple
from nbody_gravity.physics.body import BodyArray


class Diagnostics:
    """Summary quantities computed from a body array."""

    def __init__(self, bodies: BodyArray):
        """Initialize diagnostics.

        Args:
            bodies: Body array to inspect
        """
        self.bodies = bodies

    def kinetic_energy(self) -> float:
        """K = 0.5 * Σ m_i * v_i^2 in joules."""
        v_sq = np.sum(self.bodies.velocities ** 2, axis=1)
        return float(0.5 * np.sum(self.bodies.masses * v_sq))

    def total_momentum(self) -> np.ndarray:
        """Σ m_i * v_i in kg m/s."""
        return np.sum(self.bodies.masses[:, np.newaxis] * self.bodies.velocities, axis=0)

    def center_of_mass(self) -> np.ndarray:
        """Mass-weighted mean position in AU."""
        masses = self.bodies.masses
        return np.sum(masses[:, np.newaxis] * self.bodies.positions, axis=0) / np.sum(masses)

    def mass_balance(self) -> Tuple[float, float]:
        """Disk mass above and below the x axis (y > 0 vs y <= 0).

        The central body is excluded. A lopsided ratio shows the disk
        drifting relative to the star.
        """
        idx = self.bodies.non_central_indices()
        above = self.bodies.positions[idx, 1] > 0.0
        masses = self.bodies.masses[idx]
        return float(np.sum(masses[above])), float(np.sum(masses[~above]))

    def central_acceleration(self) -> np.ndarray:
        """Current accumulator of the central body."""
        return self.bodies.accelerations[self.bodies.central_index].copy()

    def max_speed(self) -> float:
        return float(np.max(np.linalg.norm(self.bodies.velocities, axis=1)))
