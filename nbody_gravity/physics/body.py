"""Particle state: single bodies and the in-place body array."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple
import numpy as np
from nbody_gravity.physics.vector import as_vec3, vec3


@dataclass
class Body:
    """A single point mass.

    ``acceleration`` accumulates velocity increments during a step and is
    cleared by the integrator.
    """
    position: np.ndarray
    velocity: np.ndarray = field(default_factory=vec3)
    mass: float = 1.0
    acceleration: np.ndarray = field(default_factory=vec3)

    def __post_init__(self):
        self.position = as_vec3(self.position)
        self.velocity = as_vec3(self.velocity)
        self.acceleration = as_vec3(self.acceleration)
        self.mass = float(self.mass)
        if not self.mass > 0:
            raise ValueError(f"Body mass must be positive, got {self.mass}")


class BodyArray:
    """Struct-of-arrays storage for every body in a run.

    Allocated once and mutated in place by the simulator. Row ``i`` of each
    array belongs to body ``i``; ``central_index`` marks the dominant mass.
    """

    def __init__(
        self,
        positions,
        velocities,
        masses,
        central_index: Optional[int] = None,
    ):
        """Initialize body array.

        Args:
            positions: Positions (n, 3) in length units (AU)
            velocities: Velocities (n, 3) in m/s
            masses: Masses (n,) in kg, all strictly positive
            central_index: Index of the central body (default: most massive)
        """
        positions = np.array(positions, dtype=np.float64)
        velocities = np.array(velocities, dtype=np.float64)
        masses = np.array(masses, dtype=np.float64).reshape(-1)
        n = masses.shape[0]
        if positions.shape != (n, 3) or velocities.shape != (n, 3):
            raise ValueError(
                f"positions and velocities must have shape ({n}, 3), got "
                f"{positions.shape} and {velocities.shape}"
            )
        if n == 0:
            raise ValueError("BodyArray needs at least one body")
        if not np.all(masses > 0):
            raise ValueError("All body masses must be positive")

        self.positions = positions
        self.velocities = velocities
        self.masses = masses
        self.accelerations = np.zeros((n, 3))
        if central_index is None:
            central_index = int(np.argmax(masses))
        if not 0 <= central_index < n:
            raise ValueError(f"central_index {central_index} out of range for {n} bodies")
        self.central_index = int(central_index)

    @classmethod
    def from_bodies(cls, bodies: Iterable[Body], central_index: Optional[int] = None) -> "BodyArray":
        """Pack a sequence of ``Body`` objects into a new array."""
        bodies = list(bodies)
        array = cls(
            [b.position for b in bodies],
            [b.velocity for b in bodies],
            [b.mass for b in bodies],
            central_index=central_index,
        )
        array.accelerations[:] = [b.acceleration for b in bodies]
        return array

    def __len__(self) -> int:
        return self.masses.shape[0]

    def __getitem__(self, index: int) -> Body:
        """Copy of body ``index``."""
        return Body(
            position=self.positions[index].copy(),
            velocity=self.velocities[index].copy(),
            mass=self.masses[index],
            acceleration=self.accelerations[index].copy(),
        )

    @property
    def n_bodies(self) -> int:
        return len(self)

    @property
    def total_mass(self) -> float:
        return float(np.sum(self.masses))

    def non_central_indices(self) -> np.ndarray:
        """Indices of every body except the central one."""
        indices = np.arange(len(self))
        return indices[indices != self.central_index]

    def reset_accelerations(self):
        """Zero every accumulator."""
        self.accelerations[:] = 0.0

    def copy(self) -> "BodyArray":
        """Deep copy, including accumulators."""
        other = BodyArray(self.positions, self.velocities, self.masses, self.central_index)
        other.accelerations[:] = self.accelerations
        return other

    def snapshot(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Read-only copies of (positions, velocities, masses) for renderers."""
        out = (self.positions.copy(), self.velocities.copy(), self.masses.copy())
        for arr in out:
            arr.flags.writeable = False
        return out
