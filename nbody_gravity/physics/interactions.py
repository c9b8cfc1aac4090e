"""Pairwise gravity with softening and optional velocity drag.

Positions are in AU and converted to meters here. The accumulated
"acceleration" is a velocity increment: the force law is already scaled
by the time step.
"""

from typing import Optional
import numpy as np
from nbody_gravity.physics.body import Body, BodyArray
from nbody_gravity.physics.vector import magnitude
from nbody_gravity.utils.config import SimulationConfig

# Drag contributions below this are ignored
DRAG_CUTOFF = 1e-4


def softened_force(dist: float, m_target: float, m_source: float, config: SimulationConfig) -> float:
    """Time-step scaled force magnitude divided by separation.

    F = dt * G * m_t * m_s / ((d^2 + eps^2) * d); multiplying by the
    separation vector gives the force vector.
    """
    eps = config.softening
    return config.time_step * (config.G * m_target * m_source) / ((dist * dist + eps * eps) * dist)


def drag_coefficient(dist: float, config: SimulationConfig) -> float:
    """Damping strength, halved every ``1 / drag_factor`` AU of separation."""
    return 0.5 / 2.0 ** (config.drag_factor * ((dist + config.softening) / config.to_meters))


def direct_interaction(
    target_acc: np.ndarray,
    target_pos: np.ndarray,
    target_vel: np.ndarray,
    target_mass: float,
    source_pos: np.ndarray,
    source_mass: float,
    config: SimulationConfig,
    source_vel: Optional[np.ndarray] = None,
    single: bool = False,
) -> bool:
    """Pull a target towards a source, writing only ``target_acc``.

    Args:
        target_acc: Target accumulator (3,), updated in place
        target_pos: Target position in AU
        target_vel: Target velocity in m/s
        target_mass: Target mass
        source_pos: Source position in AU (a real body or a centroid)
        source_mass: Source mass
        config: Physical constants
        source_vel: Source velocity, needed for drag
        single: True when the source is one real body rather than an
            aggregate; drag only applies to such pairs

    Returns:
        False if the pair coincides and nothing was applied
    """
    diff = (target_pos - source_pos) * config.to_meters
    dist = magnitude(diff)
    if dist == 0.0:
        return False

    F = softened_force(dist, target_mass, source_mass, config)
    target_acc -= (F / target_mass) * diff

    if config.enable_drag and single and source_vel is not None:
        friction = drag_coefficient(dist, config)
        if friction > DRAG_CUTOFF:
            target_acc += friction * (source_vel - target_vel) / 2.0
    return True


def interact_bodies(target: Body, source: Body, config: SimulationConfig, single: bool = True) -> bool:
    """``direct_interaction`` on two ``Body`` objects; only ``target`` changes."""
    return direct_interaction(
        target.acceleration,
        target.position,
        target.velocity,
        target.mass,
        source.position,
        source.mass,
        config,
        source_vel=source.velocity,
        single=single,
    )


def pairwise_interaction(a: Body, b: Body, config: SimulationConfig) -> bool:
    """Equal and opposite pull between two bodies, updating both accumulators."""
    diff = (a.position - b.position) * config.to_meters
    dist = magnitude(diff)
    if dist == 0.0:
        return False
    F = softened_force(dist, a.mass, b.mass, config)
    a.acceleration -= (F / a.mass) * diff
    b.acceleration += (F / b.mass) * diff
    return True


def central_pass_chunk(
    bodies: BodyArray,
    indices: np.ndarray,
    config: SimulationConfig,
) -> np.ndarray:
    """Exact interaction of the central body with a chunk of bodies.

    Each row in ``indices`` gets its own increment written in place. The
    central body's share is returned as a partial sum instead of written,
    so chunks can run concurrently and be reduced afterwards.

    Args:
        bodies: Body array
        indices: Non-central body indices handled by this chunk
        config: Physical constants

    Returns:
        Increment (3,) owed to the central body
    """
    if len(indices) == 0:
        return np.zeros(3)
    c = bodies.central_index
    sun_pos = bodies.positions[c]
    sun_mass = bodies.masses[c]

    # diff points from each body to the sun, matching (a - b) with a = sun
    diff = (sun_pos - bodies.positions[indices]) * config.to_meters
    dist = np.sqrt(np.sum(diff * diff, axis=1))
    masses = bodies.masses[indices]
    valid = dist > 0.0
    safe = np.where(valid, dist, 1.0)
    eps_sq = config.softening * config.softening
    F = config.time_step * config.G * sun_mass * masses / ((safe * safe + eps_sq) * safe)
    F = np.where(valid, F, 0.0)

    force = F[:, np.newaxis] * diff
    bodies.accelerations[indices] += force / masses[:, np.newaxis]
    return -np.sum(force, axis=0) / sun_mass


def pairwise_force_sum(bodies: BodyArray, config: SimulationConfig, target: int) -> np.ndarray:
    """Exact O(N) sum of gravity increments on one body, for reference checks."""
    acc = np.zeros(3)
    for j in range(len(bodies)):
        if j == target:
            continue
        direct_interaction(
            acc,
            bodies.positions[target],
            bodies.velocities[target],
            bodies.masses[target],
            bodies.positions[j],
            bodies.masses[j],
            config,
        )
    return acc

