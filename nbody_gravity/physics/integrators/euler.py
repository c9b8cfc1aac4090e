"""Semi-implicit Euler integrator (kick then drift)."""

from nbody_gravity.physics.body import BodyArray
from nbody_gravity.physics.integrators.base import Integrator
from nbody_gravity.utils.config import SimulationConfig


class EulerIntegrator(Integrator):
    """Symplectic Euler step.
    
    The accumulators already hold ``a * dt`` (the force law is scaled by
    the time step), so the kick adds them to the velocity directly. The
    drift then uses the updated velocity and converts meters back to AU.
    """
    
    @property
    def name(self) -> str:
        return "euler"
    
    @property
    def order(self) -> int:
        return 1
    
    def step(self, bodies: BodyArray, config: SimulationConfig):
        """Euler step: v += dv, x += v * dt / to_meters, dv = 0."""
        bodies.velocities += bodies.accelerations
        bodies.positions += bodies.velocities * (config.time_step / config.to_meters)
        bodies.reset_accelerations()
