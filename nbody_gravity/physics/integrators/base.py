"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from nbody_gravity.physics.body import BodyArray
from nbody_gravity.utils.config import SimulationConfig


class Integrator(ABC):
    """Abstract interface for numerical integrators."""
    
    @abstractmethod
    def step(self, bodies: BodyArray, config: SimulationConfig):
        """Advance velocities and positions in place from accumulated increments.
        
        Args:
            bodies: Body array; accumulators are consumed and cleared
            config: Simulation configuration (time step, unit conversion)
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass
    
    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (1 for Euler)."""
        pass
