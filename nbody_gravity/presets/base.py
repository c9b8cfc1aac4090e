"""Base class for preset scenarios."""

from abc import ABC, abstractmethod
from nbody_gravity.physics.body import BodyArray
from nbody_gravity.utils.config import SimulationConfig


class Preset(ABC):
    """Abstract base class for initial-condition generators."""
    
    def __init__(self, config: SimulationConfig):
        """Initialize preset.
        
        Args:
            config: Simulation configuration (body count, masses, seed)
        """
        self.config = config
        self.n_bodies = config.n_bodies
        self.seed = config.seed
    
    @abstractmethod
    def generate(self) -> BodyArray:
        """Generate initial conditions.
        
        Returns:
            BodyArray with the central body at index 0
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass
