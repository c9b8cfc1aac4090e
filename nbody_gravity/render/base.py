"""Base renderer interface."""

from abc import ABC, abstractmethod
from typing import Tuple
import numpy as np

# (positions, velocities, masses), all read-only
Snapshot = Tuple[np.ndarray, np.ndarray, np.ndarray]


class Renderer(ABC):
    """Abstract base class for renderers."""
    
    @abstractmethod
    def render(self, snapshot: Snapshot, step: int):
        """Render one frame.
        
        Args:
            snapshot: Read-only (positions, velocities, masses)
            step: Simulation step the snapshot was taken after
        """
        pass
    
    @abstractmethod
    def close(self):
        """Flush output and release resources."""
        pass
