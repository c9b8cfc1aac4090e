"""
nbody-gravity - Barnes-Hut N-body simulation of a star and its disk.

Features:
- 3D octree with incremental center-of-mass aggregation
- Exact central-star pass plus opening-angle approximated disk forces
- Thread-parallel force accumulation
- Glow and scatter renderers, PPM frames to files or a named pipe, GIF export
- CLI with JSON/YAML configuration
"""

__version__ = "0.1.0"

from nbody_gravity.physics.simulator import Simulator
from nbody_gravity.physics.body import Body, BodyArray
from nbody_gravity.utils.config import SimulationConfig

__all__ = [
    "Simulator",
    "Body",
    "BodyArray",
    "SimulationConfig",
]
