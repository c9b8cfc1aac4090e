"""Physics engine for N-body simulations."""

from nbody_gravity.physics.body import Body, BodyArray
from nbody_gravity.physics.octant import Octant
from nbody_gravity.physics.barnes_hut import BarnesHutTree
from nbody_gravity.physics.simulator import Simulator, NumericalInstabilityError

__all__ = ["Body", "BodyArray", "Octant", "BarnesHutTree", "Simulator", "NumericalInstabilityError"]
