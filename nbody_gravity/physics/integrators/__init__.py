"""Numerical integrators for N-body simulations."""

from nbody_gravity.physics.integrators.base import Integrator
from nbody_gravity.physics.integrators.euler import EulerIntegrator

__all__ = ["Integrator", "EulerIntegrator"]
