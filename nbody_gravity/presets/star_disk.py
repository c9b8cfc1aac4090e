"""Rotating disk of small bodies around a single central star."""

import numpy as np
from nbody_gravity.physics.body import BodyArray
from nbody_gravity.presets.base import Preset


class StarDiskPreset(Preset):
    """Central star at rest with a thin disk on near-circular orbits.
    
    Disk radii are drawn as ``sqrt(system_size) * sqrt(U(inner_bound, system_size))``
    and heights uniformly across ``system_thickness``. Orbital speed uses
    the star mass plus the share of the disk mass inside the radius, with
    the disk mass assumed to grow linearly from ``inner_bound``.
    """
    
    @property
    def name(self) -> str:
        return "star_disk"
    
    def generate(self) -> BodyArray:
        """Generate the star and ``n_bodies - 1`` disk particles.
        
        Returns:
            BodyArray with the star at index 0
        """
        cfg = self.config
        n = self.n_bodies
        n_disk = n - 1
        rng = np.random.default_rng(self.seed)
        
        angle = rng.uniform(0.0, 200.0 * np.pi, n_disk)
        radius = np.sqrt(cfg.system_size) * np.sqrt(rng.uniform(cfg.inner_bound, cfg.system_size, n_disk))
        height = rng.uniform(0.0, cfg.system_thickness, n_disk) - cfg.system_thickness / 2.0
        
        enclosed = cfg.solar_mass + ((radius - cfg.inner_bound) / cfg.system_size) * cfg.extra_mass * cfg.solar_mass
        speed = np.sqrt(cfg.G * enclosed / (radius * cfg.to_meters))
        
        positions = np.zeros((n, 3))
        velocities = np.zeros((n, 3))
        masses = np.empty(n)
        
        positions[1:, 0] = radius * np.cos(angle)
        positions[1:, 1] = radius * np.sin(angle)
        positions[1:, 2] = height
        velocities[1:, 0] = speed * np.sin(angle)
        velocities[1:, 1] = -speed * np.cos(angle)
        masses[0] = cfg.solar_mass
        masses[1:] = cfg.disk_body_mass
        
        return BodyArray(positions, velocities, masses, central_index=0)
    
    @property
    def disk_mass(self) -> float:
        """Total mass of the disk particles."""
        return self.config.disk_body_mass * (self.n_bodies - 1)
