"""Velocity-colored glow renderer (orthographic x/y projection)."""

from typing import Optional
import numpy as np
from nbody_gravity.render.base import Renderer, Snapshot
from nbody_gravity.utils.config import SimulationConfig


def clamp(x):
    return np.clip(x, 0.0, 1.0)


class GlowRenderer(Renderer):
    """Splats each body as a soft dot into a floating point image.
    
    Dots are colored by speed from blue (slow) through green to red (fast);
    bodies slower than a fraction of the outer circular speed are not drawn.
    Overlapping dots add up and the sum is clamped when the frame is
    converted to 8 bits.
    """
    
    def __init__(self, config: SimulationConfig, sink=None):
        """Initialize glow renderer.
        
        Args:
            config: Image size, scale and particle look
            sink: Optional frame sink with ``write(frame, step)``
        """
        self.config = config
        self.width = config.width
        self.height = config.height
        self.sink = sink
        self.last_frame: Optional[np.ndarray] = None
        self.hd_image = np.zeros((self.height, self.width, 3))
        
        total_mass = config.solar_mass * (1.0 + config.extra_mass)
        self.velocity_min = np.sqrt(0.8 * config.G * total_mass / (config.system_size * config.to_meters))
        self.velocity_max = config.max_vel_color
        
        half = config.dot_size // 2
        self._offsets = [(i, j) for i in range(-half, half) for j in range(-half, half)]
    
    def to_pixel_space(self, p, size: int):
        """Map a coordinate in AU to a pixel coordinate along one axis."""
        return (size / 2.0) * (1.0 + p / (self.config.system_size * self.config.render_scale))
    
    def colors(self, speeds: np.ndarray) -> np.ndarray:
        """RGB in [0, 1] for each speed (n, 3)."""
        portion = np.sqrt(np.maximum(speeds - self.velocity_min, 0.0) / self.velocity_max)
        r = clamp(4.0 * (portion - 0.333))
        g = clamp(np.minimum(4.0 * portion, 4.0 * (1.0 - portion)))
        b = clamp(4.0 * (0.5 - portion))
        return np.stack([r, g, b], axis=1)
    
    def draw(self, positions: np.ndarray, velocities: np.ndarray) -> np.ndarray:
        """Accumulate all bodies into the HDR buffer and return it."""
        self.hd_image[:] = 0.0
        cfg = self.config
        
        px = self.to_pixel_space(positions[:, 0], self.width)
        py = self.to_pixel_space(positions[:, 1], self.height)
        speeds = np.linalg.norm(velocities, axis=1)
        dot = cfg.dot_size
        visible = (
            (px > dot) & (px < self.width - dot)
            & (py > dot) & (py < self.height - dot)
            & (speeds >= self.velocity_min)
        )
        if not np.any(visible):
            return self.hd_image
        
        px = px[visible]
        py = py[visible]
        color = self.colors(speeds[visible])
        x0 = np.floor(px)
        y0 = np.floor(py)
        sharp = cfg.particle_sharpness
        for i, j in self._offsets:
            factor = cfg.particle_brightness / (
                (np.exp((sharp * (x0 + i - px)) ** 2) + np.exp((sharp * (y0 + j - py)) ** 2)) ** 0.75 + 1.0
            )
            cols = (x0 + i).astype(np.int64)
            rows = (y0 + j).astype(np.int64)
            np.add.at(self.hd_image, (rows, cols), color * factor[:, np.newaxis])
        return self.hd_image
    
    def to_frame(self) -> np.ndarray:
        """Convert the HDR buffer to an (H, W, 3) uint8 image."""
        return (255.0 * clamp(self.hd_image)).astype(np.uint8)
    
    def render(self, snapshot: Snapshot, step: int):
        positions, velocities, _ = snapshot
        self.draw(positions, velocities)
        self.last_frame = self.to_frame()
        if self.sink is not None:
            self.sink.write(self.last_frame, step)
    
    def close(self):
        if self.sink is not None:
            self.sink.close()
            self.sink = None
