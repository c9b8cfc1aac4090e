"""Scatter-plot renderer using matplotlib (off-screen)."""

from typing import Optional, Tuple
import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from nbody_gravity.render.base import Renderer, Snapshot
from nbody_gravity.utils.config import SimulationConfig


class ScatterRenderer(Renderer):
    """2D scatter of body positions colored by speed."""
    
    def __init__(
        self,
        config: SimulationConfig,
        sink=None,
        figsize: Tuple[int, int] = (8, 8),
        dpi: int = 100,
        point_size: float = 1.0,
    ):
        """Initialize scatter renderer.
        
        Args:
            config: Simulation configuration (plot extent)
            sink: Optional frame sink with ``write(frame, step)``
            figsize: Figure size (width, height) in inches
            dpi: Dots per inch
            point_size: Marker size for disk bodies
        """
        self.config = config
        self.sink = sink
        self.point_size = point_size
        self.last_frame: Optional[np.ndarray] = None
        
        self.fig = Figure(figsize=figsize, dpi=dpi, facecolor='black')
        self.canvas = FigureCanvasAgg(self.fig)
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.extent = config.system_size * config.render_scale
    
    def _setup_axes(self, step: int):
        self.ax.clear()
        self.ax.set_facecolor('black')
        self.ax.set_aspect('equal')
        self.ax.set_xlim(-self.extent, self.extent)
        self.ax.set_ylim(-self.extent, self.extent)
        self.ax.set_axis_off()
        self.ax.text(0.02, 0.97, f"step {step}", color='white', transform=self.ax.transAxes,
                     fontsize=9, va='top')
    
    def render(self, snapshot: Snapshot, step: int):
        positions, velocities, masses = snapshot
        self._setup_axes(step)
        
        speeds = np.linalg.norm(velocities, axis=1)
        span = speeds.max() - speeds.min()
        colors = (speeds - speeds.min()) / (span + 1e-10)
        
        heaviest = int(np.argmax(masses))
        disk = np.ones(len(masses), dtype=bool)
        disk[heaviest] = False
        self.ax.scatter(
            positions[disk, 0], positions[disk, 1],
            c=colors[disk], s=self.point_size, cmap='viridis',
            vmin=0.0, vmax=1.0, linewidths=0,
        )
        self.ax.scatter(positions[heaviest, 0], positions[heaviest, 1], c='yellow', s=30.0)
        
        self.last_frame = self.capture_frame()
        if self.sink is not None:
            self.sink.write(self.last_frame, step)
    
    def capture_frame(self) -> np.ndarray:
        """Capture current frame as (H, W, 3) uint8 image array."""
        self.canvas.draw()
        rgba = np.asarray(self.canvas.buffer_rgba())
        return rgba[:, :, :3].copy()
    
    def close(self):
        self.fig.clear()
        if self.sink is not None:
            self.sink.close()
            self.sink = None
