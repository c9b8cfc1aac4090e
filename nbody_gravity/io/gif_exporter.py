"""GIF export functionality."""

import numpy as np
import imageio
from typing import List, Optional


class GIFExporter:
    """Collect rendered frames and write them as an animated GIF.
    
    Frames are held in memory until ``close``, since the GIF is encoded in
    one pass. A long run should thin frames with ``render_interval`` or
    stream PPM frames through a pipe instead.
    """
    
    def __init__(self, output_path: str, fps: int = 10, duration: Optional[float] = None):
        """Initialize GIF exporter.
        
        Args:
            output_path: Output file path (.gif)
            fps: Frames per second (used if duration is None)
            duration: Frame duration in seconds (overrides fps)
        """
        if duration is None:
            if fps < 1:
                raise ValueError(f"fps must be at least 1, got {fps}")
            duration = 1.0 / fps
        elif not duration > 0:
            raise ValueError(f"duration must be positive, got {duration}")
        self.output_path = output_path
        self.fps = fps
        self.duration = duration
        self.frames: List[np.ndarray] = []
    
    def write(self, frame: np.ndarray, step: int):
        """Add a frame to the export queue.
        
        Args:
            frame: Image array (H, W, 3) uint8
            step: Simulation step (unused; frames keep arrival order)
        """
        if frame.dtype != np.uint8:
            # Normalize to 0-255
            frame = (np.clip(frame, 0.0, 1.0) * 255).astype(np.uint8)
        self.frames.append(frame.copy())
    
    def export(self):
        """Export all frames to GIF file."""
        if not self.frames:
            raise ValueError("No frames to export")
        
        imageio.mimsave(
            self.output_path,
            self.frames,
            duration=self.duration,
            loop=0  # Infinite loop
        )
    
    def close(self):
        """Write the GIF if any frames were collected."""
        if self.frames:
            self.export()
            self.frames = []
