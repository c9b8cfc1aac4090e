"""Binary PPM (P6) frame output to numbered files or a named pipe."""

from pathlib import Path
from typing import Optional
import numpy as np


def ppm_bytes(frame: np.ndarray) -> bytes:
    """Encode an (H, W, 3) uint8 image as a binary PPM."""
    if frame.ndim != 3 or frame.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {frame.shape}")
    height, width = frame.shape[:2]
    header = f"P6\n{width} {height}\n255\n".encode("ascii")
    return header + np.ascontiguousarray(frame, dtype=np.uint8).tobytes()


class PPMFrameWriter:
    """Write frames as ``StepNNNNN.ppm`` files, or stream them into a pipe.
    
    When streaming, frames are written back to back with no file names, so
    a reader such as ``ffmpeg -f image2pipe -i <fifo>`` can encode a video.
    """
    
    def __init__(self, output_dir: str = "images", pipe_path: Optional[str] = None):
        """Initialize frame writer.
        
        Args:
            output_dir: Directory for numbered frame files
            pipe_path: Named pipe (FIFO) to stream into instead of files
        """
        self.output_dir = Path(output_dir)
        self.pipe_path = pipe_path
        self.frames_written = 0
        self._pipe = None
        if pipe_path is not None:
            self._pipe = open(pipe_path, 'wb')
        else:
            self.output_dir.mkdir(parents=True, exist_ok=True)
    
    def frame_path(self, index: int) -> Path:
        return self.output_dir / f"Step{index:05d}.ppm"
    
    def write(self, frame: np.ndarray, step: int):
        """Write one frame.
        
        Args:
            frame: (H, W, 3) uint8 image
            step: Simulation step (frames are numbered in write order)
        """
        data = ppm_bytes(frame)
        if self._pipe is not None:
            self._pipe.write(data)
            self._pipe.flush()
        else:
            self.frame_path(self.frames_written + 1).write_bytes(data)
        self.frames_written += 1
    
    def close(self):
        if self._pipe is not None:
            self._pipe.close()
            self._pipe = None
