"""Frame output."""

from nbody_gravity.io.frame_writer import PPMFrameWriter, ppm_bytes
from nbody_gravity.io.gif_exporter import GIFExporter

__all__ = ["PPMFrameWriter", "GIFExporter", "ppm_bytes"]
