"""Renderers that turn body snapshots into images."""

from nbody_gravity.render.base import Renderer
from nbody_gravity.render.glow import GlowRenderer
from nbody_gravity.render.scatter import ScatterRenderer

__all__ = ["Renderer", "GlowRenderer", "ScatterRenderer"]
