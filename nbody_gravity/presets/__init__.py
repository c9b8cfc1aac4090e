"""Preset initial conditions."""

from nbody_gravity.presets.base import Preset
from nbody_gravity.presets.star_disk import StarDiskPreset

__all__ = ["Preset", "StarDiskPreset"]
