"""Configuration and reproducibility helpers."""

from nbody_gravity.utils.config import SimulationConfig, load_config, save_config, AU
from nbody_gravity.utils.reproducibility import set_all_seeds

__all__ = ["SimulationConfig", "load_config", "save_config", "AU", "set_all_seeds"]
