"""Configuration management."""

import json
import os
import yaml
from typing import Optional, Tuple
from pathlib import Path
from dataclasses import dataclass, asdict, fields, replace

# Meters in an astronomical unit
AU = 1.496e11


@dataclass(frozen=True)
class SimulationConfig:
    """Simulation configuration.

    Positions are stored in AU and converted with ``to_meters`` for the
    force law; velocities are m/s and masses kg.
    """
    # Physics
    G: float = 6.67408e-11
    to_meters: float = AU
    softening: float = 0.015 * AU
    time_step: float = 3 * 32 * 1024
    theta: float = 0.75
    enable_drag: bool = False
    drag_factor: float = 25.0

    # Disk system
    n_bodies: int = 32 * 1024
    solar_mass: float = 2.0e30
    extra_mass: float = 1.5
    system_size: float = 3.5
    system_thickness: float = 0.08
    inner_bound: float = 0.3
    seed: Optional[int] = 0

    # Tree
    root_center: Tuple[float, float, float] = (0.0, 0.0, 0.1374)
    root_half_length: Optional[float] = None
    max_depth: int = 64

    # Run
    n_steps: int = 16000
    render_interval: int = 1
    workers: Optional[int] = None
    debug: bool = False

    # Rendering
    width: int = 1024
    height: int = 1024
    render_scale: float = 2.5
    max_vel_color: float = 40000.0
    particle_brightness: float = 0.35
    particle_sharpness: float = 1.0
    dot_size: int = 8
    output_dir: str = "images"

    def __post_init__(self):
        # Tuples survive JSON/YAML round trips as lists
        object.__setattr__(self, "root_center", tuple(float(c) for c in self.root_center))
        self.validate()

    def validate(self):
        """Check value ranges.

        Raises:
            ValueError: If any parameter is out of range
        """
        positive = (
            "G", "to_meters", "time_step", "theta", "solar_mass",
            "system_size", "render_scale", "max_vel_color", "extra_mass",
        )
        for name in positive:
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("n_bodies", "render_interval", "max_depth", "width", "height", "dot_size"):
            if int(getattr(self, name)) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.n_steps < 0:
            raise ValueError(f"n_steps must be non-negative, got {self.n_steps}")
        if self.softening < 0 or self.system_thickness < 0:
            raise ValueError("softening and system_thickness must be non-negative")
        if not 0 <= self.inner_bound < self.system_size:
            raise ValueError("inner_bound must lie in [0, system_size)")
        if self.root_half_length is not None and not self.root_half_length > 0:
            raise ValueError(f"root_half_length must be positive, got {self.root_half_length}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if len(self.root_center) != 3:
            raise ValueError("root_center needs 3 components")

    @property
    def tree_half_length(self) -> float:
        """Half side of the root octant, in AU."""
        if self.root_half_length is not None:
            return self.root_half_length
        return 30.0 * self.system_size

    @property
    def worker_count(self) -> int:
        return self.workers if self.workers is not None else (os.cpu_count() or 1)

    @property
    def disk_body_mass(self) -> float:
        """Mass of each disk particle."""
        return self.extra_mass * self.solar_mass / self.n_bodies

    def with_overrides(self, **overrides) -> "SimulationConfig":
        """Copy with some fields replaced; ``None`` values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def load_config(config_path: str) -> SimulationConfig:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        SimulationConfig object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix == '.yaml' or config_path.suffix == '.yml':
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    known = {f.name for f in fields(SimulationConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
    return SimulationConfig(**data)


def save_config(config: SimulationConfig, output_path: str):
    """Save configuration to file.

    Args:
        config: SimulationConfig object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)
    data['root_center'] = list(data['root_center'])

    with open(output_path, 'w') as f:
        if output_path.suffix == '.yaml' or output_path.suffix == '.yml':
            yaml.dump(data, f, default_flow_style=False)
        else:
            json.dump(data, f, indent=2)
