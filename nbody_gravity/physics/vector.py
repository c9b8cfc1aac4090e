"""Three-component vectors as NumPy arrays."""

import numpy as np


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """Create a float64 3-vector."""
    return np.array([x, y, z], dtype=np.float64)


def as_vec3(value) -> np.ndarray:
    """Copy a sequence of three numbers into a float64 3-vector.

    Raises:
        ValueError: If the value does not have exactly three components
    """
    arr = np.array(value, dtype=np.float64).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {np.shape(value)}")
    return arr


def magnitude(v: np.ndarray) -> float:
    """Euclidean length of a 3-vector."""
    return float(np.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2]))
