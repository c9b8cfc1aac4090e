"""Reproducibility utilities for deterministic simulations."""

import random
import numpy as np


def set_all_seeds(seed: int):
    """Seed Python's and NumPy's global generators.
    
    Presets draw from their own ``default_rng(seed)``; this covers any
    code that still uses the global state.
    
    Args:
        seed: Random seed
    """
    random.seed(seed)
    np.random.seed(seed)
