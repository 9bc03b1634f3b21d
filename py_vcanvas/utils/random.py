"""
Random number generation utilities.

All random sampling in py_vcanvas goes through a single NumPy ``Generator``
so that a run can be reproduced from one seed.
"""

from typing import Optional

import numpy as np

# Global generator instance
_rng = None


def set_random_seed(seed: Optional[int]) -> None:
    """
    Reset the shared generator.

    Args:
        seed: Integer seed, or None for fresh OS entropy
    """
    global _rng

    _rng = np.random.default_rng(seed)


def get_rng() -> np.random.Generator:
    """
    Get the shared generator, creating an unseeded one on first use.

    Returns:
        numpy Generator instance
    """
    global _rng
    if _rng is None:
        _rng = np.random.default_rng()
    return _rng
