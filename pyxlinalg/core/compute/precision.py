"""
Numerical precision constants and utilities.

Provides machine epsilon and the default relative tolerances used for
numerical rank decisions.
"""

from typing import Any

import numpy as np
from numpy.typing import DTypeLike, NDArray


# Machine epsilon for float64
EPSILON_64: float = np.finfo(np.float64).eps  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = np.finfo(np.float32).eps  # ~1.19e-7

# rcond value meaning "use machine precision" for LAPACK rank decisions
MACHINE_PRECISION_RCOND: float = -1.0


def machine_epsilon(dtype: DTypeLike = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Complex dtypes report the epsilon of their real component.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def default_rank_tolerance(
    singular_values: NDArray[np.floating[Any]],
    shape: tuple[int, int],
    dtype: DTypeLike,
) -> float:
    """
    Absolute threshold below which singular values count as zero.

    Uses the convention ``S.max() * max(M, N) * eps``.

    Args:
        singular_values: Singular values, any order
        shape: Shape (M, N) of the decomposed matrix
        dtype: Dtype of the decomposed matrix

    Returns:
        Threshold (0.0 for an empty spectrum)
    """
    if singular_values.size == 0:
        return 0.0
    return float(singular_values.max()) * max(shape) * machine_epsilon(dtype)


def numerical_rank(
    singular_values: NDArray[np.floating[Any]],
    tol: float,
) -> int:
    """Number of singular values strictly above ``tol``."""
    return int(np.count_nonzero(singular_values > tol))
