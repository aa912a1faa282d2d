"""
Shared numeric infrastructure for pyxlinalg.

Submodules:
    timing: Per-phase timing of provider calls
    precision: Machine epsilon and rank tolerances
    tolerances: Comparison tolerance tiers per element category
"""

from pyxlinalg.core.compute.precision import (
    EPSILON_32,
    EPSILON_64,
    MACHINE_PRECISION_RCOND,
    default_rank_tolerance,
    machine_epsilon,
    numerical_rank,
)
from pyxlinalg.core.compute.timing import COMPUTE_PHASE, QUERY_PHASE, CallTimer
from pyxlinalg.core.compute.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Timing
    "CallTimer",
    "COMPUTE_PHASE",
    "QUERY_PHASE",
    # Precision
    "EPSILON_32",
    "EPSILON_64",
    "MACHINE_PRECISION_RCOND",
    "default_rank_tolerance",
    "machine_epsilon",
    "numerical_rank",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
