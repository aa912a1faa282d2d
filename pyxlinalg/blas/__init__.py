"""
BLAS dispatcher.

Level 1:
    asum, nrm2: real reductions of a vector
    dot: conjugating inner product; dotu: unconjugated inner product
Level 2:
    gemv: matrix-vector product; ger: rank-1 update
Level 3:
    gemm: matrix-matrix product

Each operation resolves strides and layout, then makes exactly one
provider call. BLAS routines report no status.
"""

from pyxlinalg.blas.level1 import asum, dot, dotu, nrm2
from pyxlinalg.blas.level2 import gemv, ger
from pyxlinalg.blas.level3 import gemm

__all__ = [
    "asum",
    "nrm2",
    "dot",
    "dotu",
    "gemv",
    "ger",
    "gemm",
]
