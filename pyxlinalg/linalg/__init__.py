"""
High-level linear algebra.

NumPy-style functions built on the BLAS dispatcher and the LAPACK
wrappers. Unlike those layers, these functions never modify their inputs
(they work on private column-major copies) and turn nonzero provider
statuses into exceptions from the library's hierarchy.

Solvers:
    solve, inv, det, lstsq, matrix_rank
Decompositions:
    lu, cholesky, qr, svd, eig, eigh, eigvalsh
Products and norms:
    dot, matmul, outer, norm
"""

from pyxlinalg.linalg.decompositions import cholesky, eig, eigh, eigvalsh, lu, qr, svd
from pyxlinalg.linalg.products import dot, matmul, norm, outer
from pyxlinalg.linalg.solvers import det, inv, lstsq, matrix_rank, solve

__all__ = [
    # Solvers
    "solve",
    "inv",
    "det",
    "lstsq",
    "matrix_rank",
    # Decompositions
    "lu",
    "cholesky",
    "qr",
    "svd",
    "eig",
    "eigh",
    "eigvalsh",
    # Products and norms
    "dot",
    "matmul",
    "outer",
    "norm",
]
