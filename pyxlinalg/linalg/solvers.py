"""
Linear systems, inverses, determinants and least squares.

Public API:
    solve()       - solve A X = B for square A
    inv()         - matrix inverse
    det()         - determinant
    lstsq()       - minimum-norm least squares
    matrix_rank() - numerical rank from the singular values
"""

import warnings
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyxlinalg.core.compute.precision import (
    MACHINE_PRECISION_RCOND,
    default_rank_tolerance,
    numerical_rank,
)
from pyxlinalg.core.exceptions import DimensionError
from pyxlinalg.core.status import raise_for_status
from pyxlinalg.lapack import gelsd, gesdd, gesv, getrf, getri
from pyxlinalg.linalg._common import working_copy, working_pair
from pyxlinalg.providers import ProviderChoice


def solve(
    a: ArrayLike,
    b: ArrayLike,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> NDArray[Any]:
    """
    Solve the linear system A X = B.

    Args:
        a: Square coefficient matrix (n x n)
        b: Right-hand side, shape (n,) or (n, k)
        check_finite: Reject inputs containing NaN or Inf
        provider: Compute provider (None for the process default)

    Returns:
        X with the shape of b

    Raises:
        DimensionError: If a is not square or b has the wrong row count
        SingularMatrixError: If a is exactly singular
    """
    A, B = working_pair(a, b, square=True, check_finite=check_finite)
    if B.shape[0] != A.shape[0]:
        raise DimensionError(f"b: expected {A.shape[0]} rows, got {B.shape[0]}")
    result = gesv(A, B, provider=provider)
    raise_for_status(result.routine, result.info, 'a')
    return B


def inv(
    a: ArrayLike,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> NDArray[Any]:
    """
    Inverse of a square matrix.

    Raises:
        SingularMatrixError: If a is exactly singular
    """
    A = working_copy(a, 'a', square=True, check_finite=check_finite)
    factored = getrf(A, provider=provider)
    raise_for_status(factored.routine, factored.info, 'a')
    inverted = getri(A, factored.params.piv, provider=provider)
    raise_for_status(inverted.routine, inverted.info, 'a')
    return A


def det(
    a: ArrayLike,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> Any:
    """
    Determinant of a square matrix, from its LU factorization.

    A singular matrix has determinant zero; that is a result, not an error.
    """
    A = working_copy(a, 'a', square=True, check_finite=check_finite)
    n = A.shape[0]
    if n == 0:
        return A.dtype.type(1)
    result = getrf(A, provider=provider)
    if result.info > 0:
        return A.dtype.type(0)
    raise_for_status(result.routine, result.info, 'a')

    swaps = np.count_nonzero(result.params.piv[:n] != np.arange(1, n + 1))
    sign = -1 if swaps % 2 else 1
    return sign * np.prod(np.diagonal(A))


def lstsq(
    a: ArrayLike,
    b: ArrayLike,
    rcond: float | None = None,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> tuple[NDArray[Any], NDArray[Any], int, NDArray[Any]]:
    """
    Minimum-norm least-squares solution of A x = b.

    Args:
        a: Coefficient matrix (m x n)
        b: Right-hand side, shape (m,) or (m, k)
        rcond: Relative cutoff for small singular values; None means
            machine precision
        check_finite: Reject inputs containing NaN or Inf
        provider: Compute provider (None for the process default)

    Returns:
        Tuple (x, residuals, rank, s):
            x: Solution, shape (n,) or (n, k)
            residuals: Squared residual norm per column when a has full
                column rank and m > n, else an empty array
            rank: Effective rank of a
            s: Singular values of a, descending

    Raises:
        DimensionError: If b has the wrong row count
        ConvergenceError: If the SVD fails to converge

    Warns:
        RuntimeWarning: If a is rank deficient (the minimum-norm solution
            is still returned)
    """
    A, B = working_pair(a, b, check_finite=check_finite)
    m, n = A.shape
    if B.shape[0] != m:
        raise DimensionError(f"b: expected {m} rows, got {B.shape[0]}")

    padded = np.zeros((max(m, n),) + B.shape[1:], dtype=A.dtype, order='F')
    padded[:m] = B
    result = gelsd(
        A, padded,
        MACHINE_PRECISION_RCOND if rcond is None else rcond,
        provider=provider,
    )
    raise_for_status(result.routine, result.info, 'a')

    rank = result.params.rank
    if rank < min(m, n):
        warnings.warn(
            f"Matrix is rank deficient (rank {rank} < {min(m, n)}). "
            f"Returning the minimum-norm solution.",
            RuntimeWarning,
            stacklevel=2,
        )

    x = padded[:n].copy()
    if rank == n and m > n:
        residuals = np.atleast_1d(np.sum(np.abs(padded[n:]) ** 2, axis=0))
    else:
        residuals = np.empty(0, dtype=result.params.s.dtype)
    return x, residuals, rank, result.params.s


def matrix_rank(
    a: ArrayLike,
    tol: float | None = None,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> int:
    """
    Numerical rank: the number of singular values above ``tol``.

    Args:
        a: Matrix (m x n)
        tol: Absolute threshold; defaults to ``s.max() * max(m, n) * eps``

    Raises:
        ConvergenceError: If the SVD fails to converge
    """
    A = working_copy(a, 'a', check_finite=check_finite)
    if A.size == 0:
        return 0
    shape = A.shape
    result = gesdd(A, 'N', provider=provider)
    raise_for_status(result.routine, result.info, 'a')
    s = result.params.s
    if tol is None:
        tol = default_rank_tolerance(s, shape, A.dtype)
    return numerical_rank(s, tol)
