"""
LU factorization wrappers: gesv, getrf, getri.

Pivot sequences follow the LAPACK convention: 1-based, entry i names the
row that was interchanged with row i.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyxlinalg.core.catalogue import ROUTINE_GESV, ROUTINE_GETRF, ROUTINE_GETRI
from pyxlinalg.core.exceptions import DimensionError, ValidationError
from pyxlinalg.core.result import Result
from pyxlinalg.core.validation import check_1d, check_square
from pyxlinalg.core.view import ElementCategory
from pyxlinalg.core.workspace import LAPACK_INT
from pyxlinalg.lapack._common import (
    Implementation,
    envelope,
    execute,
    inout_matrix,
    inout_rhs,
    ld,
    lookup,
    new_vector,
    pivot_buffer,
)
from pyxlinalg.lapack.solution import PivotParams
from pyxlinalg.providers import ProviderChoice


class _RealLU(Implementation):
    """dgetri/sgetri: real work buffer."""


class _ComplexLU(Implementation):
    """zgetri/cgetri: complex work buffer, query answer in the real part."""


def implementation_for(category: ElementCategory) -> Implementation:
    return _ComplexLU(category) if category.is_complex else _RealLU(category)


def gesv(
    A: NDArray[Any],
    b: NDArray[Any],
    *,
    provider: ProviderChoice | None = None,
) -> Result[PivotParams]:
    """
    Solve A X = B by LU factorization with partial pivoting.

    Args:
        A: Square matrix (n x n), column-major; overwritten by L and U
        b: Right-hand side(s), shape (n,) or (n, nrhs), column-major, same
            dtype as A; overwritten by the solution X
        provider: Compute provider (None for the process default)

    Returns:
        Result with PivotParams. ``info > 0`` means U(info, info) is exactly
        zero: A is singular and b was not overwritten.

    Raises:
        DimensionError: If A is not square or b has the wrong row count
        LayoutError: If an operand is not column-major or is read-only
        DTypeError: If dtypes are unsupported or differ
    """
    a = inout_matrix(A, 'A')
    check_square(a, 'A')
    rhs, nrhs = inout_rhs(b, a.dtype, 'b')
    n = a.shape[0]
    if rhs.shape[0] != n:
        raise DimensionError(f"b: expected {n} rows, got {rhs.shape[0]}")

    impl = implementation_for(a.category)
    piv = new_vector(n, LAPACK_INT)
    routine, fn = lookup(impl, ROUTINE_GESV, provider)

    def call() -> int:
        return fn(n, nrhs, a.pointer, ld(a, 'A'), piv.pointer, rhs.pointer, ld(rhs, 'b'))

    info, workspace, timing = execute(routine, call)
    return envelope(routine, info, PivotParams(piv=piv.array), workspace, timing)


def getrf(
    A: NDArray[Any],
    piv: NDArray[np.int32] | None = None,
    *,
    provider: ProviderChoice | None = None,
) -> Result[PivotParams]:
    """
    LU factorization A = P L U with partial pivoting, in place.

    Args:
        A: Matrix (m x n), column-major; overwritten by L (unit diagonal
            not stored) and U
        piv: Optional int32 buffer of at least min(m, n) elements to
            receive the pivots; allocated when None
        provider: Compute provider (None for the process default)

    Returns:
        Result with PivotParams. ``info > 0`` means U(info, info) is exactly
        zero; the factorization is complete but U is singular.
    """
    a = inout_matrix(A, 'A')
    m, n = a.shape
    k = min(m, n)
    if piv is None:
        pivots = new_vector(k, LAPACK_INT)
    else:
        pivots = pivot_buffer(piv, k)

    impl = implementation_for(a.category)
    routine, fn = lookup(impl, ROUTINE_GETRF, provider)

    def call() -> int:
        return fn(m, n, a.pointer, ld(a, 'A'), pivots.pointer)

    info, workspace, timing = execute(routine, call)
    return envelope(routine, info, PivotParams(piv=pivots.array), workspace, timing)


def getri(
    A: NDArray[Any],
    piv: NDArray[np.int32],
    *,
    provider: ProviderChoice | None = None,
) -> Result[None]:
    """
    Inverse of a matrix from its LU factors, in place.

    Args:
        A: LU factors from getrf (n x n), column-major; overwritten by the
            inverse
        piv: Pivots from getrf (int32, at least n elements)
        provider: Compute provider (None for the process default)

    Returns:
        Result with no payload. ``info > 0`` means the matrix is singular.
    """
    a = inout_matrix(A, 'A')
    check_square(a, 'A')
    n = a.shape[0]
    pivots = pivot_buffer(piv, n)

    impl = implementation_for(a.category)
    work = impl.work()
    routine, fn = lookup(impl, ROUTINE_GETRI, provider)

    def call() -> int:
        return fn(n, a.pointer, ld(a, 'A'), pivots.pointer, work.pointer, work.lwork)

    info, workspace, timing = execute(routine, call, negotiated=(work,))
    return envelope(routine, info, None, workspace, timing)


def lu_permutation(piv: ArrayLike, m: int) -> NDArray[np.intp]:
    """
    Convert a 1-based pivot sequence into a row permutation.

    Applies the interchanges in order to ``arange(m)``. The result ``perm``
    satisfies ``A[perm] == L @ U`` for the original A, so the permutation
    matrix of ``A = P @ L @ U`` is ``np.eye(m)[:, perm]``.

    Args:
        piv: Pivots from getrf/gesv
        m: Number of rows of the factored matrix

    Returns:
        Integer index array of length m

    Raises:
        ValidationError: If a pivot is outside 1..m
    """
    pivots = np.asarray(piv)
    check_1d(pivots, 'piv')
    if pivots.size and (pivots.min() < 1 or pivots.max() > m):
        raise ValidationError(f"piv: entries must lie in 1..{m}, got range {pivots.min()}..{pivots.max()}")
    if pivots.shape[0] > m:
        raise DimensionError(f"piv: at most {m} pivots for {m} rows, got {pivots.shape[0]}")

    perm = np.arange(m)
    for i, p in enumerate(pivots):
        j = int(p) - 1
        if j != i:
            perm[i], perm[j] = perm[j], perm[i]
    return perm
