"""
Minimum-norm least squares by SVD (gelsd).
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from pyxlinalg.core.catalogue import ROUTINE_GELSD
from pyxlinalg.core.compute.precision import MACHINE_PRECISION_RCOND
from pyxlinalg.core.exceptions import DimensionError
from pyxlinalg.core.result import Result
from pyxlinalg.core.view import ElementCategory, ViewDescriptor
from pyxlinalg.core.workspace import LAPACK_INT, ScratchBuffer
from pyxlinalg.lapack._common import (
    Implementation,
    envelope,
    execute,
    inout_matrix,
    inout_rhs,
    ld,
    lookup,
    new_vector,
)
from pyxlinalg.lapack.solution import LstsqParams
from pyxlinalg.providers import ProviderChoice


class _RealLeastSquares(Implementation):
    """sgelsd/dgelsd: negotiated work and iwork."""

    def scratch(self) -> tuple[ScratchBuffer, ...]:
        return self.work(), self.iwork()

    def bind(
        self, fn: Callable[..., int], m: int, n: int, nrhs: int,
        a: ViewDescriptor, b: ViewDescriptor, s: ViewDescriptor, rcond: float,
        rank: ViewDescriptor, scratch: tuple[ScratchBuffer, ...],
    ) -> Callable[[], int]:
        work, iwork = scratch

        def call() -> int:
            return fn(
                m, n, nrhs, a.pointer, ld(a, 'A'), b.pointer, ld(b, 'b'),
                s.pointer, rcond, rank.pointer,
                work.pointer, work.lwork, iwork.pointer,
            )
        return call


class _ComplexLeastSquares(Implementation):
    """cgelsd/zgelsd: negotiated work, real rwork and iwork."""

    def scratch(self) -> tuple[ScratchBuffer, ...]:
        return self.work(), self.rwork(), self.iwork()

    def bind(
        self, fn: Callable[..., int], m: int, n: int, nrhs: int,
        a: ViewDescriptor, b: ViewDescriptor, s: ViewDescriptor, rcond: float,
        rank: ViewDescriptor, scratch: tuple[ScratchBuffer, ...],
    ) -> Callable[[], int]:
        work, rwork, iwork = scratch

        def call() -> int:
            return fn(
                m, n, nrhs, a.pointer, ld(a, 'A'), b.pointer, ld(b, 'b'),
                s.pointer, rcond, rank.pointer,
                work.pointer, work.lwork, rwork.pointer, iwork.pointer,
            )
        return call


def implementation_for(category: ElementCategory) -> _RealLeastSquares | _ComplexLeastSquares:
    if category.is_complex:
        return _ComplexLeastSquares(category)
    return _RealLeastSquares(category)


def gelsd(
    A: NDArray[Any],
    b: NDArray[Any],
    rcond: float = MACHINE_PRECISION_RCOND,
    *,
    provider: ProviderChoice | None = None,
) -> Result[LstsqParams]:
    """
    Minimum-norm solution of min ||b - A x||_2.

    Args:
        A: Matrix (m x n), column-major; destroyed
        b: Right-hand side(s), shape (max(m, n),) or (max(m, n), nrhs),
            column-major, same dtype as A. The first m rows hold B on
            entry; on exit the first n rows hold the solution X.
        rcond: Singular values s[i] <= rcond * s[0] are treated as zero.
            A negative value means machine precision.
        provider: Compute provider (None for the process default)

    Returns:
        Result with LstsqParams (singular values and effective rank).
        ``info > 0`` means the SVD did not converge.

    Raises:
        DimensionError: If b does not have max(m, n) rows
    """
    a = inout_matrix(A, 'A')
    rhs, nrhs = inout_rhs(b, a.dtype, 'b')
    m, n = a.shape
    if rhs.shape[0] != max(m, n):
        raise DimensionError(
            f"b: expected max(m, n) = {max(m, n)} rows for A of shape {a.shape}, "
            f"got {rhs.shape[0]}"
        )

    impl = implementation_for(a.category)
    s = new_vector(min(m, n), a.category.real_dtype)
    rank = new_vector(1, LAPACK_INT)
    scratch = impl.scratch()
    routine, fn = lookup(impl, ROUTINE_GELSD, provider)
    call = impl.bind(fn, m, n, nrhs, a, rhs, s, float(rcond), rank, scratch)

    info, workspace, timing = execute(routine, call, negotiated=scratch)
    params = LstsqParams(s=s.array, rank=int(np.asarray(rank.array)[0]))
    return envelope(routine, info, params, workspace, timing)
