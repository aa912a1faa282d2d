"""
Singular value decomposition by divide and conquer (gesdd).

The job mode decides which singular vectors are computed and where they
go:

    jobz  U          VT         notes
    'A'   m x m      n x n
    'S'   m x k      k x n      k = min(m, n)
    'O'   m >= n: written into A's first n columns, VT n x n
          m <  n: U m x m, written into A's first m rows
    'N'   -          -          singular values only

Buffers the routine does not reference are passed as one-element
stand-ins with leading dimension 1.
"""

from typing import Any, Callable

from numpy.typing import NDArray

from pyxlinalg.core.catalogue import ROUTINE_GESDD
from pyxlinalg.core.result import Result
from pyxlinalg.core.validation import check_choice
from pyxlinalg.core.view import ElementCategory, ViewDescriptor
from pyxlinalg.core.workspace import ScratchBuffer
from pyxlinalg.lapack._common import (
    Implementation,
    envelope,
    execute,
    inout_matrix,
    ld,
    lookup,
    new_matrix,
    new_vector,
    unreferenced,
)
from pyxlinalg.lapack.solution import SVDParams
from pyxlinalg.providers import ProviderChoice

JOB_MODES = ('A', 'S', 'O', 'N')


def singular_vector_shapes(
    jobz: str, m: int, n: int,
) -> tuple[tuple[int, int] | None, tuple[int, int] | None]:
    """
    Shapes of the U and VT buffers for a job mode; None when not referenced.
    """
    k = min(m, n)
    if jobz == 'A':
        return (m, m), (n, n)
    if jobz == 'S':
        return (m, k), (k, n)
    if jobz == 'O':
        if m >= n:
            return None, (n, n)
        return (m, m), None
    return None, None


def complex_rwork_size(jobz: str, m: int, n: int) -> int:
    """
    Real workspace of ?gesdd for complex data (LAPACK 3.7 documentation).

    The routine does not report this size in a workspace query.
    """
    mn, mx = min(m, n), max(m, n)
    if jobz == 'N':
        return 7 * mn
    return max(5 * mn * mn + 5 * mn, 2 * mx * mn + 2 * mn * mn + mn)


class _RealSVD(Implementation):
    """
    sgesdd/dgesdd: negotiated work plus a fixed iwork of 8 min(m, n).
    """

    def scratch(self, jobz: str, m: int, n: int) -> tuple[tuple[ScratchBuffer, ...], tuple[ScratchBuffer, ...]]:
        return (self.work(),), (self.iwork(8 * min(m, n)),)

    def bind(
        self, fn: Callable[..., int], jobz: str, m: int, n: int,
        a: ViewDescriptor, s: ViewDescriptor, u: ViewDescriptor, ldu: int,
        vt: ViewDescriptor, ldvt: int,
        negotiated: tuple[ScratchBuffer, ...], fixed: tuple[ScratchBuffer, ...],
    ) -> Callable[[], int]:
        (work,), (iwork,) = negotiated, fixed

        def call() -> int:
            return fn(
                jobz, m, n, a.pointer, ld(a, 'A'), s.pointer,
                u.pointer, ldu, vt.pointer, ldvt,
                work.pointer, work.lwork, iwork.pointer,
            )
        return call


class _ComplexSVD(Implementation):
    """
    cgesdd/zgesdd: negotiated work, fixed real rwork sized from the job
    mode, fixed iwork of 8 min(m, n).
    """

    def scratch(self, jobz: str, m: int, n: int) -> tuple[tuple[ScratchBuffer, ...], tuple[ScratchBuffer, ...]]:
        return (self.work(),), (self.rwork(complex_rwork_size(jobz, m, n)), self.iwork(8 * min(m, n)))

    def bind(
        self, fn: Callable[..., int], jobz: str, m: int, n: int,
        a: ViewDescriptor, s: ViewDescriptor, u: ViewDescriptor, ldu: int,
        vt: ViewDescriptor, ldvt: int,
        negotiated: tuple[ScratchBuffer, ...], fixed: tuple[ScratchBuffer, ...],
    ) -> Callable[[], int]:
        (work,), (rwork, iwork) = negotiated, fixed

        def call() -> int:
            return fn(
                jobz, m, n, a.pointer, ld(a, 'A'), s.pointer,
                u.pointer, ldu, vt.pointer, ldvt,
                work.pointer, work.lwork, rwork.pointer, iwork.pointer,
            )
        return call


def implementation_for(category: ElementCategory) -> _RealSVD | _ComplexSVD:
    return _ComplexSVD(category) if category.is_complex else _RealSVD(category)


def gesdd(
    A: NDArray[Any],
    jobz: str = 'A',
    *,
    provider: ProviderChoice | None = None,
) -> Result[SVDParams]:
    """
    Singular value decomposition A = U diag(s) VT.

    Args:
        A: Matrix (m x n), column-major; destroyed (or overwritten by U or
            VT when jobz='O')
        jobz: 'A' (all vectors), 'S' (min(m, n) vectors), 'O' (overwrite A
            with the thin factor), 'N' (values only)
        provider: Compute provider (None for the process default)

    Returns:
        Result with SVDParams: exactly min(m, n) singular values, and U/VT
        where the job mode produces them in new buffers

    Raises:
        ValidationError: For an unknown job mode
        LayoutError: If A is not column-major or is read-only
    """
    jobz = check_choice(jobz, JOB_MODES, 'jobz')
    a = inout_matrix(A, 'A')
    m, n = a.shape
    impl = implementation_for(a.category)

    s = new_vector(min(m, n), a.category.real_dtype)
    u_shape, vt_shape = singular_vector_shapes(jobz, m, n)
    u = new_matrix(*u_shape, a.dtype) if u_shape is not None else unreferenced(a.dtype)
    vt = new_matrix(*vt_shape, a.dtype) if vt_shape is not None else unreferenced(a.dtype)
    ldu = ld(u, 'u') if u_shape is not None else 1
    ldvt = ld(vt, 'vt') if vt_shape is not None else 1

    negotiated, fixed = impl.scratch(jobz, m, n)
    routine, fn = lookup(impl, ROUTINE_GESDD, provider)
    call = impl.bind(fn, jobz, m, n, a, s, u, ldu, vt, ldvt, negotiated, fixed)

    info, workspace, timing = execute(routine, call, negotiated=negotiated, fixed=fixed)
    params = SVDParams(
        s=s.array,
        u=u.array if u_shape is not None else None,
        vt=vt.array if vt_shape is not None else None,
    )
    return envelope(routine, info, params, workspace, timing)
