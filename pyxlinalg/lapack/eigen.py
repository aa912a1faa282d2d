"""
Eigenvalue wrappers.

geev: general square matrices. Real routines report eigenvalues as
separate real and imaginary parts; complex routines as one complex array.

syevd (real symmetric) / heevd (complex Hermitian): divide and conquer
for self-adjoint matrices. Eigenvalues are real and ascending; when
eigenvectors are requested they overwrite A.
"""

from typing import Any, Callable

from numpy.typing import NDArray

from pyxlinalg.core.catalogue import ROUTINE_GEEV, ROUTINE_HEEVD, ROUTINE_SYEVD
from pyxlinalg.core.exceptions import DTypeError
from pyxlinalg.core.result import Result
from pyxlinalg.core.validation import check_choice, check_square
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
from pyxlinalg.lapack.solution import EigParams, SymmetricEigParams
from pyxlinalg.providers import ProviderChoice


# === General eigenproblem ===

class _RealGeneralEigen(Implementation):
    """sgeev/dgeev: wr and wi outputs, negotiated work."""

    def run(
        self, fn: Callable[..., int], routine: str, jobvl: str, jobvr: str,
        a: ViewDescriptor, vl: ViewDescriptor, ldvl: int, vr: ViewDescriptor, ldvr: int,
    ) -> tuple[int, dict[str, int], dict[str, float], dict[str, Any]]:
        n = a.shape[0]
        wr = new_vector(n, self.dtype)
        wi = new_vector(n, self.dtype)
        work = self.work()

        def call() -> int:
            return fn(
                jobvl, jobvr, n, a.pointer, ld(a, 'A'), wr.pointer, wi.pointer,
                vl.pointer, ldvl, vr.pointer, ldvr, work.pointer, work.lwork,
            )

        info, workspace, timing = execute(routine, call, negotiated=(work,))
        return info, workspace, timing, {'wr': wr.array, 'wi': wi.array}


class _ComplexGeneralEigen(Implementation):
    """cgeev/zgeev: complex w output, negotiated work, fixed rwork of 2n."""

    def run(
        self, fn: Callable[..., int], routine: str, jobvl: str, jobvr: str,
        a: ViewDescriptor, vl: ViewDescriptor, ldvl: int, vr: ViewDescriptor, ldvr: int,
    ) -> tuple[int, dict[str, int], dict[str, float], dict[str, Any]]:
        n = a.shape[0]
        w = new_vector(n, self.dtype)
        work = self.work()
        rwork = self.rwork(2 * n)

        def call() -> int:
            return fn(
                jobvl, jobvr, n, a.pointer, ld(a, 'A'), w.pointer,
                vl.pointer, ldvl, vr.pointer, ldvr, work.pointer, work.lwork, rwork.pointer,
            )

        info, workspace, timing = execute(routine, call, negotiated=(work,), fixed=(rwork,))
        return info, workspace, timing, {'w': w.array}


def general_implementation_for(category: ElementCategory) -> _RealGeneralEigen | _ComplexGeneralEigen:
    if category.is_complex:
        return _ComplexGeneralEigen(category)
    return _RealGeneralEigen(category)


def geev(
    A: NDArray[Any],
    jobvl: str = 'N',
    jobvr: str = 'V',
    *,
    provider: ProviderChoice | None = None,
) -> Result[EigParams]:
    """
    Eigenvalues and, optionally, left/right eigenvectors of a square matrix.

    Args:
        A: Square matrix (n x n), column-major; destroyed
        jobvl: 'V' to compute left eigenvectors, 'N' otherwise
        jobvr: 'V' to compute right eigenvectors, 'N' otherwise
        provider: Compute provider (None for the process default)

    Returns:
        Result with EigParams. ``info > 0`` means the QR algorithm failed;
        eigenvalues info+1..n (1-based) are still valid.

    Note:
        For real input, a complex-conjugate pair of eigenvalues j, j+1 has
        eigenvectors vr[:, j] +/- 1j * vr[:, j+1].
    """
    jobvl = check_choice(jobvl, ('N', 'V'), 'jobvl')
    jobvr = check_choice(jobvr, ('N', 'V'), 'jobvr')
    a = inout_matrix(A, 'A')
    check_square(a, 'A')
    n = a.shape[0]

    impl = general_implementation_for(a.category)
    vl = new_matrix(n, n, a.dtype) if jobvl == 'V' else unreferenced(a.dtype)
    vr = new_matrix(n, n, a.dtype) if jobvr == 'V' else unreferenced(a.dtype)
    ldvl = ld(vl, 'vl') if jobvl == 'V' else 1
    ldvr = ld(vr, 'vr') if jobvr == 'V' else 1

    routine, fn = lookup(impl, ROUTINE_GEEV, provider)
    info, workspace, timing, values = impl.run(fn, routine, jobvl, jobvr, a, vl, ldvl, vr, ldvr)
    params = EigParams(
        vl=vl.array if jobvl == 'V' else None,
        vr=vr.array if jobvr == 'V' else None,
        **values,
    )
    return envelope(routine, info, params, workspace, timing)


# === Symmetric / Hermitian eigenproblem ===

class _RealSymmetricEigen(Implementation):
    """ssyevd/dsyevd: negotiated work and iwork."""
    base = ROUTINE_SYEVD

    def run(
        self, fn: Callable[..., int], routine: str, jobz: str, uplo: str, a: ViewDescriptor,
    ) -> tuple[int, dict[str, int], dict[str, float], NDArray[Any]]:
        n = a.shape[0]
        w = new_vector(n, self.real_dtype)
        work, iwork = self.work(), self.iwork()

        def call() -> int:
            return fn(
                jobz, uplo, n, a.pointer, ld(a, 'A'), w.pointer,
                work.pointer, work.lwork, iwork.pointer, iwork.lwork,
            )

        info, workspace, timing = execute(routine, call, negotiated=(work, iwork))
        return info, workspace, timing, w.array


class _ComplexHermitianEigen(Implementation):
    """cheevd/zheevd: negotiated work, rwork and iwork."""
    base = ROUTINE_HEEVD

    def run(
        self, fn: Callable[..., int], routine: str, jobz: str, uplo: str, a: ViewDescriptor,
    ) -> tuple[int, dict[str, int], dict[str, float], NDArray[Any]]:
        n = a.shape[0]
        w = new_vector(n, self.real_dtype)
        work, rwork, iwork = self.work(), self.rwork(), self.iwork()

        def call() -> int:
            return fn(
                jobz, uplo, n, a.pointer, ld(a, 'A'), w.pointer,
                work.pointer, work.lwork, rwork.pointer, rwork.lwork,
                iwork.pointer, iwork.lwork,
            )

        info, workspace, timing = execute(routine, call, negotiated=(work, rwork, iwork))
        return info, workspace, timing, w.array


def symmetric_implementation_for(
    category: ElementCategory,
) -> _RealSymmetricEigen | _ComplexHermitianEigen:
    if category.is_complex:
        return _ComplexHermitianEigen(category)
    return _RealSymmetricEigen(category)


def _self_adjoint(
    base: str,
    A: NDArray[Any],
    jobz: str,
    uplo: str,
    provider: ProviderChoice | None,
) -> Result[SymmetricEigParams]:
    jobz = check_choice(jobz, ('N', 'V'), 'jobz')
    uplo = check_choice(uplo, ('U', 'L'), 'uplo')
    a = inout_matrix(A, 'A')
    check_square(a, 'A')

    impl = symmetric_implementation_for(a.category)
    if impl.base != base:
        kind = 'complex' if a.is_complex else 'real'
        raise DTypeError(f"{base} is not defined for {kind} data, use {impl.base}", dtype=str(a.dtype))

    routine, fn = lookup(impl, base, provider)
    info, workspace, timing, w = impl.run(fn, routine, jobz, uplo, a)
    return envelope(routine, info, SymmetricEigParams(w=w), workspace, timing)


def syevd(
    A: NDArray[Any],
    jobz: str = 'V',
    uplo: str = 'L',
    *,
    provider: ProviderChoice | None = None,
) -> Result[SymmetricEigParams]:
    """
    Eigen-decomposition of a real symmetric matrix.

    Args:
        A: Symmetric matrix (n x n), column-major; only the ``uplo``
            triangle is read. Overwritten by the orthonormal eigenvectors
            when jobz='V', destroyed otherwise.
        jobz: 'V' for eigenvalues and eigenvectors, 'N' for values only
        uplo: 'L' or 'U'
        provider: Compute provider (None for the process default)

    Returns:
        Result with SymmetricEigParams (ascending eigenvalues)

    Raises:
        DTypeError: For complex data (use heevd)
    """
    return _self_adjoint(ROUTINE_SYEVD, A, jobz, uplo, provider)


def heevd(
    A: NDArray[Any],
    jobz: str = 'V',
    uplo: str = 'L',
    *,
    provider: ProviderChoice | None = None,
) -> Result[SymmetricEigParams]:
    """
    Eigen-decomposition of a complex Hermitian matrix.

    Complex counterpart of ``syevd``; same arguments.

    Raises:
        DTypeError: For real data (use syevd)
    """
    return _self_adjoint(ROUTINE_HEEVD, A, jobz, uplo, provider)
