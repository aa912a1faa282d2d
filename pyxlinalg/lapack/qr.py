"""
QR factorization wrappers: geqrf, and Q reconstruction with orgqr/ungqr.

geqrf leaves R on and above the diagonal of A and the Householder
reflectors below it, scaled by ``tau``. orgqr (real) and ungqr (complex)
turn those reflectors back into the explicit Q. The two steps negotiate
their scratch independently.
"""

from typing import Any

from numpy.typing import ArrayLike, NDArray

from pyxlinalg.core.catalogue import ROUTINE_GEQRF, ROUTINE_ORGQR, ROUTINE_UNGQR
from pyxlinalg.core.exceptions import DimensionError, DTypeError
from pyxlinalg.core.result import Result
from pyxlinalg.core.view import ElementCategory
from pyxlinalg.lapack._common import (
    Implementation,
    envelope,
    execute,
    inout_matrix,
    input_vector,
    ld,
    lookup,
    new_vector,
)
from pyxlinalg.lapack.solution import QRParams
from pyxlinalg.providers import ProviderChoice


class _RealQR(Implementation):
    """sgeqrf/dgeqrf with sorgqr/dorgqr."""
    reconstruct = ROUTINE_ORGQR


class _ComplexQR(Implementation):
    """cgeqrf/zgeqrf with cungqr/zungqr."""
    reconstruct = ROUTINE_UNGQR


def implementation_for(category: ElementCategory) -> Implementation:
    return _ComplexQR(category) if category.is_complex else _RealQR(category)


def geqrf(
    A: NDArray[Any],
    *,
    provider: ProviderChoice | None = None,
) -> Result[QRParams]:
    """
    QR factorization A = Q R, in place.

    Args:
        A: Matrix (m x n), column-major; overwritten by R and the
            Householder reflectors
        provider: Compute provider (None for the process default)

    Returns:
        Result with QRParams (``tau`` of length min(m, n))
    """
    a = inout_matrix(A, 'A')
    m, n = a.shape
    impl = implementation_for(a.category)
    tau = new_vector(min(m, n), a.dtype)
    work = impl.work()
    routine, fn = lookup(impl, ROUTINE_GEQRF, provider)

    def call() -> int:
        return fn(m, n, a.pointer, ld(a, 'A'), tau.pointer, work.pointer, work.lwork)

    info, workspace, timing = execute(routine, call, negotiated=(work,))
    return envelope(routine, info, QRParams(tau=tau.array), workspace, timing)


def _reconstruct(
    base: str,
    A: NDArray[Any],
    tau: ArrayLike,
    n: int | None,
    provider: ProviderChoice | None,
) -> Result[None]:
    a = inout_matrix(A, 'A')
    impl = implementation_for(a.category)
    if impl.reconstruct != base:
        kind = 'complex' if a.is_complex else 'real'
        raise DTypeError(
            f"{base} is not defined for {kind} data, use {impl.reconstruct}",
            dtype=str(a.dtype),
        )
    reflectors = input_vector(tau, a.dtype, 'tau')

    m, cols = a.shape
    n = cols if n is None else int(n)
    k = reflectors.shape[0]
    if not (m >= n >= k >= 0) or n > cols:
        raise DimensionError(
            f"{base}: requires m >= n >= len(tau) and n <= columns of A, "
            f"got m={m}, n={n}, len(tau)={k}, columns={cols}"
        )

    work = impl.work()
    routine, fn = lookup(impl, base, provider)

    def call() -> int:
        return fn(m, n, k, a.pointer, ld(a, 'A'), reflectors.pointer, work.pointer, work.lwork)

    info, workspace, timing = execute(routine, call, negotiated=(work,))
    return envelope(routine, info, None, workspace, timing)


def orgqr(
    A: NDArray[Any],
    tau: ArrayLike,
    n: int | None = None,
    *,
    provider: ProviderChoice | None = None,
) -> Result[None]:
    """
    Form the real orthogonal Q of a QR factorization, in place.

    Args:
        A: Reflectors from geqrf (m x cols), column-major; the first n
            columns are overwritten by Q
        tau: Reflector scalars from geqrf
        n: Number of columns of Q to form (defaults to the columns of A);
            requires m >= n >= len(tau)
        provider: Compute provider (None for the process default)

    Raises:
        DTypeError: For complex data (use ungqr)
        DimensionError: If the size constraints are violated
    """
    return _reconstruct(ROUTINE_ORGQR, A, tau, n, provider)


def ungqr(
    A: NDArray[Any],
    tau: ArrayLike,
    n: int | None = None,
    *,
    provider: ProviderChoice | None = None,
) -> Result[None]:
    """
    Form the unitary Q of a complex QR factorization, in place.

    Complex counterpart of ``orgqr``; same arguments.

    Raises:
        DTypeError: For real data (use orgqr)
    """
    return _reconstruct(ROUTINE_UNGQR, A, tau, n, provider)
