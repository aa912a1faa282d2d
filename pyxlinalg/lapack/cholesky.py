"""
Cholesky factorization (potrf).
"""

from typing import Any

from numpy.typing import NDArray

from pyxlinalg.core.catalogue import ROUTINE_POTRF
from pyxlinalg.core.result import Result
from pyxlinalg.core.validation import check_choice, check_square
from pyxlinalg.core.view import ElementCategory
from pyxlinalg.lapack._common import Implementation, envelope, execute, inout_matrix, ld, lookup
from pyxlinalg.providers import ProviderChoice


class _RealCholesky(Implementation):
    """spotrf/dpotrf: A = L L^T."""


class _ComplexCholesky(Implementation):
    """cpotrf/zpotrf: A = L L^H."""


def implementation_for(category: ElementCategory) -> Implementation:
    return _ComplexCholesky(category) if category.is_complex else _RealCholesky(category)


def potrf(
    A: NDArray[Any],
    uplo: str = 'L',
    *,
    provider: ProviderChoice | None = None,
) -> Result[None]:
    """
    Cholesky factorization of a symmetric/Hermitian positive definite matrix.

    Only the ``uplo`` triangle of A is read, and only that triangle is
    overwritten by the factor; the other triangle is left as it was.

    Args:
        A: Square matrix (n x n), column-major
        uplo: 'L' (A = L L^H) or 'U' (A = U^H U)
        provider: Compute provider (None for the process default)

    Returns:
        Result with no payload. ``info > 0`` means the leading minor of
        order ``info`` is not positive definite.
    """
    uplo = check_choice(uplo, ('U', 'L'), 'uplo')
    a = inout_matrix(A, 'A')
    check_square(a, 'A')
    n = a.shape[0]

    impl = implementation_for(a.category)
    routine, fn = lookup(impl, ROUTINE_POTRF, provider)

    def call() -> int:
        return fn(uplo, n, a.pointer, ld(a, 'A'))

    info, workspace, timing = execute(routine, call)
    return envelope(routine, info, None, workspace, timing)
