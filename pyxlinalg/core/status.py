"""
Status mapping for provider calls.

The BLAS/LAPACK layer never interprets a computation status: it is handed
back to the caller verbatim, because its meaning (illegal argument,
singular pivot, non-convergence, rank deficiency) is routine-specific and
often not fatal to the caller's larger computation. This module only
*describes* statuses, and offers ``raise_for_status`` for callers (such as
``pyxlinalg.linalg``) that do want exceptions.

Workspace-query failures are handled elsewhere (``negotiate``) and always
raise.
"""

from pyxlinalg.core.catalogue import (
    LAPACK_ROUTINES,
    ROUTINE_GEEV,
    ROUTINE_GELSD,
    ROUTINE_GESDD,
    ROUTINE_GESV,
    ROUTINE_GETRF,
    ROUTINE_GETRI,
    ROUTINE_HEEVD,
    ROUTINE_POTRF,
    ROUTINE_SYEVD,
)
from pyxlinalg.core.exceptions import (
    ConvergenceError,
    NotPositiveDefiniteError,
    NumericalError,
    ProviderContractError,
    SingularMatrixError,
)

_SINGULAR = frozenset({ROUTINE_GESV, ROUTINE_GETRF, ROUTINE_GETRI})
_CONVERGENCE = frozenset({ROUTINE_GESDD, ROUTINE_GEEV, ROUTINE_SYEVD, ROUTINE_HEEVD, ROUTINE_GELSD})


def base_routine(routine: str) -> str | None:
    """Catalogue base name of a LAPACK routine identity ('zgesdd' -> 'gesdd')."""
    base = routine[1:]
    return base if base in LAPACK_ROUTINES else None


def describe_status(routine: str, info: int) -> str:
    """
    Human-readable meaning of a provider status.

    Args:
        routine: Routine identity that produced the status
        info: The verbatim status code

    Returns:
        Description including the routine and status value
    """
    if info == 0:
        return f"{routine}: success"
    if info < 0:
        return f"{routine}: argument {-info} had an illegal value (info={info})"

    base = base_routine(routine)
    if base in (ROUTINE_GESV, ROUTINE_GETRF):
        detail = f"U({info},{info}) is exactly zero, the factor U is singular"
    elif base == ROUTINE_GETRI:
        detail = f"U({info},{info}) is exactly zero, the matrix is singular and has no inverse"
    elif base == ROUTINE_POTRF:
        detail = f"the leading minor of order {info} is not positive definite"
    elif base == ROUTINE_GESDD:
        detail = "the singular value decomposition did not converge"
    elif base == ROUTINE_GEEV:
        detail = (
            f"the QR algorithm failed to compute all eigenvalues, "
            f"elements {info + 1} onwards have converged"
        )
    elif base in (ROUTINE_SYEVD, ROUTINE_HEEVD):
        detail = f"the eigenvalue algorithm failed to converge (info={info})"
    elif base == ROUTINE_GELSD:
        detail = f"the SVD did not converge, {info} off-diagonal elements did not reach zero"
    else:
        detail = "unexpected positive status"
    return f"{routine}: {detail} (info={info})"


def raise_for_status(routine: str, info: int, matrix_name: str = 'a') -> None:
    """
    Raise the matching exception for a nonzero status.

    Args:
        routine: Routine identity that produced the status
        info: The verbatim status code
        matrix_name: Name of the matrix argument, for diagnostics

    Raises:
        ProviderContractError: For negative statuses (an argument this
            layer passed was rejected)
        SingularMatrixError: For LU-based routines
        NotPositiveDefiniteError: For Cholesky
        ConvergenceError: For SVD, eigenvalue and least-squares routines
        NumericalError: For any other positive status
    """
    if info == 0:
        return
    message = describe_status(routine, info)
    if info < 0:
        raise ProviderContractError(message)

    base = base_routine(routine)
    if base in _SINGULAR:
        raise SingularMatrixError(
            message, matrix_name=matrix_name, pivot=info, routine=routine, info=info
        )
    if base == ROUTINE_POTRF:
        raise NotPositiveDefiniteError(
            message, matrix_name=matrix_name, order=info, routine=routine, info=info
        )
    if base in _CONVERGENCE:
        raise ConvergenceError(message, unconverged=info, routine=routine, info=info)
    raise NumericalError(message, routine=routine, info=info)
