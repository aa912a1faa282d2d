"""
Matrix decompositions.

Public API:
    lu()        - A = P L U with partial pivoting
    cholesky()  - A = L L^H for positive definite A
    qr()        - A = Q R
    svd()       - A = U diag(s) V^H
    eig()       - eigenvalues and right eigenvectors of a general matrix
    eigh()      - eigen-decomposition of a symmetric/Hermitian matrix
    eigvalsh()  - eigenvalues of a symmetric/Hermitian matrix
"""

from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyxlinalg.core.status import raise_for_status
from pyxlinalg.core.validation import check_choice
from pyxlinalg.lapack import geev, geqrf, gesdd, getrf, heevd, lu_permutation, orgqr, potrf, syevd, ungqr
from pyxlinalg.linalg._common import working_copy
from pyxlinalg.providers import ProviderChoice


def lu(
    a: ArrayLike,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> tuple[NDArray[Any], NDArray[Any], NDArray[Any]]:
    """
    LU decomposition with partial pivoting.

    A singular matrix still has an LU decomposition (with a zero on the
    diagonal of U), so singularity is not an error here.

    Args:
        a: Matrix (m x n)

    Returns:
        (P, L, U): permutation (m x m), unit lower triangular L (m x k) and
        upper triangular U (k x n), k = min(m, n), with A = P @ L @ U
    """
    A = working_copy(a, 'a', check_finite=check_finite)
    m, n = A.shape
    k = min(m, n)
    result = getrf(A, provider=provider)
    if result.info < 0:
        raise_for_status(result.routine, result.info, 'a')

    perm = lu_permutation(result.params.piv[:k], m)
    P = np.eye(m, dtype=A.dtype)[:, perm]
    L = np.tril(A[:, :k], -1) + np.eye(m, k, dtype=A.dtype)
    U = np.triu(A[:k, :])
    return P, L, U


def cholesky(
    a: ArrayLike,
    lower: bool = True,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> NDArray[Any]:
    """
    Cholesky factor of a symmetric/Hermitian positive definite matrix.

    Only the requested triangle of ``a`` is read.

    Args:
        a: Square matrix (n x n)
        lower: Return L with A = L L^H; otherwise U with A = U^H U

    Raises:
        NotPositiveDefiniteError: If a is not positive definite
    """
    A = working_copy(a, 'a', square=True, check_finite=check_finite)
    result = potrf(A, 'L' if lower else 'U', provider=provider)
    raise_for_status(result.routine, result.info, 'a')
    return np.tril(A) if lower else np.triu(A)


def qr(
    a: ArrayLike,
    mode: Literal['reduced', 'complete', 'r'] = 'reduced',
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> Any:
    """
    QR decomposition.

    Args:
        a: Matrix (m x n)
        mode: 'reduced' (Q m x k, R k x n), 'complete' (Q m x m, R m x n)
            or 'r' (R only, k x n), with k = min(m, n)

    Returns:
        (Q, R), or R alone for mode='r'
    """
    mode = check_choice(mode, ('REDUCED', 'COMPLETE', 'R'), 'mode')
    A = working_copy(a, 'a', check_finite=check_finite)
    m, n = A.shape
    k = min(m, n)
    factored = geqrf(A, provider=provider)
    raise_for_status(factored.routine, factored.info, 'a')
    tau = factored.params.tau

    if mode == 'R':
        return np.triu(A[:k, :])

    if mode == 'COMPLETE':
        R = np.triu(A)
        Q = np.zeros((m, m), dtype=A.dtype, order='F')
    else:
        R = np.triu(A[:k, :])
        Q = np.zeros((m, k), dtype=A.dtype, order='F')
    Q[:, :k] = A[:, :k]

    reconstruct = ungqr if np.iscomplexobj(A) else orgqr
    formed = reconstruct(Q, tau, provider=provider)
    raise_for_status(formed.routine, formed.info, 'a')
    return Q, R


def svd(
    a: ArrayLike,
    full_matrices: bool = True,
    compute_uv: bool = True,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> Any:
    """
    Singular value decomposition.

    Args:
        a: Matrix (m x n)
        full_matrices: U is m x m and Vh is n x n; otherwise m x k and k x n
        compute_uv: Also return the singular vectors

    Returns:
        (U, s, Vh), or s alone when compute_uv is False

    Raises:
        ConvergenceError: If the decomposition does not converge
    """
    if not compute_uv:
        jobz = 'N'
    else:
        jobz = 'A' if full_matrices else 'S'
    A = working_copy(a, 'a', check_finite=check_finite)
    result = gesdd(A, jobz, provider=provider)
    raise_for_status(result.routine, result.info, 'a')
    if not compute_uv:
        return result.params.s
    return result.params.u, result.params.s, result.params.vt


def _pair_eigenvectors(wr: NDArray[Any], wi: NDArray[Any], vr: NDArray[Any]) -> NDArray[Any]:
    """Assemble complex eigenvectors from the real packed representation."""
    v = vr.astype(np.result_type(vr.dtype, np.complex64))
    j = 0
    n = wr.shape[0]
    while j < n:
        if wi[j] != 0 and j + 1 < n:
            v[:, j] = vr[:, j] + 1j * vr[:, j + 1]
            v[:, j + 1] = np.conj(v[:, j])
            j += 2
        else:
            j += 1
    return v


def eig(
    a: ArrayLike,
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> tuple[NDArray[Any], NDArray[Any]]:
    """
    Eigenvalues and right eigenvectors of a general square matrix.

    Returns:
        (w, v): eigenvalues and normalized eigenvectors by column, so that
        ``a @ v[:, i] == w[i] * v[:, i]``. Real input yields real output
        unless some eigenvalues are complex.

    Raises:
        ConvergenceError: If the QR algorithm fails
    """
    A = working_copy(a, 'a', square=True, check_finite=check_finite)
    result = geev(A, 'N', 'V', provider=provider)
    raise_for_status(result.routine, result.info, 'a')
    params = result.params
    if params.w is not None:
        return params.w, params.vr
    if not np.any(params.wi):
        return params.wr, params.vr
    return params.eigenvalues, _pair_eigenvectors(params.wr, params.wi, params.vr)


def _self_adjoint(a: ArrayLike, jobz: str, uplo: str, check_finite: bool,
                  provider: ProviderChoice | None) -> tuple[NDArray[Any], NDArray[Any]]:
    A = working_copy(a, 'a', square=True, check_finite=check_finite)
    routine = heevd if np.iscomplexobj(A) else syevd
    result = routine(A, jobz, uplo, provider=provider)
    raise_for_status(result.routine, result.info, 'a')
    return result.params.w, A


def eigh(
    a: ArrayLike,
    uplo: str = 'L',
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> tuple[NDArray[Any], NDArray[Any]]:
    """
    Eigen-decomposition of a symmetric/Hermitian matrix.

    Args:
        a: Square matrix; only the ``uplo`` triangle is read
        uplo: 'L' or 'U'

    Returns:
        (w, v): ascending real eigenvalues and orthonormal eigenvectors
    """
    return _self_adjoint(a, 'V', uplo, check_finite, provider)


def eigvalsh(
    a: ArrayLike,
    uplo: str = 'L',
    *,
    check_finite: bool = True,
    provider: ProviderChoice | None = None,
) -> NDArray[Any]:
    """Ascending eigenvalues of a symmetric/Hermitian matrix."""
    w, _ = _self_adjoint(a, 'N', uplo, check_finite, provider)
    return w
