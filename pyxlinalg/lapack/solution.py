"""
Output payloads of the LAPACK wrappers.

Each payload holds the NEW output buffers of one routine. Operands that
the routine overwrites in place (A, b) are the caller's own arrays and do
not appear here. Wrappers whose only outputs are in place return a Result
with ``params=None``.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class PivotParams:
    """
    Pivot sequence of an LU factorization (gesv, getrf).

    Attributes:
        piv: 1-based row interchanges; row i was swapped with row piv[i]
    """
    piv: NDArray[np.int32]


@dataclass(frozen=True)
class QRParams:
    """
    Householder scalars of a QR factorization (geqrf).

    Attributes:
        tau: min(m, n) reflector scalars; the reflector vectors are stored
            below the diagonal of A
    """
    tau: NDArray[Any]


@dataclass(frozen=True)
class SVDParams:
    """
    Singular value decomposition outputs (gesdd).

    Attributes:
        s: Exactly min(m, n) singular values, descending
        u: Left singular vectors, or None when not computed or when they
            were written into A (jobz='O' with m >= n)
        vt: Right singular vectors (conjugate-transposed), or None when not
            computed or written into A (jobz='O' with m < n)
    """
    s: NDArray[np.floating[Any]]
    u: NDArray[Any] | None
    vt: NDArray[Any] | None


@dataclass(frozen=True)
class EigParams:
    """
    General eigenproblem outputs (geev).

    Real routines report eigenvalues as separate real and imaginary parts
    (``wr``, ``wi``, with ``w`` None); complex routines report ``w``.
    Complex-conjugate pairs appear consecutively, positive imaginary part
    first.

    Attributes:
        w: Complex eigenvalues (complex routines)
        wr: Real parts (real routines)
        wi: Imaginary parts (real routines)
        vl: Left eigenvectors by column, or None if not requested
        vr: Right eigenvectors by column, or None if not requested
    """
    vl: NDArray[Any] | None
    vr: NDArray[Any] | None
    w: NDArray[np.complexfloating[Any, Any]] | None = None
    wr: NDArray[np.floating[Any]] | None = None
    wi: NDArray[np.floating[Any]] | None = None

    @property
    def eigenvalues(self) -> NDArray[Any]:
        """Eigenvalues as one array, complex only when needed."""
        if self.w is not None:
            return self.w
        if np.any(self.wi):
            return self.wr + 1j * self.wi
        return self.wr


@dataclass(frozen=True)
class SymmetricEigParams:
    """
    Symmetric/Hermitian eigenproblem outputs (syevd, heevd).

    Attributes:
        w: Real eigenvalues in ascending order; eigenvectors, when
            requested, overwrite A
    """
    w: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class LstsqParams:
    """
    Minimum-norm least-squares outputs (gelsd).

    Attributes:
        s: Singular values of A, descending
        rank: Effective rank (singular values above rcond * s[0])
    """
    s: NDArray[np.floating[Any]]
    rank: int
