"""
LAPACK wrappers with workspace negotiation.

Every wrapper returns a Result envelope with the verbatim status code:
a nonzero ``info`` is data, not an exception. Operands named in capitals
(A, b) are overwritten in place and must be column-major, writeable and
of a supported dtype.

Linear systems and LU:
    gesv, getrf, getri, lu_permutation
QR:
    geqrf, orgqr (real), ungqr (complex)
Singular values:
    gesdd
Cholesky:
    potrf
Eigenvalues:
    geev, syevd (real), heevd (complex)
Least squares:
    gelsd
"""

from pyxlinalg.lapack.cholesky import potrf
from pyxlinalg.lapack.eigen import geev, heevd, syevd
from pyxlinalg.lapack.lstsq import gelsd
from pyxlinalg.lapack.lu import gesv, getrf, getri, lu_permutation
from pyxlinalg.lapack.qr import geqrf, orgqr, ungqr
from pyxlinalg.lapack.solution import (
    EigParams,
    LstsqParams,
    PivotParams,
    QRParams,
    SVDParams,
    SymmetricEigParams,
)
from pyxlinalg.lapack.svd import gesdd

__all__ = [
    # Operations
    "gesv",
    "getrf",
    "getri",
    "lu_permutation",
    "geqrf",
    "orgqr",
    "ungqr",
    "gesdd",
    "potrf",
    "geev",
    "syevd",
    "heevd",
    "gelsd",
    # Payloads
    "PivotParams",
    "QRParams",
    "SVDParams",
    "EigParams",
    "SymmetricEigParams",
    "LstsqParams",
]
