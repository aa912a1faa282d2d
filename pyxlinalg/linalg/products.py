"""
Products and norms on top of the BLAS dispatcher.

Public API:
    dot()     - vector/matrix products for operands of up to two dimensions
    matmul()  - like dot, but scalars are rejected
    outer()   - outer product of two vectors
    norm()    - vector and matrix norms
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyxlinalg import blas
from pyxlinalg.core.evaluation import common_category
from pyxlinalg.core.exceptions import DimensionError, ValidationError
from pyxlinalg.core.validation import check_array
from pyxlinalg.linalg.decompositions import svd
from pyxlinalg.providers import ProviderChoice


def dot(
    a: ArrayLike,
    b: ArrayLike,
    *,
    provider: ProviderChoice | None = None,
) -> Any:
    """
    Product of two operands of at most two dimensions.

    1-D with 1-D is the unconjugated inner product; a matrix with a vector
    is a matrix-vector product; two matrices give the matrix product.
    Scalars multiply elementwise.

    Raises:
        DimensionError: For operands of more than two dimensions or
            mismatched inner dimensions
    """
    a_arr = check_array(a, 'a')
    b_arr = check_array(b, 'b')
    if a_arr.ndim == 0 or b_arr.ndim == 0:
        return a_arr * b_arr
    if a_arr.ndim > 2 or b_arr.ndim > 2:
        raise DimensionError(
            f"operands of at most 2 dimensions are supported, got {a_arr.ndim}D and {b_arr.ndim}D"
        )

    if a_arr.ndim == 1 and b_arr.ndim == 1:
        return blas.dotu(a_arr, b_arr, provider=provider)
    if a_arr.ndim == 2 and b_arr.ndim == 1:
        return blas.gemv(a_arr, b_arr, provider=provider)
    if a_arr.ndim == 1 and b_arr.ndim == 2:
        return blas.gemv(b_arr, a_arr, transpose=True, provider=provider)

    dtype = common_category(a_arr.dtype, b_arr.dtype).dtype
    result = np.zeros((a_arr.shape[0], b_arr.shape[1]), dtype=dtype)
    return blas.gemm(a_arr, b_arr, result, provider=provider)


def matmul(
    a: ArrayLike,
    b: ArrayLike,
    *,
    provider: ProviderChoice | None = None,
) -> Any:
    """
    Matrix product of operands of one or two dimensions.

    Raises:
        DimensionError: For scalar operands, operands of more than two
            dimensions, or mismatched inner dimensions
    """
    a_arr = check_array(a, 'a')
    b_arr = check_array(b, 'b')
    if a_arr.ndim == 0 or b_arr.ndim == 0:
        raise DimensionError("matmul: scalar operands are not allowed, use multiplication")
    return dot(a_arr, b_arr, provider=provider)


def outer(
    x: ArrayLike,
    y: ArrayLike,
    *,
    provider: ProviderChoice | None = None,
) -> NDArray[Any]:
    """
    Outer product ``x y^T`` (no conjugation). Inputs are flattened.
    """
    xv = np.ravel(check_array(x, 'x'))
    yv = np.ravel(check_array(y, 'y'))
    dtype = common_category(xv.dtype, yv.dtype).dtype
    result = np.zeros((xv.shape[0], yv.shape[0]), dtype=dtype)
    return blas.ger(xv, yv, result, provider=provider)


def _vector_norm(x: NDArray[Any], ord: Any, provider: ProviderChoice | None) -> float:
    if ord is None or ord == 2:
        return blas.nrm2(x, provider=provider)
    if ord == 1:
        if np.iscomplexobj(x):
            return float(np.sum(np.abs(x)))
        return blas.asum(x, provider=provider)
    if ord == np.inf:
        return float(np.max(np.abs(x))) if x.size else 0.0
    if ord == -np.inf:
        return float(np.min(np.abs(x))) if x.size else 0.0
    if ord == 0:
        return float(np.count_nonzero(x))
    if isinstance(ord, str):
        raise ValidationError(f"ord: invalid norm order {ord!r} for vectors")
    return float(np.sum(np.abs(x) ** ord) ** (1.0 / ord))


def _matrix_norm(x: NDArray[Any], ord: Any, provider: ProviderChoice | None) -> float:
    if ord is None or ord == 'fro':
        return blas.nrm2(np.ravel(x), provider=provider)
    if ord in ('nuc', 2, -2):
        if x.size == 0:
            return 0.0
        s = svd(x, compute_uv=False, provider=provider)
        if ord == 'nuc':
            return float(np.sum(s))
        return float(s[0]) if ord == 2 else float(s[-1])
    if ord in (1, -1, np.inf, -np.inf):
        axis = 0 if ord in (1, -1) else 1
        sums = np.sum(np.abs(x), axis=axis)
        if sums.size == 0:
            return 0.0
        return float(np.max(sums)) if ord > 0 else float(np.min(sums))
    raise ValidationError(f"ord: invalid norm order {ord!r} for matrices")


def norm(
    x: ArrayLike,
    ord: Any = None,
    *,
    provider: ProviderChoice | None = None,
) -> float:
    """
    Vector or matrix norm.

    Args:
        x: 1-D or 2-D input
        ord: Norm order
            vectors: None/2 (Euclidean), 1, inf, -inf, 0 (count of
                nonzeros), or any other real p
            matrices: None/'fro' (Frobenius), 'nuc', 2, -2 (largest and
                smallest singular value), 1, -1, inf, -inf
        provider: Compute provider (None for the process default)

    Raises:
        DimensionError: If x is not 1-D or 2-D
        ValidationError: For an invalid order
    """
    arr = check_array(x, 'x')
    if arr.ndim == 1:
        return _vector_norm(arr, ord, provider)
    if arr.ndim == 2:
        return _matrix_norm(arr, ord, provider)
    raise DimensionError(f"x: expected 1D or 2D array, got {arr.ndim}D")
