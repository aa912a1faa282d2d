"""
BLAS Level 2: matrix-vector product and rank-1 update.

The matrix may be row-major or column-major; its layout is passed to the
provider, so neither case costs a copy. In/out operands are updated in
place and must already have the promoted dtype.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyxlinalg.blas._common import lookup, promote, scalar
from pyxlinalg.core.catalogue import ROUTINE_GEMV, ROUTINE_GER
from pyxlinalg.core.evaluation import as_inout, materialize
from pyxlinalg.core.exceptions import DimensionError
from pyxlinalg.core.strides import leading_dimension, storage_order, vector_increment
from pyxlinalg.core.validation import check_1d, check_2d, check_shape
from pyxlinalg.providers import ProviderChoice


def gemv(
    A: ArrayLike,
    x: ArrayLike,
    result: NDArray[Any] | None = None,
    *,
    transpose: bool = False,
    alpha: Any = 1.0,
    beta: Any = 0.0,
    provider: ProviderChoice | None = None,
) -> NDArray[Any]:
    """
    General matrix-vector product.

    Computes ``result := alpha * op(A) @ x + beta * result`` where op(A) is
    A or A^T.

    Args:
        A: Matrix (m x n)
        x: Vector of length n (m when ``transpose``)
        result: Output vector of length m (n when ``transpose``), updated
            in place. When None a zero vector is allocated.
        transpose: Use A^T instead of A
        alpha, beta: Scalars
        provider: Compute provider (None for the process default)

    Returns:
        ``result`` (the same object when one was given)

    Raises:
        DimensionError: If shapes are inconsistent
        DTypeError: If ``result`` does not have the promoted dtype
        LayoutError: If ``result`` is read-only
    """
    arrays, category = promote({'A': A, 'x': x}, {'result': result})
    a = materialize(arrays['A'], dtype=category.dtype, name='A')
    xv = materialize(arrays['x'], dtype=category.dtype, name='x')
    check_2d(a, 'A')
    check_1d(xv, 'x')

    m, n = a.shape
    len_x, len_y = (m, n) if transpose else (n, m)
    if xv.shape[0] != len_x:
        raise DimensionError(
            f"x: expected length {len_x} for A of shape {a.shape}"
            f"{' (transposed)' if transpose else ''}, got {xv.shape[0]}"
        )

    if result is None:
        result = np.zeros(len_y, dtype=category.dtype)
    y = as_inout(result, dtype=category.dtype, name='result')
    check_1d(y, 'result')
    check_shape(y, (len_y,), 'result')

    order = a.layout
    _, fn = lookup(ROUTINE_GEMV, category, provider)
    fn(
        order, 'T' if transpose else 'N', m, n,
        scalar(alpha, category, 'alpha'),
        a.pointer, leading_dimension(a, order, 'A'),
        xv.pointer, vector_increment(xv, 'x'),
        scalar(beta, category, 'beta'),
        y.pointer, vector_increment(y, 'result'),
    )
    return result


def ger(
    x: ArrayLike,
    y: ArrayLike,
    result: NDArray[Any],
    *,
    alpha: Any = 1.0,
    provider: ProviderChoice | None = None,
) -> NDArray[Any]:
    """
    Rank-1 update ``result := alpha * x @ y^T + result``.

    Complex operands are not conjugated.

    Args:
        x: Vector of length m
        y: Vector of length n
        result: Matrix (m x n), row- or column-major, updated in place
        alpha: Scalar
        provider: Compute provider (None for the process default)

    Returns:
        ``result``

    Raises:
        DimensionError: If shapes are inconsistent
        LayoutError: If ``result`` has no resolvable layout or is read-only
    """
    arrays, category = promote({'x': x, 'y': y}, {'result': result})
    xv = materialize(arrays['x'], dtype=category.dtype, name='x')
    yv = materialize(arrays['y'], dtype=category.dtype, name='y')
    check_1d(xv, 'x')
    check_1d(yv, 'y')

    a = as_inout(result, dtype=category.dtype, name='result')
    check_2d(a, 'result')
    check_shape(a, (xv.shape[0], yv.shape[0]), 'result')
    order = storage_order(a, 'result')

    m, n = a.shape
    _, fn = lookup(ROUTINE_GER, category, provider)
    fn(
        order, m, n, scalar(alpha, category, 'alpha'),
        xv.pointer, vector_increment(xv, 'x'),
        yv.pointer, vector_increment(yv, 'y'),
        a.pointer, leading_dimension(a, order, 'result'),
    )
    return result
