"""
BLAS Level 3: general matrix-matrix product.
"""

from typing import Any

from numpy.typing import ArrayLike, NDArray

from pyxlinalg.blas._common import lookup, promote, scalar
from pyxlinalg.core.catalogue import ROUTINE_GEMM
from pyxlinalg.core.evaluation import as_inout, materialize
from pyxlinalg.core.exceptions import DimensionError
from pyxlinalg.core.strides import check_same_layout, leading_dimension, storage_order
from pyxlinalg.core.validation import check_2d
from pyxlinalg.providers import ProviderChoice


def gemm(
    A: ArrayLike,
    B: ArrayLike,
    result: NDArray[Any],
    *,
    transpose_a: bool = False,
    transpose_b: bool = False,
    alpha: Any = 1.0,
    beta: Any = 0.0,
    provider: ProviderChoice | None = None,
) -> NDArray[Any]:
    """
    General matrix-matrix product.

    Computes ``result := alpha * op(A) @ op(B) + beta * result``.

    The layout of ``result`` decides the storage order of the call: A and B
    are materialized in that same layout (a copy only when they are not
    already stored that way), so all three operands agree.

    Args:
        A: Matrix with op(A) of shape (m x k)
        B: Matrix with op(B) of shape (k x n)
        result: Output matrix (m x n), updated in place
        transpose_a, transpose_b: Transpose flags
        alpha, beta: Scalars
        provider: Compute provider (None for the process default)

    Returns:
        ``result``

    Raises:
        DimensionError: If shapes are inconsistent
        LayoutError: If the layout of ``result`` cannot be resolved or it
            is read-only
        DTypeError: If ``result`` does not have the promoted dtype
    """
    arrays, category = promote({'A': A, 'B': B}, {'result': result})
    c = as_inout(result, dtype=category.dtype, name='result')
    check_2d(c, 'result')
    order = storage_order(c, 'result')

    a = materialize(arrays['A'], order, dtype=category.dtype, name='A')
    b = materialize(arrays['B'], order, dtype=category.dtype, name='B')
    check_2d(a, 'A')
    check_2d(b, 'B')

    m, n = c.shape
    a_rows, a_cols = a.shape[::-1] if transpose_a else a.shape
    b_rows, b_cols = b.shape[::-1] if transpose_b else b.shape
    if a_cols != b_rows:
        raise DimensionError(
            f"inner dimensions disagree: op(A) is {a_rows}x{a_cols}, op(B) is {b_rows}x{b_cols}"
        )
    if (a_rows, b_cols) != (m, n):
        raise DimensionError(
            f"result: expected shape {(a_rows, b_cols)}, got {c.shape}"
        )
    check_same_layout(order, a, b, c, names=('A', 'B', 'result'))

    _, fn = lookup(ROUTINE_GEMM, category, provider)
    fn(
        order,
        'T' if transpose_a else 'N',
        'T' if transpose_b else 'N',
        m, n, a_cols,
        scalar(alpha, category, 'alpha'),
        a.pointer, leading_dimension(a, order, 'A'),
        b.pointer, leading_dimension(b, order, 'B'),
        scalar(beta, category, 'beta'),
        c.pointer, leading_dimension(c, order, 'result'),
    )
    return result
