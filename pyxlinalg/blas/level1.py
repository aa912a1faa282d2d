"""
BLAS Level 1: vector reductions and dot products.

All operations take 1-D operands of any stride. Operands are promoted to
a common supported element type; integer input becomes float64.
"""

from typing import Any

from numpy.typing import ArrayLike

from pyxlinalg.blas._common import lookup, promote
from pyxlinalg.core.catalogue import ROUTINE_ASUM, ROUTINE_DOT, ROUTINE_DOTU, ROUTINE_NRM2
from pyxlinalg.core.evaluation import materialize
from pyxlinalg.core.strides import vector_increment
from pyxlinalg.core.validation import check_1d, check_consistent_length
from pyxlinalg.providers import ProviderChoice


def _reduce(base: str, a: ArrayLike, provider: ProviderChoice | None) -> float:
    arrays, category = promote({'a': a})
    view = materialize(arrays['a'], dtype=category.dtype, name='a')
    check_1d(view, 'a')
    _, fn = lookup(base, category, provider)
    return fn(view.shape[0], view.pointer, vector_increment(view, 'a'))


def asum(a: ArrayLike, *, provider: ProviderChoice | None = None) -> float:
    """
    Sum of absolute values.

    For complex input this is ``sum(|Re(a_i)| + |Im(a_i)|)``, the BLAS
    definition, not the sum of moduli.

    Args:
        a: 1-D vector
        provider: Compute provider (None for the process default)

    Returns:
        Real scalar

    Raises:
        DimensionError: If ``a`` is not 1-D
    """
    return _reduce(ROUTINE_ASUM, a, provider)


def nrm2(a: ArrayLike, *, provider: ProviderChoice | None = None) -> float:
    """
    Euclidean norm, computed without destructive overflow.

    Args:
        a: 1-D vector
        provider: Compute provider (None for the process default)

    Returns:
        Real scalar

    Raises:
        DimensionError: If ``a`` is not 1-D
    """
    return _reduce(ROUTINE_NRM2, a, provider)


def _dot(base: str, a: ArrayLike, b: ArrayLike, provider: ProviderChoice | None) -> Any:
    arrays, category = promote({'a': a, 'b': b})
    x = materialize(arrays['a'], dtype=category.dtype, name='a')
    y = materialize(arrays['b'], dtype=category.dtype, name='b')
    check_1d(x, 'a')
    check_1d(y, 'b')
    check_consistent_length(x, y, names=('a', 'b'))
    _, fn = lookup(base, category, provider)
    return fn(
        x.shape[0],
        x.pointer, vector_increment(x, 'a'),
        y.pointer, vector_increment(y, 'b'),
    )


def dot(a: ArrayLike, b: ArrayLike, *, provider: ProviderChoice | None = None) -> Any:
    """
    Inner product ``sum(conj(a_i) * b_i)``.

    The first operand is conjugated for complex input; for real input this
    is the ordinary dot product.

    Args:
        a, b: 1-D vectors of equal length
        provider: Compute provider (None for the process default)

    Returns:
        float for real operands, complex for complex operands

    Raises:
        DimensionError: If an operand is not 1-D or the lengths differ
    """
    return _dot(ROUTINE_DOT, a, b, provider)


def dotu(a: ArrayLike, b: ArrayLike, *, provider: ProviderChoice | None = None) -> Any:
    """
    Unconjugated inner product ``sum(a_i * b_i)``.

    Identical to ``dot`` for real input.
    """
    return _dot(ROUTINE_DOTU, a, b, provider)
