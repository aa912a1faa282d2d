"""
Input handling for the high-level functions.

The high-level layer never touches the caller's arrays: every matrix is
validated at this boundary and copied into private column-major storage
that the LAPACK wrappers may overwrite.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyxlinalg.core import validation
from pyxlinalg.core.evaluation import common_category
from pyxlinalg.core.exceptions import DimensionError


def working_copy(
    a: ArrayLike,
    name: str = 'a',
    *,
    square: bool = False,
    check_finite: bool = True,
    dtype: Any = None,
) -> NDArray[Any]:
    """
    Validate a matrix and return a private column-major copy.

    Args:
        a: Matrix-like input
        name: Parameter name for error messages
        square: Require a square matrix
        check_finite: Reject NaN and Inf
        dtype: Target dtype; defaults to the smallest supported type
            holding the input

    Raises:
        ValidationError: If the input is not numeric or not finite
        DimensionError: If the input is not 2-D (or not square)
    """
    arr = validation.check_array(a, name)
    if square:
        validation.check_square(arr, name)
    else:
        validation.check_2d(arr, name)
    if check_finite:
        validation.check_finite(arr, name)
    target = common_category(arr.dtype).dtype if dtype is None else np.dtype(dtype)
    return np.array(arr, dtype=target, order='F', copy=True)


def working_pair(
    a: ArrayLike,
    b: ArrayLike,
    *,
    square: bool = False,
    check_finite: bool = True,
) -> tuple[NDArray[Any], NDArray[Any]]:
    """
    Validate a matrix and a right-hand side and copy both to a common dtype.

    The right-hand side may be 1-D or 2-D; its copy keeps that shape.
    """
    a_arr = validation.check_array(a, 'a')
    b_arr = validation.check_array(b, 'b')
    if b_arr.ndim not in (1, 2):
        raise DimensionError(f"b: expected 1D or 2D array, got {b_arr.ndim}D")
    if check_finite:
        validation.check_finite(b_arr, 'b')
    dtype = common_category(a_arr.dtype, b_arr.dtype).dtype
    A = working_copy(a_arr, 'a', square=square, check_finite=check_finite, dtype=dtype)
    B = np.array(b_arr, dtype=dtype, order='F', copy=True)
    return A, B
