"""
Precondition checks run at call entry, before any provider is touched.

Each check validates one property and raises with the parameter name and
the offending value. The checks run in every build: a malformed buffer
that reached the provider would corrupt memory or produce wrong numbers,
not an error.

Shape checks accept anything with ``ndim``/``shape`` attributes, so they
work on NumPy arrays and ViewDescriptors alike.
"""

from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyxlinalg.core.exceptions import DimensionError, LayoutError, ValidationError


def check_array(array: ArrayLike, name: str) -> NDArray[Any]:
    """
    Convert an array-like to a numeric ndarray.

    Integer and boolean input becomes float64; floating and complex input
    keeps its dtype. Existing arrays are not copied.

    Raises:
        ValidationError: If the input is ragged, of object dtype, or not
            numeric
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(f"{name}: object dtype, expected numeric data")
    if result.dtype == np.bool_ or np.issubdtype(result.dtype, np.integer):
        return result.astype(np.float64)
    if not np.issubdtype(result.dtype, np.inexact):
        raise ValidationError(f"{name}: non-numeric dtype {result.dtype}, expected numeric data")
    return result


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: Any, ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array or view to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {tuple(array.shape)}"
        )


def check_1d(array: Any, name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    check_ndim(array, 1, name)


def check_2d(array: Any, name: str) -> None:
    """
    Verify array is 2-dimensional.

    Raises:
        DimensionError: If array is not 2D
    """
    check_ndim(array, 2, name)


def check_square(array: Any, name: str) -> None:
    """
    Verify array is a square matrix.

    Raises:
        DimensionError: If array is not 2D or not square
    """
    check_2d(array, name)
    rows, cols = array.shape
    if rows != cols:
        raise DimensionError(f"{name}: expected square matrix, got shape {tuple(array.shape)}")


def check_consistent_length(*arrays: Any, names: tuple[str, ...]) -> None:
    """
    Verify vector operands share their length (first dimension).

    Raises:
        ValueError: If the names do not pair up with the operands
        DimensionError: If the lengths differ
    """
    if len(arrays) != len(names):
        raise ValueError(f"{len(arrays)} operands but {len(names)} names")
    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"operands must have equal length, got {details}")


def check_shape(array: Any, shape: tuple[int, ...], name: str) -> None:
    """
    Verify array has exactly the given shape.

    Raises:
        DimensionError: If shapes differ
    """
    if tuple(array.shape) != tuple(shape):
        raise DimensionError(
            f"{name}: expected shape {tuple(shape)}, got {tuple(array.shape)}"
        )


def check_min_length(array: Any, min_length: int, name: str) -> None:
    """
    Verify a 1-D buffer holds at least ``min_length`` elements.

    Raises:
        DimensionError: If the buffer is too short
    """
    length = array.shape[0]
    if length < min_length:
        raise DimensionError(
            f"{name}: requires at least {min_length} elements, got {length}"
        )


def check_writeable(array: Any, name: str) -> None:
    """
    Verify an in/out operand can be written in place.

    Raises:
        LayoutError: If the array is read-only
    """
    if isinstance(array, np.ndarray):
        writeable = bool(array.flags.writeable)
    else:
        writeable = bool(array.writeable)
    if not writeable:
        raise LayoutError(f"{name}: output buffer is read-only")


def check_choice(value: str, allowed: Iterable[str], name: str) -> str:
    """
    Verify a flag character is one of the allowed values.

    Flags are compared case-insensitively and returned upper-cased, the
    form the provider expects.

    Raises:
        ValidationError: If the value is not allowed
    """
    allowed = tuple(allowed)
    if not isinstance(value, str) or value.upper() not in allowed:
        raise ValidationError(
            f"{name}: expected one of {', '.join(repr(a) for a in allowed)}, got {value!r}"
        )
    return value.upper()
