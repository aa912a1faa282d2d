"""
Evaluation collaborator: turn array expressions into dense views.

``materialize`` is the only place where input operands may be copied. It
returns a view of the caller's memory when the array is already dense in
the requested layout and a fresh copy otherwise. In/out operands go
through ``as_inout`` instead, which never copies: an output that is not
already usable is a precondition violation.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pyxlinalg.core.exceptions import DTypeError, LayoutError, ValidationError
from pyxlinalg.core.validation import check_array, check_writeable
from pyxlinalg.core.view import ElementCategory, Layout, ViewDescriptor


def common_category(*dtypes: DTypeLike) -> ElementCategory:
    """
    Smallest supported element category that holds every given dtype.

    Integers and booleans map to double precision; float16 maps to single.

    Raises:
        DTypeError: If a dtype is not numeric or needs more than double
            precision (e.g. longdouble)
    """
    result = np.result_type(*dtypes)
    if result == np.bool_ or np.issubdtype(result, np.integer):
        return ElementCategory('real', 'double')
    if result == np.float16:
        return ElementCategory('real', 'single')
    return ElementCategory.from_dtype(result)


def materialize(
    expression: ArrayLike,
    layout: Layout | None = None,
    *,
    dtype: DTypeLike | None = None,
    name: str = 'array',
) -> ViewDescriptor:
    """
    Produce a dense view of ``expression`` honoring ``layout``.

    Args:
        expression: Any array-like
        layout: Required layout for 2-D operands; None accepts whichever
            layout the array already has
        dtype: Element type to convert to; defaults to the smallest
            supported type holding the input
        name: Parameter name for error messages

    Returns:
        ViewDescriptor referencing the input when no conversion was needed,
        or a private copy otherwise. Arrays with other than 1 or 2
        dimensions are described as-is; dimension checks belong to the
        operation.
    """
    array = check_array(expression, name)
    target = np.dtype(dtype) if dtype is not None else common_category(array.dtype).dtype
    if array.dtype != target:
        array = array.astype(target)

    if array.ndim == 1:
        try:
            return ViewDescriptor.from_array(array, name=name)
        except LayoutError:
            return ViewDescriptor.from_array(np.ascontiguousarray(array), name=name)

    if array.ndim == 2:
        try:
            view = ViewDescriptor.from_array(array, prefer=layout, name=name)
        except LayoutError:
            view = None
        if view is not None:
            if layout is None and view.layout is not None:
                return view
            if layout is not None and view.fits(layout):
                return view
        order = layout.numpy_order if layout is not None else 'C'
        copy = np.array(array, order=order, copy=True)
        return ViewDescriptor.from_array(copy, prefer=layout or Layout.ROW_MAJOR, name=name)

    return ViewDescriptor.from_array(array, prefer=layout, name=name)


def as_inout(
    array: NDArray[Any],
    layout: Layout | None = None,
    *,
    dtype: DTypeLike | None = None,
    name: str = 'array',
) -> ViewDescriptor:
    """
    Describe an operand that the provider overwrites in place.

    Args:
        array: NumPy array owned by the caller
        layout: Layout the routine requires for 2-D operands
        dtype: Exact dtype the operand must have, if constrained
        name: Parameter name for error messages

    Raises:
        ValidationError: If ``array`` is not a NumPy array
        DTypeError: If the dtype is unsupported or differs from ``dtype``
        LayoutError: If the array is read-only or not in ``layout``
    """
    if not isinstance(array, np.ndarray):
        raise ValidationError(
            f"{name}: in/out operand must be a numpy.ndarray, got {type(array).__name__}"
        )
    if dtype is not None and array.dtype != np.dtype(dtype):
        raise DTypeError(
            f"{name}: expected dtype {np.dtype(dtype)}, got {array.dtype}",
            dtype=str(array.dtype),
        )
    view = ViewDescriptor.from_array(array, prefer=layout, name=name)
    check_writeable(view, name)
    if layout is not None and view.ndim == 2 and not view.fits(layout):
        raise LayoutError(
            f"{name}: in/out operand must be {layout.value} "
            f"(shape {view.shape}, element strides {view.strides})"
        )
    return view
