"""
Stride and leading-dimension resolution.

Pure functions that turn a ViewDescriptor into the increment and leading
dimension values a provider routine expects. Every precondition is checked
on each call; a violation raises immediately and is never corrected.
"""

from pyxlinalg.core.exceptions import LayoutError
from pyxlinalg.core.validation import check_ndim
from pyxlinalg.core.view import Layout, ViewDescriptor


def select_stride(stride: int) -> int:
    """
    Stride to pass for a buffer that may be degenerate or unreferenced.

    A zero stride (single element, or a buffer the provider never reads)
    has no meaning and is replaced by 1.
    """
    return 1 if stride == 0 else int(stride)


def vector_increment(view: ViewDescriptor, name: str = 'x') -> int:
    """
    Increment (incx) of a 1-D view.

    Raises:
        DimensionError: If the view is not exactly 1-D
    """
    check_ndim(view, 1, name)
    return select_stride(view.strides[0])


def leading_dimension(view: ViewDescriptor, layout: Layout, name: str = 'A') -> int:
    """
    Leading dimension of a 2-D view stored in ``layout``.

    This is the stride of the non-contiguous axis. When that axis holds at
    most one element its stride is meaningless, and the length of the
    contiguous axis is used instead (the smallest value the provider
    accepts). The result is never smaller than 1.

    Raises:
        DimensionError: If the view is not exactly 2-D
        LayoutError: If the view cannot be described in ``layout``
    """
    check_ndim(view, 2, name)
    if not view.fits(layout):
        found = view.layout.value if view.layout is not None else 'no unit-stride axis'
        raise LayoutError(
            f"{name}: expected {layout.value} storage, got {found} "
            f"(shape {view.shape}, element strides {view.strides})"
        )
    rows, cols = view.shape
    if layout is Layout.COLUMN_MAJOR:
        inner, outer, outer_stride = rows, cols, view.strides[1]
    else:
        inner, outer, outer_stride = cols, rows, view.strides[0]
    if outer <= 1:
        return max(1, inner)
    return max(1, outer_stride)


def storage_order(view: ViewDescriptor, name: str = 'result') -> Layout:
    """
    Layout of an output view, which the provider must be told explicitly.

    Raises:
        DimensionError: If the view is not 2-D
        LayoutError: If the layout cannot be resolved
    """
    check_ndim(view, 2, name)
    if view.layout is None:
        raise LayoutError(
            f"{name}: layout cannot be resolved (shape {view.shape}, "
            f"element strides {view.strides}); a row-major or column-major "
            f"buffer is required"
        )
    return view.layout


def check_same_layout(layout: Layout, *views: ViewDescriptor, names: tuple[str, ...]) -> None:
    """
    Verify that every view can be described in ``layout``.

    Raises:
        ValueError: If the number of names doesn't match the number of views
        LayoutError: If any view disagrees
    """
    if len(views) != len(names):
        raise ValueError(
            f"Number of views ({len(views)}) must match number of names ({len(names)})"
        )
    for view, name in zip(views, names):
        if not view.fits(layout):
            raise LayoutError(
                f"{name}: layout disagrees with {layout.value} "
                f"(shape {view.shape}, element strides {view.strides})"
            )
