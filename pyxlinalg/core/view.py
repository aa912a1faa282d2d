"""
View descriptors: the canonical description of a dense buffer.

A ViewDescriptor is what every BLAS/LAPACK call site works with. It records
where the data lives (a raw pointer, modelled as a flat 1-D buffer plus an
element offset), the logical shape, per-axis strides in elements, the memory
layout and the element category.

Only provider adapters are allowed to turn a RawPointer back into arrays;
everything above them reasons about views.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, NamedTuple

import numpy as np
from numpy.lib.stride_tricks import as_strided
from numpy.typing import NDArray

from pyxlinalg.core.exceptions import DTypeError, LayoutError


class Layout(str, Enum):
    """Storage order of a 2-D buffer."""
    ROW_MAJOR = 'row_major'
    COLUMN_MAJOR = 'column_major'

    @property
    def numpy_order(self) -> Literal['C', 'F']:
        return 'C' if self is Layout.ROW_MAJOR else 'F'


@dataclass(frozen=True)
class ElementCategory:
    """
    Element category of a buffer: real or complex, single or double precision.

    Pivot and rank buffers use the separate 'index' kind (LAPACK integers),
    which ``from_dtype`` never returns.

    Attributes:
        kind: 'real', 'complex' or 'index'
        precision: 'single' or 'double'
    """
    kind: Literal['real', 'complex', 'index']
    precision: Literal['single', 'double']

    @property
    def is_complex(self) -> bool:
        return self.kind == 'complex'

    @property
    def prefix(self) -> str:
        """BLAS/LAPACK type prefix: s, d, c or z."""
        return _PREFIXES[(self.kind, self.precision)]

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(_DTYPES[(self.kind, self.precision)])

    @property
    def real_dtype(self) -> np.dtype:
        """Dtype of real-valued companions (singular values, rwork, ...)."""
        return np.dtype(_DTYPES[('real', self.precision)])

    @property
    def real(self) -> ElementCategory:
        return ElementCategory('real', self.precision)

    @classmethod
    def from_dtype(cls, dtype: Any) -> ElementCategory:
        """
        Map a NumPy dtype to its element category.

        Raises:
            DTypeError: If the dtype is not one of float32, float64,
                complex64, complex128
        """
        dt = np.dtype(dtype)
        category = _CATEGORIES.get(dt)
        if category is None:
            raise DTypeError(
                f"unsupported dtype {dt}, expected one of float32, float64, "
                f"complex64, complex128",
                dtype=str(dt),
            )
        return category


_PREFIXES = {
    ('real', 'single'): 's',
    ('real', 'double'): 'd',
    ('complex', 'single'): 'c',
    ('complex', 'double'): 'z',
    ('index', 'single'): 'i',
}

_DTYPES = {
    ('real', 'single'): np.float32,
    ('real', 'double'): np.float64,
    ('complex', 'single'): np.complex64,
    ('complex', 'double'): np.complex128,
    ('index', 'single'): np.int32,
}

_CATEGORIES = {
    np.dtype(dt): ElementCategory(*key)
    for key, dt in _DTYPES.items()
    if key[0] != 'index'
}

FLOAT32 = ElementCategory('real', 'single')
FLOAT64 = ElementCategory('real', 'double')
COMPLEX64 = ElementCategory('complex', 'single')
COMPLEX128 = ElementCategory('complex', 'double')

# LAPACK integer buffers (pivots, ranks)
INDEX = ElementCategory('index', 'single')


class RawPointer(NamedTuple):
    """
    Address of the first element of a view.

    Attributes:
        buffer: Flat, contiguous 1-D array spanning the referenced memory
        offset: Element offset of the first element inside ``buffer``
    """
    buffer: NDArray[Any]
    offset: int


def layout_compatible(
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    layout: Layout,
) -> bool:
    """
    Check whether a 2-D shape/stride pair can be described in ``layout``.

    The contiguous axis must be unit-stride (or have at most one element)
    and the other axis must step over at least a full contiguous run, so
    that the leading dimension is a valid BLAS/LAPACK value.
    """
    if len(shape) != 2:
        return False
    if layout is Layout.COLUMN_MAJOR:
        inner, outer = 0, 1
    else:
        inner, outer = 1, 0
    if shape[inner] > 1 and strides[inner] != 1:
        return False
    if shape[outer] > 1 and strides[outer] < max(1, shape[inner]):
        return False
    return True


def infer_layout(
    shape: tuple[int, ...],
    strides: tuple[int, ...],
    prefer: Layout | None = None,
) -> Layout | None:
    """
    Resolve the layout of a buffer from its shape and element strides.

    1-D buffers report ROW_MAJOR. For 2-D buffers that fit both layouts
    (a single row, a single column, or an empty matrix) ``prefer`` decides,
    defaulting to ROW_MAJOR. Returns None when no layout fits.
    """
    if len(shape) == 1:
        return Layout.ROW_MAJOR
    if len(shape) != 2:
        return None
    fits = [
        layout for layout in (Layout.ROW_MAJOR, Layout.COLUMN_MAJOR)
        if layout_compatible(shape, strides, layout)
    ]
    if not fits:
        return None
    if prefer in fits:
        return prefer
    return fits[0]


def _data_address(array: NDArray[Any]) -> int:
    return array.__array_interface__['data'][0]


def _extent(shape: tuple[int, ...], strides: tuple[int, ...]) -> int:
    """Number of elements between the first and one past the last element."""
    if any(s == 0 for s in shape):
        return 0
    return 1 + sum((s - 1) * st for s, st in zip(shape, strides))


def _canonical_strides(shape: tuple[int, ...], layout: Layout) -> tuple[int, ...]:
    """Contiguous element strides for ``shape``, never smaller than 1."""
    axes = range(len(shape)) if layout is Layout.COLUMN_MAJOR else reversed(range(len(shape)))
    strides = [1] * len(shape)
    step = 1
    for axis in axes:
        strides[axis] = step
        step *= max(1, shape[axis])
    return tuple(strides)


def _raw_pointer(
    array: NDArray[Any],
    shape: tuple[int, ...],
    strides: tuple[int, ...],
) -> RawPointer:
    """
    Degrade an array to a flat buffer and element offset.

    When the array is a view into a contiguous owner of the same dtype the
    owner's memory is used as the buffer, so the offset is the view's real
    position inside it. Otherwise the buffer spans exactly the view's own
    footprint and the offset is zero.
    """
    itemsize = array.itemsize
    extent = _extent(shape, strides)
    if extent == 0:
        return RawPointer(np.zeros(1, dtype=array.dtype), 0)

    root = array
    while isinstance(root.base, np.ndarray):
        root = root.base

    if root.dtype == array.dtype and (root.flags.c_contiguous or root.flags.f_contiguous):
        flat = root.ravel(order='K')
        delta = _data_address(array) - _data_address(flat)
        if delta >= 0 and delta % itemsize == 0:
            offset = delta // itemsize
            if offset + extent <= flat.size:
                return RawPointer(flat, offset)

    flat = as_strided(
        array,
        shape=(extent,),
        strides=(itemsize,),
        writeable=bool(array.flags.writeable),
    )
    return RawPointer(flat, 0)


@dataclass(frozen=True)
class ViewDescriptor:
    """
    Dense buffer as seen by a BLAS/LAPACK call site.

    Attributes:
        array: The NumPy view the descriptor was built from
        pointer: Raw pointer (flat buffer + element offset)
        shape: Ordered dimension sizes
        strides: Ordered per-axis strides, in elements
        layout: Resolved layout, or None when no unit-stride axis exists
        category: Element category (real/complex, precision)
    """
    array: NDArray[Any]
    pointer: RawPointer
    shape: tuple[int, ...]
    strides: tuple[int, ...]
    layout: Layout | None
    category: ElementCategory

    @classmethod
    def from_array(
        cls,
        array: NDArray[Any],
        *,
        prefer: Layout | None = None,
        name: str = 'array',
        index: bool = False,
    ) -> ViewDescriptor:
        """
        Describe an existing NumPy array without copying it.

        Args:
            array: Array to describe
            prefer: Layout to report when the buffer fits both layouts
            name: Parameter name for error messages
            index: Describe a LAPACK integer buffer (int32) instead of a
                floating-point operand

        Raises:
            DTypeError: If the dtype is not supported by the provider
            LayoutError: If strides are negative, not element-aligned, or
                broadcast (zero stride over more than one element)
        """
        array = np.asarray(array)
        if index:
            if array.dtype != INDEX.dtype:
                raise DTypeError(
                    f"{name}: index buffers must be {INDEX.dtype}, got {array.dtype}",
                    dtype=str(array.dtype),
                )
            category = INDEX
        else:
            try:
                category = ElementCategory.from_dtype(array.dtype)
            except DTypeError as e:
                raise DTypeError(f"{name}: {e}", dtype=str(array.dtype)) from e

        itemsize = array.itemsize
        if any(st % itemsize for st in array.strides):
            raise LayoutError(
                f"{name}: strides {array.strides} are not multiples of the "
                f"element size {itemsize}"
            )
        shape = tuple(int(s) for s in array.shape)
        if array.size == 0:
            # NumPy reports arbitrary (often zero) strides for empty arrays.
            strides = _canonical_strides(shape, prefer or Layout.ROW_MAJOR)
            return cls(
                array=array,
                pointer=_raw_pointer(array, shape, strides),
                shape=shape,
                strides=strides,
                layout=infer_layout(shape, strides, prefer),
                category=category,
            )
        strides = tuple(int(st) // itemsize for st in array.strides)

        for axis, (size, stride) in enumerate(zip(shape, strides)):
            if stride < 0 and size > 1:
                raise LayoutError(f"{name}: negative stride {stride} on axis {axis}")
            if stride == 0 and size > 1:
                raise LayoutError(
                    f"{name}: axis {axis} is broadcast (stride 0 over {size} elements)"
                )
        # Axes of length <= 1 never step, so their stride is irrelevant.
        strides = tuple(st if size > 1 else abs(st) for size, st in zip(shape, strides))

        return cls(
            array=array,
            pointer=_raw_pointer(array, shape, strides),
            shape=shape,
            strides=strides,
            layout=infer_layout(shape, strides, prefer),
            category=category,
        )

    @property
    def ndim(self) -> int:
        return len(self.shape)

    @property
    def size(self) -> int:
        return int(np.prod(self.shape, dtype=np.int64))

    @property
    def dtype(self) -> np.dtype:
        return self.array.dtype

    @property
    def writeable(self) -> bool:
        return bool(self.array.flags.writeable)

    @property
    def is_complex(self) -> bool:
        return self.category.is_complex

    def fits(self, layout: Layout) -> bool:
        """True if the buffer can be passed to a routine expecting ``layout``."""
        if self.ndim != 2:
            return False
        return layout_compatible(self.shape, self.strides, layout)
