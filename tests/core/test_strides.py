"""
Tests for stride and leading-dimension resolution.
"""

import numpy as np
import pytest

from pyxlinalg.core.exceptions import DimensionError, LayoutError
from pyxlinalg.core.strides import (
    check_same_layout,
    leading_dimension,
    select_stride,
    storage_order,
    vector_increment,
)
from pyxlinalg.core.view import Layout, ViewDescriptor


def describe(a, prefer=None):
    return ViewDescriptor.from_array(a, prefer=prefer)


# ═══════════════════════════════════════════════════════════════════════
# Leading dimension
# ═══════════════════════════════════════════════════════════════════════


class TestLeadingDimension:
    """The leading dimension is the stride of the non-unit axis."""

    def test_row_major(self):
        assert leading_dimension(describe(np.zeros((3, 4))), Layout.ROW_MAJOR) == 4

    def test_column_major(self):
        a = np.zeros((3, 4), order='F')
        assert leading_dimension(describe(a), Layout.COLUMN_MAJOR) == 3

    def test_subview_keeps_parent_stride(self):
        a = np.zeros((5, 6), order='F')[1:4, 2:5]
        assert leading_dimension(describe(a), Layout.COLUMN_MAJOR) == 5

    def test_single_row_uses_contiguous_length(self):
        assert leading_dimension(describe(np.zeros((1, 5))), Layout.ROW_MAJOR) == 5

    def test_single_row_as_column_major(self):
        view = describe(np.zeros((1, 5)), Layout.COLUMN_MAJOR)
        assert leading_dimension(view, Layout.COLUMN_MAJOR) == 1

    @pytest.mark.parametrize("shape", [(0, 3), (0, 0), (3, 0)])
    def test_empty_never_below_one(self, shape):
        assert leading_dimension(describe(np.zeros(shape)), Layout.ROW_MAJOR) >= 1

    @pytest.mark.parametrize("shape, expected", [((0, 3), 1), ((4, 0), 4), ((0, 0), 1)])
    def test_empty_column_major_is_row_count(self, shape, expected):
        empty = np.lib.stride_tricks.as_strided(np.zeros(1), shape=shape, strides=(0, 0))
        view = describe(empty, prefer=Layout.COLUMN_MAJOR)
        assert leading_dimension(view, Layout.COLUMN_MAJOR) == expected

    def test_wrong_layout(self):
        with pytest.raises(LayoutError, match="column_major"):
            leading_dimension(describe(np.zeros((3, 4))), Layout.COLUMN_MAJOR)

    def test_requires_2d(self):
        with pytest.raises(DimensionError):
            leading_dimension(describe(np.zeros(4)), Layout.ROW_MAJOR)


# ═══════════════════════════════════════════════════════════════════════
# Vector increment
# ═══════════════════════════════════════════════════════════════════════


class TestVectorIncrement:

    def test_contiguous(self):
        assert vector_increment(describe(np.zeros(5))) == 1

    def test_strided(self):
        assert vector_increment(describe(np.zeros(12)[::3])) == 3

    def test_column_of_row_major_matrix(self):
        assert vector_increment(describe(np.zeros((4, 3))[:, 1])) == 3

    def test_requires_exactly_1d(self):
        with pytest.raises(DimensionError):
            vector_increment(describe(np.zeros((3, 1))))


# ═══════════════════════════════════════════════════════════════════════
# Select stride
# ═══════════════════════════════════════════════════════════════════════


class TestSelectStride:

    def test_zero_becomes_one(self):
        assert select_stride(0) == 1

    def test_nonzero_unchanged(self):
        assert select_stride(7) == 7


# ═══════════════════════════════════════════════════════════════════════
# Storage order
# ═══════════════════════════════════════════════════════════════════════


class TestStorageOrder:

    def test_resolved(self):
        assert storage_order(describe(np.zeros((2, 3), order='F'))) is Layout.COLUMN_MAJOR

    def test_unresolved(self):
        with pytest.raises(LayoutError, match="cannot be resolved"):
            storage_order(describe(np.zeros((4, 6))[:, ::2]))


# ═══════════════════════════════════════════════════════════════════════
# Same layout
# ═══════════════════════════════════════════════════════════════════════


class TestSameLayout:

    def test_agreeing(self):
        a = describe(np.zeros((2, 3)))
        b = describe(np.zeros((3, 4)))
        check_same_layout(Layout.ROW_MAJOR, a, b, names=('a', 'b'))

    def test_disagreeing(self):
        a = describe(np.zeros((2, 3)))
        b = describe(np.zeros((3, 4), order='F'))
        with pytest.raises(LayoutError, match="b"):
            check_same_layout(Layout.ROW_MAJOR, a, b, names=('a', 'b'))

    def test_name_count_mismatch(self):
        with pytest.raises(ValueError):
            check_same_layout(Layout.ROW_MAJOR, describe(np.zeros((2, 2))), names=())
