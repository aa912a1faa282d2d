"""
Tests for the input validators.

Validates:
    - check_array promotion rules and rejections
    - Dimension and shape checks on arrays and views
    - Writeability and flag-choice checks
"""

import numpy as np
import pytest

from pyxlinalg.core.exceptions import DimensionError, LayoutError, ValidationError
from pyxlinalg.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_choice,
    check_consistent_length,
    check_finite,
    check_min_length,
    check_shape,
    check_square,
    check_writeable,
)
from pyxlinalg.core.view import ViewDescriptor


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_becomes_float64(self):
        result = check_array([1, 2, 3], 'x')
        assert result.dtype == np.float64

    def test_bool_becomes_float64(self):
        result = check_array(np.array([True, False]), 'x')
        np.testing.assert_array_equal(result, [1.0, 0.0])

    @pytest.mark.parametrize("dtype", [np.float32, np.float64, np.complex64, np.complex128])
    def test_floating_dtype_kept(self, dtype):
        assert check_array(np.zeros(2, dtype=dtype), 'x').dtype == dtype

    def test_no_copy_for_float(self):
        a = np.zeros(3)
        assert check_array(a, 'x') is a

    def test_object_rejected(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array(np.array([1, 'a', None], dtype=object), 'x')

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(np.array(['a', 'b']), 'x')


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.ones(3), 'x')

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match=r"1 NaN, 2 Inf"):
            check_finite(np.array([np.nan, np.inf, -np.inf, 1.0]), 'x')


# ═══════════════════════════════════════════════════════════════════════
# Dimension checks
# ═══════════════════════════════════════════════════════════════════════


class TestDimensions:

    def test_1d(self):
        check_1d(np.zeros(3), 'x')
        with pytest.raises(DimensionError, match="x: expected 1D"):
            check_1d(np.zeros((3, 1)), 'x')

    def test_2d_on_view(self):
        view = ViewDescriptor.from_array(np.zeros((2, 3)))
        check_2d(view, 'A')
        with pytest.raises(DimensionError):
            check_2d(ViewDescriptor.from_array(np.zeros(3)), 'A')

    def test_square(self):
        check_square(np.zeros((3, 3)), 'A')
        with pytest.raises(DimensionError, match="square"):
            check_square(np.zeros((3, 2)), 'A')

    def test_shape(self):
        check_shape(np.zeros((2, 3)), (2, 3), 'C')
        with pytest.raises(DimensionError, match=r"expected shape \(3, 2\)"):
            check_shape(np.zeros((2, 3)), (3, 2), 'C')

    def test_min_length(self):
        check_min_length(np.zeros(4), 4, 'ipiv')
        with pytest.raises(DimensionError, match="at least 5"):
            check_min_length(np.zeros(4), 5, 'ipiv')

    def test_consistent_length(self):
        check_consistent_length(np.zeros(3), np.zeros((3, 2)), names=('x', 'A'))
        with pytest.raises(DimensionError, match="x=3, A=4"):
            check_consistent_length(np.zeros(3), np.zeros((4, 2)), names=('x', 'A'))

    def test_consistent_length_name_mismatch(self):
        with pytest.raises(ValueError):
            check_consistent_length(np.zeros(3), names=('x', 'y'))


# ═══════════════════════════════════════════════════════════════════════
# Writeability and flags
# ═══════════════════════════════════════════════════════════════════════


class TestWriteable:

    def test_array(self):
        a = np.zeros(3)
        check_writeable(a, 'y')
        a.flags.writeable = False
        with pytest.raises(LayoutError, match="read-only"):
            check_writeable(a, 'y')

    def test_view(self):
        a = np.zeros(3)
        a.flags.writeable = False
        with pytest.raises(LayoutError):
            check_writeable(ViewDescriptor.from_array(a), 'y')


class TestChoice:

    def test_upper_cased(self):
        assert check_choice('s', ('A', 'S', 'O', 'N'), 'jobz') == 'S'

    def test_rejected(self):
        with pytest.raises(ValidationError, match="jobz"):
            check_choice('X', ('A', 'S', 'O', 'N'), 'jobz')

    def test_non_string_rejected(self):
        with pytest.raises(ValidationError):
            check_choice(1, ('N', 'V'), 'jobvr')
