"""
Tests for BLAS Level 1 dispatch.

Validates:
    - Reductions and dot products against NumPy
    - Strided and offset vectors are read without copies
    - Dtype promotion and complex semantics
    - Exactly one provider call per operation
"""

import numpy as np
import pytest

from pyxlinalg import blas
from pyxlinalg.core.exceptions import DimensionError, DTypeError, ValidationError


# ═══════════════════════════════════════════════════════════════════════
# Reductions
# ═══════════════════════════════════════════════════════════════════════


class TestReductions:

    def test_nrm2(self):
        assert blas.nrm2([3.0, 4.0]) == pytest.approx(5.0)

    def test_nrm2_float32(self):
        assert blas.nrm2(np.array([3.0, 4.0], dtype=np.float32)) == pytest.approx(5.0)

    def test_nrm2_complex(self):
        assert blas.nrm2(np.array([3j, 4.0])) == pytest.approx(5.0)

    def test_asum(self):
        assert blas.asum([1.0, -2.0, 3.0]) == pytest.approx(6.0)

    def test_asum_complex_blas_definition(self):
        assert blas.asum(np.array([3 + 4j])) == pytest.approx(7.0)

    def test_strided_view(self):
        x = np.arange(12.0)[2::4]   # 2, 6, 10
        assert blas.asum(x) == pytest.approx(18.0)

    def test_integer_input(self):
        assert blas.nrm2([3, 4]) == pytest.approx(5.0)

    def test_empty(self):
        assert blas.nrm2(np.zeros(0)) == 0.0

    def test_rejects_matrix(self):
        with pytest.raises(DimensionError):
            blas.nrm2(np.ones((2, 2)))

    @pytest.mark.skipif(
        np.dtype(np.longdouble) == np.dtype(np.float64),
        reason="longdouble is float64 on this platform",
    )
    def test_rejects_extended_precision(self):
        with pytest.raises(DTypeError):
            blas.nrm2(np.ones(3, dtype=np.longdouble))

    def test_rejects_non_numeric(self):
        with pytest.raises(ValidationError):
            blas.nrm2(np.array(['a', 'b']))


# ═══════════════════════════════════════════════════════════════════════
# Dot
# ═══════════════════════════════════════════════════════════════════════


class TestDot:

    def test_dot(self):
        assert blas.dot([1, 2, 3], [4, 5, 6]) == 32.0

    def test_dot_returns_float_for_real(self):
        assert isinstance(blas.dot([1.0], [2.0]), float)

    def test_dot_conjugates_first_operand(self):
        a = np.array([1 + 2j, 3 - 1j])
        b = np.array([2 - 1j, 1j])
        assert blas.dot(a, b) == pytest.approx(np.vdot(a, b))

    def test_dotu_does_not_conjugate(self):
        a = np.array([1 + 2j, 3 - 1j])
        b = np.array([2 - 1j, 1j])
        assert blas.dotu(a, b) == pytest.approx(np.dot(a, b))

    def test_mixed_real_complex_promotes(self):
        assert blas.dotu([1.0, 2.0], np.array([1j, 1j])) == pytest.approx(3j)

    def test_strided_operands(self, rng):
        base = rng.standard_normal((5, 4))
        a, b = base[:, 1], base[:, 3]
        assert blas.dot(a, b) == pytest.approx(np.dot(a, b))

    def test_length_mismatch(self):
        with pytest.raises(DimensionError, match="equal length"):
            blas.dot([1.0, 2.0], [1.0])

    def test_empty(self):
        assert blas.dot(np.zeros(0), np.zeros(0)) == 0.0

    def test_one_call(self, recorder):
        blas.dot([1.0, 2.0], [3.0, 4.0], provider=recorder)
        assert [call[0] for call in recorder.calls] == ['ddot']

    def test_complex_single_routine(self, recorder):
        a = np.ones(2, dtype=np.complex64)
        blas.dot(a, a, provider=recorder)
        assert recorder.calls[0][0] == 'cdotc'
