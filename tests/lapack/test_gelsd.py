"""
Tests for gelsd.
"""

import numpy as np
import pytest

from pyxlinalg.core.exceptions import DimensionError
from pyxlinalg.lapack import gelsd


# ═══════════════════════════════════════════════════════════════════════
# gelsd
# ═══════════════════════════════════════════════════════════════════════


class TestGelsd:

    def test_overdetermined(self, rng):
        original = rng.standard_normal((6, 3))
        rhs = rng.standard_normal(6)
        b = rhs.copy()
        result = gelsd(np.asfortranarray(original.copy()), b)
        expected = np.linalg.lstsq(original, rhs, rcond=None)[0]
        assert result.ok
        assert result.params.rank == 3
        np.testing.assert_allclose(b[:3], expected, atol=1e-10)

    def test_underdetermined_minimum_norm(self, rng):
        original = rng.standard_normal((2, 4))
        rhs = rng.standard_normal(2)
        b = np.zeros(4)
        b[:2] = rhs
        gelsd(np.asfortranarray(original.copy()), b)
        np.testing.assert_allclose(b, np.linalg.pinv(original) @ rhs, atol=1e-10)

    def test_rank_deficient(self):
        a = np.asfortranarray([[1.0, 2.0], [2.0, 4.0], [3.0, 6.0]])
        result = gelsd(a, np.ones(3), rcond=1e-10)
        assert result.params.rank == 1
        assert result.params.s.shape == (2,)

    def test_rcond_truncates(self):
        a = np.asfortranarray(np.diag([1.0, 1e-3]))
        result = gelsd(a, np.ones(2), rcond=1e-2)
        assert result.params.rank == 1

    def test_multiple_rhs(self, rng):
        original = rng.standard_normal((5, 3))
        rhs = rng.standard_normal((5, 2))
        b = np.asfortranarray(rhs.copy())
        gelsd(np.asfortranarray(original.copy()), b)
        expected = np.linalg.lstsq(original, rhs, rcond=None)[0]
        np.testing.assert_allclose(b[:3], expected, atol=1e-10)

    def test_complex(self, rng):
        original = rng.standard_normal((4, 2)) + 1j * rng.standard_normal((4, 2))
        rhs = rng.standard_normal(4).astype(np.complex128)
        b = rhs.copy()
        result = gelsd(np.asfortranarray(original.copy()), b)
        assert result.routine == 'zgelsd'
        assert set(result.workspace) == {'work', 'rwork', 'iwork'}
        expected = np.linalg.lstsq(original, rhs, rcond=None)[0]
        np.testing.assert_allclose(b[:2], expected, atol=1e-10)

    def test_rhs_rows(self):
        with pytest.raises(DimensionError, match="max"):
            gelsd(np.zeros((2, 4), order='F'), np.zeros(2))
