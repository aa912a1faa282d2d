"""
Tests for geqrf and the Q reconstruction (orgqr / ungqr).
"""

import numpy as np
import pytest

from pyxlinalg.core.exceptions import DimensionError, DTypeError
from pyxlinalg.lapack import geqrf, orgqr, ungqr


def factor_and_form(original):
    """Run geqrf then orgqr/ungqr on a copy; return (Q, R, results)."""
    a = np.asfortranarray(original.copy())
    m, n = a.shape
    k = min(m, n)
    factored = geqrf(a)
    R = np.triu(a[:k, :])
    q = np.asfortranarray(a[:, :k])
    reconstruct = ungqr if np.iscomplexobj(a) else orgqr
    formed = reconstruct(q, factored.params.tau)
    return q, R, factored, formed


# ═══════════════════════════════════════════════════════════════════════
# geqrf
# ═══════════════════════════════════════════════════════════════════════


class TestGeqrf:

    @pytest.mark.parametrize("shape", [(5, 3), (3, 3), (3, 5)])
    def test_q_times_r(self, rng, shape):
        original = rng.standard_normal(shape)
        q, R, factored, formed = factor_and_form(original)
        assert factored.ok and formed.ok
        assert factored.params.tau.shape == (min(shape),)
        np.testing.assert_allclose(q @ R, original, atol=1e-12)
        np.testing.assert_allclose(q.T @ q, np.eye(min(shape)), atol=1e-12)

    def test_complex(self, rng):
        original = rng.standard_normal((4, 3)) + 1j * rng.standard_normal((4, 3))
        q, R, factored, formed = factor_and_form(original)
        assert factored.routine == 'zgeqrf'
        assert formed.routine == 'zungqr'
        np.testing.assert_allclose(q @ R, original, atol=1e-12)
        np.testing.assert_allclose(q.conj().T @ q, np.eye(3), atol=1e-12)

    def test_workspace_recorded(self, rng):
        a = np.asfortranarray(rng.standard_normal((6, 4)))
        result = geqrf(a)
        assert result.workspace['work'] >= 4
        assert set(result.timing) == {'total_seconds', 'workspace_query', 'compute'}

    def test_empty(self):
        result = geqrf(np.zeros((0, 0), order='F'))
        assert result.ok
        assert result.params.tau.shape == (0,)


# ═══════════════════════════════════════════════════════════════════════
# Reconstruction
# ═══════════════════════════════════════════════════════════════════════


class TestReconstruction:

    def test_orgqr_rejects_complex(self):
        a = np.zeros((3, 2), dtype=np.complex128, order='F')
        with pytest.raises(DTypeError, match="ungqr"):
            orgqr(a, np.zeros(2, dtype=np.complex128))

    def test_ungqr_rejects_real(self):
        with pytest.raises(DTypeError, match="orgqr"):
            ungqr(np.zeros((3, 2), order='F'), np.zeros(2))

    def test_too_many_reflectors(self):
        with pytest.raises(DimensionError):
            orgqr(np.zeros((3, 2), order='F'), np.zeros(3))

    def test_wide_matrix_rejected(self):
        with pytest.raises(DimensionError):
            orgqr(np.zeros((2, 3), order='F'), np.zeros(2))

    def test_partial_columns(self, rng):
        original = rng.standard_normal((5, 3))
        a = np.asfortranarray(original.copy())
        tau = geqrf(a).params.tau
        result = orgqr(a, tau[:2], n=2)
        assert result.ok
        q = a[:, :2]
        np.testing.assert_allclose(q.T @ q, np.eye(2), atol=1e-12)

    def test_no_reflectors_gives_identity(self):
        a = np.full((3, 2), 7.0, order='F')
        orgqr(a, np.zeros(0))
        np.testing.assert_array_equal(a, np.eye(3, 2))
