"""
Tests for the high-level decompositions.

Validates:
    - Each factorization reconstructs its input
    - Mode and flag handling (qr modes, svd full/thin/values)
    - Real matrices with complex spectra yield paired eigenvectors
    - Numerical failures surface as exceptions, singular LU does not
    - Inputs are never modified
"""

import numpy as np
import pytest

from pyxlinalg import linalg
from pyxlinalg.core.exceptions import NotPositiveDefiniteError, ValidationError


# ═══════════════════════════════════════════════════════════════════════
# lu / cholesky
# ═══════════════════════════════════════════════════════════════════════


class TestLU:

    @pytest.mark.parametrize("shape", [(4, 4), (5, 3), (3, 5)])
    def test_reconstruction(self, rng, shape):
        a = rng.standard_normal(shape)
        P, L, U = linalg.lu(a)
        k = min(shape)
        assert P.shape == (shape[0], shape[0])
        assert L.shape == (shape[0], k)
        assert U.shape == (k, shape[1])
        np.testing.assert_allclose(P @ L @ U, a, atol=1e-12)
        np.testing.assert_array_equal(np.diag(L), 1.0)

    def test_singular_is_not_an_error(self):
        a = np.array([[1.0, 2.0], [2.0, 4.0]])
        P, L, U = linalg.lu(a)
        assert U[1, 1] == 0.0
        np.testing.assert_allclose(P @ L @ U, a)

    def test_input_untouched(self, rng):
        a = rng.standard_normal((3, 3))
        before = a.copy()
        linalg.lu(a)
        np.testing.assert_array_equal(a, before)


class TestCholesky:

    def test_lower(self, spd):
        a = spd(4)
        L = linalg.cholesky(a)
        np.testing.assert_allclose(L @ L.T, a, atol=1e-10)
        np.testing.assert_array_equal(np.triu(L, 1), 0.0)

    def test_upper_complex(self, spd):
        a = spd(3, np.complex128)
        U = linalg.cholesky(a, lower=False)
        np.testing.assert_allclose(U.conj().T @ U, a, atol=1e-10)

    def test_not_positive_definite(self):
        with pytest.raises(NotPositiveDefiniteError) as exc_info:
            linalg.cholesky([[1.0, 2.0], [2.0, 1.0]])
        assert exc_info.value.order == 2


# ═══════════════════════════════════════════════════════════════════════
# qr / svd
# ═══════════════════════════════════════════════════════════════════════


class TestQR:

    @pytest.mark.parametrize("shape", [(5, 3), (3, 5), (4, 4)])
    def test_reduced(self, rng, shape):
        a = rng.standard_normal(shape)
        Q, R = linalg.qr(a)
        k = min(shape)
        assert Q.shape == (shape[0], k)
        assert R.shape == (k, shape[1])
        np.testing.assert_allclose(Q @ R, a, atol=1e-12)
        np.testing.assert_allclose(Q.T @ Q, np.eye(k), atol=1e-12)

    def test_complete(self, rng):
        a = rng.standard_normal((5, 2))
        Q, R = linalg.qr(a, mode='complete')
        assert Q.shape == (5, 5)
        assert R.shape == (5, 2)
        np.testing.assert_allclose(Q @ R, a, atol=1e-12)
        np.testing.assert_allclose(Q.T @ Q, np.eye(5), atol=1e-12)

    def test_r_only(self, rng):
        a = rng.standard_normal((4, 3))
        R = linalg.qr(a, mode='r')
        _, expected = np.linalg.qr(a)
        np.testing.assert_allclose(np.abs(R), np.abs(expected), atol=1e-12)

    def test_complex(self, rng):
        a = rng.standard_normal((4, 3)) + 1j * rng.standard_normal((4, 3))
        Q, R = linalg.qr(a)
        np.testing.assert_allclose(Q @ R, a, atol=1e-12)
        np.testing.assert_allclose(Q.conj().T @ Q, np.eye(3), atol=1e-12)

    def test_bad_mode(self):
        with pytest.raises(ValidationError, match="mode"):
            linalg.qr(np.eye(2), mode='economic')


class TestSVD:

    def test_full(self, rng):
        a = rng.standard_normal((5, 3))
        U, s, Vh = linalg.svd(a)
        assert U.shape == (5, 5)
        assert Vh.shape == (3, 3)
        np.testing.assert_allclose((U[:, :3] * s) @ Vh, a, atol=1e-12)

    def test_thin(self, rng):
        a = rng.standard_normal((3, 6))
        U, s, Vh = linalg.svd(a, full_matrices=False)
        assert U.shape == (3, 3)
        assert Vh.shape == (3, 6)
        np.testing.assert_allclose((U * s) @ Vh, a, atol=1e-12)

    def test_values_only(self, rng):
        a = rng.standard_normal((4, 4))
        s = linalg.svd(a, compute_uv=False)
        np.testing.assert_allclose(s, np.linalg.svd(a, compute_uv=False), atol=1e-12)

    def test_input_untouched(self, rng):
        a = rng.standard_normal((4, 3))
        before = a.copy()
        linalg.svd(a)
        np.testing.assert_array_equal(a, before)


# ═══════════════════════════════════════════════════════════════════════
# eig / eigh / eigvalsh
# ═══════════════════════════════════════════════════════════════════════


class TestEig:

    def test_real_spectrum_stays_real(self):
        a = np.array([[2.0, 1.0], [0.0, 3.0]])
        w, v = linalg.eig(a)
        assert not np.iscomplexobj(w)
        np.testing.assert_allclose(a @ v, v * w, atol=1e-12)

    def test_complex_pairs(self, rng):
        a = rng.standard_normal((5, 5))
        w, v = linalg.eig(a)
        np.testing.assert_allclose(a @ v, v * w, atol=1e-10)
        np.testing.assert_allclose(np.sort_complex(w), np.sort_complex(np.linalg.eigvals(a)), atol=1e-10)

    def test_rotation(self):
        w, v = linalg.eig([[0.0, -1.0], [1.0, 0.0]])
        np.testing.assert_allclose(w, [1j, -1j], atol=1e-12)
        np.testing.assert_allclose(v[:, 1], np.conj(v[:, 0]))

    def test_complex_input(self, rng):
        a = rng.standard_normal((3, 3)) + 1j * rng.standard_normal((3, 3))
        w, v = linalg.eig(a)
        np.testing.assert_allclose(a @ v, v * w, atol=1e-10)


class TestEigh:

    def test_eigh(self, spd):
        a = spd(5)
        w, v = linalg.eigh(a)
        assert np.all(np.diff(w) >= 0)
        np.testing.assert_allclose(a @ v, v * w, atol=1e-10)

    def test_hermitian(self, spd):
        a = spd(4, np.complex128)
        w, v = linalg.eigh(a)
        assert w.dtype == np.float64
        np.testing.assert_allclose(a @ v, v * w, atol=1e-10)

    def test_upper_triangle_only(self, spd):
        a = spd(3)
        w = linalg.eigvalsh(np.triu(a), uplo='U')
        np.testing.assert_allclose(w, np.linalg.eigvalsh(a), atol=1e-10)

    def test_input_untouched(self, spd):
        a = spd(3)
        before = a.copy()
        linalg.eigh(a)
        np.testing.assert_array_equal(a, before)
