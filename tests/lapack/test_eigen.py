"""
Tests for geev, syevd and heevd.

Validates:
    - Eigenpairs satisfy A v = lambda v
    - Real routines report wr/wi, complex routines w
    - Symmetric/Hermitian values are ascending, vectors overwrite A
    - Real-only / complex-only routines reject the other kind
"""

import numpy as np
import pytest

from pyxlinalg.core.exceptions import DTypeError, ValidationError
from pyxlinalg.lapack import geev, heevd, syevd


# ═══════════════════════════════════════════════════════════════════════
# geev
# ═══════════════════════════════════════════════════════════════════════


class TestGeev:

    def test_real_eigenvalues(self):
        original = np.array([[2.0, 0.0], [0.0, 3.0]])
        result = geev(np.asfortranarray(original))
        assert result.routine == 'dgeev'
        assert result.params.w is None
        np.testing.assert_allclose(np.sort(result.params.wr), [2.0, 3.0])
        np.testing.assert_array_equal(result.params.wi, 0.0)
        assert not np.iscomplexobj(result.params.eigenvalues)

    def test_conjugate_pair(self):
        rotation = np.array([[0.0, -1.0], [1.0, 0.0]])
        result = geev(np.asfortranarray(rotation))
        wi = result.params.wi
        assert wi[0] == pytest.approx(1.0)
        assert wi[1] == pytest.approx(-1.0)
        np.testing.assert_allclose(result.params.eigenvalues, [1j, -1j], atol=1e-12)

    def test_right_vectors_real(self, rng):
        original = rng.standard_normal((4, 4))
        original = original + original.T   # real spectrum
        result = geev(np.asfortranarray(original.copy()))
        w, v = result.params.wr, result.params.vr
        np.testing.assert_allclose(original @ v, v * w, atol=1e-10)

    def test_complex(self, rng):
        original = rng.standard_normal((3, 3)) + 1j * rng.standard_normal((3, 3))
        result = geev(np.asfortranarray(original.copy()), 'V', 'V')
        assert result.routine == 'zgeev'
        w, vl, vr = result.params.w, result.params.vl, result.params.vr
        np.testing.assert_allclose(original @ vr, vr * w, atol=1e-10)
        np.testing.assert_allclose(vl.conj().T @ original, w[:, None] * vl.conj().T, atol=1e-10)
        assert result.workspace['rwork'] == 6

    def test_values_only(self, rng):
        result = geev(np.asfortranarray(rng.standard_normal((3, 3))), 'N', 'N')
        assert result.params.vl is None
        assert result.params.vr is None
        assert result.workspace['work'] >= 3 * 3

    def test_unreferenced_left_vectors(self, rng, recorder):
        geev(np.asfortranarray(rng.standard_normal((4, 4))), 'N', 'V', provider=recorder)
        _, args, _ = recorder.calls[-1]
        assert args[8] == 1    # ldvl
        assert args[10] == 4   # ldvr

    def test_unreferenced_vectors_complex(self, rng, recorder):
        a = rng.standard_normal((3, 3)) + 1j * rng.standard_normal((3, 3))
        geev(np.asfortranarray(a), 'N', 'N', provider=recorder)
        _, args, _ = recorder.calls[-1]
        assert args[7] == 1
        assert args[9] == 1

    def test_bad_flag(self):
        with pytest.raises(ValidationError, match="jobvr"):
            geev(np.eye(2, order='F'), 'N', 'Y')


# ═══════════════════════════════════════════════════════════════════════
# syevd / heevd
# ═══════════════════════════════════════════════════════════════════════


class TestSelfAdjoint:

    def test_syevd(self, spd):
        original = spd(5)
        a = original.copy(order='F')
        result = syevd(a)
        w = result.params.w
        assert result.ok
        assert np.all(np.diff(w) >= 0)
        np.testing.assert_allclose(original @ a, a * w, atol=1e-10)
        np.testing.assert_allclose(a.T @ a, np.eye(5), atol=1e-12)

    def test_syevd_negotiates_documented_sizes(self, spd):
        result = syevd(spd(4))
        assert result.workspace == {'work': 1 + 6 * 4 + 2 * 16, 'iwork': 3 + 5 * 4}

    def test_syevd_values_only(self, spd):
        original = spd(4)
        result = syevd(original.copy(order='F'), 'N')
        np.testing.assert_allclose(result.params.w, np.linalg.eigvalsh(original), atol=1e-10)
        assert result.workspace['iwork'] == 1

    def test_upper_triangle(self, spd):
        original = spd(3)
        a = np.asfortranarray(np.triu(original))
        result = syevd(a, 'N', 'U')
        np.testing.assert_allclose(result.params.w, np.linalg.eigvalsh(original), atol=1e-10)

    def test_heevd(self, spd):
        original = spd(4, np.complex128)
        a = original.copy(order='F')
        result = heevd(a)
        assert result.routine == 'zheevd'
        assert set(result.workspace) == {'work', 'rwork', 'iwork'}
        np.testing.assert_allclose(original @ a, a * result.params.w, atol=1e-10)
        assert result.params.w.dtype == np.float64

    def test_syevd_rejects_complex(self, spd):
        with pytest.raises(DTypeError, match="heevd"):
            syevd(spd(2, np.complex128))

    def test_heevd_rejects_real(self, spd):
        with pytest.raises(DTypeError, match="syevd"):
            heevd(spd(2))
