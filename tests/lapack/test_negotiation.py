"""
Tests for the two-phase workspace negotiation through the wrappers.

A stub provider answers every query with a fixed size and returns chosen
statuses, so the protocol can be observed without real computation.

Validates:
    - A failing query raises WorkspaceQueryError and never computes
    - A nonzero compute status is returned verbatim, never raised
    - Every negotiated buffer reaches the compute call at the reported size
    - Fixed buffers are not negotiated
"""

import numpy as np
import pytest

from pyxlinalg.core.exceptions import WorkspaceQueryError
from pyxlinalg.lapack import gelsd, geqrf, gesdd, gesv, getri, heevd, potrf, syevd


def fortran(shape, dtype=np.float64):
    return np.zeros(shape, dtype=dtype, order='F')


# ═══════════════════════════════════════════════════════════════════════
# Query failure
# ═══════════════════════════════════════════════════════════════════════


class TestQueryFailure:

    @pytest.mark.parametrize("info", [-1, -12, 3])
    def test_gesdd_query_failure_raises(self, make_stub, info):
        stub = make_stub(query_info=info)
        with pytest.raises(WorkspaceQueryError) as exc_info:
            gesdd(fortran((4, 3)), 'A', provider=stub)
        assert exc_info.value.routine == 'dgesdd'
        assert exc_info.value.info == info
        assert [phase for _, phase, _, _ in stub.calls] == ['query']

    def test_complex_routine_name_in_error(self, make_stub):
        stub = make_stub(query_info=-5)
        with pytest.raises(WorkspaceQueryError, match="zgeqrf"):
            geqrf(fortran((3, 3), np.complex128), provider=stub)


# ═══════════════════════════════════════════════════════════════════════
# Compute status
# ═══════════════════════════════════════════════════════════════════════


class TestComputeStatus:

    def test_positive_status_returned(self, make_stub):
        stub = make_stub(compute_info=2)
        result = gesdd(fortran((4, 3)), 'S', provider=stub)
        assert result.info == 2
        assert not result.ok
        assert result.has_warning('did not converge')

    def test_negative_status_returned(self, make_stub):
        stub = make_stub(compute_info=-4)
        result = getri(fortran((3, 3)), np.ones(3, dtype=np.int32), provider=stub)
        assert result.info == -4
        assert result.has_warning('argument 4')

    def test_single_phase_routine(self, make_stub):
        stub = make_stub(compute_info=1)
        result = potrf(fortran((2, 2)), provider=stub)
        assert result.info == 1
        assert [phase for _, phase, _, _ in stub.calls] == ['compute']

    def test_gesv_status(self, make_stub):
        stub = make_stub(compute_info=3)
        result = gesv(fortran((3, 3)), np.zeros(3), provider=stub)
        assert result.info == 3
        assert result.routine == 'dgesv'


# ═══════════════════════════════════════════════════════════════════════
# Scratch sizes
# ═══════════════════════════════════════════════════════════════════════


class TestScratchSizes:

    def test_geqrf(self, make_stub):
        stub = make_stub(size=11)
        result = geqrf(fortran((4, 3)), provider=stub)
        assert result.workspace == {'work': 11}
        routine, phase, _, args = stub.calls[1]
        assert phase == 'compute'
        assert args[-1] == 11
        assert args[-2].buffer.shape[0] == 11

    def test_syevd_two_buffers(self, make_stub):
        stub = make_stub(size=9)
        result = syevd(fortran((3, 3)), provider=stub)
        assert result.workspace == {'work': 9, 'iwork': 9}
        _, _, _, args = stub.calls[1]
        assert args[7] == 9 and args[9] == 9

    def test_heevd_three_buffers(self, make_stub):
        stub = make_stub(size=13)
        result = heevd(fortran((3, 3), np.complex64), provider=stub)
        assert result.routine == 'cheevd'
        assert result.workspace == {'work': 13, 'rwork': 13, 'iwork': 13}
        _, _, _, args = stub.calls[1]
        assert args[6].buffer.dtype == np.complex64
        assert args[8].buffer.dtype == np.float32
        assert args[10].buffer.dtype == np.int32

    def test_gelsd_complex(self, make_stub):
        stub = make_stub(size=17)
        result = gelsd(fortran((4, 2), np.complex128), np.zeros(4, dtype=np.complex128), provider=stub)
        assert result.workspace == {'work': 17, 'rwork': 17, 'iwork': 17}

    def test_gesdd_fixed_buffers_not_negotiated(self, make_stub):
        stub = make_stub(size=5)
        result = gesdd(fortran((4, 3), np.complex128), 'N', provider=stub)
        assert result.workspace['work'] == 5
        assert result.workspace['rwork'] == 7 * 3
        assert result.workspace['iwork'] == 8 * 3
        _, _, _, args = stub.calls[1]
        assert args[11] == 5
        assert args[12].buffer.shape[0] == 21
