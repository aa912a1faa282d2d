"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pyxlinalg.core.view import RawPointer
from pyxlinalg.core.workspace import QUERY
from pyxlinalg.providers import ScipyProvider, set_provider


class RecordingProvider:
    """Wraps a real provider and records every call it forwards."""

    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    @property
    def name(self):
        return 'recording'

    def supports(self, routine):
        return self.inner.supports(routine)

    def lookup(self, routine):
        fn = self.inner.lookup(routine)

        def recorded(*args):
            status = fn(*args)
            self.calls.append((routine, args, status))
            return status

        return recorded


class StubProvider:
    """
    Provider double that computes nothing.

    A call is a query when any integer argument equals QUERY; the stub then
    writes ``size`` into the first element of every buffer it was given
    and returns ``query_info``. Any other call returns ``compute_info``.
    """

    def __init__(self, query_info=0, compute_info=0, size=7):
        self.query_info = query_info
        self.compute_info = compute_info
        self.size = size
        self.calls = []

    @property
    def name(self):
        return 'stub'

    def supports(self, routine):
        return True

    def lookup(self, routine):
        def call(*args):
            querying = any(type(arg) is int and arg == QUERY for arg in args)
            lengths = [arg.buffer.shape[0] for arg in args if isinstance(arg, RawPointer)]
            self.calls.append((routine, 'query' if querying else 'compute', lengths, args))
            if querying:
                for arg in args:
                    if isinstance(arg, RawPointer):
                        arg.buffer[arg.offset] = self.size
                return self.query_info
            return self.compute_info

        return call


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(autouse=True)
def _reset_default_provider():
    """Tests must not leak a process-default provider."""
    yield
    set_provider(None)


@pytest.fixture
def recorder():
    """Recording wrapper around the SciPy provider."""
    return RecordingProvider(ScipyProvider())


@pytest.fixture
def make_stub():
    """Factory for stub providers with chosen statuses."""
    return StubProvider


@pytest.fixture
def well_conditioned(rng):
    """Random column-major square matrix with a dominant diagonal."""
    def build(n, dtype=np.float64):
        a = rng.standard_normal((n, n))
        if np.issubdtype(np.dtype(dtype), np.complexfloating):
            a = a + 1j * rng.standard_normal((n, n))
        a = a + n * np.eye(n)
        return np.asfortranarray(a.astype(dtype))
    return build


@pytest.fixture
def spd(rng):
    """Random symmetric (Hermitian) positive definite column-major matrix."""
    def build(n, dtype=np.float64):
        m = rng.standard_normal((n, n))
        if np.issubdtype(np.dtype(dtype), np.complexfloating):
            m = m + 1j * rng.standard_normal((n, n))
        a = m @ m.conj().T + n * np.eye(n)
        return np.asfortranarray(a.astype(dtype))
    return build
