"""
pyxlinalg: BLAS and LAPACK for strided NumPy arrays.

Adapts in-memory arrays into calls to a native linear-algebra provider:
layout normalization, stride and leading-dimension resolution, real/complex
dispatch and two-phase workspace negotiation.

Submodules:
    blas: Level 1/2/3 dispatcher (asum, nrm2, dot, dotu, gemv, ger, gemm)
    lapack: Factorization wrappers returning Result envelopes
    linalg: NumPy-style functions that raise on numerical failure
    providers: Compute providers and provider selection
"""

__version__ = "0.1.0"

from pyxlinalg import blas
from pyxlinalg import lapack
from pyxlinalg import linalg
from pyxlinalg import providers
from pyxlinalg.providers import get_provider, set_provider, use_provider

__all__ = [
    "__version__",
    "blas",
    "lapack",
    "linalg",
    "providers",
    "get_provider",
    "set_provider",
    "use_provider",
]
