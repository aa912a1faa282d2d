"""
Tolerance tiers for numerical validation.

Defines precision expectations per element category:
- double precision (float64, complex128): close to machine precision
- single precision (float32, complex64): relaxed for 24-bit mantissas
- reconstructions (A = U S V^T, A = P L U, ...) accumulate rounding from
  several products and get a looser tier of the same precision

Used by the test suite and by callers comparing provider output.
"""

from dataclasses import dataclass

from numpy.typing import DTypeLike

from pyxlinalg.core.view import ElementCategory


@dataclass(frozen=True)
class ToleranceTier:
    """Relative and absolute tolerance for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


DOUBLE = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='double',
    description='float64/complex128: direct provider output',
)

DOUBLE_RECONSTRUCTION = ToleranceTier(
    rtol=1e-8,
    atol=1e-10,
    name='double_reconstruction',
    description='float64/complex128: products of factors',
)

SINGLE = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='single',
    description='float32/complex64: direct provider output',
)

SINGLE_RECONSTRUCTION = ToleranceTier(
    rtol=1e-3,
    atol=1e-4,
    name='single_reconstruction',
    description='float32/complex64: products of factors',
)


def select_tolerance(
    dtype: DTypeLike,
    reconstruction: bool = False,
) -> ToleranceTier:
    """Select the tolerance tier for results of a given dtype."""
    category = ElementCategory.from_dtype(dtype)
    if category.precision == 'double':
        return DOUBLE_RECONSTRUCTION if reconstruction else DOUBLE
    return SINGLE_RECONSTRUCTION if reconstruction else SINGLE
