"""
Routine catalogue for pyxlinalg.

This module is the SINGLE SOURCE OF TRUTH for provider routine names.
Import from here, never use raw strings.

A catalogue entry is a base name ('gesdd'); the provider routine identity
is the base name qualified by element category ('dgesdd', 'zgesdd'). Most
identities are the BLAS/LAPACK prefix followed by the base name; the
exceptions (mixed-precision reductions, conjugating dot products, real-only
and complex-only routines) are spelled out in ``routine_name``.

Usage:
    from pyxlinalg.core.catalogue import ROUTINE_GESDD, routine_name

    name = routine_name(ROUTINE_GESDD, view.category)   # 'zgesdd'
    fn = provider.lookup(name)
"""

from pyxlinalg.core.exceptions import DTypeError
from pyxlinalg.core.view import COMPLEX64, COMPLEX128, FLOAT32, FLOAT64, ElementCategory

# === BLAS Level 1 ===

# Sum of absolute values
ROUTINE_ASUM = 'asum'

# Euclidean norm
ROUTINE_NRM2 = 'nrm2'

# Dot product, conjugating the first operand for complex data
ROUTINE_DOT = 'dot'

# Dot product without conjugation
ROUTINE_DOTU = 'dotu'

# === BLAS Level 2 ===

# General matrix-vector product
ROUTINE_GEMV = 'gemv'

# Rank-1 update (unconjugated for complex data)
ROUTINE_GER = 'ger'

# === BLAS Level 3 ===

# General matrix-matrix product
ROUTINE_GEMM = 'gemm'

# === LAPACK ===

ROUTINE_GESV = 'gesv'
ROUTINE_GETRF = 'getrf'
ROUTINE_GETRI = 'getri'
ROUTINE_GEQRF = 'geqrf'
ROUTINE_ORGQR = 'orgqr'
ROUTINE_UNGQR = 'ungqr'
ROUTINE_GESDD = 'gesdd'
ROUTINE_POTRF = 'potrf'
ROUTINE_GEEV = 'geev'
ROUTINE_SYEVD = 'syevd'
ROUTINE_HEEVD = 'heevd'
ROUTINE_GELSD = 'gelsd'

BLAS_ROUTINES = frozenset({
    ROUTINE_ASUM,
    ROUTINE_NRM2,
    ROUTINE_DOT,
    ROUTINE_DOTU,
    ROUTINE_GEMV,
    ROUTINE_GER,
    ROUTINE_GEMM,
})

LAPACK_ROUTINES = frozenset({
    ROUTINE_GESV,
    ROUTINE_GETRF,
    ROUTINE_GETRI,
    ROUTINE_GEQRF,
    ROUTINE_ORGQR,
    ROUTINE_UNGQR,
    ROUTINE_GESDD,
    ROUTINE_POTRF,
    ROUTINE_GEEV,
    ROUTINE_SYEVD,
    ROUTINE_HEEVD,
    ROUTINE_GELSD,
})

# Orthogonal/symmetric routines exist for real data only, their
# unitary/Hermitian counterparts for complex data only.
REAL_ONLY = frozenset({ROUTINE_ORGQR, ROUTINE_SYEVD})
COMPLEX_ONLY = frozenset({ROUTINE_UNGQR, ROUTINE_HEEVD})

_SPECIAL_NAMES = {
    (ROUTINE_ASUM, 'c'): 'scasum',
    (ROUTINE_ASUM, 'z'): 'dzasum',
    (ROUTINE_NRM2, 'c'): 'scnrm2',
    (ROUTINE_NRM2, 'z'): 'dznrm2',
    (ROUTINE_DOT, 'c'): 'cdotc',
    (ROUTINE_DOT, 'z'): 'zdotc',
    (ROUTINE_DOTU, 's'): 'sdot',
    (ROUTINE_DOTU, 'd'): 'ddot',
    (ROUTINE_GER, 'c'): 'cgeru',
    (ROUTINE_GER, 'z'): 'zgeru',
}


def routine_name(base: str, category: ElementCategory) -> str:
    """
    Provider routine identity for a catalogue entry and element category.

    Args:
        base: Catalogue base name (one of the ROUTINE_* constants)
        category: Element category of the operands

    Returns:
        Routine identity, e.g. 'dznrm2' for complex double nrm2

    Raises:
        ValueError: If ``base`` is not in the catalogue
        DTypeError: If the routine does not exist for the category
    """
    if base not in BLAS_ROUTINES and base not in LAPACK_ROUTINES:
        raise ValueError(f"Unknown routine: {base!r}")
    if base in REAL_ONLY and category.is_complex:
        raise DTypeError(f"{base} is defined for real data only", dtype=str(category.dtype))
    if base in COMPLEX_ONLY and not category.is_complex:
        raise DTypeError(f"{base} is defined for complex data only", dtype=str(category.dtype))
    return _SPECIAL_NAMES.get((base, category.prefix), category.prefix + base)


def _all_routines() -> frozenset[str]:
    names = set()
    for base in BLAS_ROUTINES | LAPACK_ROUTINES:
        for category in (FLOAT32, FLOAT64, COMPLEX64, COMPLEX128):
            if base in REAL_ONLY and category.is_complex:
                continue
            if base in COMPLEX_ONLY and not category.is_complex:
                continue
            names.add(routine_name(base, category))
    return frozenset(names)


# Every concrete routine identity a complete provider implements
ALL_ROUTINES = _all_routines()

__all__ = [
    'ROUTINE_ASUM',
    'ROUTINE_NRM2',
    'ROUTINE_DOT',
    'ROUTINE_DOTU',
    'ROUTINE_GEMV',
    'ROUTINE_GER',
    'ROUTINE_GEMM',
    'ROUTINE_GESV',
    'ROUTINE_GETRF',
    'ROUTINE_GETRI',
    'ROUTINE_GEQRF',
    'ROUTINE_ORGQR',
    'ROUTINE_UNGQR',
    'ROUTINE_GESDD',
    'ROUTINE_POTRF',
    'ROUTINE_GEEV',
    'ROUTINE_SYEVD',
    'ROUTINE_HEEVD',
    'ROUTINE_GELSD',
    'BLAS_ROUTINES',
    'LAPACK_ROUTINES',
    'REAL_ONLY',
    'COMPLEX_ONLY',
    'ALL_ROUTINES',
    'routine_name',
]
