"""
CPU provider backed by SciPy's BLAS and LAPACK wrappers.

This is the only module that turns raw pointers back into arrays. Every
routine here receives the reference BLAS/LAPACK positional arguments
(dimensions, flags, RawPointers with their increments or leading
dimensions, scratch buffers with their sizes) and forwards them to the
matching ``scipy.linalg.blas`` / ``scipy.linalg.lapack`` function:

    - Strided matrices are rebuilt from pointer + leading dimension with
      ``as_strided``; results are written back through the same views,
      so padding between columns is never touched.
    - Row-major BLAS Level 2/3 calls are mapped onto column-major ones by
      transposition identities (no copies of the operands' layout).
    - Pivots follow the LAPACK contract (1-based); SciPy's are 0-based.
    - Query-mode calls (a size argument of -1) write the requirement into
      the first element of each scratch buffer and compute nothing.

SciPy's wrappers allocate their scratch memory internally. The negotiated
sizes are forwarded as their ``lwork``-style arguments, so each routine
runs with exactly the workspace this layer negotiated.
"""

from __future__ import annotations

from typing import Any, Callable

import numpy as np
from numpy.lib.stride_tricks import as_strided
from numpy.typing import NDArray
from scipy.linalg import blas as _blas
from scipy.linalg import lapack as _lapack

from pyxlinalg.core.catalogue import (
    BLAS_ROUTINES,
    LAPACK_ROUTINES,
    ROUTINE_ASUM,
    ROUTINE_DOT,
    ROUTINE_DOTU,
    ROUTINE_GEEV,
    ROUTINE_GELSD,
    ROUTINE_GEMM,
    ROUTINE_GEMV,
    ROUTINE_GEQRF,
    ROUTINE_GER,
    ROUTINE_GESDD,
    ROUTINE_GESV,
    ROUTINE_GETRF,
    ROUTINE_GETRI,
    ROUTINE_HEEVD,
    ROUTINE_NRM2,
    ROUTINE_ORGQR,
    ROUTINE_POTRF,
    ROUTINE_SYEVD,
    ROUTINE_UNGQR,
    routine_name,
)
from pyxlinalg.core.exceptions import DTypeError, ProviderContractError, UnsupportedRoutineError
from pyxlinalg.core.view import COMPLEX64, COMPLEX128, FLOAT32, FLOAT64, Layout, RawPointer
from pyxlinalg.core.workspace import LAPACK_INT, QUERY

_TRANS_CODES = {'N': 0, 'T': 1, 'C': 2}

# Transposition flag seen by the column-major routine for a row-major gemv
_ROW_MAJOR_GEMV_TRANS = {'N': 'T', 'T': 'N'}

_SVD_FLAGS = {
    # jobz: (compute_uv, full_matrices)
    'A': (1, 1),
    'S': (1, 0),
    'O': (1, 0),
    'N': (0, 0),
}


# === Raw pointer helpers ===

def _check_span(ptr: RawPointer, needed: int, what: str) -> None:
    available = ptr.buffer.shape[0]
    if ptr.offset < 0 or ptr.offset + needed > available:
        raise ProviderContractError(
            f"{what}: {needed} elements from offset {ptr.offset} exceed a "
            f"buffer of {available} elements"
        )


def _vector(ptr: RawPointer, n: int, inc: int) -> NDArray[Any]:
    """Strided 1-D view of ``n`` elements starting at ``ptr``."""
    if n <= 0:
        return ptr.buffer[:0]
    _check_span(ptr, (n - 1) * inc + 1, 'vector')
    base = ptr.buffer[ptr.offset:]
    return as_strided(base, shape=(n,), strides=(inc * base.itemsize,))


def _span(ptr: RawPointer, n: int, inc: int) -> NDArray[Any]:
    """Contiguous slice covering ``n`` elements at increment ``inc``."""
    needed = (n - 1) * inc + 1 if n > 0 else 0
    _check_span(ptr, needed, 'vector')
    return ptr.buffer[ptr.offset:ptr.offset + needed]


def _matrix(ptr: RawPointer, m: int, n: int, ld: int) -> NDArray[Any]:
    """Column-major m x n view with leading dimension ``ld``."""
    if m <= 0 or n <= 0:
        return np.zeros((max(m, 0), max(n, 0)), dtype=ptr.buffer.dtype, order='F')
    if ld < max(1, m):
        raise ProviderContractError(f"leading dimension {ld} is smaller than {m} rows")
    _check_span(ptr, (n - 1) * ld + m, 'matrix')
    base = ptr.buffer[ptr.offset:]
    size = base.itemsize
    return as_strided(base, shape=(m, n), strides=(size, ld * size))


def _write(ptr: RawPointer, value: Any) -> None:
    """Store a scalar at ``ptr`` (query answers, ranks)."""
    _check_span(ptr, 1, 'scalar')
    ptr.buffer[ptr.offset] = value


def _capacity(ptr: RawPointer) -> int:
    return ptr.buffer.shape[0] - ptr.offset


def _query_size(value: Any) -> float:
    return float(np.real(value))


# === BLAS Level 1 ===

def _reduction(name: str) -> Callable[..., float]:
    """asum and nrm2: real scalar reductions of one vector."""
    fn = getattr(_blas, name)

    def reduction(n: int, x: RawPointer, incx: int) -> float:
        if n <= 0:
            return 0.0
        _span(x, n, incx)
        return float(fn(x.buffer, n=n, offx=x.offset, incx=incx))

    return reduction


def _dot(name: str) -> Callable[..., Any]:
    fn = getattr(_blas, name)
    is_complex = name[0] in 'cz'

    def dot(n: int, x: RawPointer, incx: int, y: RawPointer, incy: int) -> Any:
        if n <= 0:
            return 0j if is_complex else 0.0
        _span(x, n, incx)
        _span(y, n, incy)
        value = fn(
            x.buffer, y.buffer,
            n=n, offx=x.offset, incx=incx, offy=y.offset, incy=incy,
        )
        return complex(value) if is_complex else float(value)

    return dot


# === BLAS Level 2 ===

def _gemv(name: str) -> Callable[..., None]:
    fn = getattr(_blas, name)

    def gemv(
        order: Layout, trans: str, m: int, n: int, alpha: Any,
        a: RawPointer, lda: int, x: RawPointer, incx: int,
        beta: Any, y: RawPointer, incy: int,
    ) -> None:
        if order is Layout.ROW_MAJOR:
            if trans not in _ROW_MAJOR_GEMV_TRANS:
                raise ProviderContractError(f"{name}: row-major trans={trans!r} is not supported")
            m, n = n, m
            trans = _ROW_MAJOR_GEMV_TRANS[trans]
        if m <= 0 or n <= 0:
            return
        len_x, len_y = (n, m) if trans == 'N' else (m, n)
        matrix = _matrix(a, m, n, lda)
        y_view = _vector(y, len_y, incy)
        out = fn(
            alpha, matrix, _span(x, len_x, incx),
            beta=beta, y=np.array(y_view), incx=incx, trans=_TRANS_CODES[trans],
        )
        y_view[...] = out

    return gemv


def _ger(name: str) -> Callable[..., None]:
    fn = getattr(_blas, name)

    def ger(
        order: Layout, m: int, n: int, alpha: Any,
        x: RawPointer, incx: int, y: RawPointer, incy: int,
        a: RawPointer, lda: int,
    ) -> None:
        if order is Layout.ROW_MAJOR:
            # A^T := alpha * y * x^T + A^T
            m, n, x, incx, y, incy = n, m, y, incy, x, incx
        if m <= 0 or n <= 0:
            return
        matrix = _matrix(a, m, n, lda)
        out = fn(
            alpha, _span(x, m, incx), _span(y, n, incy),
            incx=incx, incy=incy, a=np.array(matrix, order='F'),
        )
        matrix[...] = out

    return ger


# === BLAS Level 3 ===

def _gemm(name: str) -> Callable[..., None]:
    fn = getattr(_blas, name)

    def gemm(
        order: Layout, transa: str, transb: str, m: int, n: int, k: int,
        alpha: Any, a: RawPointer, lda: int, b: RawPointer, ldb: int,
        beta: Any, c: RawPointer, ldc: int,
    ) -> None:
        if order is Layout.ROW_MAJOR:
            # C^T := alpha * op(B)^T * op(A)^T + beta * C^T
            transa, transb = transb, transa
            m, n = n, m
            a, lda, b, ldb = b, ldb, a, lda
        if m <= 0 or n <= 0:
            return
        result = _matrix(c, m, n, ldc)
        if k <= 0:
            if beta == 0:
                result[...] = 0
            else:
                result[...] = beta * result
            return
        a_shape = (m, k) if transa == 'N' else (k, m)
        b_shape = (k, n) if transb == 'N' else (n, k)
        a_mat = _matrix(a, a_shape[0], a_shape[1], lda)
        b_mat = _matrix(b, b_shape[0], b_shape[1], ldb)
        if beta == 0:
            out = fn(alpha, a_mat, b_mat, trans_a=_TRANS_CODES[transa], trans_b=_TRANS_CODES[transb])
        else:
            out = fn(
                alpha, a_mat, b_mat, beta=beta, c=np.array(result, order='F'),
                trans_a=_TRANS_CODES[transa], trans_b=_TRANS_CODES[transb],
            )
        result[...] = out

    return gemm


# === LAPACK: LU ===

def _gesv(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)

    def gesv(n: int, nrhs: int, a: RawPointer, lda: int, ipiv: RawPointer,
             b: RawPointer, ldb: int) -> int:
        if n <= 0:
            return 0
        matrix = _matrix(a, n, n, lda)
        rhs = _matrix(b, n, max(nrhs, 1), ldb) if nrhs > 0 else np.zeros((n, 1), dtype=matrix.dtype)
        lu, piv, x, info = fn(matrix, rhs)
        matrix[...] = lu
        _vector(ipiv, n, 1)[...] = piv + 1
        if info == 0 and nrhs > 0:
            rhs[...] = x
        return int(info)

    return gesv


def _getrf(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)

    def getrf(m: int, n: int, a: RawPointer, lda: int, ipiv: RawPointer) -> int:
        if m <= 0 or n <= 0:
            return 0
        k = min(m, n)
        matrix = _matrix(a, m, n, lda)
        lu, piv, info = fn(matrix)
        matrix[...] = lu
        _vector(ipiv, k, 1)[...] = piv[:k] + 1
        return int(info)

    return getrf


def _getri(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)
    fn_lwork = getattr(_lapack, name + '_lwork')

    def getri(n: int, a: RawPointer, lda: int, ipiv: RawPointer,
              work: RawPointer, lwork: int) -> int:
        if lwork == QUERY:
            if n <= 0:
                _write(work, 1)
                return 0
            size, info = fn_lwork(n)
            _write(work, _query_size(size))
            return int(info)
        if n <= 0:
            return 0
        matrix = _matrix(a, n, n, lda)
        piv = np.asarray(_vector(ipiv, n, 1), dtype=LAPACK_INT) - 1
        inverse, info = fn(matrix, piv, lwork=lwork)
        if info == 0:
            matrix[...] = inverse
        return int(info)

    return getri


# === LAPACK: QR ===

def _geqrf(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)

    def geqrf(m: int, n: int, a: RawPointer, lda: int, tau: RawPointer,
              work: RawPointer, lwork: int) -> int:
        if m <= 0 or n <= 0:
            if lwork == QUERY:
                _write(work, 1)
            return 0
        matrix = _matrix(a, m, n, lda)
        if lwork == QUERY:
            _, _, scratch, info = fn(matrix, lwork=QUERY)
            _write(work, _query_size(scratch[0]))
            return int(info)
        qr, reflectors, _, info = fn(matrix, lwork=lwork)
        k = min(m, n)
        matrix[...] = qr
        _vector(tau, k, 1)[...] = reflectors[:k]
        return int(info)

    return geqrf


def _orgqr(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)

    def orgqr(m: int, n: int, k: int, a: RawPointer, lda: int, tau: RawPointer,
              work: RawPointer, lwork: int) -> int:
        if n <= 0 or k <= 0:
            if lwork == QUERY:
                _write(work, 1)
            elif n > 0:
                _matrix(a, m, n, lda)[...] = np.eye(m, n)
            return 0
        matrix = _matrix(a, m, n, lda)
        reflectors = np.array(_vector(tau, k, 1))
        q, scratch, info = fn(matrix, reflectors, lwork=lwork)
        if lwork == QUERY:
            _write(work, _query_size(scratch[0]))
            return int(info)
        matrix[...] = q
        return int(info)

    return orgqr


# === LAPACK: SVD ===

def _gesdd_common(
    name: str, fn: Callable[..., Any], fn_lwork: Callable[..., Any],
    jobz: str, m: int, n: int, a: RawPointer, lda: int, s: RawPointer,
    u: RawPointer, ldu: int, vt: RawPointer, ldvt: int,
    work: RawPointer, lwork: int,
) -> int:
    if jobz not in _SVD_FLAGS:
        return -1
    compute_uv, full_matrices = _SVD_FLAGS[jobz]
    k = min(m, n)
    if lwork == QUERY:
        if k <= 0:
            _write(work, 1)
            return 0
        size, info = fn_lwork(m, n, compute_uv=compute_uv, full_matrices=full_matrices)
        _write(work, _query_size(size))
        return int(info)
    if k <= 0:
        return 0

    matrix = _matrix(a, m, n, lda)
    u_out, s_out, vt_out, info = fn(
        matrix, compute_uv=compute_uv, full_matrices=full_matrices, lwork=lwork,
    )
    _vector(s, k, 1)[...] = s_out[:k]
    if info != 0:
        return int(info)

    if jobz == 'A':
        _matrix(u, m, m, ldu)[...] = u_out
        _matrix(vt, n, n, ldvt)[...] = vt_out
    elif jobz == 'S':
        _matrix(u, m, k, ldu)[...] = u_out
        _matrix(vt, k, n, ldvt)[...] = vt_out
    elif jobz == 'O':
        if m >= n:
            matrix[:, :n] = u_out
            _matrix(vt, n, n, ldvt)[...] = vt_out
        else:
            _matrix(u, m, m, ldu)[...] = u_out
            matrix[:m, :] = vt_out
    return int(info)


def _gesdd_real(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)
    fn_lwork = getattr(_lapack, name + '_lwork')

    def gesdd(jobz: str, m: int, n: int, a: RawPointer, lda: int, s: RawPointer,
              u: RawPointer, ldu: int, vt: RawPointer, ldvt: int,
              work: RawPointer, lwork: int, iwork: RawPointer) -> int:
        _check_span(iwork, 8 * min(m, n), 'iwork')
        return _gesdd_common(name, fn, fn_lwork, jobz, m, n, a, lda, s,
                             u, ldu, vt, ldvt, work, lwork)

    return gesdd


def _gesdd_complex(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)
    fn_lwork = getattr(_lapack, name + '_lwork')

    def gesdd(jobz: str, m: int, n: int, a: RawPointer, lda: int, s: RawPointer,
              u: RawPointer, ldu: int, vt: RawPointer, ldvt: int,
              work: RawPointer, lwork: int, rwork: RawPointer, iwork: RawPointer) -> int:
        _check_span(iwork, 8 * min(m, n), 'iwork')
        _check_span(rwork, 1, 'rwork')
        return _gesdd_common(name, fn, fn_lwork, jobz, m, n, a, lda, s,
                             u, ldu, vt, ldvt, work, lwork)

    return gesdd


# === LAPACK: Cholesky ===

def _potrf(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)

    def potrf(uplo: str, n: int, a: RawPointer, lda: int) -> int:
        if uplo not in ('U', 'L'):
            return -1
        if n <= 0:
            return 0
        matrix = _matrix(a, n, n, lda)
        factor, info = fn(matrix, lower=int(uplo == 'L'), clean=0)
        matrix[...] = factor
        return int(info)

    return potrf


# === LAPACK: eigenvalues ===

def _geev_real(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)
    fn_lwork = getattr(_lapack, name + '_lwork')

    def geev(jobvl: str, jobvr: str, n: int, a: RawPointer, lda: int,
             wr: RawPointer, wi: RawPointer, vl: RawPointer, ldvl: int,
             vr: RawPointer, ldvr: int, work: RawPointer, lwork: int) -> int:
        compute_vl, compute_vr = int(jobvl == 'V'), int(jobvr == 'V')
        if lwork == QUERY:
            if n <= 0:
                _write(work, 1)
                return 0
            size, info = fn_lwork(n, compute_vl=compute_vl, compute_vr=compute_vr)
            _write(work, _query_size(size))
            return int(info)
        if n <= 0:
            return 0
        matrix = _matrix(a, n, n, lda)
        wr_out, wi_out, vl_out, vr_out, info = fn(
            matrix, compute_vl=compute_vl, compute_vr=compute_vr, lwork=lwork,
        )
        _vector(wr, n, 1)[...] = wr_out
        _vector(wi, n, 1)[...] = wi_out
        if compute_vl:
            _matrix(vl, n, n, ldvl)[...] = vl_out
        if compute_vr:
            _matrix(vr, n, n, ldvr)[...] = vr_out
        return int(info)

    return geev


def _geev_complex(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)
    fn_lwork = getattr(_lapack, name + '_lwork')

    def geev(jobvl: str, jobvr: str, n: int, a: RawPointer, lda: int,
             w: RawPointer, vl: RawPointer, ldvl: int, vr: RawPointer, ldvr: int,
             work: RawPointer, lwork: int, rwork: RawPointer) -> int:
        compute_vl, compute_vr = int(jobvl == 'V'), int(jobvr == 'V')
        if lwork == QUERY:
            if n <= 0:
                _write(work, 1)
                return 0
            size, info = fn_lwork(n, compute_vl=compute_vl, compute_vr=compute_vr)
            _write(work, _query_size(size))
            return int(info)
        if n <= 0:
            return 0
        _check_span(rwork, 2 * n, 'rwork')
        matrix = _matrix(a, n, n, lda)
        w_out, vl_out, vr_out, info = fn(
            matrix, compute_vl=compute_vl, compute_vr=compute_vr, lwork=lwork,
        )
        _vector(w, n, 1)[...] = w_out
        if compute_vl:
            _matrix(vl, n, n, ldvl)[...] = vl_out
        if compute_vr:
            _matrix(vr, n, n, ldvr)[...] = vr_out
        return int(info)

    return geev


def syevd_workspace(jobz: str, n: int) -> tuple[int, int]:
    """Documented (lwork, liwork) requirement of ?syevd."""
    if jobz == 'V':
        return max(1, 1 + 6 * n + 2 * n * n), max(1, 3 + 5 * n)
    return max(1, 2 * n + 1), 1


def heevd_workspace(jobz: str, n: int) -> tuple[int, int, int]:
    """Documented (lwork, lrwork, liwork) requirement of ?heevd."""
    if jobz == 'V':
        return max(1, 2 * n + n * n), max(1, 1 + 5 * n + 2 * n * n), max(1, 3 + 5 * n)
    return max(1, n + 1), max(1, n), 1


def _syevd(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)

    def syevd(jobz: str, uplo: str, n: int, a: RawPointer, lda: int, w: RawPointer,
              work: RawPointer, lwork: int, iwork: RawPointer, liwork: int) -> int:
        if lwork == QUERY or liwork == QUERY:
            size, isize = syevd_workspace(jobz, n)
            _write(work, size)
            _write(iwork, isize)
            return 0
        if n <= 0:
            return 0
        matrix = _matrix(a, n, n, lda)
        w_out, v_out, info = fn(
            matrix, compute_v=int(jobz == 'V'), lower=int(uplo == 'L'),
            lwork=lwork, liwork=liwork,
        )
        _vector(w, n, 1)[...] = w_out
        if jobz == 'V':
            matrix[...] = v_out
        return int(info)

    return syevd


def _heevd(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)

    def heevd(jobz: str, uplo: str, n: int, a: RawPointer, lda: int, w: RawPointer,
              work: RawPointer, lwork: int, rwork: RawPointer, lrwork: int,
              iwork: RawPointer, liwork: int) -> int:
        if QUERY in (lwork, lrwork, liwork):
            size, rsize, isize = heevd_workspace(jobz, n)
            _write(work, size)
            _write(rwork, rsize)
            _write(iwork, isize)
            return 0
        if n <= 0:
            return 0
        matrix = _matrix(a, n, n, lda)
        w_out, v_out, info = fn(
            matrix, compute_v=int(jobz == 'V'), lower=int(uplo == 'L'),
            lwork=lwork, liwork=liwork, lrwork=lrwork,
        )
        _vector(w, n, 1)[...] = w_out
        if jobz == 'V':
            matrix[...] = v_out
        return int(info)

    return heevd


# === LAPACK: least squares ===

def _gelsd_empty(m: int, n: int, nrhs: int, b: RawPointer, ldb: int, rank: RawPointer) -> int:
    if nrhs > 0 and max(m, n) > 0:
        _matrix(b, max(m, n), nrhs, ldb)[...] = 0
    _write(rank, 0)
    return 0


def _gelsd_real(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)
    fn_lwork = getattr(_lapack, name + '_lwork')

    def gelsd(m: int, n: int, nrhs: int, a: RawPointer, lda: int, b: RawPointer, ldb: int,
              s: RawPointer, rcond: float, rank: RawPointer,
              work: RawPointer, lwork: int, iwork: RawPointer) -> int:
        if lwork == QUERY:
            if min(m, n) <= 0 or nrhs <= 0:
                _write(work, 1)
                _write(iwork, 1)
                return 0
            size, isize, info = fn_lwork(m, n, nrhs, rcond)
            _write(work, _query_size(size))
            _write(iwork, int(isize))
            return int(info)
        if min(m, n) <= 0 or nrhs <= 0:
            return _gelsd_empty(m, n, nrhs, b, ldb, rank)
        matrix = _matrix(a, m, n, lda)
        rhs = _matrix(b, max(m, n), nrhs, ldb)
        x, s_out, rank_out, info = fn(
            matrix, np.array(rhs, order='F'), lwork, _capacity(iwork), rcond, False, False,
        )
        rhs[...] = np.reshape(x, rhs.shape, order='F')
        _vector(s, min(m, n), 1)[...] = s_out[:min(m, n)]
        _write(rank, int(rank_out))
        return int(info)

    return gelsd


def _gelsd_complex(name: str) -> Callable[..., int]:
    fn = getattr(_lapack, name)
    fn_lwork = getattr(_lapack, name + '_lwork')

    def gelsd(m: int, n: int, nrhs: int, a: RawPointer, lda: int, b: RawPointer, ldb: int,
              s: RawPointer, rcond: float, rank: RawPointer,
              work: RawPointer, lwork: int, rwork: RawPointer, iwork: RawPointer) -> int:
        if lwork == QUERY:
            if min(m, n) <= 0 or nrhs <= 0:
                _write(work, 1)
                _write(rwork, 1)
                _write(iwork, 1)
                return 0
            size, rsize, isize, info = fn_lwork(m, n, nrhs, rcond)
            _write(work, _query_size(size))
            _write(rwork, _query_size(rsize))
            _write(iwork, int(isize))
            return int(info)
        if min(m, n) <= 0 or nrhs <= 0:
            return _gelsd_empty(m, n, nrhs, b, ldb, rank)
        matrix = _matrix(a, m, n, lda)
        rhs = _matrix(b, max(m, n), nrhs, ldb)
        x, s_out, rank_out, info = fn(
            matrix, np.array(rhs, order='F'), lwork, _capacity(rwork), _capacity(iwork),
            rcond, False, False,
        )
        rhs[...] = np.reshape(x, rhs.shape, order='F')
        _vector(s, min(m, n), 1)[...] = s_out[:min(m, n)]
        _write(rank, int(rank_out))
        return int(info)

    return gelsd


# Adapter factories per catalogue entry: (real, complex)
_ADAPTERS: dict[str, tuple[Callable[[str], Callable[..., Any]] | None,
                           Callable[[str], Callable[..., Any]] | None]] = {
    ROUTINE_ASUM: (_reduction, _reduction),
    ROUTINE_NRM2: (_reduction, _reduction),
    ROUTINE_DOT: (_dot, _dot),
    ROUTINE_DOTU: (_dot, _dot),
    ROUTINE_GEMV: (_gemv, _gemv),
    ROUTINE_GER: (_ger, _ger),
    ROUTINE_GEMM: (_gemm, _gemm),
    ROUTINE_GESV: (_gesv, _gesv),
    ROUTINE_GETRF: (_getrf, _getrf),
    ROUTINE_GETRI: (_getri, _getri),
    ROUTINE_GEQRF: (_geqrf, _geqrf),
    ROUTINE_ORGQR: (_orgqr, None),
    ROUTINE_UNGQR: (None, _orgqr),
    ROUTINE_GESDD: (_gesdd_real, _gesdd_complex),
    ROUTINE_POTRF: (_potrf, _potrf),
    ROUTINE_GEEV: (_geev_real, _geev_complex),
    ROUTINE_SYEVD: (_syevd, None),
    ROUTINE_HEEVD: (None, _heevd),
    ROUTINE_GELSD: (_gelsd_real, _gelsd_complex),
}


def _build_index() -> dict[str, Callable[[str], Callable[..., Any]]]:
    index: dict[str, Callable[[str], Callable[..., Any]]] = {}
    for base in sorted(BLAS_ROUTINES | LAPACK_ROUTINES):
        real_factory, complex_factory = _ADAPTERS[base]
        for category in (FLOAT32, FLOAT64, COMPLEX64, COMPLEX128):
            factory = complex_factory if category.is_complex else real_factory
            if factory is None:
                continue
            try:
                identity = routine_name(base, category)
            except DTypeError:
                continue
            index[identity] = factory
    return index


class ScipyProvider:
    """
    Compute provider built on ``scipy.linalg.blas`` and ``scipy.linalg.lapack``.

    Implements the Provider protocol for every routine in the catalogue.
    Routine callables are created on first lookup and cached.
    """

    def __init__(self) -> None:
        self._index = _build_index()
        self._cache: dict[str, Callable[..., Any]] = {}

    @property
    def name(self) -> str:
        return 'cpu_scipy'

    def supports(self, routine: str) -> bool:
        return routine in self._index

    def lookup(self, routine: str) -> Callable[..., Any]:
        cached = self._cache.get(routine)
        if cached is not None:
            return cached
        factory = self._index.get(routine)
        if factory is None:
            raise UnsupportedRoutineError(routine, self.name)
        fn = factory(routine)
        self._cache[routine] = fn
        return fn

    def __repr__(self) -> str:
        return f"ScipyProvider(name={self.name!r}, routines={len(self._index)})"
