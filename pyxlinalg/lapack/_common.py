"""
Shared machinery of the LAPACK wrappers.

Every wrapper follows the same shape:

    1. validate operands (in/out matrices are column-major and writeable)
    2. pick the real or complex implementation from the input's dtype
    3. allocate outputs and scratch buffers
    4. ``execute``: negotiate the workspace (if any), then compute
    5. return a Result envelope with the verbatim status
"""

import logging
from typing import Any, Callable, TypeVar

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pyxlinalg.core.catalogue import routine_name
from pyxlinalg.core.compute.timing import COMPUTE_PHASE, QUERY_PHASE, CallTimer
from pyxlinalg.core.evaluation import as_inout, materialize
from pyxlinalg.core.exceptions import LayoutError, ValidationError
from pyxlinalg.core.result import Result
from pyxlinalg.core.status import describe_status
from pyxlinalg.core.strides import leading_dimension
from pyxlinalg.core.validation import check_1d, check_2d, check_min_length, check_writeable
from pyxlinalg.core.view import ElementCategory, Layout, ViewDescriptor
from pyxlinalg.core.workspace import LAPACK_INT, ScratchBuffer, negotiate
from pyxlinalg.core.protocols import Provider
from pyxlinalg.providers import ProviderChoice, resolve_provider

logger = logging.getLogger(__name__)

P = TypeVar('P')

COLUMN_MAJOR = Layout.COLUMN_MAJOR


class Implementation:
    """
    Base of the per-operation real/complex implementation classes.

    Subclasses fix the scratch composition and the routine identity of
    one operation for one element kind.
    """

    def __init__(self, category: ElementCategory):
        self.category = category

    @property
    def dtype(self) -> np.dtype:
        return self.category.dtype

    @property
    def real_dtype(self) -> np.dtype:
        return self.category.real_dtype

    def routine(self, base: str) -> str:
        return routine_name(base, self.category)

    def work(self) -> ScratchBuffer:
        """Negotiated scratch of the element type."""
        return ScratchBuffer('work', self.dtype)

    def rwork(self, size: int | None = None) -> ScratchBuffer:
        """Real scratch; negotiated unless a fixed size is given."""
        if size is None:
            return ScratchBuffer('rwork', self.real_dtype)
        return ScratchBuffer.fixed('rwork', self.real_dtype, max(1, size))

    def iwork(self, size: int | None = None) -> ScratchBuffer:
        """Integer scratch; negotiated unless a fixed size is given."""
        if size is None:
            return ScratchBuffer('iwork', LAPACK_INT)
        return ScratchBuffer.fixed('iwork', LAPACK_INT, max(1, size))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.category.prefix})"


def inout_matrix(array: NDArray[Any], name: str = 'A', dtype: DTypeLike | None = None) -> ViewDescriptor:
    """Describe a 2-D column-major operand the routine overwrites."""
    view = as_inout(array, COLUMN_MAJOR, dtype=dtype, name=name)
    check_2d(view, name)
    return view


def inout_rhs(array: NDArray[Any], dtype: DTypeLike, name: str = 'b') -> tuple[ViewDescriptor, int]:
    """
    Describe a right-hand side overwritten by a solution.

    A 1-D right-hand side is treated as a single column without copying.

    Returns:
        The 2-D column-major view and the number of right-hand sides
    """
    if isinstance(array, np.ndarray) and array.ndim == 1:
        array = array[:, np.newaxis]
    view = inout_matrix(array, name, dtype)
    return view, view.shape[1]


def pivot_buffer(piv: NDArray[Any], min_length: int, name: str = 'piv') -> ViewDescriptor:
    """Validate a caller-provided pivot buffer (int32, unit stride)."""
    if not isinstance(piv, np.ndarray):
        raise ValidationError(f"{name}: pivot buffer must be a numpy.ndarray, got {type(piv).__name__}")
    view = ViewDescriptor.from_array(piv, name=name, index=True)
    check_writeable(view, name)
    check_1d(view, name)
    check_min_length(view, min_length, name)
    if view.shape[0] > 1 and view.strides[0] != 1:
        raise LayoutError(f"{name}: pivot buffer must be contiguous, got element stride {view.strides[0]}")
    return view


def input_vector(values: ArrayLike, dtype: DTypeLike, name: str) -> ViewDescriptor:
    """Read-only vector operand with unit stride, copied only when needed."""
    view = materialize(values, dtype=dtype, name=name)
    check_1d(view, name)
    if view.shape[0] > 1 and view.strides[0] != 1:
        view = ViewDescriptor.from_array(np.ascontiguousarray(view.array), name=name)
    return view


def new_vector(length: int, dtype: DTypeLike) -> ViewDescriptor:
    dtype = np.dtype(dtype)
    return ViewDescriptor.from_array(np.zeros(length, dtype=dtype), index=dtype == LAPACK_INT)


def new_matrix(rows: int, cols: int, dtype: DTypeLike) -> ViewDescriptor:
    return ViewDescriptor.from_array(np.zeros((rows, cols), dtype=dtype, order='F'), prefer=COLUMN_MAJOR)


def unreferenced(dtype: DTypeLike) -> ViewDescriptor:
    """One-element stand-in for a buffer the routine never touches."""
    return ViewDescriptor.from_array(np.zeros((1, 1), dtype=dtype, order='F'), prefer=COLUMN_MAJOR)


def ld(view: ViewDescriptor, name: str = 'A') -> int:
    return leading_dimension(view, COLUMN_MAJOR, name)


def lookup(
    implementation: Implementation,
    base: str,
    provider: ProviderChoice | None,
) -> tuple[str, Callable[..., int]]:
    """Routine identity and provider callable for one LAPACK operation."""
    routine = implementation.routine(base)
    impl: Provider = resolve_provider(provider)
    logger.debug("%s via %s", routine, impl.name)
    return routine, impl.lookup(routine)


def execute(
    routine: str,
    call: Callable[[], int],
    negotiated: tuple[ScratchBuffer, ...] = (),
    fixed: tuple[ScratchBuffer, ...] = (),
) -> tuple[int, dict[str, int], dict[str, float]]:
    """
    Run a provider call, two-phase when scratch must be negotiated.

    ``call`` reads each buffer's ``pointer`` and ``lwork`` when invoked, so
    the same callable serves the query and the compute phase.

    Returns:
        (status, scratch sizes by role, timing)

    Raises:
        WorkspaceQueryError: If the query phase reports a nonzero status
    """
    workspace: dict[str, int] = {}
    with CallTimer(routine) as timer:
        if negotiated:
            with timer.phase(QUERY_PHASE):
                workspace.update(negotiate(routine, call, *negotiated))
        for buffer in fixed:
            workspace[buffer.role] = buffer.size
        with timer.phase(COMPUTE_PHASE):
            info = int(call())
    return info, workspace, timer.timing


def envelope(
    routine: str,
    info: int,
    params: P,
    workspace: dict[str, int],
    timing: dict[str, float],
) -> Result[P]:
    """Wrap a finished call; a nonzero status becomes a warning, not an error."""
    warnings: tuple[str, ...] = ()
    if info != 0:
        message = describe_status(routine, info)
        logger.debug(message)
        warnings = (message,)
    return Result(
        info=info,
        params=params,
        routine=routine,
        workspace=workspace,
        timing=timing,
        warnings=warnings,
    )
