"""
Scratch buffers and the two-phase workspace negotiation.

Most LAPACK routines need scratch memory whose size is only known to the
provider. The protocol is always the same:

    1. allocate every negotiated buffer at placeholder size 1
    2. call the routine in query mode (each size argument is QUERY)
    3. read the requirement from the first element of each buffer
    4. resize each buffer to exactly that size
    5. call the routine again to compute

``negotiate`` performs steps 2-4 for any routine. The call site supplies a
zero-argument callable that invokes the provider with the buffers'
current ``pointer`` and ``lwork``; because those are read at call time,
the same callable serves both phases.
"""

import logging
from typing import Any, Callable

import numpy as np
from numpy.typing import DTypeLike, NDArray

from pyxlinalg.core.exceptions import ProviderContractError, WorkspaceQueryError
from pyxlinalg.core.view import RawPointer

logger = logging.getLogger(__name__)

# Size argument meaning "report the requirement, do not compute"
QUERY = -1

# Integer type of LAPACK index arguments (pivots, iwork)
LAPACK_INT = np.int32


class ScratchBuffer:
    """
    Typed, resizable, contiguous scratch storage owned by a single call.

    A negotiated buffer starts at placeholder size 1 and reports ``QUERY``
    as its ``lwork`` until it has been resized. A fixed buffer is sized
    deterministically up front and always reports its real size.

    Attributes:
        role: Scratch role ('work', 'rwork', 'iwork', ...)
    """

    def __init__(self, role: str, dtype: DTypeLike, size: int = 1, *, negotiated: bool = True):
        if size < 0:
            raise ValueError(f"{role}: scratch size must be non-negative, got {size}")
        self.role = role
        self._data = np.zeros(size, dtype=dtype)
        self._resolved = not negotiated

    @classmethod
    def fixed(cls, role: str, dtype: DTypeLike, size: int) -> 'ScratchBuffer':
        """Buffer with a deterministic size that is never negotiated."""
        return cls(role, dtype, size, negotiated=False)

    @property
    def data(self) -> NDArray[Any]:
        return self._data

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def size(self) -> int:
        return int(self._data.shape[0])

    @property
    def resolved(self) -> bool:
        """True once the buffer holds its final size."""
        return self._resolved

    @property
    def pointer(self) -> RawPointer:
        return RawPointer(self._data, 0)

    @property
    def lwork(self) -> int:
        """Size argument to pass to the provider for this buffer."""
        return self.size if self._resolved else QUERY

    def reported_size(self) -> int:
        """
        Requirement written by a query-mode call into the first element.

        Complex buffers carry the value in the real component.
        """
        value = self._data[0]
        if np.iscomplexobj(self._data):
            value = value.real
        return int(value)

    def resize(self, size: int) -> None:
        """Resize to exactly ``size`` elements and mark the buffer resolved."""
        if size < 0:
            raise ProviderContractError(
                f"{self.role}: provider reported a negative scratch size ({size})"
            )
        self._data = np.zeros(size, dtype=self._data.dtype)
        self._resolved = True

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        state = 'resolved' if self._resolved else 'placeholder'
        return f"ScratchBuffer(role={self.role!r}, dtype={self.dtype}, size={self.size}, {state})"


def negotiate(
    routine: str,
    call: Callable[[], int],
    *buffers: ScratchBuffer,
) -> dict[str, int]:
    """
    Run the query phase of a two-phase call and resize the scratch buffers.

    Args:
        routine: Provider routine identity, for diagnostics
        call: Invokes the routine with the buffers' current pointers/lwork
        *buffers: The negotiated buffers, still at placeholder size

    Returns:
        Mapping of scratch role to negotiated size

    Raises:
        WorkspaceQueryError: If the query call returns a nonzero status.
            This is never returned as data: a failing query means the
            parameters and the provider disagree, whatever the input.
    """
    info = int(call())
    if info != 0:
        raise WorkspaceQueryError(routine, info)

    sizes: dict[str, int] = {}
    for buffer in buffers:
        size = buffer.reported_size()
        buffer.resize(size)
        sizes[buffer.role] = size
        logger.debug("%s: negotiated %s of %d elements", routine, buffer.role, size)
    return sizes
