"""
Generic result container for provider calls.

Every LAPACK wrapper returns a Result envelope: the verbatim status code,
an operation-specific payload of output views, and the diagnostics of the
call (routine identity, negotiated workspace, timing).

Design decisions:
    - Generic over payload P for type safety
    - The status is data, never an exception
    - workspace records the negotiated scratch sizes by role
    - timing is optional (don't burden stub providers in tests)
    - Immutable (frozen=True); the payload arrays themselves are the
      caller's to modify
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

P = TypeVar('P')  # Output payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a provider call.

    Type Parameters:
        P: The operation-specific output payload type

    Attributes:
        info: Status code of the compute call, unmodified
        params: Output payload (new output views), or None for purely
            in-place operations
        routine: Provider routine identity that was invoked
        workspace: Negotiated scratch size per role ({} if none)
        timing: Execution timing breakdown, or None if not measured
        warnings: Descriptions of nonzero statuses

    Examples:
        >>> result = gesdd(a, jobz='N')
        >>> result.info
        0
        >>> result.params.s
        array([...])
        >>> result.workspace
        {'work': 1234}
    """
    info: int
    params: P
    routine: str
    workspace: dict[str, int] = field(default_factory=dict)
    timing: dict[str, float] | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        """True if the provider reported success."""
        return self.info == 0

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
