"""
Core protocols for pyxlinalg.

These define structural interfaces that compute providers must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
that test doubles and third-party providers need not inherit anything.

Design Principles:
    - Minimal contract: a provider is a catalogue of callables
    - Capability-driven: use supports() before lookup() for optional routines
    - Positional calling convention fixed by BLAS/LAPACK, not by this layer
"""

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Provider(Protocol):
    """
    Protocol for native linear-algebra compute providers.

    A provider exposes one callable per routine identity from the catalogue
    (``pyxlinalg.core.catalogue``), e.g. 'dgesdd' and 'zgesdd' are distinct
    routines with distinct signatures.

    Calling convention:
        - Arguments are positional, in the order of the reference routine
          (CBLAS order for BLAS, with the storage order first for Level 2/3;
          Fortran LAPACK order for LAPACK).
        - Buffers are passed as RawPointer (flat buffer + element offset)
          together with their increment or leading dimension.
        - Flags are single upper-case characters ('N', 'T', 'A', 'L', ...);
          the BLAS storage order is a Layout.
        - Scratch sizes of -1 request a workspace query: the routine writes
          its requirement into the first element of each scratch buffer and
          computes nothing.
        - LAPACK routines return an int status; BLAS reductions return
          their scalar; other BLAS routines return None.

    Providers are stateless from the caller's point of view; reentrancy is
    whatever the underlying library guarantees.
    """

    @property
    def name(self) -> str:
        """
        Provider identifier.

        Convention: '{device}_{library}'
        Examples: 'cpu_scipy'
        """
        ...

    def supports(self, routine: str) -> bool:
        """
        Check if this provider implements a routine identity.

        Note:
            Unknown routines MUST return False, never raise.
        """
        ...

    def lookup(self, routine: str) -> Callable[..., Any]:
        """
        Return the callable for a routine identity.

        Raises:
            UnsupportedRoutineError: If the routine is not implemented
        """
        ...
