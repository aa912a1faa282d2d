"""
Exception hierarchy for pyxlinalg.

All exceptions inherit from XLinalgError to allow catching any
library-specific error. The hierarchy mirrors the three failure classes
of a provider call:

    - Precondition violations (ValidationError and subclasses) are raised
      at call entry, before the provider is touched.
    - Provider contract failures (ProviderContractError and subclasses)
      signal a mismatch between this layer and the provider, most notably
      a failed workspace query. They are always raised, never returned.
    - Numerical failures (NumericalError and subclasses) are only raised by
      the high-level ``pyxlinalg.linalg`` functions. The BLAS/LAPACK layer
      hands computation statuses back as plain integers.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class XLinalgError(Exception):
    """Base exception for all pyxlinalg errors."""
    pass


class ValidationError(XLinalgError):
    """
    Input validation failed.

    Raised when call-site inputs violate a precondition of the operation.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when an operand has the wrong number of dimensions or when
    several operands have incompatible shapes.
    """
    pass


class LayoutError(ValidationError):
    """
    Memory layout is unsuitable for the operation.

    Raised when an operand lacks a unit-stride axis, when the layout of an
    output cannot be resolved, when operands that must share a layout
    disagree, or when an in/out operand is not writeable.
    """
    pass


class DTypeError(ValidationError):
    """
    Element type is not supported by the provider, or operands disagree.

    Attributes:
        dtype: The offending dtype, as a string
    """

    def __init__(self, message: str, dtype: str | None = None):
        super().__init__(message)
        self.dtype = dtype


class ProviderContractError(XLinalgError):
    """
    The compute provider and this layer disagree about a call contract.

    These errors indicate a defect (in the caller-visible parameters this
    layer derived, or in the provider), not a property of the user's data.
    """
    pass


class WorkspaceQueryError(ProviderContractError):
    """
    The workspace-query phase of a two-phase provider call failed.

    A query with well-formed parameters never fails, so a nonzero status
    here is unrecoverable: the compute phase is never attempted.

    Attributes:
        routine: Provider routine identity (e.g. 'zgesdd')
        info: Status code returned by the query call
    """

    def __init__(self, routine: str, info: int):
        super().__init__(
            f"Could not find workspace size for {routine} (query returned info={info})"
        )
        self.routine = routine
        self.info = info


class UnsupportedRoutineError(ProviderContractError):
    """
    The provider does not implement a catalogue routine.

    Attributes:
        routine: Requested routine identity
        provider: Name of the provider that was asked
    """

    def __init__(self, routine: str, provider: str):
        super().__init__(f"Provider {provider!r} does not implement {routine!r}")
        self.routine = routine
        self.provider = provider


class NumericalError(XLinalgError):
    """
    Numerical computation failed.

    Base class for errors derived from a nonzero provider status.

    Attributes:
        routine: Provider routine that reported the status, if known
        info: The verbatim status code, if known
    """

    def __init__(self, message: str, routine: str | None = None, info: int | None = None):
        super().__init__(message)
        self.routine = routine
        self.info = info


class SingularMatrixError(NumericalError):
    """
    Matrix is exactly singular.

    Raised when an LU-based routine finds a zero pivot.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot: 1-based index of the zero pivot, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot: int | None = None,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message, routine=routine, info=info)
        self.matrix_name = matrix_name
        self.pivot = pivot


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when a Cholesky factorization fails.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        order: Order of the leading minor that is not positive definite
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        order: int | None = None,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message, routine=routine, info=info)
        self.matrix_name = matrix_name
        self.order = order


class ConvergenceError(NumericalError):
    """
    An iterative provider algorithm failed to converge.

    Raised for SVD, eigenvalue and least-squares routines reporting a
    positive status.

    Attributes:
        unconverged: Number of values that failed to converge, if known
    """

    def __init__(
        self,
        message: str,
        unconverged: int | None = None,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message, routine=routine, info=info)
        self.unconverged = unconverged
