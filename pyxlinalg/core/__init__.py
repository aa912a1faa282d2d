"""
Core infrastructure for pyxlinalg.

This module provides the shared abstractions used by the BLAS dispatcher,
the LAPACK wrappers and the providers.

Key components:
    view: ViewDescriptor, Layout, ElementCategory, RawPointer
    strides: increments and leading dimensions
    evaluation: materialize / as_inout
    workspace: ScratchBuffer and the two-phase negotiation
    catalogue: routine identities
    protocols: Provider protocol
    result: Generic Result[P] envelope
    status: status descriptions and exception mapping
    exceptions: Exception hierarchy
    validation: Input validators
"""

from pyxlinalg.core.exceptions import (
    XLinalgError,
    ValidationError,
    DimensionError,
    LayoutError,
    DTypeError,
    ProviderContractError,
    WorkspaceQueryError,
    UnsupportedRoutineError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
)
from pyxlinalg.core.protocols import Provider
from pyxlinalg.core.result import Result
from pyxlinalg.core.view import ElementCategory, Layout, RawPointer, ViewDescriptor
from pyxlinalg.core.workspace import QUERY, ScratchBuffer, negotiate

__all__ = [
    # Protocols
    "Provider",
    # Result
    "Result",
    # Views
    "ElementCategory",
    "Layout",
    "RawPointer",
    "ViewDescriptor",
    # Workspace
    "QUERY",
    "ScratchBuffer",
    "negotiate",
    # Exceptions
    "XLinalgError",
    "ValidationError",
    "DimensionError",
    "LayoutError",
    "DTypeError",
    "ProviderContractError",
    "WorkspaceQueryError",
    "UnsupportedRoutineError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
]
