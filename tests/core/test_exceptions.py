"""
Tests for the pyxlinalg exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via XLinalgError)
    - Precondition errors are ValidationErrors
    - Provider contract errors carry routine/info
    - Diagnostic attributes on the numerical errors
"""

import pytest

from pyxlinalg.core.exceptions import (
    ConvergenceError,
    DimensionError,
    DTypeError,
    LayoutError,
    NotPositiveDefiniteError,
    NumericalError,
    ProviderContractError,
    SingularMatrixError,
    UnsupportedRoutineError,
    ValidationError,
    WorkspaceQueryError,
    XLinalgError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via XLinalgError."""

    @pytest.mark.parametrize("exc", [DimensionError, LayoutError, DTypeError])
    def test_precondition_errors_are_validation_errors(self, exc):
        with pytest.raises(ValidationError):
            raise exc("bad input")

    @pytest.mark.parametrize("exc", [SingularMatrixError, NotPositiveDefiniteError, ConvergenceError])
    def test_numerical_errors(self, exc):
        with pytest.raises(NumericalError):
            raise exc("failed")

    def test_workspace_query_error_is_contract_error(self):
        with pytest.raises(ProviderContractError):
            raise WorkspaceQueryError("dgesdd", -12)

    def test_unsupported_routine_is_contract_error(self):
        with pytest.raises(ProviderContractError):
            raise UnsupportedRoutineError("dfoo", "cpu_scipy")

    @pytest.mark.parametrize("exc", [
        ValidationError("x"),
        ProviderContractError("x"),
        NumericalError("x"),
        WorkspaceQueryError("zgesdd", -1),
    ])
    def test_all_are_xlinalg_errors(self, exc):
        assert isinstance(exc, XLinalgError)

    def test_contract_error_is_not_validation_error(self):
        assert not isinstance(WorkspaceQueryError("dgeqrf", -1), ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_workspace_query_error(self):
        err = WorkspaceQueryError("zgesdd", -4)
        assert err.routine == "zgesdd"
        assert err.info == -4
        assert "zgesdd" in str(err)
        assert "-4" in str(err)

    def test_unsupported_routine(self):
        err = UnsupportedRoutineError("dfoo", "cpu_scipy")
        assert err.routine == "dfoo"
        assert err.provider == "cpu_scipy"

    def test_singular_matrix_error(self):
        err = SingularMatrixError("singular", matrix_name="A", pivot=3, routine="dgesv", info=3)
        assert err.matrix_name == "A"
        assert err.pivot == 3
        assert err.routine == "dgesv"
        assert err.info == 3

    def test_not_positive_definite_error(self):
        err = NotPositiveDefiniteError("not PD", order=2)
        assert err.order == 2
        assert err.matrix_name is None

    def test_convergence_error(self):
        err = ConvergenceError("no convergence", unconverged=5)
        assert err.unconverged == 5
        assert err.routine is None

    def test_dtype_error(self):
        err = DTypeError("bad dtype", dtype="int64")
        assert err.dtype == "int64"
        assert str(err) == "bad dtype"
