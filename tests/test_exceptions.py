"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from litestar_approvals.exceptions import (
    ApprovalsError,
    IntegrationConfigError,
    IntegrationError,
    IntegrationTransportError,
    WorkflowNotFoundError,
    WorkflowValidationError,
)


@pytest.mark.unit
class TestExceptions:
    """Tests for library exceptions."""

    @pytest.mark.parametrize(
        "exc_type",
        [WorkflowNotFoundError, WorkflowValidationError, IntegrationError, IntegrationConfigError],
    )
    def test_all_inherit_from_base(self, exc_type: type[Exception]) -> None:
        """Test every library error can be caught as ApprovalsError."""
        assert issubclass(exc_type, ApprovalsError)

    def test_integration_errors(self) -> None:
        """Test config and transport errors share the integration base."""
        assert issubclass(IntegrationConfigError, IntegrationError)
        assert issubclass(IntegrationTransportError, IntegrationError)

    def test_workflow_not_found(self) -> None:
        """Test the message names the missing workflow."""
        error = WorkflowNotFoundError("capex")

        assert error.workflow_id == "capex"
        assert str(error) == "Workflow 'capex' not found"

    def test_workflow_validation(self) -> None:
        """Test validation errors are kept and joined into the message."""
        error = WorkflowValidationError(["first problem", "second problem"])

        assert error.errors == ["first problem", "second problem"]
        assert str(error) == "Workflow validation failed: first problem; second problem"

    def test_transport_status_code(self) -> None:
        """Test the transport error keeps the HTTP status."""
        error = IntegrationTransportError("Webhook failed with status 502", 502)

        assert error.status_code == 502
        assert str(error) == "Webhook failed with status 502"
        assert IntegrationTransportError("timeout").status_code is None
