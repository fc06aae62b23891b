"""Exception hierarchy for litestar-approvals."""

from __future__ import annotations

__all__ = (
    "ApprovalsError",
    "IntegrationConfigError",
    "IntegrationError",
    "IntegrationTransportError",
    "WorkflowNotFoundError",
    "WorkflowValidationError",
)


class ApprovalsError(Exception):
    """Base exception for all litestar-approvals errors.

    All exceptions raised by litestar-approvals inherit from this class, so callers
    can catch every workflow-related error with a single except clause.
    """


class WorkflowNotFoundError(ApprovalsError):
    """Raised when a workflow definition is not registered.

    Attributes:
        workflow_id: The ID of the workflow that was not found.
    """

    def __init__(self, workflow_id: str) -> None:
        """Initialize the exception with the missing workflow ID.

        Args:
            workflow_id: The ID of the workflow that was not found.
        """
        self.workflow_id = workflow_id
        super().__init__(f"Workflow '{workflow_id}' not found")


class WorkflowValidationError(ApprovalsError):
    """Raised when workflow definition validation fails.

    Attributes:
        errors: List of validation error messages.
    """

    def __init__(self, errors: list[str]) -> None:
        """Initialize the exception with validation errors.

        Args:
            errors: List of validation error messages.
        """
        self.errors = errors
        super().__init__(f"Workflow validation failed: {'; '.join(errors)}")


class IntegrationError(ApprovalsError):
    """Base exception for failures inside an integration provider.

    These never escape the integration dispatcher; they are turned into a failed
    step result carrying the exception message.
    """


class IntegrationConfigError(IntegrationError):
    """Raised when an integration step lacks a required config field (URL, workflow slug)."""


class IntegrationTransportError(IntegrationError):
    """Raised when an outbound integration call fails.

    Covers non-2xx responses, network errors and timeouts.

    Attributes:
        status_code: HTTP status code of the failed response, if one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable failure description.
            status_code: HTTP status code, if a response was received.
        """
        self.status_code = status_code
        super().__init__(message)
