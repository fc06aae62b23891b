"""Exception handling for workflow web endpoints.

This module provides the web-only exceptions and the handlers mapping library
exceptions to HTTP responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from litestar import Response
from litestar.status_codes import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND, HTTP_501_NOT_IMPLEMENTED

if TYPE_CHECKING:  # pragma: no cover
    from litestar import Request

    from litestar_approvals.exceptions import WorkflowNotFoundError, WorkflowValidationError

__all__ = [
    "PersistenceRequiredError",
    "persistence_required_handler",
    "workflow_not_found_handler",
    "workflow_validation_handler",
]


class PersistenceRequiredError(Exception):
    """Raised when an action needs execution history the library does not store.

    Execution history lives in the host application's request storage.
    """

    def __init__(self, message: str | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Optional custom error message.
        """
        if message is None:
            message = "Execution status requires persisted execution history, which is managed by the host application."
        super().__init__(message)


def persistence_required_handler(_request: Request, exc: PersistenceRequiredError) -> Response:
    """Return a 501 Not Implemented response for ``PersistenceRequiredError``."""
    return Response(
        content={"error": "persistence_required", "message": str(exc)},
        status_code=HTTP_501_NOT_IMPLEMENTED,
        media_type="application/json",
    )


def workflow_not_found_handler(_request: Request, exc: WorkflowNotFoundError) -> Response:
    """Return a 404 response for an unregistered workflow."""
    return Response(
        content={"error": "workflow_not_found", "detail": str(exc), "workflow_id": exc.workflow_id},
        status_code=HTTP_404_NOT_FOUND,
        media_type="application/json",
    )


def workflow_validation_handler(_request: Request, exc: WorkflowValidationError) -> Response:
    """Return a 400 response listing definition validation errors."""
    return Response(
        content={"error": "workflow_invalid", "detail": str(exc), "errors": exc.errors},
        status_code=HTTP_400_BAD_REQUEST,
        media_type="application/json",
    )
