"""Workflow execution context.

This module provides the ExecutionContext dataclass, the cursor and accumulated
integration results threaded through one forward pass over a workflow.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from litestar_approvals.core.types import RequestData

__all__ = ["ExecutionContext"]


@dataclass(frozen=True)
class ExecutionContext:
    """Immutable execution state for a single workflow run.

    Every transition returns a new context, so the cursor can only move forward
    through ``advance``. The context is discarded once a pass ends; resuming after a
    human decision means rebuilding it from persisted state.

    Attributes:
        request_id: ID of the request travelling through the workflow.
        request_data: Submitted form data, used for condition evaluation and
            payload enrichment.
        user_id: ID of the user on whose behalf the workflow runs.
        organization_id: ID of the owning organization.
        current_step_index: Zero-based cursor into ``WorkflowDefinition.steps``.
        previous_results: Integration result data keyed by step ID.

    Example:
        >>> context = ExecutionContext(
        ...     request_id="req-1",
        ...     request_data={"amount": 5000},
        ...     user_id="user-1",
        ...     organization_id="org-1",
        ... )
        >>> context.advance().current_step_index
        1
    """

    request_id: str
    request_data: RequestData = field(default_factory=dict)
    user_id: str = ""
    organization_id: str = ""
    current_step_index: int = 0
    previous_results: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.current_step_index < 0:
            msg = f"current_step_index must be >= 0, got {self.current_step_index}"
            raise ValueError(msg)
        # Freeze copies so later changes to the caller's dicts cannot leak in.
        object.__setattr__(self, "request_data", MappingProxyType(dict(self.request_data)))
        object.__setattr__(self, "previous_results", MappingProxyType(dict(self.previous_results)))

    def advance(self) -> ExecutionContext:
        """Return a copy of the context pointing at the next step."""
        return replace(self, current_step_index=self.current_step_index + 1)

    def with_result(self, step_id: str, data: Any) -> ExecutionContext:
        """Return a copy of the context with ``data`` recorded for ``step_id``.

        Args:
            step_id: ID of the integration step that produced the data.
            data: Result data returned by the provider.

        Returns:
            A new context whose ``previous_results`` includes the step result.
        """
        return replace(self, previous_results={**self.previous_results, step_id: data})

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of the context for persistence."""
        return {
            "request_id": self.request_id,
            "request_data": dict(self.request_data),
            "user_id": self.user_id,
            "organization_id": self.organization_id,
            "current_step_index": self.current_step_index,
            "previous_results": dict(self.previous_results),
        }
