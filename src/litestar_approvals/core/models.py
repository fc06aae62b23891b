"""Concrete result models for litestar-approvals.

This module provides the per-step result record returned by the engine, the outcome
of a forward pass, and helpers for inspecting result lists.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from litestar_approvals.core.context import ExecutionContext
from litestar_approvals.core.types import (
    WORKFLOW_COMPLETE_STEP_ID,
    WORKFLOW_REJECTED_STEP_ID,
    StepStatus,
    StepType,
    WorkflowStatus,
)

__all__ = [
    "StepExecutionResult",
    "WorkflowExecution",
    "all_integrations_succeeded",
    "get_next_approval_step",
    "is_workflow_complete",
    "is_workflow_rejected",
]


@dataclass(frozen=True)
class StepExecutionResult:
    """Output record for one processed step.

    Attributes:
        success: Whether the step succeeded.
        step_id: ID of the step, or a synthetic ID such as ``workflow_complete``.
        step_type: Type of the step.
        provider: Integration provider name, for integration steps.
        message: Human-readable outcome.
        data: Opaque provider result.
        error: Error message when ``success`` is false.
        requires_user_action: True only for an approval step awaiting a decision.
        next_step_index: Index to resume from; set on approval pauses.
    """

    success: bool
    step_id: str
    step_type: StepType
    provider: str | None = None
    message: str | None = None
    data: Any = None
    error: str | None = None
    requires_user_action: bool = False
    next_step_index: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape, omitting unset optional fields."""
        payload: dict[str, Any] = {
            "success": self.success,
            "stepId": self.step_id,
            "stepType": str(self.step_type),
        }
        optional = {
            "provider": self.provider,
            "message": self.message,
            "data": self.data,
            "error": self.error,
            "nextStepIndex": self.next_step_index,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        if self.requires_user_action:
            payload["requiresUserAction"] = True
        return payload

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StepExecutionResult:
        """Rebuild a result from its wire shape."""
        return cls(
            success=bool(data["success"]),
            step_id=data["stepId"],
            step_type=StepType(data["stepType"]),
            provider=data.get("provider"),
            message=data.get("message"),
            data=data.get("data"),
            error=data.get("error"),
            requires_user_action=bool(data.get("requiresUserAction", False)),
            next_step_index=data.get("nextStepIndex"),
        )


@dataclass(frozen=True)
class WorkflowExecution:
    """Outcome of one forward pass over a workflow.

    Attributes:
        results: Results in the order steps were processed. Skipped steps emit none.
        context: Context as it stood when the pass stopped, including accumulated
            ``previous_results``. Persist it to resume after an approval.
        step_statuses: Status of every step reached during the pass, keyed by step ID.
    """

    results: tuple[StepExecutionResult, ...]
    context: ExecutionContext
    step_statuses: Mapping[str, StepStatus] = field(default_factory=dict)

    @property
    def status(self) -> WorkflowStatus:
        """Workflow-level status derived from the last result."""
        if not self.results:
            return WorkflowStatus.RUNNING
        last = self.results[-1]
        if last.step_id == WORKFLOW_COMPLETE_STEP_ID:
            return WorkflowStatus.COMPLETED
        if last.step_id == WORKFLOW_REJECTED_STEP_ID:
            return WorkflowStatus.REJECTED
        if last.requires_user_action:
            return WorkflowStatus.AWAITING_ACTION
        if not last.success:
            return WorkflowStatus.FAILED
        return WorkflowStatus.RUNNING

    @property
    def is_resumable(self) -> bool:
        return self.status == WorkflowStatus.AWAITING_ACTION

    @property
    def pending_approval(self) -> StepExecutionResult | None:
        return get_next_approval_step(self.results)


def all_integrations_succeeded(results: Iterable[StepExecutionResult]) -> bool:
    """Check whether every integration result in ``results`` succeeded."""
    return all(r.success for r in results if r.step_type == StepType.INTEGRATION)


def get_next_approval_step(results: Iterable[StepExecutionResult]) -> StepExecutionResult | None:
    """Return the first approval result still waiting for a decision, if any."""
    return next((r for r in results if r.step_type == StepType.APPROVAL and r.requires_user_action), None)


def is_workflow_complete(results: Iterable[StepExecutionResult]) -> bool:
    return any(r.step_id == WORKFLOW_COMPLETE_STEP_ID for r in results)


def is_workflow_rejected(results: Iterable[StepExecutionResult]) -> bool:
    return any(r.step_id == WORKFLOW_REJECTED_STEP_ID for r in results)
