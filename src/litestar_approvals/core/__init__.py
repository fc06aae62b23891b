"""Core domain module for litestar-approvals.

This module exports the fundamental building blocks: types, definitions, the
execution context and result models.
"""

from __future__ import annotations

from litestar_approvals.core.context import ExecutionContext
from litestar_approvals.core.definition import (
    AutoApprovePolicy,
    Condition,
    EscalationPolicy,
    IntegrationDescriptor,
    NotificationSettings,
    WorkflowDefinition,
    WorkflowSettings,
    WorkflowStep,
)
from litestar_approvals.core.models import (
    StepExecutionResult,
    WorkflowExecution,
    all_integrations_succeeded,
    get_next_approval_step,
    is_workflow_complete,
    is_workflow_rejected,
)
from litestar_approvals.core.types import (
    WORKFLOW_COMPLETE_STEP_ID,
    WORKFLOW_REJECTED_STEP_ID,
    ConditionOperator,
    IntegrationProvider,
    RequestData,
    StepStatus,
    StepType,
    WorkflowStatus,
)

__all__ = [
    "WORKFLOW_COMPLETE_STEP_ID",
    "WORKFLOW_REJECTED_STEP_ID",
    "AutoApprovePolicy",
    "Condition",
    "ConditionOperator",
    "EscalationPolicy",
    "ExecutionContext",
    "IntegrationDescriptor",
    "IntegrationProvider",
    "NotificationSettings",
    "RequestData",
    "StepExecutionResult",
    "StepStatus",
    "StepType",
    "WorkflowDefinition",
    "WorkflowExecution",
    "WorkflowSettings",
    "WorkflowStatus",
    "WorkflowStep",
    "all_integrations_succeeded",
    "get_next_approval_step",
    "is_workflow_complete",
    "is_workflow_rejected",
]
