"""Litestar Approvals - Approval workflow execution for Litestar.

This package interprets approval workflows: ordered lists of human approval steps
and automated integration steps (Microsoft Teams, Slack, Outlook, n8n and generic
webhooks), each optionally gated by conditions on the submitted request data.

Key Features:
    - Condition evaluation against request data
    - Integration dispatch with provider-specific payloads
    - Suspension at approval steps and resumption after a decision
    - Immutable execution context, safe to persist between passes
    - Litestar plugin with a REST API and an n8n callback endpoint

Example:
    >>> from litestar_approvals import WorkflowDefinition, WorkflowExecutor
    >>>
    >>> workflow = WorkflowDefinition.from_dict(stored_workflow_json)
    >>> execution = await WorkflowExecutor().start(
    ...     workflow, "req-42", {"amount": 5000}, user_id="u1", organization_id="org1"
    ... )
    >>> execution.status
    <WorkflowStatus.AWAITING_ACTION: 'awaiting_action'>
"""

from __future__ import annotations

from litestar_approvals.__metadata__ import __project__, __version__
from litestar_approvals.config import ExecutorConfig
from litestar_approvals.core import (
    Condition,
    ExecutionContext,
    IntegrationDescriptor,
    StepExecutionResult,
    StepStatus,
    StepType,
    WorkflowDefinition,
    WorkflowExecution,
    WorkflowSettings,
    WorkflowStatus,
    WorkflowStep,
)
from litestar_approvals.engine import (
    WorkflowExecutor,
    WorkflowRegistry,
    continue_workflow_after_approval,
    evaluate_conditions,
    process_step,
    start_workflow_execution,
)
from litestar_approvals.exceptions import (
    ApprovalsError,
    IntegrationConfigError,
    IntegrationError,
    IntegrationTransportError,
    WorkflowNotFoundError,
    WorkflowValidationError,
)
from litestar_approvals.integrations import IntegrationDispatcher, N8nClient
from litestar_approvals.plugin import ApprovalsPlugin, ApprovalsPluginConfig

__all__ = (
    "ApprovalsError",
    "ApprovalsPlugin",
    "ApprovalsPluginConfig",
    "Condition",
    "ExecutionContext",
    "ExecutorConfig",
    "IntegrationConfigError",
    "IntegrationDescriptor",
    "IntegrationDispatcher",
    "IntegrationError",
    "IntegrationTransportError",
    "N8nClient",
    "StepExecutionResult",
    "StepStatus",
    "StepType",
    "WorkflowDefinition",
    "WorkflowExecution",
    "WorkflowExecutor",
    "WorkflowNotFoundError",
    "WorkflowRegistry",
    "WorkflowSettings",
    "WorkflowStatus",
    "WorkflowStep",
    "WorkflowValidationError",
    "__project__",
    "__version__",
    "continue_workflow_after_approval",
    "evaluate_conditions",
    "process_step",
    "start_workflow_execution",
)
