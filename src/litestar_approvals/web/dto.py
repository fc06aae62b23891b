"""Data Transfer Objects for the workflow execution API.

This module defines DTOs for serializing and deserializing workflow data in REST API
requests and responses. Request bodies are read with camelCase keys, the shape
the workflow builder and n8n flows send.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from litestar.dto import DataclassDTO, DTOConfig

__all__ = [
    "ExecuteWorkflowDTO",
    "ExecuteWorkflowReadDTO",
    "ExecutionResponseDTO",
    "N8nCallbackAckDTO",
    "N8nCallbackDTO",
    "N8nCallbackReadDTO",
    "N8nHealthDTO",
    "WorkflowDefinitionDTO",
    "WorkflowStepSummaryDTO",
]


@dataclass
class ExecuteWorkflowDTO:
    """DTO for driving a workflow execution.

    Attributes:
        action: ``start``, ``continue`` or ``status``.
        workflow_id: ID of the registered workflow definition.
        request_id: ID of the request moving through the workflow.
        request_data: Submitted request fields.
        step_index: Index of the decided approval step (``continue`` only).
        approved: The recorded approval decision (``continue`` only).
        previous_results: Integration results persisted from earlier passes.
        user_id: ID of the acting user.
        organization_id: ID of the acting user's organization.
    """

    action: str
    workflow_id: str
    request_id: str | None = None
    request_data: dict[str, Any] | None = None
    step_index: int | None = None
    approved: bool | None = None
    previous_results: dict[str, Any] | None = None
    user_id: str = ""
    organization_id: str = ""


@dataclass
class ExecutionResponseDTO:
    """DTO for the outcome of an execution action.

    Attributes:
        success: Always true when the action ran; inspect ``results`` for step failures.
        message: Summary of the action.
        status: Workflow status after the pass.
        results: Step results in their camelCase wire shape.
        previous_results: Accumulated integration results to persist for resuming.
        next_step_index: Index to resume or retry from, when the workflow is not finished.
    """

    success: bool
    message: str
    status: str
    results: list[dict[str, Any]]
    previous_results: dict[str, Any] = field(default_factory=dict)
    next_step_index: int | None = None


@dataclass
class WorkflowStepSummaryDTO:
    """DTO for a step listed in a workflow definition."""

    id: str
    name: str
    type: str
    order: int
    provider: str | None = None
    condition_count: int = 0


@dataclass
class WorkflowDefinitionDTO:
    """DTO for workflow definition metadata."""

    id: str
    name: str
    description: str | None
    steps: list[WorkflowStepSummaryDTO]
    settings: dict[str, Any]


@dataclass
class N8nCallbackDTO:
    """DTO for callbacks sent by n8n workflows.

    Attributes:
        event: ``workflow_complete``, ``step_complete``, ``error`` or ``custom``.
            Unknown events are still accepted.
        request_id: Request the callback refers to, if any.
        workflow_slug: Slug of the n8n workflow sending the callback.
        data: Arbitrary event data.
        secret: Shared secret, checked when one is configured.
    """

    event: str
    request_id: str | None = None
    workflow_slug: str | None = None
    data: dict[str, Any] | None = None
    secret: str | None = None


@dataclass
class N8nCallbackAckDTO:
    """DTO acknowledging an n8n callback."""

    received: bool
    timestamp: str
    event: str | None = None
    error: str | None = None


@dataclass
class N8nHealthDTO:
    """DTO for the n8n reachability probe."""

    reachable: bool
    base_url: str


class ExecuteWorkflowReadDTO(DataclassDTO[ExecuteWorkflowDTO]):
    """Reads the execute body using the workflow builder's camelCase keys (``workflowId``, ``stepIndex``)."""

    config = DTOConfig(rename_strategy="camel")


class N8nCallbackReadDTO(DataclassDTO[N8nCallbackDTO]):
    """Reads n8n callbacks using camelCase keys (``requestId``, ``workflowSlug``)."""

    config = DTOConfig(rename_strategy="camel")
