"""REST API controllers for workflow execution.

This module provides three controller classes:
- WorkflowDefinitionController: List, view and register workflow definitions
- WorkflowExecutionController: Start and continue workflow executions
- N8nController: n8n health probe and callback webhook
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import asdict
from typing import Any, ClassVar

from litestar import Controller, get, post
from litestar.exceptions import NotAuthorizedException, ValidationException
from litestar.status_codes import HTTP_200_OK

from litestar_approvals.core.context import ExecutionContext
from litestar_approvals.core.definition import WorkflowDefinition
from litestar_approvals.core.models import WorkflowExecution
from litestar_approvals.core.types import WorkflowStatus
from litestar_approvals.engine.executor import WorkflowExecutor  # noqa: TC001 - needed for DI
from litestar_approvals.engine.registry import WorkflowRegistry  # noqa: TC001 - needed for DI
from litestar_approvals.integrations.payloads import isoformat_now
from litestar_approvals.web.dto import (
    ExecuteWorkflowDTO,
    ExecuteWorkflowReadDTO,
    ExecutionResponseDTO,
    N8nCallbackAckDTO,
    N8nCallbackDTO,
    N8nCallbackReadDTO,
    N8nHealthDTO,
    WorkflowDefinitionDTO,
    WorkflowStepSummaryDTO,
)
from litestar_approvals.web.exceptions import PersistenceRequiredError

__all__ = [
    "N8nController",
    "WorkflowDefinitionController",
    "WorkflowExecutionController",
]

logger = logging.getLogger(__name__)


def _definition_to_dto(definition: WorkflowDefinition) -> WorkflowDefinitionDTO:
    return WorkflowDefinitionDTO(
        id=definition.id,
        name=definition.name,
        description=definition.description,
        steps=[
            WorkflowStepSummaryDTO(
                id=step.id,
                name=step.name,
                type=str(step.type),
                order=step.order,
                provider=step.integration.provider if step.integration else None,
                condition_count=len(step.conditions),
            )
            for step in definition.steps
        ],
        settings=asdict(definition.settings),
    )


def _execution_to_dto(execution: WorkflowExecution, action: str) -> ExecutionResponseDTO:
    status = execution.status
    next_step_index = None
    if status == WorkflowStatus.AWAITING_ACTION and execution.pending_approval is not None:
        next_step_index = execution.pending_approval.next_step_index
    elif status == WorkflowStatus.FAILED:
        next_step_index = execution.context.current_step_index

    return ExecutionResponseDTO(
        success=True,
        message=f"Workflow {action} completed",
        status=str(status),
        results=[result.to_dict() for result in execution.results],
        previous_results=dict(execution.context.previous_results),
        next_step_index=next_step_index,
    )


class WorkflowDefinitionController(Controller):
    """API controller for registered workflow definitions.

    Tags: Workflow Definitions
    """

    path = "/definitions"
    tags: ClassVar[list[str]] = ["Workflow Definitions"]

    @get("/")
    async def list_definitions(self, workflow_registry: WorkflowRegistry) -> list[WorkflowDefinitionDTO]:
        """List all registered workflow definitions."""
        return [_definition_to_dto(definition) for definition in workflow_registry.list_definitions()]

    @get("/{workflow_id:str}")
    async def get_definition(self, workflow_id: str, workflow_registry: WorkflowRegistry) -> WorkflowDefinitionDTO:
        """Get a workflow definition by ID.

        Raises:
            WorkflowNotFoundError: If the workflow is not registered (answered with 404).
        """
        return _definition_to_dto(workflow_registry.get_definition(workflow_id))

    @post("/")
    async def register_definition(
        self, data: dict[str, Any], workflow_registry: WorkflowRegistry
    ) -> WorkflowDefinitionDTO:
        """Register a definition from the workflow builder's JSON.

        Raises:
            ValidationException: If ``id`` or a step ``type`` is missing or malformed.
            WorkflowValidationError: If the definition fails validation (answered with 400).
        """
        try:
            definition = WorkflowDefinition.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationException(detail=f"Malformed workflow definition: {e}") from e
        return _definition_to_dto(workflow_registry.register(definition))


class WorkflowExecutionController(Controller):
    """API controller driving workflow executions.

    Tags: Workflow Execution
    """

    path = "/execute"
    tags: ClassVar[list[str]] = ["Workflow Execution"]

    @post("/", status_code=HTTP_200_OK, dto=ExecuteWorkflowReadDTO, return_dto=None)
    async def execute(
        self,
        data: ExecuteWorkflowDTO,
        workflow_registry: WorkflowRegistry,
        workflow_executor: WorkflowExecutor,
    ) -> ExecutionResponseDTO:
        """Start or continue a workflow execution.

        ``start`` runs from the first step; ``continue`` records an approval decision
        for the step at ``stepIndex`` and runs on from there.

        Args:
            data: The execution request.
            workflow_registry: Injected workflow registry.
            workflow_executor: Injected workflow executor.

        Returns:
            The step results and the state needed to resume.

        Raises:
            ValidationException: If required fields for the action are missing or the
                action is unknown.
            PersistenceRequiredError: For ``status``, which needs stored history.
        """
        if not data.action:
            raise ValidationException(detail="Action is required (start, continue, or status)")

        workflow = workflow_registry.get_definition(data.workflow_id)

        if data.action == "start":
            if not data.request_id:
                raise ValidationException(detail="Request ID is required to start workflow")
            execution = await workflow_executor.start(
                workflow,
                data.request_id,
                data.request_data or {},
                data.user_id,
                data.organization_id,
            )
        elif data.action == "continue":
            if data.step_index is None or data.approved is None:
                raise ValidationException(detail="Step index and approval status required")
            if data.step_index < 0:
                raise ValidationException(detail="Step index must not be negative")
            context = ExecutionContext(
                request_id=data.request_id or "",
                request_data=data.request_data or {},
                user_id=data.user_id,
                organization_id=data.organization_id,
                current_step_index=data.step_index,
                previous_results=data.previous_results or {},
            )
            execution = await workflow_executor.resume(workflow, context, data.approved)
        elif data.action == "status":
            raise PersistenceRequiredError
        else:
            raise ValidationException(detail=f"Unknown action: {data.action}")

        logger.info(
            "Workflow %s %s for request %s: %s", workflow.id, data.action, data.request_id, execution.status
        )
        return _execution_to_dto(execution, data.action)


class N8nController(Controller):
    """API controller for the n8n integration.

    Tags: Integrations
    """

    path = "/n8n"
    tags: ClassVar[list[str]] = ["Integrations"]

    @get("/health")
    async def health(self, workflow_executor: WorkflowExecutor) -> N8nHealthDTO:
        """Report whether the configured n8n instance is reachable."""
        n8n = workflow_executor.dispatcher.n8n
        return N8nHealthDTO(reachable=await n8n.check_health(), base_url=n8n.base_url)

    @post("/callback", status_code=HTTP_200_OK, dto=N8nCallbackReadDTO, return_dto=None)
    async def callback(
        self,
        data: N8nCallbackDTO,
        workflow_executor: WorkflowExecutor,
        n8n_callback_hook: Any,
    ) -> N8nCallbackAckDTO:
        """Receive a callback from an n8n workflow.

        Once the secret check passes the callback is always acknowledged, so n8n
        does not retry; hook failures are logged and reported in ``error``.

        Raises:
            NotAuthorizedException: If a secret is configured and does not match.
        """
        expected = workflow_executor.dispatcher.config.n8n_webhook_secret
        if expected and not hmac.compare_digest(data.secret or "", expected):
            logger.warning("n8n callback received with invalid secret")
            raise NotAuthorizedException(detail="Invalid webhook secret")

        logger.info(
            "n8n callback: event=%s request=%s workflow=%s", data.event, data.request_id, data.workflow_slug
        )

        error = None
        if n8n_callback_hook is not None:
            try:
                await n8n_callback_hook(data)
            except Exception:
                logger.exception("Error processing n8n callback event %s", data.event)
                error = "Processing error logged"

        return N8nCallbackAckDTO(received=True, timestamp=isoformat_now(), event=data.event, error=error)
