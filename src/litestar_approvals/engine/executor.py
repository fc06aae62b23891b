"""Workflow step sequencer.

This module walks a workflow's steps from the context's cursor: steps whose
conditions are unmet are skipped, integration steps are dispatched and chained, and
approval steps suspend execution until a human decision is recorded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from litestar_approvals.core.context import ExecutionContext
from litestar_approvals.core.models import StepExecutionResult, WorkflowExecution
from litestar_approvals.core.types import (
    WORKFLOW_COMPLETE_STEP_ID,
    WORKFLOW_REJECTED_STEP_ID,
    RequestData,
    StepStatus,
    StepType,
)
from litestar_approvals.engine.conditions import evaluate_conditions
from litestar_approvals.integrations.dispatcher import IntegrationDispatcher

if TYPE_CHECKING:
    from litestar_approvals.config import ExecutorConfig
    from litestar_approvals.core.definition import WorkflowDefinition

__all__ = [
    "WorkflowExecutor",
    "continue_workflow_after_approval",
    "process_step",
    "start_workflow_execution",
]

logger = logging.getLogger(__name__)


class WorkflowExecutor:
    """Interprets workflow definitions one forward pass at a time.

    The executor holds no per-workflow state. All state lives in the
    ``ExecutionContext`` passed in and returned on the ``WorkflowExecution``. Callers
    must serialize advancement of a given request themselves.

    Attributes:
        dispatcher: Dispatcher used for integration steps.
        event_bus: Optional event bus implementing an async ``emit`` method.

    Example:
        >>> executor = WorkflowExecutor()
        >>> execution = await executor.start(definition, "req-1", {"amount": 5000}, "u1", "org1")
        >>> execution.status
        <WorkflowStatus.AWAITING_ACTION: 'awaiting_action'>
    """

    def __init__(
        self,
        dispatcher: IntegrationDispatcher | None = None,
        event_bus: Any | None = None,
        config: ExecutorConfig | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            dispatcher: Integration dispatcher. Defaults to one built from ``config``.
            event_bus: Optional event bus implementing ``emit``.
            config: Executor config used when no dispatcher is given.
        """
        self.dispatcher = dispatcher or IntegrationDispatcher(config)
        self.event_bus = event_bus

    async def _emit(self, event: str, **payload: Any) -> None:
        if self.event_bus:
            await self.event_bus.emit(event, **payload)

    async def run(self, workflow: WorkflowDefinition, context: ExecutionContext) -> WorkflowExecution:
        """Advance through ``workflow`` from ``context.current_step_index``.

        The pass stops at the first of: running past the last step (a
        ``workflow_complete`` result is appended), a failed integration step (the
        failure is the last result and the cursor stays on it), or an approval step
        (a result requiring user action is appended).

        Args:
            workflow: The definition to interpret.
            context: Starting context.

        Returns:
            The results of the pass along with the final context.
        """
        steps = workflow.steps
        results: list[StepExecutionResult] = []
        statuses: dict[str, StepStatus] = {}

        while True:
            index = context.current_step_index

            if index >= len(steps):
                results.append(
                    StepExecutionResult(
                        success=True,
                        step_id=WORKFLOW_COMPLETE_STEP_ID,
                        step_type=StepType.APPROVAL,
                        message="Workflow completed - no more steps",
                    )
                )
                logger.info("Workflow %s completed for request %s", workflow.id, context.request_id)
                await self._emit("workflow.completed", workflow_id=workflow.id, request_id=context.request_id)
                break

            step = steps[index]

            if not evaluate_conditions(step.conditions, context.request_data):
                logger.debug("Skipping step %s (index %d): conditions not met", step.id, index)
                statuses[step.id] = StepStatus.SKIPPED
                await self._emit("workflow.step_skipped", request_id=context.request_id, step_id=step.id)
                context = context.advance()
                continue

            if step.type == StepType.INTEGRATION:
                result = await self.dispatcher.dispatch(step, context)
                results.append(result)

                if not result.success:
                    logger.warning(
                        "Integration step %s failed for request %s: %s", step.id, context.request_id, result.error
                    )
                    statuses[step.id] = StepStatus.FAILED
                    await self._emit(
                        "workflow.integration_failed",
                        request_id=context.request_id,
                        step_id=step.id,
                        error=result.error,
                    )
                    break

                statuses[step.id] = StepStatus.EXECUTED
                await self._emit("workflow.integration_succeeded", request_id=context.request_id, step_id=step.id)
                context = context.with_result(step.id, result.data).advance()
                continue

            logger.debug("Pausing request %s at approval step %s", context.request_id, step.id)
            results.append(
                StepExecutionResult(
                    success=True,
                    step_id=step.id,
                    step_type=StepType.APPROVAL,
                    message="Approval step pending user action",
                    requires_user_action=True,
                    next_step_index=index,
                )
            )
            statuses[step.id] = StepStatus.AWAITING_ACTION
            await self._emit("workflow.waiting", request_id=context.request_id, step_id=step.id)
            break

        return WorkflowExecution(results=tuple(results), context=context, step_statuses=statuses)

    async def process_step(
        self, workflow: WorkflowDefinition, context: ExecutionContext
    ) -> list[StepExecutionResult]:
        """Process steps from the context's cursor and return the results of the pass."""
        execution = await self.run(workflow, context)
        return list(execution.results)

    async def start(
        self,
        workflow: WorkflowDefinition,
        request_id: str,
        request_data: RequestData,
        user_id: str,
        organization_id: str,
    ) -> WorkflowExecution:
        """Run a workflow from its first step with a fresh context."""
        context = ExecutionContext(
            request_id=request_id,
            request_data=request_data,
            user_id=user_id,
            organization_id=organization_id,
            current_step_index=0,
            previous_results={},
        )
        return await self.run(workflow, context)

    async def resume(
        self, workflow: WorkflowDefinition, context: ExecutionContext, approved: bool
    ) -> WorkflowExecution:
        """Continue a workflow after the approval step at ``context.current_step_index`` was decided.

        Args:
            workflow: The definition being executed.
            context: Context rebuilt from persisted state, pointing at the approval step.
            approved: The recorded decision.

        Returns:
            A single ``workflow_rejected`` result with the unchanged context when the
            request was rejected, otherwise the results of the pass starting after
            the approval step.
        """
        if not approved:
            logger.info("Workflow %s rejected for request %s", workflow.id, context.request_id)
            await self._emit("workflow.rejected", workflow_id=workflow.id, request_id=context.request_id)
            rejected = StepExecutionResult(
                success=False,
                step_id=WORKFLOW_REJECTED_STEP_ID,
                step_type=StepType.APPROVAL,
                message="Workflow rejected at approval step",
            )
            return WorkflowExecution(results=(rejected,), context=context)

        return await self.run(workflow, context.advance())

    async def start_workflow_execution(
        self,
        workflow: WorkflowDefinition,
        request_id: str,
        request_data: RequestData,
        user_id: str,
        organization_id: str,
    ) -> list[StepExecutionResult]:
        """Start a workflow for a request and return the results of the first pass."""
        execution = await self.start(workflow, request_id, request_data, user_id, organization_id)
        return list(execution.results)

    async def continue_workflow_after_approval(
        self, workflow: WorkflowDefinition, context: ExecutionContext, approved: bool
    ) -> list[StepExecutionResult]:
        """Continue a workflow after an approval decision and return the results."""
        execution = await self.resume(workflow, context, approved)
        return list(execution.results)


async def process_step(workflow: WorkflowDefinition, context: ExecutionContext) -> list[StepExecutionResult]:
    """Process steps with a default executor configured from the environment."""
    return await WorkflowExecutor().process_step(workflow, context)


async def start_workflow_execution(
    workflow: WorkflowDefinition,
    request_id: str,
    request_data: RequestData,
    user_id: str,
    organization_id: str,
) -> list[StepExecutionResult]:
    """Start a workflow with a default executor configured from the environment."""
    return await WorkflowExecutor().start_workflow_execution(
        workflow, request_id, request_data, user_id, organization_id
    )


async def continue_workflow_after_approval(
    workflow: WorkflowDefinition, context: ExecutionContext, approved: bool
) -> list[StepExecutionResult]:
    """Continue a workflow with a default executor configured from the environment."""
    return await WorkflowExecutor().continue_workflow_after_approval(workflow, context, approved)
