"""Core type definitions for litestar-approvals.

This module defines the enums, sentinel identifiers and type aliases shared by the
workflow definition, the execution engine and the integration providers.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeAlias

# StrEnum backport for Python < 3.11
if sys.version_info >= (3, 11):
    from enum import StrEnum
else:

    class StrEnum(str, Enum):
        """String enumeration compatibility for Python < 3.11."""

        def __str__(self) -> str:
            return str(self.value)

__all__ = [
    "WORKFLOW_COMPLETE_STEP_ID",
    "WORKFLOW_REJECTED_STEP_ID",
    "ConditionOperator",
    "IntegrationProvider",
    "RequestData",
    "StepStatus",
    "StepType",
    "WorkflowStatus",
]


class StepType(StrEnum):
    """Classification of steps within a workflow.

    Attributes:
        APPROVAL: Human approval gate; suspends execution until a decision is recorded.
        INTEGRATION: Automated outbound call to an integration provider.
    """

    APPROVAL = "approval"
    INTEGRATION = "integration"


class IntegrationProvider(StrEnum):
    """External systems an integration step can call."""

    TEAMS = "teams"
    SLACK = "slack"
    OUTLOOK = "outlook"
    N8N = "n8n"
    WEBHOOK = "webhook"


class ConditionOperator(StrEnum):
    """Comparison operators understood by the condition evaluator.

    Attributes:
        EQUALS: String-coerced equality.
        NOT_EQUALS: String-coerced inequality.
        GREATER_THAN: Numeric-coerced ``>``.
        LESS_THAN: Numeric-coerced ``<``.
        CONTAINS: Case-insensitive substring test.
        BETWEEN: Numeric-coerced inclusive range check.
    """

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    CONTAINS = "contains"
    BETWEEN = "between"


class StepStatus(StrEnum):
    """Outcome of a single step within one forward pass.

    Attributes:
        PENDING: Step has not been reached yet.
        SKIPPED: Step conditions were not met.
        EXECUTED: Integration step completed successfully.
        AWAITING_ACTION: Approval step is waiting for a human decision.
        FAILED: Integration step failed; forward progress halted.
    """

    PENDING = "pending"
    SKIPPED = "skipped"
    EXECUTED = "executed"
    AWAITING_ACTION = "awaiting_action"
    FAILED = "failed"


class WorkflowStatus(StrEnum):
    """Overall status of a workflow after one forward pass.

    Attributes:
        RUNNING: Execution is in progress.
        COMPLETED: All steps were processed.
        AWAITING_ACTION: Paused at an approval step; the only resumable state.
        FAILED: An integration step failed.
        REJECTED: The approver rejected the request.
    """

    RUNNING = "running"
    COMPLETED = "completed"
    AWAITING_ACTION = "awaiting_action"
    FAILED = "failed"
    REJECTED = "rejected"


WORKFLOW_COMPLETE_STEP_ID = "workflow_complete"
"""Step ID of the synthetic result emitted when the cursor runs past the last step."""

WORKFLOW_REJECTED_STEP_ID = "workflow_rejected"
"""Step ID of the synthetic result emitted when an approval is rejected."""

RequestData: TypeAlias = Mapping[str, Any]
"""Type alias for the submitted request form data, read-only to the engine."""
