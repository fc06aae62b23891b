"""Workflow execution engine.

This module provides the condition evaluator, the step sequencer and the workflow
registry.
"""

from __future__ import annotations

from litestar_approvals.engine.conditions import evaluate_condition, evaluate_conditions
from litestar_approvals.engine.executor import (
    WorkflowExecutor,
    continue_workflow_after_approval,
    process_step,
    start_workflow_execution,
)
from litestar_approvals.engine.registry import WorkflowRegistry

__all__ = [
    "WorkflowExecutor",
    "WorkflowRegistry",
    "continue_workflow_after_approval",
    "evaluate_condition",
    "evaluate_conditions",
    "process_step",
    "start_workflow_execution",
]
