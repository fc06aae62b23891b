"""REST API layer for litestar-approvals.

The controllers are registered by ``ApprovalsPlugin`` when ``enable_api`` is set
(the default)::

    from litestar import Litestar
    from litestar_approvals import ApprovalsPlugin, ApprovalsPluginConfig

    app = Litestar(
        plugins=[ApprovalsPlugin(config=ApprovalsPluginConfig(definitions=[capex_definition]))]
    )

Endpoints, relative to ``api_path_prefix`` (``/workflows`` by default):

- ``GET /definitions`` and ``GET /definitions/{workflow_id}``
- ``POST /definitions``
- ``POST /execute``
- ``GET /n8n/health``
- ``POST /n8n/callback``
"""

from __future__ import annotations

from litestar_approvals.web.controllers import (
    N8nController,
    WorkflowDefinitionController,
    WorkflowExecutionController,
)
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
    "ExecuteWorkflowDTO",
    "ExecuteWorkflowReadDTO",
    "ExecutionResponseDTO",
    "N8nCallbackAckDTO",
    "N8nCallbackDTO",
    "N8nCallbackReadDTO",
    "N8nController",
    "N8nHealthDTO",
    "PersistenceRequiredError",
    "WorkflowDefinitionController",
    "WorkflowDefinitionDTO",
    "WorkflowExecutionController",
    "WorkflowStepSummaryDTO",
]
