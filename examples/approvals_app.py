"""Example demonstrating the ApprovalsPlugin REST API endpoints.

This example registers a capital expenditure workflow: a manager approval, a Slack
notification for amounts above 1000, an n8n sync, and a CFO sign-off for amounts
above 10000.

Run this example with:
    uv run python examples/approvals_app.py

Then drive a request through the workflow:
    curl -X POST http://localhost:8000/workflows/execute \\
        -H 'Content-Type: application/json' \\
        -d '{"action": "start", "workflowId": "capex", "requestId": "req-1", "requestData": {"amount": 5000}}'

    curl -X POST http://localhost:8000/workflows/execute \\
        -H 'Content-Type: application/json' \\
        -d '{"action": "continue", "workflowId": "capex", "requestId": "req-1",
             "requestData": {"amount": 5000}, "stepIndex": 0, "approved": true}'
"""

from __future__ import annotations

import logging

from litestar import Litestar
from litestar.openapi import OpenAPIConfig

from litestar_approvals import ApprovalsPlugin, ApprovalsPluginConfig
from litestar_approvals.web.dto import N8nCallbackDTO

logger = logging.getLogger(__name__)

capex_workflow = {
    "id": "capex",
    "name": "Capital expenditure",
    "description": "Purchases above the discretionary limit",
    "steps": [
        {"id": "manager", "name": "Manager approval", "type": "approval", "order": 1, "approverType": "manager"},
        {
            "id": "notify-finance",
            "name": "Notify finance",
            "type": "integration",
            "order": 2,
            "conditions": [{"field": "amount", "operator": "greater_than", "value": 1000}],
            "integration": {
                "provider": "slack",
                "action": "post_message",
                "config": {"target": "https://hooks.slack.com/services/T000/B000/XXXX"},
            },
        },
        {
            "id": "erp-sync",
            "name": "Sync to ERP",
            "type": "integration",
            "order": 3,
            "integration": {
                "provider": "n8n",
                "action": "trigger",
                "config": {"workflowId": "capex-erp-sync", "payload": '{"ledger": "capex"}'},
            },
        },
        {
            "id": "cfo",
            "name": "CFO sign-off",
            "type": "approval",
            "order": 4,
            "approverType": "role",
            "approverValue": "cfo",
            "conditions": [{"field": "amount", "operator": "greater_than", "value": 10000}],
        },
    ],
    "settings": {"expirationDays": 14},
}


async def on_n8n_callback(data: N8nCallbackDTO) -> None:
    """Record callbacks from n8n flows."""
    logger.info("n8n reported %s for request %s: %s", data.event, data.request_id, data.data)


def create_app() -> Litestar:
    """Create and configure the Litestar application.

    Returns:
        Configured Litestar application with the approvals plugin.
    """
    approvals_config = ApprovalsPluginConfig(
        definitions=[capex_workflow],
        on_n8n_callback=on_n8n_callback,
        api_path_prefix="/workflows",
        api_tags=["Approvals API"],
    )

    return Litestar(
        plugins=[ApprovalsPlugin(config=approvals_config)],
        openapi_config=OpenAPIConfig(
            title="Approval Workflow API",
            version="1.0.0",
            description="REST API for executing approval workflows",
        ),
        debug=True,
    )


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
