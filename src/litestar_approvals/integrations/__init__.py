"""Integration providers for workflow steps.

Exports the dispatcher, the n8n client and the typed provider configs.
"""

from __future__ import annotations

from litestar_approvals.integrations.config import (
    ChatConfig,
    N8nConfig,
    OutlookConfig,
    WebhookConfig,
    parse_integration_config,
    try_parse_json,
)
from litestar_approvals.integrations.dispatcher import IntegrationDispatcher
from litestar_approvals.integrations.n8n import N8nClient, N8nResponse

__all__ = [
    "ChatConfig",
    "IntegrationDispatcher",
    "N8nClient",
    "N8nConfig",
    "N8nResponse",
    "OutlookConfig",
    "WebhookConfig",
    "parse_integration_config",
    "try_parse_json",
]
