"""Provider-specific request bodies for integration steps."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from litestar_approvals.integrations.config import parse_payload_object

if TYPE_CHECKING:
    from litestar_approvals.core.context import ExecutionContext
    from litestar_approvals.integrations.config import ChatConfig, N8nConfig, WebhookConfig

__all__ = [
    "build_n8n_payload",
    "build_slack_message",
    "build_teams_card",
    "build_webhook_payload",
    "default_message",
    "isoformat_now",
]

TEAMS_THEME_COLOR = "0076D7"
TEAMS_STATUS_TEXT = "Workflow Step Triggered"


def isoformat_now() -> str:
    """Return the current UTC time as an ISO 8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def default_message(context: ExecutionContext) -> str:
    return f"New request #{context.request_id} requires attention"


def _message_text(config: ChatConfig, context: ExecutionContext) -> str:
    if config.payload:
        return config.payload if isinstance(config.payload, str) else str(config.payload)
    return default_message(context)


def build_n8n_payload(config: N8nConfig, context: ExecutionContext, timestamp: str | None = None) -> dict[str, Any]:
    """Build the body posted to an n8n workflow trigger.

    The configured payload object is merged first; ``_context``, ``requestData`` and
    ``previousResults`` always win over keys of the same name.
    """
    return {
        **parse_payload_object(config.payload),
        "_context": {
            "requestId": context.request_id,
            "userId": context.user_id,
            "organizationId": context.organization_id,
            "stepIndex": context.current_step_index,
            "timestamp": timestamp or isoformat_now(),
        },
        "requestData": dict(context.request_data),
        "previousResults": dict(context.previous_results),
    }


def build_webhook_payload(
    config: WebhookConfig, context: ExecutionContext, timestamp: str | None = None
) -> dict[str, Any]:
    """Build the JSON body posted to a generic webhook."""
    return {
        **parse_payload_object(config.payload),
        "requestId": context.request_id,
        "requestData": dict(context.request_data),
        "timestamp": timestamp or isoformat_now(),
    }


def build_teams_card(config: ChatConfig, context: ExecutionContext) -> dict[str, Any]:
    """Build a Microsoft Teams ``MessageCard`` for an incoming webhook."""
    return {
        "@type": "MessageCard",
        "@context": "http://schema.org/extensions",
        "themeColor": TEAMS_THEME_COLOR,
        "summary": f"Request #{context.request_id}",
        "sections": [
            {
                "activityTitle": "Request Update",
                "facts": [
                    {"name": "Request ID", "value": context.request_id},
                    {"name": "Status", "value": TEAMS_STATUS_TEXT},
                ],
                "text": _message_text(config, context),
                "markdown": True,
            }
        ],
    }


def build_slack_message(config: ChatConfig, context: ExecutionContext) -> dict[str, Any]:
    """Build a Slack incoming-webhook message with a single mrkdwn section block."""
    message = _message_text(config, context)
    return {
        "text": message,
        "blocks": [
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"*Request Update*\nRequest ID: `{context.request_id}`\n{message}",
                },
            }
        ],
    }
