"""Typed, per-provider integration configs.

Integration steps carry a free-form ``config`` mapping. The dispatcher validates it
into one of the configs below before making any outbound call, raising
``IntegrationConfigError`` when a required field is missing.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from litestar_approvals.core.types import IntegrationProvider
from litestar_approvals.exceptions import IntegrationConfigError

__all__ = [
    "ChatConfig",
    "IntegrationConfig",
    "N8nConfig",
    "OutlookConfig",
    "WebhookConfig",
    "parse_integration_config",
    "parse_payload_object",
    "try_parse_json",
]


def try_parse_json(text: Any) -> Any:
    """Parse ``text`` as JSON, returning None when it is not a valid JSON string.

    Mappings and lists are returned unchanged, since stored configs may already hold
    decoded JSON.
    """
    if isinstance(text, (Mapping, list)):
        return text
    if not isinstance(text, (str, bytes)):
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def parse_payload_object(payload: Any) -> dict[str, Any]:
    """Best-effort decode of a configured payload into a dict.

    Missing, invalid or non-object JSON yields an empty dict.
    """
    if not payload:
        return {}
    parsed = try_parse_json(payload)
    if isinstance(parsed, Mapping):
        return dict(parsed)
    return {}


@dataclass(frozen=True)
class N8nConfig:
    """Config for the ``n8n`` provider.

    Attributes:
        workflow_id: Webhook slug of the n8n workflow to trigger.
        payload: Optional extra JSON object merged into the request body.
    """

    workflow_id: str
    payload: Any = None


@dataclass(frozen=True)
class WebhookConfig:
    """Config for the generic ``webhook`` provider."""

    target: str
    payload: Any = None


@dataclass(frozen=True)
class ChatConfig:
    """Config for chat incoming-webhook providers (``teams`` and ``slack``).

    Attributes:
        target: Incoming webhook URL.
        payload: Message text. A default message is generated when empty.
    """

    target: str
    payload: Any = None


@dataclass(frozen=True)
class OutlookConfig:
    """Config for the ``outlook`` provider. No field is required."""

    target: str | None = None
    payload: Any = None


IntegrationConfig: TypeAlias = "N8nConfig | WebhookConfig | ChatConfig | OutlookConfig"

_MISSING_TARGET_MESSAGES = {
    IntegrationProvider.WEBHOOK: "Webhook URL is required",
    IntegrationProvider.TEAMS: "Teams webhook URL is required",
    IntegrationProvider.SLACK: "Slack webhook URL is required",
}


def parse_integration_config(provider: IntegrationProvider, config: Mapping[str, Any]) -> IntegrationConfig:
    """Validate a raw config mapping for the given provider.

    Args:
        provider: The known provider the config belongs to.
        config: Raw ``config`` mapping from the integration step.

    Returns:
        The typed config for the provider.

    Raises:
        IntegrationConfigError: If a required field is missing or empty.
    """
    payload = config.get("payload")

    if provider == IntegrationProvider.N8N:
        workflow_id = config.get("workflowId")
        if not workflow_id:
            msg = "n8n workflow ID/webhook slug is required"
            raise IntegrationConfigError(msg)
        return N8nConfig(workflow_id=str(workflow_id), payload=payload)

    if provider == IntegrationProvider.OUTLOOK:
        return OutlookConfig(target=config.get("target"), payload=payload)

    target = config.get("target")
    if not target:
        raise IntegrationConfigError(_MISSING_TARGET_MESSAGES[provider])

    if provider == IntegrationProvider.WEBHOOK:
        return WebhookConfig(target=str(target), payload=payload)
    return ChatConfig(target=str(target), payload=payload)
