"""Integration step dispatch.

The dispatcher performs the outbound call for an integration step and always returns
a ``StepExecutionResult``. Missing configuration, transport failures and unknown
providers are reported on the result with ``success=False``; no exception escapes
``IntegrationDispatcher.dispatch``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import httpx

from litestar_approvals.config import ExecutorConfig
from litestar_approvals.core.models import StepExecutionResult
from litestar_approvals.core.types import IntegrationProvider, StepType
from litestar_approvals.exceptions import IntegrationError, IntegrationTransportError
from litestar_approvals.integrations.config import parse_integration_config, try_parse_json
from litestar_approvals.integrations.n8n import N8nClient, timeout_message
from litestar_approvals.integrations.payloads import (
    build_n8n_payload,
    build_slack_message,
    build_teams_card,
    build_webhook_payload,
)

if TYPE_CHECKING:
    from litestar_approvals.core.context import ExecutionContext
    from litestar_approvals.core.definition import IntegrationDescriptor, WorkflowStep
    from litestar_approvals.integrations.config import (
        ChatConfig,
        N8nConfig,
        OutlookConfig,
        WebhookConfig,
    )

__all__ = ["IntegrationDispatcher"]

logger = logging.getLogger(__name__)

ProviderHandler = Callable[["IntegrationDescriptor", Any, "ExecutionContext"], Awaitable[Any]]


class IntegrationDispatcher:
    """Executes integration steps against their providers.

    Attributes:
        config: Executor config with the n8n base URL and timeouts.
        n8n: Client used for the ``n8n`` provider.

    Example:
        >>> async with httpx.AsyncClient() as http:
        ...     dispatcher = IntegrationDispatcher(client=http)
        ...     result = await dispatcher.dispatch(step, context)
        >>> result.success
        True
    """

    def __init__(
        self,
        config: ExecutorConfig | None = None,
        client: httpx.AsyncClient | None = None,
        n8n: N8nClient | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config: Executor config. Defaults to one built from the environment.
            client: Optional shared HTTP client for every provider. When omitted a
                short-lived client is opened per call.
            n8n: Optional pre-built n8n client. Defaults to one sharing ``client``.
        """
        self.config = config or ExecutorConfig.from_env()
        self._client = client
        self.n8n = n8n or N8nClient(self.config, client=client)
        self._handlers: dict[IntegrationProvider, ProviderHandler] = {
            IntegrationProvider.N8N: self._execute_n8n,
            IntegrationProvider.WEBHOOK: self._execute_webhook,
            IntegrationProvider.TEAMS: self._execute_teams,
            IntegrationProvider.SLACK: self._execute_slack,
            IntegrationProvider.OUTLOOK: self._execute_outlook,
        }

    async def dispatch(self, step: WorkflowStep, context: ExecutionContext) -> StepExecutionResult:
        """Execute an integration step.

        Args:
            step: The integration step to execute.
            context: Current execution context.

        Returns:
            A successful result carrying the provider data, or a failed result
            carrying the error message.
        """
        integration = step.integration
        if integration is None:
            return self._failure(step, None, "No integration configuration found")

        try:
            provider = IntegrationProvider(integration.provider)
        except ValueError:
            return self._failure(
                step, integration.provider, f"Unknown integration provider: {integration.provider}"
            )

        try:
            config = parse_integration_config(provider, integration.config)
            data = await self._handlers[provider](integration, config, context)
        except IntegrationError as e:
            logger.error("Error executing %s integration for step %s: %s", provider, step.id, e)
            return self._failure(step, str(provider), str(e))
        except Exception as e:
            logger.exception("Unexpected error executing %s integration for step %s", provider, step.id)
            return self._failure(step, str(provider), str(e) or "Unknown error")

        return StepExecutionResult(
            success=True,
            step_id=step.id,
            step_type=StepType.INTEGRATION,
            provider=str(provider),
            message=f"{provider} integration executed successfully",
            data=data,
        )

    @staticmethod
    def _failure(step: WorkflowStep, provider: str | None, error: str) -> StepExecutionResult:
        return StepExecutionResult(
            success=False,
            step_id=step.id,
            step_type=StepType.INTEGRATION,
            provider=provider,
            error=error,
        )

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient() as client:
            yield client

    async def _post_json(self, url: str, payload: dict[str, Any], label: str) -> httpx.Response:
        """POST ``payload`` as JSON, raising ``IntegrationTransportError`` on any failure."""
        async with self._session() as client:
            timeout = self.config.request_timeout
            effective = timeout if timeout is not None else client.timeout.read
            try:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
                )
            except httpx.TimeoutException as e:
                raise IntegrationTransportError(timeout_message(effective or 0)) from e
            except httpx.HTTPError as e:
                raise IntegrationTransportError(str(e) or type(e).__name__) from e

        if not response.is_success:
            msg = f"{label} failed with status {response.status_code}"
            raise IntegrationTransportError(msg, response.status_code)
        return response

    async def _execute_n8n(
        self, integration: IntegrationDescriptor, config: N8nConfig, context: ExecutionContext
    ) -> Any:
        payload = build_n8n_payload(config, context)
        return await self.n8n.trigger_or_raise(config.workflow_id, "POST", payload)

    async def _execute_webhook(
        self, integration: IntegrationDescriptor, config: WebhookConfig, context: ExecutionContext
    ) -> Any:
        response = await self._post_json(config.target, build_webhook_payload(config, context), "Webhook")
        text = response.text
        parsed = try_parse_json(text)
        return parsed if parsed is not None else text

    async def _execute_teams(
        self, integration: IntegrationDescriptor, config: ChatConfig, context: ExecutionContext
    ) -> dict[str, Any]:
        await self._post_json(config.target, build_teams_card(config, context), "Teams webhook")
        return {"sent": True}

    async def _execute_slack(
        self, integration: IntegrationDescriptor, config: ChatConfig, context: ExecutionContext
    ) -> dict[str, Any]:
        await self._post_json(config.target, build_slack_message(config, context), "Slack webhook")
        return {"sent": True}

    async def _execute_outlook(
        self, integration: IntegrationDescriptor, config: OutlookConfig, context: ExecutionContext
    ) -> dict[str, Any]:
        # No outbound call: delivery needs Microsoft Graph credentials or an n8n flow.
        logger.info(
            "Outlook integration triggered: action=%s target=%s request=%s",
            integration.action,
            config.target,
            context.request_id,
        )
        return {
            "queued": True,
            "message": "Outlook action queued. Configure Microsoft Graph API for full functionality.",
            "action": integration.action,
            "target": config.target,
        }
