"""n8n webhook client.

Triggers n8n workflows through their webhook URLs (``{base_url}/webhook/{slug}``) and
probes instance health. Configure the base URL with ``N8N_BASE_URL``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, Literal

import httpx

from litestar_approvals.config import ExecutorConfig
from litestar_approvals.exceptions import IntegrationTransportError

__all__ = ["N8nClient", "N8nResponse", "timeout_message"]

logger = logging.getLogger(__name__)


def timeout_message(timeout: float) -> str:
    return f"Request timed out after {int(timeout * 1000)}ms"


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


@dataclass
class N8nResponse:
    """Normalized outcome of an n8n webhook call.

    Attributes:
        success: Whether n8n answered with a 2xx status.
        data: Response body, decoded as JSON when possible, else raw text.
        error: Failure description when ``success`` is false.
        status_code: HTTP status code, when a response was received.
    """

    success: bool
    data: Any = None
    error: str | None = None
    status_code: int | None = None


class N8nClient:
    """Async client for triggering n8n workflows.

    Attributes:
        config: Executor config providing the base URL and timeouts.

    Example:
        >>> client = N8nClient(ExecutorConfig(n8n_base_url="http://n8n:5678"))
        >>> response = await client.trigger("invoice-approved", data={"id": 42})
        >>> response.success
        True
    """

    def __init__(self, config: ExecutorConfig | None = None, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the client.

        Args:
            config: Executor config. Defaults to one built from the environment.
            client: Optional shared HTTP client. When omitted a short-lived client is
                opened per call.
        """
        self.config = config or ExecutorConfig.from_env()
        self._client = client

    @property
    def base_url(self) -> str:
        return self.config.n8n_base_url

    def webhook_url(self, slug: str) -> str:
        return f"{self.base_url}/webhook/{slug}"

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient() as client:
            yield client

    async def trigger(
        self,
        slug: str,
        method: Literal["GET", "POST"] = "POST",
        data: Any = None,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> N8nResponse:
        """Trigger an n8n workflow via its webhook.

        This never raises; transport failures are reported on the returned response.

        Args:
            slug: Webhook slug/path configured in n8n.
            method: HTTP method.
            data: Optional JSON payload.
            timeout: Timeout in seconds. Defaults to ``config.n8n_timeout``.
            headers: Extra request headers.

        Returns:
            The normalized response.
        """
        timeout = timeout or self.config.n8n_timeout
        request_headers = {"Content-Type": "application/json", **(headers or {})}

        try:
            async with self._session() as client:
                response = await client.request(
                    method,
                    self.webhook_url(slug),
                    json=data,
                    headers=request_headers,
                    timeout=timeout,
                )
        except httpx.TimeoutException:
            logger.error("n8n workflow %s timed out after %sms", slug, int(timeout * 1000))
            return N8nResponse(success=False, error=timeout_message(timeout))
        except httpx.HTTPError as e:
            logger.error("Error triggering n8n workflow %s: %s", slug, e)
            return N8nResponse(success=False, error=str(e) or type(e).__name__)

        if not response.is_success:
            logger.error(
                "Failed to trigger n8n workflow %s: %s %s", slug, response.status_code, response.reason_phrase
            )
            return N8nResponse(
                success=False,
                error=f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        return N8nResponse(success=True, data=_parse_body(response), status_code=response.status_code)

    async def trigger_or_raise(
        self,
        slug: str,
        method: Literal["GET", "POST"] = "POST",
        data: Any = None,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Trigger an n8n workflow and return its response data.

        Raises:
            IntegrationTransportError: If the call failed or n8n answered non-2xx.
        """
        result = await self.trigger(slug, method, data, timeout=timeout, headers=headers)
        if not result.success:
            raise IntegrationTransportError(result.error or "Failed to trigger workflow", result.status_code)
        return result.data

    async def check_health(self) -> bool:
        """Check whether the n8n instance answers ``GET /healthz`` with a 2xx status."""
        try:
            async with self._session() as client:
                response = await client.get(f"{self.base_url}/healthz", timeout=self.config.health_check_timeout)
        except httpx.HTTPError as e:
            logger.warning("n8n health check against %s failed: %s", self.base_url, e)
            return False
        return response.is_success
