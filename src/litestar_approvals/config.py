"""Runtime configuration for the workflow executor and its integrations."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

__all__ = ["DEFAULT_N8N_BASE_URL", "ExecutorConfig", "get_n8n_base_url"]

DEFAULT_N8N_BASE_URL = "http://localhost:5678"


def get_n8n_base_url() -> str:
    """Return the n8n base URL from ``N8N_BASE_URL``, falling back to the local default."""
    return (os.getenv("N8N_BASE_URL") or DEFAULT_N8N_BASE_URL).rstrip("/")


@dataclass
class ExecutorConfig:
    """Configuration for outbound integration calls.

    Attributes:
        n8n_base_url: Base URL of the n8n instance. Read from ``N8N_BASE_URL`` when
            the config is created.
        n8n_timeout: Timeout in seconds for n8n workflow triggers.
        health_check_timeout: Timeout in seconds for the n8n health probe.
        request_timeout: Timeout in seconds for webhook, Teams and Slack calls.
            ``None`` keeps the HTTP client's default timeout.
        n8n_webhook_secret: Shared secret expected on inbound n8n callbacks. Read from
            ``N8N_WEBHOOK_SECRET``; verification is skipped when unset.

    Example:
        >>> config = ExecutorConfig(n8n_base_url="https://n8n.internal", n8n_timeout=10.0)
    """

    n8n_base_url: str = field(default_factory=get_n8n_base_url)
    n8n_timeout: float = 30.0
    health_check_timeout: float = 5.0
    request_timeout: float | None = None
    n8n_webhook_secret: str | None = field(default_factory=lambda: os.getenv("N8N_WEBHOOK_SECRET") or None)

    def __post_init__(self) -> None:
        self.n8n_base_url = self.n8n_base_url.rstrip("/")

    @classmethod
    def from_env(cls) -> ExecutorConfig:
        """Build a config from the current environment."""
        return cls()
