"""Tests for executor configuration."""

from __future__ import annotations

import pytest

from litestar_approvals.config import DEFAULT_N8N_BASE_URL, ExecutorConfig, get_n8n_base_url


@pytest.mark.unit
class TestExecutorConfig:
    """Tests for ExecutorConfig."""

    def test_defaults(self) -> None:
        """Test default timeouts and URL."""
        config = ExecutorConfig()

        assert config.n8n_base_url == DEFAULT_N8N_BASE_URL == "http://localhost:5678"
        assert config.n8n_timeout == 30.0
        assert config.health_check_timeout == 5.0
        assert config.request_timeout is None
        assert config.n8n_webhook_secret is None

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the environment supplies the base URL and callback secret."""
        monkeypatch.setenv("N8N_BASE_URL", "https://n8n.example.com/")
        monkeypatch.setenv("N8N_WEBHOOK_SECRET", "s3cret")

        config = ExecutorConfig.from_env()

        assert config.n8n_base_url == "https://n8n.example.com"
        assert config.n8n_webhook_secret == "s3cret"

    def test_empty_env_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test empty variables are treated as unset."""
        monkeypatch.setenv("N8N_BASE_URL", "")
        monkeypatch.setenv("N8N_WEBHOOK_SECRET", "")

        assert get_n8n_base_url() == "http://localhost:5678"
        assert ExecutorConfig().n8n_webhook_secret is None

    def test_explicit_values_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test constructor arguments override the environment."""
        monkeypatch.setenv("N8N_BASE_URL", "https://ignored.example.com")

        config = ExecutorConfig(n8n_base_url="http://n8n.internal:5678/", n8n_timeout=10.0)

        assert config.n8n_base_url == "http://n8n.internal:5678"
        assert config.n8n_timeout == 10.0
