"""Shared test fixtures for litestar-approvals test suite."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import TYPE_CHECKING, Any

import httpx
import pytest

if TYPE_CHECKING:
    from litestar_approvals.config import ExecutorConfig
    from litestar_approvals.core.context import ExecutionContext
    from litestar_approvals.core.definition import WorkflowDefinition, WorkflowStep
    from litestar_approvals.engine.registry import WorkflowRegistry

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


class RecordingEventBus:
    """Event bus double collecting emitted events."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    async def emit(self, event: str, **payload: Any) -> None:
        self.events.append((event, payload))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]


@pytest.fixture(autouse=True)
def _clear_integration_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment from leaking into configs built with defaults."""
    monkeypatch.delenv("N8N_BASE_URL", raising=False)
    monkeypatch.delenv("N8N_WEBHOOK_SECRET", raising=False)


@pytest.fixture
def executor_config() -> ExecutorConfig:
    """Executor config pointing at a fake n8n instance."""
    from litestar_approvals.config import ExecutorConfig

    return ExecutorConfig(n8n_base_url="http://n8n.test", n8n_webhook_secret=None)


@pytest.fixture
def transport_factory() -> Callable[[Handler], RecordingTransport]:
    """Build a recording transport from a request handler."""
    return RecordingTransport


@pytest.fixture
def ok_transport() -> RecordingTransport:
    """Transport answering every request with ``200 {"ok": true}``."""
    return RecordingTransport(lambda request: httpx.Response(200, json={"ok": True}))


@pytest.fixture
async def ok_client(ok_transport: RecordingTransport) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client backed by ``ok_transport``."""
    async with httpx.AsyncClient(transport=ok_transport) as client:
        yield client


@pytest.fixture
def sample_context() -> ExecutionContext:
    """Create a sample execution context for testing."""
    from litestar_approvals.core.context import ExecutionContext

    return ExecutionContext(
        request_id="req-42",
        request_data={"amount": 5000, "department": "Finance"},
        user_id="user-1",
        organization_id="org-1",
    )


@pytest.fixture
def step_factory() -> Callable[..., WorkflowStep]:
    """Build steps tersely: ``step_factory("cfo")`` or ``step_factory("ping", provider="slack", ...)``."""
    from litestar_approvals.core.definition import Condition, IntegrationDescriptor, WorkflowStep
    from litestar_approvals.core.types import StepType

    def _make(
        step_id: str,
        *,
        order: int = 0,
        provider: str | None = None,
        config: dict[str, Any] | None = None,
        conditions: list[Condition] | None = None,
    ) -> WorkflowStep:
        if provider is None:
            return WorkflowStep(
                id=step_id,
                name=step_id.title(),
                type=StepType.APPROVAL,
                order=order,
                conditions=tuple(conditions or ()),
            )
        return WorkflowStep(
            id=step_id,
            name=step_id.title(),
            type=StepType.INTEGRATION,
            order=order,
            conditions=tuple(conditions or ()),
            integration=IntegrationDescriptor(provider=provider, action="notify", config=config or {}),
        )

    return _make


@pytest.fixture
def definition_factory() -> Callable[..., WorkflowDefinition]:
    """Build a definition whose step orders match their positions."""
    from dataclasses import replace

    from litestar_approvals.core.definition import WorkflowDefinition

    def _make(*steps: WorkflowStep, workflow_id: str = "capex") -> WorkflowDefinition:
        return WorkflowDefinition(
            id=workflow_id,
            name="Capital expenditure",
            steps=tuple(replace(step, order=index) for index, step in enumerate(steps)),
        )

    return _make


@pytest.fixture
def sample_workflow_json() -> dict[str, Any]:
    """Workflow definition as stored by the workflow builder."""
    return {
        "id": "capex",
        "name": "Capital expenditure",
        "description": "Purchases above the discretionary limit",
        "steps": [
            {
                "id": "manager",
                "name": "Manager approval",
                "type": "approval",
                "order": 1,
                "approverType": "role",
                "approverValue": "manager",
                "conditions": [],
                "escalation": {"enabled": True, "hours": 48, "escalateTo": "director", "reminderHours": 24},
            },
            {
                "id": "notify-finance",
                "name": "Notify finance",
                "type": "integration",
                "order": 2,
                "conditions": [{"id": "c1", "field": "amount", "operator": "greater_than", "value": "1000"}],
                "integration": {
                    "provider": "webhook",
                    "action": "post",
                    "config": {"target": "https://hooks.test/finance", "payload": '{"source": "approvals"}'},
                },
            },
            {
                "id": "cfo",
                "name": "CFO sign-off",
                "type": "approval",
                "order": 3,
                "conditions": [{"field": "amount", "operator": "greater_than", "value": 10000}],
            },
        ],
        "settings": {"expirationDays": 14, "allowWithdraw": False},
    }


@pytest.fixture
def workflow_registry() -> WorkflowRegistry:
    """Create an empty workflow registry."""
    from litestar_approvals.engine.registry import WorkflowRegistry

    return WorkflowRegistry()


@pytest.fixture
def event_bus() -> RecordingEventBus:
    """Event bus double recording emitted events."""
    return RecordingEventBus()
