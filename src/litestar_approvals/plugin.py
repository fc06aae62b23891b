"""Litestar plugin for approval workflow integration.

This module provides the ApprovalsPlugin, which wires a workflow registry and a
workflow executor into a Litestar application.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from litestar.di import Provide
from litestar.plugins import InitPluginProtocol

from litestar_approvals.config import ExecutorConfig
from litestar_approvals.core.definition import WorkflowDefinition
from litestar_approvals.engine.executor import WorkflowExecutor
from litestar_approvals.engine.registry import WorkflowRegistry

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

    from litestar_approvals.web.dto import N8nCallbackDTO

__all__ = ["ApprovalsPlugin", "ApprovalsPluginConfig"]


@dataclass
class ApprovalsPluginConfig:
    """Configuration for the ApprovalsPlugin.

    Attributes:
        registry: Optional pre-configured WorkflowRegistry. If not provided, a new
            one is created.
        executor: Optional pre-configured WorkflowExecutor. If not provided, one is
            created from ``executor_config``.
        executor_config: Config for a created executor. Defaults to the environment.
        definitions: Workflow definitions (or their stored JSON) to register on
            app startup.
        on_n8n_callback: Optional async hook awaited with every accepted n8n callback.
        enable_api: Whether to enable the REST API endpoints. Defaults to True.
        api_path_prefix: URL path prefix for all API endpoints.
        api_guards: List of Litestar guards to apply to all API endpoints.
        api_tags: OpenAPI tags to apply to the API endpoints.
        include_api_in_schema: Whether to include API endpoints in the OpenAPI schema.
    """

    registry: WorkflowRegistry | None = None
    executor: WorkflowExecutor | None = None
    executor_config: ExecutorConfig | None = None
    definitions: list[WorkflowDefinition | dict[str, Any]] = field(default_factory=list)
    on_n8n_callback: Callable[[N8nCallbackDTO], Awaitable[None]] | None = None
    enable_api: bool = True
    api_path_prefix: str = "/workflows"
    api_guards: list[Any] = field(default_factory=list)
    api_tags: list[str] = field(default_factory=lambda: ["Workflows"])
    include_api_in_schema: bool = True


class ApprovalsPlugin(InitPluginProtocol):
    """Litestar plugin for approval workflows.

    Provides dependency injection for the WorkflowRegistry (``workflow_registry``) and
    the WorkflowExecutor (``workflow_executor``) and, unless disabled, mounts the REST
    API.

    Example:
        Basic usage::

            from litestar import Litestar
            from litestar_approvals import ApprovalsPlugin, ApprovalsPluginConfig

            app = Litestar(
                plugins=[
                    ApprovalsPlugin(
                        config=ApprovalsPluginConfig(definitions=[capex_definition])
                    )
                ]
            )

        Using in a route handler::

            from litestar import post
            from litestar_approvals import WorkflowExecutor, WorkflowRegistry


            @post("/requests/{request_id:str}/submit")
            async def submit(
                request_id: str,
                data: dict,
                workflow_registry: WorkflowRegistry,
                workflow_executor: WorkflowExecutor,
            ) -> dict:
                workflow = workflow_registry.get_definition("capex")
                execution = await workflow_executor.start(workflow, request_id, data, "u1", "org1")
                return {"status": execution.status}
    """

    __slots__ = ("_config", "_executor", "_registry")

    def __init__(self, config: ApprovalsPluginConfig | None = None) -> None:
        """Initialize the plugin.

        Args:
            config: Optional configuration for the plugin.
        """
        self._config = config or ApprovalsPluginConfig()
        self._registry: WorkflowRegistry | None = None
        self._executor: WorkflowExecutor | None = None

    @property
    def registry(self) -> WorkflowRegistry:
        """Get the workflow registry.

        Raises:
            RuntimeError: If accessed before plugin initialization.
        """
        if self._registry is None:
            msg = "ApprovalsPlugin has not been initialized. Access registry after app startup."
            raise RuntimeError(msg)
        return self._registry

    @property
    def executor(self) -> WorkflowExecutor:
        """Get the workflow executor.

        Raises:
            RuntimeError: If accessed before plugin initialization.
        """
        if self._executor is None:
            msg = "ApprovalsPlugin has not been initialized. Access executor after app startup."
            raise RuntimeError(msg)
        return self._executor

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Initialize the plugin when the Litestar app starts.

        Creates or reuses the registry and executor, registers the configured
        definitions, adds dependency providers and, if ``enable_api`` is set, mounts
        the REST controllers and their exception handlers.

        Args:
            app_config: The Litestar application configuration.

        Returns:
            The modified application configuration.
        """
        self._registry = self._config.registry or WorkflowRegistry()
        self._executor = self._config.executor or WorkflowExecutor(config=self._config.executor_config)

        for definition in self._config.definitions:
            self._registry.register(definition)

        hook = self._config.on_n8n_callback

        def provide_registry() -> WorkflowRegistry:
            return self._registry  # type: ignore[return-value]

        def provide_executor() -> WorkflowExecutor:
            return self._executor  # type: ignore[return-value]

        def provide_n8n_callback_hook() -> Any:
            return hook

        app_config.dependencies["workflow_registry"] = Provide(provide_registry, sync_to_thread=False)
        app_config.dependencies["workflow_executor"] = Provide(provide_executor, sync_to_thread=False)
        app_config.dependencies["n8n_callback_hook"] = Provide(provide_n8n_callback_hook, sync_to_thread=False)

        if self._config.enable_api:
            from litestar import Router

            from litestar_approvals.exceptions import WorkflowNotFoundError, WorkflowValidationError
            from litestar_approvals.web.controllers import (
                N8nController,
                WorkflowDefinitionController,
                WorkflowExecutionController,
            )
            from litestar_approvals.web.exceptions import (
                PersistenceRequiredError,
                persistence_required_handler,
                workflow_not_found_handler,
                workflow_validation_handler,
            )

            workflow_router = Router(
                path=self._config.api_path_prefix,
                route_handlers=[WorkflowDefinitionController, WorkflowExecutionController, N8nController],
                guards=self._config.api_guards,
                tags=self._config.api_tags,
                include_in_schema=self._config.include_api_in_schema,
            )
            app_config.route_handlers.append(workflow_router)

            app_config.exception_handlers[PersistenceRequiredError] = persistence_required_handler  # type: ignore[assignment]
            app_config.exception_handlers[WorkflowNotFoundError] = workflow_not_found_handler  # type: ignore[assignment]
            app_config.exception_handlers[WorkflowValidationError] = workflow_validation_handler  # type: ignore[assignment]

        return app_config
