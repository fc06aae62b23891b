"""Workflow registry for looking up definitions by ID.

Definitions are authored and persisted by an external workflow builder; the registry
holds the ones an application has loaded so the REST layer can resolve them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from litestar_approvals.core.definition import WorkflowDefinition
from litestar_approvals.exceptions import WorkflowNotFoundError, WorkflowValidationError

__all__ = ["WorkflowRegistry"]


class WorkflowRegistry:
    """In-memory mapping of workflow IDs to definitions.

    Attributes:
        _definitions: Map of workflow ID to WorkflowDefinition.
    """

    def __init__(self, definitions: Iterable[WorkflowDefinition] = ()) -> None:
        """Initialize the registry.

        Args:
            definitions: Optional definitions to register immediately.
        """
        self._definitions: dict[str, WorkflowDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: WorkflowDefinition | Mapping[str, Any]) -> WorkflowDefinition:
        """Validate and register a workflow definition.

        Registering an ID again replaces the previous definition.

        Args:
            definition: A definition, or its stored JSON mapping.

        Returns:
            The registered definition.

        Raises:
            WorkflowValidationError: If the definition fails validation.

        Example:
            >>> registry = WorkflowRegistry()
            >>> registry.register({"id": "capex", "name": "Capex", "steps": []})
        """
        if not isinstance(definition, WorkflowDefinition):
            definition = WorkflowDefinition.from_dict(definition)

        errors = definition.validate()
        if errors:
            raise WorkflowValidationError(errors)

        self._definitions[definition.id] = definition
        return definition

    def get_definition(self, workflow_id: str) -> WorkflowDefinition:
        """Retrieve a workflow definition by ID.

        Raises:
            WorkflowNotFoundError: If no definition is registered under ``workflow_id``.
        """
        try:
            return self._definitions[workflow_id]
        except KeyError as e:
            raise WorkflowNotFoundError(workflow_id) from e

    def list_definitions(self) -> list[WorkflowDefinition]:
        return list(self._definitions.values())

    def unregister(self, workflow_id: str) -> None:
        """Remove a workflow from the registry. Unknown IDs are ignored."""
        self._definitions.pop(workflow_id, None)

    def has_workflow(self, workflow_id: str) -> bool:
        return workflow_id in self._definitions
