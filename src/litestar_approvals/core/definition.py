"""Workflow definition structures.

This module provides the read-only data structures describing an approval process:
step conditions, approval policies, integration descriptors, steps and the complete
workflow definition. Definitions are produced by an external workflow builder, usually
as camelCase JSON, and are loaded through the ``from_dict`` constructors.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from litestar_approvals.core.types import StepType

__all__ = [
    "AutoApprovePolicy",
    "Condition",
    "EscalationPolicy",
    "IntegrationDescriptor",
    "NotificationSettings",
    "WorkflowDefinition",
    "WorkflowSettings",
    "WorkflowStep",
]


@dataclass(frozen=True)
class Condition:
    """A single field comparison gating whether a step executes.

    Attributes:
        field: Name of the request data field to read.
        operator: Comparison operator name (see ``ConditionOperator``). Unknown
            operators are kept as-is and evaluate to true.
        value: Value to compare against.
        value2: Upper bound for the ``between`` operator.
        id: Optional identifier assigned by the workflow builder.

    Example:
        >>> Condition(field="amount", operator="greater_than", value=1000)
    """

    field: str
    operator: str
    value: Any = None
    value2: Any = None
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Condition:
        """Build a condition from its JSON representation."""
        return cls(
            field=data["field"],
            operator=data["operator"],
            value=data.get("value"),
            value2=data.get("value2"),
            id=data.get("id"),
        )


@dataclass(frozen=True)
class AutoApprovePolicy:
    """Auto-approval rule interpreted by the approval-assignment subsystem."""

    enabled: bool = False
    condition: str = ""
    value: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AutoApprovePolicy:
        return cls(
            enabled=bool(data.get("enabled", False)),
            condition=data.get("condition", ""),
            value=data.get("value", ""),
        )


@dataclass(frozen=True)
class EscalationPolicy:
    """Escalation rule acted upon by an external scheduler."""

    enabled: bool = False
    hours: int = 0
    escalate_to: str = ""
    reminder: bool = False
    reminder_hours: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EscalationPolicy:
        return cls(
            enabled=bool(data.get("enabled", False)),
            hours=int(data.get("hours", 0)),
            escalate_to=data.get("escalateTo", ""),
            reminder=bool(data.get("reminder", False)),
            reminder_hours=int(data.get("reminderHours", 0)),
        )


@dataclass(frozen=True)
class NotificationSettings:
    """Per-step notification flags for the notification subsystem."""

    on_assignment: bool = True
    on_approval: bool = True
    on_rejection: bool = True
    on_escalation: bool = True
    channels: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NotificationSettings:
        return cls(
            on_assignment=bool(data.get("onAssignment", True)),
            on_approval=bool(data.get("onApproval", True)),
            on_rejection=bool(data.get("onRejection", True)),
            on_escalation=bool(data.get("onEscalation", True)),
            channels=tuple(data.get("channels", ())),
        )


@dataclass(frozen=True)
class IntegrationDescriptor:
    """Describes the outbound call made by an integration step.

    Attributes:
        provider: Provider name (``teams``, ``slack``, ``outlook``, ``n8n`` or
            ``webhook``). Kept as a plain string so an unknown provider can be
            reported as a failed step instead of a load error.
        action: Free-form action name chosen in the workflow builder.
        config: Provider-specific settings (``workflowId``, ``target``, ``payload``).
            Validated into a typed config at dispatch time.
    """

    provider: str
    action: str = ""
    config: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IntegrationDescriptor:
        return cls(
            provider=data["provider"],
            action=data.get("action", ""),
            config=dict(data.get("config") or {}),
        )


@dataclass(frozen=True)
class WorkflowStep:
    """A single node of a workflow.

    Approval and integration steps share ``conditions``; the remaining fields are
    specific to one of the two types. Approval fields are passed through untouched
    to the approval-assignment subsystem.

    Attributes:
        id: Identifier, unique within the definition.
        name: Display name.
        type: Either ``StepType.APPROVAL`` or ``StepType.INTEGRATION``.
        order: Sequence number; must increase along the list (builders number from 1).
        conditions: All must hold for the step to execute. Empty means always.
        integration: Outbound call descriptor (integration steps only).
    """

    id: str
    name: str
    type: StepType
    order: int = 0
    conditions: tuple[Condition, ...] = ()

    approver_type: str | None = None
    approver_value: str | None = None
    is_parallel: bool = False
    parallel_with: str | None = None
    auto_approve: AutoApprovePolicy | None = None
    allow_delegation: bool = False
    require_comment: bool = False
    escalation: EscalationPolicy | None = None
    notifications: NotificationSettings | None = None

    integration: IntegrationDescriptor | None = None

    @property
    def is_approval(self) -> bool:
        return self.type == StepType.APPROVAL

    @property
    def is_integration(self) -> bool:
        return self.type == StepType.INTEGRATION

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WorkflowStep:
        """Build a step from the workflow builder's camelCase JSON.

        Args:
            data: Step mapping as stored by the workflow builder.

        Returns:
            The parsed step.

        Raises:
            KeyError: If ``id`` or ``type`` is missing.
            ValueError: If ``type`` is not a known step type.
        """
        auto_approve = data.get("autoApprove")
        escalation = data.get("escalation")
        notifications = data.get("notifications")
        integration = data.get("integration")

        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            type=StepType(data["type"]),
            order=int(data.get("order", 0)),
            conditions=tuple(Condition.from_dict(c) for c in data.get("conditions") or ()),
            approver_type=data.get("approverType"),
            approver_value=data.get("approverValue"),
            is_parallel=bool(data.get("isParallel", False)),
            parallel_with=data.get("parallelWith"),
            auto_approve=AutoApprovePolicy.from_dict(auto_approve) if auto_approve else None,
            allow_delegation=bool(data.get("allowDelegation", False)),
            require_comment=bool(data.get("requireComment", False)),
            escalation=EscalationPolicy.from_dict(escalation) if escalation else None,
            notifications=NotificationSettings.from_dict(notifications) if notifications else None,
            integration=IntegrationDescriptor.from_dict(integration) if integration else None,
        )


@dataclass(frozen=True)
class WorkflowSettings:
    """Process-wide policy flags.

    These are consumed by the surrounding approval system. The execution engine
    passes them through and never branches on them.
    """

    allow_parallel_approvals: bool = False
    require_all_parallel: bool = True
    allow_skip_steps: bool = False
    allow_reassignment: bool = True
    expiration_days: int = 30
    on_expiration: str = "escalate"
    notify_requester_on_each_step: bool = True
    allow_withdraw: bool = True
    require_attachments: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WorkflowSettings:
        defaults = cls()
        return cls(
            allow_parallel_approvals=bool(data.get("allowParallelApprovals", defaults.allow_parallel_approvals)),
            require_all_parallel=bool(data.get("requireAllParallel", defaults.require_all_parallel)),
            allow_skip_steps=bool(data.get("allowSkipSteps", defaults.allow_skip_steps)),
            allow_reassignment=bool(data.get("allowReassignment", defaults.allow_reassignment)),
            expiration_days=int(data.get("expirationDays", defaults.expiration_days)),
            on_expiration=data.get("onExpiration", defaults.on_expiration),
            notify_requester_on_each_step=bool(
                data.get("notifyRequesterOnEachStep", defaults.notify_requester_on_each_step)
            ),
            allow_withdraw=bool(data.get("allowWithdraw", defaults.allow_withdraw)),
            require_attachments=bool(data.get("requireAttachments", defaults.require_attachments)),
        )


@dataclass(frozen=True)
class WorkflowDefinition:
    """Declarative, read-only description of an approval process.

    Steps are executed strictly in list order; the index of a step is its execution
    position.

    Attributes:
        id: Unique identifier of the workflow.
        name: Display name.
        steps: Ordered steps.
        settings: Process-wide policy flags.
        description: Optional human-readable description.

    Example:
        >>> definition = WorkflowDefinition(
        ...     id="capex",
        ...     name="Capital expenditure",
        ...     steps=(
        ...         WorkflowStep(id="notify", name="Notify", type=StepType.INTEGRATION, order=0,
        ...                      integration=IntegrationDescriptor(provider="slack",
        ...                                                        config={"target": url})),
        ...         WorkflowStep(id="cfo", name="CFO sign-off", type=StepType.APPROVAL, order=1),
        ...     ),
        ... )
    """

    id: str
    name: str
    steps: tuple[WorkflowStep, ...] = ()
    settings: WorkflowSettings = field(default_factory=WorkflowSettings)
    description: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WorkflowDefinition:
        """Build a definition from its stored JSON representation.

        Missing ``steps`` or ``settings`` fall back to an empty step list and the
        default settings.
        """
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            description=data.get("description"),
            steps=tuple(WorkflowStep.from_dict(s) for s in data.get("steps") or ()),
            settings=WorkflowSettings.from_dict(data.get("settings") or {}),
        )

    def get_step(self, step_id: str) -> WorkflowStep | None:
        """Return the step with the given ID, or None."""
        return next((step for step in self.steps if step.id == step_id), None)

    def validate(self) -> list[str]:
        """Validate the workflow definition for common issues.

        Returns:
            List of validation error messages. Empty list if valid.

        Example:
            >>> errors = definition.validate()
            >>> if errors:
            ...     print("Validation errors:", errors)
        """
        errors: list[str] = []
        seen: set[str] = set()
        previous: WorkflowStep | None = None

        for step in self.steps:
            if step.id in seen:
                errors.append(f"Duplicate step id '{step.id}'")
            seen.add(step.id)

            # 0-based and 1-based numbering are both accepted; position decides execution
            if previous is not None and step.order <= previous.order:
                errors.append(
                    f"Step '{step.id}' has order {step.order} which does not follow "
                    f"order {previous.order} of step '{previous.id}'"
                )
            previous = step

            if step.is_integration and step.integration is None:
                errors.append(f"Integration step '{step.id}' has no integration configuration")

            if step.is_approval and step.integration is not None:
                errors.append(f"Approval step '{step.id}' must not carry an integration configuration")

        return errors
