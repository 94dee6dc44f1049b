"""Operator status records and the helpers that edit them in place."""

from __future__ import annotations

import copy as _copy
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional

OPERATOR_STATUS_TYPE_AVAILABLE = "Available"
OPERATOR_STATUS_TYPE_PROGRESSING = "Progressing"
OPERATOR_STATUS_TYPE_DEGRADED = "Degraded"
OPERATOR_STATUS_TYPE_UPGRADEABLE = "Upgradeable"

_DEPLOYMENT_GROUP = "apps"
_DEPLOYMENT_RESOURCE = "deployments"


class ConditionStatus(str, Enum):
    """The value a condition can hold."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


@dataclass
class OperatorCondition:
    """A single typed condition reported by the operator."""

    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    last_transition_time: Optional[datetime] = None


@dataclass
class GenerationStatus:
    """The last generation of a managed resource the operator acted on."""

    group: str
    resource: str
    namespace: str
    name: str
    last_generation: int = 0
    hash: str = ""


@dataclass
class Deployment:
    """The parts of a deployment that status tracking needs."""

    name: str
    namespace: str
    generation: int = 0


@dataclass
class OperatorStatus:
    """The status block of the operator configuration."""

    observed_generation: int = 0
    conditions: List[OperatorCondition] = field(default_factory=list)
    version: str = ""
    ready_replicas: int = 0
    generations: List[GenerationStatus] = field(default_factory=list)

    def copy(self) -> "OperatorStatus":
        """Return a deep copy that can be changed without touching this one."""
        return _copy.deepcopy(self)


UpdateStatusFunc = Callable[[OperatorStatus], None]


class SyncError(Exception):
    """A transient failure while syncing; reported as progressing, not degraded."""


def is_sync_error(err: Optional[BaseException]) -> bool:
    """Tell whether ``err`` is a :class:`SyncError`."""
    return isinstance(err, SyncError)


def find_condition(
    conditions: List[OperatorCondition], condition_type: str
) -> Optional[OperatorCondition]:
    """Return the condition of the given type, or None."""
    return next((c for c in conditions if c.type == condition_type), None)


def set_condition(conditions: List[OperatorCondition], condition: OperatorCondition) -> None:
    """Add or update ``condition`` in ``conditions``.

    The transition time only moves when the status changes; reason and
    message always follow the new condition.
    """
    now = datetime.now(timezone.utc)
    existing = find_condition(conditions, condition.type)
    if existing is None:
        added = dataclasses.replace(condition)
        if added.last_transition_time is None:
            added.last_transition_time = now
        conditions.append(added)
        return
    if existing.status != condition.status:
        existing.status = condition.status
        existing.last_transition_time = condition.last_transition_time or now
    existing.reason = condition.reason
    existing.message = condition.message


def update_condition_fn(condition: OperatorCondition) -> UpdateStatusFunc:
    """Return a status update that sets ``condition``."""

    def update(status: OperatorStatus) -> None:
        set_condition(status.conditions, condition)

    return update


def set_deployment_generation(
    generations: List[GenerationStatus], deployment: Optional[Deployment]
) -> None:
    """Record the generation of ``deployment`` in ``generations``."""
    if deployment is None:
        return
    for existing in generations:
        if (
            existing.group == _DEPLOYMENT_GROUP
            and existing.resource == _DEPLOYMENT_RESOURCE
            and existing.namespace == deployment.namespace
            and existing.name == deployment.name
        ):
            existing.last_generation = deployment.generation
            existing.hash = ""
            return
    generations.append(
        GenerationStatus(
            group=_DEPLOYMENT_GROUP,
            resource=_DEPLOYMENT_RESOURCE,
            namespace=deployment.namespace,
            name=deployment.name,
            last_generation=deployment.generation,
        )
    )