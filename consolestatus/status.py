"""Building operator conditions and flushing them to the operator status."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Tuple

from consolestatus.conditions import (
    OPERATOR_STATUS_TYPE_AVAILABLE,
    OPERATOR_STATUS_TYPE_DEGRADED,
    OPERATOR_STATUS_TYPE_PROGRESSING,
    OPERATOR_STATUS_TYPE_UPGRADEABLE,
    ConditionStatus,
    Deployment,
    OperatorCondition,
    OperatorStatus,
    UpdateStatusFunc,
    is_sync_error,
    set_deployment_generation,
    update_condition_fn,
)

logger = logging.getLogger(__name__)


class OperatorClient:
    """Holds the operator spec and status, guarded by a resource version."""

    def __init__(self, spec: Any = None, status: Optional[OperatorStatus] = None,
                 resource_version: str = "1") -> None:
        self.spec = spec
        self.status = status if status is not None else OperatorStatus()
        self.resource_version = resource_version

    def get_operator_state(self) -> Tuple[Any, OperatorStatus, str]:
        return self.spec, self.status.copy(), self.resource_version

    def update_operator_status(self, resource_version: str, status: OperatorStatus) -> OperatorStatus:
        if resource_version != self.resource_version:
            raise ValueError(
                f"resource version {resource_version!r} is stale, current is {self.resource_version!r}"
            )
        self.status = status.copy()
        self.resource_version = str(int(self.resource_version) + 1)
        return self.status.copy()


def _condition_fn(condition_type: str, reason: str, err: Optional[BaseException]) -> UpdateStatusFunc:
    # Available and Upgradeable are the inverse of Degraded and Progressing.
    inverted = condition_type.endswith(
        (OPERATOR_STATUS_TYPE_AVAILABLE, OPERATOR_STATUS_TYPE_UPGRADEABLE)
    )
    status = ConditionStatus.TRUE if (err is not None) != inverted else ConditionStatus.FALSE
    if err is None:
        return update_condition_fn(OperatorCondition(type=condition_type, status=status))
    logger.error("%s %s %s", condition_type, reason, err)
    return update_condition_fn(
        OperatorCondition(type=condition_type, status=status, reason=reason, message=str(err))
    )


def handle_degraded(type_prefix: str, reason: str, err: Optional[BaseException]) -> UpdateStatusFunc:
    return _condition_fn(type_prefix + OPERATOR_STATUS_TYPE_DEGRADED, reason, err)


def handle_progressing(type_prefix: str, reason: str, err: Optional[BaseException]) -> UpdateStatusFunc:
    return _condition_fn(type_prefix + OPERATOR_STATUS_TYPE_PROGRESSING, reason, err)


def handle_available(type_prefix: str, reason: str, err: Optional[BaseException]) -> UpdateStatusFunc:
    return _condition_fn(type_prefix + OPERATOR_STATUS_TYPE_AVAILABLE, reason, err)


def handle_upgradable(type_prefix: str, reason: str, err: Optional[BaseException]) -> UpdateStatusFunc:
    return _condition_fn(type_prefix + OPERATOR_STATUS_TYPE_UPGRADEABLE, reason, err)


def handle_progressing_or_degraded(
    type_prefix: str, reason: str, err: Optional[BaseException]
) -> List[UpdateStatusFunc]:
    """Report a sync error as progressing, any other error as degraded."""
    sync = is_sync_error(err)
    return [
        handle_degraded(type_prefix, reason, None if sync else err),
        handle_progressing(type_prefix, reason, err if sync else None),
    ]


def update_status(client: OperatorClient, *update_funcs: UpdateStatusFunc) -> Tuple[OperatorStatus, bool]:
    """Apply the updates and store the status if it changed; return it and whether it was written."""
    _, old_status, resource_version = client.get_operator_state()
    new_status = old_status.copy()
    for update in update_funcs:
        update(new_status)
    if new_status == old_status:
        return old_status, False
    return client.update_operator_status(resource_version, new_status), True


def format_condition(condition: OperatorCondition) -> str:
    line = f"Status.Condition.{condition.type}: {condition.status}"
    if condition.message and condition.reason:
        line += f" | ({condition.reason}) {condition.message}"
    return line


def log_conditions(conditions: Iterable[OperatorCondition]) -> None:
    logger.debug("Operator.Status.Conditions")
    for condition in conditions:
        logger.debug(format_condition(condition))


class StatusHandler:
    """Collects status updates and writes them in one go."""

    def __init__(self, client: OperatorClient) -> None:
        self.client = client
        self.status_funcs: List[UpdateStatusFunc] = []

    def add_condition(self, status_func: UpdateStatusFunc) -> None:
        self.status_funcs.append(status_func)

    def add_conditions(self, status_funcs: Iterable[UpdateStatusFunc]) -> None:
        self.status_funcs.extend(status_funcs)

    def flush_and_return(self, return_err: Optional[BaseException]) -> Optional[BaseException]:
        """Write the collected updates, then hand back ``return_err``; write failures are raised."""
        update_status(self.client, *self.status_funcs)
        return return_err

    def update_observed_generation(self, generation: int) -> None:
        self.status_funcs.append(lambda status: setattr(status, "observed_generation", generation))

    def update_ready_replicas(self, replicas: int) -> None:
        self.status_funcs.append(lambda status: setattr(status, "ready_replicas", replicas))

    def update_deployment_generation(self, deployment: Optional[Deployment]) -> None:
        self.status_funcs.append(
            lambda status: set_deployment_generation(status.generations, deployment)
        )