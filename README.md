# consolestatus

Helpers for keeping an operator's status conditions up to date.

Each condition is named by a category prefix plus one of the standard
suffixes: `Degraded`, `Progressing`, `Available` or `Upgradeable`. Passing an
error sets the condition to its unhappy state and uses the error text as the
message; passing `None` clears it. `Available` and `Upgradeable` are the
inverse of `Degraded` and `Progressing`: they are `True` when there is no
error.

## Install

```
pip install .
```

## Status records

`consolestatus.conditions` holds the data the helpers work on:

- `OperatorStatus`: observed generation, conditions, version, ready replicas
  and generations. `copy()` returns a deep copy.
- `OperatorCondition`: type, `ConditionStatus` (`TRUE`, `FALSE`, `UNKNOWN`),
  reason, message and last transition time.
- `GenerationStatus` and `Deployment`: used to record the last deployment
  generation the operator acted on.
- `SyncError`: an exception type for transient sync failures;
  `is_sync_error(err)` tells whether an error is one.

It also has the functions that edit a status in place:

- `find_condition(conditions, condition_type)` returns the condition of that
  type, or `None`.
- `set_condition(conditions, condition)` adds the condition or updates the
  existing one. The transition time moves only when the status changes;
  reason and message always follow the new condition.
- `update_condition_fn(condition)` returns an update function that calls
  `set_condition` on a status.
- `set_deployment_generation(generations, deployment)` records the
  deployment's generation under group `apps`, resource `deployments`; a
  `None` deployment is ignored.

## Building conditions

```python
from consolestatus.status import handle_degraded, handle_available

mark_route_degraded = handle_degraded("RouteStatus", "FailedHost", RuntimeError("route not reachable"))
mark_available = handle_available("Deployment", "InsufficientReplicas", None)
```

Each of `handle_degraded`, `handle_progressing`, `handle_available` and
`handle_upgradable` returns an update function that applies the condition to
an `OperatorStatus`. When an error is given, it is also logged at error level.

`handle_progressing_or_degraded` returns two update functions. A `SyncError`
is reported as `Progressing` and clears `Degraded`; any other error is
reported as `Degraded` and clears `Progressing`.

## Collecting and flushing

`OperatorClient` keeps an operator's spec, status and resource version in
memory. `get_operator_state()` returns the spec, a copy of the status and the
resource version. `update_operator_status(resource_version, status)` stores a
copy of the status and increments the resource version; it raises
`ValueError` if the given resource version is stale.

`update_status(client, *funcs)` applies the update functions to a copy of the
current status and writes it back only when something changed. It returns the
resulting status and whether it was written.

`StatusHandler` gathers update functions and writes them in one go:

```python
from consolestatus.conditions import Deployment, SyncError
from consolestatus.status import OperatorClient, StatusHandler, handle_progressing_or_degraded

client = OperatorClient()
err = SyncError("config map not applied yet")

handler = StatusHandler(client)
handler.add_conditions(handle_progressing_or_degraded("ConfigMapSync", "FailedApply", err))
handler.update_observed_generation(7)
handler.update_ready_replicas(2)
handler.update_deployment_generation(Deployment(name="console", namespace="console-ns", generation=3))

# Writes the status; errors from the write are raised, otherwise `err` is returned.
result = handler.flush_and_return(err)
```

## Logging

`format_condition` renders a condition as one line, for example
`Status.Condition.RouteStatusDegraded: True | (FailedHost) route not reachable`.
Reason and message are only shown when both are set. `log_conditions` writes a
header line and then each condition at debug level.

## What it does not do

The package does not talk to a cluster. `OperatorClient` is an in-memory
holder of spec and status; there is no API client, no watch or sync loop, no
command-line tool and no aggregation of conditions onto a cluster-wide
operator resource.

## Tests

```
pip install ".[test]"
pytest
```