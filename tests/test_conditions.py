from datetime import datetime, timezone

import pytest

from consolestatus.conditions import (
    ConditionStatus,
    Deployment,
    GenerationStatus,
    OperatorCondition,
    OperatorStatus,
    SyncError,
    find_condition,
    is_sync_error,
    set_condition,
    set_deployment_generation,
    update_condition_fn,
)

T0 = datetime(2020, 1, 1, tzinfo=timezone.utc)
T1 = datetime(2021, 1, 1, tzinfo=timezone.utc)


def test_condition_status_values():
    assert str(ConditionStatus.TRUE) == "True"
    assert ConditionStatus("False") is ConditionStatus.FALSE


def test_is_sync_error():
    assert is_sync_error(SyncError("boom"))
    assert not is_sync_error(ValueError("boom"))
    assert not is_sync_error(None)


def test_find_condition():
    conds = [
        OperatorCondition("ADegraded", ConditionStatus.FALSE),
        OperatorCondition("BAvailable", ConditionStatus.TRUE),
    ]
    assert find_condition(conds, "BAvailable") is conds[1]
    assert find_condition(conds, "Missing") is None


def test_set_condition_appends_with_timestamp():
    conds = []
    set_condition(conds, OperatorCondition("XDegraded", ConditionStatus.TRUE, "R", "M"))
    assert len(conds) == 1
    assert conds[0].status is ConditionStatus.TRUE
    assert conds[0].last_transition_time is not None


def test_set_condition_keeps_time_when_status_unchanged():
    conds = [OperatorCondition("X", ConditionStatus.TRUE, "old", "old", T0)]
    set_condition(conds, OperatorCondition("X", ConditionStatus.TRUE, "new", "msg"))
    assert conds[0].last_transition_time == T0
    assert conds[0].reason == "new"
    assert conds[0].message == "msg"


def test_set_condition_moves_time_on_status_change():
    conds = [OperatorCondition("X", ConditionStatus.TRUE, "", "", T0)]
    set_condition(conds, OperatorCondition("X", ConditionStatus.FALSE, last_transition_time=T1))
    assert conds[0].status is ConditionStatus.FALSE
    assert conds[0].last_transition_time == T1
    assert len(conds) == 1


def test_update_condition_fn_applies_to_status():
    status = OperatorStatus()
    fn = update_condition_fn(OperatorCondition("YAvailable", ConditionStatus.FALSE, "R", "M"))
    fn(status)
    found = find_condition(status.conditions, "YAvailable")
    assert found.status is ConditionStatus.FALSE
    assert found.reason == "R"


def test_set_deployment_generation_adds_and_updates():
    gens = []
    set_deployment_generation(gens, Deployment("console", "ns", 3))
    assert len(gens) == 1
    assert gens[0].group == "apps"
    assert gens[0].resource == "deployments"
    assert gens[0].last_generation == 3
    set_deployment_generation(gens, Deployment("console", "ns", 5))
    assert len(gens) == 1
    assert gens[0].last_generation == 5
    set_deployment_generation(gens, Deployment("downloads", "ns", 1))
    assert [g.name for g in gens] == ["console", "downloads"]


def test_set_deployment_generation_none_is_noop():
    gens = [GenerationStatus("g", "r", "n", "x", 1)]
    set_deployment_generation(gens, None)
    assert gens == [GenerationStatus("g", "r", "n", "x", 1)]


def test_copy_is_independent():
    status = OperatorStatus(observed_generation=2)
    status.conditions.append(OperatorCondition("X", ConditionStatus.TRUE))
    dup = status.copy()
    assert dup == status
    dup.conditions[0].status = ConditionStatus.FALSE
    dup.observed_generation = 9
    assert status.conditions[0].status is ConditionStatus.TRUE
    assert status.observed_generation == 2


def test_sync_error_is_exception():
    with pytest.raises(Exception) as excinfo:
        raise SyncError("x")
    assert str(excinfo.value) == "x"
    assert is_sync_error(excinfo.value)