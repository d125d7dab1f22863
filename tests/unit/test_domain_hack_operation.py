"""Tests for the HackOperation lifecycle state machine."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime, timedelta

import pytest

from netwatch.domain import models as dm
from netwatch.domain.enums import HackStatus, HackType
from netwatch.domain.errors import DomainValidationError, InvalidTransition

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)

LEGAL = {
    (HackStatus.PENDING, HackStatus.IN_PROGRESS),
    (HackStatus.PENDING, HackStatus.ABORTED),
    (HackStatus.IN_PROGRESS, HackStatus.SUCCEEDED),
    (HackStatus.IN_PROGRESS, HackStatus.FAILED),
    (HackStatus.IN_PROGRESS, HackStatus.ABORTED),
}


def _operation(status: HackStatus = HackStatus.PENDING, **overrides) -> dm.HackOperation:
    values = {
        "id": dm.HackOperationID("op1"),
        "attacker_id": dm.PlayerID("p1"),
        "target_computer_id": dm.ComputerID("c1"),
        "status": status,
        "hack_type": HackType.STEAL_DATA,
        "tools_used": ("scanner", "cracker"),
        "estimated_duration": 300,
        "started_at": NOW,
        "completion_at": NOW + timedelta(seconds=300),
        "result_data": None,
    }
    values.update(overrides)
    return dm.HackOperation.from_storage(**values)


def test_create_schedules_completion():
    operation = dm.HackOperation.create(
        dm.HackOperationID("op1"),
        dm.PlayerID("p1"),
        dm.ComputerID("c1"),
        HackType.DDOS,
        ["flood"],
        120,
        now=NOW,
    )
    assert operation.status == HackStatus.PENDING
    assert operation.completion_at == NOW + timedelta(seconds=120)
    assert operation.tools_used == ("flood",)
    assert operation.result_data is None


@pytest.mark.parametrize("duration", [0, -5])
def test_duration_must_be_positive(duration):
    with pytest.raises(DomainValidationError, match="Estimated duration must be positive"):
        dm.HackOperation.create(
            dm.HackOperationID("op1"), dm.PlayerID("p1"), dm.ComputerID("c1"),
            HackType.DDOS, [], duration, now=NOW,
        )


def test_completion_must_follow_start():
    with pytest.raises(DomainValidationError, match="Completion time must be after start time"):
        _operation(completion_at=NOW)


def test_attacker_target_id_check_only_fires_on_identical_strings():
    with pytest.raises(DomainValidationError, match="Cannot hack own computer"):
        _operation(attacker_id=dm.PlayerID("same"), target_computer_id=dm.ComputerID("same"))


@pytest.mark.parametrize(
    ("current", "requested"), list(itertools.product(HackStatus, HackStatus))
)
def test_transition_table(current, requested):
    operation = _operation(current)
    assert operation.can_transition(requested) == ((current, requested) in LEGAL)
    if (current, requested) in LEGAL:
        assert operation.transition(requested).status == requested
    else:
        with pytest.raises(InvalidTransition) as excinfo:
            operation.transition(requested)
        assert excinfo.value.current == str(current)
        assert excinfo.value.requested == str(requested)
        assert f"Invalid transition from {current} to {requested}" in str(excinfo.value)


@pytest.mark.parametrize("status", list(HackStatus))
def test_terminal_statuses(status):
    expected = status in {HackStatus.SUCCEEDED, HackStatus.FAILED, HackStatus.ABORTED}
    assert _operation(status).is_terminal() is expected


def test_transition_keeps_result_data_when_none_given():
    operation = _operation(HackStatus.PENDING, result_data={"note": "queued"})
    started = operation.transition(HackStatus.IN_PROGRESS)
    assert started.result_data == {"note": "queued"}

    finished = started.transition(HackStatus.SUCCEEDED, {"loot": 10})
    assert finished.result_data == {"loot": 10}


def test_result_data_is_not_shared_between_versions():
    loot = {"loot": 1}
    running = _operation(HackStatus.PENDING).transition(HackStatus.IN_PROGRESS, loot)
    done = running.transition(HackStatus.SUCCEEDED)

    loot["loot"] = 999
    with pytest.raises(TypeError):
        running.result_data["loot"] = 999  # type: ignore[index]
    assert running.result_data == {"loot": 1}
    assert done.result_data == {"loot": 1}


def test_stored_result_data_is_copied():
    raw = {"roll": 12}
    operation = _operation(HackStatus.FAILED, result_data=raw)
    raw["roll"] = 99
    assert operation.result_data == {"roll": 12}


@pytest.mark.parametrize("duration", [1.5, True, "300"])
def test_duration_must_be_an_integer(duration):
    with pytest.raises(DomainValidationError, match="expected an integer"):
        _operation(estimated_duration=duration)


def test_transition_does_not_mutate_original():
    operation = _operation()
    operation.transition(HackStatus.IN_PROGRESS)
    assert operation.status == HackStatus.PENDING


def test_is_ready_at_and_after_completion():
    operation = _operation()
    assert not operation.is_ready(NOW + timedelta(seconds=299))
    assert operation.is_ready(NOW + timedelta(seconds=300))
    assert operation.is_ready(NOW + timedelta(days=1))


def test_equality_ignores_tool_order():
    assert _operation(tools_used=("a", "b", "b")) == _operation(tools_used=("b", "a", "b"))
    assert _operation(tools_used=("a", "b")) != _operation(tools_used=("a", "b", "b"))
    assert _operation() != _operation(HackStatus.IN_PROGRESS)


def test_operations_are_unhashable():
    with pytest.raises(TypeError):
        hash(_operation())
