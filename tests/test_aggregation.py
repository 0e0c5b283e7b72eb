from __future__ import annotations

import pytest

from pyweelo.aggregation import AssignmentAction, aggregate_assignment_statuses, allowed_action
from pyweelo.models.assignment import DriverAssignment, DriverResponseStatus


def _item(driver_id: str, status: str) -> DriverAssignment:
    return DriverAssignment.model_validate({"driverId": driver_id, "vehicleId": f"v-{driver_id}", "status": status})


def test_counts_and_actions() -> None:
    summary = aggregate_assignment_statuses(
        [
            _item("d1", "accepted"),
            _item("d2", "pending"),
            _item("d3", "declined"),
            _item("d4", "accepted"),
        ]
    )

    assert (summary.accepted_count, summary.pending_count, summary.declined_count) == (2, 1, 1)
    assert summary.total == 4
    assert summary.progress == 0.5
    assert [item.action for item in summary.actions] == [
        AssignmentAction.TRACK,
        None,
        AssignmentAction.REASSIGN,
        AssignmentAction.TRACK,
    ]
    assert [a.driver_id for a in summary.trackable] == ["d1", "d4"]
    assert [a.driver_id for a in summary.reassignable] == ["d3"]


def test_empty_input() -> None:
    summary = aggregate_assignment_statuses([])

    assert summary.total == 0
    assert summary.accepted_count == summary.pending_count == summary.declined_count == 0
    assert summary.progress == 0.0
    assert summary.actions == ()


@pytest.mark.parametrize(
    "statuses",
    [
        ["accepted"],
        ["expired", "timeout", "cancelled"],
        ["driver_accepted", "mystery", "pending", "DECLINED"],
    ],
)
def test_partition_covers_every_item(statuses: list[str]) -> None:
    items = [_item(f"d{i}", status) for i, status in enumerate(statuses)]
    summary = aggregate_assignment_statuses(items)

    assert summary.accepted_count + summary.pending_count + summary.declined_count == summary.total == len(items)


def test_allowed_action_per_status() -> None:
    assert allowed_action(DriverResponseStatus.DECLINED) is AssignmentAction.REASSIGN
    assert allowed_action(DriverResponseStatus.ACCEPTED) is AssignmentAction.TRACK
    assert allowed_action(DriverResponseStatus.PENDING) is None
