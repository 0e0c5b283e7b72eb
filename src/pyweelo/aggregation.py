"""Summary counts and allowed actions for a trip assignment.

Pure functions: no I/O, deterministic for a given input.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from pyweelo.models.assignment import DriverAssignment, DriverResponseStatus


class AssignmentAction(StrEnum):
    REASSIGN = "reassign"
    TRACK = "track"


_ACTIONS: dict[DriverResponseStatus, AssignmentAction | None] = {
    DriverResponseStatus.DECLINED: AssignmentAction.REASSIGN,
    DriverResponseStatus.ACCEPTED: AssignmentAction.TRACK,
    DriverResponseStatus.PENDING: None,
}


def allowed_action(status: DriverResponseStatus) -> AssignmentAction | None:
    """Return the UI action a sub-assignment allows.

    Declined pairings may be reassigned, accepted drivers may be tracked,
    pending ones only show as awaiting a response (``None``).
    """
    return _ACTIONS[status]


@dataclass(frozen=True, slots=True)
class SubAssignmentAction:
    assignment: DriverAssignment
    action: AssignmentAction | None


@dataclass(frozen=True, slots=True)
class AssignmentSummary:
    accepted_count: int
    pending_count: int
    declined_count: int
    total: int
    actions: tuple[SubAssignmentAction, ...] = ()

    @property
    def progress(self) -> float:
        """Accepted share of all sub-assignments, 0.0 when there are none."""
        if self.total == 0:
            return 0.0
        return self.accepted_count / self.total

    @property
    def reassignable(self) -> tuple[DriverAssignment, ...]:
        return tuple(item.assignment for item in self.actions if item.action is AssignmentAction.REASSIGN)

    @property
    def trackable(self) -> tuple[DriverAssignment, ...]:
        return tuple(item.assignment for item in self.actions if item.action is AssignmentAction.TRACK)


def aggregate_assignment_statuses(sub_assignments: Iterable[DriverAssignment]) -> AssignmentSummary:
    """Partition *sub_assignments* by status and attach per-item actions.

    ``accepted_count + pending_count + declined_count == total`` for any
    input, including an empty one.
    """
    counts = {status: 0 for status in DriverResponseStatus}
    actions: list[SubAssignmentAction] = []
    for item in sub_assignments:
        counts[item.status] += 1
        actions.append(SubAssignmentAction(assignment=item, action=allowed_action(item.status)))

    return AssignmentSummary(
        accepted_count=counts[DriverResponseStatus.ACCEPTED],
        pending_count=counts[DriverResponseStatus.PENDING],
        declined_count=counts[DriverResponseStatus.DECLINED],
        total=len(actions),
        actions=tuple(actions),
    )
