"""
Assignment status dispatch.
Maps each assignee's approval status to the variant that presents it and binds
the approve/reject commands for pending assignments.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, List, Iterable, Any

from app.domain.models.task import (
    AssignmentStatus,
    AssignmentUpdateCommand,
    AssignmentUpdateHandler,
    TaskAssignment,
)
from app.domain.models.user import User

logger = logging.getLogger(__name__)


class AssignmentVariant(str, Enum):
    """Presentational variants for an assignment entry."""
    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"


# Approved and completed assignments are presented the same way
STATUS_VARIANTS = {
    AssignmentStatus.INCOMPLETE: AssignmentVariant.PENDING,
    AssignmentStatus.COMPLETED: AssignmentVariant.COMPLETED,
    AssignmentStatus.APPROVED: AssignmentVariant.COMPLETED,
    AssignmentStatus.REJECTED: AssignmentVariant.REJECTED,
    AssignmentStatus.UNSPECIFIED: None,
}


@dataclass(frozen=True)
class AssignmentEntry:
    """One rendered assignee in the approvers list."""

    key: str
    variant: AssignmentVariant
    user: User
    assignment_id: int
    approve_command: Optional[AssignmentUpdateCommand] = None
    reject_command: Optional[AssignmentUpdateCommand] = None
    should_show_actions: bool = False
    on_update: Optional[AssignmentUpdateHandler] = None

    @property
    def is_pending(self) -> bool:
        return self.variant == AssignmentVariant.PENDING

    def on_task_approval(self) -> Any:
        """Request approval of this assignment."""
        return self._trigger(self.approve_command)

    def on_task_reject(self) -> Any:
        """Request rejection of this assignment."""
        return self._trigger(self.reject_command)

    def _trigger(self, command: Optional[AssignmentUpdateCommand]) -> Any:
        if command is None or self.on_update is None:
            logger.debug(f"Ignoring trigger on assignment {self.assignment_id}: no update handler")
            return None
        return command.dispatch(self.on_update)


def dispatch_assignment(
    task_id: str,
    assignment: TaskAssignment,
    current_user: Optional[User],
    on_update: Optional[AssignmentUpdateHandler] = None
) -> Optional[AssignmentEntry]:
    """
    Select the variant for a single assignment.

    Returns None when the status has no visual representation.
    """
    status = AssignmentStatus.parse(assignment.status)
    variant = STATUS_VARIANTS[status]
    assignee = assignment.user

    if variant is None:
        logger.debug(
            f"Skipping assignment {assignment.id} of task {task_id}: "
            f"unrecognized status {assignment.status!r}"
        )
        return None

    if variant != AssignmentVariant.PENDING:
        return AssignmentEntry(
            key=assignee.id,
            variant=variant,
            user=assignee,
            assignment_id=assignment.id,
        )

    return AssignmentEntry(
        key=assignee.id,
        variant=variant,
        user=assignee,
        assignment_id=assignment.id,
        approve_command=AssignmentUpdateCommand(task_id, assignment.id, AssignmentStatus.APPROVED),
        reject_command=AssignmentUpdateCommand(task_id, assignment.id, AssignmentStatus.REJECTED),
        should_show_actions=on_update is not None and assignee.is_same_user(current_user),
        on_update=on_update,
    )


def dispatch_assignees(
    task_id: str,
    assignees: Iterable[TaskAssignment],
    current_user: Optional[User],
    on_update: Optional[AssignmentUpdateHandler] = None
) -> List[AssignmentEntry]:
    """
    Build the approvers list in assignee order.

    Entries are keyed by user id; when two assignments share a user id only
    the first one is kept.
    """
    entries: List[AssignmentEntry] = []
    seen_keys = set()

    for assignment in assignees:
        entry = dispatch_assignment(task_id, assignment, current_user, on_update)
        if entry is None:
            continue

        if entry.key in seen_keys:
            logger.warning(
                f"Task {task_id} has more than one assignment for user {entry.key}; "
                f"dropping assignment {entry.assignment_id}"
            )
            continue

        seen_keys.add(entry.key)
        entries.append(entry)

    return entries
