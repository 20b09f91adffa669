"""
Task domain model.
Represents an approval task attached to a content item, with its assignees.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Callable, Any
from enum import Enum

from app.domain.models.base import ValidationError
from app.domain.models.user import User
from app.domain.models.value_objects import Timestamp


class AssignmentStatus(str, Enum):
    """Approval state of a single assignment."""
    INCOMPLETE = "incomplete"
    COMPLETED = "completed"
    APPROVED = "approved"
    REJECTED = "rejected"
    # Anything the data layer sends that is not one of the above
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value: Any) -> "AssignmentStatus":
        """Read a raw status value; unknown values map to UNSPECIFIED."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.UNSPECIFIED


# Target statuses an assignee may request from a pending assignment
REQUESTABLE_STATUSES = (AssignmentStatus.APPROVED, AssignmentStatus.REJECTED)


AssignmentUpdateHandler = Callable[[str, int, AssignmentStatus], Any]


@dataclass(frozen=True)
class AssignmentUpdateCommand:
    """
    Request to move one assignment out of the pending state.

    Carries the task id, the assignment id and the target status as data so
    the approve/reject affordances can be inspected without being invoked.
    """

    task_id: str
    assignment_id: int
    status: AssignmentStatus

    def __post_init__(self):
        """Validate command after creation."""
        if not self.task_id:
            raise ValidationError("Task ID is required", "task_id")
        if self.status not in REQUESTABLE_STATUSES:
            raise ValidationError(
                f"Cannot request status '{self.status.value}' for an assignment",
                "status"
            )

    def as_args(self) -> Tuple[str, int, AssignmentStatus]:
        """Positional arguments for an update handler."""
        return (self.task_id, self.assignment_id, self.status)

    def dispatch(self, handler: AssignmentUpdateHandler) -> Any:
        """Invoke the handler with this command's data."""
        return handler(*self.as_args())

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "task_id": self.task_id,
            "assignment_id": self.assignment_id,
            "status": self.status.value
        }


@dataclass(frozen=True)
class TaskAssignment:
    """One assignee's approval record within a task."""

    id: int
    user: User
    status: AssignmentStatus = AssignmentStatus.INCOMPLETE

    @property
    def is_pending(self) -> bool:
        return self.status == AssignmentStatus.INCOMPLETE


@dataclass(frozen=True)
class TaskPermissions:
    """Capability flags for the viewer on this task and its message."""

    comment_delete: bool = False
    comment_edit: bool = False
    task_edit: bool = False
    task_delete: bool = False


@dataclass(frozen=True)
class ActionItemError:
    """Communication error reported for a task by the data layer."""

    title: str
    message: str
    action_text: Optional[str] = None


@dataclass(frozen=True)
class Task:
    """
    Task entity.
    Immutable for the duration of a render; a new instance is supplied by the
    data layer after any change is acknowledged.
    """

    # Required fields
    id: str
    created_at: Timestamp
    created_by: User

    # Message
    message: str = ""
    translated_tagged_message: Optional[str] = None

    # Approval
    assignees: Tuple[TaskAssignment, ...] = field(default_factory=tuple)
    due_at: Optional[Timestamp] = None

    # Viewer capabilities and state
    permissions: TaskPermissions = field(default_factory=TaskPermissions)
    error: Optional[ActionItemError] = None

    def __post_init__(self):
        """Validate task after creation."""
        if not self.id:
            raise ValidationError("Task ID is required", "id")
        if self.created_by is None:
            raise ValidationError("Task author is required", "created_by")

    @property
    def has_error(self) -> bool:
        return self.error is not None

