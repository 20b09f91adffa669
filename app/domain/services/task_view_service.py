"""
Task view service.
Builds the view model for a task: the message block, the approvers header and
the per-assignee entries. Everything here is a pure function of its input.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Optional, List, Dict, Any, Callable, Awaitable, Mapping
from zoneinfo import ZoneInfo

from app.domain.models.task import (
    Task,
    TaskPermissions,
    ActionItemError,
    AssignmentUpdateHandler,
)
from app.domain.models.user import User
from app.domain.models.value_objects import Timestamp
from app.domain.services.assignment_dispatch import AssignmentEntry, dispatch_assignees

logger = logging.getLogger(__name__)

TASK_CLASS = "bcs-task"
PENDING_CLASS = "bcs-is-pending"

TASKS_FOR_APPROVAL_MESSAGE = "Approvers"
TASK_DUE_DATE_MESSAGE = "Due: "

AvatarUrlResolver = Callable[[str], Awaitable[Optional[str]]]


@dataclass(frozen=True)
class TaskViewHandlers:
    """Handler groups forwarded untouched to the comment block."""

    comments: Optional[Mapping[str, Any]] = None
    tasks: Optional[Mapping[str, Any]] = None
    contacts: Optional[Mapping[str, Any]] = None
    versions: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class InputState:
    """State of the feed's input area."""

    is_disabled: bool = False
    current_user_id: Optional[str] = None


@dataclass(frozen=True)
class Translations:
    """Message translation settings."""

    translation_enabled: bool = False
    on_translate: Optional[Callable[..., Any]] = None


@dataclass(frozen=True)
class TaskViewProps:
    """Everything a task view is rendered from."""

    task: Task
    current_user: User
    is_pending: bool = False
    handlers: TaskViewHandlers = field(default_factory=TaskViewHandlers)
    input_state: InputState = field(default_factory=InputState)
    translations: Translations = field(default_factory=Translations)
    on_task_assignment_update: Optional[AssignmentUpdateHandler] = None
    on_delete: Optional[Callable[..., Any]] = None
    on_edit: Optional[Callable[..., Any]] = None
    get_avatar_url: Optional[AvatarUrlResolver] = None


@dataclass(frozen=True)
class CommentProps:
    """Props handed to the comment block, unmodified from the task props."""

    id: str
    created_at: Timestamp
    created_by: User
    current_user: User
    error: Optional[ActionItemError]
    handlers: TaskViewHandlers
    input_state: InputState
    is_pending: bool
    on_delete: Optional[Callable[..., Any]]
    on_edit: Optional[Callable[..., Any]]
    permissions: TaskPermissions
    tagged_message: str
    translated_tagged_message: Optional[str]
    translations: Translations
    get_avatar_url: Optional[AvatarUrlResolver]


@dataclass(frozen=True)
class DueDateLabel:
    """Due date shown in the approvers header."""

    prefix: str
    value: datetime
    text: str


@dataclass(frozen=True)
class TaskViewModel:
    """Render tree for one task."""

    task_id: str
    container_classes: List[str]
    comment: CommentProps
    approvers_title: str
    due_date: Optional[DueDateLabel]
    assignments: List[AssignmentEntry]

    @property
    def container_class(self) -> str:
        return " ".join(self.container_classes)

    @property
    def is_pending(self) -> bool:
        return PENDING_CLASS in self.container_classes

    def to_dict(self) -> Dict[str, Any]:
        """Serializable summary of the render tree."""
        return {
            "task_id": self.task_id,
            "container_class": self.container_class,
            "is_pending": self.is_pending,
            "approvers_title": self.approvers_title,
            "due_date": self.due_date.text if self.due_date else None,
            "assignments": [
                {
                    "key": entry.key,
                    "variant": entry.variant.value,
                    "assignment_id": entry.assignment_id,
                    "user": entry.user.to_dict(),
                    "should_show_actions": entry.should_show_actions,
                    "approve_command": entry.approve_command.to_dict() if entry.approve_command else None,
                    "reject_command": entry.reject_command.to_dict() if entry.reject_command else None,
                }
                for entry in self.assignments
            ],
        }


def _resolve_timezone(timezone_name: str) -> tzinfo:
    if timezone_name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(timezone_name)


def format_task_date(value: Timestamp, timezone_name: str = "UTC") -> str:
    """Format an instant as day, month name and year, e.g. ``14 November 2023``."""
    moment = value.to_datetime().astimezone(_resolve_timezone(timezone_name))
    return f"{moment.day} {moment.strftime('%B')} {moment.year}"


def container_classes(is_pending: bool, error: Optional[ActionItemError]) -> List[str]:
    """A reported error is presented like an operation still in flight."""
    classes = [TASK_CLASS]
    if is_pending or error is not None:
        classes.append(PENDING_CLASS)
    return classes


def build_due_date(due_at: Optional[Timestamp], timezone_name: str = "UTC") -> Optional[DueDateLabel]:
    if due_at is None:
        return None
    return DueDateLabel(
        prefix=TASK_DUE_DATE_MESSAGE,
        value=due_at.to_datetime(),
        text=format_task_date(due_at, timezone_name),
    )


def build_comment_props(props: TaskViewProps) -> CommentProps:
    task = props.task
    return CommentProps(
        id=task.id,
        created_at=task.created_at,
        created_by=task.created_by,
        current_user=props.current_user,
        error=task.error,
        handlers=props.handlers,
        input_state=props.input_state,
        is_pending=props.is_pending,
        on_delete=props.on_delete,
        on_edit=props.on_edit,
        permissions=task.permissions,
        tagged_message=task.message,
        translated_tagged_message=task.translated_tagged_message,
        translations=props.translations,
        get_avatar_url=props.get_avatar_url,
    )


def build_task_view(props: TaskViewProps, timezone_name: str = "UTC") -> TaskViewModel:
    """
    Build the render tree for a task.

    Args:
        props: Task, viewer and callbacks for this render
        timezone_name: IANA timezone used for the due date

    Returns:
        TaskViewModel with one entry per presentable assignment
    """
    task = props.task

    entries = dispatch_assignees(
        task.id,
        task.assignees,
        props.current_user,
        props.on_task_assignment_update,
    )

    logger.debug(
        f"Built view for task {task.id}: {len(entries)} of {len(task.assignees)} assignments presented"
    )

    return TaskViewModel(
        task_id=task.id,
        container_classes=container_classes(props.is_pending, task.error),
        comment=build_comment_props(props),
        approvers_title=TASKS_FOR_APPROVAL_MESSAGE,
        due_date=build_due_date(task.due_at, timezone_name),
        assignments=entries,
    )
