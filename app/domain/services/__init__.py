"""
Domain services for the task approval view.
This module exports the status dispatch and view building logic.
"""

from .assignment_dispatch import (
    AssignmentVariant,
    AssignmentEntry,
    dispatch_assignment,
    dispatch_assignees,
)
from .task_view_service import (
    TaskViewProps,
    TaskViewModel,
    TaskViewHandlers,
    CommentProps,
    DueDateLabel,
    InputState,
    Translations,
    AvatarUrlResolver,
    build_task_view,
    format_task_date,
)
from .task_renderer import TaskRenderer
from .assignment_update_service import AssignmentUpdateService

__all__ = [
    "AssignmentVariant",
    "AssignmentEntry",
    "dispatch_assignment",
    "dispatch_assignees",
    "TaskViewProps",
    "TaskViewModel",
    "TaskViewHandlers",
    "CommentProps",
    "DueDateLabel",
    "InputState",
    "Translations",
    "AvatarUrlResolver",
    "build_task_view",
    "format_task_date",
    "TaskRenderer",
    "AssignmentUpdateService",
]
