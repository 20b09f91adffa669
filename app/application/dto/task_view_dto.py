"""
Task view DTOs for the application layer.
Data Transfer Objects for rendering a task and requesting assignment updates.
"""

from typing import Optional, List, Dict, Any, Union
from datetime import datetime
from pydantic import Field, ConfigDict, field_validator

from .base_dto import RequestDTO, ResponseDTO


TimestampValue = Union[int, float, datetime, str]


# Nested DTOs
class UserDTO(RequestDTO):
    """DTO for a user record inside a task."""

    # The data layer sends richer user records than the view needs
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1, description="User ID")
    name: str = Field(default="", description="Display name")
    avatar_url: Optional[str] = Field(default=None, description="Avatar URL if already known")
    email: Optional[str] = Field(default=None, description="Email address")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """User ids may arrive as numbers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class TaskAssignmentDTO(RequestDTO):
    """DTO for one assignee of a task."""

    id: int = Field(description="Assignment ID")
    user: UserDTO = Field(description="Assigned user")
    # Kept open: unknown statuses are accepted and simply not presented
    status: str = Field(description="Assignment status")


class TaskPermissionsDTO(RequestDTO):
    """DTO for the viewer's permissions on a task."""

    comment_delete: bool = Field(default=False)
    comment_edit: bool = Field(default=False)
    task_edit: bool = Field(default=False)
    task_delete: bool = Field(default=False)


class ActionItemErrorDTO(RequestDTO):
    """DTO for an error reported on a task."""

    title: str = Field(description="Error title")
    message: str = Field(description="Error message")
    action_text: Optional[str] = Field(default=None, description="Label of the retry action")


class TaskDTO(RequestDTO):
    """DTO for the task being rendered."""

    id: str = Field(min_length=1, description="Task ID")
    created_at: TimestampValue = Field(description="Creation time, epoch ms or ISO-8601")
    created_by: UserDTO = Field(description="Task author")
    due_at: Optional[TimestampValue] = Field(default=None, description="Due time, epoch ms or ISO-8601")
    message: str = Field(default="", description="Raw tagged message")
    translated_tagged_message: Optional[str] = Field(
        default=None,
        alias="translatedTaggedMessage",
        description="Translated tagged message"
    )
    assignees: List[TaskAssignmentDTO] = Field(default_factory=list, description="Assignments in display order")
    permissions: Optional[TaskPermissionsDTO] = Field(default=None, description="Viewer permissions")
    error: Optional[ActionItemErrorDTO] = Field(default=None, description="Reported communication error")

    @field_validator("due_at", mode="before")
    @classmethod
    def blank_due_at(cls, v):
        """An empty string means no due date."""
        if isinstance(v, str) and v.strip() == "":
            return None
        return v


class InputStateDTO(RequestDTO):
    """DTO for the feed input state."""

    is_disabled: bool = Field(default=False)
    current_user_id: Optional[str] = Field(default=None)


class TranslationsDTO(RequestDTO):
    """DTO for translation settings."""

    translation_enabled: bool = Field(default=False)


# Request DTOs
class RenderTaskRequestDTO(RequestDTO):
    """DTO for task render requests."""

    task: TaskDTO = Field(description="Task to render")
    current_user: UserDTO = Field(description="Viewer of the task")
    is_pending: bool = Field(default=False, description="Whether an operation on the task is in flight")
    actions_enabled: bool = Field(
        default=True,
        description="Whether assignment updates can be requested from the rendered view"
    )
    handlers: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Handler groups (comments, tasks, contacts, versions) passed to the comment block"
    )
    input_state: InputStateDTO = Field(default_factory=InputStateDTO)
    translations: TranslationsDTO = Field(default_factory=TranslationsDTO)

    @field_validator("handlers")
    @classmethod
    def validate_handler_groups(cls, v):
        """Only known handler groups are accepted."""
        unknown = set(v) - {"comments", "tasks", "contacts", "versions"}
        if unknown:
            raise ValueError(f"Unknown handler groups: {', '.join(sorted(unknown))}")
        return v


class AssignmentUpdateRequestDTO(RequestDTO):
    """DTO for assignment update requests."""

    status: str = Field(pattern="^(approved|rejected)$", description="Requested status")


# Response DTOs
class AssignmentCommandResponseDTO(ResponseDTO):
    """DTO for a bound approve/reject command."""

    task_id: str
    assignment_id: int
    status: str


class AssignmentEntryResponseDTO(ResponseDTO):
    """DTO for one presented assignee."""

    key: str
    variant: str
    assignment_id: int
    user: Dict[str, Any]
    should_show_actions: bool
    approve_command: Optional[AssignmentCommandResponseDTO] = None
    reject_command: Optional[AssignmentCommandResponseDTO] = None


class TaskViewResponseDTO(ResponseDTO):
    """DTO for the rendered view model."""

    task_id: str
    container_class: str
    is_pending: bool
    approvers_title: str
    due_date: Optional[str] = None
    assignments: List[AssignmentEntryResponseDTO] = Field(default_factory=list)

    @classmethod
    def from_view_model(cls, view_model) -> "TaskViewResponseDTO":
        """Create response from a TaskViewModel."""
        return cls.model_validate(view_model.to_dict())


class AssignmentUpdateResponseDTO(ResponseDTO):
    """DTO for an accepted assignment update request."""

    accepted: bool = True
    command: AssignmentCommandResponseDTO
