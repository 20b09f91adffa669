"""
Task view mapper for converting request DTOs into domain records.
"""

from typing import Optional

from app.application.dto.task_view_dto import (
    RenderTaskRequestDTO,
    TaskDTO,
    TaskAssignmentDTO,
    UserDTO,
)
from app.domain.models.task import (
    Task,
    TaskAssignment,
    TaskPermissions,
    ActionItemError,
    AssignmentStatus,
    AssignmentUpdateHandler,
)
from app.domain.models.user import User
from app.domain.models.value_objects import Timestamp
from app.domain.services.task_view_service import (
    TaskViewProps,
    TaskViewHandlers,
    InputState,
    Translations,
    AvatarUrlResolver,
)


class TaskViewMapper:
    """Maps render request DTOs to TaskViewProps."""

    def user_to_domain(self, dto: UserDTO) -> User:
        """Convert UserDTO to User."""
        return User(
            id=dto.id,
            name=dto.name,
            avatar_url=dto.avatar_url,
            email=dto.email
        )

    def assignment_to_domain(self, dto: TaskAssignmentDTO) -> TaskAssignment:
        """Convert TaskAssignmentDTO to TaskAssignment."""
        return TaskAssignment(
            id=dto.id,
            user=self.user_to_domain(dto.user),
            status=AssignmentStatus.parse(dto.status)
        )

    def task_to_domain(self, dto: TaskDTO) -> Task:
        """Convert TaskDTO to Task."""
        permissions = TaskPermissions()
        if dto.permissions is not None:
            permissions = TaskPermissions(**dto.permissions.model_dump())

        error = None
        if dto.error is not None:
            error = ActionItemError(
                title=dto.error.title,
                message=dto.error.message,
                action_text=dto.error.action_text
            )

        return Task(
            id=dto.id,
            created_at=Timestamp(dto.created_at),
            created_by=self.user_to_domain(dto.created_by),
            message=dto.message,
            translated_tagged_message=dto.translated_tagged_message,
            assignees=tuple(self.assignment_to_domain(a) for a in dto.assignees),
            due_at=Timestamp(dto.due_at) if dto.due_at is not None else None,
            permissions=permissions,
            error=error
        )

    def request_to_props(
        self,
        dto: RenderTaskRequestDTO,
        on_task_assignment_update: Optional[AssignmentUpdateHandler] = None,
        get_avatar_url: Optional[AvatarUrlResolver] = None
    ) -> TaskViewProps:
        """
        Convert a render request to view props.

        The update handler is only attached when the request enables actions.
        """
        return TaskViewProps(
            task=self.task_to_domain(dto.task),
            current_user=self.user_to_domain(dto.current_user),
            is_pending=dto.is_pending,
            handlers=TaskViewHandlers(
                comments=dto.handlers.get("comments"),
                tasks=dto.handlers.get("tasks"),
                contacts=dto.handlers.get("contacts"),
                versions=dto.handlers.get("versions")
            ),
            input_state=InputState(
                is_disabled=dto.input_state.is_disabled,
                current_user_id=dto.input_state.current_user_id
            ),
            translations=Translations(
                translation_enabled=dto.translations.translation_enabled
            ),
            on_task_assignment_update=on_task_assignment_update if dto.actions_enabled else None,
            get_avatar_url=get_avatar_url
        )
