"""
Task view use cases.
Rendering a task for a viewer and forwarding the approve/reject requests it raises.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.application.use_cases.base_use_case import QueryUseCase, CommandUseCase
from app.domain.models.base import ValidationError
from app.domain.models.task import (
    AssignmentStatus,
    AssignmentUpdateCommand,
    REQUESTABLE_STATUSES,
)
from app.domain.services.assignment_update_service import AssignmentUpdateService
from app.domain.services.task_renderer import TaskRenderer
from app.domain.services.task_view_service import TaskViewProps, TaskViewModel, build_task_view

logger = logging.getLogger(__name__)


@dataclass
class RenderTaskViewRequest:
    """Request for rendering a task."""

    props: TaskViewProps
    include_markup: bool = True


@dataclass
class RenderedTaskView:
    """View model and, when requested, its markup."""

    view_model: TaskViewModel
    markup: Optional[str] = None


@dataclass
class AssignmentUpdateRequest:
    """Request for moving an assignment out of the pending state."""

    task_id: str
    assignment_id: int
    status: str

    def validate(self) -> None:
        """Validate request data."""
        if AssignmentStatus.parse(self.status) not in REQUESTABLE_STATUSES:
            raise ValidationError(f"Invalid assignment status: {self.status}", "status")


class RenderTaskViewUseCase(QueryUseCase[RenderTaskViewRequest, RenderedTaskView]):
    """Use case for rendering a task view."""

    def __init__(self, renderer: TaskRenderer, timezone_name: str = "UTC"):
        super().__init__()
        self.renderer = renderer
        self.timezone_name = timezone_name

    async def _execute_business_logic(self, request: RenderTaskViewRequest) -> RenderedTaskView:
        view_model = build_task_view(request.props, self.timezone_name)

        markup = None
        if request.include_markup:
            markup = await self.renderer.render(view_model)

        return RenderedTaskView(view_model=view_model, markup=markup)


class RequestAssignmentUpdateUseCase(CommandUseCase[AssignmentUpdateRequest, AssignmentUpdateCommand]):
    """Use case for forwarding an approve/reject request to the update service."""

    def __init__(self, update_service: AssignmentUpdateService):
        super().__init__()
        self.update_service = update_service

    async def _validate_request(self, request: AssignmentUpdateRequest) -> None:
        request.validate()

    async def _execute_command_logic(self, request: AssignmentUpdateRequest) -> AssignmentUpdateCommand:
        command = AssignmentUpdateCommand(
            task_id=request.task_id,
            assignment_id=request.assignment_id,
            status=AssignmentStatus.parse(request.status),
        )
        command.dispatch(self.update_service)

        logger.info(
            f"Requested {command.status.value} for assignment {command.assignment_id} "
            f"of task {command.task_id}"
        )
        return command
