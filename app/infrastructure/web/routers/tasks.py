"""
Task view router.
Renders tasks for a viewer and accepts the approve/reject requests they raise.
"""

from functools import lru_cache
from typing import Annotated, Union
from fastapi import APIRouter, Depends, HTTPException, Request, status, Query
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse
from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.application.dto.task_view_dto import (
    RenderTaskRequestDTO,
    TaskViewResponseDTO,
    AssignmentUpdateRequestDTO,
    AssignmentUpdateResponseDTO,
    AssignmentCommandResponseDTO,
)
from app.application.use_cases.base_use_case import UseCaseResult
from app.application.use_cases.task_view_use_cases import (
    RenderTaskViewRequest,
    RenderTaskViewUseCase,
    AssignmentUpdateRequest,
    RequestAssignmentUpdateUseCase,
)
from app.domain.models.base import ValidationError
from app.domain.services.assignment_update_service import AssignmentUpdateService
from app.domain.services.task_renderer import TaskRenderer
from app.infrastructure.handlers import LoggingAssignmentUpdateService
from app.infrastructure.mappers import TaskViewMapper
from app.infrastructure.rendering import TaskTemplateRenderer, TemplateAvatarResolver


router = APIRouter()


@lru_cache()
def get_task_renderer() -> TaskTemplateRenderer:
    """Dependency to get the task renderer."""
    return TaskTemplateRenderer(
        timezone_name=settings.date_timezone,
        assignment_update_path=settings.assignment_update_url
    )


@lru_cache()
def get_assignment_update_service() -> AssignmentUpdateService:
    """Dependency to get the assignment update service."""
    return LoggingAssignmentUpdateService()


def get_avatar_resolver() -> TemplateAvatarResolver:
    """Dependency to get the avatar URL resolver."""
    return TemplateAvatarResolver(settings.avatar_url_template)


def get_task_view_mapper() -> TaskViewMapper:
    """Dependency to get the task view mapper."""
    return TaskViewMapper()


async def get_assignment_update_request(request: Request) -> AssignmentUpdateRequestDTO:
    """
    Dependency to read the requested status.

    Rendered tasks submit their approve/reject buttons as form data; API
    clients send JSON.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        payload = await request.json()
    else:
        payload = dict(await request.form())

    try:
        return AssignmentUpdateRequestDTO.model_validate(payload)
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def raise_for_result(result: UseCaseResult) -> None:
    """Translate a failed use case result into an HTTP error."""
    if result.success:
        return
    if result.error_code == "VALIDATION_ERROR":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.error
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=result.error or "Task could not be rendered"
    )


@router.post(
    "/render",
    response_model=None,
    responses={200: {"content": {"text/html": {}}}}
)
async def render_task(
    request: RenderTaskRequestDTO,
    renderer: Annotated[TaskRenderer, Depends(get_task_renderer)],
    update_service: Annotated[AssignmentUpdateService, Depends(get_assignment_update_service)],
    avatar_resolver: Annotated[TemplateAvatarResolver, Depends(get_avatar_resolver)],
    mapper: Annotated[TaskViewMapper, Depends(get_task_view_mapper)],
    output: str = Query("html", alias="format", pattern="^(html|json)$", description="Response format")
) -> Union[HTMLResponse, TaskViewResponseDTO]:
    """
    Render a task for the current viewer.

    - **task**: Task with its message, author, due date and assignees
    - **current_user**: Viewer; only they see actions on their own pending assignment
    - **is_pending**: Whether an operation on the task is in flight
    - **actions_enabled**: Whether approve/reject can be requested from this view
    - **format**: `html` (default) for markup, `json` for the view model
    """
    try:
        props = mapper.request_to_props(
            request,
            on_task_assignment_update=update_service,
            get_avatar_url=avatar_resolver
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    use_case = RenderTaskViewUseCase(renderer, settings.date_timezone)
    result = await use_case.execute(
        RenderTaskViewRequest(props=props, include_markup=output == "html")
    )
    raise_for_result(result)

    if output == "json":
        return TaskViewResponseDTO.from_view_model(result.data.view_model)
    return HTMLResponse(content=result.data.markup)


@router.post(
    "/{task_id:path}/assignments/{assignment_id}",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=AssignmentUpdateResponseDTO
)
async def request_assignment_update(
    task_id: str,
    assignment_id: int,
    request: Annotated[AssignmentUpdateRequestDTO, Depends(get_assignment_update_request)],
    update_service: Annotated[AssignmentUpdateService, Depends(get_assignment_update_service)]
):
    """
    Request approval or rejection of a pending assignment.

    - **status**: `approved` or `rejected`, as JSON or as the submitted form field

    The change itself is applied by the data layer; this only forwards it.
    """
    use_case = RequestAssignmentUpdateUseCase(update_service)
    result = await use_case.execute(
        AssignmentUpdateRequest(task_id=task_id, assignment_id=assignment_id, status=request.status)
    )
    raise_for_result(result)

    return AssignmentUpdateResponseDTO(
        command=AssignmentCommandResponseDTO(**result.data.to_dict())
    )
