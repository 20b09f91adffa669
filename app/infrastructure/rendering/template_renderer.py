"""
Task template renderer.
Renders task view models to HTML using Jinja2 templates.
"""

import logging
from typing import Optional
from pathlib import Path
from urllib.parse import quote
from jinja2 import Environment, FileSystemLoader, TemplateError

from app.config import settings
from app.domain.models.base import DomainException
from app.domain.models.task import AssignmentUpdateCommand
from app.domain.models.user import User
from app.domain.models.value_objects import Timestamp
from app.domain.services.task_renderer import TaskRenderer
from app.domain.services.task_view_service import AvatarUrlResolver, TaskViewModel, format_task_date

logger = logging.getLogger(__name__)


class TaskRenderError(DomainException):
    """Exception raised when a task template cannot be rendered."""

    def __init__(self, message: str):
        super().__init__(message, "RENDER_ERROR")


class TaskTemplateRenderer(TaskRenderer):
    """Loads and renders task templates using Jinja2."""

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        timezone_name: str = "UTC",
        assignment_update_path: Optional[str] = None
    ):
        """Initialize renderer with the task templates directory."""
        self.templates_dir = templates_dir or (Path(__file__).parent / "templates")
        self.timezone_name = timezone_name
        self.assignment_update_path = assignment_update_path or settings.assignment_update_url

        # Async so the comment block can await the avatar resolver
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            enable_async=True
        )

        self._register_filters()
        self._register_globals()

    def _register_filters(self):
        """Register custom Jinja2 filters for task templates."""

        def task_date(value: Timestamp) -> str:
            """Format a timestamp as day, month name and year."""
            return format_task_date(value, self.timezone_name)

        def initials(value: str) -> str:
            """Initials of a display name, at most two letters."""
            parts = [part for part in str(value or "").split() if part]
            return "".join(part[0].upper() for part in parts[:2])

        self.env.filters["task_date"] = task_date
        self.env.filters["initials"] = initials

    def _register_globals(self):
        """Register helpers callable from task templates."""

        def update_path(command: AssignmentUpdateCommand) -> str:
            """Form action for an approve/reject command."""
            return self.assignment_update_path.format(
                task_id=quote(command.task_id, safe="/"),
                assignment_id=command.assignment_id
            )

        async def avatar_for(resolver: Optional[AvatarUrlResolver], user: User) -> Optional[str]:
            """Avatar URL for a user, resolved through the forwarded resolver."""
            if user.avatar_url:
                return user.avatar_url
            if resolver is None:
                return None
            try:
                return await resolver(user.id)
            except Exception as e:
                logger.warning(f"Avatar lookup failed for user {user.id}: {str(e)}")
                return None

        self.env.globals["update_path"] = update_path
        self.env.globals["avatar_for"] = avatar_for

    async def render(self, view_model: TaskViewModel) -> str:
        """
        Render a task view model.

        Args:
            view_model: Built task view

        Returns:
            Rendered HTML fragment

        Raises:
            TaskRenderError: If a template is missing or fails to render
        """
        try:
            template = self.env.get_template("task.html")
            rendered = await template.render_async(view=view_model)

            logger.debug(f"Rendered task {view_model.task_id}")
            return rendered

        except TemplateError as e:
            logger.error(f"Failed to render task {view_model.task_id}: {str(e)}")
            raise TaskRenderError(f"Failed to render task {view_model.task_id}: {str(e)}") from e

    def template_exists(self, template_name: str) -> bool:
        """Check if template file exists."""
        template_path = self.templates_dir / template_name
        return template_path.exists()
