"""
Unit tests for the task template renderer.
"""

import logging
import pytest
from unittest.mock import Mock, AsyncMock

from app.config import settings
from app.domain.models.task import TaskAssignment, TaskPermissions, AssignmentStatus
from app.domain.models.user import User
from app.domain.models.value_objects import Timestamp
from app.domain.services.task_view_service import TaskViewProps, Translations, build_task_view
from app.infrastructure.rendering import TaskTemplateRenderer, TaskRenderError, TemplateAvatarResolver


@pytest.fixture
def renderer():
    return TaskTemplateRenderer()


class TestTaskMarkup:
    """Test cases for the task container and approvers header."""

    @pytest.mark.asyncio
    async def test_container_and_header(self, renderer, make_task, viewer):
        """Test the container class, title and message are rendered."""
        view = build_task_view(TaskViewProps(task=make_task(), current_user=viewer))

        html = await renderer.render(view)

        assert 'class="bcs-task"' in html
        assert 'data-task-id="task-1"' in html
        assert "<strong>Approvers</strong>" in html
        assert "Please review the draft" in html
        assert "3 November 2023" in html

    @pytest.mark.asyncio
    async def test_pending_container(self, renderer, make_task, viewer):
        """Test a pending task carries the pending class."""
        view = build_task_view(TaskViewProps(task=make_task(), current_user=viewer, is_pending=True))

        html = await renderer.render(view)

        assert 'class="bcs-task bcs-is-pending"' in html

    @pytest.mark.asyncio
    async def test_due_date_rendered(self, renderer, make_task, viewer):
        """Test the due date label appears when the task has one."""
        task = make_task(due_at=Timestamp(1700000000000))
        view = build_task_view(TaskViewProps(task=task, current_user=viewer))

        html = await renderer.render(view)

        assert "bcs-task-due-date" in html
        assert "Due: " in html
        assert "14 November 2023" in html

    @pytest.mark.asyncio
    async def test_no_due_date(self, renderer, make_task, viewer):
        """Test no due date label without a due date."""
        view = build_task_view(TaskViewProps(task=make_task(), current_user=viewer))

        html = await renderer.render(view)

        assert "bcs-task-due-date" not in html
        assert "Due: " not in html

    @pytest.mark.asyncio
    async def test_message_is_escaped(self, renderer, make_task, viewer):
        """Test message text is HTML-escaped."""
        task = make_task(message="<script>alert(1)</script>")
        view = build_task_view(TaskViewProps(task=task, current_user=viewer))

        html = await renderer.render(view)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestAssignmentMarkup:
    """Test cases for per-assignee markup."""

    @pytest.mark.asyncio
    async def test_variants_rendered(self, renderer, make_task, viewer, mixed_assignees):
        """Test one block per presentable assignment, none for unknown statuses."""
        view = build_task_view(
            TaskViewProps(task=make_task(assignees=mixed_assignees), current_user=viewer, on_task_assignment_update=Mock())
        )

        html = await renderer.render(view)

        assert html.count("bcs-task-assignment-pending\"") == 1
        assert html.count("bcs-task-assignment-completed\"") == 2
        assert html.count("bcs-task-assignment-rejected\"") == 1
        assert "Donald Knuth" not in html
        assert 'data-assignment-id="14"' not in html

    @pytest.mark.asyncio
    async def test_actions_for_own_pending_assignment(self, renderer, make_task, viewer, mixed_assignees):
        """Test approve and reject buttons carry the bound commands."""
        view = build_task_view(
            TaskViewProps(task=make_task(assignees=mixed_assignees), current_user=viewer, on_task_assignment_update=Mock())
        )

        html = await renderer.render(view)

        assert 'action="/api/v1/tasks/task-1/assignments/10"' in html
        assert 'value="approved"' in html
        assert 'value="rejected"' in html
        assert 'data-status="approved"' in html
        assert ">Approve</button>" in html
        assert ">Reject</button>" in html

    @pytest.mark.asyncio
    async def test_no_actions_for_other_users(self, renderer, make_task, other_user):
        """Test another user's pending assignment has no buttons."""
        assignees = (TaskAssignment(id=10, user=User(id="2", name="Grace Hopper")),)
        view = build_task_view(
            TaskViewProps(task=make_task(assignees=assignees), current_user=other_user, on_task_assignment_update=Mock())
        )

        html = await renderer.render(view)

        assert "bcs-task-assignment-pending" in html
        assert "<form" not in html

    @pytest.mark.asyncio
    async def test_no_actions_without_handler(self, renderer, make_task, viewer):
        """Test no buttons when no update handler is supplied."""
        assignees = (TaskAssignment(id=10, user=viewer),)
        view = build_task_view(TaskViewProps(task=make_task(assignees=assignees), current_user=viewer))

        html = await renderer.render(view)

        assert "<form" not in html

    @pytest.mark.asyncio
    async def test_custom_update_path(self, make_task, viewer):
        """Test the form action follows the configured path."""
        renderer = TaskTemplateRenderer(assignment_update_path="/tasks/{task_id}/{assignment_id}/status")
        assignees = (TaskAssignment(id=7, user=viewer, status=AssignmentStatus.INCOMPLETE),)
        view = build_task_view(
            TaskViewProps(task=make_task(assignees=assignees), current_user=viewer, on_task_assignment_update=Mock())
        )

        html = await renderer.render(view)

        assert 'action="/tasks/task-1/7/status"' in html

    @pytest.mark.asyncio
    async def test_assignee_initials(self, renderer, make_task, viewer):
        """Test assignees without an avatar show initials."""
        assignees = (TaskAssignment(id=12, user=viewer, status=AssignmentStatus.COMPLETED),)
        view = build_task_view(TaskViewProps(task=make_task(assignees=assignees), current_user=viewer))

        html = await renderer.render(view)

        assert ">GH</span>" in html


class TestCommentMarkup:
    """Test cases for the comment block."""

    @pytest.mark.asyncio
    async def test_author_avatar_preferred(self, renderer, make_task, viewer):
        """Test a known avatar URL is used without calling the resolver."""
        resolver = AsyncMock(return_value="https://cdn.example.com/other.png")
        view = build_task_view(TaskViewProps(task=make_task(), current_user=viewer, get_avatar_url=resolver))

        html = await renderer.render(view)

        assert 'src="https://cdn.example.com/ada.png"' in html
        resolver.assert_not_called()

    @pytest.mark.asyncio
    async def test_avatar_resolved(self, renderer, make_task, viewer):
        """Test the resolver supplies the author's avatar."""
        task = make_task(created_by=User(id="8", name="Ken Thompson"))
        resolver = TemplateAvatarResolver("https://cdn.example.com/avatars/{user_id}.png")
        view = build_task_view(TaskViewProps(task=task, current_user=viewer, get_avatar_url=resolver))

        html = await renderer.render(view)

        assert 'src="https://cdn.example.com/avatars/8.png"' in html

    @pytest.mark.asyncio
    async def test_avatar_failure_falls_back_to_initials(self, renderer, make_task, viewer, caplog):
        """Test a failing resolver is logged and initials are shown."""
        task = make_task(created_by=User(id="8", name="Ken Thompson"))
        resolver = AsyncMock(side_effect=RuntimeError("cdn down"))
        view = build_task_view(TaskViewProps(task=task, current_user=viewer, get_avatar_url=resolver))

        with caplog.at_level(logging.WARNING):
            html = await renderer.render(view)

        assert ">KT</span>" in html
        assert "Avatar lookup failed for user 8" in caplog.text

    @pytest.mark.asyncio
    async def test_translated_message(self, renderer, make_task, viewer):
        """Test the translated message replaces the original when enabled."""
        task = make_task(translated_tagged_message="Bitte den Entwurf prüfen")
        view = build_task_view(
            TaskViewProps(task=task, current_user=viewer, translations=Translations(translation_enabled=True))
        )

        html = await renderer.render(view)

        assert "Bitte den Entwurf prüfen" in html
        assert "Please review the draft" not in html

    @pytest.mark.asyncio
    async def test_translation_disabled(self, renderer, make_task, viewer):
        """Test the original message is kept when translation is off."""
        task = make_task(translated_tagged_message="Bitte den Entwurf prüfen")
        view = build_task_view(TaskViewProps(task=task, current_user=viewer))

        html = await renderer.render(view)

        assert "Please review the draft" in html
        assert "Bitte den Entwurf prüfen" not in html

    @pytest.mark.asyncio
    async def test_error_block(self, renderer, make_task, viewer, task_error):
        """Test a reported error is shown and marks the task pending."""
        view = build_task_view(TaskViewProps(task=make_task(error=task_error), current_user=viewer))

        html = await renderer.render(view)

        assert 'role="alert"' in html
        assert "Could not update the task" in html
        assert 'class="bcs-task bcs-is-pending"' in html

    @pytest.mark.asyncio
    async def test_permission_buttons(self, renderer, make_task, viewer):
        """Test edit and delete buttons follow the permissions."""
        task = make_task(permissions=TaskPermissions(comment_edit=True))
        view = build_task_view(TaskViewProps(task=task, current_user=viewer))

        html = await renderer.render(view)

        assert "bcs-comment-edit" in html
        assert "bcs-comment-delete" not in html


class TestRendererSetup:
    """Test cases for renderer construction."""

    def test_filters_registered(self, renderer):
        """Test the custom filters are available to templates."""
        assert renderer.env.filters["initials"]("grace brewster hopper") == "GB"
        assert renderer.env.filters["task_date"](Timestamp(1700000000000)) == "14 November 2023"

    def test_default_update_path_follows_settings(self, renderer):
        """Test the form action defaults to the configured API prefix."""
        assert renderer.assignment_update_path == settings.assignment_update_url
        assert renderer.assignment_update_path.startswith(settings.api_prefix)

    @pytest.mark.asyncio
    async def test_default_renderer_renders(self, make_task, viewer):
        """Test a renderer built with defaults renders a task."""
        view = build_task_view(TaskViewProps(task=make_task(), current_user=viewer))

        html = await TaskTemplateRenderer().render(view)

        assert "bcs-task" in html

    @pytest.mark.asyncio
    async def test_task_id_quoted_in_action(self, renderer, make_task, viewer):
        """Test task ids are URL-quoted in the form action, keeping slashes."""
        assignees = (TaskAssignment(id=10, user=viewer),)
        task = make_task(id="folder/42 draft", assignees=assignees)
        view = build_task_view(TaskViewProps(task=task, current_user=viewer, on_task_assignment_update=Mock()))

        html = await renderer.render(view)

        assert f'action="{settings.api_prefix}/tasks/folder/42%20draft/assignments/10"' in html


class TestRendererErrors:
    """Test cases for renderer failures."""

    @pytest.mark.asyncio
    async def test_missing_template(self, tmp_path, make_task, viewer):
        """Test a missing template raises TaskRenderError."""
        renderer = TaskTemplateRenderer(templates_dir=tmp_path)
        view = build_task_view(TaskViewProps(task=make_task(), current_user=viewer))

        with pytest.raises(TaskRenderError) as exc_info:
            await renderer.render(view)

        assert exc_info.value.code == "RENDER_ERROR"
        assert renderer.template_exists("task.html") is False

    def test_template_exists(self, renderer):
        """Test bundled templates are found."""
        assert renderer.template_exists("task.html") is True
        assert renderer.template_exists("pending_assignment.html") is True


class TestTemplateAvatarResolver:
    """Test cases for TemplateAvatarResolver."""

    @pytest.mark.asyncio
    async def test_formats_template(self):
        resolver = TemplateAvatarResolver("https://cdn.example.com/{user_id}.png")
        assert await resolver("42") == "https://cdn.example.com/42.png"

    @pytest.mark.asyncio
    async def test_empty_template(self):
        assert await TemplateAvatarResolver()("42") is None
