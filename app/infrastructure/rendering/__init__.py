"""
HTML rendering infrastructure.
Jinja2 templates for the task view, its comment block and assignment variants.
"""

from .template_renderer import TaskTemplateRenderer, TaskRenderError
from .avatar_resolver import TemplateAvatarResolver

__all__ = [
    "TaskTemplateRenderer",
    "TaskRenderError",
    "TemplateAvatarResolver"
]
