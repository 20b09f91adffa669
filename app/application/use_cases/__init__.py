"""
Application layer use cases.
Rendering tasks and forwarding assignment updates.
"""

from .base_use_case import *
from .task_view_use_cases import *

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "UseCaseResult",

    # Task view
    "RenderTaskViewRequest",
    "RenderedTaskView",
    "AssignmentUpdateRequest",
    "RenderTaskViewUseCase",
    "RequestAssignmentUpdateUseCase",
]
