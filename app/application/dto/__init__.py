"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import *
from .task_view_dto import *

__all__ = [
    # Base DTOs
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "HealthCheckResponseDTO",
    "ErrorResponseDTO",

    # Task view DTOs
    "UserDTO",
    "TaskAssignmentDTO",
    "TaskPermissionsDTO",
    "ActionItemErrorDTO",
    "TaskDTO",
    "InputStateDTO",
    "TranslationsDTO",
    "RenderTaskRequestDTO",
    "AssignmentUpdateRequestDTO",
    "AssignmentCommandResponseDTO",
    "AssignmentEntryResponseDTO",
    "TaskViewResponseDTO",
    "AssignmentUpdateResponseDTO",
]
