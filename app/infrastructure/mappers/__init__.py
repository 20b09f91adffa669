"""
Mappers between request DTOs and domain records.
"""

from .task_view_mapper import TaskViewMapper

__all__ = ["TaskViewMapper"]
