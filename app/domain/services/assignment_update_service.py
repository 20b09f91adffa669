"""
Assignment update service interface.
Receives approve/reject requests raised from a rendered task.
"""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.models.task import AssignmentStatus


class AssignmentUpdateService(ABC):
    """
    Assignment update service interface.
    Instances are callable with ``(task_id, assignment_id, status)`` so they
    can be handed to the view as its update handler.
    """

    @abstractmethod
    def request_update(self, task_id: str, assignment_id: int, status: AssignmentStatus) -> Any:
        """
        Request a status change for one assignment.
        The change is owned and applied by the data layer, not here.
        """
        pass

    def __call__(self, task_id: str, assignment_id: int, status: AssignmentStatus) -> Any:
        return self.request_update(task_id, assignment_id, status)
