"""
Task renderer interface.
Turns a built task view model into markup.
"""

from abc import ABC, abstractmethod

from app.domain.services.task_view_service import TaskViewModel


class TaskRenderer(ABC):
    """
    Task renderer interface.
    Implementations own presentation of the comment block and the assignment
    variants; they may await the avatar resolver carried by the view model.
    """

    @abstractmethod
    async def render(self, view_model: TaskViewModel) -> str:
        """
        Render a task view model to a markup string.
        """
        pass
