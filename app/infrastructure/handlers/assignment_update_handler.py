"""
Assignment update handler.
Default update service: accepts approve/reject requests and reports them in
the application log. The data layer that owns assignments picks changes up
from there and re-supplies the task once applied.
"""

import logging
from typing import Dict, Any

from app.domain.models.task import AssignmentStatus
from app.domain.services.assignment_update_service import AssignmentUpdateService

logger = logging.getLogger(__name__)


class LoggingAssignmentUpdateService(AssignmentUpdateService):
    """Logs every requested assignment transition."""

    def request_update(self, task_id: str, assignment_id: int, status: AssignmentStatus) -> Dict[str, Any]:
        """Record the request in the log and echo it back."""
        logger.info(
            f"Assignment update requested: task={task_id} assignment={assignment_id} status={status.value}"
        )
        return {
            "task_id": task_id,
            "assignment_id": assignment_id,
            "status": status.value
        }
