"""
Outbound handlers for requests raised from rendered tasks.
"""

from .assignment_update_handler import LoggingAssignmentUpdateService

__all__ = ["LoggingAssignmentUpdateService"]
