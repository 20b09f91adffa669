"""
Domain models for the task approval view.
This module exports all domain records and value objects.
"""

# Base classes
from .base import (
    DomainException,
    ValidationError,
    ValueObject
)

# Value Objects
from .value_objects import (
    Timestamp,
    RawTimestamp
)

# Domain records
from .user import User

from .task import (
    Task,
    TaskAssignment,
    TaskPermissions,
    ActionItemError,
    AssignmentStatus,
    AssignmentUpdateCommand,
    AssignmentUpdateHandler,
    REQUESTABLE_STATUSES
)

__all__ = [
    # Base
    "DomainException",
    "ValidationError",
    "ValueObject",

    # Value Objects
    "Timestamp",
    "RawTimestamp",

    # User
    "User",

    # Task
    "Task",
    "TaskAssignment",
    "TaskPermissions",
    "ActionItemError",
    "AssignmentStatus",
    "AssignmentUpdateCommand",
    "AssignmentUpdateHandler",
    "REQUESTABLE_STATUSES",
]
