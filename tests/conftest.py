"""
Shared fixtures for task view tests.
"""

import pytest

from app.domain.models.task import (
    Task,
    TaskAssignment,
    TaskPermissions,
    ActionItemError,
    AssignmentStatus,
)
from app.domain.models.user import User
from app.domain.models.value_objects import Timestamp


@pytest.fixture
def author():
    return User(id="1", name="Ada Lovelace", avatar_url="https://cdn.example.com/ada.png")


@pytest.fixture
def viewer():
    return User(id="2", name="Grace Hopper")


@pytest.fixture
def other_user():
    return User(id="3", name="Alan Turing")


@pytest.fixture
def make_task(author):
    """Factory for tasks with sensible defaults."""

    def _make_task(**overrides):
        data = {
            "id": "task-1",
            "created_at": Timestamp(1699000000000),
            "created_by": author,
            "message": "Please review the draft",
            "assignees": (),
            "permissions": TaskPermissions(),
        }
        data.update(overrides)
        return Task(**data)

    return _make_task


@pytest.fixture
def mixed_assignees(viewer, other_user):
    """One assignment in every status, including an unknown one."""
    return (
        TaskAssignment(id=10, user=viewer, status=AssignmentStatus.INCOMPLETE),
        TaskAssignment(id=11, user=other_user, status=AssignmentStatus.APPROVED),
        TaskAssignment(id=12, user=User(id="4", name="Edsger Dijkstra"), status=AssignmentStatus.COMPLETED),
        TaskAssignment(id=13, user=User(id="5", name="Barbara Liskov"), status=AssignmentStatus.REJECTED),
        TaskAssignment(id=14, user=User(id="6", name="Donald Knuth"), status=AssignmentStatus.parse("snoozed")),
    )


@pytest.fixture
def task_error():
    return ActionItemError(title="Error", message="Could not update the task")
