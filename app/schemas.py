"""
Transfer representations exchanged over the HTTP boundary.

``TaskDTO`` is a detached copy of a task row, produced per request and
never written back. ``TaskListDTO`` wraps one page of tasks together with
the window that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.models import Task, TaskState


class InvalidTaskPayloadError(ValueError):
    """Raised when a request body cannot be read as a task."""


@dataclass(frozen=True)
class TaskDTO:
    name: str
    state: TaskState
    id: int | None = None

    @classmethod
    def from_payload(cls, data: Any) -> "TaskDTO":
        """
        Build a ``TaskDTO`` from a decoded JSON body.

        ``name`` and ``state`` are required; ``id`` is optional and is
        ignored by inserts and updates.

        Raises:
            InvalidTaskPayloadError: If the body is not an object or a field
                is missing or of the wrong type.
            UnknownTaskStateError: If ``state`` is not a known state.
        """
        if not isinstance(data, dict):
            raise InvalidTaskPayloadError("Request body must be a JSON object")

        name = data.get("name")
        if not isinstance(name, str):
            raise InvalidTaskPayloadError("'name' is required and must be a string")

        if "state" not in data:
            raise InvalidTaskPayloadError("'state' is required")
        state = TaskState.parse(data["state"])

        task_id = data.get("id")
        # bool is an int subclass but never a valid id
        if task_id is not None and (isinstance(task_id, bool) or not isinstance(task_id, int)):
            raise InvalidTaskPayloadError("'id' must be an integer")

        return cls(id=task_id, name=name, state=state)

    @classmethod
    def from_model(cls, task: Task) -> "TaskDTO":
        return cls(id=task.id, name=task.name, state=TaskState.parse(task.state))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "state": self.state.value,
        }


@dataclass(frozen=True)
class TaskListDTO:
    limit: int
    offset: int
    data: list[TaskDTO] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of tasks actually returned in this page."""
        return len(self.data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "limit": self.limit,
            "offset": self.offset,
            "count": self.count,
            "data": [task.to_dict() for task in self.data],
        }
