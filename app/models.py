"""
Database models for the task service.

This module defines the SQLAlchemy table mapping for tasks and the closed
enumeration of task states. Deletion is a state transition to
``TaskState.DELETED``; rows are never physically removed.
"""

from __future__ import annotations

from enum import Enum

from app import db


class UnknownTaskStateError(ValueError):
    """Raised when a value does not name a known task state."""

    def __init__(self, value: object) -> None:
        valid_states = [s.value for s in TaskState]
        super().__init__(f"Unknown task state {value!r}. Must be one of: {valid_states}")
        self.value = value


class TaskState(str, Enum):
    """Enumeration of possible task states, stored as their name."""

    NEW = "NEW"
    ACTIVE = "ACTIVE"
    DONE = "DONE"
    DELETED = "DELETED"

    @classmethod
    def parse(cls, value: object) -> "TaskState":
        """
        Convert a stored or transmitted value into a ``TaskState``.

        Raises:
            UnknownTaskStateError: If ``value`` is not one of the declared names.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownTaskStateError(value) from None


class Task(db.Model):
    """
    Task row.

    Attributes:
        id: System-assigned unique identifier.
        name: Task name.
        state: ``TaskState`` value stored as text.
    """

    __tablename__ = "tasks"

    id: int = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name: str = db.Column(db.String(100), nullable=False)
    state: str = db.Column(db.String(100), nullable=False)

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.name} [{self.state}]>"
