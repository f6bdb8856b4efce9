"""
Typed data access for tasks.

``TaskRepository`` is the only place that builds queries against the
``tasks`` table. Every operation runs inside one ``transaction()`` and
treats rows in the ``DELETED`` state as non-existent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models import Task, TaskState
from app.schemas import TaskDTO

logger = logging.getLogger(__name__)

_LIVE = Task.state != TaskState.DELETED.value


class TaskRepository:
    """Task queries bound to one Flask-SQLAlchemy extension instance."""

    def __init__(self, database: SQLAlchemy) -> None:
        self._db = database

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Run a unit of work against the database.

        Commits when the block exits normally; rolls back and re-raises on
        any exception raised inside it.
        """
        session = self._db.session
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise

    def list_active(self, limit: int, offset: int) -> list[TaskDTO]:
        """Return up to ``limit`` live tasks after skipping ``offset`` of them."""
        stmt = select(Task).where(_LIVE).order_by(Task.id).limit(limit).offset(offset)
        with self.transaction() as session:
            return [TaskDTO.from_model(task) for task in session.scalars(stmt)]

    def get_active(self, task_id: int) -> TaskDTO | None:
        """Return the live task with ``task_id``, or ``None``."""
        stmt = select(Task).where(Task.id == task_id, _LIVE)
        with self.transaction() as session:
            task = session.scalars(stmt).first()
            return TaskDTO.from_model(task) if task else None

    def insert(self, name: str, state: TaskState) -> TaskDTO:
        """Insert a task; the state is stored as given, ``DELETED`` included."""
        task = Task(name=name, state=state.value)
        with self.transaction() as session:
            session.add(task)
            session.flush()
            created = TaskDTO.from_model(task)
        logger.info(f"Inserted task {created.id}")
        return created

    def update_active(self, task_id: int, name: str, state: TaskState) -> int:
        """Overwrite name and state of a live task. Returns rows matched."""
        stmt = (
            update(Task)
            .where(Task.id == task_id, _LIVE)
            .values(name=name, state=state.value)
            .execution_options(synchronize_session=False)
        )
        with self.transaction() as session:
            return session.execute(stmt).rowcount

    def soft_delete(self, task_id: int) -> int:
        """Mark a live task as ``DELETED``. Returns rows matched."""
        stmt = (
            update(Task)
            .where(Task.id == task_id, _LIVE)
            .values(state=TaskState.DELETED.value)
            .execution_options(synchronize_session=False)
        )
        with self.transaction() as session:
            return session.execute(stmt).rowcount
