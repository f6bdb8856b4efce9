"""
Shared pytest fixtures for the task service test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing a fresh schema for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Database setup/teardown
- Test client creation
"""

import os
import pytest
from typing import Any
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from app import create_app, db
from app.models import Task, TaskState
from app.repository import TaskRepository


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The testing profile points at an in-memory SQLite database, so no
    database keys are needed in the environment.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database schema for each test.

    Args:
        app: Flask application fixture.

    Yields:
        The Flask-SQLAlchemy extension bound to the test app.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def repository(app, db_session) -> TaskRepository:
    """Return the repository instance the routes were built with."""
    return app.extensions["task_repository"]


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(db_session):
    """
    Factory fixture for creating Task rows directly in the database.

    Example:
        def test_something(task_factory):
            task = task_factory(name="My Task")
            assert task.id is not None
    """

    def _create_task(
        name: str | None = None,
        state: TaskState = TaskState.ACTIVE,
    ) -> Task:
        task = Task(name=name or fake.sentence(nb_words=3)[:100], state=state.value)
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single live task."""
    return task_factory(name="Sample Task", state=TaskState.ACTIVE)


@pytest.fixture
def deleted_task(task_factory) -> Task:
    """Create a task that is already soft-deleted."""
    return task_factory(name="Deleted Task", state=TaskState.DELETED)


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """
    Create five live tasks in different states plus one deleted task.

    Returns:
        The five live Task instances, in insertion order.
    """
    live = [
        task_factory(name="New Task", state=TaskState.NEW),
        task_factory(name="Active Task", state=TaskState.ACTIVE),
        task_factory(name="Done Task", state=TaskState.DONE),
        task_factory(name="Another Active Task", state=TaskState.ACTIVE),
        task_factory(name="Another New Task", state=TaskState.NEW),
    ]
    task_factory(name="Hidden Task", state=TaskState.DELETED)
    return live


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """Provide a valid task body for POST/PUT requests."""
    return {"name": "Test Task", "state": TaskState.ACTIVE.value}


@pytest.fixture
def api_headers() -> dict[str, str]:
    """Provide common headers for API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
