"""
HTTP endpoints for Task management.

Every handler catches failures at its own boundary: parameter parsing
problems become a 400 with a targeted message, anything else a generic
500 that leaks no detail. Successful reads return JSON transfer
representations; updates and deletes answer with plain text.

Endpoints:
    GET    /ping          - Liveness probe
    GET    /tasks         - List live tasks (limit/offset window)
    GET    /task/<id>     - Get a single live task by ID
    POST   /task          - Create a new task
    PUT    /task/<id>     - Overwrite name and state of a live task
    DELETE /task/<id>     - Soft-delete a live task
"""

from __future__ import annotations

import logging
import re

from flask import Blueprint, Response, current_app, jsonify, request

from app.repository import TaskRepository
from app.schemas import TaskDTO, TaskListDTO

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
MISSED_ID_MESSAGE = "Missed ID"

_INTEGER = re.compile(r"[+-]?\d+")


class QueryParameterError(ValueError):
    """Raised when a numeric query parameter cannot be used."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Wrong value at '{name}' parameter, please use number")
        self.name = name


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def parse_int(raw: str | None, *, bits: int = 32) -> int:
    """
    Parse a base-10 signed integer that fits in ``bits`` bits.

    Task ids are 32-bit; page sizes and offsets may use 64 bits.

    Raises:
        ValueError: If ``raw`` is missing, not an integer literal, or out
            of range.
    """
    if raw is None or not _INTEGER.fullmatch(raw):
        raise ValueError(f"Not an integer: {raw!r}")
    value = int(raw)
    bound = 1 << (bits - 1)
    if not -bound <= value < bound:
        raise ValueError(f"Integer out of {bits}-bit range: {raw!r}")
    return value


def parse_page_parameter(name: str, default: int, minimum: int) -> int:
    """Read an optional integer query parameter no smaller than ``minimum``."""
    raw = request.args.get(name)
    if raw is None:
        return default
    try:
        value = parse_int(raw, bits=64)
    except ValueError:
        raise QueryParameterError(name) from None
    if value < minimum:
        raise QueryParameterError(name)
    return value


def text_response(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype="text/plain")


# -----------------------------------------------------------------------------
# Blueprint Factory
# -----------------------------------------------------------------------------

def create_api_blueprint(repository: TaskRepository) -> Blueprint:
    """
    Build the task blueprint around an explicit repository.

    Args:
        repository: Persistence handle used by every handler.

    Returns:
        Blueprint exposing the task endpoints at the application root.
    """
    api_bp = Blueprint("task_api", __name__)

    @api_bp.route("/ping", methods=["GET"])
    def ping() -> Response:
        return text_response("pong", 200)

    @api_bp.route("/tasks", methods=["GET"])
    def list_tasks() -> Response | tuple[Response, int]:
        """
        List live tasks.

        Query Parameters:
            limit: Maximum number of tasks to return (positive, default 50)
            offset: Number of live tasks to skip (non-negative, default 0)
        """
        logger.info("GET /tasks - Fetching tasks")
        try:
            limit = parse_page_parameter(
                "limit", current_app.config["DEFAULT_PAGE_LIMIT"], minimum=1
            )
            offset = parse_page_parameter(
                "offset", current_app.config["DEFAULT_PAGE_OFFSET"], minimum=0
            )
            page = TaskListDTO(
                limit=limit,
                offset=offset,
                data=repository.list_active(limit, offset),
            )
        except QueryParameterError as exc:
            logger.warning(f"Rejected list request: {exc}")
            return text_response(str(exc), 400)
        except Exception:
            logger.exception("Failed to list tasks")
            return text_response(INTERNAL_ERROR_MESSAGE, 500)

        logger.info(f"Found {page.count} tasks")
        return jsonify(page.to_dict()), 200

    @api_bp.route("/task/<task_id>", methods=["GET"])
    def get_task(task_id: str) -> Response | tuple[Response, int]:
        """
        Get a single live task by ID.

        A missing or soft-deleted task is reported as 400, not 404.
        """
        logger.info(f"GET /task/{task_id} - Fetching task")
        try:
            parsed_id = parse_int(task_id)
        except ValueError:
            logger.warning(f"Rejected task id {task_id!r}")
            return text_response(MISSED_ID_MESSAGE, 400)

        try:
            task = repository.get_active(parsed_id)
        except Exception:
            logger.exception(f"Failed to fetch task {parsed_id}")
            return text_response(INTERNAL_ERROR_MESSAGE, 500)

        if task is None:
            logger.warning(f"Task {parsed_id} not found")
            return text_response(f"Task with ID '{parsed_id}' not found", 400)

        return jsonify(task.to_dict()), 200

    @api_bp.route("/task", methods=["POST"])
    def create_task() -> Response | tuple[Response, int]:
        """
        Create a new task.

        Request Body (JSON):
            name: Task name (required)
            state: Task state (required, one of the TaskState names)
            id: Ignored, the database assigns it

        Any failure, a malformed body included, answers 500.
        """
        logger.info("POST /task - Creating new task")
        try:
            payload = TaskDTO.from_payload(request.get_json(force=True))
            created = repository.insert(payload.name, payload.state)
        except Exception:
            logger.exception("Failed to create task")
            return text_response(INTERNAL_ERROR_MESSAGE, 500)

        logger.info(f"Created task with ID: {created.id}")
        return jsonify(created.to_dict()), 201

    @api_bp.route("/task/<task_id>", methods=["PUT"])
    def update_task(task_id: str) -> Response:
        """
        Overwrite name and state of a live task.

        Reports success even when no live task matched the ID.
        """
        logger.info(f"PUT /task/{task_id} - Updating task")
        try:
            parsed_id = parse_int(task_id)
        except ValueError:
            logger.warning(f"Rejected task id {task_id!r}")
            return text_response(MISSED_ID_MESSAGE, 400)

        try:
            payload = TaskDTO.from_payload(request.get_json(force=True))
            matched = repository.update_active(parsed_id, payload.name, payload.state)
        except Exception:
            logger.exception(f"Failed to update task {parsed_id}")
            return text_response(INTERNAL_ERROR_MESSAGE, 500)

        # TODO: answer not-found when matched == 0 instead of reporting success
        if not matched:
            logger.warning(f"Update matched no live task with ID {parsed_id}")
        return text_response("Task updated successfully", 200)

    @api_bp.route("/task/<task_id>", methods=["DELETE"])
    def delete_task(task_id: str) -> Response:
        """
        Soft-delete a live task by moving it to the DELETED state.

        Deleting an absent or already deleted task still reports success.
        """
        logger.info(f"DELETE /task/{task_id} - Deleting task")
        try:
            parsed_id = parse_int(task_id)
        except ValueError:
            logger.warning(f"Rejected task id {task_id!r}")
            return text_response(MISSED_ID_MESSAGE, 400)

        try:
            matched = repository.soft_delete(parsed_id)
        except Exception:
            logger.exception(f"Failed to delete task {parsed_id}")
            return text_response(INTERNAL_ERROR_MESSAGE, 500)

        if not matched:
            logger.warning(f"Delete matched no live task with ID {parsed_id}")
        return text_response("Task deleted successfully", 200)

    return api_bp
