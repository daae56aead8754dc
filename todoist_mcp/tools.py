"""
Todoist MCP - Tool Dispatch

Single entry point for every tool call. Validates arguments, runs the
matching TaskService operation and wraps the outcome in a uniform
envelope:

- success: {"ok": true, "action": ..., "data": {...}}
- failure: {"ok": false, "action": ..., "error": ..., "error_type": ..., "payload"?: {...}}

Failures never propagate to the caller.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from todoist_mcp.config import settings
from todoist_mcp.errors import ErrorKind, ToolError, error_payload
from todoist_mcp.tasks.schemas import (
    CreateTaskInput,
    DeleteTaskInput,
    EditTaskInput,
    GetTaskDetailsInput,
    ListTasksBySectionInput,
    MoveTaskInput,
    SearchTasksInput,
)
from todoist_mcp.tasks.service import TaskService
from todoist_mcp.todoist.adapter import HttpTodoistTransport

logger = logging.getLogger(__name__)


TOOL_INPUTS = {
    "create_task": CreateTaskInput,
    "edit_task": EditTaskInput,
    "move_task": MoveTaskInput,
    "list_tasks_by_section": ListTasksBySectionInput,
    "get_task_details": GetTaskDetailsInput,
    "search_tasks": SearchTasksInput,
    "delete_task": DeleteTaskInput,
}

TOOL_ACTIONS = tuple(TOOL_INPUTS)


# Process-wide service instance; holds the section cache (can be overridden in tests)
_task_service: Optional[TaskService] = None


def get_task_service() -> TaskService:
    """Get the task service, building it from settings on first use."""
    global _task_service
    if _task_service is None:
        token, project_id = settings.todoist_credentials()
        _task_service = TaskService(
            HttpTodoistTransport(token),
            project_id,
            move_verify_attempts=settings.MOVE_VERIFY_ATTEMPTS,
            move_verify_delay=settings.MOVE_VERIFY_DELAY,
        )
    return _task_service


def set_task_service(service: Optional[TaskService]) -> None:
    """Set task service (for testing); None forces a rebuild on next use."""
    global _task_service
    _task_service = service


async def _run(action: str, args: BaseModel, service: TaskService) -> BaseModel:
    if action == "create_task":
        return await service.create_task(args)
    if action == "edit_task":
        return await service.edit_task(args)
    if action == "move_task":
        return await service.move_task(args)
    if action == "list_tasks_by_section":
        return await service.list_tasks_by_section()
    if action == "get_task_details":
        return await service.get_task_details(args.task_id)
    if action == "search_tasks":
        return await service.search_tasks(args)
    if action == "delete_task":
        return await service.delete_task(args.task_id)
    raise ToolError.validation(f"Unknown action: {action}")


def _failure(action: str, message: str, kind: ErrorKind, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    logger.error("tool_error action=%s type=%s msg=%s", action, kind.value, message)
    response: Dict[str, Any] = {
        "ok": False,
        "action": action,
        "error": message,
        "error_type": kind.value,
    }
    if payload is not None:
        response["payload"] = payload
    return response


async def todoist_tool(
    action: str,
    args: Optional[Dict[str, Any]] = None,
    service: Optional[TaskService] = None,
) -> Dict[str, Any]:
    """
    Run one tool call and return its envelope.

    Args:
        action: One of TOOL_ACTIONS
        args: Raw tool arguments (validated here)
        service: Optional service; defaults to the process-wide instance

    Returns:
        Success or failure envelope (JSON-serializable)
    """
    try:
        input_model = TOOL_INPUTS.get(action)
        if input_model is None:
            raise ToolError.validation(f"Unknown action: {action}")
        parsed = input_model.model_validate(args or {})

        result = await _run(action, parsed, service or get_task_service())
        return {
            "ok": True,
            "action": action,
            "data": result.model_dump(mode="json", exclude_none=True),
        }
    except ToolError as e:
        return _failure(action, e.message, e.kind, error_payload(e))
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        return _failure(action, f"Invalid arguments for {action}", ErrorKind.VALIDATION, {"errors": errors})
    except Exception as e:
        logger.exception("Unexpected error running %s", action)
        return _failure(action, str(e) or type(e).__name__, ErrorKind.UNKNOWN)
