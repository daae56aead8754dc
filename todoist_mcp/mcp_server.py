"""
Todoist MCP - MCP Server

Registers the task tools on a stdio MCP server. Each tool returns the
dispatch envelope as indented JSON text.

Usage:
    todoist-mcp
    python -m todoist_mcp.mcp_server
"""

import json
import logging
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from todoist_mcp.config import settings
from todoist_mcp.errors import ToolError
from todoist_mcp.logging_setup import configure_logging
from todoist_mcp.tasks.enums import SectionName
from todoist_mcp.tools import todoist_tool

logger = logging.getLogger(__name__)


mcp = FastMCP("todoist-mcp")


async def _call(action: str, args: Dict[str, Any]) -> str:
    logger.info("mcp_call %s", action)
    result = await todoist_tool(action, {k: v for k, v in args.items() if v is not None})
    return json.dumps(result, indent=2, default=str)


@mcp.tool(
    name="create_task",
    description="Create a task in one of the canonical sections, or a subtask under a parent.",
)
async def create_task(
    title: str,
    description: str,
    section: Optional[SectionName] = None,
    due_natural: Optional[str] = None,
    parent_task_id: Optional[str] = None,
) -> str:
    return await _call(
        "create_task",
        {
            "title": title,
            "description": description,
            "section": section,
            "due_natural": due_natural,
            "parent_task_id": parent_task_id,
        },
    )


@mcp.tool(
    name="edit_task",
    description="Edit title/description/due of a task; optionally move a PARENT task between sections.",
)
async def edit_task(
    task_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    due_natural: Optional[str] = None,
    section: Optional[SectionName] = None,
) -> str:
    return await _call(
        "edit_task",
        {
            "task_id": task_id,
            "title": title,
            "description": description,
            "due_natural": due_natural,
            "section": section,
        },
    )


@mcp.tool(
    name="move_task",
    description="Move a PARENT task between canonical sections. Subtasks inherit parent section.",
)
async def move_task(task_id: str, section: SectionName) -> str:
    return await _call("move_task", {"task_id": task_id, "section": section})


@mcp.tool(
    name="list_tasks_by_section",
    description="List active tasks in Current Sprint Backlog, In Progress and Ready for Testing.",
)
async def list_tasks_by_section() -> str:
    return await _call("list_tasks_by_section", {})


@mcp.tool(
    name="get_task_details",
    description="Title, description, and subtasks (titles only).",
)
async def get_task_details(task_id: str) -> str:
    return await _call("get_task_details", {"task_id": task_id})


@mcp.tool(
    name="search_tasks",
    description=(
        "Search active tasks in the configured project by text. "
        "Set exact_title to match whole titles, ignoring case and surrounding spaces."
    ),
)
async def search_tasks(query: str, exact_title: bool = False) -> str:
    return await _call("search_tasks", {"query": query, "exact_title": exact_title})


@mcp.tool(
    name="delete_task",
    description="Delete a task or subtask by its task ID. This will permanently remove the task.",
)
async def delete_task(task_id: str) -> str:
    return await _call("delete_task", {"task_id": task_id})


def main() -> None:
    """Run the MCP server over stdio."""
    configure_logging()
    try:
        settings.todoist_credentials()
    except ToolError as e:
        logger.error("Configuration error: %s", e.message)
        raise SystemExit(1)
    mcp.run()


if __name__ == "__main__":
    main()
