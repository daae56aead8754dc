"""
Todoist MCP - Tools Router

HTTP access to the task tools. Responses are the same envelopes the MCP
server returns.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, HTTPException, status

from todoist_mcp.tools import TOOL_ACTIONS, todoist_tool


router = APIRouter(prefix="/tools", tags=["Tools"])


@router.get("", summary="List available tools")
async def list_tools() -> dict:
    return {"tools": list(TOOL_ACTIONS)}


@router.post("/{action}", summary="Run a tool")
async def run_tool(
    action: str,
    args: Optional[Dict[str, Any]] = Body(default=None),
) -> dict:
    """
    Run one tool with the JSON body as its arguments.

    Domain failures are reported inside the envelope (`ok: false`);
    only an unknown tool name is an HTTP error.
    """
    if action not in TOOL_ACTIONS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown tool: {action}",
        )
    return await todoist_tool(action, args)
