"""
Todoist MCP - MCP Server Tests
"""

import json

import pytest

from todoist_mcp import mcp_server
from todoist_mcp.tools import TOOL_ACTIONS, set_task_service

from tests.conftest import PROJECT_ID


class TestRegistration:
    """Every tool action is registered on the MCP server."""

    async def test_tool_names(self):
        tools = await mcp_server.mcp.list_tools()
        assert {tool.name for tool in tools} == set(TOOL_ACTIONS)

    async def test_move_task_requires_section(self):
        tools = {tool.name: tool for tool in await mcp_server.mcp.list_tools()}
        assert set(tools["move_task"].inputSchema["required"]) == {"task_id", "section"}


class TestToolCalls:
    """Tool functions return the dispatch envelope as JSON text."""

    @pytest.fixture(autouse=True)
    def install_service(self, service):
        set_task_service(service)
        yield
        set_task_service(None)

    async def test_search_returns_json(self, transport):
        transport.add_task("Fix login bug", PROJECT_ID, section_id="sec-blocked")

        text = await mcp_server.search_tasks("fix login bug", exact_title=True)
        result = json.loads(text)

        assert result["ok"] is True
        assert result["data"]["tasks"][0]["section"] == "Blocked"

    async def test_omitted_optionals_not_sent(self, transport):
        task = transport.add_task("Old", PROJECT_ID, description="Keep")

        result = json.loads(await mcp_server.edit_task(task["id"], title="New"))

        assert result["data"]["description"] == "Keep"
        assert transport.writes == [("apply_fields", task["id"], {"content": "New"})]


class TestMain:
    def test_missing_configuration_exits(self, monkeypatch):
        monkeypatch.setattr(mcp_server.settings, "TODOIST_API_TOKEN", None)
        monkeypatch.setattr(mcp_server, "configure_logging", lambda: None)

        with pytest.raises(SystemExit) as exc_info:
            mcp_server.main()
        assert exc_info.value.code == 1
