"""
Todoist MCP - HTTP Transport Tests

CI-safe tests for the httpx transport using httpx.MockTransport.
"""

import json

import httpx
import pytest

from todoist_mcp.errors import ErrorKind, ToolError
from todoist_mcp.todoist.adapter import HttpTodoistTransport


API = "https://todoist.test/rest/v2"
SYNC = "https://todoist.test/sync/v9/sync"


def make_transport(handler):
    return HttpTodoistTransport(
        "test-token",
        api_url=API,
        sync_url=SYNC,
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


class TestFetch:
    """Tests for request/response handling."""

    async def test_bearer_token_and_json(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["url"] = str(request.url)
            return httpx.Response(200, json={"id": "1", "content": "T"})

        transport = make_transport(handler)
        task = await transport.get_task("1")

        assert task == {"id": "1", "content": "T"}
        assert seen["auth"] == "Bearer test-token"
        assert seen["url"] == f"{API}/tasks/1"

    async def test_no_content_returns_none(self):
        def handler(request):
            assert request.method == "DELETE"
            return httpx.Response(204)

        transport = make_transport(handler)
        assert await transport.fetch("DELETE", f"{API}/tasks/1") is None

    async def test_json_error_body(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Invalid argument value"})

        transport = make_transport(handler)
        with pytest.raises(ToolError) as exc_info:
            await transport.get_task("1")

        error = exc_info.value
        assert error.kind is ErrorKind.UPSTREAM_API
        assert error.status == 400
        assert error.body == {"error": "Invalid argument value"}
        assert error.message == "Todoist API error 400: Invalid argument value"

    async def test_text_error_body(self):
        def handler(request):
            return httpx.Response(403, text="Forbidden")

        transport = make_transport(handler)
        with pytest.raises(ToolError) as exc_info:
            await transport.list_sections("p")

        assert exc_info.value.status == 403
        assert exc_info.value.body == "Forbidden"
        assert exc_info.value.message == "Insufficient permissions. Check API token permissions."

    async def test_project_limit_message(self):
        def handler(request):
            return httpx.Response(
                403, text="Maximum number of items per user project limit reached"
            )

        transport = make_transport(handler)
        with pytest.raises(ToolError) as exc_info:
            await transport.create_task({"content": "x"})
        assert "maximum task limit" in exc_info.value.message


class TestEndpoints:
    """Tests for the REST paths, query parameters and bodies."""

    async def test_list_tasks_query(self):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[])

        transport = make_transport(handler)
        result = await transport.list_tasks(project_id="p", parent_id="9")

        assert result == []
        assert seen["params"] == {"project_id": "p", "parent_id": "9"}

    async def test_search_filter_query(self):
        seen = {}

        def handler(request):
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=[{"id": "1"}])

        transport = make_transport(handler)
        await transport.list_tasks(filter="search: login bug")

        assert seen["params"] == {"filter": "search: login bug"}

    async def test_apply_fields_posts_patch(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "5", "content": "New"})

        transport = make_transport(handler)
        await transport.apply_fields("5", {"content": "New"})

        assert seen == {"method": "POST", "url": f"{API}/tasks/5", "body": {"content": "New"}}


class TestSubmitCommands:
    """Tests for the sync command endpoint."""

    async def test_commands_posted_to_sync_url(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"sync_status": {"u-1": "ok"}})

        transport = make_transport(handler)
        command = {"type": "item_move", "uuid": "u-1", "args": {"id": "5", "section_id": "s"}}
        result = await transport.submit_commands([command])

        assert seen["url"] == SYNC
        assert seen["body"] == {"commands": [command]}
        assert result["sync_status"] == {"u-1": "ok"}

    async def test_failed_command_status_raises(self):
        def handler(request):
            return httpx.Response(
                200,
                json={"sync_status": {"u-1": {"error_code": 22, "error": "Item not found"}}},
            )

        transport = make_transport(handler)
        command = {"type": "item_move", "uuid": "u-1", "args": {"id": "5", "section_id": "s"}}

        with pytest.raises(ToolError) as exc_info:
            await transport.submit_commands([command])

        assert exc_info.value.kind is ErrorKind.UPSTREAM_API
        assert exc_info.value.body == {"error_code": 22, "error": "Item not found"}
        assert exc_info.value.message == "Todoist API error 200: Item not found"

    async def test_http_failure_raises(self):
        def handler(request):
            return httpx.Response(503, text="")

        transport = make_transport(handler)
        with pytest.raises(ToolError) as exc_info:
            await transport.submit_commands([{"type": "item_move", "uuid": "u", "args": {}}])
        assert exc_info.value.status == 503
