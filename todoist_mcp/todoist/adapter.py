import logging
import json
from typing import Any, Dict, List, Optional

import httpx

from todoist_mcp.config import settings
from todoist_mcp.errors import ToolError
from todoist_mcp.todoist.transport import TodoistTransport

logger = logging.getLogger(__name__)


class HttpTodoistTransport(TodoistTransport):
    """Todoist REST v2 + sync command endpoint over httpx."""

    def __init__(
        self,
        token: str,
        api_url: Optional[str] = None,
        sync_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.api_url = (api_url or settings.TODOIST_API_URL).rstrip("/")
        self.sync_url = sync_url or settings.TODOIST_SYNC_URL
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self._transport = transport

    async def fetch(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Any] = None,
    ) -> Any:
        """
        Send one request and decode the JSON response.

        Returns None for an empty (204) response. Raises an UpstreamApiError
        ToolError carrying status and body for any non-success status.
        """
        method = method.upper()
        body_len = len(json.dumps(payload)) if payload is not None else 0
        logger.debug("HTTP %s %s bodyBytes=%d", method, url, body_len)

        headers = {"Authorization": f"Bearer {self.token}"}
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.request(method, url, params=params, json=payload, headers=headers)

        status = response.status_code
        if not response.is_success:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text or "<unreadable>"
            logger.error("HTTP %s %s -> %d %s", method, url, status, json.dumps(body)[:500])
            raise ToolError.upstream(status, body)

        if status == 204 or not response.content:
            logger.debug("HTTP %s %s -> %d No Content", method, url, status)
            return None

        logger.debug("HTTP %s %s -> %d ok", method, url, status)
        return response.json()

    async def get_task(self, task_id: str) -> Dict[str, Any]:
        return await self.fetch("GET", f"{self.api_url}/tasks/{task_id}")

    async def list_tasks(
        self,
        project_id: Optional[str] = None,
        section_id: Optional[str] = None,
        parent_id: Optional[str] = None,
        filter: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = {
            key: value
            for key, value in (
                ("project_id", project_id),
                ("section_id", section_id),
                ("parent_id", parent_id),
                ("filter", filter),
            )
            if value is not None
        }
        return await self.fetch("GET", f"{self.api_url}/tasks", params=params) or []

    async def list_sections(self, project_id: str) -> List[Dict[str, Any]]:
        return await self.fetch("GET", f"{self.api_url}/sections", params={"project_id": project_id}) or []

    async def create_task(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self.fetch("POST", f"{self.api_url}/tasks", payload=fields)

    async def apply_fields(self, task_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self.fetch("POST", f"{self.api_url}/tasks/{task_id}", payload=fields)

    async def delete_task(self, task_id: str) -> None:
        await self.fetch("DELETE", f"{self.api_url}/tasks/{task_id}")

    async def submit_commands(self, commands: List[Dict[str, Any]]) -> Dict[str, Any]:
        data = await self.fetch("POST", self.sync_url, payload={"commands": commands}) or {}

        # The sync endpoint answers 200 even when individual commands fail.
        sync_status = data.get("sync_status", {})
        for command in commands:
            outcome = sync_status.get(command["uuid"], "ok")
            if outcome != "ok":
                logger.error("sync command %s uuid=%s failed: %s", command["type"], command["uuid"], outcome)
                raise ToolError.upstream(200, outcome)
        return data
