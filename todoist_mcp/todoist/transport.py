"""
Todoist MCP - Todoist Transport

Interface over the two request styles Todoist exposes: direct REST calls
and the command batch (sync) endpoint. Includes an in-memory
implementation for CI-safe testing and local experiments.
"""

import copy
import itertools
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from todoist_mcp.errors import ToolError


class TodoistTransport(ABC):
    """
    Abstract interface for Todoist access.

    Enables swapping implementations (HTTP for runtime, in-memory for tests).
    Task and section payloads are raw Todoist REST v2 JSON objects.
    """

    @abstractmethod
    async def get_task(self, task_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def list_tasks(
        self,
        project_id: Optional[str] = None,
        section_id: Optional[str] = None,
        parent_id: Optional[str] = None,
        filter: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List active tasks; when `filter` is given Todoist ignores project scoping."""
        pass

    @abstractmethod
    async def list_sections(self, project_id: str) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    async def create_task(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def apply_fields(self, task_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Patch the given fields of a task directly."""
        pass

    @abstractmethod
    async def delete_task(self, task_id: str) -> None:
        pass

    @abstractmethod
    async def submit_commands(self, commands: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Submit a batch of `{type, uuid, args}` commands to the sync endpoint."""
        pass


WRITE_CALLS = ("create_task", "apply_fields", "delete_task", "submit_commands")


class InMemoryTodoistTransport(TodoistTransport):
    """
    In-memory implementation for CI-safe testing.

    Mirrors the upstream quirk that direct `section_id` patches are
    silently ignored unless `apply_section_patches` is set; section moves
    only take effect through `item_move` commands.
    """

    def __init__(
        self,
        sections: Optional[List[Dict[str, Any]]] = None,
        apply_section_patches: bool = False,
    ):
        self.sections: List[Dict[str, Any]] = list(sections or [])
        self.tasks: Dict[str, Dict[str, Any]] = {}
        self.commands: List[Dict[str, Any]] = []
        self.calls: List[tuple] = []
        self.apply_section_patches = apply_section_patches
        self._ids = itertools.count(1001)

    # Seeding helpers (synchronous for test convenience)

    def add_section(self, name: str, project_id: str, section_id: Optional[str] = None) -> Dict[str, Any]:
        section = {
            "id": section_id or f"sec-{next(self._ids)}",
            "name": name,
            "project_id": project_id,
        }
        self.sections.append(section)
        return section

    def add_task(
        self,
        content: str,
        project_id: str,
        section_id: Optional[str] = None,
        parent_id: Optional[str] = None,
        description: str = "",
        due_date: Optional[str] = None,
        task_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        task_id = task_id or str(next(self._ids))
        task = {
            "id": task_id,
            "content": content,
            "description": description,
            "project_id": project_id,
            "section_id": section_id,
            "parent_id": parent_id,
            "due": {"date": due_date, "string": due_date, "is_recurring": False} if due_date else None,
            "url": f"https://app.todoist.com/app/task/{task_id}",
        }
        self.tasks[task_id] = task
        return task

    @property
    def writes(self) -> List[tuple]:
        return [call for call in self.calls if call[0] in WRITE_CALLS]

    def count(self, method: str) -> int:
        return sum(1 for call in self.calls if call[0] == method)

    # TodoistTransport

    async def get_task(self, task_id: str) -> Dict[str, Any]:
        self.calls.append(("get_task", task_id))
        return copy.deepcopy(self._require(task_id))

    async def list_tasks(
        self,
        project_id: Optional[str] = None,
        section_id: Optional[str] = None,
        parent_id: Optional[str] = None,
        filter: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        self.calls.append(("list_tasks", project_id, section_id, parent_id, filter))

        if filter is not None:
            needle = filter.split(":", 1)[1] if filter.startswith("search:") else filter
            needle = needle.strip().casefold()
            return [copy.deepcopy(t) for t in self.tasks.values() if needle in t["content"].casefold()]

        results = []
        for task in self.tasks.values():
            if project_id is not None and task["project_id"] != project_id:
                continue
            if section_id is not None and task["section_id"] != section_id:
                continue
            if parent_id is not None and task["parent_id"] != parent_id:
                continue
            results.append(copy.deepcopy(task))
        return results

    async def list_sections(self, project_id: str) -> List[Dict[str, Any]]:
        self.calls.append(("list_sections", project_id))
        return [copy.deepcopy(s) for s in self.sections if s["project_id"] == project_id]

    async def create_task(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("create_task", copy.deepcopy(fields)))
        task = self.add_task(
            content=fields["content"],
            project_id=fields["project_id"],
            section_id=fields.get("section_id"),
            parent_id=fields.get("parent_id"),
            description=fields.get("description", ""),
        )
        if "due_string" in fields:
            task["due"] = _due_from_string(fields["due_string"])
        return copy.deepcopy(task)

    async def apply_fields(self, task_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("apply_fields", task_id, copy.deepcopy(fields)))
        task = self._require(task_id)
        if "content" in fields:
            task["content"] = fields["content"]
        if "description" in fields:
            task["description"] = fields["description"]
        if "due_string" in fields:
            task["due"] = _due_from_string(fields["due_string"])
        if "section_id" in fields and self.apply_section_patches:
            self._move(task_id, fields["section_id"])
        return copy.deepcopy(task)

    async def delete_task(self, task_id: str) -> None:
        self.calls.append(("delete_task", task_id))
        self._require(task_id)
        for child_id in self._descendants(task_id):
            self.tasks.pop(child_id, None)
        del self.tasks[task_id]
        return None

    async def submit_commands(self, commands: List[Dict[str, Any]]) -> Dict[str, Any]:
        self.calls.append(("submit_commands", copy.deepcopy(commands)))
        sync_status: Dict[str, Any] = {}
        for command in commands:
            self.commands.append(copy.deepcopy(command))
            args = command.get("args", {})
            if command.get("type") == "item_move" and args.get("id") in self.tasks:
                self._move(args["id"], args["section_id"])
                sync_status[command["uuid"]] = "ok"
            else:
                sync_status[command["uuid"]] = {"error_code": 22, "error": "Item not found"}
        return {"sync_status": sync_status}

    # Internals

    def _require(self, task_id: str) -> Dict[str, Any]:
        task = self.tasks.get(task_id)
        if task is None:
            raise ToolError.upstream(404, "Task not found")
        return task

    def _descendants(self, task_id: str) -> List[str]:
        found = []
        for task in self.tasks.values():
            if task["parent_id"] == task_id:
                found.append(task["id"])
                found.extend(self._descendants(task["id"]))
        return found

    def _move(self, task_id: str, section_id: str) -> None:
        for moved_id in [task_id, *self._descendants(task_id)]:
            self.tasks[moved_id]["section_id"] = section_id


def _due_from_string(due_string: str) -> Optional[Dict[str, Any]]:
    # Only ISO dates are understood here; Todoist parses natural language.
    if not due_string or due_string.strip().lower() == "no date":
        return None
    text = due_string.strip()
    date = text if len(text) >= 10 and text[4] == "-" and text[7] == "-" else None
    return {"date": date, "string": text, "is_recurring": False}
